"""
Module 01 - Schemas
File: errors.py

Purpose: Error taxonomy for tree, root and proof operations.
Defines both Pydantic models for structured error communication
and Python exceptions for control flow.

The core functions report the recoverable conditions (empty input,
unknown target, empty proof) through sentinel returns. The exceptions
below are raised by the strict convenience layer and the CLI.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# Error Codes (Machine-Readable Constants)
# =============================================================================

class ErrorCodes:
    """Stable machine-readable error codes."""

    # Schema & Validation Errors
    SCHEMA_VALIDATION_ERROR = "SCHEMA_VALIDATION_ERROR"
    INVALID_DIGEST = "INVALID_DIGEST"
    UNSUPPORTED_VERSION = "UNSUPPORTED_VERSION"

    # Input Errors
    EMPTY_INPUT = "EMPTY_INPUT"
    TARGET_NOT_FOUND = "TARGET_NOT_FOUND"
    EMPTY_PROOF = "EMPTY_PROOF"

    # Merkle & Commitment Errors
    MERKLE_PROOF_INVALID = "MERKLE_PROOF_INVALID"
    ROOT_MISMATCH = "ROOT_MISMATCH"


# =============================================================================
# Pydantic Error Models (Structured Communication)
# =============================================================================

class MerkleKitError(BaseModel):
    """
    Base error model for structured error communication.

    Used for reporting errors without exceptions, e.g. in CLI JSON output.
    """

    model_config = ConfigDict(
        extra="forbid",
        frozen=False,
        validate_assignment=True,
    )

    code: str = Field(
        ...,
        description="Stable machine-readable error code",
        examples=[ErrorCodes.EMPTY_INPUT],
    )
    message: str = Field(
        ...,
        description="Human-readable error message",
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional structured details about the error",
    )
    retryable: bool = Field(
        default=False,
        description="Whether the operation can be retried",
    )

    def to_exception(self) -> "MerkleKitException":
        """Convert this error model to a raised exception."""
        return MerkleKitException(
            code=self.code,
            message=self.message,
            details=self.details,
            retryable=self.retryable,
        )


# =============================================================================
# Python Exceptions (Control Flow)
# =============================================================================

class MerkleKitException(Exception):
    """
    Base exception for all merklekit errors.

    Carries structured error information and can be converted
    to/from MerkleKitError models.
    """

    def __init__(
        self,
        message: str,
        code: str = "MERKLEKIT_ERROR",
        details: dict[str, Any] | None = None,
        retryable: bool = False,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details or {}
        self.retryable = retryable

    def to_error_model(self) -> MerkleKitError:
        """Convert this exception to a MerkleKitError model."""
        return MerkleKitError(
            code=self.code,
            message=self.message,
            details=self.details,
            retryable=self.retryable,
        )

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code!r}, message={self.message!r})"


class SchemaValidationException(MerkleKitException):
    """Exception raised when a document fails schema validation."""

    def __init__(
        self,
        message: str,
        field_path: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if field_path:
            full_details["field_path"] = field_path
        super().__init__(
            message=message,
            code=ErrorCodes.SCHEMA_VALIDATION_ERROR,
            details=full_details,
            retryable=False,
        )


class EmptyInputException(MerkleKitException):
    """Exception raised when a root, tree or proof is requested for no items."""

    def __init__(
        self,
        message: str = "No items supplied",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            code=ErrorCodes.EMPTY_INPUT,
            details=details,
            retryable=False,
        )


class TargetNotFoundException(MerkleKitException):
    """Exception raised when the requested leaf is absent from the leaf level."""

    def __init__(
        self,
        message: str,
        target: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if target:
            full_details["target"] = target
        super().__init__(
            message=message,
            code=ErrorCodes.TARGET_NOT_FOUND,
            details=full_details,
            retryable=False,
        )


class EmptyProofException(MerkleKitException):
    """Exception raised when verification is attempted on a proof with no steps."""

    def __init__(
        self,
        message: str = "Proof has no steps",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            code=ErrorCodes.EMPTY_PROOF,
            details=details,
            retryable=False,
        )


class MerkleVerificationException(MerkleKitException):
    """Exception raised when a proof does not reproduce the expected root."""

    def __init__(
        self,
        message: str,
        expected_root: str | None = None,
        actual_root: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if expected_root is not None:
            full_details["expected_root"] = expected_root
        if actual_root is not None:
            full_details["actual_root"] = actual_root
        super().__init__(
            message=message,
            code=ErrorCodes.ROOT_MISMATCH,
            details=full_details,
            retryable=False,
        )


class InvalidDigestException(MerkleKitException, ValueError):
    """Exception raised when a value given as a digest is not 64 hex characters."""

    def __init__(
        self,
        message: str,
        digest: Any = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if digest is not None:
            full_details["digest"] = str(digest)
        super().__init__(
            message=message,
            code=ErrorCodes.INVALID_DIGEST,
            details=full_details,
            retryable=False,
        )
