"""
Module 01 - Schemas

Value types, digest normalization and the error taxonomy.
"""

from .errors import (
    EmptyInputException,
    EmptyProofException,
    ErrorCodes,
    InvalidDigestException,
    MerkleKitError,
    MerkleKitException,
    MerkleVerificationException,
    SchemaValidationException,
    TargetNotFoundException,
)
from .merkle import (
    DIGEST_PATTERN,
    EMPTY_ROOT,
    DigestHex,
    MerkleProof,
    MerkleTree,
    ProofDocument,
    ProofStep,
    Side,
    normalize_digest,
    normalize_hex,
)
from .versioning import (
    SCHEMA_VERSION,
    SUPPORTED_SCHEMA_VERSIONS,
    UnsupportedSchemaVersionError,
    assert_supported_schema_version,
)

__all__ = [
    # errors
    "EmptyInputException",
    "EmptyProofException",
    "ErrorCodes",
    "InvalidDigestException",
    "MerkleKitError",
    "MerkleKitException",
    "MerkleVerificationException",
    "SchemaValidationException",
    "TargetNotFoundException",
    # merkle
    "DIGEST_PATTERN",
    "EMPTY_ROOT",
    "DigestHex",
    "MerkleProof",
    "MerkleTree",
    "ProofDocument",
    "ProofStep",
    "Side",
    "normalize_digest",
    "normalize_hex",
    # versioning
    "SCHEMA_VERSION",
    "SUPPORTED_SCHEMA_VERSIONS",
    "UnsupportedSchemaVersionError",
    "assert_supported_schema_version",
]
