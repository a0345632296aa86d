"""
Module 01 - Schemas
File: merkle.py

Purpose: Value types for Merkle trees and inclusion proofs.

All models are frozen: a tree is read-only once built and a proof
is a standalone value that can be verified without the tree.
"""

from __future__ import annotations

import re
from enum import Enum
from typing import Annotated, Any, Iterable

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
    model_validator,
)

from .errors import InvalidDigestException
from .versioning import SCHEMA_VERSION, assert_supported_schema_version


# Empty-root sentinel. Never equal to a valid digest (64 hex chars).
EMPTY_ROOT: str = ""

DIGEST_PATTERN = r"^[0-9a-f]{64}$"
_DIGEST_RE = re.compile(DIGEST_PATTERN)

DigestHex = Annotated[
    str,
    Field(pattern=DIGEST_PATTERN, description="Lowercase hex SHA-256 digest"),
]


def normalize_hex(value: Any) -> Any:
    """Strip whitespace and a 0x prefix and lowercase; non-str values pass through."""
    if isinstance(value, str):
        value = value.strip().lower()
        if value.startswith("0x"):
            value = value[2:]
    return value


def normalize_digest(value: Any) -> str:
    """
    Normalize ``value`` to the lowercase hex Digest form.

    Raises:
        InvalidDigestException: If the result is not 64 hex characters
    """
    normalized = normalize_hex(value)
    if not isinstance(normalized, str) or _DIGEST_RE.fullmatch(normalized) is None:
        raise InvalidDigestException(
            f"Not a hex SHA-256 digest: {value!r}",
            digest=value,
        )
    return normalized


class Side(str, Enum):
    """Operand position of a node relative to its pairing partner."""

    LEFT = "left"
    RIGHT = "right"

    @classmethod
    def for_index(cls, index: int) -> "Side":
        """Even positions are left children, odd positions right children."""
        return cls.LEFT if index % 2 == 0 else cls.RIGHT

    @property
    def opposite(self) -> "Side":
        return Side.RIGHT if self is Side.LEFT else Side.LEFT


class ProofStep(BaseModel):
    """One (digest, side) entry of an inclusion proof."""

    model_config = ConfigDict(extra="forbid", frozen=True, populate_by_name=True)

    digest: DigestHex = Field(
        ...,
        validation_alias=AliasChoices("digest", "hash"),
    )
    side: Side = Field(
        ...,
        validation_alias=AliasChoices("side", "direction"),
    )

    @field_validator("digest", mode="before")
    @classmethod
    def _normalize_digest(cls, v: Any) -> Any:
        return normalize_hex(v)


class MerkleProof(BaseModel):
    """
    Inclusion proof for a single leaf.

    The first step is the target leaf itself (its own digest and side);
    it identifies the leaf and seeds verification. Each following step is
    the sibling met on the way up, ordered from the leaf level to the level
    just below the root.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    steps: tuple[ProofStep, ...] = Field(default_factory=tuple)

    @property
    def is_empty(self) -> bool:
        return len(self.steps) == 0

    @property
    def leaf(self) -> str:
        """Digest of the proven leaf, or EMPTY_ROOT for an empty proof."""
        return self.steps[0].digest if self.steps else EMPTY_ROOT

    @property
    def leaf_side(self) -> Side | None:
        return self.steps[0].side if self.steps else None

    @property
    def siblings(self) -> tuple[ProofStep, ...]:
        return self.steps[1:]

    def __len__(self) -> int:
        return len(self.steps)

    def to_list(self) -> list[dict[str, str]]:
        """Return the proof as a list of {"digest", "side"} dicts."""
        return [step.model_dump(mode="json") for step in self.steps]

    @classmethod
    def from_list(cls, steps: Iterable[Any]) -> "MerkleProof":
        """
        Build a proof from step dicts (or ProofStep instances).

        Accepts {"digest", "side"} as well as {"hash", "direction"} keys.
        """
        return cls(steps=tuple(
            s if isinstance(s, ProofStep) else ProofStep.model_validate(s)
            for s in steps
        ))


class MerkleTree(BaseModel):
    """
    A complete Merkle tree, level by level.

    levels[0] holds the leaves in input order, levels[-1] holds the root.
    Levels are stored without padding; an odd level is paired as if its
    last digest were duplicated.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    levels: tuple[tuple[DigestHex, ...], ...] = Field(default_factory=tuple)

    @model_validator(mode="after")
    def _check_shape(self) -> "MerkleTree":
        if not self.levels:
            return self
        for i, level in enumerate(self.levels):
            if not level:
                raise ValueError(f"Level {i} is empty")
        if len(self.levels[-1]) != 1:
            raise ValueError(
                f"Root level must hold exactly one digest, got {len(self.levels[-1])}"
            )
        for i in range(1, len(self.levels)):
            expected = (len(self.levels[i - 1]) + 1) // 2
            if len(self.levels[i]) != expected or len(self.levels[i - 1]) == 1:
                raise ValueError(
                    f"Level {i} has {len(self.levels[i])} digests, "
                    f"expected {expected} from level {i - 1}"
                )
        return self

    @property
    def is_empty(self) -> bool:
        return len(self.levels) == 0

    @property
    def root(self) -> str:
        """Root digest, or EMPTY_ROOT for an empty tree."""
        return self.levels[-1][0] if self.levels else EMPTY_ROOT

    @property
    def leaves(self) -> tuple[str, ...]:
        return self.levels[0] if self.levels else ()

    @property
    def depth(self) -> int:
        """Number of levels, leaves and root included."""
        return len(self.levels)

    @property
    def height(self) -> int:
        """Number of pairing levels between the leaves and the root."""
        return max(len(self.levels) - 1, 0)

    def leaf_index(self, digest: str) -> int | None:
        """Index of the first leaf equal to ``digest``, or None."""
        try:
            return self.leaves.index(normalize_hex(digest))
        except ValueError:
            return None

    def to_list(self) -> list[list[str]]:
        """Return the levels as nested lists of hex strings."""
        return [list(level) for level in self.levels]


class ProofDocument(BaseModel):
    """Serializable envelope pairing a proof with the root it commits to."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    schema_version: str = Field(default=SCHEMA_VERSION)
    root: DigestHex
    proof: MerkleProof

    @field_validator("schema_version")
    @classmethod
    def _check_version(cls, v: str) -> str:
        assert_supported_schema_version(v)
        return v

    @field_validator("root", mode="before")
    @classmethod
    def _normalize_root(cls, v: Any) -> Any:
        return normalize_hex(v)

    @field_validator("proof", mode="before")
    @classmethod
    def _accept_step_list(cls, v: Any) -> Any:
        if isinstance(v, list):
            return {"steps": v}
        return v

    def to_dict(self) -> dict[str, Any]:
        """JSON-ready dict with the proof flattened to its step list."""
        return {
            "schema_version": self.schema_version,
            "root": self.root,
            "proof": self.proof.to_list(),
        }
