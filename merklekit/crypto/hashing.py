"""
Module 02 - Hashing Utilities
Digest primitives for leaves and parent nodes.

Module ID: M02

This module provides:
- SHA-256 hashing for raw bytes
- Hex digests (the Digest form used everywhere else)
- Parent hashing of two hex digests

Security/Determinism Notes:
- Always hash raw bytes exactly as given
- String items are encoded as UTF-8, nothing else is normalized
- Parent nodes hash the raw 32-byte digests, never their hex text
"""
from __future__ import annotations

import hashlib
from typing import Union


# Length of a SHA-256 digest
DIGEST_SIZE: int = 32

# Length of a hex-encoded digest
DIGEST_HEX_LENGTH: int = DIGEST_SIZE * 2

Item = Union[bytes, str]


def sha256(data: bytes) -> bytes:
    """
    Compute SHA-256 hash of raw bytes.

    Args:
        data: Raw bytes to hash

    Returns:
        32-byte SHA-256 digest

    Example:
        >>> sha256(b"hello").hex()
        '2cf24dba5fb0a30e26e83b2ac5b9e29e1b161e5c1fa7425e73043362938b9824'
    """
    return hashlib.sha256(data).digest()


def hash_digest(data: bytes) -> str:
    """
    Compute the hex Digest of raw bytes.

    Defined for every byte sequence, including b"".

    Args:
        data: Raw bytes to hash

    Returns:
        64-character lowercase hex string
    """
    return sha256(data).hex()


def item_bytes(item: Item) -> bytes:
    """Return the bytes committed for ``item`` (str is UTF-8 encoded)."""
    if isinstance(item, str):
        return item.encode("utf-8")
    if isinstance(item, (bytes, bytearray, memoryview)):
        return bytes(item)
    raise TypeError(f"Items must be bytes or str, got {type(item).__name__}")


def hash_item(item: Item) -> str:
    """
    Hash a single input item into its leaf Digest.

    Args:
        item: Raw bytes, or a str which is UTF-8 encoded first

    Returns:
        64-character lowercase hex leaf digest

    Raises:
        TypeError: If item is neither bytes nor str
    """
    return hash_digest(item_bytes(item))


def to_hex(data: bytes) -> str:
    """Convert bytes to a lowercase hex string (no prefix)."""
    return data.hex()


def from_hex(hex_string: str) -> bytes:
    """
    Convert a hexadecimal string to bytes.

    An optional 0x prefix is accepted.

    Args:
        hex_string: Hex string

    Returns:
        Decoded bytes

    Raises:
        ValueError: If the string has odd length or contains
                   invalid hex characters
    """
    hex_content = hex_string[2:] if hex_string.startswith(("0x", "0X")) else hex_string

    if len(hex_content) % 2 != 0:
        raise ValueError(
            f"Hex string must have even length, got length {len(hex_content)}"
        )

    try:
        return bytes.fromhex(hex_content)
    except ValueError as e:
        raise ValueError(f"Invalid hex characters in string: {e}") from e


def hash_concat(left: bytes, right: bytes) -> bytes:
    """
    Hash the concatenation of two byte sequences: sha256(left + right)

    Args:
        left: Left operand (typically 32 bytes)
        right: Right operand (typically 32 bytes)

    Returns:
        32-byte SHA-256 digest of concatenation
    """
    return sha256(left + right)


def hash_pair(left: str, right: str) -> str:
    """
    Compute the parent Digest of two hex digests.

    parent = sha256(bytes(left) + bytes(right))

    Args:
        left: Hex digest of the lower-index node
        right: Hex digest of the higher-index node

    Returns:
        64-character lowercase hex parent digest
    """
    return hash_concat(from_hex(left), from_hex(right)).hex()


__all__ = [
    "DIGEST_SIZE",
    "DIGEST_HEX_LENGTH",
    "Item",
    "sha256",
    "hash_digest",
    "item_bytes",
    "hash_item",
    "to_hex",
    "from_hex",
    "hash_concat",
    "hash_pair",
]
