"""
Core cryptographic utilities.

Module 02 provides the digest primitives used by the Merkle tree.
"""
from .hashing import (
    DIGEST_SIZE,
    DIGEST_HEX_LENGTH,
    sha256,
    hash_digest,
    item_bytes,
    hash_item,
    to_hex,
    from_hex,
    hash_concat,
    hash_pair,
)

__all__ = [
    "DIGEST_SIZE",
    "DIGEST_HEX_LENGTH",
    "sha256",
    "hash_digest",
    "item_bytes",
    "hash_item",
    "to_hex",
    "from_hex",
    "hash_concat",
    "hash_pair",
]
