"""
Module 02 - Merkle Tree Implementation
Deterministic Merkle tree and root construction.

Module ID: M02

This module provides:
- Parity normalization of a level (duplicate last node if odd)
- Full tree construction (every level kept)
- Root computation (intermediate levels discarded)
- Tree depth for a given leaf count

Canonical Commitment Rules (Hard Contracts):
1. Leaf hashing: leaf = sha256(item), str items UTF-8 encoded
   - Implemented via merklekit.crypto.hashing.hash_item()
2. Parent hashing: parent = sha256(left + right) over raw digest bytes,
   where left is ALWAYS the lower-index node. Proof verification in
   merkle_proofs.py relies on this exact order.
3. Padding rule: Duplicate last node if odd number at any level,
   leaf level included
4. Empty input: root is EMPTY_ROOT (""), tree has no levels
5. Single leaf: root = leaf, tree is a single level

Determinism Notes:
- No randomness or non-deterministic ordering
- This module never sorts leaves - it trusts input order
"""
from __future__ import annotations

import logging
from typing import Sequence

from merklekit.crypto.hashing import Item, hash_item, hash_pair
from merklekit.schemas.merkle import EMPTY_ROOT, MerkleTree, normalize_digest


logger = logging.getLogger(__name__)


def ensure_even(level: list[str]) -> list[str]:
    """
    Pad a working level to even length by duplicating its last digest.

    Mutates ``level`` in place and returns it. An empty level is left
    unchanged.

    Example: [a, b, c] -> [a, b, c, c]
    """
    if len(level) % 2 == 1:
        level.append(level[-1])
    return level


def merkle_parent(left: str, right: str) -> str:
    """
    Compute the parent digest of two child nodes.

    Args:
        left: Digest of the lower-index child
        right: Digest of the higher-index child

    Returns:
        Parent digest (hex)
    """
    return hash_pair(left, right)


def hash_leaves(items: Sequence[Item]) -> list[str]:
    """Hash every item once into its leaf digest, preserving order."""
    return [hash_item(item) for item in items]


def _leaf_level(items: Sequence[Item], prehashed: bool) -> list[str]:
    if prehashed:
        return [normalize_digest(leaf) for leaf in items]
    return hash_leaves(items)


def _next_level(level: Sequence[str]) -> list[str]:
    """Pair adjacent digests of a level and hash each pair."""
    working = ensure_even(list(level))
    return [
        merkle_parent(working[i], working[i + 1])
        for i in range(0, len(working), 2)
    ]


def build_merkle_tree(items: Sequence[Item], *, prehashed: bool = False) -> MerkleTree:
    """
    Build the full Merkle tree for a sequence of items.

    Algorithm:
    1. If empty: return a tree with no levels
    2. Level 0 = leaf digests (hashed once here, or validated and lowercased
       when ``prehashed`` is set)
    3. While the current level has more than one digest:
       - Pad a working copy if odd (duplicate last)
       - Hash pairs (0,1), (2,3), ... into the next level
    4. The final level holds only the root

    Example: [a, b, c] ->
        [[a, b, c], [parent(a,b), parent(c,c)], [root]]

    Args:
        items: Input items (bytes or str), or hex leaf digests
               if ``prehashed`` is True. Order matters and is preserved.
               Digests may carry a 0x prefix or upper case letters.
        prehashed: Treat ``items`` as leaf digests

    Returns:
        Immutable MerkleTree

    Raises:
        InvalidDigestException: If ``prehashed`` and a leaf is not a hex digest
    """
    if len(items) == 0:
        logger.debug("build_merkle_tree called with no items")
        return MerkleTree()

    current_level = _leaf_level(items, prehashed)
    levels: list[list[str]] = [current_level]

    while len(current_level) > 1:
        current_level = _next_level(current_level)
        levels.append(current_level)

    logger.debug(
        "Built Merkle tree: %d leaves, %d levels, root=%s",
        len(levels[0]), len(levels), current_level[0],
    )
    return MerkleTree(levels=tuple(tuple(level) for level in levels))


def build_merkle_root(items: Sequence[Item], *, prehashed: bool = False) -> str:
    """
    Compute the Merkle root of a sequence of items.

    Same reduction as build_merkle_tree() without keeping the
    intermediate levels; the result always equals
    ``build_merkle_tree(items).root``.

    Args:
        items: Input items, or hex leaf digests if ``prehashed`` is True
        prehashed: Treat ``items`` as leaf digests

    Returns:
        Root digest (hex), or EMPTY_ROOT for empty input

    Raises:
        InvalidDigestException: If ``prehashed`` and a leaf is not a hex digest

    Example:
        >>> root = build_merkle_root([b"a", b"b", b"c"])
        >>> len(root)
        64
    """
    if len(items) == 0:
        logger.debug("build_merkle_root called with no items")
        return EMPTY_ROOT

    current_level = _leaf_level(items, prehashed)

    while len(current_level) > 1:
        current_level = _next_level(current_level)

    return current_level[0]


def compute_tree_depth(num_leaves: int) -> int:
    """
    Compute the depth of a Merkle tree with given number of leaves.

    Depth is the number of levels from leaves to root (inclusive).
    A single leaf has depth 1, two leaves have depth 2, etc.

    Args:
        num_leaves: Number of leaves in the tree

    Returns:
        Tree depth (0 for empty tree)
    """
    if num_leaves <= 0:
        return 0

    depth = 1
    n = num_leaves
    while n > 1:
        n = (n + 1) // 2
        depth += 1

    return depth


__all__ = [
    "EMPTY_ROOT",
    "ensure_even",
    "merkle_parent",
    "hash_leaves",
    "build_merkle_tree",
    "build_merkle_root",
    "compute_tree_depth",
]
