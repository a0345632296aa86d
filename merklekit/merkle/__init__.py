"""
Module 02 - Merkle Tree and Commitments
Deterministic Merkle tree construction + proof generation/verification.

Module ID: M02

This module provides:
- build_merkle_tree: Full tree, level by level
- build_merkle_root: Root digest only
- build_merkle_proof: Inclusion proof for a leaf
- compute_root_from_proof / verify_merkle_proof: Proof verification
- MerkleProver / MerkleVerifier: Raising convenience wrappers

Canonical Commitment Rules:
1. Leaf hashing: sha256(item)
2. Parent hashing: sha256(left + right), left = lower index
3. Padding: Duplicate last node if odd number at any level
4. Empty input: root "" (EMPTY_ROOT), tree with no levels, no proof
5. Single leaf: root = leaf

Usage:
    from merklekit.merkle import build_merkle_root, build_merkle_proof, compute_root_from_proof

    items = [b"a", b"b", b"c"]
    root = build_merkle_root(items)
    proof = build_merkle_proof(b"b", items)
    assert compute_root_from_proof(proof) == root
"""
from .merkle_tree import (
    EMPTY_ROOT,
    ensure_even,
    merkle_parent,
    hash_leaves,
    build_merkle_tree,
    build_merkle_root,
    compute_tree_depth,
)

from .merkle_proofs import (
    get_leaf_side,
    build_merkle_proof,
    build_merkle_proof_at,
    compute_root_from_proof,
    verify_merkle_proof,
    MerkleProver,
    MerkleVerifier,
)


__all__ = [
    # Core constants
    "EMPTY_ROOT",
    # Tree functions
    "ensure_even",
    "merkle_parent",
    "hash_leaves",
    "build_merkle_tree",
    "build_merkle_root",
    "compute_tree_depth",
    # Proof functions
    "get_leaf_side",
    "build_merkle_proof",
    "build_merkle_proof_at",
    "compute_root_from_proof",
    "verify_merkle_proof",
    # Convenience classes
    "MerkleProver",
    "MerkleVerifier",
]
