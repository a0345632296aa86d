"""
merklekit - Merkle trees, roots and inclusion proofs over ordered items.
"""

from merklekit.merkle import (
    EMPTY_ROOT,
    MerkleProver,
    MerkleVerifier,
    build_merkle_proof,
    build_merkle_root,
    build_merkle_tree,
    compute_root_from_proof,
    verify_merkle_proof,
)
from merklekit.schemas import MerkleProof, MerkleTree, ProofStep, Side

__version__ = "0.1.0"

__all__ = [
    "EMPTY_ROOT",
    "MerkleProver",
    "MerkleVerifier",
    "build_merkle_proof",
    "build_merkle_root",
    "build_merkle_tree",
    "compute_root_from_proof",
    "verify_merkle_proof",
    "MerkleProof",
    "MerkleTree",
    "ProofStep",
    "Side",
]
