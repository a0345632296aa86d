"""
Module 02 - Merkle Proofs
Inclusion proof generation and verification.

Module ID: M02

Proof layout:
    steps[0]   the target leaf itself (digest, side); identifies the leaf
               and seeds the fold, it is never combined with itself
    steps[1:]  one sibling per level, leaf level first, with the sibling's
               own side (LEFT when the sibling has the lower index)

Verification folds the steps left to right. The side consulted at each
fold is the incoming sibling's side: a RIGHT sibling is appended after
the accumulator, a LEFT sibling is prepended. This mirrors the
lower-index-left parent rule of merkle_tree.py; changing either side of
that pairing makes every proof reproduce a different root.

This module also provides class-based interfaces:
- MerkleProver: Generate roots, trees and proofs (raises on bad input)
- MerkleVerifier: Verify proofs (raises on empty proof / mismatch)
"""
from __future__ import annotations

import logging
from typing import Sequence

from merklekit.crypto.hashing import Item, hash_item, hash_pair
from merklekit.merkle.merkle_tree import build_merkle_root, build_merkle_tree
from merklekit.schemas.errors import (
    EmptyInputException,
    EmptyProofException,
    MerkleVerificationException,
    TargetNotFoundException,
)
from merklekit.schemas.merkle import (
    EMPTY_ROOT,
    MerkleProof,
    MerkleTree,
    ProofStep,
    Side,
    normalize_digest,
    normalize_hex,
)


logger = logging.getLogger(__name__)


def get_leaf_side(leaf: str, tree: MerkleTree) -> Side | None:
    """
    Return the side of the first leaf equal to ``leaf``.

    Args:
        leaf: Leaf digest (hex)
        tree: Tree whose leaf level is searched

    Returns:
        Side.LEFT for an even index, Side.RIGHT for an odd one,
        None if the leaf is not in the tree
    """
    index = tree.leaf_index(leaf)
    if index is None:
        return None
    return Side.for_index(index)


def _proof_from_tree(tree: MerkleTree, index: int) -> MerkleProof:
    """Walk ``tree`` from leaf ``index`` up to the level below the root."""
    leaf = tree.leaves[index]
    steps: list[ProofStep] = [ProofStep(digest=leaf, side=Side.for_index(index))]

    current_index = index
    for level in tree.levels[:-1]:
        node_side = Side.for_index(current_index)
        if node_side is Side.LEFT:
            sibling_index = current_index + 1
        else:
            sibling_index = current_index - 1

        # Past the end of an odd level the node was paired with its duplicate
        if sibling_index < len(level):
            sibling = level[sibling_index]
        else:
            sibling = level[current_index]

        steps.append(ProofStep(digest=sibling, side=node_side.opposite))
        current_index //= 2

    return MerkleProof(steps=tuple(steps))


def build_merkle_proof(
    target: Item,
    items: Sequence[Item],
    *,
    prehashed: bool = False,
) -> MerkleProof | None:
    """
    Generate an inclusion proof for ``target``.

    Algorithm:
    1. Build the full tree from ``items``
    2. Locate the target digest in the leaf level (first occurrence)
    3. Record the leaf itself with its side (even index -> LEFT)
    4. At each level below the root:
       - Sibling is index + 1 for a left node, index - 1 for a right node
       - Record the sibling with the opposite side
       - Move up: index = index // 2

    Args:
        target: The item to prove (hashed like the leaves), or its leaf
                digest if ``prehashed`` is True
        items: Items committed by the tree, or leaf digests if ``prehashed``
        prehashed: Treat ``target`` and ``items`` as leaf digests

    Returns:
        MerkleProof with the self step plus one sibling per level, or
        None if ``items`` is empty or the target is not a leaf

    Raises:
        InvalidDigestException: If ``prehashed`` and ``target`` or a leaf
            is not a hex digest
    """
    if len(items) == 0:
        logger.debug("build_merkle_proof called with no items")
        return None

    target_digest = normalize_digest(target) if prehashed else hash_item(target)
    tree = build_merkle_tree(items, prehashed=prehashed)

    index = tree.leaf_index(target_digest)
    if index is None:
        logger.debug("Target %s not found among %d leaves", target_digest, len(tree.leaves))
        return None

    return _proof_from_tree(tree, index)


def build_merkle_proof_at(
    index: int,
    items: Sequence[Item],
    *,
    prehashed: bool = False,
) -> MerkleProof | None:
    """
    Generate an inclusion proof for the leaf at position ``index``.

    Unlike build_merkle_proof(), duplicate items are told apart by position.

    Returns:
        MerkleProof, or None if ``items`` is empty or ``index`` is out of range
    """
    if index < 0 or index >= len(items):
        logger.debug("Leaf index %d out of range for %d items", index, len(items))
        return None

    tree = build_merkle_tree(items, prehashed=prehashed)
    return _proof_from_tree(tree, index)


def compute_root_from_proof(proof: MerkleProof | None) -> str:
    """
    Recompute the root committed to by ``proof``.

    Algorithm:
    1. Start with the digest of the first (self) step
    2. For each following step:
       - RIGHT step: hash = parent(hash, step)
       - LEFT step:  hash = parent(step, hash)
    3. The last hash is the root

    Args:
        proof: Proof to fold

    Returns:
        Root digest (hex), or EMPTY_ROOT for a missing or empty proof
    """
    if proof is None or proof.is_empty:
        return EMPTY_ROOT

    current_hash = proof.steps[0].digest
    for step in proof.steps[1:]:
        if step.side is Side.RIGHT:
            current_hash = hash_pair(current_hash, step.digest)
        else:
            current_hash = hash_pair(step.digest, current_hash)

    return current_hash


def verify_merkle_proof(proof: MerkleProof | None, root: str) -> bool:
    """
    Check that ``proof`` reproduces ``root``.

    Args:
        proof: Proof to verify
        root: Expected root digest (hex, optionally 0x-prefixed)

    Returns:
        True if the proof is non-empty and folds to ``root``
    """
    if not root:
        return False
    computed = compute_root_from_proof(proof)
    if computed == EMPTY_ROOT:
        return False
    return computed == normalize_hex(root)


class MerkleProver:
    """
    Convenience class for building roots, trees and proofs.

    Unlike the module functions, these methods raise instead of
    returning sentinels:
    - EmptyInputException when no items are given
    - TargetNotFoundException when the target is not a leaf

    Example:
        >>> proof = MerkleProver.prove(b"b", [b"a", b"b", b"c"])
        >>> proof.leaf_side
        <Side.RIGHT: 'right'>
    """

    @staticmethod
    def compute_root(items: Sequence[Item], *, prehashed: bool = False) -> str:
        """Compute the root digest of ``items``."""
        if len(items) == 0:
            raise EmptyInputException("Cannot compute a root for an empty item list")
        return build_merkle_root(items, prehashed=prehashed)

    @staticmethod
    def build_tree(items: Sequence[Item], *, prehashed: bool = False) -> MerkleTree:
        """Build the full tree for ``items``."""
        if len(items) == 0:
            raise EmptyInputException("Cannot build a tree for an empty item list")
        return build_merkle_tree(items, prehashed=prehashed)

    @staticmethod
    def prove(
        target: Item,
        items: Sequence[Item],
        *,
        prehashed: bool = False,
    ) -> MerkleProof:
        """Generate a proof for ``target`` within ``items``."""
        if len(items) == 0:
            raise EmptyInputException("Cannot generate a proof for an empty item list")
        proof = build_merkle_proof(target, items, prehashed=prehashed)
        if proof is None:
            target_digest = normalize_digest(target) if prehashed else hash_item(target)
            raise TargetNotFoundException(
                f"Target {target_digest} is not a leaf of the tree",
                target=target_digest,
            )
        return proof

    @staticmethod
    def prove_at(
        index: int,
        items: Sequence[Item],
        *,
        prehashed: bool = False,
    ) -> MerkleProof:
        """
        Generate a proof for the leaf at ``index``.

        Raises:
            EmptyInputException: If items is empty
            IndexError: If index is out of range
        """
        if len(items) == 0:
            raise EmptyInputException("Cannot generate a proof for an empty item list")
        if index < 0 or index >= len(items):
            raise IndexError(f"Leaf index {index} out of range for {len(items)} leaves")
        return _proof_from_tree(build_merkle_tree(items, prehashed=prehashed), index)


class MerkleVerifier:
    """
    Convenience class for verifying Merkle proofs.

    Example:
        >>> proof = MerkleProver.prove(b"a", items)
        >>> MerkleVerifier.verify(proof, MerkleProver.compute_root(items))
        True
    """

    @staticmethod
    def compute_root(proof: MerkleProof | None) -> str:
        """
        Recompute the root from ``proof``.

        Raises:
            EmptyProofException: If the proof has no steps
        """
        if proof is None or proof.is_empty:
            raise EmptyProofException()
        return compute_root_from_proof(proof)

    @staticmethod
    def verify(proof: MerkleProof | None, root: str) -> bool:
        """Return True if ``proof`` reproduces ``root``."""
        return verify_merkle_proof(proof, root)

    @staticmethod
    def verify_or_raise(proof: MerkleProof | None, root: str) -> str:
        """
        Verify ``proof`` against ``root``.

        Returns:
            The recomputed root

        Raises:
            EmptyProofException: If the proof has no steps
            MerkleVerificationException: If the recomputed root differs
        """
        computed = MerkleVerifier.compute_root(proof)
        if computed != normalize_hex(root):
            raise MerkleVerificationException(
                "Proof does not reproduce the expected root",
                expected_root=root,
                actual_root=computed,
            )
        return computed

    @staticmethod
    def verify_item_in_root(item: Item, proof: MerkleProof | None, root: str) -> bool:
        """
        Verify that ``item`` is the leaf proven by ``proof`` under ``root``.

        Also checks that the proof's self step is the item's own digest,
        so a valid proof for a different leaf is rejected.
        """
        if proof is None or proof.is_empty:
            return False
        if proof.leaf != hash_item(item):
            return False
        return verify_merkle_proof(proof, root)


__all__ = [
    "get_leaf_side",
    "build_merkle_proof",
    "build_merkle_proof_at",
    "compute_root_from_proof",
    "verify_merkle_proof",
    "MerkleProver",
    "MerkleVerifier",
]
