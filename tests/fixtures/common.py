"""
Common test fixtures shared by all test modules.

Provides factory functions for:
- Item lists of a given length
- Independently computed digests (plain hashlib, no merklekit code)
- Proof documents written to disk
"""

import hashlib
import json
from pathlib import Path
from typing import Optional

from merklekit.merkle import MerkleProver
from merklekit.schemas.merkle import ProofDocument


# =============================================================================
# Reference hashing (independent of merklekit.crypto)
# =============================================================================

def h(data: bytes) -> str:
    """SHA-256 hex digest of raw bytes."""
    return hashlib.sha256(data).hexdigest()


def h_pair(left: str, right: str) -> str:
    """Parent digest of two hex digests, hashing the raw bytes."""
    return hashlib.sha256(bytes.fromhex(left) + bytes.fromhex(right)).hexdigest()


# =============================================================================
# Item Factories
# =============================================================================

def make_items(count: int, prefix: str = "item") -> list[bytes]:
    """Create ``count`` distinct byte items."""
    return [f"{prefix}{i}".encode() for i in range(count)]


def make_abc_expectations() -> dict:
    """
    Hand-computed tree and proof for the items ["a", "b", "c"].

    level0 = [H(a), H(b), H(c)]
    level1 = [H(H(a)+H(b)), H(H(c)+H(c))]
    root   = H(level1[0] + level1[1])
    """
    ha, hb, hc = h(b"a"), h(b"b"), h(b"c")
    ab = h_pair(ha, hb)
    cc = h_pair(hc, hc)
    root = h_pair(ab, cc)
    return {
        "items": [b"a", b"b", b"c"],
        "leaves": [ha, hb, hc],
        "level1": [ab, cc],
        "root": root,
        "proof_b": [
            {"digest": hb, "side": "right"},
            {"digest": ha, "side": "left"},
            {"digest": cc, "side": "right"},
        ],
    }


# =============================================================================
# Proof Document Factory
# =============================================================================

def make_proof_document(
    items: Optional[list[bytes]] = None,
    target: Optional[bytes] = None,
) -> ProofDocument:
    """Create a ProofDocument for ``target`` within ``items``."""
    items = items if items is not None else make_items(5)
    target = target if target is not None else items[0]
    return ProofDocument(
        root=MerkleProver.compute_root(items),
        proof=MerkleProver.prove(target, items),
    )


def write_proof_document(path: Path, document: ProofDocument) -> Path:
    """Write ``document`` to ``path`` as JSON and return the path."""
    path.write_text(json.dumps(document.to_dict(), indent=2), encoding="utf-8")
    return path
