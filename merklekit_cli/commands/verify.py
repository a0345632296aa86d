"""
Module 03 - CLI Verify Command

Recompute a root from a proof document, without the original items.

Usage:
    merklekit verify proof.json [--root HEX] [--item TEXT] [--json]
"""

from __future__ import annotations

import json
import logging
import sys
from argparse import Namespace
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from merklekit.crypto.hashing import hash_item
from merklekit.merkle import MerkleVerifier
from merklekit.schemas.errors import (
    EmptyProofException,
    MerkleKitException,
    MerkleVerificationException,
    SchemaValidationException,
)
from merklekit.schemas.merkle import ProofDocument, normalize_hex

from merklekit_cli.commands.common import (
    EXIT_RUNTIME_ERROR,
    EXIT_SUCCESS,
    EXIT_VERIFICATION_FAILED,
    print_json,
    report_error,
    wants_json,
)


logger = logging.getLogger(__name__)


@dataclass
class VerifySummary:
    """Summary of proof verification for CLI output."""
    proof_path: str = ""
    leaf: str = ""
    expected_root: str = ""
    computed_root: str = ""
    leaf_ok: bool | None = None
    verified: bool = False

    def to_dict(self) -> dict[str, Any]:
        d = asdict(self)
        if self.leaf_ok is None:
            del d["leaf_ok"]
        return d


def load_proof_document(path: Path) -> ProofDocument:
    """
    Load and validate a proof document.

    Raises:
        SchemaValidationException: If the file is not a valid proof document
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise SchemaValidationException(
            f"Proof file is not valid JSON: {e}",
            details={"path": str(path)},
        ) from e

    try:
        return ProofDocument.model_validate(data)
    except ValidationError as e:
        first = e.errors()[0]
        raise SchemaValidationException(
            f"Invalid proof document: {first['msg']}",
            field_path=".".join(str(p) for p in first["loc"]),
            details={"path": str(path), "error_count": e.error_count()},
        ) from e


def print_summary_human(summary: VerifySummary) -> None:
    """Print summary in human-readable format."""
    print(f"proof: {summary.proof_path}")
    print(f"leaf: {summary.leaf}")
    print(f"expected_root: {summary.expected_root}")
    print(f"computed_root: {summary.computed_root}")
    if summary.leaf_ok is not None:
        print(f"leaf_ok: {str(summary.leaf_ok).lower()}")
    print(f"verified: {str(summary.verified).lower()}")


def verify_cmd(args: Namespace) -> int:
    """
    Execute the verify command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (2 if the proof does not reproduce the root)
    """
    output_json = wants_json(args)
    proof_path = Path(args.proof_path)

    if not proof_path.exists():
        print(f"Error: Proof file not found: {proof_path}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    try:
        document = load_proof_document(proof_path)
    except MerkleKitException as e:
        report_error(e, output_json)
        return EXIT_RUNTIME_ERROR

    expected_root = normalize_hex(args.root or document.root)
    summary = VerifySummary(
        proof_path=str(proof_path),
        leaf=document.proof.leaf,
        expected_root=expected_root,
    )

    if args.item is not None:
        config = getattr(args, "cli_config", None)
        encoding = config.item_encoding if config is not None else "utf-8"
        summary.leaf_ok = document.proof.leaf == hash_item(args.item.encode(encoding))

    try:
        summary.computed_root = MerkleVerifier.verify_or_raise(document.proof, expected_root)
        summary.verified = summary.leaf_ok is not False
    except EmptyProofException as e:
        report_error(e, output_json)
        return EXIT_VERIFICATION_FAILED
    except MerkleVerificationException as e:
        summary.computed_root = e.details.get("actual_root", "")
        summary.verified = False

    logger.info("Proof %s verified=%s", proof_path, summary.verified)

    if output_json:
        print_json(summary.to_dict())
    else:
        print_summary_human(summary)

    return EXIT_SUCCESS if summary.verified else EXIT_VERIFICATION_FAILED
