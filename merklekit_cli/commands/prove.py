"""
Module 03 - CLI Prove Command

Generate an inclusion proof document for one item.

Usage:
    merklekit prove b a b c [--file items.txt] [--prehashed] [--out proof.json] [--json]
"""

from __future__ import annotations

import json
import logging
from argparse import Namespace
from pathlib import Path

from merklekit.merkle import MerkleProver
from merklekit.schemas.errors import MerkleKitException
from merklekit.schemas.merkle import ProofDocument

from merklekit_cli.commands.common import (
    EXIT_RUNTIME_ERROR,
    EXIT_SUCCESS,
    collect_items,
    encode_target,
    print_json,
    report_error,
    wants_json,
)


logger = logging.getLogger(__name__)


def write_proof_document(document: ProofDocument, path: Path) -> None:
    """Write a proof document as indented JSON."""
    with open(path, "w", encoding="utf-8") as f:
        json.dump(document.to_dict(), f, indent=2)
        f.write("\n")


def print_document_human(document: ProofDocument) -> None:
    """Print a proof document in human-readable format."""
    print(f"root: {document.root}")
    print(f"leaf: {document.proof.leaf} ({document.proof.leaf_side.value})")
    print(f"siblings ({len(document.proof.siblings)}):")
    for step in document.proof.siblings:
        print(f"  {step.side.value:<5} {step.digest}")


def prove_cmd(args: Namespace) -> int:
    """
    Execute the prove command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code
    """
    output_json = wants_json(args)
    items = collect_items(args)
    target = encode_target(args, args.target)

    try:
        proof = MerkleProver.prove(target, items, prehashed=args.prehashed)
        root = MerkleProver.compute_root(items, prehashed=args.prehashed)
    except MerkleKitException as e:
        report_error(e, output_json)
        return EXIT_RUNTIME_ERROR

    document = ProofDocument(root=root, proof=proof)
    logger.info("Generated proof with %d sibling steps", len(proof.siblings))

    if args.out:
        out_path = Path(args.out)
        write_proof_document(document, out_path)
        logger.info("Wrote proof document to %s", out_path)

    if output_json:
        print_json(document.to_dict())
    else:
        print_document_human(document)
        if args.out:
            print(f"written: {args.out}")

    return EXIT_SUCCESS
