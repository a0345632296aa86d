"""
Module 03 - CLI Demo Command

Self-test over a fixed list of sample sentences: computes the root and the
full tree, proves one sentence and checks that the proof folds back to the
same root.

Usage:
    merklekit demo [--index N] [--json]
"""

from __future__ import annotations

import logging
import sys
from argparse import Namespace

from merklekit.merkle import (
    build_merkle_proof,
    build_merkle_root,
    build_merkle_tree,
    compute_root_from_proof,
)

from merklekit_cli.commands.common import (
    EXIT_RUNTIME_ERROR,
    EXIT_SUCCESS,
    EXIT_VERIFICATION_FAILED,
    print_json,
    wants_json,
)


logger = logging.getLogger(__name__)


SAMPLE_ITEMS: tuple[str, ...] = (
    "Hello World",
    "Where am I?",
    "I am ready to work!!",
    "I am a developer",
    "I am recently working on my portfolio.",
    "I thing this is enough!",
    "Let me add one more",
    "This is the last one",
    "This is last bss hua",
)


def demo_cmd(args: Namespace) -> int:
    """
    Execute the demo command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (2 if the recomputed root does not match)
    """
    output_json = wants_json(args)
    config = getattr(args, "cli_config", None)
    index = args.index
    if index is None:
        index = config.demo_index if config is not None else 4

    if index < 0 or index >= len(SAMPLE_ITEMS):
        print(f"Error: --index must be between 0 and {len(SAMPLE_ITEMS) - 1}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    items = list(SAMPLE_ITEMS)
    root = build_merkle_root(items)
    tree = build_merkle_tree(items)
    proof = build_merkle_proof(items[index], items)
    root_from_proof = compute_root_from_proof(proof)
    matches = root_from_proof == root

    logger.info("Demo proof for item %d matches=%s", index, matches)

    if output_json:
        print_json({
            "items": items,
            "index": index,
            "root": root,
            "tree": tree.to_list(),
            "proof": proof.to_list() if proof is not None else None,
            "root_from_proof": root_from_proof,
            "matches": matches,
        })
    else:
        print(f"merkle root: {root}")
        print(f"proof for {items[index]!r}:")
        for step in proof.steps if proof is not None else ():
            print(f"  {step.side.value:<5} {step.digest}")
        print("merkle tree:")
        for i, level in enumerate(tree.levels):
            print(f"  level {i}: {list(level)}")
        print(f"root from proof: {root_from_proof}")
        print(f"root from proof == merkle root: {str(matches).lower()}")

    return EXIT_SUCCESS if matches else EXIT_VERIFICATION_FAILED
