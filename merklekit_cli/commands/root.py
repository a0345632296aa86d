"""
Module 03 - CLI Root and Tree Commands

Usage:
    merklekit root a b c [--file items.txt] [--prehashed] [--json]
    merklekit tree a b c [--file items.txt] [--prehashed] [--json]
"""

from __future__ import annotations

import logging
from argparse import Namespace

from merklekit.merkle import MerkleProver
from merklekit.schemas.errors import MerkleKitException

from merklekit_cli.commands.common import (
    EXIT_RUNTIME_ERROR,
    EXIT_SUCCESS,
    collect_items,
    print_json,
    report_error,
    wants_json,
)


logger = logging.getLogger(__name__)


def root_cmd(args: Namespace) -> int:
    """
    Execute the root command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code
    """
    output_json = wants_json(args)
    items = collect_items(args)
    logger.info("Computing Merkle root over %d items", len(items))

    try:
        root = MerkleProver.compute_root(items, prehashed=args.prehashed)
    except MerkleKitException as e:
        report_error(e, output_json)
        return EXIT_RUNTIME_ERROR

    if output_json:
        print_json({"leaf_count": len(items), "root": root})
    else:
        print(root)

    return EXIT_SUCCESS


def tree_cmd(args: Namespace) -> int:
    """
    Execute the tree command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code
    """
    output_json = wants_json(args)
    items = collect_items(args)
    logger.info("Building Merkle tree over %d items", len(items))

    try:
        tree = MerkleProver.build_tree(items, prehashed=args.prehashed)
    except MerkleKitException as e:
        report_error(e, output_json)
        return EXIT_RUNTIME_ERROR

    if output_json:
        print_json({"root": tree.root, "depth": tree.depth, "levels": tree.to_list()})
        return EXIT_SUCCESS

    for i, level in enumerate(tree.levels):
        print(f"level {i} ({len(level)}):")
        for digest in level:
            print(f"  {digest}")
    print(f"root: {tree.root}")

    return EXIT_SUCCESS
