"""
Module 03 - CLI Main Entry Point

Parses command-line arguments and dispatches to subcommands.

Usage:
    python -m merklekit_cli root ITEM... [--file PATH] [--prehashed] [--json]
    python -m merklekit_cli tree ITEM... [--file PATH] [--prehashed] [--json]
    python -m merklekit_cli prove TARGET ITEM... [--out PATH] [--json]
    python -m merklekit_cli verify PROOF_PATH [--root HEX] [--item TEXT] [--json]
    python -m merklekit_cli demo [--index N] [--json]
    python -m merklekit_cli config --init

Environment Variables:
    MERKLEKIT_LOG_LEVEL         Log level (default: INFO)
    MERKLEKIT_LOG_FILE          Optional log file
    MERKLEKIT_OUTPUT_FORMAT     human or json (default: human)
    MERKLEKIT_ITEM_ENCODING     Encoding of command-line items (default: utf-8)
    MERKLEKIT_DEMO_INDEX        Item proven by the demo command (default: 4)
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
import traceback
from dataclasses import asdict
from pathlib import Path
from typing import Sequence

from merklekit_cli import __version__
from merklekit_cli.commands import demo, prove, root, verify
from merklekit_cli.commands.common import EXIT_RUNTIME_ERROR, EXIT_SUCCESS
from merklekit_cli.config import get_default_config_template, load_config


def setup_logging(level: str = "INFO", log_file: str | None = None) -> None:
    """Configure logging for the CLI."""
    log_level = getattr(logging, level.upper(), logging.INFO)

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]

    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=handlers,
        force=True,
    )


def _add_item_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "items",
        nargs="*",
        help="Items to commit, in order",
    )
    parser.add_argument(
        "--file", "-f",
        type=str,
        default=None,
        help="Read additional items from a file, one per line",
    )
    parser.add_argument(
        "--prehashed",
        action="store_true",
        default=False,
        help="Treat items as hex leaf digests instead of raw data",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        default=False,
        help="Output machine-readable JSON",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        default=False,
        help="Print tracebacks on errors",
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="merklekit",
        description="Build Merkle trees, compute roots, and generate and verify inclusion proofs.",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )
    parser.add_argument(
        "--config", "-c",
        type=Path,
        default=None,
        help="Path to configuration file (default: ./merklekit.json or ~/.config/merklekit/config.json)",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level (overrides config)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # --- root command ---
    root_parser = subparsers.add_parser(
        "root",
        help="Compute the Merkle root of a list of items",
    )
    _add_item_arguments(root_parser)
    root_parser.set_defaults(func=root.root_cmd)

    # --- tree command ---
    tree_parser = subparsers.add_parser(
        "tree",
        help="Print every level of the Merkle tree",
    )
    _add_item_arguments(tree_parser)
    tree_parser.set_defaults(func=root.tree_cmd)

    # --- prove command ---
    prove_parser = subparsers.add_parser(
        "prove",
        help="Generate an inclusion proof for one item",
        description="Generate a proof document for TARGET within the given items.",
    )
    prove_parser.add_argument(
        "target",
        type=str,
        help="Item to prove (a leaf digest with --prehashed)",
    )
    _add_item_arguments(prove_parser)
    prove_parser.add_argument(
        "--out", "-o",
        type=str,
        default=None,
        help="Write the proof document to this path",
    )
    prove_parser.set_defaults(func=prove.prove_cmd)

    # --- verify command ---
    verify_parser = subparsers.add_parser(
        "verify",
        help="Verify a proof document offline",
        description="Recompute the root from a proof document and compare it with the expected root.",
    )
    verify_parser.add_argument(
        "proof_path",
        type=str,
        help="Path to a proof document written by 'prove --out'",
    )
    verify_parser.add_argument(
        "--root",
        type=str,
        default=None,
        help="Expected root (default: the root stored in the document)",
    )
    verify_parser.add_argument(
        "--item",
        type=str,
        default=None,
        help="Also check that the proof is for this item",
    )
    verify_parser.add_argument(
        "--json",
        action="store_true",
        default=False,
        help="Output machine-readable JSON report",
    )
    verify_parser.add_argument(
        "--debug",
        action="store_true",
        default=False,
        help="Print tracebacks on errors",
    )
    verify_parser.set_defaults(func=verify.verify_cmd)

    # --- demo command ---
    demo_parser = subparsers.add_parser(
        "demo",
        help="Run the built-in sample and self-check",
    )
    demo_parser.add_argument(
        "--index",
        type=int,
        default=None,
        help="Index of the sample item to prove (default: from config, 4)",
    )
    demo_parser.add_argument(
        "--json",
        action="store_true",
        default=False,
        help="Output machine-readable JSON",
    )
    demo_parser.set_defaults(func=demo.demo_cmd)

    # --- config command ---
    config_parser = subparsers.add_parser(
        "config",
        help="Manage CLI configuration",
        description="Initialize or display configuration.",
    )
    config_parser.add_argument(
        "--init",
        action="store_true",
        default=False,
        help="Create a template configuration file",
    )
    config_parser.add_argument(
        "--show",
        action="store_true",
        default=False,
        help="Show current configuration",
    )
    config_parser.add_argument(
        "--path",
        type=str,
        default="merklekit.json",
        help="Path for config file (default: merklekit.json)",
    )
    config_parser.set_defaults(func=config_cmd)

    return parser


def config_cmd(args: argparse.Namespace) -> int:
    """Handle config command."""
    if args.init:
        config_path = Path(args.path)
        if config_path.exists():
            print(f"Error: Config file already exists: {config_path}", file=sys.stderr)
            return EXIT_RUNTIME_ERROR

        config_path.write_text(get_default_config_template())
        print(f"Created configuration file: {config_path}")
        print("You can also use environment variables (MERKLEKIT_* prefix).")
        return EXIT_SUCCESS

    if args.show:
        print(json.dumps(asdict(args.cli_config), indent=2))
        return EXIT_SUCCESS

    print("Usage: merklekit config [--init|--show]")
    print("  --init  Create a template configuration file")
    print("  --show  Show current configuration")
    return EXIT_SUCCESS


def main(argv: Sequence[str] | None = None) -> int:
    """
    Main entry point for the CLI.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0=success, 1=error, 2=verification failed)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return EXIT_RUNTIME_ERROR

    try:
        config = load_config(args.config)
    except Exception as e:
        print(f"Error loading configuration: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    log_level = args.log_level or config.log_level
    setup_logging(level=log_level, log_file=config.log_file)

    args.cli_config = config

    try:
        return args.func(args)
    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        return EXIT_RUNTIME_ERROR
    except Exception as e:
        if getattr(args, "debug", False):
            traceback.print_exc()
        else:
            print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR


if __name__ == "__main__":
    sys.exit(main())
