"""
Module 03 - Shared helpers for CLI commands.
"""

from __future__ import annotations

import json
import sys
from argparse import Namespace
from pathlib import Path
from typing import Any

from merklekit.schemas.errors import MerkleKitException


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1
EXIT_VERIFICATION_FAILED = 2


def read_item_file(path: Path, encoding: str) -> list[bytes]:
    """Read one item per line, without the trailing newline."""
    with open(path, "r", encoding=encoding) as f:
        return [line.rstrip("\r\n").encode(encoding) for line in f]


def collect_items(args: Namespace) -> list[bytes] | list[str]:
    """
    Collect the items named on the command line.

    Positional items come first, then the lines of ``--file``. With
    ``--prehashed`` the values are leaf digests and are returned as str.
    """
    config = getattr(args, "cli_config", None)
    encoding = config.item_encoding if config is not None else "utf-8"

    raw: list[str] = list(getattr(args, "items", None) or [])
    from_file: list[bytes] = []
    if getattr(args, "file", None):
        from_file = read_item_file(Path(args.file), encoding)

    if getattr(args, "prehashed", False):
        return raw + [line.decode(encoding).strip() for line in from_file if line.strip()]

    return [item.encode(encoding) for item in raw] + from_file


def encode_target(args: Namespace, target: str) -> bytes | str:
    """Encode a target the same way collect_items() encodes items."""
    if getattr(args, "prehashed", False):
        return target
    config = getattr(args, "cli_config", None)
    encoding = config.item_encoding if config is not None else "utf-8"
    return target.encode(encoding)


def wants_json(args: Namespace) -> bool:
    """True if --json was given or the config defaults to JSON output."""
    if getattr(args, "json", False):
        return True
    config = getattr(args, "cli_config", None)
    return config is not None and config.default_output_format == "json"


def print_json(data: Any) -> None:
    print(json.dumps(data, indent=2))


def report_error(exc: MerkleKitException, output_json: bool) -> None:
    """Print a structured error to stdout (JSON) or stderr (human)."""
    if output_json:
        print_json({"error": exc.to_error_model().model_dump(mode="json")})
    else:
        print(f"Error [{exc.code}]: {exc.message}", file=sys.stderr)
