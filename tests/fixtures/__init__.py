"""
Test fixtures package for merklekit tests.

This package provides factory functions for creating test objects:
- common.py: item lists, reference digests, proof documents

Usage:
    from fixtures.common import make_items, make_abc_expectations

    def test_something():
        items = make_items(7)
"""

from .common import (
    h,
    h_pair,
    make_items,
    make_abc_expectations,
    make_proof_document,
    write_proof_document,
)

__all__ = [
    "h",
    "h_pair",
    "make_items",
    "make_abc_expectations",
    "make_proof_document",
    "write_proof_document",
]
