"""
Module 03 - merklekit CLI

Command-line driver for the merklekit core.

Usage:
    python -m merklekit_cli root "a" "b" "c"
    python -m merklekit_cli prove "b" "a" "b" "c" --out proof.json
    python -m merklekit_cli verify proof.json
    python -m merklekit_cli demo
"""

__version__ = "0.1.0"
