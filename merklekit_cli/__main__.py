"""
Module execution entry point.

Allows running with: python -m merklekit_cli
"""

import sys
from merklekit_cli.main import main

if __name__ == "__main__":
    sys.exit(main())
