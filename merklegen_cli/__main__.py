"""
Module execution entry point.

Allows running with: python -m merklegen_cli
"""

import sys
from merklegen_cli.main import main

if __name__ == "__main__":
    sys.exit(main())
