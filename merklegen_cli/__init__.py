"""
merklegen CLI

Command-line interface for the Merkle commitment generator.

Usage:
    python -m merklegen_cli build --input user_points.csv --out whitelist-proofs.json
    python -m merklegen_cli proof 0x1111111111111111111111111111111111111111
    python -m merklegen_cli verify 0x1111111111111111111111111111111111111111 1000
"""

__version__ = "0.1.0"
