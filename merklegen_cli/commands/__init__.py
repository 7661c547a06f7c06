"""
CLI command modules.
"""

from merklegen_cli.commands import build, proof, verify, sample

__all__ = ["build", "proof", "verify", "sample"]
