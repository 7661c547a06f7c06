"""
CLI Verify Command

Check a claim against an artifact offline, the way the verifying
contract would:
- Re-encode (address, amount) into a leaf
- Fold the stored proof with the sorted-pair rule
- Compare with the stored root

Usage:
    merklegen verify 0x1111... 1000 [--artifact whitelist-proofs.json] [--json]
"""

from __future__ import annotations

import json
import logging
import sys
from argparse import Namespace
from dataclasses import asdict, dataclass

from core.ingest.parser import parse_amount
from core.merkle.merkle_proofs import MerkleVerifier
from core.schemas.errors import MerklegenException
from merklegen_cli.commands.proof import load_artifact_for, lookup_entry


logger = logging.getLogger(__name__)


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1
EXIT_VERIFICATION_FAILED = 2


@dataclass
class VerifySummary:
    """Summary of a claim verification for CLI output."""
    artifact_path: str = ""
    address: str = ""
    amount: str = ""
    root: str = ""
    amount_ok: bool = False
    proof_ok: bool = False

    @property
    def all_ok(self) -> bool:
        return self.amount_ok and self.proof_ok

    def to_dict(self) -> dict:
        d = asdict(self)
        d["ok"] = self.all_ok
        return d


def print_summary_human(summary: VerifySummary) -> None:
    """Print summary in human-readable format."""
    print(f"artifact: {summary.artifact_path}")
    print(f"address: {summary.address}")
    print(f"amount: {summary.amount}")
    print(f"root: {summary.root}")
    print(f"amount_ok: {str(summary.amount_ok).lower()}")
    print(f"proof_ok: {str(summary.proof_ok).lower()}")


def verify_cmd(args: Namespace) -> int:
    """
    Execute the verify command.

    Returns:
        0 if the claim is valid, 2 if it is not, 1 on errors
    """
    try:
        path, artifact = load_artifact_for(args)
        address, entry = lookup_entry(artifact, args.address)
        amount = parse_amount(args.amount.strip())
    except (MerklegenException, OSError) as e:
        if args.debug:
            raise
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    summary = VerifySummary(
        artifact_path=str(path),
        address=address,
        amount=str(amount),
        root=artifact.root,
        amount_ok=int(entry.amount) == amount,
        proof_ok=MerkleVerifier.verify_claim(address, amount, entry.proof, artifact.root),
    )

    if args.json:
        print(json.dumps(summary.to_dict(), indent=2))
    else:
        print_summary_human(summary)

    if summary.all_ok:
        logger.info("Claim verified")
        return EXIT_SUCCESS

    logger.warning("Claim verification failed")
    return EXIT_VERIFICATION_FAILED
