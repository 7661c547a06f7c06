"""
CLI Proof Command

Print the artifact entry for one address.

Usage:
    merklegen proof 0x1111... [--artifact whitelist-proofs.json] [--json]
"""

from __future__ import annotations

import json
import sys
from argparse import Namespace
from pathlib import Path

from core.ingest.parser import parse_address
from core.schemas.artifact import ProofArtifact, ProofEntry
from core.schemas.errors import AddressNotFoundError, MerklegenException
from merklegen_cli.config import CLIConfig
from orchestrator.artifacts.io import load_artifact


EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1


def lookup_entry(artifact: ProofArtifact, address: str) -> tuple[str, ProofEntry]:
    """
    Normalize an address and find its entry.

    Raises:
        MalformedRecordError: If the address is not a valid 0x address
        AddressNotFoundError: If the artifact has no entry for it
    """
    normalized = parse_address(address.strip())
    entry = artifact.get_entry(normalized)
    if entry is None:
        raise AddressNotFoundError(normalized)
    return normalized, entry


def load_artifact_for(args: Namespace) -> tuple[Path, ProofArtifact]:
    """Resolve the artifact path from args/config and load it."""
    config: CLIConfig = getattr(args, "cli_config", None) or CLIConfig()
    path = Path(args.artifact or config.output_path)
    if not path.exists():
        raise FileNotFoundError(f"Artifact not found: {path}")
    return path, load_artifact(path)


def proof_cmd(args: Namespace) -> int:
    """Execute the proof command."""
    try:
        _, artifact = load_artifact_for(args)
        address, entry = lookup_entry(artifact, args.address)
    except (MerklegenException, OSError) as e:
        if args.debug:
            raise
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    if args.json:
        print(json.dumps({
            "address": address,
            "amount": entry.amount,
            "proof": entry.proof,
            "root": artifact.root,
        }, indent=2))
    else:
        print(f"address: {address}")
        print(f"amount: {entry.amount}")
        print(f"root: {artifact.root}")
        print(f"proof ({len(entry.proof)}):")
        for digest in entry.proof:
            print(f"  {digest}")

    return EXIT_SUCCESS
