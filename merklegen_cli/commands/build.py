"""
CLI Build Command

Read an entitlement file, build the Merkle tree and write the proof artifact.

Usage:
    merklegen build --input user_points.csv --out whitelist-proofs.json [--workers N] [--json]
"""

from __future__ import annotations

import json
import logging
import sys
from argparse import Namespace
from dataclasses import asdict, dataclass, field
from typing import Any

from core.schemas.errors import MerklegenException
from merklegen_cli.config import CLIConfig
from orchestrator.pipeline import Pipeline, RunResult


logger = logging.getLogger(__name__)


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1


@dataclass
class BuildSummary:
    """Summary of a build for CLI output."""
    input_path: str = ""
    artifact_path: str = ""
    root: str = ""
    leaf_count: int = 0
    depth: int = 0
    total_amount: str = "0"
    artifact_sha256: str = ""
    artifact_size: int = 0
    timings: dict[str, float] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        d = asdict(self)
        if not d["timings"]:
            del d["timings"]
        return d


def build_summary(input_path: str, result: RunResult, debug: bool = False) -> BuildSummary:
    """Build a BuildSummary from a pipeline result."""
    summary = BuildSummary(
        input_path=input_path,
        artifact_path=result.artifact_path or "",
        root=result.root,
        leaf_count=result.leaf_count,
        depth=result.depth,
        total_amount=str(result.total_amount),
        artifact_sha256=result.artifact_sha256 or "",
        artifact_size=result.artifact_size or 0,
    )
    if debug:
        summary.timings = {k: round(v, 6) for k, v in result.timings.items()}
    return summary


def print_summary_human(summary: BuildSummary) -> None:
    """Print summary in human-readable format."""
    print(f"input: {summary.input_path}")
    print(f"artifact: {summary.artifact_path}")
    print(f"merkle_root: {summary.root}")
    print(f"leaves: {summary.leaf_count}")
    print(f"depth: {summary.depth}")
    print(f"total_amount: {summary.total_amount}")
    print(f"sha256: {summary.artifact_sha256}")
    if summary.timings:
        print("\ntimings:")
        for stage, seconds in summary.timings.items():
            print(f"  {stage}: {seconds:.3f}s")


def print_error_json(error: MerklegenException) -> None:
    """Print a structured error as JSON."""
    print(json.dumps({"ok": False, "error": error.to_error_model().model_dump()}, indent=2))


def build_cmd(args: Namespace) -> int:
    """
    Execute the build command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code
    """
    config: CLIConfig = getattr(args, "cli_config", None) or CLIConfig()

    if args.input:
        config.input_path = args.input
    if args.out:
        config.output_path = args.out
    if args.workers is not None:
        config.workers = args.workers
    if args.no_verify:
        config.verify_proofs = False

    pipeline = Pipeline(config.to_runtime_config())

    try:
        result = pipeline.run(config.input_path, config.output_path)
    except MerklegenException as e:
        if args.debug:
            raise
        if args.json:
            print_error_json(e)
        else:
            print(f"Error [{e.code}]: {e.message}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR
    except OSError as e:
        if args.debug:
            raise
        print(f"Error reading input: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    summary = build_summary(config.input_path, result, debug=args.debug)

    if args.json:
        print(json.dumps(summary.to_dict(), indent=2))
    else:
        print_summary_human(summary)

    return EXIT_SUCCESS
