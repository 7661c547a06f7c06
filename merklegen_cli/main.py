"""
CLI Main Entry Point

Parses command-line arguments and dispatches to subcommands.

Usage:
    python -m merklegen_cli build [--input PATH] [--out PATH] [--workers N] [--json] [--debug]
    python -m merklegen_cli proof <address> [--artifact PATH] [--json]
    python -m merklegen_cli verify <address> <amount> [--artifact PATH] [--json]
    python -m merklegen_cli sample [--out PATH] [--force]
    python -m merklegen_cli config --init | --show

Environment Variables:
    MERKLEGEN_INPUT             Entitlement file (default: scripts/user_points.csv)
    MERKLEGEN_OUTPUT            Artifact file (default: whitelist-proofs.json)
    MERKLEGEN_WORKERS           Leaf hashing threads (default: 1)
    MERKLEGEN_ARTIFACT_INDENT   "tab", a number of spaces, or "none"
    MERKLEGEN_VERIFY_PROOFS     Fold every proof before writing (default: true)
    MERKLEGEN_LOG_LEVEL         Log level (default: INFO)
    MERKLEGEN_LOG_FILE          Also log to this file
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
import traceback
from pathlib import Path
from typing import Sequence

from merklegen_cli import __version__
from merklegen_cli.commands import build, proof, verify, sample
from merklegen_cli.config import (
    DEFAULT_CONFIG_FILE,
    config_to_dict,
    get_default_config_template,
    load_config,
)


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1
EXIT_VERIFICATION_FAILED = 2


def setup_logging(level: str = "INFO", log_file: str | None = None) -> None:
    """Configure logging for the CLI."""
    log_level = getattr(logging, level.upper(), logging.INFO)

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]

    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=handlers,
        force=True,
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="merklegen",
        description="Build Merkle roots and inclusion proofs for on-chain entitlement claims.",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )
    parser.add_argument(
        "--config", "-c",
        type=Path,
        default=None,
        help="Path to configuration file (default: ./merklegen.json or ~/.config/merklegen/config.json)",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level (overrides config)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # --- build command ---
    build_parser = subparsers.add_parser(
        "build",
        help="Build the Merkle tree and write the proof artifact",
        description="Parse an address,amount file, build the sorted-pair Merkle tree "
                    "and write root + proofs as JSON.",
    )
    build_parser.add_argument(
        "--input", "-i",
        type=str,
        default=None,
        help="Entitlement file (default: from config)",
    )
    build_parser.add_argument(
        "--out", "-o",
        type=str,
        default=None,
        help="Artifact output path (default: from config)",
    )
    build_parser.add_argument(
        "--workers",
        type=int,
        default=None,
        help="Threads used to hash leaves (default: from config)",
    )
    build_parser.add_argument(
        "--no-verify",
        action="store_true",
        default=False,
        help="Skip folding every proof back to the root before writing",
    )
    build_parser.add_argument(
        "--json",
        action="store_true",
        default=False,
        help="Output machine-readable JSON summary",
    )
    build_parser.add_argument(
        "--debug",
        action="store_true",
        default=False,
        help="Include stage timings and raise on errors",
    )
    build_parser.set_defaults(func=build.build_cmd)

    # --- proof command ---
    proof_parser = subparsers.add_parser(
        "proof",
        help="Print the proof entry for an address",
    )
    proof_parser.add_argument("address", type=str, help="0x-prefixed address")
    proof_parser.add_argument(
        "--artifact", "-a",
        type=str,
        default=None,
        help="Artifact path (default: from config)",
    )
    proof_parser.add_argument("--json", action="store_true", help="JSON output")
    proof_parser.add_argument("--debug", action="store_true", help="Debug mode")
    proof_parser.set_defaults(func=proof.proof_cmd)

    # --- verify command ---
    verify_parser = subparsers.add_parser(
        "verify",
        help="Verify an (address, amount) claim against an artifact",
        description="Re-encode the claim, fold its stored proof and compare with the stored root.",
    )
    verify_parser.add_argument("address", type=str, help="0x-prefixed address")
    verify_parser.add_argument("amount", type=str, help="Claimed amount (decimal)")
    verify_parser.add_argument(
        "--artifact", "-a",
        type=str,
        default=None,
        help="Artifact path (default: from config)",
    )
    verify_parser.add_argument("--json", action="store_true", help="JSON output")
    verify_parser.add_argument("--debug", action="store_true", help="Debug mode")
    verify_parser.set_defaults(func=verify.verify_cmd)

    # --- sample command ---
    sample_parser = subparsers.add_parser(
        "sample",
        help="Write a sample entitlement file",
    )
    sample_parser.add_argument("--out", "-o", type=str, default="sample.csv", help="Output path")
    sample_parser.add_argument("--force", action="store_true", help="Overwrite an existing file")
    sample_parser.set_defaults(func=sample.sample_cmd)

    # --- config command ---
    config_parser = subparsers.add_parser(
        "config",
        help="Manage CLI configuration",
        description="Initialize or display configuration.",
    )
    config_parser.add_argument(
        "--init",
        action="store_true",
        default=False,
        help="Create a template configuration file",
    )
    config_parser.add_argument(
        "--show",
        action="store_true",
        default=False,
        help="Show current configuration",
    )
    config_parser.add_argument(
        "--path",
        type=str,
        default=DEFAULT_CONFIG_FILE,
        help=f"Path for config file (default: {DEFAULT_CONFIG_FILE})",
    )
    config_parser.set_defaults(func=config_cmd)

    return parser


def config_cmd(args: argparse.Namespace) -> int:
    """Handle config command."""
    if args.init:
        config_path = Path(args.path)
        if config_path.exists():
            print(f"Error: Config file already exists: {config_path}", file=sys.stderr)
            return EXIT_RUNTIME_ERROR

        config_path.write_text(get_default_config_template())
        print(f"Created configuration file: {config_path}")
        print("\nEdit this file to configure your settings.")
        print("You can also use environment variables (MERKLEGEN_* prefix).")
        return EXIT_SUCCESS

    if args.show:
        print(json.dumps(config_to_dict(args.cli_config), indent=2))
        return EXIT_SUCCESS

    print("Usage: merklegen config [--init|--show]")
    print("  --init  Create a template configuration file")
    print("  --show  Show current configuration")
    return EXIT_SUCCESS


def main(argv: Sequence[str] | None = None) -> int:
    """
    Main entry point for the CLI.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0=success, 1=error, 2=verification failed)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return EXIT_RUNTIME_ERROR

    try:
        config = load_config(args.config)
    except Exception as e:
        print(f"Error loading configuration: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    log_level = args.log_level or config.log_level
    try:
        setup_logging(level=log_level, log_file=config.log_file)
    except OSError as e:
        print(f"Error opening log file: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    # Attach config to args for commands to use
    args.cli_config = config

    try:
        return args.func(args)
    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        return EXIT_RUNTIME_ERROR
    except Exception as e:
        if getattr(args, "debug", False):
            traceback.print_exc()
        else:
            print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR


if __name__ == "__main__":
    sys.exit(main())
