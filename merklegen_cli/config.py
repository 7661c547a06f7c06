"""
CLI Configuration

Configuration management for the merklegen CLI.
Supports environment variables and configuration files.
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

from core.config.runtime import (
    DEFAULT_INPUT_PATH,
    DEFAULT_OUTPUT_PATH,
    ENV_PREFIX,
    ArtifactConfig,
    BuildConfig,
    InputConfig,
    RuntimeConfig,
    env_bool,
    parse_bool,
    parse_indent,
)


DEFAULT_CONFIG_FILE = "merklegen.json"


@dataclass
class CLIConfig:
    """Main CLI configuration."""

    # Input
    input_path: str = DEFAULT_INPUT_PATH
    input_encoding: str = "utf-8"
    has_header: bool = True

    # Output
    output_path: str = DEFAULT_OUTPUT_PATH
    artifact_indent: Optional[str] = "\t"

    # Build
    workers: int = 1
    verify_proofs: bool = True

    # Logging
    log_level: str = "INFO"
    log_file: str | None = None

    def to_runtime_config(self) -> RuntimeConfig:
        """Build the RuntimeConfig handed to the pipeline."""
        return RuntimeConfig(
            input=InputConfig(
                path=self.input_path,
                encoding=self.input_encoding,
                has_header=self.has_header,
            ),
            artifact=ArtifactConfig(
                path=self.output_path,
                indent=self.artifact_indent,
            ),
            build=BuildConfig(
                workers=self.workers,
                verify_proofs=self.verify_proofs,
            ),
        )


def _apply(config: CLIConfig, data: dict[str, Any]) -> None:
    config.input_path = data.get("input_path", config.input_path)
    config.input_encoding = data.get("input_encoding", config.input_encoding)
    if "has_header" in data:
        config.has_header = parse_bool(data["has_header"])
    config.output_path = data.get("output_path", config.output_path)
    if "artifact_indent" in data:
        config.artifact_indent = parse_indent(data["artifact_indent"])
    config.workers = int(data.get("workers", config.workers))
    if "verify_proofs" in data:
        config.verify_proofs = parse_bool(data["verify_proofs"])
    config.log_level = data.get("log_level", config.log_level)
    config.log_file = data.get("log_file", config.log_file)


def load_config_from_file(path: Path) -> CLIConfig:
    """Load configuration from a JSON file."""
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    with open(path, "r") as f:
        data = json.load(f)

    config = CLIConfig()
    _apply(config, data)
    return config


def load_config_from_env(config: CLIConfig | None = None) -> CLIConfig:
    """
    Overlay MERKLEGEN_* environment variables onto config.

    Only variables that are set take effect.
    """
    config = config or CLIConfig()

    if os.getenv(f"{ENV_PREFIX}INPUT"):
        config.input_path = os.getenv(f"{ENV_PREFIX}INPUT", config.input_path)
    if os.getenv(f"{ENV_PREFIX}INPUT_ENCODING"):
        config.input_encoding = os.getenv(f"{ENV_PREFIX}INPUT_ENCODING", config.input_encoding)
    config.has_header = env_bool(f"{ENV_PREFIX}HAS_HEADER", config.has_header)
    if os.getenv(f"{ENV_PREFIX}OUTPUT"):
        config.output_path = os.getenv(f"{ENV_PREFIX}OUTPUT", config.output_path)
    if os.getenv(f"{ENV_PREFIX}ARTIFACT_INDENT") is not None:
        config.artifact_indent = parse_indent(os.getenv(f"{ENV_PREFIX}ARTIFACT_INDENT"))
    if os.getenv(f"{ENV_PREFIX}WORKERS"):
        config.workers = int(os.getenv(f"{ENV_PREFIX}WORKERS", "1"))
    config.verify_proofs = env_bool(f"{ENV_PREFIX}VERIFY_PROOFS", config.verify_proofs)
    if os.getenv(f"{ENV_PREFIX}LOG_LEVEL"):
        config.log_level = os.getenv(f"{ENV_PREFIX}LOG_LEVEL", "INFO")
    if os.getenv(f"{ENV_PREFIX}LOG_FILE"):
        config.log_file = os.getenv(f"{ENV_PREFIX}LOG_FILE")

    return config


def load_config(config_path: Path | None = None) -> CLIConfig:
    """
    Load configuration from file and/or environment.

    Environment variables override file settings.

    Args:
        config_path: Optional path to config file

    Returns:
        Merged configuration
    """
    config = CLIConfig()

    if config_path is not None:
        config = load_config_from_file(config_path)
    else:
        default_paths = [
            Path.cwd() / DEFAULT_CONFIG_FILE,
            Path.cwd() / f".{DEFAULT_CONFIG_FILE}",
            Path.home() / ".config" / "merklegen" / "config.json",
        ]
        for default_path in default_paths:
            if default_path.exists():
                config = load_config_from_file(default_path)
                break

    return load_config_from_env(config)


def config_to_dict(config: CLIConfig) -> dict[str, Any]:
    """Serializable view of a configuration (for `config --show`)."""
    indent = config.artifact_indent
    if indent == "\t":
        indent_repr: Any = "tab"
    elif indent is None:
        indent_repr = "none"
    else:
        indent_repr = len(indent)
    return {
        "input_path": config.input_path,
        "input_encoding": config.input_encoding,
        "has_header": config.has_header,
        "output_path": config.output_path,
        "artifact_indent": indent_repr,
        "workers": config.workers,
        "verify_proofs": config.verify_proofs,
        "log_level": config.log_level,
        "log_file": config.log_file,
    }


def get_default_config_template() -> str:
    """Get a template configuration file."""
    return json.dumps(config_to_dict(CLIConfig()), indent=2) + "\n"
