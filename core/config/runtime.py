"""
Runtime Configuration

Central configuration for a generation run: where to read entitlements,
where to write the artifact, and how to build it.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Optional

from dotenv import load_dotenv

load_dotenv()


ENV_PREFIX = "MERKLEGEN_"

DEFAULT_INPUT_PATH = "scripts/user_points.csv"
DEFAULT_OUTPUT_PATH = "whitelist-proofs.json"


_TRUE_VALUES = ("1", "true", "yes", "on")
_FALSE_VALUES = ("0", "false", "no", "off")


def parse_bool(value: str | bool) -> bool:
    """
    Interpret a boolean setting from the environment or a config file.

    Accepts a real bool, or one of 1/true/yes/on and 0/false/no/off
    (case-insensitive).

    Raises:
        ValueError: For any other value
    """
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        text = value.strip().lower()
        if text in _TRUE_VALUES:
            return True
        if text in _FALSE_VALUES:
            return False
    raise ValueError(f"Invalid boolean setting: {value!r}")


def env_bool(name: str, default: bool) -> bool:
    """Read a boolean environment variable; unset or empty gives default."""
    value = os.getenv(name)
    if value is None or value.strip() == "":
        return default
    return parse_bool(value)


@dataclass
class InputConfig:
    """Configuration for the input parser."""
    path: str = DEFAULT_INPUT_PATH
    encoding: str = "utf-8"
    has_header: bool = True


@dataclass
class ArtifactConfig:
    """Configuration for the artifact writer."""
    path: str = DEFAULT_OUTPUT_PATH
    indent: Optional[str] = "\t"  # None for compact output


@dataclass
class BuildConfig:
    """Configuration for tree construction."""
    workers: int = 1  # >1 hashes leaves on a thread pool
    verify_proofs: bool = True  # fold every proof before writing

    def __post_init__(self):
        if self.workers < 1:
            raise ValueError(f"workers must be >= 1, got {self.workers}")


@dataclass
class RuntimeConfig:
    """
    Complete runtime configuration for a generation run.

    Can be loaded from:
    - Environment variables (and a .env file)
    - Programmatic construction
    """
    input: InputConfig = field(default_factory=InputConfig)
    artifact: ArtifactConfig = field(default_factory=ArtifactConfig)
    build: BuildConfig = field(default_factory=BuildConfig)

    @staticmethod
    def from_env() -> "RuntimeConfig":
        """Load configuration from MERKLEGEN_* environment variables."""
        config = RuntimeConfig()

        config.input.path = os.getenv(f"{ENV_PREFIX}INPUT", config.input.path)
        config.input.encoding = os.getenv(f"{ENV_PREFIX}INPUT_ENCODING", config.input.encoding)
        config.input.has_header = env_bool(f"{ENV_PREFIX}HAS_HEADER", config.input.has_header)

        config.artifact.path = os.getenv(f"{ENV_PREFIX}OUTPUT", config.artifact.path)
        indent = os.getenv(f"{ENV_PREFIX}ARTIFACT_INDENT")
        if indent is not None:
            config.artifact.indent = parse_indent(indent)

        workers = os.getenv(f"{ENV_PREFIX}WORKERS")
        if workers:
            config.build = BuildConfig(
                workers=int(workers),
                verify_proofs=config.build.verify_proofs,
            )
        config.build.verify_proofs = env_bool(
            f"{ENV_PREFIX}VERIFY_PROOFS", config.build.verify_proofs
        )

        return config


def parse_indent(value: str | int | None) -> Optional[str]:
    """
    Interpret an indent setting.

    "tab" or "\\t" -> tab, a number -> that many spaces,
    "none" or "" -> compact.
    """
    if value is None:
        return None
    if isinstance(value, int):
        return " " * value if value > 0 else None
    if value == "\t":
        return "\t"
    text = value.strip().lower()
    if text in ("", "none", "compact"):
        return None
    if text in ("tab", "\\t"):
        return "\t"
    if text.isdigit():
        n = int(text)
        return " " * n if n > 0 else None
    raise ValueError(f"Invalid artifact indent: {value!r}")
