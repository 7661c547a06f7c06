"""
Runtime Configuration Module

Provides configuration loading and management for merklegen runs.
"""

from .runtime import (
    ENV_PREFIX,
    DEFAULT_INPUT_PATH,
    DEFAULT_OUTPUT_PATH,
    ArtifactConfig,
    BuildConfig,
    InputConfig,
    RuntimeConfig,
    env_bool,
    parse_bool,
    parse_indent,
)

__all__ = [
    "ENV_PREFIX",
    "DEFAULT_INPUT_PATH",
    "DEFAULT_OUTPUT_PATH",
    "ArtifactConfig",
    "BuildConfig",
    "InputConfig",
    "RuntimeConfig",
    "env_bool",
    "parse_bool",
    "parse_indent",
]
