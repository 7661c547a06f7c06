"""
Artifact IO

Provides functionality for building, saving, and loading the proof artifact.
"""

from orchestrator.artifacts.io import (
    build_artifact,
    dump_json,
    compute_sha256,
    save_artifact,
    load_artifact,
)

__all__ = [
    "build_artifact",
    "dump_json",
    "compute_sha256",
    "save_artifact",
    "load_artifact",
]
