"""
Artifact IO
File: io.py

Purpose: Build the proof artifact from a tree and save/load it to/from disk.

Writes are atomic: the JSON is written to a temporary file next to the
target, fsynced, then renamed over the target. A failed write leaves no
file behind.
"""

from __future__ import annotations

import contextlib
import hashlib
import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from core.crypto.hashing import to_hex
from core.merkle.merkle_proofs import EntitlementTree
from core.schemas.artifact import ProofArtifact, ProofEntry
from core.schemas.errors import ArtifactFormatError, WriteError


logger = logging.getLogger(__name__)


def build_artifact(tree: EntitlementTree) -> ProofArtifact:
    """
    Assemble the artifact for a built tree.

    Proof entries follow the input order of the tree's records so that
    re-running on the same file reproduces the artifact byte for byte.
    """
    proofs: dict[str, ProofEntry] = {}
    for record in tree.records:
        proofs[record.address] = ProofEntry(
            amount=str(record.amount),
            proof=tree.hex_proof_for(record.address),
        )
    return ProofArtifact(root=tree.hex_root, proofs=proofs)


def dump_json(artifact: ProofArtifact, indent: Optional[str] = "\t") -> str:
    """Serialize an artifact to JSON text, keeping field and entry order."""
    data = artifact.model_dump(mode="json")
    return json.dumps(data, indent=indent, ensure_ascii=False) + "\n"


def compute_sha256(data: bytes) -> str:
    """Compute SHA-256 hex digest of data."""
    return hashlib.sha256(data).hexdigest()


def _atomic_write_bytes(path: Path, data: bytes) -> None:
    """Write bytes to path via temp file + rename. Raises OSError."""
    tmp_path: Path | None = None
    try:
        fd, tmp_name = tempfile.mkstemp(
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
        )
        tmp_path = Path(tmp_name)
        with os.fdopen(fd, "wb") as f:
            f.write(data)
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp_path, path)
        tmp_path = None
    finally:
        if tmp_path is not None:
            with contextlib.suppress(OSError):
                tmp_path.unlink()


def save_artifact(
    artifact: ProofArtifact,
    out_path: str | Path,
    *,
    indent: Optional[str] = "\t",
) -> tuple[str, int]:
    """
    Write the artifact to out_path exactly once, atomically.

    Args:
        artifact: The artifact to save
        out_path: Destination file
        indent: JSON indent (None for compact)

    Returns:
        (sha256, size) of the written bytes

    Raises:
        WriteError: On any I/O failure; nothing is left at out_path
    """
    path = Path(out_path)
    data = dump_json(artifact, indent=indent).encode("utf-8")

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        _atomic_write_bytes(path, data)
    except OSError as e:
        raise WriteError(f"Failed to write artifact to {path}: {e}", path=str(path)) from e

    sha256 = compute_sha256(data)
    logger.info(f"Wrote artifact {path} ({len(data)} bytes, sha256={sha256})")
    return sha256, len(data)


def load_artifact(path: str | Path) -> ProofArtifact:
    """
    Load and validate a proof artifact.

    Raises:
        ArtifactFormatError: If the file is not a valid artifact
        OSError: If the file cannot be read
    """
    path = Path(path)
    raw = path.read_bytes()
    try:
        data = json.loads(raw.decode("utf-8"))
        return ProofArtifact.model_validate(data)
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise ArtifactFormatError(f"Artifact is not valid JSON: {e}", path=str(path)) from e
    except ValidationError as e:
        raise ArtifactFormatError(
            f"Artifact does not match the proof artifact schema: {e.error_count()} error(s)",
            path=str(path),
            details={"errors": [err["msg"] for err in e.errors()]},
        ) from e


__all__ = [
    "build_artifact",
    "dump_json",
    "compute_sha256",
    "save_artifact",
    "load_artifact",
]
