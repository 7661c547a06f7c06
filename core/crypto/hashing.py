"""
Hashing Utilities
Keccak-256 hashing and hex helpers for Merkle commitments.

This module provides:
- Keccak-256 hashing for raw bytes (the EVM's native hash)
- Hex encoding/decoding with 0x prefix

Security/Determinism Notes:
- Keccak-256 is NOT hashlib.sha3_256 (different padding); always go
  through eth_utils.keccak so digests match what a contract computes
- Always hash raw bytes exactly as specified
- All operations are deterministic
"""
from __future__ import annotations

from eth_utils import keccak


# Width in bytes of every digest produced here
DIGEST_SIZE = 32


def keccak256(data: bytes) -> bytes:
    """
    Compute Keccak-256 hash of raw bytes.

    Args:
        data: Raw bytes to hash

    Returns:
        32-byte Keccak-256 digest

    Example:
        >>> keccak256(b"").hex()
        'c5d2460186f7233c927e7db2dcc703c0e500b653ca82273b7bfad8045d85a470'
    """
    return keccak(primitive=data)


def hash_bytes(data: bytes) -> bytes:
    """Alias for keccak256()."""
    return keccak256(data)


def to_hex(data: bytes) -> str:
    """
    Convert bytes to lower-case hexadecimal string with 0x prefix.

    Example:
        >>> to_hex(bytes.fromhex("deadbeef"))
        '0xdeadbeef'
    """
    return "0x" + data.hex()


def from_hex(hex_string: str) -> bytes:
    """
    Convert hexadecimal string (with 0x prefix) to bytes.

    Args:
        hex_string: Hex string with 0x prefix

    Returns:
        Decoded bytes

    Raises:
        ValueError: If string doesn't start with 0x, has odd length,
                   or contains invalid hex characters
    """
    if not hex_string.startswith("0x"):
        raise ValueError(
            f"Hex string must start with '0x' prefix, got: {hex_string[:10]}..."
        )

    hex_content = hex_string[2:]

    if len(hex_content) % 2 != 0:
        raise ValueError(
            f"Hex string must have even length after 0x prefix, "
            f"got length {len(hex_content)}"
        )

    try:
        return bytes.fromhex(hex_content)
    except ValueError as e:
        raise ValueError(f"Invalid hex characters in string: {e}") from e


def hash_concat(left: bytes, right: bytes) -> bytes:
    """
    Hash the concatenation of two byte sequences: keccak256(left + right).

    Order is taken as given; see core.merkle.merkle_tree.merkle_parent
    for the sorted-pair variant used inside the tree.
    """
    return keccak256(left + right)


__all__ = [
    "DIGEST_SIZE",
    "keccak256",
    "hash_bytes",
    "to_hex",
    "from_hex",
    "hash_concat",
]
