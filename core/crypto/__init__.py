"""
Core cryptographic utilities.

Keccak-256 hashing and 0x-hex helpers.
"""
from .hashing import (
    DIGEST_SIZE,
    keccak256,
    hash_bytes,
    to_hex,
    from_hex,
    hash_concat,
)

__all__ = [
    "DIGEST_SIZE",
    "keccak256",
    "hash_bytes",
    "to_hex",
    "from_hex",
    "hash_concat",
]
