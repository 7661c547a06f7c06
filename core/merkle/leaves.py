"""
Merkle Leaves
Canonical leaf encoding for entitlement records.

Leaf rule (matches Solidity):
    leaf = keccak256(abi.encodePacked(address account, uint256 amount))

The encoding is tight-packed with fixed widths (20 + 32 bytes), so two
different (address, amount) pairs can never share an encoding.
"""
from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Sequence

from core.crypto.hashing import keccak256
from core.schemas.records import ADDRESS_SIZE, AMOUNT_SIZE, EntitlementRecord


logger = logging.getLogger(__name__)

LEAF_ENCODING_SIZE = ADDRESS_SIZE + AMOUNT_SIZE


def encode_leaf(record: EntitlementRecord) -> bytes:
    """
    Encode a record as address bytes followed by a big-endian uint256 amount.

    Returns:
        52 bytes
    """
    return record.address_bytes + record.amount.to_bytes(AMOUNT_SIZE, byteorder="big")


def hash_leaf(record: EntitlementRecord) -> bytes:
    """Leaf digest of a record: keccak256(encode_leaf(record))."""
    return keccak256(encode_leaf(record))


def hash_leaves(records: Sequence[EntitlementRecord], workers: int = 1) -> list[bytes]:
    """
    Hash every record, preserving input order.

    With workers > 1 the records are hashed on a thread pool. The
    result is identical to the single-threaded path.
    """
    if workers <= 1 or len(records) < 2:
        return [hash_leaf(r) for r in records]

    logger.debug(f"Hashing {len(records)} leaves on {workers} workers")
    chunksize = max(1, len(records) // (workers * 4))
    with ThreadPoolExecutor(max_workers=workers) as pool:
        return list(pool.map(hash_leaf, records, chunksize=chunksize))


__all__ = [
    "LEAF_ENCODING_SIZE",
    "encode_leaf",
    "hash_leaf",
    "hash_leaves",
]
