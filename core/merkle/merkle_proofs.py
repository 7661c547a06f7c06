"""
Merkle Proofs for Entitlements
Address-keyed wrappers around the core Merkle tree functions.

This module provides class-based interfaces:
- EntitlementTree: Build a tree from records, look up proofs by address
- MerkleVerifier: Check an (address, amount, proof) claim against a root
"""
from __future__ import annotations

import logging
from typing import Sequence

from core.crypto.hashing import from_hex, to_hex
from core.merkle.leaves import hash_leaf, hash_leaves
from core.merkle.merkle_tree import (
    MerkleProof,
    build_merkle_levels,
    build_merkle_proof,
    compute_tree_depth,
    verify_merkle_proof,
)
from core.schemas.errors import AddressNotFoundError, EmptyInputError
from core.schemas.records import EntitlementRecord


logger = logging.getLogger(__name__)


class EntitlementTree:
    """
    A built Merkle tree over a set of entitlement records.

    The records keep their input order; the tree itself is built over the
    byte-sorted leaves, so the root and every proof are independent of
    that order.

    Example:
        >>> tree = EntitlementTree.from_records(records)
        >>> proof = tree.proof_for("0xaaaa...01")
        >>> proof.verify()
        True
    """

    def __init__(
        self,
        records: Sequence[EntitlementRecord],
        leaves: Sequence[bytes],
    ) -> None:
        if len(records) == 0:
            raise EmptyInputError()
        if len(records) != len(leaves):
            raise ValueError(
                f"Got {len(leaves)} leaves for {len(records)} records"
            )

        self.records: tuple[EntitlementRecord, ...] = tuple(records)
        self.levels: list[list[bytes]] = build_merkle_levels(leaves)

        position = {leaf: i for i, leaf in enumerate(self.levels[0])}
        self._leaf_by_address: dict[str, bytes] = {}
        self._index_by_address: dict[str, int] = {}
        for record, leaf in zip(self.records, leaves):
            self._leaf_by_address[record.address] = leaf
            self._index_by_address[record.address] = position[leaf]

        logger.debug(
            f"Built tree with {len(self.records)} leaves, depth {self.depth}"
        )

    @classmethod
    def from_records(
        cls,
        records: Sequence[EntitlementRecord],
        workers: int = 1,
    ) -> "EntitlementTree":
        """
        Hash records into leaves and build the tree.

        Raises:
            EmptyInputError: If records is empty
        """
        if len(records) == 0:
            raise EmptyInputError()
        return cls(records, hash_leaves(records, workers=workers))

    @property
    def root(self) -> bytes:
        """32-byte Merkle root."""
        return self.levels[-1][0]

    @property
    def hex_root(self) -> str:
        return to_hex(self.root)

    @property
    def depth(self) -> int:
        return compute_tree_depth(len(self.levels[0]))

    def __len__(self) -> int:
        return len(self.records)

    def __contains__(self, address: object) -> bool:
        return isinstance(address, str) and address.strip().lower() in self._leaf_by_address

    def leaf_for(self, address: str) -> bytes:
        """
        Leaf digest committed for an address.

        Raises:
            AddressNotFoundError: If the address is not in the tree
        """
        key = address.strip().lower()
        try:
            return self._leaf_by_address[key]
        except KeyError:
            raise AddressNotFoundError(key) from None

    def proof_for(self, address: str) -> MerkleProof:
        """
        Inclusion proof for an address.

        Raises:
            AddressNotFoundError: If the address is not in the tree
        """
        key = address.strip().lower()
        try:
            index = self._index_by_address[key]
        except KeyError:
            raise AddressNotFoundError(key) from None
        return build_merkle_proof(self.levels, index)

    def hex_proof_for(self, address: str) -> list[str]:
        """Sibling path for an address as 0x-hex strings, leaf to root."""
        return [to_hex(s) for s in self.proof_for(address).siblings]


class MerkleVerifier:
    """
    Verifies entitlement claims the way the on-chain contract does.

    Example:
        >>> MerkleVerifier.verify_claim(address, 100, proof_hex, root_hex)
        True
    """

    @staticmethod
    def verify(proof: MerkleProof) -> bool:
        """Verify a MerkleProof against its own root."""
        return proof.verify()

    @staticmethod
    def verify_leaf_in_root(
        leaf: bytes,
        siblings: Sequence[bytes],
        root: bytes,
    ) -> bool:
        """Verify a leaf is included in a Merkle root using raw components."""
        return verify_merkle_proof(leaf, siblings, root)

    @staticmethod
    def verify_claim(
        address: str,
        amount: int,
        proof: Sequence[str],
        root: str,
    ) -> bool:
        """
        Re-encode an (address, amount) claim and fold its hex proof.

        Args:
            address: 0x-prefixed address, any case
            amount: Claimed amount
            proof: Sibling digests as 0x-hex, leaf to root
            root: Merkle root as 0x-hex

        Returns:
            True if the claim is committed under root
        """
        leaf = hash_leaf(EntitlementRecord(address=address, amount=amount))
        return verify_merkle_proof(
            leaf,
            [from_hex(s) for s in proof],
            from_hex(root),
        )


__all__ = [
    "EntitlementTree",
    "MerkleVerifier",
]
