"""
Merkle Tree and Commitments
Deterministic sorted-pair Merkle tree construction + proof generation/verification
for (address, amount) entitlements.

This module provides:
- encode_leaf / hash_leaf: Canonical leaf encoding and hashing
- build_merkle_levels / build_merkle_root: Build the tree from leaf digests
- build_merkle_proof: Generate proof for a specific leaf
- verify_merkle_proof: Verify a proof against its claimed root
- EntitlementTree: Address-keyed tree over entitlement records

Canonical Commitment Rules:
1. Leaf hashing: keccak256(address (20 bytes) || amount (uint256, big-endian))
2. Leaf ordering: leaves sorted by raw bytes before building
3. Parent hashing: keccak256(min(a, b) || max(a, b))
4. Odd node: last node promoted unchanged
5. Empty tree: EmptyInputError
6. Single leaf: root = leaf

Usage:
    from core.merkle import EntitlementTree

    tree = EntitlementTree.from_records(records)
    root = tree.hex_root
    proof = tree.hex_proof_for("0x1111111111111111111111111111111111111111")
"""
from .merkle_tree import (
    MerkleProof,
    merkle_parent,
    sort_leaves,
    build_merkle_levels,
    build_merkle_root,
    build_merkle_proof,
    verify_merkle_proof,
    compute_tree_depth,
)

from .leaves import (
    LEAF_ENCODING_SIZE,
    encode_leaf,
    hash_leaf,
    hash_leaves,
)

from .merkle_proofs import (
    EntitlementTree,
    MerkleVerifier,
)


__all__ = [
    # Core types
    "MerkleProof",
    "LEAF_ENCODING_SIZE",
    # Core functions
    "merkle_parent",
    "sort_leaves",
    "build_merkle_levels",
    "build_merkle_root",
    "build_merkle_proof",
    "verify_merkle_proof",
    "compute_tree_depth",
    "encode_leaf",
    "hash_leaf",
    "hash_leaves",
    # Convenience classes
    "EntitlementTree",
    "MerkleVerifier",
]
