"""
Merkle Tree Implementation
Deterministic sorted-pair Merkle tree construction, proof generation,
and verification.

This module provides:
- Canonical leaf ordering (leaves sorted by raw byte value)
- Level-by-level tree construction kept as an array of levels
- Merkle proof generation for any leaf index
- Merkle proof verification using the sorted-pair rule

Canonical Commitment Rules (Hard Contracts):
1. Leaf ordering: leaves are sorted lexicographically by raw bytes before
   building. Input order never affects the root.
2. Parent hashing: parent = keccak256(min(a, b) + max(a, b))
   - A verifier never needs left/right positions; it sorts locally
   - This is the walk performed by OpenZeppelin's MerkleProof.verify
3. Odd node rule: an unpaired last node is promoted to the next level
   unchanged. It is NOT hashed with itself, and no sibling is recorded
   for it, so proofs through a promoted node are one element shorter.
4. Empty leaves: EmptyInputError
5. Single leaf: root = leaf, empty proof

Layout Notes:
- levels[0] holds the sorted leaves, levels[-1] == [root]
- sibling index = i ^ 1, parent index = i // 2
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from core.crypto.hashing import DIGEST_SIZE, hash_concat
from core.schemas.errors import EmptyInputError


@dataclass(frozen=True)
class MerkleProof:
    """
    A Merkle proof for a single leaf in a sorted-pair Merkle tree.

    Attributes:
        leaf: The leaf digest being proven
        index: Position of the leaf among the sorted leaves
        siblings: Sibling digests from leaf level to root
        root: The Merkle root this proof is against
    """
    leaf: bytes
    index: int
    siblings: list[bytes]
    root: bytes

    def __post_init__(self) -> None:
        if self.index < 0:
            raise ValueError(f"Leaf index must be non-negative, got {self.index}")

    def verify(self) -> bool:
        """Fold the siblings onto the leaf and compare with the root."""
        return verify_merkle_proof(self.leaf, self.siblings, self.root)


def merkle_parent(a: bytes, b: bytes) -> bytes:
    """
    Compute the parent hash of two child nodes with the sorted-pair rule.

    parent = keccak256(min(a, b) + max(a, b))

    The result does not depend on argument order.
    """
    if b < a:
        a, b = b, a
    return hash_concat(a, b)


def sort_leaves(leaves: Sequence[bytes]) -> list[bytes]:
    """Return leaves in canonical (byte-lexicographic) order."""
    return sorted(leaves)


def build_merkle_levels(leaves: Sequence[bytes]) -> list[list[bytes]]:
    """
    Build every level of the tree from a sequence of leaf digests.

    Algorithm:
    1. Sort the leaves by raw byte value
    2. Pair adjacent nodes and compute parent hashes
    3. If a level has an odd count, carry the last node up unchanged
    4. Repeat until a single root remains

    Example: sorted [a, b, c] -> [[a, b, c], [parent(a,b), c], [parent(parent(a,b), c)]]

    Args:
        leaves: Leaf digests in any order (32 bytes each)

    Returns:
        List of levels, leaves first, root level last

    Raises:
        EmptyInputError: If leaves is empty
        ValueError: If a leaf is not a 32-byte digest
    """
    if len(leaves) == 0:
        raise EmptyInputError("Cannot build a Merkle tree with no leaves")

    for leaf in leaves:
        if len(leaf) != DIGEST_SIZE:
            raise ValueError(f"Leaf must be {DIGEST_SIZE} bytes, got {len(leaf)}")

    current_level = sort_leaves(leaves)
    levels: list[list[bytes]] = [current_level]

    while len(current_level) > 1:
        next_level: list[bytes] = []
        for i in range(0, len(current_level) - 1, 2):
            next_level.append(merkle_parent(current_level[i], current_level[i + 1]))

        # Promote the unpaired last node
        if len(current_level) % 2 == 1:
            next_level.append(current_level[-1])

        levels.append(next_level)
        current_level = next_level

    return levels


def build_merkle_root(leaves: Sequence[bytes]) -> bytes:
    """
    Build the Merkle root for a sequence of leaf digests.

    Raises:
        EmptyInputError: If leaves is empty
    """
    return build_merkle_levels(leaves)[-1][0]


def build_merkle_proof(levels: Sequence[Sequence[bytes]], index: int) -> MerkleProof:
    """
    Generate a Merkle proof for the leaf at the given sorted position.

    At each level the sibling is at index ^ 1. When that index falls past
    the end of the level the node was promoted and nothing is recorded.

    Args:
        levels: Output of build_merkle_levels
        index: 0-based position of the leaf in levels[0]

    Returns:
        MerkleProof with leaf, index, siblings (leaf to root), and root

    Raises:
        IndexError: If index is out of range
        EmptyInputError: If levels is empty
    """
    if len(levels) == 0 or len(levels[0]) == 0:
        raise EmptyInputError("Cannot generate proof for an empty tree")

    leaves = levels[0]
    if index < 0 or index >= len(leaves):
        raise IndexError(
            f"Leaf index {index} out of range for {len(leaves)} leaves"
        )

    siblings: list[bytes] = []
    current_index = index

    for level in levels[:-1]:
        sibling_index = current_index ^ 1
        if sibling_index < len(level):
            siblings.append(level[sibling_index])
        current_index //= 2

    return MerkleProof(
        leaf=leaves[index],
        index=index,
        siblings=siblings,
        root=levels[-1][0],
    )


def verify_merkle_proof(leaf: bytes, siblings: Sequence[bytes], root: bytes) -> bool:
    """
    Verify a sorted-pair Merkle proof.

    Recomputes the root from the leaf by combining it with each sibling
    using merkle_parent, then compares against the claimed root. No
    position information is needed.

    Returns:
        True if the proof is valid, False otherwise
    """
    current_hash = leaf
    for sibling in siblings:
        current_hash = merkle_parent(current_hash, sibling)
    return current_hash == root


def compute_tree_depth(num_leaves: int) -> int:
    """
    Compute the number of levels of a tree with the given number of leaves.

    A single leaf has depth 1, two or three leaves depth 2, and so on.
    Returns 0 for an empty tree.
    """
    if num_leaves <= 0:
        return 0

    depth = 1
    n = num_leaves
    while n > 1:
        n = (n + 1) // 2
        depth += 1

    return depth


__all__ = [
    "MerkleProof",
    "merkle_parent",
    "sort_leaves",
    "build_merkle_levels",
    "build_merkle_root",
    "build_merkle_proof",
    "verify_merkle_proof",
    "compute_tree_depth",
]
