"""
Merkle Commitment over the Additive Combiner.

The tree is built bottom-up from a fixed leaf list:

    level 0:  l0   l1   l2   l3   l4
    level 1:  c(l0,l1)  c(l2,l3)  l4      ← odd node carried forward
    level 2:  c(c01,c23)  l4
    level 3:  root

No padding is added; an odd trailing node moves up unchanged, and no path
entry is recorded for it at that level.

A path is the list of (sibling, current_is_left) pairs from leaf to root.
verify_path() replays it to rebuild the root.

Example:
    >>> tree = MerkleCommitment([1, 2, 3, 4, 5])
    >>> tree.root
    15
    >>> path = tree.merkle_path(4)
    >>> verify_path(5, path, tree.root)
    True
"""

from __future__ import annotations
from typing import List, Sequence, Tuple
import logging

import numpy as np

from ..common.field import FieldElement
from ..config import COMMITMENT_PRIME
from .combiner import combine, apply_hash as _apply_hash

logger = logging.getLogger(__name__)

MerklePath = List[Tuple[int, bool]]


def _next_level(nodes: Sequence[int], prime: int) -> List[int]:
    """Combine adjacent pairs; an odd last node is carried forward."""
    n_pairs = len(nodes) // 2
    pairs = np.array(nodes[:2 * n_pairs], dtype=object).reshape(n_pairs, 2)
    combined = [int(v) for v in (pairs[:, 0] + pairs[:, 1]) % prime] if n_pairs else []
    if len(nodes) % 2:
        combined.append(int(nodes[-1]))
    return combined


class MerkleCommitment:
    """
    A Merkle tree built once from a fixed set of leaves.

    Not designed for incremental updates: changing the leaves means
    building a new tree.

    Attributes:
        leaves: Leaf values in order
        root: Root of the tree
        prime: Modulus of the combiner
    """

    def __init__(self, leaves: Sequence[int], prime: int = COMMITMENT_PRIME):
        self.prime = prime
        self.leaves: List[int] = [int(leaf) for leaf in leaves]
        self.root = self.compute_root(self.leaves, prime)

    def __len__(self) -> int:
        return len(self.leaves)

    def __repr__(self) -> str:
        return f"MerkleCommitment(leaves={len(self.leaves)}, root={self.root})"

    @staticmethod
    def hash(left: int, right: int, prime: int = COMMITMENT_PRIME) -> int:
        """The node combiner: (left + right) mod prime."""
        return combine(left, right, prime)

    @staticmethod
    def compute_root(leaves: Sequence[int], prime: int = COMMITMENT_PRIME) -> int:
        """
        Reduce level by level until one node remains.

        Raises:
            ValueError: If there are no leaves
        """
        if not leaves:
            raise ValueError("Merkle tree needs at least one leaf")

        nodes = list(leaves)
        while len(nodes) > 1:
            nodes = _next_level(nodes, prime)
        return nodes[0]

    def merkle_path(self, index: int) -> MerklePath:
        """
        Sibling path from leaf `index` to the root.

        Each entry is (sibling value, True if the current node is the left
        child). Levels where the current node has no sibling contribute
        nothing.

        Raises:
            IndexError: If index is out of range
        """
        if not 0 <= index < len(self.leaves):
            raise IndexError(f"Leaf {index} out of range ({len(self.leaves)} leaves)")

        path: MerklePath = []
        current = index
        nodes = self.leaves

        while len(nodes) > 1:
            sibling = current + 1 if current % 2 == 0 else current - 1
            if sibling < len(nodes):
                path.append((nodes[sibling], current % 2 == 0))
            current //= 2
            nodes = _next_level(nodes, self.prime)

        return path

    def verify(self, index: int) -> bool:
        """Check leaf `index` against the root via its own path."""
        return verify_path(self.leaves[index], self.merkle_path(index), self.root, self.prime)

    def apply_hash(self, a: FieldElement, b: FieldElement) -> FieldElement:
        """Combine two field elements; moduli must match."""
        return _apply_hash(a, b)


def root_from_path(leaf: int, path: MerklePath, prime: int = COMMITMENT_PRIME) -> int:
    """Replay a path from a leaf, returning the reconstructed root."""
    current = leaf
    for sibling, is_left in path:
        if is_left:
            current = combine(current, sibling, prime)
        else:
            current = combine(sibling, current, prime)
    return current


def verify_path(leaf: int, path: MerklePath, root: int,
                prime: int = COMMITMENT_PRIME) -> bool:
    """True when replaying `path` from `leaf` reaches `root`."""
    result = root_from_path(leaf, path, prime) == root
    logger.debug("merkle path of length %d verified: %s", len(path), result)
    return result
