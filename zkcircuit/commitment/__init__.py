"""
Commitment Primitives

Key Components:
    - combine / apply_hash: the additive placeholder combiner
    - MerkleCommitment: tree commitment with inclusion paths
    - verify_path / root_from_path: replay an inclusion path

The combiner is a didactic stand-in for a hash. It provides no hiding and
no collision resistance.
"""

from .combiner import combine, apply_hash
from .merkle import MerkleCommitment, MerklePath, root_from_path, verify_path

__all__ = [
    "combine",
    "apply_hash",
    "MerkleCommitment",
    "MerklePath",
    "root_from_path",
    "verify_path",
]
