"""Partial Merkle trees over MAST leaf nodes."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import NamedTuple

from .errors import InvalidMastError, MastBuildError, MastError
from .hash_types import tagged_branch


class Extraction(NamedTuple):
    """Result of walking a partial Merkle tree."""

    root: bytes
    matches: list[bytes]
    indexes: list[int]


@dataclass
class PartialMerkleTree:
    """A subset of the leaves of a Merkle tree, enough to recover its root.

    The tree is traversed depth first; each visited node stores a bit telling
    whether it is the parent of a matched leaf. Nodes at leaf level, or with
    no match below, store their hash together with its height.
    """

    num_leaf_nodes: int
    bits: list[bool] = field(default_factory=list)
    hashes: list[bytes] = field(default_factory=list)
    heights: list[int] = field(default_factory=list)

    @classmethod
    def from_leaf_nodes(cls, leaf_nodes, matches) -> PartialMerkleTree:
        """Build the tree from leaf hashes and per-leaf match flags."""
        leaf_nodes = [bytes(node) for node in leaf_nodes]
        matches = [bool(flag) for flag in matches]
        if not leaf_nodes:
            raise ValueError("a Merkle tree needs at least one leaf node")
        if len(leaf_nodes) != len(matches):
            raise ValueError("leaf nodes and matches differ in length")

        tree = cls(len(leaf_nodes))
        try:
            tree._traverse_and_build(tree._tree_height(), 0, leaf_nodes, matches)
        except (MastError, ValueError) as exc:
            raise MastBuildError() from exc
        return tree

    def _tree_width(self, height: int) -> int:
        return (self.num_leaf_nodes + (1 << height) - 1) >> height

    def _tree_height(self) -> int:
        height = 0
        while self._tree_width(height) > 1:
            height += 1
        return height

    def _calc_hash(self, height: int, pos: int, leaf_nodes: list[bytes]) -> bytes:
        if height == 0:
            return leaf_nodes[pos]
        left = self._calc_hash(height - 1, pos * 2, leaf_nodes)
        if pos * 2 + 1 < self._tree_width(height - 1):
            right = self._calc_hash(height - 1, pos * 2 + 1, leaf_nodes)
        else:
            right = left
        return tagged_branch(left, right)

    def _traverse_and_build(
        self, height: int, pos: int, leaf_nodes: list[bytes], matches: list[bool]
    ) -> None:
        start = pos << height
        end = min((pos + 1) << height, self.num_leaf_nodes)
        parent_of_match = any(matches[start:end])
        self.bits.append(parent_of_match)

        if height == 0 or not parent_of_match:
            self.hashes.append(self._calc_hash(height, pos, leaf_nodes))
            self.heights.append(height)
        else:
            self._traverse_and_build(height - 1, pos * 2, leaf_nodes, matches)
            if pos * 2 + 1 < self._tree_width(height - 1):
                self._traverse_and_build(height - 1, pos * 2 + 1, leaf_nodes, matches)

    def extract_matches(self) -> Extraction:
        """Recover the root, the matched leaves and their indexes."""
        if self.num_leaf_nodes == 0:
            raise InvalidMastError("No Pubkeys in MAST")
        if len(self.hashes) > self.num_leaf_nodes:
            raise InvalidMastError("Proof contains more hashes than leaf_nodes")
        if len(self.bits) < len(self.hashes):
            raise InvalidMastError("Proof contains less bits than hashes")

        bits_used = 0
        hashes_used = 0
        matched: list[bytes] = []
        indexes: list[int] = []

        def walk(height: int, pos: int) -> bytes:
            nonlocal bits_used, hashes_used
            if bits_used >= len(self.bits):
                raise InvalidMastError("Overflowed the bits array")
            parent_of_match = self.bits[bits_used]
            bits_used += 1

            if height == 0 or not parent_of_match:
                if hashes_used >= len(self.hashes):
                    raise InvalidMastError("Overflowed the hash array")
                node = self.hashes[hashes_used]
                hashes_used += 1
                if height == 0 and parent_of_match:
                    matched.append(node)
                    indexes.append(pos)
                return node

            left = walk(height - 1, pos * 2)
            if pos * 2 + 1 < self._tree_width(height - 1):
                right = walk(height - 1, pos * 2 + 1)
                if right == left:
                    raise InvalidMastError("Found identical node hashes")
            else:
                right = left
            return tagged_branch(left, right)

        root = walk(self._tree_height(), 0)
        if (bits_used + 7) // 8 != (len(self.bits) + 7) // 8:
            raise InvalidMastError("Not all bit were consumed")
        if hashes_used != len(self.hashes):
            raise InvalidMastError("Not all hashes were consumed")
        return Extraction(root, matched, indexes)

    def collected_hashes(self, filter_proof) -> list[bytes]:
        """Stored hashes other than ``filter_proof``, ordered by height."""
        filter_proof = bytes(filter_proof)
        kept = [
            (node, height)
            for node, height in zip(self.hashes, self.heights)
            if node != filter_proof
        ]
        kept.sort(key=lambda item: item[1])
        return [node for node, _ in kept]