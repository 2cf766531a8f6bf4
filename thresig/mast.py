"""Merkelized abstract syntax trees of public keys and tweaked addresses."""

from __future__ import annotations

from dataclasses import dataclass, field

from .errors import KeyPairError, MastBuildError, MastError, MastGenProofError
from .hash_types import TapTag, XOnly, tagged_hash, tagged_leaf
from .pmt import PartialMerkleTree
from .ristretto import BASEPOINT, RistrettoPoint, scalar_from_bytes_mod_order


@dataclass
class Mast:
    """A MAST whose leaves are the given public keys."""

    pubkeys: list[XOnly] = field(default_factory=list)

    def _leaf_nodes(self) -> list[bytes]:
        return [tagged_leaf(pubkey) for pubkey in self.pubkeys]

    def calc_root(self) -> bytes:
        """The Merkle root of the tree."""
        leaf_nodes = self._leaf_nodes()
        if len(self.pubkeys) < 2:
            raise MastBuildError()
        matches = [True] + [False] * (len(self.pubkeys) - 1)
        tree = PartialMerkleTree.from_leaf_nodes(leaf_nodes, matches)
        return tree.extract_matches().root

    def generate_merkle_proof(self, pubkey: XOnly) -> list[bytes]:
        """The sibling hashes leading from ``pubkey``'s leaf to the root."""
        if pubkey not in self.pubkeys:
            raise ValueError("public key is not a leaf of this MAST")
        matches = [key == pubkey for key in self.pubkeys]
        index = max(i for i, matched in enumerate(matches) if matched)
        try:
            leaf_nodes = self._leaf_nodes()
            tree = PartialMerkleTree.from_leaf_nodes(leaf_nodes, matches)
            return tree.collected_hashes(leaf_nodes[index])
        except MastError as exc:
            raise MastGenProofError() from exc

    def generate_tweak_pubkey(self, inner_pubkey: XOnly) -> bytes:
        """The threshold-signature address for ``inner_pubkey`` and this tree."""
        return tweak_pubkey(inner_pubkey, self.calc_root())


def tweak_pubkey(inner_pubkey, root) -> bytes:
    """Compute ``P + TapTweak(P || root) * G`` as a ristretto encoding."""
    inner = bytes(inner_pubkey)
    tweak = tagged_hash(TapTag.TWEAK, inner + bytes(root))
    scalar = scalar_from_bytes_mod_order(tweak)
    try:
        inner_point = RistrettoPoint.from_bytes(inner)
    except ValueError as exc:
        raise KeyPairError("SignatureError(PointDecompressionError)") from exc
    return (BASEPOINT * scalar + inner_point).to_bytes()