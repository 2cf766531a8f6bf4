import pytest

from thresig.errors import InvalidMastError
from thresig.hash_types import node_from_hex, tagged_branch
from thresig.pmt import PartialMerkleTree


def _leaves(count):
    return [node_from_hex(f"{i:064x}") for i in range(1, count + 1)]


def _fold(start, proofs):
    node = start
    for proof in proofs:
        node = tagged_branch(node, proof)
    return node


def test_pmt_proof_generate_correct_order():
    leaf_nodes = _leaves(12)
    matches = [False] * 11 + [True]
    tree = PartialMerkleTree.from_leaf_nodes(leaf_nodes, matches)
    root = tree.extract_matches().root

    filter_proof = leaf_nodes[11]
    proofs = tree.collected_hashes(filter_proof)
    assert _fold(filter_proof, proofs) == root


def test_extract_matches_reports_matched_leaf():
    leaf_nodes = _leaves(12)
    matches = [False] * 11 + [True]
    tree = PartialMerkleTree.from_leaf_nodes(leaf_nodes, matches)
    extraction = tree.extract_matches()
    assert extraction.matches == [leaf_nodes[11]]
    assert extraction.indexes == [11]


def test_root_does_not_depend_on_matches():
    leaf_nodes = _leaves(7)
    roots = {
        PartialMerkleTree.from_leaf_nodes(
            leaf_nodes, [i == target for i in range(7)]
        ).extract_matches().root
        for target in range(7)
    }
    none_matched = PartialMerkleTree.from_leaf_nodes(leaf_nodes, [False] * 7)
    assert roots == {none_matched.extract_matches().root}


def test_single_leaf_root_is_the_leaf():
    leaf = _leaves(1)[0]
    tree = PartialMerkleTree.from_leaf_nodes([leaf], [True])
    extraction = tree.extract_matches()
    assert extraction.root == leaf
    assert extraction.indexes == [0]
    assert tree.collected_hashes(leaf) == []


def test_collected_hashes_excludes_filter_and_sorts_by_height():
    leaf_nodes = _leaves(12)
    tree = PartialMerkleTree.from_leaf_nodes(leaf_nodes, [False] * 11 + [True])
    proofs = tree.collected_hashes(leaf_nodes[11])
    assert leaf_nodes[11] not in proofs
    heights = [tree.heights[tree.hashes.index(p)] for p in proofs]
    assert heights == sorted(heights)


def test_every_leaf_proof_folds_to_root():
    leaf_nodes = _leaves(5)
    for index in range(5):
        matches = [i == index for i in range(5)]
        tree = PartialMerkleTree.from_leaf_nodes(leaf_nodes, matches)
        root = tree.extract_matches().root
        assert _fold(leaf_nodes[index], tree.collected_hashes(leaf_nodes[index])) == root


def test_empty_leaf_nodes_rejected():
    with pytest.raises(ValueError):
        PartialMerkleTree.from_leaf_nodes([], [])


def test_mismatched_lengths_rejected():
    with pytest.raises(ValueError):
        PartialMerkleTree.from_leaf_nodes(_leaves(3), [True, False])


def test_no_leaves_is_invalid():
    with pytest.raises(InvalidMastError, match="No Pubkeys"):
        PartialMerkleTree(0).extract_matches()


def test_more_hashes_than_leaves_is_invalid():
    a, b, c = _leaves(3)
    tree = PartialMerkleTree(2, bits=[True, True, True], hashes=[a, b, c])
    with pytest.raises(InvalidMastError, match="more hashes"):
        tree.extract_matches()


def test_fewer_bits_than_hashes_is_invalid():
    a, b = _leaves(2)
    tree = PartialMerkleTree(2, bits=[False], hashes=[a, b])
    with pytest.raises(InvalidMastError, match="less bits"):
        tree.extract_matches()


def test_bits_overflow_is_invalid():
    (a,) = _leaves(1)
    tree = PartialMerkleTree(2, bits=[True, True], hashes=[a])
    with pytest.raises(InvalidMastError, match="Overflowed the bits"):
        tree.extract_matches()


def test_unconsumed_hashes_are_invalid():
    a, b = _leaves(2)
    tree = PartialMerkleTree(4, bits=[False, False], hashes=[a, b])
    with pytest.raises(InvalidMastError, match="Not all hashes"):
        tree.extract_matches()


def test_identical_children_are_invalid():
    (a,) = _leaves(1)
    tree = PartialMerkleTree(2, bits=[True, False, False], hashes=[a, a])
    with pytest.raises(InvalidMastError, match="identical"):
        tree.extract_matches()