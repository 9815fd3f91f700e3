# This source code is part of the msaview package and is distributed
# under the 3-Clause BSD License. Please see 'LICENSE.rst' for further
# information.

import itertools
import numpy as np
import pytest
import msaview
import msaview.phylo as phylo


@pytest.fixture
def distances():
    # Distances of an additive tree, example from Wikipedia
    return np.array([
        [ 0,  5,  9,  9,  8],
        [ 5,  0, 10, 10,  9],
        [ 9, 10,  0,  8,  7],
        [ 9, 10,  8,  0,  3],
        [ 8,  9,  7,  3,  0],
    ])


def _leaf_distances(tree):
    """
    Sum up the branch lengths between all pairs of leaves.
    """
    paths = {}
    for leaf in tree.leaves:
        path = {}
        node = leaf
        length = 0
        while node is not None:
            path[id(node)] = length
            if node.distance is not None:
                length += node.distance
            node = node.parent
        paths[leaf.index] = path
    n = len(tree)
    leaf_distances = np.zeros((n, n))
    for i, j in itertools.combinations(range(n), 2):
        common = set(paths[i]) & set(paths[j])
        leaf_distances[i, j] = min(paths[i][k] + paths[j][k] for k in common)
        leaf_distances[j, i] = leaf_distances[i, j]
    return leaf_distances


def test_additive_tree(distances):
    """
    Neighbor joining reconstructs additive distances exactly.
    """
    tree = phylo.neighbor_joining(distances)
    assert len(tree) == 5
    np.testing.assert_allclose(_leaf_distances(tree), distances)


def test_topology(distances):
    tree = phylo.neighbor_joining(distances)
    # Ties are resolved in favor of the first pair in row-major order
    assert tree.to_newick(include_distance=False) == "((((0,1),2),3),4);"


def test_non_negative_branches():
    """
    Non additive distances may give negative branch lengths,
    which are set to 0.
    """
    distances = np.array([
        [0, 1, 9, 9],
        [1, 0, 1, 9],
        [9, 1, 0, 1],
        [9, 9, 1, 0],
    ])
    tree = phylo.neighbor_joining(distances)
    nodes = [tree.root]
    while len(nodes) > 0:
        node = nodes.pop()
        if not node.is_leaf():
            assert all(child.distance >= 0 for child in node.children)
            nodes += node.children


def test_single_node():
    tree = phylo.neighbor_joining(np.zeros((1, 1)))
    assert tree.to_newick() == "0;"


@pytest.mark.parametrize("shape", [(0, 0), (2, 3), (4,)])
def test_invalid_matrix(shape):
    with pytest.raises(ValueError):
        phylo.neighbor_joining(np.zeros(shape))


def test_identical_sequences():
    newick = phylo.build_nj_tree([("seq1", "MKAA"), ("seq2", "MKAA")])
    assert newick == "(seq1:0.000000,seq2:0.000000);"


def test_build_from_alignment():
    alignment = msaview.Alignment([
        ("human", "MKVLAAGIVG"),
        ("chimp", "MKVLAAGIVA"),
        ("mouse", "MRVLSAGLVG"),
        ("fish",  "MEIFSQGL-G"),
    ])
    newick = phylo.build_nj_tree(alignment)
    tree = phylo.Tree.from_newick(newick)
    assert sorted(tree.labels) == sorted(alignment.names)
    # Six decimals for each branch length
    lengths = [part.split(",")[0].rstrip(");")
               for part in newick.split(":")[1:]]
    assert all(len(length.split(".")[1]) == 6 for length in lengths)
    # The two most similar sequences are neighbors
    assert "(human:" in newick and ",chimp:" in newick \
        or "(chimp:" in newick and ",human:" in newick


def test_label_escaping():
    newick = phylo.build_nj_tree([("sp|P1:A", "MK"), ("tr(2)", "MK")])
    assert newick == "(sp|P1_A:0.000000,tr_2_:0.000000);"


def test_precision():
    newick = phylo.build_nj_tree(
        [("a", "MK"), ("b", "MK")], precision=2
    )
    assert newick == "(a:0.00,b:0.00);"


@pytest.mark.parametrize("rows", [[], [("seq1", "MKAA")]])
def test_insufficient_sequences(rows):
    with pytest.raises(msaview.InsufficientSequencesError):
        phylo.build_nj_tree(rows)


def test_unaligned_sequences():
    with pytest.raises(msaview.UnalignedSequencesError):
        phylo.build_nj_tree([("seq1", "MKAA"), ("seq2", "MKA")])


def test_many_rows():
    """
    The trees of alignments with hundreds of rows can be serialized and
    parsed again.
    """
    # Additive distances of a caterpillar tree: leaves attached to a
    # chain of inner nodes with unit branch lengths
    n = 600
    positions = np.arange(n)
    distances = np.abs(positions[:, np.newaxis] - positions[np.newaxis, :]) \
        + 2.0
    np.fill_diagonal(distances, 0)
    tree = phylo.neighbor_joining(distances)
    assert sorted(tree.root.get_indices()) == list(range(n))
    newick = tree.to_newick(include_distance=False)
    assert len(phylo.Tree.from_newick(newick)) == n
