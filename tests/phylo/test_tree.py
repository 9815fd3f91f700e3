# This source code is part of the msaview package and is distributed
# under the 3-Clause BSD License. Please see 'LICENSE.rst' for further
# information.

import pytest
import msaview.phylo as phylo


@pytest.fixture
def tree():
    leaves = [phylo.TreeNode(index=i) for i in range(3)]
    intermediate = phylo.TreeNode(leaves[:2], [1.0, 2.5])
    root = phylo.TreeNode([intermediate, leaves[2]], [0.5, 3.0])
    return phylo.Tree(root, ["a", "b", "c"])


def test_node_relations(tree):
    root = tree.root
    assert root.is_root()
    assert not root.is_leaf()
    assert root.get_indices() == [0, 1, 2]
    assert root.get_leaf_count() == 3
    leaf = tree.get_leaf(1)
    assert leaf.is_leaf()
    assert leaf.distance == 2.5
    assert leaf.parent.parent is root
    assert [leaf.index for leaf in tree.leaves] == [0, 1, 2]
    assert len(tree) == 3
    with pytest.raises(IndexError):
        tree.get_leaf(3)


def test_to_newick(tree):
    assert tree.to_newick() \
        == "((a:1.000000,b:2.500000):0.500000,c:3.000000);"
    assert tree.to_newick(include_distance=False) == "((a,b),c);"
    assert tree.to_newick(precision=1) == "((a:1.0,b:2.5):0.5,c:3.0);"
    assert tree.to_newick(labels=["x", "y", "z"], include_distance=False) \
        == "((x,y),z);"


def test_unlabeled():
    root = phylo.TreeNode(
        [phylo.TreeNode(index=1), phylo.TreeNode(index=0)]
    )
    assert phylo.Tree(root).to_newick() == "(1,0);"


def test_label_escaping():
    """
    Characters with special meaning in Newick notation are replaced.
    """
    root = phylo.TreeNode(
        [phylo.TreeNode(index=0), phylo.TreeNode(index=1)], [1, 1]
    )
    tree = phylo.Tree(root, ["sp|P1:x", "a(b),c;[d]"])
    assert tree.to_newick(include_distance=False) == "(sp|P1_x,a_b__c__d_);"


@pytest.mark.parametrize("newick, exp_labels, exp_newick", [
    ("(a,b);", ["a", "b"], "(a,b);"),
    ("((a:1,b:2):0.5,c:3);", ["a", "b", "c"], "((a:1.0,b:2.0):0.5,c:3.0);"),
    # Labels of intermediate nodes are ignored
    ("((a,b)ab:1,c)root;", ["a", "b", "c"], "((a,b):1.0,c);"),
    # Comments are removed
    ("(a[comment]:1,b:2);", ["a", "b"], "(a:1.0,b:2.0);"),
    # Quoted labels
    ("('my seq':1,b:2);", ["my seq", "b"], "(my seq:1.0,b:2.0);"),
    # Missing semicolon
    ("(a,(b,c))", ["a", "b", "c"], "(a,(b,c));"),
    ("  (a:1e-2,b:2)  ;  ", ["a", "b"], "(a:0.0,b:2.0);"),
])
def test_from_newick(newick, exp_labels, exp_newick):
    tree = phylo.Tree.from_newick(newick)
    assert tree.labels == exp_labels
    assert tree.to_newick(precision=1) == exp_newick


def test_from_newick_with_labels():
    tree = phylo.Tree.from_newick("(b,(c,a));", labels=["a", "b", "c"])
    assert tree.to_newick() == "(b,(c,a));"
    assert tree.root.get_indices() == [1, 2, 0]
    with pytest.raises(ValueError):
        phylo.Tree.from_newick("(b,d);", labels=["a", "b", "c"])


@pytest.mark.parametrize("newick", [
    "",
    "(a,b",
    "(a,b));",
    "(a:x,b);",
    "(a,b);c",
])
def test_malformed_newick(newick):
    with pytest.raises(ValueError):
        phylo.Tree.from_newick(newick)


def test_round_trip(tree):
    newick = tree.to_newick()
    assert phylo.Tree.from_newick(newick).to_newick() == newick


def test_invalid_nodes():
    leaf = phylo.TreeNode(index=0)
    phylo.TreeNode([leaf, phylo.TreeNode(index=1)])
    # Leaf has already a parent
    with pytest.raises(ValueError):
        phylo.TreeNode([leaf, phylo.TreeNode(index=2)])
    with pytest.raises(TypeError):
        phylo.TreeNode()
    with pytest.raises(TypeError):
        phylo.TreeNode([phylo.TreeNode(index=0)], index=1)
    with pytest.raises(ValueError):
        phylo.TreeNode([phylo.TreeNode(index=0)], [1.0, 2.0])
    with pytest.raises(ValueError):
        phylo.Tree(leaf)


def _caterpillar(n_leaves):
    node = phylo.TreeNode(index=0)
    for i in range(1, n_leaves):
        node = phylo.TreeNode([node, phylo.TreeNode(index=i)], [1.0, 1.0])
    return phylo.Tree(node)


@pytest.mark.parametrize("n_leaves", [2, 10, 3000])
def test_deep_tree(n_leaves):
    """
    Trees deeper than the recursion limit can be traversed, serialized
    and parsed.
    """
    tree = _caterpillar(n_leaves)
    exp_newick = "(" * (n_leaves - 1) + "0" \
        + "".join(f",{i})" for i in range(1, n_leaves)) + ";"
    assert tree.root.get_indices() == list(range(n_leaves))
    assert len(tree) == n_leaves
    assert tree.to_newick(include_distance=False) == exp_newick

    newick = tree.to_newick(precision=1)
    parsed = phylo.Tree.from_newick(newick)
    assert len(parsed) == n_leaves
    assert parsed.labels == [str(i) for i in range(n_leaves)]
    assert parsed.to_newick(precision=1) == newick
