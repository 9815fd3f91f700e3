# This source code is part of the msaview package and is distributed
# under the 3-Clause BSD License. Please see 'LICENSE.rst' for further
# information.

__name__ = "msaview.phylo"
__author__ = "The msaview contributors"
__all__ = ["Tree", "TreeNode"]

import re


# Characters with special meaning in Newick notation
_NEWICK_SPECIAL = re.compile(r"[():,;\[\]]")
_NEWICK_COMMENT = re.compile(r"\[[^\]]*\]")
_NEWICK_TOKEN = re.compile(r"'(?:[^']|'')*'|[(),:;]|[^\s(),:;']+")
_NEWICK_DELIMITERS = ("(", ")", ",", ":", ";")


class TreeNode(object):
    """
    A node of a :class:`Tree`.

    A node is either a leaf node, referring to an object via its
    `index`, or an intermediate node with child nodes.
    Each child node stores its distance to its parent node.

    A node can be the child of only one parent node.

    Parameters
    ----------
    children : iterable object of TreeNode, optional
        The child nodes of an intermediate node.
    distances : iterable object of float or None, optional
        The distances of the child nodes to this node.
        ``None`` denotes an unknown distance.
        Must have the same length as `children`.
    index : int, optional
        The reference index of a leaf node.

    Raises
    ------
    TypeError
        If both or neither `children` and `index` are given.
    ValueError
        If a child node already has a parent node.

    Examples
    --------

    >>> leaf1 = TreeNode(index=0)
    >>> leaf2 = TreeNode(index=1)
    >>> root = TreeNode([leaf1, leaf2], [0.5, 1.0])
    >>> print(root.to_newick(labels=["a", "b"]))
    (a:0.500000,b:1.000000)
    """

    def __init__(self, children=None, distances=None, index=None):
        self._parent = None
        self._distance = None
        if index is not None:
            if children is not None:
                raise TypeError(
                    "A leaf node must not have child nodes"
                )
            self._index = int(index)
            self._children = None
        else:
            if children is None:
                raise TypeError(
                    "Either a reference index or child nodes must be given"
                )
            children = tuple(children)
            if distances is None:
                distances = [None] * len(children)
            distances = tuple(distances)
            if len(children) == 0:
                raise TypeError("An intermediate node needs child nodes")
            if len(children) != len(distances):
                raise ValueError(
                    f"{len(children)} child nodes were given, "
                    f"but {len(distances)} distances"
                )
            for child, distance in zip(children, distances):
                if child._parent is not None:
                    raise ValueError("Child node already has a parent node")
                child._parent = self
                child._distance = distance
            self._index = None
            self._children = children

    @property
    def index(self):
        return self._index

    @property
    def children(self):
        return self._children

    @property
    def parent(self):
        return self._parent

    @property
    def distance(self):
        return self._distance

    def is_leaf(self):
        return self._children is None

    def is_root(self):
        return self._parent is None

    def get_indices(self):
        """
        Get the reference indices of all leaf nodes below this node,
        in the order of a depth-first traversal.

        Returns
        -------
        indices : list of int
            The reference indices.
        """
        indices = []
        # Explicit stack, trees of large alignments exceed the
        # recursion limit
        nodes = [self]
        while len(nodes) > 0:
            node = nodes.pop()
            if node.is_leaf():
                indices.append(node._index)
            else:
                nodes += reversed(node._children)
        return indices

    def get_leaf_count(self):
        return len(self.get_indices())

    def to_newick(self, labels=None, include_distance=True, precision=6):
        """
        Obtain the Newick notation of the subtree below this node,
        without the terminal semicolon.

        Parameters
        ----------
        labels : sequence of str, optional
            The leaf labels, indexed by the reference indices.
            Characters with special meaning in Newick notation,
            i.e. ``()[]:,;``, are replaced by ``_``.
            By default, the reference indices are used as labels.
        include_distance : bool, optional
            If true, the distances to the parent node are included.
            Unknown distances are omitted.
        precision : int, optional
            The number of decimals of the distances.

        Returns
        -------
        newick : str
            The Newick notation.
        """
        # Post-order traversal with an explicit stack:
        # 'parts' holds the notation of each finished subtree, the
        # children of a node are combined once all of them are finished
        parts = []
        nodes = [(self, False)]
        while len(nodes) > 0:
            node, is_expanded = nodes.pop()
            if node.is_leaf():
                if labels is None:
                    newick = str(node._index)
                else:
                    newick = _NEWICK_SPECIAL.sub(
                        "_", str(labels[node._index])
                    )
            elif not is_expanded:
                nodes.append((node, True))
                nodes += [(child, False) for child in reversed(node._children)]
                continue
            else:
                n_children = len(node._children)
                newick = "(" + ",".join(parts[-n_children:]) + ")"
                del parts[-n_children:]
            if include_distance and node is not self \
               and node._distance is not None:
                newick += f":{node._distance:.{precision}f}"
            parts.append(newick)
        return parts[0]

    def __str__(self):
        return self.to_newick()


class Tree(object):
    """
    A (phylogenetic) tree, wrapping a *root* :class:`TreeNode`.

    The leaf nodes refer via their reference index to the entries of
    :attr:`labels`, e.g. the row names of an alignment.

    Parameters
    ----------
    root : TreeNode
        The root node of the tree.
    labels : list of str, optional
        The leaf labels, indexed by the reference indices of the leaf
        nodes.

    Raises
    ------
    ValueError
        If `root` has a parent node.

    Examples
    --------

    >>> tree = Tree.from_newick("((a:1,b:2):0.5,c:3);")
    >>> print(tree.labels)
    ['a', 'b', 'c']
    >>> print(tree.to_newick())
    ((a:1.000000,b:2.000000):0.500000,c:3.000000);
    >>> print(tree.to_newick(include_distance=False))
    ((a,b),c);
    """

    def __init__(self, root, labels=None):
        if not root.is_root():
            raise ValueError("The root node must not have a parent node")
        self._root = root
        self._labels = list(labels) if labels is not None else None

    @property
    def root(self):
        return self._root

    @property
    def labels(self):
        return self._labels

    @property
    def leaves(self):
        """
        The leaf nodes, sorted by their reference index.
        """
        leaves = []
        nodes = [self._root]
        while len(nodes) > 0:
            node = nodes.pop()
            if node.is_leaf():
                leaves.append(node)
            else:
                nodes += node.children
        return sorted(leaves, key=lambda leaf: leaf.index)

    def get_leaf(self, index):
        """
        Get the leaf node with the given reference index.

        Parameters
        ----------
        index : int
            The reference index.

        Returns
        -------
        leaf : TreeNode
            The leaf node.
        """
        for leaf in self.leaves:
            if leaf.index == index:
                return leaf
        raise IndexError(f"The tree has no leaf with index {index}")

    def __len__(self):
        return self._root.get_leaf_count()

    def to_newick(self, labels=None, include_distance=True, precision=6):
        """
        Obtain the Newick notation of the tree.

        Parameters
        ----------
        labels : sequence of str, optional
            The leaf labels, indexed by the reference indices.
            By default :attr:`labels` is used, or the reference indices
            if the tree has no labels.
        include_distance : bool, optional
            If true, the distances are included.
        precision : int, optional
            The number of decimals of the distances.

        Returns
        -------
        newick : str
            The Newick notation, terminated by a semicolon.
        """
        if labels is None:
            labels = self._labels
        return self._root.to_newick(labels, include_distance, precision) \
               + ";"

    @staticmethod
    def from_newick(newick, labels=None):
        """
        Create a tree from its Newick notation.

        Comments in square brackets and labels of intermediate nodes are
        ignored.

        Parameters
        ----------
        newick : str
            The Newick notation.
        labels : list of str, optional
            If given, the reference index of each leaf node is the
            position of its label in this list.
            Otherwise, the leaves are indexed in the order of
            appearance and their labels are collected in
            :attr:`Tree.labels`.

        Returns
        -------
        tree : Tree
            The parsed tree.

        Raises
        ------
        ValueError
            If the Newick notation is malformed or a leaf label is not
            part of the given `labels`.
        """
        newick = _NEWICK_COMMENT.sub("", newick).strip()
        tokens = _NEWICK_TOKEN.findall(newick)
        if len(tokens) == 0:
            raise ValueError("Newick notation is empty")
        parser = _NewickParser(tokens, labels)
        root, _ = parser.parse_tree()
        if parser.peek() == ";":
            parser.pos += 1
        if parser.peek() is not None:
            raise ValueError(
                f"Unexpected '{parser.peek()}' after the end of the tree"
            )
        return Tree(root, parser.labels)

    def __str__(self):
        return self.to_newick()


class _NewickParser(object):

    def __init__(self, tokens, labels):
        self.tokens = tokens
        self.pos = 0
        self._fixed_labels = labels is not None
        self.labels = list(labels) if labels is not None else []

    def peek(self):
        if self.pos < len(self.tokens):
            return self.tokens[self.pos]
        return None

    def parse_tree(self):
        """
        Parse the node at the current position, including all nodes
        below it, and its distance.
        """
        # Children and distances of each opened, but not yet closed
        # intermediate node
        open_nodes = []
        while True:
            if self.peek() == "(":
                self.pos += 1
                open_nodes.append(([], []))
                continue
            node = TreeNode(index=self._get_index(self.parse_label()))
            distance = self.parse_distance()
            # Attach the finished node to its parent and close all
            # intermediate nodes that are complete by now
            while True:
                if len(open_nodes) == 0:
                    return node, distance
                children, distances = open_nodes[-1]
                children.append(node)
                distances.append(distance)
                token = self.peek()
                self.pos += 1
                if token == ",":
                    break
                elif token == ")":
                    open_nodes.pop()
                    # Labels of intermediate nodes are ignored
                    self.parse_label()
                    node = TreeNode(children, distances)
                    distance = self.parse_distance()
                else:
                    raise ValueError(
                        f"Expected ',' or ')' in Newick notation, "
                        f"but got '{token}'"
                    )

    def parse_distance(self):
        if self.peek() != ":":
            return None
        self.pos += 1
        token = self.peek()
        try:
            distance = float(token)
        except (TypeError, ValueError):
            raise ValueError(
                f"Expected a distance in Newick notation, "
                f"but got '{token}'"
            )
        self.pos += 1
        return distance

    def parse_label(self):
        parts = []
        while self.peek() is not None \
              and self.peek() not in _NEWICK_DELIMITERS:
            token = self.peek()
            if token.startswith("'"):
                parts.append(token[1:-1].replace("''", "'"))
            else:
                parts.append(token)
            self.pos += 1
        return " ".join(parts)

    def _get_index(self, label):
        if self._fixed_labels:
            try:
                return self.labels.index(label)
            except ValueError:
                raise ValueError(f"Unknown leaf label '{label}'")
        self.labels.append(label)
        return len(self.labels) - 1
