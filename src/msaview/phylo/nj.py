# This source code is part of the msaview package and is distributed
# under the 3-Clause BSD License. Please see 'LICENSE.rst' for further
# information.

__name__ = "msaview.phylo"
__author__ = "The msaview contributors"
__all__ = ["neighbor_joining", "build_nj_tree"]

import numpy as np
from ..error import InsufficientSequencesError, UnalignedSequencesError
from .distance import distance_matrix
from .tree import Tree, TreeNode


def neighbor_joining(distances):
    """
    Perform hierarchical clustering using the
    *neighbor joining* algorithm (Saitou and Nei, 1987).

    In contrast to UPGMA this algorithm does not assume a constant
    evolution rate.
    The resulting tree is considered to be unrooted, but is represented
    with a root, joining the last two remaining nodes.

    In each step the pair of nodes with the minimum *Q* value is
    joined, where ties are resolved in favor of the pair found first in
    a row-major scan of the upper triangle.
    The joined node replaces the first node of the pair.
    Negative branch lengths are set to 0.

    Parameters
    ----------
    distances : ndarray, shape=(n,n)
        Pairwise distance matrix.

    Returns
    -------
    tree : Tree
        A rooted binary tree.
        The reference indices of the leaf nodes refer to the
        indices of the distance matrix.

    Raises
    ------
    ValueError
        If the distance matrix is not square or empty.

    Examples
    --------

    >>> distances = np.array([
    ...     [0, 5, 9, 9],
    ...     [5, 0, 10, 10],
    ...     [9, 10, 0, 8],
    ...     [9, 10, 8, 0],
    ... ])
    >>> tree = neighbor_joining(distances)
    >>> print(tree.to_newick(include_distance=False))
    (((0,1),2),3);
    >>> print(tree.to_newick(labels=["a", "b", "c", "d"]))
    (((a:2.000000,b:3.000000):3.000000,c:4.000000):2.000000,d:2.000000);
    """
    distances = np.asarray(distances, dtype=float)
    if distances.ndim != 2 or distances.shape[0] != distances.shape[1]:
        raise ValueError("Distance matrix must be a square matrix")
    n = distances.shape[0]
    if n == 0:
        raise ValueError("Distance matrix must not be empty")
    if n == 1:
        return Tree(TreeNode(index=0))

    nodes = [TreeNode(index=i) for i in range(n)]
    dist = distances.copy()
    is_active = np.ones(n, dtype=bool)
    remaining = n

    while remaining > 2:
        active = np.nonzero(is_active)[0]
        sub_dist = dist[np.ix_(active, active)]
        # Sum of the distances to all other remaining nodes
        dist_sum = np.sum(sub_dist, axis=1) - np.diagonal(sub_dist)
        q = (remaining - 2) * sub_dist \
            - dist_sum[:, np.newaxis] - dist_sum[np.newaxis, :]
        # Only pairs of different nodes in the upper triangle
        q[np.tril_indices(len(active))] = np.inf
        # 'argmin()' returns the first minimum in row-major order
        a, b = np.unravel_index(np.argmin(q), q.shape)
        i = active[a]
        j = active[b]

        dist_ij = dist[i, j]
        limb_i = dist_ij / 2 \
                 + (dist_sum[a] - dist_sum[b]) / (2 * (remaining - 2))
        limb_j = dist_ij - limb_i
        nodes[i] = TreeNode(
            [nodes[i], nodes[j]], [max(0.0, limb_i), max(0.0, limb_j)]
        )
        nodes[j] = None

        others = active[(active != i) & (active != j)]
        new_dist = np.maximum(
            (dist[i, others] + dist[j, others] - dist_ij) / 2, 0
        )
        dist[i, others] = new_dist
        dist[others, i] = new_dist
        is_active[j] = False
        remaining -= 1

    i, j = np.nonzero(is_active)[0]
    half_dist = dist[i, j] / 2
    root = TreeNode([nodes[i], nodes[j]], [half_dist, half_dist])
    return Tree(root)


def build_nj_tree(rows, matrix=None, precision=6):
    """
    Build a neighbor joining tree from the rows of an alignment.

    The distances between the rows are computed with
    :func:`distance_matrix()`.

    Parameters
    ----------
    rows : Alignment or iterable object of tuple(str, str)
        The alignment or its rows as *(name, sequence)* tuples.
    matrix : SubstitutionMatrix, optional
        The substitution matrix.
        By default, BLOSUM62 is used.
    precision : int, optional
        The number of decimals of the branch lengths.

    Returns
    -------
    newick : str
        The tree in Newick notation, labeled with the row names.

    Raises
    ------
    InsufficientSequencesError
        If less than two rows are given.
    UnalignedSequencesError
        If the rows have different lengths.

    Examples
    --------

    >>> print(build_nj_tree([("seq1", "MKAA"), ("seq2", "MKAA")]))
    (seq1:0.000000,seq2:0.000000);
    """
    rows = list(rows)
    if len(rows) < 2:
        raise InsufficientSequencesError(
            "Need at least 2 sequences to build a tree"
        )
    lengths = set(len(seq) for _, seq in rows)
    if len(lengths) > 1:
        raise UnalignedSequencesError(
            f"Rows have different lengths {sorted(lengths)}, "
            f"but aligned sequences are required"
        )
    names = [name for name, _ in rows]
    tree = neighbor_joining(distance_matrix(rows, matrix))
    return tree.to_newick(labels=names, precision=precision)
