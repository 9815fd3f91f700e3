# This source code is part of the msaview package and is distributed
# under the 3-Clause BSD License. Please see 'LICENSE.rst' for further
# information.

"""
This subpackage provides functions and data structures for creating
phylogenetic trees of the rows of an alignment.

The :class:`Tree` is the central class in this subpackage.
It wraps a *root* :class:`TreeNode` object.
A :class:`TreeNode` is either an intermediate node, if it has child
:class:`TreeNode` objects, or otherwise a leaf node.
Each leaf node has a reference index, referring to a list of labels,
usually the row names.

A :class:`Tree` can be created from or exported to a *Newick* notation,
using the :func:`Tree.from_newick()` or :func:`Tree.to_newick()` method,
respectively.

A :class:`Tree` can be built from a pairwise distance matrix using the
*Neighbor-Joining* (:func:`neighbor_joining()`) algorithm.
The distances are computed from substitution scores
(:func:`distance_matrix()`).
"""

__name__ = "msaview.phylo"
__author__ = "The msaview contributors"

from .distance import *
from .nj import *
from .tree import *
