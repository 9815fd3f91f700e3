# This source code is part of the msaview package and is distributed
# under the 3-Clause BSD License. Please see 'LICENSE.rst' for further
# information.

"""
Conversion between the three position spaces of an alignment view.

*Global column*
    The column index in the full alignment, in the range
    ``[0, width)``.
*Visible column*
    The column index after columns with too many gaps were hidden.
    The hidden global columns are called *blanks*.
    If no column is hidden, the visible column equals the global column.
*Sequence position*
    The position in the ungapped sequence of a single row, i.e. only
    characters other than ``'-'`` and ``'.'`` are counted.

Lookups that have no answer, e.g. the visible column of a hidden
column, return ``None``.
"""

__name__ = "msaview"
__author__ = "The msaview contributors"
__all__ = [
    "DEFAULT_GAP_THRESHOLD",
    "compute_blanks",
    "visible_to_global",
    "global_to_visible",
    "global_to_seq_pos",
    "seq_pos_to_global",
    "visible_to_seq_pos",
    "seq_pos_to_visible",
    "ColumnMapper",
]

import math
import numpy as np
from .alignment import get_codes, get_gap_mask, is_gap


# A threshold of 100% hides nothing
DEFAULT_GAP_THRESHOLD = 100


def compute_blanks(alignment, threshold=DEFAULT_GAP_THRESHOLD):
    """
    Find the columns of an alignment, that are hidden due to their gap
    content.

    A column is hidden, if the number of gaps in this column is at
    least ``ceil(threshold / 100 * row_count)``.

    Parameters
    ----------
    alignment : Alignment
        The alignment.
    threshold : int or float
        The gap percentage in ``(0, 100]``, from which on a column is
        hidden.
        A threshold of 100 never hides any column, even if the column
        contains only gaps.

    Returns
    -------
    blanks : ndarray, dtype=int
        The sorted global indices of hidden columns.

    Examples
    --------

    >>> alignment = Alignment([("a", "A-C-"), ("b", "A-CG"), ("c", "AT-G")])
    >>> print(compute_blanks(alignment, 50))
    [1]
    >>> print(compute_blanks(alignment, 30))
    [1 2 3]
    >>> print(compute_blanks(alignment, 100))
    []
    """
    if threshold <= 0 or threshold > 100:
        raise ValueError(
            f"Gap threshold must be in the range (0, 100], not {threshold}"
        )
    if threshold == 100 or len(alignment) == 0 or alignment.width == 0:
        return np.zeros(0, dtype=int)

    codes = np.stack([get_codes(seq) for _, seq in alignment])
    gap_count = np.count_nonzero(get_gap_mask(codes), axis=0)
    min_gaps = math.ceil(threshold / 100 * len(alignment))
    return np.nonzero(gap_count >= min_gaps)[0]


def visible_to_global(blanks, visible_col):
    """
    Convert a visible column into the corresponding global column.

    Parameters
    ----------
    blanks : array-like of int
        The sorted global indices of hidden columns.
    visible_col : int
        The visible column.

    Returns
    -------
    global_col : int
        The global column.
    """
    global_col = int(visible_col)
    # Each hidden column at or before the current position shifts the
    # position by one
    for blank in blanks:
        if blank <= global_col:
            global_col += 1
        else:
            break
    return global_col


def global_to_visible(blanks, global_col):
    """
    Convert a global column into the corresponding visible column.

    Parameters
    ----------
    blanks : array-like of int
        The sorted global indices of hidden columns.
    global_col : int
        The global column.

    Returns
    -------
    visible_col : int or None
        The visible column.
        ``None``, if the global column is hidden.
    """
    blanks = np.asarray(blanks)
    blanks_before = int(np.searchsorted(blanks, global_col, side="left"))
    if blanks_before < len(blanks) and blanks[blanks_before] == global_col:
        return None
    return int(global_col) - blanks_before


def global_to_seq_pos(row, global_col):
    """
    Get the number of residues in a row before the given global column.

    Parameters
    ----------
    row : str
        The gapped sequence of the row.
    global_col : int
        The global column.

    Returns
    -------
    seq_pos : int
        The count of non-gap characters in ``row[:global_col]``.
    """
    if global_col <= 0:
        return 0
    return int(np.count_nonzero(~get_gap_mask(get_codes(row[:global_col]))))


def seq_pos_to_global(row, seq_pos):
    """
    Get the global column of a residue in a row.

    Parameters
    ----------
    row : str
        The gapped sequence of the row.
    seq_pos : int
        The 0-based position in the ungapped sequence.

    Returns
    -------
    global_col : int
        The column of the `seq_pos`-th non-gap character.
        If the ungapped sequence is not long enough, the length of the
        row is returned instead.
        A row without any residue maps position 0 to column 0.

    Examples
    --------

    >>> print(seq_pos_to_global("A-TG-C", 1))
    2
    >>> print(seq_pos_to_global("A-TG-C", 10))
    6
    """
    residue_cols = np.nonzero(~get_gap_mask(get_codes(row)))[0]
    if seq_pos < len(residue_cols):
        return int(residue_cols[seq_pos])
    return 0 if seq_pos == 0 else len(row)


def visible_to_seq_pos(row, blanks, visible_col):
    """
    Convert a visible column into a sequence position of the given row.

    Parameters
    ----------
    row : str
        The gapped sequence of the row.
    blanks : array-like of int
        The sorted global indices of hidden columns.
    visible_col : int
        The visible column.

    Returns
    -------
    seq_pos : int or None
        The sequence position.
        ``None``, if the row has a gap at this column or the column is
        outside of the row.
    """
    global_col = visible_to_global(blanks, visible_col)
    if global_col >= len(row) or is_gap(row[global_col]):
        return None
    return global_to_seq_pos(row, global_col)


def seq_pos_to_visible(row, blanks, seq_pos):
    """
    Convert a sequence position of the given row into a visible column.

    Parameters
    ----------
    row : str
        The gapped sequence of the row.
    blanks : array-like of int
        The sorted global indices of hidden columns.
    seq_pos : int
        The 0-based position in the ungapped sequence.

    Returns
    -------
    visible_col : int or None
        The visible column.
        ``None``, if the column of the residue is hidden.
    """
    return global_to_visible(blanks, seq_pos_to_global(row, seq_pos))


class ColumnMapper(object):
    """
    Coordinate conversion for a fixed alignment and gap threshold.

    The hidden columns are computed once on first access.
    Rows are addressed by their name;
    for unknown row names the row based lookups return ``None``.

    Parameters
    ----------
    alignment : Alignment
        The alignment.
    gap_threshold : int or float, optional
        The gap percentage from which on a column is hidden.
        By default no column is hidden.

    Examples
    --------

    >>> alignment = Alignment([("a", "A--C"), ("b", "AG-C")])
    >>> mapper = ColumnMapper(alignment, gap_threshold=100)
    >>> print(mapper.visible_width)
    4
    >>> mapper = ColumnMapper(alignment, gap_threshold=50)
    >>> print(mapper.blanks)
    [1 2]
    >>> print(mapper.visible_to_global(1))
    3
    >>> print(mapper.visible_to_seq_pos("b", 1))
    2
    """

    def __init__(self, alignment, gap_threshold=DEFAULT_GAP_THRESHOLD):
        self._alignment = alignment
        self._threshold = gap_threshold
        self._blanks = None

    @property
    def alignment(self):
        return self._alignment

    @property
    def gap_threshold(self):
        return self._threshold

    @property
    def blanks(self):
        if self._blanks is None:
            self._blanks = compute_blanks(self._alignment, self._threshold)
        return self._blanks

    @property
    def visible_width(self):
        return self._alignment.width - len(self.blanks)

    def visible_to_global(self, visible_col):
        return visible_to_global(self.blanks, visible_col)

    def global_to_visible(self, global_col):
        return global_to_visible(self.blanks, global_col)

    def global_to_seq_pos(self, name, global_col):
        row = self._alignment.get_row(name, None)
        if row is None:
            return None
        return global_to_seq_pos(row, global_col)

    def seq_pos_to_global(self, name, seq_pos):
        row = self._alignment.get_row(name, None)
        if row is None:
            return None
        return seq_pos_to_global(row, seq_pos)

    def visible_to_seq_pos(self, name, visible_col):
        row = self._alignment.get_row(name, None)
        if row is None:
            return None
        return visible_to_seq_pos(row, self.blanks, visible_col)

    def seq_pos_to_visible(self, name, seq_pos):
        row = self._alignment.get_row(name, None)
        if row is None:
            return None
        return seq_pos_to_visible(row, self.blanks, seq_pos)
