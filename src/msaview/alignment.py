# This source code is part of the msaview package and is distributed
# under the 3-Clause BSD License. Please see 'LICENSE.rst' for further
# information.

__name__ = "msaview"
__author__ = "The msaview contributors"
__all__ = [
    "GAP_CHARS",
    "AlignedRow",
    "Alignment",
    "is_gap",
    "get_ungapped_sequence",
    "get_codes",
    "get_gap_mask",
]

from collections import OrderedDict, namedtuple
import numpy as np


GAP_CHARS = frozenset("-.")

AlignedRow = namedtuple("AlignedRow", ["name", "sequence"])


class Alignment(object):
    """
    An ordered collection of aligned rows, as produced by the file
    parsers.

    Each row is a :class:`AlignedRow`, consisting of a row name and the
    gapped sequence string.
    The row order is the order of the rows in the source data.
    All rows in an alignment have the same length, the *width* of the
    alignment.

    Objects of this class are immutable:
    Parsing new data creates a new :class:`Alignment`.

    Parameters
    ----------
    rows : iterable object of tuple(str, str)
        The rows of the alignment as *(name, sequence)* tuples.
        If a name occurs multiple times, the later row replaces the
        earlier one at the position of the earlier one.

    Raises
    ------
    ValueError
        If the sequences have different lengths.

    Examples
    --------

    >>> alignment = Alignment([("seq1", "AC-GT"), ("seq2", "ACCG-")])
    >>> print(alignment.width)
    5
    >>> print(alignment["seq2"])
    ACCG-
    >>> print(alignment.row_at(0))
    AlignedRow(name='seq1', sequence='AC-GT')
    >>> print(alignment)
    seq1 AC-GT
    seq2 ACCG-
    """

    def __init__(self, rows=()):
        self._rows = OrderedDict()
        for name, sequence in rows:
            self._rows[name] = sequence
        lengths = set(len(seq) for seq in self._rows.values())
        if len(lengths) > 1:
            raise ValueError(
                f"Rows have different lengths {sorted(lengths)}, "
                f"but an alignment requires equal lengths"
            )
        self._width = lengths.pop() if len(lengths) == 1 else 0

    @property
    def width(self):
        return self._width

    @property
    def names(self):
        return list(self._rows.keys())

    @property
    def rows(self):
        return [AlignedRow(name, seq) for name, seq in self._rows.items()]

    def row_at(self, index):
        """
        Get the row at the given position.

        Parameters
        ----------
        index : int
            The row index.

        Returns
        -------
        row : AlignedRow
            The row at `index`.
        """
        name = self.names[index]
        return AlignedRow(name, self._rows[name])

    def get_row(self, name, default=""):
        """
        Get the sequence of the row with the given name.

        Parameters
        ----------
        name : str
            The row name.
        default : str, optional
            The value returned for unknown names.

        Returns
        -------
        sequence : str
            The gapped sequence string.
        """
        return self._rows.get(name, default)

    def __getitem__(self, name):
        if isinstance(name, str):
            return self._rows[name]
        elif isinstance(name, (int, np.integer)):
            return self.row_at(name).sequence
        else:
            raise TypeError(
                f"'{type(name).__name__}' is an invalid index type"
            )

    def __contains__(self, name):
        return name in self._rows

    def __iter__(self):
        return iter(self.rows)

    def __len__(self):
        return len(self._rows)

    def __eq__(self, item):
        if not isinstance(item, Alignment):
            return False
        return self.rows == item.rows

    def __repr__(self):
        return f"Alignment({self.rows!r})"

    def __str__(self):
        return "\n".join(f"{name} {seq}" for name, seq in self._rows.items())


def is_gap(char):
    """
    Check whether a character denotes a gap.

    Parameters
    ----------
    char : str
        A single character.

    Returns
    -------
    gap : bool
        True, if `char` is ``'-'`` or ``'.'``.
    """
    return char in GAP_CHARS


def get_ungapped_sequence(sequence):
    """
    Remove all gap characters from a gapped sequence string.

    Parameters
    ----------
    sequence : str
        A row of an alignment.

    Returns
    -------
    ungapped : str
        The sequence without ``'-'`` and ``'.'``.

    Examples
    --------

    >>> print(get_ungapped_sequence("A-C.G"))
    ACG
    """
    return sequence.replace("-", "").replace(".", "")


def get_codes(sequence):
    """
    Get the ASCII codes of a sequence string as :class:`ndarray`.

    Parameters
    ----------
    sequence : str
        The sequence string.
        Non-ASCII characters are replaced by ``'?'``.

    Returns
    -------
    codes : ndarray, dtype=np.uint8
        The character codes.
    """
    return np.frombuffer(
        sequence.encode("ASCII", errors="replace"), dtype=np.uint8
    )


def get_gap_mask(codes):
    """
    Determine which positions of a code array contain gaps.

    Parameters
    ----------
    codes : ndarray, dtype=np.uint8
        Character codes as returned by :func:`get_codes()`.
        May have any shape.

    Returns
    -------
    mask : ndarray, dtype=bool
        True for each ``'-'`` or ``'.'``.
    """
    return (codes == ord("-")) | (codes == ord("."))
