# This source code is part of the msaview package and is distributed
# under the 3-Clause BSD License. Please see 'LICENSE.rst' for further
# information.

__name__ = "msaview.align"
__author__ = "The msaview contributors"
__all__ = ["SubstitutionMatrix"]

from os import listdir
from os.path import dirname, join, realpath
import numpy as np


_MATRIX_DIR = join(dirname(realpath(__file__)), "matrix_data")


class SubstitutionMatrix(object):
    """
    Integer scores for each pair of residue symbols, used for the
    score based distance measures of the tree builder.

    Symbols are single characters and are looked up without regard to
    case.
    A pair containing a symbol that the matrix does not know scores
    `unknown_score`.

    The scores are given in one of three forms:
    A square :class:`ndarray` in the order of `symbols`,
    a dictionary that maps every pair of `symbols` to its score,
    or the name of a bundled matrix (see :meth:`list_db()`).
    For a bundled matrix `symbols` may be ``None`` to use all symbols
    of the matrix file.

    Instances cannot be modified.

    Parameters
    ----------
    symbols : iterable object of str or None
        The symbols of the matrix.
    score_matrix : ndarray, shape=(n,n) or dict or str
        The scores in one of the forms described above.
    unknown_score : int, optional
        The score of pairs with unknown symbols.

    Raises
    ------
    KeyError
        If the dictionary lacks a pair of `symbols`.

    Examples
    --------

    >>> matrix = SubstitutionMatrix("AC", np.array([[2, -1], [-1, 3]]))
    >>> print(matrix)
        A   C
    A   2  -1
    C  -1   3
    >>> print(matrix.get_score("a", "C"))
    -1
    >>> print(matrix.get_score("A", "W"))
    -4

    >>> matrix = SubstitutionMatrix(None, "BLOSUM62")
    >>> print(matrix.get_score("W", "W"))
    11
    """

    def __init__(self, symbols, score_matrix, unknown_score=-4):
        if isinstance(score_matrix, str):
            score_matrix = SubstitutionMatrix.dict_from_db(score_matrix)
            if symbols is None:
                # Order of first appearance in the matrix file
                symbols = list(dict.fromkeys(
                    first for first, _ in score_matrix
                ))
        if symbols is None:
            raise TypeError("No symbols are given")
        self._symbols = tuple(symbols)
        invalid = [symbol for symbol in self._symbols if len(symbol) != 1]
        if len(invalid) > 0:
            raise ValueError(
                f"Only single character symbols are supported, "
                f"got {invalid}"
            )
        self._unknown_score = unknown_score

        n = len(self._symbols)
        if isinstance(score_matrix, dict):
            self._matrix = np.array(
                [[score_matrix[row, col] for col in self._symbols]
                 for row in self._symbols],
                dtype=np.int32
            ).reshape(n, n)
        elif isinstance(score_matrix, np.ndarray):
            if score_matrix.shape != (n, n):
                raise ValueError(
                    f"Expected a score matrix of shape {(n, n)}, "
                    f"got {score_matrix.shape}"
                )
            self._matrix = score_matrix.astype(np.int32)
        else:
            raise TypeError(
                f"Expected scores as ndarray, dict or matrix name, "
                f"got '{type(score_matrix).__name__}'"
            )
        self._matrix.setflags(write=False)
        self._lookup = self._build_lookup()

    def _build_lookup(self):
        # Scores indexed by the code points of both symbols, which
        # allows vectorized scoring of byte arrays
        lookup = np.full((256, 256), self._unknown_score, dtype=np.int32)
        codes = [
            [ord(variant) for variant in {symbol.upper(), symbol.lower()}
             if ord(variant) < 256]
            for symbol in self._symbols
        ]
        for i, row_codes in enumerate(codes):
            for j, col_codes in enumerate(codes):
                lookup[np.ix_(row_codes, col_codes)] = self._matrix[i, j]
        lookup.setflags(write=False)
        return lookup

    @property
    def symbols(self):
        return self._symbols

    @property
    def unknown_score(self):
        return self._unknown_score

    def score_matrix(self):
        """
        Get the scores as read-only :class:`ndarray`.

        Returns
        -------
        matrix : ndarray, shape=(n,n), dtype=np.int32
            The scores, indexed in the order of :attr:`symbols`.
        """
        return self._matrix

    def get_score(self, symbol1, symbol2):
        """
        Get the score of a symbol pair.

        Parameters
        ----------
        symbol1, symbol2 : str
            The paired symbols.

        Returns
        -------
        score : int
            The score of the pair.
        """
        code1, code2 = ord(symbol1), ord(symbol2)
        if max(code1, code2) > 255:
            return self._unknown_score
        return int(self._lookup[code1, code2])

    def get_scores_by_code(self, codes1, codes2):
        """
        Get the scores of many symbol pairs at once.

        Parameters
        ----------
        codes1, codes2 : ndarray, dtype=np.uint8
            The character codes of the paired symbols.

        Returns
        -------
        scores : ndarray, dtype=np.int32
            The score of each pair.
        """
        return self._lookup[codes1, codes2]

    def shape(self):
        return self._matrix.shape

    def __str__(self):
        header = " " + "".join(f" {symbol:>3}" for symbol in self._symbols)
        rows = [
            symbol + "".join(f" {int(score):>3d}" for score in scores)
            for symbol, scores in zip(self._symbols, self._matrix)
        ]
        return "\n".join([header] + rows)

    @staticmethod
    def dict_from_str(string):
        """
        Read scores in the NCBI matrix format.

        The first line that is neither empty nor a ``#`` comment lists
        the column symbols.
        Each following line starts with the row symbol followed by the
        scores.

        Parameters
        ----------
        string : str
            The matrix text.

        Returns
        -------
        matrix_dict : dict
            Maps each (row symbol, column symbol) tuple to its score.
        """
        lines = [
            line.split() for line in string.splitlines()
            if len(line.strip()) > 0 and not line.strip().startswith("#")
        ]
        col_symbols = lines[0]
        return {
            (fields[0], col_symbol): int(score)
            for fields in lines[1:]
            for col_symbol, score in zip(col_symbols, fields[1:])
        }

    @staticmethod
    def dict_from_db(matrix_name):
        """
        Read the scores of a bundled matrix.

        Parameters
        ----------
        matrix_name : str
            A name from :meth:`list_db()`.

        Returns
        -------
        matrix_dict : dict
            Maps each (row symbol, column symbol) tuple to its score.
        """
        with open(join(_MATRIX_DIR, matrix_name + ".mat"), "r") as f:
            return SubstitutionMatrix.dict_from_str(f.read())

    @staticmethod
    def list_db():
        """
        Get the names of the bundled matrices.

        Returns
        -------
        db_list : list of str
            The matrix names in alphabetical order.
        """
        return sorted(
            file_name[:-len(".mat")] for file_name in listdir(_MATRIX_DIR)
            if file_name.endswith(".mat")
        )

    @staticmethod
    def std_protein_matrix():
        """
        Get *BLOSUM62*, the default matrix for protein sequences.

        Returns
        -------
        matrix : SubstitutionMatrix
            The *BLOSUM62* matrix.
        """
        return _BLOSUM62


_BLOSUM62 = SubstitutionMatrix(None, "BLOSUM62")
