# This source code is part of the msaview package and is distributed
# under the 3-Clause BSD License. Please see 'LICENSE.rst' for further
# information.

__name__ = "msaview.phylo"
__author__ = "The msaview contributors"
__all__ = ["pairwise_distance", "distance_matrix"]

import numpy as np
from ..align.matrix import SubstitutionMatrix
from ..alignment import get_codes, get_gap_mask
from ..error import UnalignedSequencesError


# Similarities are clamped to this range before taking the logarithm
_MIN_SIMILARITY = 0.01
_MAX_SIMILARITY = 1.0


def pairwise_distance(seq1, seq2, matrix=None):
    """
    Compute the evolutionary distance of two aligned sequences, based
    on their substitution scores.

    Columns, where both sequences have a gap, are ignored.
    Columns, where only one sequence has a gap, are counted as
    comparable columns, but do not contribute to the score.
    For the remaining columns, the sum of substitution scores is
    normalized by the maximum possible sum, i.e. the sum over the higher
    self-substitution score of the two residues in each column.
    The distance is the negative logarithm of this similarity, which is
    clamped to ``[0.01, 1]`` beforehand.

    Parameters
    ----------
    seq1, seq2 : str
        The aligned sequences.
        The comparison is case-insensitive.
    matrix : SubstitutionMatrix, optional
        The substitution matrix.
        By default, BLOSUM62 is used.

    Returns
    -------
    distance : float
        The distance.
        1.0, if there is no comparable column or the maximum possible
        score is not positive.

    Raises
    ------
    UnalignedSequencesError
        If the sequences have different lengths.

    Examples
    --------

    >>> print(pairwise_distance("MKAA", "MKAA"))
    0.0
    >>> print(f"{pairwise_distance('MKAAYLSMFG', 'MKAAFLSMFG'):.4f}")
    0.0834
    >>> print(pairwise_distance("--", "--"))
    1.0
    """
    if len(seq1) != len(seq2):
        raise UnalignedSequencesError(
            f"Sequences have different lengths ({len(seq1)} and "
            f"{len(seq2)}), but aligned sequences are required"
        )
    if matrix is None:
        matrix = SubstitutionMatrix.std_protein_matrix()

    codes1 = get_codes(seq1)
    codes2 = get_codes(seq2)
    gaps1 = get_gap_mask(codes1)
    gaps2 = get_gap_mask(codes2)

    comparable_count = np.count_nonzero(~(gaps1 & gaps2))
    if comparable_count == 0:
        return 1.0

    scored = ~(gaps1 | gaps2)
    codes1 = codes1[scored]
    codes2 = codes2[scored]
    total_score = np.sum(
        matrix.get_scores_by_code(codes1, codes2), dtype=np.int64
    )
    max_score = np.sum(np.maximum(
        matrix.get_scores_by_code(codes1, codes1),
        matrix.get_scores_by_code(codes2, codes2)
    ), dtype=np.int64)
    if max_score <= 0:
        return 1.0

    similarity = np.clip(
        total_score / max_score, _MIN_SIMILARITY, _MAX_SIMILARITY
    )
    # Avoid '-0.0' for identical sequences
    return float(-np.log(similarity)) + 0.0


def distance_matrix(rows, matrix=None):
    """
    Compute the pairwise distances of all rows of an alignment.

    Parameters
    ----------
    rows : Alignment or iterable object of tuple(str, str)
        The alignment or its rows as *(name, sequence)* tuples.
    matrix : SubstitutionMatrix, optional
        The substitution matrix.
        By default, BLOSUM62 is used.

    Returns
    -------
    distances : ndarray, shape=(n,n), dtype=float
        The symmetric distance matrix, see :func:`pairwise_distance()`.
        The diagonal is zero.
    """
    sequences = [seq for _, seq in rows]
    n = len(sequences)
    distances = np.zeros((n, n), dtype=float)
    for i in range(n):
        for j in range(i+1, n):
            distances[i, j] = pairwise_distance(
                sequences[i], sequences[j], matrix
            )
            distances[j, i] = distances[i, j]
    return distances
