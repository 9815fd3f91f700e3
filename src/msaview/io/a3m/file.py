# This source code is part of the msaview package and is distributed
# under the 3-Clause BSD License. Please see 'LICENSE.rst' for further
# information.

__name__ = "msaview.io.a3m"
__author__ = "The msaview contributors"
__all__ = ["A3MFile"]

import re
import numpy as np
from ...alignment import Alignment
from ...file import InvalidFileError
from ..msafile import MSAFile


_WHITESPACE = re.compile(r"\s")
_UNKNOWN = re.compile(r"[^A-Za-z.\-]")
_LOWER = re.compile(r"[a-z]")
_NOT_LOWER = re.compile(r"[^a-z]")
# Standard A3M: upper case letters and '-' are match states,
# lower case letters and '.' are insert states
_STRICT_PREFIX = re.compile(r"[a-z.]*")
_STRICT_STATE = re.compile(r"([A-Z\-])([a-z.]*)")
# Lenient A3M: only upper case letters are match states, gaps directly
# following a match are part of its insert run;
# gaps before the first upper case letter are match states
_LENIENT_PREFIX = re.compile(r"[a-z]*")
_LENIENT_LEADING_STATE = re.compile(r"([\-.])([a-z]*)")
_LENIENT_STATE = re.compile(r"([A-Z])([a-z.\-]*)")


class A3MFile(MSAFile):
    """
    This class represents a file in *A3M* format.

    *A3M* is a FASTA-shaped alignment format, where each row only
    contains the residues aligned to match positions in upper case,
    deletions as ``-`` and residues inserted relative to the match
    positions in lower case.
    Gaps aligned to inserts (``.``) may be omitted, so that the raw rows
    may have different lengths.

    On reading, each row is decomposed into its match positions and the
    insert runs attached to them.
    The alignment is then expanded:
    For each match position the insert runs of all rows are padded with
    ``.`` to the longest insert run at this position and the inserted
    residues are converted to upper case.

    A row may start with an insert run, before any match position.
    In this case a placeholder column ``-`` is prepended to all rows.
    Records without sequence are filled with ``-``.

    Two decompositions are attempted:
    At first, the standard one, where ``-`` is a match state and ``.``
    an insert state.
    If the rows disagree in their number of match positions, gaps
    directly following a match position are treated as part of its
    insert run.

    Examples
    --------

    >>> file = A3MFile.from_text(">seq1\\nACDaEF\\n>seq2\\nACD-EF\\n")
    >>> print(file.get_alignment())
    seq1 ACDAEF
    seq2 ACD.EF
    """

    def __init__(self):
        super().__init__()
        self._alignment = Alignment()

    def _parse(self):
        records = _read_records(self.lines)
        if len(records) == 0:
            self._alignment = Alignment()
            return
        names = [name for name, _ in records]
        # Records without sequence are ignored for the decomposition,
        # like in 'sniff()', and become rows consisting of gaps
        filled = [i for i, (_, raw_seq) in enumerate(records) if raw_seq]
        rows = [""] * len(records)
        if len(filled) > 0:
            decompositions = _decompose_consistently(
                [records[i][1] for i in filled]
            )
            if decompositions is None:
                raise InvalidFileError(
                    "The rows have different numbers of match positions"
                )
            expanded = _expand(decompositions)
            rows = ["-" * len(expanded[0])] * len(records)
            for i, row in zip(filled, expanded):
                rows[i] = row
        self._alignment = Alignment(zip(names, rows))

    def get_alignment(self):
        return self._alignment

    @staticmethod
    def sniff(text):
        """
        Check whether the given text is probably in *A3M* format.

        This is the case, if the text is FASTA-shaped, contains at
        least two sequences with at least one lower case character and
        all rows have the same number of match positions.

        Parameters
        ----------
        text : str
            The file content.

        Returns
        -------
        is_a3m : bool
            True, if the text is probably in *A3M* format.
        """
        if not text.startswith(">"):
            return False
        seqs = [
            raw_seq for _, raw_seq in _read_records(text.splitlines())
            if len(raw_seq) > 0
        ]
        if len(seqs) < 2:
            return False
        if not any(_LOWER.search(seq) for seq in seqs):
            return False
        return _decompose_consistently(seqs) is not None


def _read_records(lines):
    """
    Split FASTA-shaped lines into *(name, raw sequence)* tuples.
    """
    records = []
    name = None
    seq_parts = []
    for line in lines:
        if line.startswith(">"):
            if name:
                records.append((name, "".join(seq_parts)))
            name = line[1:].split(" ")[0].strip()
            seq_parts = []
        elif name is not None:
            seq_parts.append(_WHITESPACE.sub("", line))
    if name:
        records.append((name, "".join(seq_parts)))
    return records


def _decompose_consistently(raw_seqs):
    """
    Decompose all rows with the first decomposition rule, that gives
    each row the same number of match positions.
    Return ``None``, if there is no such rule.
    """
    for decompose in (_decompose_strict, _decompose_lenient):
        decompositions = [decompose(seq) for seq in raw_seqs]
        if len(set(len(states) for _, states in decompositions)) <= 1:
            return decompositions
    return None


def _decompose_strict(raw_seq):
    """
    Decompose a row into its leading insert run and a list of
    *(match character, insert run)* tuples.
    """
    seq = _UNKNOWN.sub("", raw_seq)
    prefix = _STRICT_PREFIX.match(seq).group()
    states = _STRICT_STATE.findall(seq, len(prefix))
    return prefix, states


def _decompose_lenient(raw_seq):
    seq = _UNKNOWN.sub("", raw_seq)
    prefix = _LENIENT_PREFIX.match(seq).group()
    first_upper = re.search(r"[A-Z]", seq)
    leading_end = first_upper.start() if first_upper else len(seq)
    states = _LENIENT_LEADING_STATE.findall(seq[:leading_end], len(prefix))
    states += _LENIENT_STATE.findall(seq, leading_end)
    return prefix, states


def _insert_residues(insert_run):
    # Gaps within insert runs only reserve space,
    # they are recreated by the padding
    return _NOT_LOWER.sub("", insert_run).upper()


def _expand(decompositions):
    prefix_lengths = np.array(
        [len(_insert_residues(prefix)) for prefix, _ in decompositions]
    )
    max_prefix = int(prefix_lengths.max())
    position_count = max(len(states) for _, states in decompositions)

    insert_lengths = np.zeros(
        (len(decompositions), position_count), dtype=int
    )
    for i, (_, states) in enumerate(decompositions):
        for j, (_, insert_run) in enumerate(states):
            insert_lengths[i, j] = len(_insert_residues(insert_run))
    max_inserts = insert_lengths.max(axis=0)

    expanded = []
    for prefix, states in decompositions:
        parts = []
        if max_prefix > 0:
            # Placeholder match position for leading inserts
            residues = _insert_residues(prefix)
            parts += ["-", residues, "." * (max_prefix - len(residues))]
        for (match, insert_run), max_insert in zip(states, max_inserts):
            residues = _insert_residues(insert_run)
            parts += [match, residues, "." * int(max_insert - len(residues))]
        expanded.append("".join(parts))
    return expanded
