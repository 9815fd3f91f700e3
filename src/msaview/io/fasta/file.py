# This source code is part of the msaview package and is distributed
# under the 3-Clause BSD License. Please see 'LICENSE.rst' for further
# information.

__name__ = "msaview.io.fasta"
__author__ = "The msaview contributors"
__all__ = ["FastaFile"]

import re
import warnings
from collections import OrderedDict
from collections.abc import MutableMapping
from ...alignment import Alignment
from ...error import DuplicateNameWarning, UnequalLengthWarning
from ...file import InvalidFileError, wrap_string
from ..msafile import MSAFile


_WHITESPACE = re.compile(r"\s")


class FastaFile(MSAFile, MutableMapping):
    """
    This class represents an alignment file in FASTA format.

    Each record of the file consists of a *defline*, starting with
    ``>``, and the (gapped) sequence in the lines up to the next
    defline.
    Empty lines and comment lines starting with ``;`` are ignored.

    The file can be accessed like a dictionary:
    The keys are the deflines without ``>``, the values are the
    sequence strings of the records.
    Assigning a sequence to a new defline appends a record to the file,
    assigning to an existing one moves the record to the end.

    When the records are interpreted as alignment via
    :meth:`get_alignment()`, the row name is the defline up to the
    first space and all whitespace is removed from the sequence.
    Records without row name or sequence are skipped.
    As FASTA does not guarantee aligned sequences, rows shorter than
    the longest row are padded with ``-`` at their end, which is
    reported with an :class:`UnequalLengthWarning`.

    Parameters
    ----------
    chars_per_line : int, optional
        The sequence of a record written via item assignment is wrapped
        into lines of this length.

    Examples
    --------

    >>> file = FastaFile()
    >>> file["seq1 first sequence"] = "AC-GT"
    >>> file["seq2"] = "ACCG-"
    >>> print(file)
    >seq1 first sequence
    AC-GT
    >seq2
    ACCG-
    >>> print(file.get_names())
    ['seq1', 'seq2']
    >>> print(file.get_row("seq1"))
    AC-GT
    """

    def __init__(self, chars_per_line=80):
        super().__init__()
        self._chars_per_line = chars_per_line
        # Maps deflines to the line range of their record
        self._records = OrderedDict()

    @classmethod
    def read(cls, file, chars_per_line=80):
        """
        Read a FASTA file.

        Parameters
        ----------
        file : file-like object or str
            The file to be read.
            Alternatively a file path can be supplied.
        chars_per_line : int, optional
            The line length for records added afterwards.

        Returns
        -------
        file_object : FastaFile
            The parsed file.
        """
        return super().read(file, chars_per_line)

    def _parse(self):
        self.lines = [
            line for line in self.lines
            if len(line.strip()) > 0 and not line.startswith(";")
        ]
        self._index_records()

    def get_alignment(self):
        rows = OrderedDict()
        for defline, seq_str in self.items():
            name = defline.split(" ")[0]
            seq_str = _WHITESPACE.sub("", seq_str)
            if len(name) == 0 or len(seq_str) == 0:
                continue
            if name in rows:
                warnings.warn(
                    f"Row name '{name}' occurs multiple times, "
                    f"the last occurrence is used",
                    DuplicateNameWarning
                )
            rows[name] = seq_str
        width = max((len(seq_str) for seq_str in rows.values()), default=0)
        short_names = [
            name for name, seq_str in rows.items() if len(seq_str) < width
        ]
        if len(short_names) > 0:
            warnings.warn(
                f"{len(short_names)} rows are shorter than the longest row "
                f"with {width} characters and are padded with gaps",
                UnequalLengthWarning
            )
        return Alignment(
            (name, seq_str.ljust(width, "-"))
            for name, seq_str in rows.items()
        )

    def __getitem__(self, defline):
        _check_defline(defline)
        start, stop = self._records[defline]
        return "".join(line.strip() for line in self.lines[start+1 : stop])

    def __setitem__(self, defline, seq_str):
        _check_defline(defline)
        if not isinstance(seq_str, str):
            raise TypeError(
                f"Expected a sequence string, "
                f"but got '{type(seq_str).__name__}'"
            )
        if defline in self._records:
            del self[defline]
        record_lines = [">" + defline.replace("\n", "").strip()]
        record_lines += wrap_string(seq_str, self._chars_per_line)
        start = len(self.lines)
        self.lines += record_lines
        self._records[defline] = (start, len(self.lines))

    def __delitem__(self, defline):
        start, stop = self._records[defline]
        del self.lines[start:stop]
        # Line ranges of the following records are shifted
        self._index_records()

    def __len__(self):
        return len(self._records)

    def __iter__(self):
        return iter(self._records)

    def __contains__(self, defline):
        return defline in self._records

    def _index_records(self):
        if len(self.lines) > 0 and not self.lines[0].startswith(">"):
            raise InvalidFileError(
                f"Expected a defline starting with '>' as first line, "
                f"but got '{self.lines[0]}'"
            )
        starts = [i for i, line in enumerate(self.lines)
                  if line.startswith(">")]
        stops = starts[1:] + [len(self.lines)]
        self._records = OrderedDict(
            (self.lines[start].strip()[1:], (start, stop))
            for start, stop in zip(starts, stops)
        )


def _check_defline(defline):
    if not isinstance(defline, str):
        raise IndexError(
            f"Records are addressed by their defline string, "
            f"not by '{type(defline).__name__}'"
        )
