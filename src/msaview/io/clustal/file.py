# This source code is part of the msaview package and is distributed
# under the 3-Clause BSD License. Please see 'LICENSE.rst' for further
# information.

__name__ = "msaview.io.clustal"
__author__ = "The msaview contributors"
__all__ = ["ClustalFile"]

import re
import warnings
from collections import OrderedDict
from ...alignment import Alignment
from ...error import MalformedLineWarning
from ...file import InvalidFileError
from ..msafile import MSAFile


# Programs writing Clustal-like headers
_HEADER = re.compile(r"^(CLUSTAL|MUSCLE|PROBCONS|T-COFFEE|MAFFT)", re.I)


class ClustalFile(MSAFile):
    """
    This class represents a file in *Clustal* format or a similar
    columnar format.

    After an optional header line (e.g. ``CLUSTAL W (1.83) ...``),
    the alignment is given in blocks of lines, each consisting of the
    row name, a chunk of the row sequence and optionally the cumulative
    residue count.
    The chunks of each row are concatenated in block order.
    Lines starting with whitespace are the conservation annotation of
    the preceding block.

    Lines that do not fit into this scheme are ignored with a
    :class:`MalformedLineWarning`.

    Examples
    --------

    >>> text = (
    ...     "CLUSTAL W (1.83) multiple sequence alignment\\n"
    ...     "\\n"
    ...     "seq1      ACDE 4\\n"
    ...     "seq2      AC-E 3\\n"
    ...     "          ** *\\n"
    ... )
    >>> file = ClustalFile.from_text(text)
    >>> print(file.get_alignment())
    seq1 ACDE
    seq2 AC-E
    >>> print(repr(file.consensus))
    '** *'
    """

    def __init__(self):
        super().__init__()
        self._rows = OrderedDict()
        self._consensus = ""

    def _parse(self):
        self._rows = OrderedDict()
        consensus_parts = []
        # The character offset and width of the sequence chunks in the
        # current block
        data_offset = None
        block_width = 0
        for line_i, line in enumerate(self.lines):
            if len(line.strip()) == 0:
                continue
            if line_i == 0 and _HEADER.match(line):
                continue
            if line[0].isspace():
                if data_offset is not None:
                    conservation = line[data_offset : data_offset+block_width]
                    consensus_parts.append(conservation.ljust(block_width))
                    data_offset = None
                continue

            fields = line.split()
            if len(fields) not in (2, 3) or \
               (len(fields) == 3 and not fields[2].isdigit()):
                    warnings.warn(
                        f"Line {line_i + 1} is ignored, as it is not a "
                        f"sequence line: '{line}'",
                        MalformedLineWarning
                    )
                    continue
            name, chunk = fields[:2]
            self._rows[name] = self._rows.get(name, "") + chunk
            data_offset = line.index(chunk, len(name))
            block_width = len(chunk)
        self._consensus = "".join(consensus_parts)

    def get_alignment(self):
        try:
            return Alignment(self._rows.items())
        except ValueError as e:
            raise InvalidFileError(str(e))

    @property
    def consensus(self):
        """
        The concatenated conservation annotation, or an empty string if
        the file has none.
        """
        return self._consensus

    @property
    def tracks(self):
        if len(self._consensus.strip()) == 0:
            return []
        return [{
            "id": "conservation",
            "name": "Conservation",
            "data": self._consensus,
            "color_scheme": {},
        }]
