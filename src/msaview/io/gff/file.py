# This source code is part of the msaview package and is distributed
# under the 3-Clause BSD License. Please see 'LICENSE.rst' for further
# information.

__name__ = "msaview.io.gff"
__author__ = "The msaview contributors"
__all__ = ["GFFRecord", "GFFFile", "parse_gff"]

import math
import warnings
from collections import namedtuple
from urllib.parse import quote, unquote
from ...error import MalformedLineWarning
from ...file import TextFile


# Characters that are not percent-encoded in addition to
# alphanumerics and '_.-~', mirroring 'encodeURIComponent()'
_NOT_QUOTED = "!*'()"

GFFRecord = namedtuple(
    "GFFRecord",
    ["seqid", "source", "type", "start", "end",
     "score", "strand", "phase", "attributes"]
)


class GFFFile(TextFile):
    """
    A feature annotation file in
    `GFF3 <https://github.com/The-Sequence-Ontology/Specifications/blob/master/gff3.md>`_
    format.

    The viewer uses GFF3 for domain annotations of the alignment rows,
    as they are produced by *InterProScan*.

    The file behaves like a sequence of :class:`GFFRecord` objects,
    one for each feature line:

    ==============  =========  ==================================================
    **seqid**       ``str``    Row name of the annotated sequence
    **source**      ``str``    Database or tool (e.g. ``Pfam``)
    **type**        ``str``    Feature type (e.g. ``protein_match``)
    **start**       ``int``    First residue of the feature, 0 if missing
    **end**         ``int``    Last residue of the feature, 0 if missing
    **score**       ``float``  Score, e.g. an E-value, 0 if missing
    **strand**      ``str``    ``+``, ``-`` or ``.``
    **phase**       ``str``    ``0``, ``1``, ``2`` or ``.``
    **attributes**  ``dict``   Further properties as key-value pairs
    ==============  =========  ==================================================

    Comment lines (``#``) and directive lines (``##``) are not part of
    this sequence, so a record index usually differs from the line
    index.

    Parsing is lenient:
    Absent columns take default values and numeric columns that do not
    contain a finite number are read as 0.
    Attribute values are percent-decoded, commas separating multiple
    values become spaces and keys without value map to ``None``.

    Notes
    -----
    Everything from a ``##FASTA`` directive on is ignored with a
    :class:`MalformedLineWarning`.

    Examples
    --------
    Reading feature lines:

    >>> text = (
    ...     "##gff-version 3\\n"
    ...     "seq1\\tPfam\\tprotein_match\\t10\\t50\\t1.5\\t.\\t.\\t"
    ...     "Name=PF00001;signature_desc=7tm_1\\n"
    ... )
    >>> gff_file = GFFFile.from_text(text)
    >>> print(len(gff_file))
    1
    >>> record = gff_file[0]
    >>> print(record.seqid, record.source, record.start, record.end)
    seq1 Pfam 10 50
    >>> print(record.attributes)
    {'Name': 'PF00001', 'signature_desc': '7tm_1'}

    Creating a file:

    >>> gff_file = GFFFile()
    >>> gff_file.append(
    ...     "seq1", "InterProScan", "protein_match", 10, 50,
    ...     None, None, None, {"Name": "PF00001", "description": "A; B"}
    ... )
    >>> print(gff_file)   #doctest: +NORMALIZE_WHITESPACE
    ##gff-version 3
    seq1    InterProScan    protein_match   10      50      .       .       .       Name=PF00001;description=A%3B%20B
    """

    def __init__(self):
        super().__init__()
        self.lines = ["##gff-version 3"]
        # Line index of each feature line
        self._feature_lines = []
        # (text without '##', line index) of each directive line
        self._directive_lines = []
        self._truncated = False
        self._parse()

    def _parse(self):
        self._feature_lines = []
        self._directive_lines = []
        self._truncated = False
        for line_i, line in enumerate(self.lines):
            line = line.strip()
            if line.startswith("##"):
                self._directive_lines.append((line[2:], line_i))
                if line == "##FASTA":
                    self._truncated = True
                    warnings.warn(
                        f"Sequence data after line {line_i + 1} is not "
                        f"supported in GFF3 files and is ignored",
                        MalformedLineWarning
                    )
                    break
            elif len(line) > 0 and not line.startswith("#"):
                self._feature_lines.append(line_i)

    def append(self, seqid, source, type, start, end,
               score, strand, phase, attributes):
        """
        Add a feature line at the end of the file.

        Parameters
        ----------
        seqid : str
            Row name of the annotated sequence.
        source : str
            Database or tool the feature originates from.
        type : str
            Feature type.
        start, end : int
            First and last residue of the feature.
        score : float or None
            The score, ``None`` if the feature has none.
        strand : str or None
            ``None`` for features without strand.
        phase : int or str or None
            ``None`` for features without reading frame.
        attributes : dict
            Further properties.
            Keys and values are percent-encoded.

        Raises
        ------
        NotImplementedError
            If the file was truncated at a ``##FASTA`` directive.
        ValueError
            If a required column is empty or `seqid` starts with ``>``.
        """
        if self._truncated:
            raise NotImplementedError(
                "No features can be added after a '##FASTA' directive"
            )
        self.lines.append(_format_line(
            seqid, source, type, start, end, score, strand, phase, attributes
        ))
        self._feature_lines.append(len(self.lines) - 1)

    def directives(self):
        """
        Get the directive lines of the file.

        Returns
        -------
        directives : list of tuple(str, int)
            The directive text without leading ``##`` together with
            its line index, in the order of the file.
        """
        return list(self._directive_lines)

    def __getitem__(self, index):
        if not -len(self) <= index < len(self):
            raise IndexError(
                f"Feature {index} does not exist in a GFF3 file with "
                f"{len(self)} features"
            )
        columns = self.lines[self._feature_lines[index]].strip().split("\t")
        columns += [""] * (9 - len(columns))
        seqid, source, type, start, end, score, strand, phase, attrib \
            = columns[:9]
        return GFFRecord(
            unquote(seqid),
            unquote(source),
            unquote(type),
            int(_to_number(start)),
            int(_to_number(end)),
            float(_to_number(score)),
            strand if strand else ".",
            phase if phase else ".",
            _parse_attributes(attrib),
        )

    def __delitem__(self, index):
        del self.lines[self._feature_lines[index]]
        self._parse()

    def __len__(self):
        return len(self._feature_lines)


def parse_gff(text):
    """
    Parse the entries of GFF3 text.

    Parameters
    ----------
    text : str or None
        The GFF3 text.

    Returns
    -------
    records : list of GFFRecord
        The entries in the order of the text.
        Empty for empty or missing text.

    Examples
    --------

    >>> records = parse_gff("seq1\\tSource\\ttype")
    >>> print(records[0])
    GFFRecord(seqid='seq1', source='Source', type='type', start=0, end=0, score=0.0, strand='.', phase='.', attributes={})
    """
    if not text:
        return []
    gff_file = GFFFile.from_text(text)
    return [gff_file[i] for i in range(len(gff_file))]


def _format_line(seqid, source, type, start, end,
                 score, strand, phase, attributes):
    seqid = "." if seqid is None else seqid.strip()
    source = "." if source is None else source.strip()
    type = type.strip()
    for column, value in (("seqid", seqid), ("source", source),
                          ("type", type)):
        if len(value) == 0:
            raise ValueError(f"The '{column}' column is empty")
    if seqid.startswith(">"):
        raise ValueError(f"The seqid '{seqid}' starts with '>'")
    if len(attributes) == 0:
        raise ValueError("At least one attribute is required")

    attrib = ";".join(
        f"{_quote(key)}={_quote(value)}" for key, value in attributes.items()
    )
    columns = [
        _quote(seqid), _quote(source), type, start, end,
        "." if score is None else score,
        "." if strand is None else strand,
        "." if phase is None else phase,
        attrib,
    ]
    return "\t".join(str(column) for column in columns)


def _parse_attributes(attrib):
    attributes = {}
    for pair in attrib.split(";"):
        pair = pair.strip()
        if len(pair) == 0:
            continue
        key, _, value = pair.partition("=")
        key = key.strip()
        if len(key) == 0:
            warnings.warn(
                f"Attribute '{pair}' without key is ignored",
                MalformedLineWarning
            )
            continue
        # Multiple values are separated by commas
        attributes[key] = (
            " ".join(unquote(value).strip().split(","))
            if len(value) > 0 else None
        )
    return attributes


def _to_number(value):
    """
    Interpret a numeric column, 0 if the column cannot be interpreted.
    """
    try:
        number = float(value)
    except ValueError:
        return 0
    if not math.isfinite(number):
        return 0
    return number


def _quote(value):
    return quote(str(value), safe=_NOT_QUOTED)
