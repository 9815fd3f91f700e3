# This source code is part of the msaview package and is distributed
# under the 3-Clause BSD License. Please see 'LICENSE.rst' for further
# information.

__name__ = "msaview.io.stockholm"
__author__ = "The msaview contributors"
__all__ = ["StockholmRecord", "StockholmFile"]

import re
from collections import OrderedDict
from ...alignment import Alignment
from ...file import InvalidFileError
from ...phylo.tree import Tree
from ..msafile import MSAFile


_FORMAT_START = re.compile(r"^# STOCKHOLM 1\.0")
_FORMAT_END = re.compile(r"^//\s*$")
_GF = re.compile(r"^#=GF\s+(\S+)\s+(.*?)\s*$")
_GC = re.compile(r"^#=GC\s+(\S+)\s+(.*?)\s*$")
_GS = re.compile(r"^#=GS\s+(\S+)\s+(\S+)\s+(.*?)\s*$")
_GR = re.compile(r"^#=GR\s+(\S+)\s+(\S+)\s+(.*?)\s*$")
_SEQUENCE = re.compile(r"^\s*(\S+)\s+(\S+)\s*$")
_PDB_REFERENCE = re.compile(r"PDB; +(\S+) +(\S); ([0-9]+)-([0-9]+)")


class StockholmRecord(object):
    """
    The content of a single alignment block in a *Stockholm* file.

    Attributes
    ----------
    gf : OrderedDict
        ``#=GF`` file annotations.
        Maps each feature tag to the list of its values.
    gc : OrderedDict
        ``#=GC`` column annotations.
        Maps each feature tag to the concatenated annotation string.
    gs : OrderedDict
        ``#=GS`` sequence annotations.
        Maps each feature tag to a dictionary, that maps row names to
        the list of values.
    gr : OrderedDict
        ``#=GR`` residue annotations.
        Maps each feature tag to a dictionary, that maps row names to
        the concatenated annotation string.
    sequences : OrderedDict
        Maps row names to their concatenated sequence data,
        in the order of first appearance.
    """

    def __init__(self):
        self.gf = OrderedDict()
        self.gc = OrderedDict()
        self.gs = OrderedDict()
        self.gr = OrderedDict()
        self.sequences = OrderedDict()

    @property
    def names(self):
        return list(self.sequences.keys())

    def __repr__(self):
        return f"<StockholmRecord with {len(self.sequences)} rows>"


class StockholmFile(MSAFile):
    """
    This class represents a file in *Stockholm* format, as used by
    *Pfam* and *Rfam*.

    A file may contain multiple alignments, each one starting with a
    ``# STOCKHOLM 1.0`` header and ending with a ``//`` line.
    Within an alignment, sequence lines (``<name> <data>``) may be
    interleaved with the following annotation lines:

    ===========  ==========================================
    ``#=GF``     Annotation of the whole alignment
    ``#=GC``     Annotation of each column
    ``#=GS``     Annotation of a single sequence
    ``#=GR``     Annotation of each residue of a sequence
    ===========  ==========================================

    Sequence data and per column annotations of the same name are
    concatenated in the order of appearance.
    An alignment without terminating ``//`` ends at the next header or
    at the end of the file.

    The methods inherited from :class:`MSAFile` refer to the alignment
    selected by `alignment_index`.

    Parameters
    ----------
    alignment_index : int, optional
        The index of the alignment in the file, that is used for
        the :class:`MSAFile` methods.
    strict : bool, optional
        If true, lines that cannot be interpreted and content before
        any format header raise an :class:`InvalidFileError`.
        Otherwise those lines are ignored and an alignment without a
        header is opened implicitly.

    Examples
    --------

    >>> text = (
    ...     "# STOCKHOLM 1.0\\n"
    ...     "#=GF DE An example\\n"
    ...     "#=GS seq1 AC P12345\\n"
    ...     "seq1  AC-DE\\n"
    ...     "seq2  ACGDE\\n"
    ...     "#=GC SS_cons <<.>>\\n"
    ...     "//\\n"
    ... )
    >>> file = StockholmFile.from_text(text)
    >>> print(file.get_alignment())
    seq1 AC-DE
    seq2 ACGDE
    >>> print(file.alignment_names)
    ['An example']
    >>> print(file.get_row_data("seq1"))
    {'name': 'seq1', 'accession': 'P12345', 'dbxref': None}
    >>> print(file.secondary_structure_consensus)
    <<.>>
    """

    def __init__(self, alignment_index=0, strict=False):
        super().__init__()
        self._alignment_index = alignment_index
        self._strict = strict
        self._records = []

    @classmethod
    def read(cls, file, alignment_index=0, strict=False):
        """
        Read a *Stockholm* file.

        Parameters
        ----------
        file : file-like object or str
            The file to be read.
            Alternatively a file path can be supplied.
        alignment_index : int, optional
            The index of the alignment in the file, that is used for
            the :class:`MSAFile` methods.
        strict : bool, optional
            If true, malformed lines raise an exception.

        Returns
        -------
        file_object : StockholmFile
            The parsed file.
        """
        return super().read(file, alignment_index, strict)

    @staticmethod
    def sniff(text):
        """
        Check whether the given text starts with a *Stockholm* header.

        Parameters
        ----------
        text : str
            The file content.

        Returns
        -------
        is_stockholm : bool
            True, if the text starts with ``# STOCKHOLM 1.0``.
        """
        return _FORMAT_START.match(text) is not None

    def _parse(self):
        self._records = []
        record = None
        for line_i, line in enumerate(self.lines):
            if _FORMAT_START.match(line):
                # A new header also terminates an unterminated alignment
                if record is not None:
                    self._records.append(record)
                record = StockholmRecord()
                continue
            if _FORMAT_END.match(line):
                if record is not None:
                    self._records.append(record)
                record = None
                continue
            if len(line.strip()) == 0:
                continue
            if line.startswith("#") and not line.startswith("#="):
                # Free text comment
                continue

            entry = _classify_line(line)
            if entry is None:
                if self._strict:
                    raise InvalidFileError(
                        f"Malformed line {line_i + 1}: '{line}'"
                    )
                continue
            if record is None:
                if self._strict:
                    raise InvalidFileError(
                        f"Line {line_i + 1} is not preceded by a "
                        f"'# STOCKHOLM 1.0' header"
                    )
                record = StockholmRecord()
            _add_entry(record, entry)

        if record is not None:
            self._records.append(record)

    def get_records(self):
        """
        Get all alignment blocks of the file.

        Returns
        -------
        records : list of StockholmRecord
            The alignment blocks in the order of the file.
        """
        return list(self._records)

    def get_record(self, index=None):
        """
        Get a single alignment block.

        Parameters
        ----------
        index : int, optional
            The index of the alignment.
            By default, the alignment selected on construction.

        Returns
        -------
        record : StockholmRecord
            The alignment block.
            An empty record, if the file contains no alignment.
        """
        if index is None:
            index = self._alignment_index
        if len(self._records) == 0:
            return StockholmRecord()
        if index >= len(self._records) or index < -len(self._records):
            raise IndexError(
                f"Alignment index {index} is out of range for a file with "
                f"{len(self._records)} alignments"
            )
        return self._records[index]

    def get_alignment(self, index=None):
        """
        Get an alignment contained in the file.

        Parameters
        ----------
        index : int, optional
            The index of the alignment.
            By default, the alignment selected on construction.

        Returns
        -------
        alignment : Alignment
            The alignment.
        """
        record = self.get_record(index)
        try:
            return Alignment(record.sequences.items())
        except ValueError as e:
            raise InvalidFileError(str(e))

    @property
    def alignment_names(self):
        return [
            record.gf["DE"][0] if "DE" in record.gf else f"Alignment {i+1}"
            for i, record in enumerate(self._records)
        ]

    def get_header(self):
        """
        Get the metadata of the selected alignment.

        Returns
        -------
        header : dict
            A dictionary with the entries

            - ``'General'``: the ``#=GF`` annotations,
              mapping each tag to a list of values,
            - ``'Accessions'``: the first ``#=GS AC`` value of each row,
            - ``'Dbxref'``: the ``#=GS DR`` values of each row,
              joined by ``'; '``.
        """
        record = self.get_record()
        return {
            "General": dict(record.gf),
            "Accessions": {
                name: values[0]
                for name, values in record.gs.get("AC", {}).items()
            },
            "Dbxref": {
                name: "; ".join(values)
                for name, values in record.gs.get("DR", {}).items()
            },
        }

    def get_row_data(self, name):
        record = self.get_record()
        accessions = record.gs.get("AC", {}).get(name)
        dbxrefs = record.gs.get("DR", {}).get(name)
        return {
            "name": name,
            "accession": accessions[0] if accessions else None,
            "dbxref": "; ".join(dbxrefs) if dbxrefs else None,
        }

    def get_structures(self):
        """
        Get the *PDB* structures referenced in ``#=GS <name> DR``
        lines.

        Returns
        -------
        structures : dict
            Maps row names to a list of dictionaries with the keys
            ``'pdb'`` (lower case PDB ID), ``'chain'``, ``'start'`` and
            ``'end'``.
            Rows without structure reference are omitted.
        """
        structures = OrderedDict()
        for name, dbxrefs in self.get_record().gs.get("DR", {}).items():
            for dbxref in dbxrefs:
                match = _PDB_REFERENCE.search(dbxref)
                if match is None:
                    continue
                pdb_id, chain, start, end = match.groups()
                structures.setdefault(name, []).append({
                    "pdb": pdb_id.lower(),
                    "chain": chain,
                    "start": int(start),
                    "end": int(end),
                })
        return dict(structures)

    def get_tree(self):
        """
        Get the tree given in the ``#=GF NH`` annotation.

        Returns
        -------
        tree : Tree or None
            The parsed tree, ``None`` if the alignment has no tree.
        """
        newick = self.get_record().gf.get("NH")
        if not newick:
            return None
        # Long trees may be split over multiple 'NH' lines
        return Tree.from_newick("".join(newick))

    @property
    def seq_consensus(self):
        return self.get_record().gc.get("seq_cons")

    @property
    def secondary_structure_consensus(self):
        return self.get_record().gc.get("SS_cons")

    @property
    def tracks(self):
        tracks = []
        if self.seq_consensus is not None:
            tracks.append({
                "id": "seqConsensus",
                "name": "Sequence consensus",
                "data": self.seq_consensus,
                "color_scheme": {},
            })
        if self.secondary_structure_consensus is not None:
            tracks.append({
                "id": "secondaryStruct",
                "name": "Secondary-structure",
                "data": self.secondary_structure_consensus,
                "color_scheme": {">": "pink", "<": "lightblue"},
            })
        return tracks


def _classify_line(line):
    """
    Identify the kind of a content line.

    Returns a tuple, whose first element is the line kind
    (``'GF'``, ``'GC'``, ``'GS'``, ``'GR'`` or ``'SEQ'``) and whose
    remaining elements are the matched groups,
    or ``None`` for a malformed line.
    """
    if line.startswith("#="):
        for kind, pattern in (("GF", _GF), ("GC", _GC),
                              ("GS", _GS), ("GR", _GR)):
            match = pattern.match(line)
            if match is not None:
                return (kind,) + match.groups()
        return None
    match = _SEQUENCE.match(line)
    if match is not None:
        return ("SEQ",) + match.groups()
    return None


def _add_entry(record, entry):
    kind = entry[0]
    if kind == "GF":
        _, tag, value = entry
        record.gf.setdefault(tag, []).append(value)
    elif kind == "GC":
        _, tag, value = entry
        record.gc[tag] = record.gc.get(tag, "") + value
    elif kind == "GS":
        _, name, tag, value = entry
        record.gs.setdefault(tag, OrderedDict()) \
                 .setdefault(name, []).append(value)
    elif kind == "GR":
        _, name, tag, value = entry
        per_row = record.gr.setdefault(tag, OrderedDict())
        per_row[name] = per_row.get(name, "") + value
    else:
        _, name, data = entry
        record.sequences[name] = record.sequences.get(name, "") + data
