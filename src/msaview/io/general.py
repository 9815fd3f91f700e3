# This source code is part of the msaview package and is distributed
# under the 3-Clause BSD License. Please see 'LICENSE.rst' for further
# information.

"""
This module contains convenience functions for reading alignments
without knowing their format in advance.
"""

__name__ = "msaview.io"
__author__ = "The msaview contributors"
__all__ = ["Format", "detect_format", "parse_msa", "load_msa"]

from enum import Enum
from ..file import InvalidFileError
from .a3m import A3MFile
from .clustal import ClustalFile
from .emf import EMFFile
from .fasta import FastaFile
from .stockholm import StockholmFile


class Format(Enum):
    """
    The alignment formats, that can be detected by
    :func:`detect_format()`.
    """
    STOCKHOLM = "stockholm"
    A3M = "a3m"
    FASTA = "fasta"
    EMF = "emf"
    GFF = "gff"
    CLUSTAL = "clustal"


def detect_format(text):
    """
    Detect the format of alignment text.

    The formats are checked in the following order, the first match
    is returned:

        1. *Stockholm*, if the text starts with ``# STOCKHOLM 1.0``
        2. *A3M*, if the text is FASTA-shaped and has consistent
           lower case inserts (see :meth:`A3MFile.sniff()`)
        3. *FASTA*, if the text starts with ``>``
        4. *EMF*, if the text starts with ``SEQ`` or ``##FORMAT``
        5. *GFF3*, if the text starts with ``##gff-version``
        6. *Clustal* otherwise

    Parameters
    ----------
    text : str
        The file content.

    Returns
    -------
    format : Format
        The detected format.

    Examples
    --------

    >>> print(detect_format(">seq1\\nACDaEF\\n>seq2\\nACD-EF\\n"))
    Format.A3M
    >>> print(detect_format(">seq1\\nACDEF\\n>seq2\\nAC-EF\\n"))
    Format.FASTA
    >>> print(detect_format("CLUSTAL W\\n\\nseq1 ACDEF\\n"))
    Format.CLUSTAL
    """
    if StockholmFile.sniff(text):
        return Format.STOCKHOLM
    elif A3MFile.sniff(text):
        return Format.A3M
    elif text.startswith(">"):
        return Format.FASTA
    elif EMFFile.sniff(text):
        return Format.EMF
    elif text.startswith("##gff-version"):
        return Format.GFF
    else:
        return Format.CLUSTAL


def parse_msa(text, alignment_index=0):
    """
    Parse alignment text of any supported format.

    The format is determined by :func:`detect_format()`.

    Parameters
    ----------
    text : str
        The file content.
    alignment_index : int, optional
        The alignment used from formats that may contain multiple
        alignments, i.e. *Stockholm*.

    Returns
    -------
    file : MSAFile
        The parsed file.
        Empty or whitespace-only text gives a file with an empty
        alignment.

    Raises
    ------
    InvalidFileError
        If the text is GFF3 data, which contains no alignment.

    Examples
    --------

    >>> file = parse_msa(">seq1\\nACDaEF\\n>seq2\\nACD-EF\\n")
    >>> print(type(file).__name__)
    A3MFile
    >>> print(file.get_row("seq2"))
    ACD.EF
    """
    format = detect_format(text)
    if format == Format.STOCKHOLM:
        return StockholmFile.from_text(text, alignment_index)
    elif format == Format.A3M:
        return A3MFile.from_text(text)
    elif format == Format.FASTA:
        return FastaFile.from_text(text)
    elif format == Format.EMF:
        return EMFFile.from_text(text)
    elif format == Format.GFF:
        raise InvalidFileError(
            "GFF3 data contains annotations, but no alignment, "
            "use 'GFFFile' instead"
        )
    else:
        return ClustalFile.from_text(text)


def load_msa(file_path, alignment_index=0):
    """
    Load an alignment file of any supported format without the need
    to manually instantiate a :class:`MSAFile` object.

    Parameters
    ----------
    file_path : str
        The path to the alignment file.
    alignment_index : int, optional
        The alignment used from formats that may contain multiple
        alignments.

    Returns
    -------
    file : MSAFile
        The parsed file.
    """
    with open(file_path, "r") as file:
        text = file.read()
    return parse_msa(text, alignment_index)
