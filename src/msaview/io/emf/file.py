# This source code is part of the msaview package and is distributed
# under the 3-Clause BSD License. Please see 'LICENSE.rst' for further
# information.

__name__ = "msaview.io.emf"
__author__ = "The msaview contributors"
__all__ = ["EMFFile"]

from ...alignment import Alignment
from ...file import InvalidFileError
from ...phylo.tree import Tree
from ..msafile import MSAFile


class EMFFile(MSAFile):
    """
    This class represents a file in the *Ensembl Multi Format* (EMF),
    as used for *Ensembl Compara* gene trees and alignments.

    Each block of an EMF file starts with ``SEQ`` lines, one for each
    row, of the form ``SEQ <species> <id> ...``.
    The row ID is used as row name.
    ``TREE`` lines give the tree of the rows in *Newick* notation.
    After the ``DATA`` line each line gives one column of the
    alignment, with one character for each row in the order of the
    ``SEQ`` lines.
    A ``//`` line terminates the block.

    Only the first block of a file is read.
    Lines starting with ``#`` are header or comment lines.

    Examples
    --------

    >>> text = (
    ...     "##FORMAT (compara)\\n"
    ...     "SEQ homo_sapiens HUMAN_A 1 3 1\\n"
    ...     "SEQ mus_musculus MOUSE_A 1 2 1\\n"
    ...     "TREE (HUMAN_A:0.1,MOUSE_A:0.2);\\n"
    ...     "DATA\\n"
    ...     "MM\\n"
    ...     "A-\\n"
    ...     "KK\\n"
    ...     "//\\n"
    ... )
    >>> file = EMFFile.from_text(text)
    >>> print(file.get_alignment())
    HUMAN_A MAK
    MOUSE_A M-K
    >>> print(file.get_tree().to_newick())
    (HUMAN_A:0.100000,MOUSE_A:0.200000);
    """

    def __init__(self):
        super().__init__()
        self._names = []
        self._species = []
        self._columns = []
        self._newick = None

    @staticmethod
    def sniff(text):
        """
        Check whether the given text starts like an EMF file.

        Parameters
        ----------
        text : str
            The file content.

        Returns
        -------
        is_emf : bool
            True, if the text starts with a ``SEQ`` line or an EMF
            ``##FORMAT`` header.
        """
        return text.startswith("SEQ") or text.startswith("##FORMAT")

    def _parse(self):
        self._names = []
        self._species = []
        self._columns = []
        self._newick = None
        in_data = False
        for line_i, line in enumerate(self.lines):
            if line.startswith("//"):
                break
            if in_data:
                if len(line) < len(self._names):
                    raise InvalidFileError(
                        f"Line {line_i + 1} has {len(line)} characters, "
                        f"but {len(self._names)} sequences were declared"
                    )
                self._columns.append(line[:len(self._names)])
            elif line.startswith("SEQ"):
                fields = line.split()
                if len(fields) < 3:
                    raise InvalidFileError(
                        f"Line {line_i + 1} lacks the sequence ID"
                    )
                self._species.append(fields[1])
                self._names.append(fields[2])
            elif line.startswith("TREE"):
                self._newick = line[len("TREE"):].strip()
            elif line.startswith("DATA"):
                in_data = True
            # Other lines, e.g. 'ID', 'SCORE' or comments, are ignored

    def get_alignment(self):
        rows = [
            "".join(column[i] for column in self._columns)
            for i in range(len(self._names))
        ]
        return Alignment(zip(self._names, rows))

    def get_species(self):
        """
        Get the species of each row.

        Returns
        -------
        species : dict
            Maps row names to species names.
        """
        return dict(zip(self._names, self._species))

    def get_row_data(self, name):
        if name not in self._names:
            return None
        return {"name": name, "species": self._species[self._names.index(name)]}

    def get_tree(self):
        """
        Get the tree of the block.

        Returns
        -------
        tree : Tree or None
            The parsed tree, ``None`` if the block has no ``TREE``
            line.
        """
        if not self._newick:
            return None
        return Tree.from_newick(self._newick)
