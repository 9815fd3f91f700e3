# This source code is part of the msaview package and is distributed
# under the 3-Clause BSD License. Please see 'LICENSE.rst' for further
# information.

__name__ = "msaview.io"
__author__ = "The msaview contributors"
__all__ = ["MSAFile"]

import abc
from ..file import TextFile


class MSAFile(TextFile, metaclass=abc.ABCMeta):
    """
    Base class for all multiple sequence alignment formats.

    Independent of the format, each subclass gives access to the
    alignment rows and to optional additional information, like an
    embedded tree or consensus lines.
    The alignment itself is created via :meth:`get_alignment()`, the
    remaining methods are shortcuts for the most common queries on it.
    """

    @abc.abstractmethod
    def get_alignment(self):
        """
        Get the alignment contained in the file.

        Returns
        -------
        alignment : Alignment
            The alignment.
        """
        pass

    def get_names(self):
        """
        Get the row names in row order.

        Returns
        -------
        names : list of str
            The row names.
        """
        return self.get_alignment().names

    def get_row(self, name):
        """
        Get the gapped sequence of a row.

        Parameters
        ----------
        name : str
            The row name.

        Returns
        -------
        sequence : str
            The gapped sequence, an empty string for unknown names.
        """
        return self.get_alignment().get_row(name)

    def get_row_at(self, index):
        """
        Get the row at the given position.

        Parameters
        ----------
        index : int
            The row index.

        Returns
        -------
        row : AlignedRow
            The row.
        """
        return self.get_alignment().row_at(index)

    def get_width(self):
        """
        Get the number of alignment columns.

        Returns
        -------
        width : int
            The width of the alignment, 0 for an empty alignment.
        """
        return self.get_alignment().width

    def get_tree(self):
        """
        Get the tree embedded in the file.

        Returns
        -------
        tree : Tree or None
            The tree, whose labels are the row names.
            ``None`` if the format or file contains no tree.
        """
        return None

    def get_header(self):
        """
        Get the file level metadata.

        Returns
        -------
        header : dict
            The metadata, empty if the format has none.
        """
        return {}

    def get_row_data(self, name):
        """
        Get the metadata of a single row.

        Parameters
        ----------
        name : str
            The row name.

        Returns
        -------
        row_data : dict or None
            The metadata, ``None`` if the format has none.
        """
        return None

    def get_structures(self):
        """
        Get the structure references of the rows.

        Returns
        -------
        structures : dict
            Maps row names to lists of structure references.
        """
        return {}

    @property
    def alignment_names(self):
        return []

    @property
    def seq_consensus(self):
        return None

    @property
    def secondary_structure_consensus(self):
        return None

    @property
    def tracks(self):
        return []
