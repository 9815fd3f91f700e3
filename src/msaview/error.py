# This source code is part of the msaview package and is distributed
# under the 3-Clause BSD License. Please see 'LICENSE.rst' for further
# information.

"""
This module contains the errors and warnings raised by *msaview*,
apart from :class:`InvalidFileError`, which belongs to the file
classes.
"""

__name__ = "msaview"
__author__ = "The msaview contributors"
__all__ = [
    "InsufficientSequencesError",
    "UnalignedSequencesError",
    "LayoutCapacityError",
    "DuplicateNameWarning",
    "MalformedLineWarning",
    "UnequalLengthWarning",
]


class InsufficientSequencesError(ValueError):
    """
    Indicates that too few sequences were given for a tree
    construction.
    """

    pass


class UnalignedSequencesError(ValueError):
    """
    Indicates that sequences that are expected to be aligned have
    different lengths.
    """

    pass


class LayoutCapacityError(Exception):
    """
    Indicates that a rectangle cannot be placed in a :class:`Layout`
    without exceeding its maximum height.
    """

    pass


class DuplicateNameWarning(UserWarning):
    """
    Indicates that a row name occurs multiple times and the later row
    replaces the earlier one.
    """

    pass


class MalformedLineWarning(UserWarning):
    """
    Indicates that a line of a file could not be interpreted and was
    ignored.
    """

    pass


class UnequalLengthWarning(UserWarning):
    """
    Indicates that the rows of an alignment had different lengths and
    the shorter rows were padded with gaps at their end.
    """

    pass
