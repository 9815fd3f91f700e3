# This source code is part of the msaview package and is distributed
# under the 3-Clause BSD License. Please see 'LICENSE.rst' for further
# information.

"""
This subpackage is used for reading and writing alignments in the FASTA
format.
The row name is the first word of the header line, the row sequence is
the following sequence data with all whitespace removed.
"""

__name__ = "msaview.io.fasta"
__author__ = "The msaview contributors"

from .file import *
