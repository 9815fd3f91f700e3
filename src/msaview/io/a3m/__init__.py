# This source code is part of the msaview package and is distributed
# under the 3-Clause BSD License. Please see 'LICENSE.rst' for further
# information.

"""
This subpackage is used for reading alignments in the *A3M* format,
the alignment format of the *HH-suite*.
Inserts are expanded into full alignment columns on reading.
"""

__name__ = "msaview.io.a3m"
__author__ = "The msaview contributors"

from .file import *
