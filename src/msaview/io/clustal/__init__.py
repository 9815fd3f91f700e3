# This source code is part of the msaview package and is distributed
# under the 3-Clause BSD License. Please see 'LICENSE.rst' for further
# information.

"""
This subpackage is used for reading alignments in the *Clustal* format.
It also serves as fallback for other block-wise columnar formats.
"""

__name__ = "msaview.io.clustal"
__author__ = "The msaview contributors"

from .file import *
