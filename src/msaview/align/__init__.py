# This source code is part of the msaview package and is distributed
# under the 3-Clause BSD License. Please see 'LICENSE.rst' for further
# information.

"""
This subpackage provides the substitution matrices used for scoring
pairs of aligned residues.
The matrices are loaded from the internal database in *NCBI* format.
"""

__name__ = "msaview.align"
__author__ = "The msaview contributors"

from .matrix import *
