# This source code is part of the msaview package and is distributed
# under the 3-Clause BSD License. Please see 'LICENSE.rst' for further
# information.

"""
This subpackage is used for reading alignments in the *Stockholm*
format, including the alignment annotations, embedded trees and
multiple alignments per file.
"""

__name__ = "msaview.io.stockholm"
__author__ = "The msaview contributors"

from .file import *
