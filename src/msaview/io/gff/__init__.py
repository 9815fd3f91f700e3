# This source code is part of the msaview package and is distributed
# under the 3-Clause BSD License. Please see 'LICENSE.rst' for further
# information.

"""
This subpackage is used for reading and writing domain annotations in
the *Generic Feature Format 3* (GFF3) and for converting them from and
into *InterProScan* results.
"""

__name__ = "msaview.io.gff"
__author__ = "The msaview contributors"

from .file import *
from .convert import *
