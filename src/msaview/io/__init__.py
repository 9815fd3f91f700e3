# This source code is part of the msaview package and is distributed
# under the 3-Clause BSD License. Please see 'LICENSE.rst' for further
# information.

"""
A subpackage for reading alignments and their annotations.

Each supported alignment format has its own subpackage, containing a
:class:`MSAFile` subclass.
If the format of the data is not known in advance, :func:`parse_msa()`
detects it.
"""

__name__ = "msaview.io"
__author__ = "The msaview contributors"

from .msafile import *
from .general import *
