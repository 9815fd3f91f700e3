# This source code is part of the msaview package and is distributed
# under the 3-Clause BSD License. Please see 'LICENSE.rst' for further
# information.

"""
This is the top-level package of *msaview*, the computational core of a
multiple sequence alignment viewer.

It provides the alignment data model, the conversion between the
coordinate systems of an alignment view and the packing of annotation
features.
Reading alignment files is covered by the :mod:`msaview.io` subpackage,
tree construction by :mod:`msaview.phylo`.
"""

__version__ = "0.1.0"
__name__ = "msaview"
__author__ = "The msaview contributors"

from .file import *
from .error import *
from .alignment import *
from .coordinates import *
from .layout import *
from .palette import *
