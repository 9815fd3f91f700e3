# This source code is part of the msaview package and is distributed
# under the 3-Clause BSD License. Please see 'LICENSE.rst' for further
# information.

"""
This subpackage is used for reading alignments and gene trees in the
*Ensembl Multi Format* (EMF).
"""

__name__ = "msaview.io.emf"
__author__ = "The msaview contributors"

from .file import *
