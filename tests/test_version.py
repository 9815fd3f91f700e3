# This source code is part of the msaview package and is distributed
# under the 3-Clause BSD License. Please see 'LICENSE.rst' for further
# information.

from importlib.metadata import version
import msaview


def test_version():
    """
    Check if version imported from version.py is correct.
    """
    assert msaview.__version__ == version("msaview")
