# This source code is part of the msaview package and is distributed
# under the 3-Clause BSD License. Please see 'LICENSE.rst' for further
# information.

import pytest
from msaview import Alignment


@pytest.fixture
def gapped_alignment():
    """
    A small alignment with columns of varying gap content.

    Gaps per column: 0, 4, 1, 2, 0, 2
    """
    return Alignment([
        ("seq1", "A-C-EF"),
        ("seq2", "A--GE-"),
        ("seq3", "A-CGE."),
        ("seq4", "A.C-EF"),
    ])
