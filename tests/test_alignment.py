# This source code is part of the msaview package and is distributed
# under the 3-Clause BSD License. Please see 'LICENSE.rst' for further
# information.

import numpy as np
import pytest
import msaview


def test_access():
    alignment = msaview.Alignment([("seq1", "AC-G"), ("seq2", "ACTG")])
    assert len(alignment) == 2
    assert alignment.width == 4
    assert alignment.names == ["seq1", "seq2"]
    assert alignment["seq1"] == "AC-G"
    assert alignment[1] == "ACTG"
    assert alignment[np.int64(0)] == "AC-G"
    assert alignment.row_at(-1) == msaview.AlignedRow("seq2", "ACTG")
    assert "seq2" in alignment
    assert "seq3" not in alignment
    assert alignment.get_row("seq3") == ""
    assert alignment.get_row("seq3", None) is None
    with pytest.raises(KeyError):
        alignment["seq3"]
    with pytest.raises(TypeError):
        alignment[1.0]


def test_duplicate_names():
    """
    A later row replaces an earlier one with the same name at its
    original position.
    """
    alignment = msaview.Alignment(
        [("seq1", "AAAA"), ("seq2", "CCCC"), ("seq1", "GGGG")]
    )
    assert alignment.rows == [("seq1", "GGGG"), ("seq2", "CCCC")]


def test_unequal_lengths():
    with pytest.raises(ValueError):
        msaview.Alignment([("seq1", "ACG"), ("seq2", "AC")])


def test_empty():
    alignment = msaview.Alignment()
    assert len(alignment) == 0
    assert alignment.width == 0
    assert str(alignment) == ""


def test_equality():
    rows = [("seq1", "AC-G"), ("seq2", "ACTG")]
    assert msaview.Alignment(rows) == msaview.Alignment(rows)
    assert msaview.Alignment(rows) != msaview.Alignment(rows[::-1])
    assert msaview.Alignment(rows) != rows


@pytest.mark.parametrize("char, exp_gap", [
    ("-", True), (".", True), ("A", False), ("*", False), (" ", False)
])
def test_is_gap(char, exp_gap):
    assert msaview.is_gap(char) == exp_gap


def test_gap_mask():
    codes = msaview.get_codes("A-.C")
    assert codes.dtype == np.uint8
    assert msaview.get_gap_mask(codes).tolist() == [False, True, True, False]
    assert msaview.get_ungapped_sequence("A-.C") == "AC"
