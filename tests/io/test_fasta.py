# This source code is part of the msaview package and is distributed
# under the 3-Clause BSD License. Please see 'LICENSE.rst' for further
# information.

import warnings
from os.path import join
from tempfile import TemporaryFile
import pytest
import msaview
import msaview.io.fasta as fasta
from ..util import data_dir


def test_access():
    path = join(data_dir("io"), "example.fasta")
    file = fasta.FastaFile.read(path)
    assert list(file.keys()) == [
        "seq1 first protein", "seq2", "seq3 third protein"
    ]
    assert file["seq1 first protein"] == "MKVLA-TGHELLRA"
    assert file["seq3 third protein"] == "MRVLAQTG-ELIRA"


def test_alignment():
    """
    The row names are the headers up to the first space.
    """
    path = join(data_dir("io"), "example.fasta")
    file = fasta.FastaFile.read(path)
    alignment = file.get_alignment()
    assert alignment.names == ["seq1", "seq2", "seq3"]
    assert alignment.width == 14
    assert file.get_row("seq2") == "MKV-AQTGHELLRA"
    assert file.get_row("unknown") == ""
    assert file.get_row_at(2) == ("seq3", "MRVLAQTG-ELIRA")
    assert file.get_width() == 14
    assert file.get_tree() is None
    assert file.get_header() == {}
    assert file.tracks == []


def test_read_write():
    path = join(data_dir("io"), "example.fasta")
    file1 = fasta.FastaFile.read(path)
    temp = TemporaryFile("w+")
    file1.write(temp)
    temp.seek(0)
    file2 = fasta.FastaFile.read(temp)
    temp.close()
    assert dict(file1.items()) == dict(file2.items())
    assert file1.get_alignment() == file2.get_alignment()


def test_line_wrapping():
    file = fasta.FastaFile(chars_per_line=4)
    file["seq1"] = "ACDEFGHIK"
    assert file.lines == [">seq1", "ACDE", "FGHI", "K"]
    assert file["seq1"] == "ACDEFGHIK"


def test_replace_and_delete():
    file = fasta.FastaFile()
    file["seq1"] = "AC-G"
    file["seq2"] = "ACCG"
    file["seq1"] = "ACTG"
    assert list(file.keys()) == ["seq2", "seq1"]
    assert file["seq1"] == "ACTG"
    del file["seq2"]
    assert list(file.keys()) == ["seq1"]
    assert str(file) == ">seq1\nACTG"


def test_duplicate_names():
    """
    Rows with an already known name replace the earlier row with a
    warning.
    """
    text = ">seq1 a\nAAAA\n>seq2\nCCCC\n>seq1 b\nGGGG\n"
    file = fasta.FastaFile.from_text(text)
    with pytest.warns(msaview.DuplicateNameWarning):
        alignment = file.get_alignment()
    assert alignment.names == ["seq1", "seq2"]
    assert alignment["seq1"] == "GGGG"


def test_whitespace_in_sequence():
    file = fasta.FastaFile.from_text(">seq1\nAC GT\n>seq2\nA CGT \n")
    with warnings.catch_warnings():
        warnings.simplefilter("error")
        alignment = file.get_alignment()
    assert alignment["seq1"] == "ACGT"
    assert alignment["seq2"] == "ACGT"


def test_unequal_lengths():
    """
    Shorter rows are padded with gaps to the length of the longest row.
    """
    file = fasta.FastaFile.from_text(">seq1\nACG\n>seq2\nACGTA\n>seq3\nA\n")
    with pytest.warns(msaview.UnequalLengthWarning):
        alignment = file.get_alignment()
    assert alignment.width == 5
    assert [seq for _, seq in alignment] == ["ACG--", "ACGTA", "A----"]


def test_invalid_start():
    with pytest.raises(msaview.InvalidFileError):
        fasta.FastaFile.from_text("seq1\nACGT\n")


def test_empty():
    file = fasta.FastaFile.from_text("")
    assert len(file) == 0
    assert len(file.get_alignment()) == 0
    assert file.get_width() == 0


def test_comments():
    text = ">seq1\n; A comment line\nACGT\n\n>seq2\nAC-T\n"
    file = fasta.FastaFile.from_text(text)
    assert file["seq1"] == "ACGT"
    assert file.get_alignment()["seq2"] == "AC-T"
