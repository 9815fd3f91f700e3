# This source code is part of the msaview package and is distributed
# under the 3-Clause BSD License. Please see 'LICENSE.rst' for further
# information.

from os.path import join
from tempfile import TemporaryFile
import pytest
import msaview
import msaview.io.gff as gff
from ..util import data_dir


@pytest.fixture
def file():
    return gff.GFFFile.read(join(data_dir("io"), "interpro.gff3"))


def test_entries(file):
    assert len(file) == 5
    seqid, source, type, start, end, score, strand, phase, attrib = file[0]
    assert seqid == "seq1"
    assert source == "Pfam"
    assert type == "protein_match"
    assert (start, end) == (10, 120)
    assert score == pytest.approx(3.2e-20)
    assert strand == "."
    assert phase == "."
    assert attrib == {
        "Name": "PF00001",
        "signature_desc": "7tm_1",
        "Ontology_term": "GO:0004930 GO:0007186",
    }
    assert file[-1].seqid == "seq2"
    with pytest.raises(IndexError):
        file[5]


def test_percent_decoding(file):
    assert file[2].attributes == {"ID": "SM00001", "Note": "Some note"}
    assert file[2].strand == "+"
    assert file[4].attributes == {"description": "Family; member"}


def test_tolerant_columns(file):
    """
    Missing or unreadable columns get default values.
    """
    assert file[3].attributes == {}
    assert file[3].score == 0
    # 'abc' as end coordinate
    assert file[4].end == 0


def test_directives(file):
    assert file.directives() == [
        ("gff-version 3", 0),
        ("sequence-region seq1 1 300", 1),
    ]


def test_write_read(file):
    temp = TemporaryFile("w+")
    file.write(temp)
    temp.seek(0)
    file2 = gff.GFFFile.read(temp)
    temp.close()
    assert [file[i] for i in range(len(file))] \
        == [file2[i] for i in range(len(file2))]


def test_append():
    file = gff.GFFFile()
    file.append(
        "seq 1", "Pfam", "protein_match", 1, 10,
        0.5, "+", 0, {"Name": "PF1", "Note": "a=b"}
    )
    assert file.lines[-1] \
        == "seq%201\tPfam\tprotein_match\t1\t10\t0.5\t+\t0\tName=PF1;Note=a%3Db"
    record = file[0]
    assert record.seqid == "seq 1"
    assert record.attributes == {"Name": "PF1", "Note": "a=b"}
    del file[0]
    assert len(file) == 0


@pytest.mark.parametrize("args", [
    ("", "Pfam", "protein_match", 1, 10, None, None, None, {"Name": "x"}),
    ("seq1", "", "protein_match", 1, 10, None, None, None, {"Name": "x"}),
    ("seq1", "Pfam", "", 1, 10, None, None, None, {"Name": "x"}),
    ("seq1", "Pfam", "protein_match", 1, 10, None, None, None, {}),
    (">seq1", "Pfam", "protein_match", 1, 10, None, None, None, {"Name": "x"}),
])
def test_invalid_append(args):
    file = gff.GFFFile()
    with pytest.raises(ValueError):
        file.append(*args)


def test_attribute_edge_cases():
    text = "seq1\tsrc\ttype\t1\t2\t.\t.\t.\tflag;=orphan;Name=A,B; \n"
    with pytest.warns(msaview.MalformedLineWarning):
        records = gff.parse_gff(text)
    assert records[0].attributes == {"flag": None, "Name": "A B"}


def test_fasta_directive():
    """
    Content after the '##FASTA' directive is ignored.
    """
    text = "seq1\tsrc\ttype\t1\t2\t.\t.\t.\tName=A\n##FASTA\n>seq1\nACDE\n"
    with pytest.warns(msaview.MalformedLineWarning):
        file = gff.GFFFile.from_text(text)
    assert len(file) == 1
    with pytest.raises(NotImplementedError):
        file.append("seq2", "src", "type", 1, 2, None, None, None, {"a": 1})


@pytest.mark.parametrize("text", [None, ""])
def test_parse_empty(text):
    assert gff.parse_gff(text) == []
