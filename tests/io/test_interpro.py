# This source code is part of the msaview package and is distributed
# under the 3-Clause BSD License. Please see 'LICENSE.rst' for further
# information.

import json
from os.path import join
import pytest
import msaview.io.gff as gff
from ..util import data_dir


@pytest.fixture
def response():
    with open(join(data_dir("io"), "interpro.json")) as file:
        return json.load(file)


@pytest.fixture
def records():
    return gff.parse_gff(
        open(join(data_dir("io"), "interpro.gff3")).read()
    )


def test_response_to_gff(response):
    """
    Each location of a match with InterPro entry gives one line,
    results without sequence ID are omitted.
    """
    records = gff.parse_gff(gff.interpro_response_to_gff(response["results"]))
    assert [(r.seqid, r.start, r.end) for r in records] == [
        ("OPSD_HUMAN", 41, 290),
        ("OPSD_HUMAN", 310, 330),
        ("OPSD_BOVIN", 50, 300),
    ]
    assert all(r.source == "InterProScan" for r in records)
    assert all(r.type == "protein_match" for r in records)
    assert records[0].attributes == {
        "Name": "IPR000276",
        "signature_desc": "GPCR_Rhodpsn",
        "description": "G protein-coupled receptor  rhodopsin-like",
    }


def test_gff_to_results(records):
    results = gff.gff_to_interpro_results(records)
    assert list(results.keys()) == ["seq1", "seq2"]
    assert results["seq1"]["xref"] == [{"id": "seq1"}]

    matches = results["seq1"]["matches"]
    assert len(matches) == 2
    # Records with the same accession are merged into one match
    assert matches[0]["signature"]["entry"] == {
        "name": "7tm_1",
        "description": "GO:0004930 GO:0007186",
        "accession": "PF00001",
    }
    assert matches[0]["locations"] == [
        {"start": 10, "end": 120}, {"start": 150, "end": 200}
    ]
    # Accession from 'ID', name defaults to accession
    assert matches[1]["signature"]["entry"] == {
        "name": "SM00001",
        "description": "Some note",
        "accession": "SM00001",
    }

    matches = results["seq2"]["matches"]
    # Accession derived from source and location
    assert matches[0]["signature"]["entry"] == {
        "name": "Gene3D_5_60",
        "description": "Gene3D_5_60",
        "accession": "Gene3D_5_60",
    }
    assert matches[1]["signature"]["entry"]["description"] \
        == "Family; member"


def test_gff_to_response(records):
    response = gff.gff_to_interpro_response(records)
    assert [result["xref"][0]["id"] for result in response["results"]] \
        == ["seq1", "seq2"]


def test_round_trip(records):
    """
    Converting grouped results back to GFF3 and grouping them again
    gives the same results.
    """
    results = gff.gff_to_interpro_results(records)
    records2 = gff.parse_gff(gff.interpro_to_gff(results))
    assert gff.gff_to_interpro_results(records2) == results


def test_domain_features(response):
    results = {
        result["xref"][0]["id"]: result
        for result in response["results"] if result["xref"]
    }
    features = gff.get_domain_features(results)
    assert list(features.keys()) == ["OPSD_HUMAN", "OPSD_BOVIN"]
    assert features["OPSD_HUMAN"] == [
        {
            "start": 41, "end": 290, "accession": "IPR000276",
            "name": "GPCR_Rhodpsn",
            "description": "G protein-coupled receptor, rhodopsin-like",
        },
        {
            "start": 310, "end": 330, "accession": "IPR000276",
            "name": "GPCR_Rhodpsn",
            "description": "G protein-coupled receptor, rhodopsin-like",
        },
    ]


def test_empty():
    assert gff.parse_gff(gff.interpro_to_gff({})) == []
    assert gff.gff_to_interpro_response([]) == {"results": []}
