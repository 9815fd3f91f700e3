# This source code is part of the msaview package and is distributed
# under the 3-Clause BSD License. Please see 'LICENSE.rst' for further
# information.

"""
Conversion between GFF3 records and *InterProScan* results.

*InterProScan* results are used in the form of the decoded JSON
response of the *InterProScan* web service:
For each sequence, a dictionary with the keys ``'matches'`` and
``'xref'``, where each match has the form

.. code-block:: python

    {
        "signature": {
            "entry": {"accession": ..., "name": ..., "description": ...}
        },
        "locations": [{"start": ..., "end": ...}, ...]
    }

and ``xref`` is a list of ``{"id": <sequence ID>}`` dictionaries.
"""

__name__ = "msaview.io.gff"
__author__ = "The msaview contributors"
__all__ = ["interpro_to_gff", "interpro_response_to_gff",
           "gff_to_interpro_results", "gff_to_interpro_response",
           "get_domain_features"]

from collections import OrderedDict
from .file import GFFFile


def interpro_to_gff(results):
    """
    Convert *InterProScan* results into GFF3 text.

    Each location of each match creates one ``protein_match`` line.
    Matches without an InterPro entry are omitted.

    Parameters
    ----------
    results : dict
        Maps sequence IDs to their *InterProScan* results.

    Returns
    -------
    gff : str
        The GFF3 text, starting with the ``##gff-version 3`` directive.

    Examples
    --------

    >>> results = {
    ...     "seq1": {
    ...         "matches": [{
    ...             "signature": {"entry": {
    ...                 "accession": "PF00001",
    ...                 "name": "7tm_1",
    ...                 "description": "GPCR family",
    ...             }},
    ...             "locations": [{"start": 10, "end": 50}],
    ...         }],
    ...         "xref": [{"id": "seq1"}],
    ...     }
    ... }
    >>> print(interpro_to_gff(results))   #doctest: +NORMALIZE_WHITESPACE
    ##gff-version 3
    seq1    InterProScan    protein_match   10      50      .       .       .       Name=PF00001;signature_desc=7tm_1;description=GPCR%20family
    """
    gff_file = GFFFile()
    for seq_id, result in results.items():
        for match in result["matches"]:
            entry = match["signature"].get("entry")
            if not entry:
                continue
            for location in match["locations"]:
                gff_file.append(
                    seq_id, "InterProScan", "protein_match",
                    location["start"], location["end"],
                    None, None, None,
                    OrderedDict([
                        ("Name", entry["accession"]),
                        ("signature_desc", entry["name"]),
                        ("description", entry["description"]),
                    ])
                )
    return str(gff_file)


def interpro_response_to_gff(results):
    """
    Convert the result list of an *InterProScan* response into GFF3
    text.

    Parameters
    ----------
    results : list of dict
        The *InterProScan* results.
        The sequence ID of each result is taken from its first
        ``xref``.
        Results without ``xref`` are omitted.

    Returns
    -------
    gff : str
        The GFF3 text.
    """
    results_by_id = OrderedDict()
    for result in results:
        xref = result.get("xref")
        seq_id = xref[0].get("id") if xref else None
        if seq_id:
            results_by_id[seq_id] = result
    return interpro_to_gff(results_by_id)


def gff_to_interpro_results(records):
    """
    Group GFF3 records into *InterProScan* results.

    Records are grouped by sequence ID and, within a sequence, by
    accession.
    The accession of a record is its ``Name`` attribute, otherwise its
    ``ID`` attribute, otherwise ``<source>_<start>_<end>``.
    The match name is taken from the ``signature_desc`` or ``Name``
    attribute and defaults to the accession.
    The match description is taken from the ``Ontology_term``,
    ``description`` or ``Note`` attribute and defaults to the name.
    The name and description of the first record of an accession are
    used.

    Parameters
    ----------
    records : iterable object of GFFRecord
        The GFF3 records, e.g. a :class:`GFFFile`.

    Returns
    -------
    results : dict
        Maps sequence IDs to their *InterProScan* results,
        in the order of first appearance.
        The locations of a match are in the order of the records.
    """
    records_by_seq = OrderedDict()
    for record in records:
        records_by_seq.setdefault(record.seqid, []).append(record)

    results = OrderedDict()
    for seq_id, seq_records in records_by_seq.items():
        matches = OrderedDict()
        for record in seq_records:
            attrib = record.attributes
            accession = attrib.get("Name") or attrib.get("ID") \
                        or f"{record.source}_{record.start}_{record.end}"
            if accession not in matches:
                name = attrib.get("signature_desc") or attrib.get("Name") \
                       or accession
                description = attrib.get("Ontology_term") \
                              or attrib.get("description") \
                              or attrib.get("Note") \
                              or name
                matches[accession] = {
                    "signature": {"entry": {
                        "name": name,
                        "description": description,
                        "accession": accession,
                    }},
                    "locations": [],
                }
            matches[accession]["locations"].append(
                {"start": record.start, "end": record.end}
            )
        results[seq_id] = {
            "matches": list(matches.values()),
            "xref": [{"id": seq_id}],
        }
    return results


def gff_to_interpro_response(records):
    """
    Group GFF3 records into an *InterProScan* response.

    Parameters
    ----------
    records : iterable object of GFFRecord
        The GFF3 records.

    Returns
    -------
    response : dict
        A dictionary with the single key ``'results'``, containing the
        list of results created by :func:`gff_to_interpro_results()`.
    """
    return {"results": list(gff_to_interpro_results(records).values())}


def get_domain_features(results):
    """
    Flatten *InterProScan* results into a list of domain features for
    each sequence.

    Parameters
    ----------
    results : dict
        Maps sequence IDs to their *InterProScan* results.

    Returns
    -------
    features : dict
        Maps sequence IDs to a list of features.
        Each feature is a dictionary with the keys ``'start'``,
        ``'end'``, ``'accession'``, ``'name'`` and ``'description'``,
        one for each location of each match with an InterPro entry.
    """
    features = OrderedDict()
    for seq_id, result in results.items():
        seq_features = []
        for match in result["matches"]:
            entry = match["signature"].get("entry")
            if not entry:
                continue
            for location in match["locations"]:
                seq_features.append({
                    "start": location["start"],
                    "end": location["end"],
                    "accession": entry["accession"],
                    "name": entry["name"],
                    "description": entry["description"],
                })
        features[seq_id] = seq_features
    return features
