"""
Envelope layout and column derivation for OData collections.

**Conceptual**: An OData collection response is a JSON object (the envelope)
that wraps the actual records in an array under "value":

    {
        "@odata.context": "...",
        "value": [
            {"@odata.etag": "W/...", "OrderID": 10400, "CustomerID": "EASTC", ...},
            ...
        ]
    }

This module knows that layout. It pulls the record array out of the
envelope, decides the column list, and loads the records into a DataFrame
whose columns are fixed to that list.

**Column schema comes from the first record only**: the column list is the
key order of record 0 minus the "@odata.etag" metadata key. Later records
are not checked against it. A key missing from a later record becomes an
empty cell, and a key that only appears in a later record is dropped.
Consumers of the CSV must tolerate that.
"""

import json
from typing import Any

import pandas as pd


# Field of the envelope holding the record array
ENVELOPE_FIELD = "value"

# Per-record metadata key that is never written as a column
ODATA_ETAG_KEY = "@odata.etag"


def parse_envelope(json_text: str) -> Any:
    """
    Parse raw response text into Python objects.

    Raises:
        json.JSONDecodeError: If the text is not valid JSON.
    """
    return json.loads(json_text)


def extract_records(envelope: Any) -> list:
    """
    Return the record array from a parsed envelope.

    An envelope that is not a JSON object, has no "value" field, or whose
    "value" is not an array yields an empty list. Callers treat an empty
    list as "no data".

    Args:
        envelope: Result of parse_envelope().

    Returns:
        The list stored under ENVELOPE_FIELD, or [] if there is none.

    Example:
        >>> extract_records({"value": [{"OrderID": 1}]})
        [{'OrderID': 1}]
        >>> extract_records({"error": "nope"})
        []
    """
    if not isinstance(envelope, dict):
        return []

    records = envelope.get(ENVELOPE_FIELD)
    if not isinstance(records, list):
        return []

    return records


def derive_columns(records: list) -> list[str]:
    """
    Derive the ordered column list from the first record.

    Keeps the first record's key order and drops ODATA_ETAG_KEY. No sorting,
    no deduplication. A first record that is not an object has no columns.

    Args:
        records: Non-empty record list from extract_records().

    Returns:
        Column names in source order.

    Raises:
        ValueError: If records is empty.

    Example:
        >>> derive_columns([{"@odata.etag": "x", "OrderID": 1, "ShipCity": "Bern"}])
        ['OrderID', 'ShipCity']
    """
    if not records:
        raise ValueError("Cannot derive columns from an empty record list")

    first = records[0]
    if not isinstance(first, dict):
        return []

    return [name for name in first.keys() if name != ODATA_ETAG_KEY]


def records_to_frame(records: list, columns: list[str]) -> pd.DataFrame:
    """
    Load records into a DataFrame with a fixed column list.

    **Functionally**:
      - Uses dtype=object so values keep their JSON-decoded Python types
        (ints stay ints even when a column has gaps).
      - Columns are exactly `columns`, in that order.
      - Missing keys become NaN; JSON nulls stay None.
      - Records that are not objects contribute a row of missing cells.

    Args:
        records: Record list from extract_records().
        columns: Column list from derive_columns().

    Returns:
        DataFrame with one row per record, in input order.
    """
    rows = [record if isinstance(record, dict) else {} for record in records]
    frame = pd.DataFrame(rows, columns=columns, dtype=object)

    # Zero-column input can collapse the row count; keep one row per record
    if len(frame) != len(rows):
        frame = pd.DataFrame(index=pd.RangeIndex(len(rows)), columns=columns, dtype=object)

    return frame
