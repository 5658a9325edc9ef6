"""
CSV writer for exported OData records.

**Conceptual**: This module is the I/O boundary for the export. It takes the
raw JSON text returned by the fetcher, loads the records (via schemas.py),
and writes them to disk in a fixed, minimal CSV format:

  - Header line: column names joined by ",".
  - One line per record, values in column order joined by ",".
  - Missing or null values are written as empty strings.
  - A value containing a comma is wrapped in one pair of double quotes.
    Nothing else is escaped: embedded quotes and newlines are written as-is.
  - Lines end with "\\n".

The stdlib csv module and DataFrame.to_csv both apply full RFC 4180 quoting
(doubling embedded quotes, quoting newlines), which changes the output, so
rows are rendered here directly.

**Result values**: save_to_csv never raises. Every outcome is returned as one
of the WriteResult types so the caller can report it:

    WriteSuccess          file written; carries path and row count
    WriteNoData           envelope had no records; file not touched
    WriteInvalidJson      body was not valid JSON, or nested too deeply to
                          decode; file not touched
    WriteFileError        OSError while writing (permissions, disk full, ...)
    WriteUnexpectedError  anything else while writing

On WriteFileError / WriteUnexpectedError the file may be left partially
written. There is no temp-file-then-rename step.
"""

import json
import math
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Union

import pandas as pd

from orders_export.data.schemas import (
    parse_envelope,
    extract_records,
    derive_columns,
    records_to_frame,
)


CSV_DELIMITER = ","
CSV_QUOTE = '"'
CSV_LINE_TERMINATOR = "\n"


@dataclass(frozen=True)
class WriteSuccess:
    path: Path
    row_count: int


@dataclass(frozen=True)
class WriteNoData:
    pass


@dataclass(frozen=True)
class WriteInvalidJson:
    message: str


@dataclass(frozen=True)
class WriteFileError:
    message: str


@dataclass(frozen=True)
class WriteUnexpectedError:
    message: str


WriteResult = Union[WriteSuccess, WriteNoData, WriteInvalidJson, WriteFileError, WriteUnexpectedError]


def is_missing(value: Any) -> bool:
    """True for JSON null (None) and for cells absent from a record (NaN)."""
    if value is None:
        return True
    return isinstance(value, float) and math.isnan(value)


def format_value(value: Any) -> str:
    """
    Convert one cell to its CSV text, before quoting.

    **Rules**:
      - Missing / null -> ""
      - str -> unchanged
      - bool -> "true" / "false"
      - int, float -> JSON number text (e.g. 1, 32.38)
      - dict, list -> compact JSON text

    Example:
        >>> format_value(None)
        ''
        >>> format_value(True)
        'true'
        >>> format_value({"a": 1})
        '{"a":1}'
    """
    if is_missing(value):
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, (bool, int, float, dict, list)):
        return json.dumps(value, separators=(",", ":"), ensure_ascii=False)
    return str(value)


def quote_value(text: str) -> str:
    """
    Wrap text in double quotes if it contains the delimiter.

    Example:
        >>> quote_value("ALFKI, Inc")
        '"ALFKI, Inc"'
        >>> quote_value('say "hi"')
        'say "hi"'
    """
    if CSV_DELIMITER in text:
        return f"{CSV_QUOTE}{text}{CSV_QUOTE}"
    return text


def render_row(values) -> str:
    """Join one row's formatted and quoted cells (no line terminator)."""
    return CSV_DELIMITER.join(quote_value(format_value(value)) for value in values)


def write_records_csv(frame: pd.DataFrame, path: Path | str) -> int:
    """
    Write a column-fixed record frame to CSV.

    The file is created or truncated. The handle is closed on every exit
    path, including when a write fails partway.

    Args:
        frame: DataFrame from records_to_frame().
        path: Destination file.

    Returns:
        Number of data rows written.

    Raises:
        OSError: If the file cannot be opened or written.
    """
    path = Path(path)
    header = CSV_DELIMITER.join(str(column) for column in frame.columns)

    row_count = 0
    with open(path, "w", encoding="utf-8", newline="") as handle:
        handle.write(header + CSV_LINE_TERMINATOR)

        for row in frame.to_numpy(dtype=object):
            handle.write(render_row(row) + CSV_LINE_TERMINATOR)
            row_count += 1

    return row_count


def save_to_csv(json_text: str, path: Path | str) -> WriteResult:
    """
    Convert an OData JSON envelope to a CSV file.

    **Workflow**:
      1. Parse the JSON text (invalid or undecodably deep JSON -> WriteInvalidJson)
      2. Extract the "value" record array (missing or empty -> WriteNoData)
      3. Derive columns from the first record, minus "@odata.etag"
      4. Write header and one line per record

    The output file is only opened once there is data to write, so the
    no-data and invalid-JSON outcomes leave any existing file untouched.

    Args:
        json_text: Raw response body.
        path: Destination CSV path.

    Returns:
        A WriteResult value.

    Example:
        >>> result = save_to_csv('{"value":[{"OrderID":1}]}', "orders.csv")
        >>> isinstance(result, WriteSuccess)
        True
    """
    path = Path(path)

    try:
        envelope = parse_envelope(json_text)
    except (ValueError, RecursionError) as e:
        # RecursionError: valid JSON nested deeper than the decoder can follow
        return WriteInvalidJson(message=str(e))

    records = extract_records(envelope)
    if not records:
        return WriteNoData()

    try:
        columns = derive_columns(records)
        frame = records_to_frame(records, columns)
        row_count = write_records_csv(frame, path)
    except OSError as e:
        return WriteFileError(message=str(e))
    except Exception as e:
        return WriteUnexpectedError(message=str(e))

    return WriteSuccess(path=path, row_count=row_count)
