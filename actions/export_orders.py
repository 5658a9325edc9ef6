#!/usr/bin/env python3
"""
Fetch the Northwind orders collection and save it to orders.csv.

**Usage**:
    python actions/export_orders.py

Takes no arguments. The request URL, output path, and timeout can be changed
with ORDERS_EXPORT_URL, ORDERS_EXPORT_OUTPUT_PATH and
ORDERS_EXPORT_TIMEOUT_SECONDS (in the environment or a .env file).

**What this script does**:
  1. Load export settings from environment (.env file)
  2. GET the OData orders URL
  3. If the reply is 2xx, convert the JSON envelope to CSV
  4. Print one status line per outcome

Every fetch or write failure is reported and the script still exits 0. Only
a configuration error (invalid environment value) exits non-zero.

**Example output**:
    $ python actions/export_orders.py
    Data fetched successfully.
    Data successfully saved to orders.csv

    $ ORDERS_EXPORT_URL=https://services.odata.org/V4/Nope python actions/export_orders.py
    Error: NotFound
"""

import sys
from pathlib import Path
from typing import Optional

import requests

# Add project root to Python path so we can import orders_export modules
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from orders_export.config.settings import ExportSettings, get_settings
from orders_export.venues.odata_client import (
    fetch_json_text,
    FetchSuccess,
    FetchHttpError,
    FetchNetworkError,
    FetchUnexpectedError,
)
from orders_export.data.io import (
    save_to_csv,
    WriteSuccess,
    WriteNoData,
    WriteInvalidJson,
    WriteFileError,
    WriteUnexpectedError,
)


def report_write_result(result) -> None:
    """Print the status line for a WriteResult."""
    if isinstance(result, WriteSuccess):
        print(f"Data successfully saved to {result.path}")
    elif isinstance(result, WriteNoData):
        print("No data found.")
    elif isinstance(result, WriteInvalidJson):
        print(f"Invalid JSON: {result.message}")
    elif isinstance(result, WriteFileError):
        print(f"File write error: {result.message}")
    elif isinstance(result, WriteUnexpectedError):
        print(f"Unexpected error while writing CSV: {result.message}")
    else:
        raise TypeError(f"Unknown write result: {result!r}")


def run_export(settings: ExportSettings, session: Optional[requests.Session] = None):
    """
    Run one fetch-and-convert pass and print its status lines.

    **Flow**:
      - FetchSuccess -> "Data fetched successfully." then save_to_csv()
      - FetchHttpError -> "Error: <StatusText>", no CSV step
      - FetchNetworkError -> "Network error: <message>", no CSV step
      - FetchUnexpectedError -> "Unexpected error: <message>", no CSV step

    Args:
        settings: Export configuration.
        session: Optional requests.Session (tests pass a mock).

    Returns:
        The WriteResult when the CSV step ran, otherwise the failing FetchResult.
    """
    fetch_result = fetch_json_text(settings, session=session)

    if isinstance(fetch_result, FetchSuccess):
        print("Data fetched successfully.")
        write_result = save_to_csv(fetch_result.text, settings.output_path)
        report_write_result(write_result)
        return write_result

    if isinstance(fetch_result, FetchHttpError):
        print(f"Error: {fetch_result.status_text}")
    elif isinstance(fetch_result, FetchNetworkError):
        print(f"Network error: {fetch_result.message}")
    elif isinstance(fetch_result, FetchUnexpectedError):
        print(f"Unexpected error: {fetch_result.message}")
    else:
        raise TypeError(f"Unknown fetch result: {fetch_result!r}")

    return fetch_result


def main():
    """
    Main entry point for the script.

    **Exit codes**:
      - 0: Run completed (including reported fetch/write failures)
      - 1: Configuration error (invalid environment value)
      - 130: Interrupted by user
    """
    try:
        try:
            settings = get_settings()
        except ValueError as e:
            print(f"Configuration error: {e}", file=sys.stderr)
            sys.exit(1)

        run_export(settings)

    except KeyboardInterrupt:
        print("\nInterrupted by user. Exiting...")
        sys.exit(130)  # Standard Unix exit code for Ctrl+C


if __name__ == "__main__":
    main()
