"""
Tests for the export_orders action script.

**Purpose**: Verify the end-to-end flow (settings -> fetch -> CSV -> status
lines) with a mocked HTTP session, and that failures are reported on stdout
without writing a file.
"""

import sys
from pathlib import Path
from unittest.mock import Mock, patch

import pytest
import requests

# Add project root to path so we can import actions module
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from actions.export_orders import main, run_export, report_write_result
from orders_export.config.settings import ExportSettings, reset_settings
from orders_export.venues.odata_client import FetchHttpError, FetchNetworkError
from orders_export.data.io import (
    WriteSuccess,
    WriteNoData,
    WriteInvalidJson,
    WriteFileError,
    WriteUnexpectedError,
)


REFERENCE_BODY = '{"value":[{"OrderID":1,"CustomerID":"ALFKI, Inc","@odata.etag":"x"}]}'


def make_session(status_code=200, text="", side_effect=None):
    """Mock requests.Session whose get() returns one canned response."""
    session = Mock()
    session.headers = {}
    if side_effect is not None:
        session.get.side_effect = side_effect
    else:
        response = Mock()
        response.status_code = status_code
        response.text = text
        session.get.return_value = response
    return session


@pytest.fixture
def settings(tmp_path):
    return ExportSettings(
        request_url="https://odata.test/Orders?$format=json",
        output_path=str(tmp_path / "orders.csv"),
    )


def test_run_export_success(settings, capsys):
    result = run_export(settings, session=make_session(200, REFERENCE_BODY))

    assert isinstance(result, WriteSuccess)
    output = Path(settings.output_path)
    assert output.read_text(encoding="utf-8") == 'OrderID,CustomerID\n1,"ALFKI, Inc"\n'

    out = capsys.readouterr().out
    assert out.splitlines() == [
        "Data fetched successfully.",
        f"Data successfully saved to {output}",
    ]


def test_run_export_not_found(settings, capsys):
    result = run_export(settings, session=make_session(404, "Not here"))

    assert result == FetchHttpError(status_code=404, status_text="NotFound")
    assert capsys.readouterr().out == "Error: NotFound\n"
    assert not Path(settings.output_path).exists()


def test_run_export_network_error(settings, capsys):
    session = make_session(side_effect=requests.ConnectionError("Name or service not known"))

    result = run_export(settings, session=session)

    assert isinstance(result, FetchNetworkError)
    out = capsys.readouterr().out
    assert out.startswith("Network error:")
    assert "Name or service not known" in out
    assert not Path(settings.output_path).exists()


def test_run_export_unexpected_fetch_error(settings, capsys):
    run_export(settings, session=make_session(side_effect=RuntimeError("kaboom")))

    assert capsys.readouterr().out == "Unexpected error: kaboom\n"
    assert not Path(settings.output_path).exists()


def test_run_export_no_data(settings, capsys):
    result = run_export(settings, session=make_session(200, '{"value": []}'))

    assert result == WriteNoData()
    assert capsys.readouterr().out.splitlines() == [
        "Data fetched successfully.",
        "No data found.",
    ]
    assert not Path(settings.output_path).exists()


def test_run_export_invalid_json(settings, capsys):
    result = run_export(settings, session=make_session(200, "not json at all"))

    assert isinstance(result, WriteInvalidJson)
    lines = capsys.readouterr().out.splitlines()
    assert lines[0] == "Data fetched successfully."
    assert lines[1].startswith("Invalid JSON:")


@pytest.mark.parametrize("result, expected", [
    (WriteNoData(), "No data found."),
    (WriteInvalidJson(message="Expecting value"), "Invalid JSON: Expecting value"),
    (WriteFileError(message="Permission denied"), "File write error: Permission denied"),
    (WriteUnexpectedError(message="bad"), "Unexpected error while writing CSV: bad"),
])
def test_report_write_result(result, expected, capsys):
    report_write_result(result)

    assert capsys.readouterr().out == expected + "\n"


def test_main_reports_configuration_error(monkeypatch, capsys):
    reset_settings()
    monkeypatch.setenv("ORDERS_EXPORT_TIMEOUT_SECONDS", "abc")

    try:
        with pytest.raises(SystemExit) as exc_info:
            main()
    finally:
        reset_settings()

    assert exc_info.value.code == 1
    assert "Configuration error:" in capsys.readouterr().err


def test_main_runs_export_with_loaded_settings(settings):
    with patch("actions.export_orders.get_settings", return_value=settings), \
            patch("actions.export_orders.run_export") as mock_run:
        main()

    mock_run.assert_called_once_with(settings)
