"""
Configuration settings for the orders export.

**Conceptual**: This module provides a strongly-typed configuration object that
loads from environment variables (via .env files). Settings are validated at
construction, so a bad value fails at startup rather than halfway through a run.

Every setting has a default that reproduces the stock export (Northwind orders
from 1997 onwards, written to ./orders.csv), so the export runs with no
environment at all.

This module uses python-dotenv to load .env files and dataclasses for type safety.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

# Load .env from project root (no-op if the file does not exist)
env_path = Path(__file__).parent.parent.parent / ".env"
load_dotenv(dotenv_path=env_path)


# The query string is kept literal; requests leaves an already-built URL alone
DEFAULT_REQUEST_URL = (
    "https://services.odata.org/V4/Northwind/Northwind.svc/Orders"
    "?$filter=OrderDate ge 1997-01-01T00:00:00Z&$format=json"
)
DEFAULT_OUTPUT_PATH = "orders.csv"
DEFAULT_TIMEOUT_SECONDS = 30


@dataclass(frozen=True)
class ExportSettings:
    """
    Configuration for a single fetch-and-export run.

    **Conceptual**: The export needs to know where to fetch from, where to
    write to, and how long to wait for the server. All three come from
    environment variables with sensible defaults.

    Attributes:
        request_url: Full OData URL, query string included.
        output_path: Path of the CSV file to create or overwrite.
        timeout_seconds: HTTP request timeout in seconds (default 30).
    """
    request_url: str = DEFAULT_REQUEST_URL
    output_path: str = DEFAULT_OUTPUT_PATH
    timeout_seconds: int = DEFAULT_TIMEOUT_SECONDS

    def __post_init__(self):
        """Validate settings after initialization."""
        if not self.request_url or not self.request_url.strip():
            raise ValueError(
                "ORDERS_EXPORT_URL must not be empty. "
                "Unset it to use the default Northwind orders URL."
            )
        if not self.output_path or not self.output_path.strip():
            raise ValueError(
                "ORDERS_EXPORT_OUTPUT_PATH must not be empty. "
                "Unset it to write to orders.csv in the current directory."
            )
        if self.timeout_seconds <= 0:
            raise ValueError(
                f"timeout_seconds must be positive, got: {self.timeout_seconds}"
            )

    @classmethod
    def from_env(cls) -> "ExportSettings":
        """
        Load export settings from environment variables.

        **Environment variables** (all optional):
          - ORDERS_EXPORT_URL: Request URL. Defaults to the Northwind orders query.
          - ORDERS_EXPORT_OUTPUT_PATH: CSV path. Defaults to "orders.csv".
          - ORDERS_EXPORT_TIMEOUT_SECONDS: HTTP timeout. Defaults to 30.

        Returns:
            ExportSettings object with values loaded from environment.

        Raises:
            ValueError: If a variable is set to an empty or invalid value.

        Usage example:
            >>> # In .env file:
            >>> # ORDERS_EXPORT_OUTPUT_PATH=exports/orders_1997.csv
            >>>
            >>> settings = ExportSettings.from_env()
            >>> print(settings.output_path)  # "exports/orders_1997.csv"
        """
        request_url = os.getenv("ORDERS_EXPORT_URL", DEFAULT_REQUEST_URL)
        output_path = os.getenv("ORDERS_EXPORT_OUTPUT_PATH", DEFAULT_OUTPUT_PATH)
        timeout_str = os.getenv("ORDERS_EXPORT_TIMEOUT_SECONDS", str(DEFAULT_TIMEOUT_SECONDS))

        try:
            timeout_seconds = int(timeout_str)
        except ValueError:
            raise ValueError(
                f"ORDERS_EXPORT_TIMEOUT_SECONDS must be an integer, got: {timeout_str}"
            )

        return cls(
            request_url=request_url,
            output_path=output_path,
            timeout_seconds=timeout_seconds,
        )


_default_settings: Optional[ExportSettings] = None


def get_settings() -> ExportSettings:
    """
    Get the global settings singleton.

    Settings are loaded from environment on first call, then cached for reuse.
    Tests can bypass this by constructing ExportSettings directly, or call
    reset_settings() after changing the environment.

    Returns:
        Global ExportSettings singleton.

    Raises:
        ValueError: If the environment holds an invalid value.
    """
    global _default_settings

    if _default_settings is None:
        _default_settings = ExportSettings.from_env()

    return _default_settings


def reset_settings():
    """
    Reset the global settings singleton (for testing).

    **Testing pattern**:
      ```python
      def test_something(monkeypatch):
          reset_settings()
          monkeypatch.setenv("ORDERS_EXPORT_OUTPUT_PATH", "out.csv")
          settings = get_settings()
          assert settings.output_path == "out.csv"
      ```
    """
    global _default_settings
    _default_settings = None
