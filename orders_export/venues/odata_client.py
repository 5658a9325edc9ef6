"""
HTTP client for the OData orders service.

**Conceptual**: This module provides a thin wrapper around a single HTTP GET.
It handles request construction, timeouts, and classification of every way a
request can end. It does NOT parse JSON or touch the filesystem - that's the
job of orders_export.data.

**Result values instead of exceptions**: Each fetch returns exactly one of
the FetchResult types below. Failures are caught where they happen (inside
ODataClient.fetch) and handed back to the caller as data, so the runner can
branch on the outcome with isinstance() and print a status line for it.

    FetchSuccess         2xx; carries the response body as text
    FetchHttpError       non-2xx; carries the status code and status name
    FetchNetworkError    transport failure (DNS, refused, timeout, ...)
    FetchUnexpectedError anything else raised while requesting
"""

from dataclasses import dataclass
from http import HTTPStatus
from typing import Optional, Union

import requests

from orders_export.config.settings import ExportSettings


@dataclass(frozen=True)
class FetchSuccess:
    """Response body of a 2xx reply."""
    text: str


@dataclass(frozen=True)
class FetchHttpError:
    """
    Server answered with a non-2xx status.

    Attributes:
        status_code: Numeric HTTP status (e.g., 404).
        status_text: Status name in CamelCase (e.g., "NotFound").
    """
    status_code: int
    status_text: str


@dataclass(frozen=True)
class FetchNetworkError:
    """Transport-level failure; message is the underlying requests error."""
    message: str


@dataclass(frozen=True)
class FetchUnexpectedError:
    message: str


FetchResult = Union[FetchSuccess, FetchHttpError, FetchNetworkError, FetchUnexpectedError]


def status_text(status_code: int) -> str:
    """
    Render an HTTP status code as a CamelCase status name.

    Known codes use the standard reason phrase with spaces removed, so
    404 becomes "NotFound" and 500 becomes "InternalServerError". Codes
    outside the standard table fall back to the number itself.

    Example:
        >>> status_text(404)
        'NotFound'
        >>> status_text(599)
        '599'
    """
    try:
        phrase = HTTPStatus(status_code).phrase
    except ValueError:
        return str(status_code)
    return "".join(word[:1].upper() + word[1:] for word in phrase.replace("-", " ").split())


class ODataClient:
    """
    Thin HTTP client for an OData JSON endpoint.

    **Responsibilities**:
      - Make one GET request with the configured timeout
      - Classify the outcome into a FetchResult

    **NOT responsible for**:
      - Parsing the JSON envelope (orders_export.data.schemas)
      - Writing CSV (orders_export.data.io)

    **Example usage**:
        >>> from orders_export.config.settings import ExportSettings
        >>> with ODataClient(ExportSettings()) as client:
        ...     result = client.fetch()
        >>> if isinstance(result, FetchSuccess):
        ...     print(len(result.text))
    """

    def __init__(self, settings: ExportSettings, session: Optional[requests.Session] = None):
        """
        Initialize the client with settings.

        Args:
            settings: Export configuration (request_url, timeout_seconds).
            session: Optional pre-built requests.Session. A new one is
                     created when omitted.
        """
        self.settings = settings
        self.session = session if session is not None else requests.Session()

    def fetch(self) -> FetchResult:
        """
        GET the configured URL and classify the outcome.

        **HTTP request details**:
          - Method: GET
          - URL: settings.request_url, used as-is (query string included)
          - Timeout: settings.timeout_seconds
          - Redirects: requests defaults

        Returns:
            FetchSuccess with the body text on 2xx, otherwise one of the
            error result types. Never raises for request failures.
        """
        try:
            response = self.session.get(
                self.settings.request_url,
                timeout=self.settings.timeout_seconds,
            )

            if not 200 <= response.status_code < 300:
                return FetchHttpError(
                    status_code=response.status_code,
                    status_text=status_text(response.status_code),
                )

            return FetchSuccess(text=response.text)

        except requests.RequestException as e:
            # ConnectionError, Timeout, TooManyRedirects, InvalidURL, ...
            return FetchNetworkError(message=str(e))

        except Exception as e:
            return FetchUnexpectedError(message=str(e))

    def close(self):
        """Close the HTTP session and release pooled connections."""
        self.session.close()

    def __enter__(self):
        """Enable context manager support (with statement)."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Clean up session when exiting context manager."""
        self.close()
        return False  # Don't suppress exceptions


def fetch_json_text(settings: ExportSettings, session: Optional[requests.Session] = None) -> FetchResult:
    """
    Fetch the configured URL once and return the classified result.

    Convenience wrapper that opens an ODataClient, performs the request,
    and closes the session on every path.

    Args:
        settings: Export configuration.
        session: Optional requests.Session to use (mainly for tests).

    Returns:
        A FetchResult value.
    """
    with ODataClient(settings, session=session) as client:
        return client.fetch()
