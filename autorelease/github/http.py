"""HTTP client abstraction for the GitHub REST API.

This module provides:
- ApiClient: Protocol for JSON API calls (injectable for tests)
- RealApiClient: Real implementation using urllib
- MockApiClient: Mock implementation for testing
"""

from __future__ import annotations

import http.client
import json
import ssl
import urllib.error
import urllib.request
from dataclasses import dataclass
from typing import Protocol, runtime_checkable

from autorelease import __version__
from autorelease.core.result import Err, Ok, Result
from autorelease.core.structured import as_str_dict, get_str

__all__ = [
    "ApiClient",
    "RealApiClient",
    "MockApiClient",
    "HttpError",
    "DEFAULT_TIMEOUT_SECONDS",
]

DEFAULT_TIMEOUT_SECONDS = 30.0


@dataclass(frozen=True, slots=True)
class HttpError:
    """HTTP error details.

    Attributes:
        method: HTTP method of the failed request
        url: The URL that failed
        status: HTTP status code (0 for network errors)
        message: Human-readable error message (the API's ``message`` field when present)
    """

    method: str
    url: str
    status: int
    message: str

    @property
    def is_not_found(self) -> bool:
        return self.status == 404

    @property
    def is_unprocessable(self) -> bool:
        """True for 422, which GitHub returns e.g. when a ref already exists."""
        return self.status == 422

    def __str__(self) -> str:
        if self.status:
            return f"HTTP {self.status}: {self.message} ({self.method} {self.url})"
        return f"{self.message} ({self.method} {self.url})"


@runtime_checkable
class ApiClient(Protocol):
    """Protocol for GitHub REST calls.

    This abstraction allows injecting mock clients for testing,
    avoiding real network calls in unit tests.
    """

    def request(
        self,
        method: str,
        path: str,
        payload: dict[str, object] | None = None,
    ) -> Result[object | None, HttpError]:
        """Send a request and decode the JSON response.

        Args:
            method: HTTP method (GET, POST, PATCH, DELETE)
            path: API path, e.g. ``/repos/owner/name/releases``
            payload: JSON body, if any

        Returns:
            Ok with the decoded JSON (None for an empty body), or Err with HttpError
        """
        ...


def _api_message(raw: bytes, fallback: str) -> str:
    """Extract GitHub's ``message`` field from an error body."""
    try:
        obj: object = json.loads(raw.decode("utf-8"))
    except (json.JSONDecodeError, UnicodeDecodeError):
        return fallback
    data = as_str_dict(obj)
    if data is None:
        return fallback
    return get_str(data, "message") or fallback


class RealApiClient:
    """Real GitHub API client using urllib.

    Handles:
    - HTTPS with system certificates
    - Bearer token authentication
    - JSON request/response bodies
    - Timeout handling
    """

    def __init__(
        self,
        token: str,
        *,
        base_url: str = "https://api.github.com",
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        user_agent: str = f"autorelease/{__version__}",
    ) -> None:
        """Initialize API client.

        Args:
            token: Token sent as ``Authorization: Bearer``
            base_url: REST API root (differs on GitHub Enterprise Server)
            timeout: Request timeout in seconds
            user_agent: User-Agent header value
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.user_agent = user_agent
        self._token = token
        self._ssl_context = ssl.create_default_context()

    def _headers(self, *, has_body: bool) -> dict[str, str]:
        headers = {
            "Accept": "application/vnd.github+json",
            "Authorization": f"Bearer {self._token}",
            "User-Agent": self.user_agent,
            "X-GitHub-Api-Version": "2022-11-28",
        }
        if has_body:
            headers["Content-Type"] = "application/json"
        return headers

    def request(
        self,
        method: str,
        path: str,
        payload: dict[str, object] | None = None,
    ) -> Result[object | None, HttpError]:
        url = f"{self.base_url}{path}"
        data = json.dumps(payload).encode("utf-8") if payload is not None else None

        try:
            req = urllib.request.Request(
                url,
                data=data,
                headers=self._headers(has_body=data is not None),
                method=method,
            )
            with urllib.request.urlopen(
                req,
                timeout=self.timeout,
                context=self._ssl_context,
            ) as response:
                raw: bytes = response.read()
        except urllib.error.HTTPError as e:
            message = _api_message(e.read(), fallback=str(e.reason))
            return Err(HttpError(method=method, url=url, status=e.code, message=message))
        except urllib.error.URLError as e:
            return Err(HttpError(method=method, url=url, status=0, message=str(e.reason)))
        except TimeoutError:
            return Err(HttpError(method=method, url=url, status=0, message="Request timed out"))
        except http.client.HTTPException as e:
            # Truncated or malformed response, e.g. IncompleteRead.
            return Err(
                HttpError(method=method, url=url, status=0, message=f"invalid response: {e!r}")
            )
        except ValueError as e:
            return Err(HttpError(method=method, url=url, status=0, message=str(e)))
        except OSError as e:
            return Err(HttpError(method=method, url=url, status=0, message=str(e)))

        if not raw:
            return Ok(None)
        try:
            return Ok(json.loads(raw.decode("utf-8")))
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            return Err(
                HttpError(method=method, url=url, status=0, message=f"JSON parse error: {e}")
            )


@dataclass(frozen=True, slots=True)
class ApiCall:
    """A request recorded by MockApiClient."""

    method: str
    path: str
    payload: dict[str, object] | None


class MockApiClient:
    """Mock API client for testing.

    Responses are keyed by ``(method, path)``. Unknown routes answer 404.

    Usage:
        client = MockApiClient()
        client.set_response("GET", "/repos/o/r/releases/tags/latest", {"id": 1})
        result = client.request("GET", "/repos/o/r/releases/tags/latest")
        assert result == Ok({"id": 1})
    """

    def __init__(self) -> None:
        self._responses: dict[tuple[str, str], object | HttpError] = {}
        self.calls: list[ApiCall] = []

    def set_response(self, method: str, path: str, response: object | HttpError) -> None:
        """Set the response (decoded JSON, None, or an HttpError) for a route."""
        self._responses[(method, path)] = response

    def set_error(self, method: str, path: str, status: int, message: str) -> None:
        """Shorthand for answering a route with an HttpError."""
        self.set_response(
            method, path, HttpError(method=method, url=path, status=status, message=message)
        )

    def request(
        self,
        method: str,
        path: str,
        payload: dict[str, object] | None = None,
    ) -> Result[object | None, HttpError]:
        self.calls.append(ApiCall(method=method, path=path, payload=payload))

        if (method, path) not in self._responses:
            return Err(HttpError(method=method, url=path, status=404, message="Not Found (mock)"))

        response = self._responses[(method, path)]
        if isinstance(response, HttpError):
            return Err(response)
        return Ok(response)

    # Test helper methods

    @property
    def methods(self) -> list[str]:
        """Methods of all recorded calls, in order."""
        return [c.method for c in self.calls]

    def find(self, method: str, path: str) -> list[ApiCall]:
        """All recorded calls for a route."""
        return [c for c in self.calls if c.method == method and c.path == path]
