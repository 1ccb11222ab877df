"""
================================================================================
httpx Transport
================================================================================

A thin httpx-backed transport for the request helper. It exposes the same
per-verb call shape as Playwright's APIRequestContext:

    client.get(url, headers=..., data=...) -> response
    response.status / response.status_text / response.json()

so ApiUtils can drive either transport unchanged. No retry happens here;
transport errors (httpx.HTTPError) propagate to the caller.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from typing import Any, Dict, Optional

import httpx
from loguru import logger

from .config_loader import ApiConfig


class HttpClientError(Exception):
    """Raised when the client is misused (e.g. outside its context manager)."""
    pass


class ApiResponse:
    """
    Response envelope over httpx.Response.

    Attributes mirror Playwright's APIResponse so both transports look alike.
    """

    def __init__(self, response: httpx.Response) -> None:
        self._response = response

    @property
    def status(self) -> int:
        return self._response.status_code

    @property
    def status_text(self) -> str:
        return self._response.reason_phrase

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300

    @property
    def url(self) -> str:
        return str(self._response.url)

    @property
    def headers(self) -> Dict[str, str]:
        return dict(self._response.headers)

    def json(self) -> Any:
        """Parse body as JSON. Raises ValueError on malformed payload."""
        return self._response.json()

    def text(self) -> str:
        return self._response.text

    def body(self) -> bytes:
        return self._response.content

    def __repr__(self) -> str:
        return f"<ApiResponse [{self.status} {self.status_text}]>"


class HttpClient:
    """
    httpx transport with per-verb methods.

    Usage:
        >>> with HttpClient(api_config) as client:
        ...     response = client.get("https://api.restful-api.dev/objects")
        ...     response.status
        200
    """

    def __init__(
        self,
        api_config: ApiConfig,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        """
        Args:
            api_config: API settings (timeout)
            transport: Optional httpx transport, e.g. httpx.MockTransport
        """
        self.api_config = api_config
        self.transport = transport
        self.session: Optional[httpx.Client] = None

    def __enter__(self) -> "HttpClient":
        self.session = httpx.Client(
            timeout=httpx.Timeout(self.api_config.timeout_seconds),
            follow_redirects=True,
            transport=self.transport,
        )
        logger.debug(
            f"httpx session opened (timeout={self.api_config.timeout_seconds}s)"
        )
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        if self.session:
            self.session.close()
            self.session = None

    def request(
        self,
        method: str,
        url: str,
        headers: Optional[Dict[str, str]] = None,
        data: Any = None,
    ) -> ApiResponse:
        """
        Send one request.

        Dict/list bodies are sent as JSON, anything else as raw content.

        Raises:
            HttpClientError: When used outside the context manager
            httpx.HTTPError: On transport failures
        """
        if self.session is None:
            raise HttpClientError(
                "HttpClient must be used within a context manager. "
                "Use 'with HttpClient(api_config) as client:'"
            )

        kwargs: Dict[str, Any] = {"headers": headers or {}}
        if isinstance(data, (dict, list)):
            kwargs["json"] = data
        elif data is not None:
            kwargs["content"] = data

        return ApiResponse(self.session.request(method, url, **kwargs))

    def get(self, url: str, headers: Optional[Dict[str, str]] = None, data: Any = None) -> ApiResponse:
        return self.request("GET", url, headers=headers, data=data)

    def post(self, url: str, headers: Optional[Dict[str, str]] = None, data: Any = None) -> ApiResponse:
        return self.request("POST", url, headers=headers, data=data)

    def put(self, url: str, headers: Optional[Dict[str, str]] = None, data: Any = None) -> ApiResponse:
        return self.request("PUT", url, headers=headers, data=data)

    def patch(self, url: str, headers: Optional[Dict[str, str]] = None, data: Any = None) -> ApiResponse:
        return self.request("PATCH", url, headers=headers, data=data)

    def delete(self, url: str, headers: Optional[Dict[str, str]] = None, data: Any = None) -> ApiResponse:
        return self.request("DELETE", url, headers=headers, data=data)


__all__ = [
    "ApiResponse",
    "HttpClient",
    "HttpClientError",
]
