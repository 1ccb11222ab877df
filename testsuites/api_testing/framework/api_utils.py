"""
================================================================================
API Request Helper
================================================================================

The request helper every service facade is built on:
    - URL building with append-only query parameters
    - Verb dispatch (GET/POST/PUT/PATCH/DELETE) through an injected transport
    - Response validation (parse, status, non-empty body)
    - Retry with exponential backoff
    - Paginated list aggregation

The transport is injected: anything exposing per-verb callables
`(url, headers=..., data=...)` returning a response with `status`,
`status_text` and `json()` works (HttpClient, Playwright APIRequestContext).

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from enum import Enum
from typing import (
    Any, Callable, Dict, Iterable, Iterator, List, Mapping, Optional,
    Sequence, Tuple, Type, TypeVar, Union,
)
from urllib.parse import parse_qsl, urlencode, urljoin, urlsplit, urlunsplit

from loguru import logger

from .api_logger import UNPARSED, ApiLogger
from .auth_manager import AuthManager
from .config_loader import ApiConfig, ConfigLoader


T = TypeVar("T")

QueryParams = Union[Mapping[str, Any], Sequence[Tuple[str, Any]]]

SUPPORTED_METHODS = ("GET", "POST", "PUT", "PATCH", "DELETE")
BODY_METHODS = ("POST", "PUT", "PATCH")

DEFAULT_HEADERS: Mapping[str, str] = {
    "Accept": "application/json",
    "Content-Type": "application/json",
}


# ================================================================================
# Errors
# ================================================================================

class ApiError(Exception):
    """Base class for response validation errors."""
    pass


class ResponseParseError(ApiError):
    """Raised when a response body is not well-formed JSON."""
    pass


class StatusMismatchError(ApiError):
    """Raised when the response status differs from the expected one."""

    def __init__(self, actual: int, expected: int) -> None:
        self.actual = actual
        self.expected = expected
        super().__init__(f"Expected status {expected} but got {actual}")


class EmptyBodyError(ApiError):
    """Raised when the parsed response body is absent."""
    pass


class SchemaValidationError(ApiError):
    """Raised when an object misses a property or has the wrong type."""
    pass


# ================================================================================
# Retry Policy
# ================================================================================

@dataclass(frozen=True)
class RetryPolicy:
    """
    Immutable retry settings.

    Attributes:
        max_attempts: Total attempts, including the first
        initial_delay: Delay before the second attempt, in seconds
        max_delay: Upper bound for any single delay, in seconds
        retry_on: Exception classes treated as retryable
    """
    max_attempts: int = 3
    initial_delay: float = 1.0
    max_delay: float = 5.0
    retry_on: Tuple[Type[BaseException], ...] = (Exception,)

    def __post_init__(self) -> None:
        if self.max_attempts < 1:
            raise ValueError(f"max_attempts must be >= 1, got {self.max_attempts}")
        if self.initial_delay < 0:
            raise ValueError(f"initial_delay must be >= 0, got {self.initial_delay}")
        if self.max_delay < self.initial_delay:
            raise ValueError(
                f"max_delay ({self.max_delay}) must be >= initial_delay ({self.initial_delay})"
            )

    @classmethod
    def from_config(cls, loader: ConfigLoader) -> "RetryPolicy":
        return cls(
            max_attempts=int(loader.get("retry.max_attempts", 3)),
            initial_delay=float(loader.get("retry.initial_delay", 1.0)),
            max_delay=float(loader.get("retry.max_delay", 5.0)),
        )


DEFAULT_RETRY_POLICY = RetryPolicy()


def backoff_delays(policy: RetryPolicy) -> Iterator[float]:
    """
    Yield the delays slept between attempts.

    Formula: initial * (2 ^ n), capped at max_delay; max_attempts - 1 values.
    """
    delay = policy.initial_delay
    for _ in range(policy.max_attempts - 1):
        yield delay
        delay = min(delay * 2, policy.max_delay)


# ================================================================================
# Request Helper
# ================================================================================

def _query_items(query_params: Optional[QueryParams]) -> Iterable[Tuple[str, Any]]:
    if not query_params:
        return []
    if isinstance(query_params, Mapping):
        return query_params.items()
    return query_params


def _query_value(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, Enum):
        value = value.value
    return str(value)


class ApiUtils:
    """
    Generic REST request helper.

    Usage:
        >>> with HttpClient(api_config) as client:
        ...     api = ApiUtils(client, api_config)
        ...     response = api.get("/objects", query_params={"id": [3, 5]})
        ...     objects = api.validate_response(response, 200)
    """

    def __init__(
        self,
        client: Any,
        api_config: Optional[ApiConfig] = None,
        default_headers: Optional[Mapping[str, str]] = None,
        auth_manager: Optional[AuthManager] = None,
        api_logger: Optional[ApiLogger] = None,
    ) -> None:
        """
        Args:
            client: Transport with per-verb callables
            api_config: API settings. Loaded from ConfigLoader if None.
            default_headers: Headers sent with every request
            auth_manager: Adds the Authorization header while it holds a token
            api_logger: Event sink for request/response/error logging
        """
        self.client = client
        self.config = api_config or ApiConfig.from_loader()
        self.default_headers: Mapping[str, str] = dict(
            DEFAULT_HEADERS if default_headers is None else default_headers
        )
        self.auth_manager = auth_manager
        self.logger = api_logger or ApiLogger()

    # ---------------------------------------------------------------- URLs

    def build_url(self, endpoint: str, query_params: Optional[QueryParams] = None) -> str:
        """
        Resolve endpoint against the base URL and append query parameters.

        Parameters are appended in order, never overwritten. A list/tuple
        value produces one entry per element, and a query string already on
        the endpoint is kept.
        """
        url = urljoin(self.config.base_url, endpoint)
        scheme, netloc, path, query, fragment = urlsplit(url)

        pairs = parse_qsl(query, keep_blank_values=True)
        for key, value in _query_items(query_params):
            if isinstance(value, (list, tuple)):
                pairs.extend((key, _query_value(item)) for item in value)
            else:
                pairs.append((key, _query_value(value)))

        return urlunsplit((scheme, netloc, path, urlencode(pairs), fragment))

    def _merge_headers(self, headers: Optional[Mapping[str, str]]) -> Dict[str, str]:
        merged = dict(self.default_headers)
        if self.auth_manager is not None and self.auth_manager.auth_token:
            merged.update(self.auth_manager.get_auth_header())
        merged.update(headers or {})
        return merged

    # ------------------------------------------------------------ dispatch

    def make_request(
        self,
        method: str,
        endpoint: str,
        query_params: Optional[QueryParams] = None,
        headers: Optional[Mapping[str, str]] = None,
        data: Any = None,
    ) -> Any:
        """
        Dispatch one request through the transport.

        Args:
            method: GET, POST, PUT, PATCH or DELETE
            endpoint: Path relative to the base URL
            query_params: Mapping or (key, value) pairs appended to the URL
            headers: Merged over the defaults, caller wins
            data: Body; only valid for POST/PUT/PATCH

        Returns:
            The transport's response object

        Raises:
            ValueError: Unsupported method, or a body on GET/DELETE
            Exception: Transport errors, unchanged, after being logged
        """
        method = method.upper()

        try:
            if method not in SUPPORTED_METHODS:
                raise ValueError(
                    f"Unsupported HTTP method '{method}'. "
                    f"Expected one of: {', '.join(SUPPORTED_METHODS)}"
                )
            if data is not None and method not in BODY_METHODS:
                raise ValueError(f"{method} requests cannot carry a body")

            url = self.build_url(endpoint, query_params)
            request_headers = self._merge_headers(headers)

            self.logger.log_request(method, url, data, request_headers)

            send = getattr(self.client, method.lower())
            if method in BODY_METHODS:
                response = send(url, headers=request_headers, data=data)
            else:
                response = send(url, headers=request_headers)

            self.logger.log_response(
                response.status, response.status_text, self._peek_body(response)
            )
            return response
        except Exception as e:
            self.logger.log_error(e)
            raise

    execute = make_request

    @staticmethod
    def _peek_body(response: Any) -> Any:
        try:
            return response.json()
        except Exception:
            return UNPARSED

    def get(self, endpoint: str, **options: Any) -> Any:
        return self.make_request("GET", endpoint, **options)

    def post(self, endpoint: str, data: Any = None, **options: Any) -> Any:
        return self.make_request("POST", endpoint, data=data, **options)

    def put(self, endpoint: str, data: Any = None, **options: Any) -> Any:
        return self.make_request("PUT", endpoint, data=data, **options)

    def patch(self, endpoint: str, data: Any = None, **options: Any) -> Any:
        return self.make_request("PATCH", endpoint, data=data, **options)

    def delete(self, endpoint: str, **options: Any) -> Any:
        return self.make_request("DELETE", endpoint, **options)

    # ---------------------------------------------------------- validation

    def validate_response(self, response: Any, expected_status: int) -> Any:
        """
        Parse the body and check status and presence.

        Returns:
            The parsed body

        Raises:
            ResponseParseError: Body is not well-formed JSON
            StatusMismatchError: Status differs from expected_status
            EmptyBodyError: Parsed body is None
        """
        try:
            try:
                body = response.json()
            except Exception as e:
                raise ResponseParseError(
                    f"Response body is not valid JSON (status {response.status}): {e}"
                ) from e

            if response.status != expected_status:
                raise StatusMismatchError(response.status, expected_status)

            if body is None:
                raise EmptyBodyError("Response body is empty")
        except ApiError as e:
            self.logger.log_error(e)
            raise

        return body

    def validate_object_properties(self, obj: Mapping[str, Any], required_props: Iterable[str]) -> None:
        """Raise SchemaValidationError for the first missing property."""
        for prop in required_props:
            if prop not in obj:
                raise SchemaValidationError(f"Missing required property: {prop}")

    def validate_schema(self, obj: Mapping[str, Any], schema: Mapping[str, Any]) -> None:
        """
        Check presence and type of every schema field.

        Schema values are Python types or type names ("string", "number",
        "boolean", "object", "array").
        """
        for key, expected in schema.items():
            if key not in obj:
                raise SchemaValidationError(f"Missing required field: {key}")

            expected_type = _TYPE_NAMES.get(expected, expected) if isinstance(expected, str) else expected
            if isinstance(expected_type, str):
                raise SchemaValidationError(f"Unknown type name for {key}: {expected}")

            value = obj[key]
            # bool is an int subclass
            if isinstance(value, bool) and bool not in _as_tuple(expected_type):
                matches = False
            else:
                matches = isinstance(value, expected_type)
            if not matches:
                raise SchemaValidationError(
                    f"Invalid type for {key}: expected {expected}, got {type(value).__name__}"
                )

    # --------------------------------------------------------------- retry

    def retry_request(
        self,
        request_fn: Callable[[], T],
        policy: RetryPolicy = DEFAULT_RETRY_POLICY,
    ) -> T:
        """
        Call request_fn until it succeeds or attempts run out.

        Sleeps between attempts only; the delay doubles up to max_delay.
        Exceptions outside policy.retry_on propagate immediately.

        Raises:
            The exception from the final attempt, unchanged
        """
        delays = backoff_delays(policy)

        for attempt in range(1, policy.max_attempts + 1):
            try:
                return request_fn()
            except policy.retry_on as e:
                if attempt == policy.max_attempts:
                    logger.error(
                        f"All {policy.max_attempts} attempts failed. Last error: {e}"
                    )
                    raise

                delay = next(delays)
                logger.warning(
                    f"Attempt {attempt}/{policy.max_attempts} failed: {e}. "
                    f"Retrying in {delay}s"
                )
                time.sleep(delay)

    # ---------------------------------------------------------- pagination

    def get_paginated_results(
        self,
        endpoint: str,
        pagination_config: Optional[Mapping[str, Any]] = None,
        expected_status: int = 200,
        items_key: str = "items",
        total_pages_key: str = "totalPages",
    ) -> List[Any]:
        """
        Fetch every page of a paginated list and flatten the items.

        Pages are requested one by one starting at 1 until the current page
        reaches the server-reported total. Any failure aborts the whole
        aggregation.

        Raises:
            ApiError: On any page's validation failure
            SchemaValidationError: When a page's items are not a list
        """
        results: List[Any] = []
        current_page = 1
        has_more = True

        while has_more:
            response = self.get(
                endpoint,
                query_params={**(pagination_config or {}), "page": current_page},
            )
            data = self.validate_response(response, expected_status)

            items = data.get(items_key) if isinstance(data, Mapping) else None
            if not isinstance(items, list):
                error = SchemaValidationError(
                    f"Page {current_page}: '{items_key}' is not a list"
                )
                self.logger.log_error(error)
                raise error
            results.extend(items)

            try:
                total_pages = int(data.get(total_pages_key) or 0)
            except (TypeError, ValueError) as e:
                error = SchemaValidationError(
                    f"Page {current_page}: '{total_pages_key}' is not an integer: "
                    f"{data.get(total_pages_key)!r}"
                )
                self.logger.log_error(error)
                raise error from e
            has_more = current_page < total_pages
            current_page += 1

        logger.debug(f"Fetched {len(results)} items over {current_page - 1} pages from {endpoint}")
        return results


_TYPE_NAMES: Dict[str, Any] = {
    "string": str,
    "number": (int, float),
    "integer": int,
    "boolean": bool,
    "object": dict,
    "array": list,
}


def _as_tuple(value: Any) -> Tuple[Any, ...]:
    return value if isinstance(value, tuple) else (value,)


__all__ = [
    "ApiError",
    "ApiUtils",
    "DEFAULT_HEADERS",
    "DEFAULT_RETRY_POLICY",
    "EmptyBodyError",
    "ResponseParseError",
    "RetryPolicy",
    "SchemaValidationError",
    "StatusMismatchError",
    "backoff_delays",
]
