"""
================================================================================
API Testing Framework
================================================================================

Framework components for the objects API suite.

Modules:
    - api_utils: Request helper (dispatch, validation, retry, pagination)
    - api_logger: Request/response/error logging with Allure attachments
    - config_loader: YAML configuration management
    - endpoints: Endpoint catalog
    - enums: Device value catalogs and HTTP status codes
    - http_client: httpx transport
    - transport: Transport selection (httpx / Playwright)
    - auth_manager: Authentication token bookkeeping
    - test_data_factory: Random device payloads
    - object_assertions: Assertions on objects payloads

Author: Automation Team
License: MIT
================================================================================
"""

from .api_logger import ApiLogger
from .api_utils import (
    DEFAULT_RETRY_POLICY,
    ApiError,
    ApiUtils,
    EmptyBodyError,
    ResponseParseError,
    RetryPolicy,
    SchemaValidationError,
    StatusMismatchError,
)
from .auth_manager import AuthManager, TokenError, TokenState
from .config_loader import ApiConfig, ConfigLoader, ConfigurationError
from .endpoints import APIEndpoints
from .enums import HttpStatusCode
from .http_client import ApiResponse, HttpClient, HttpClientError
from .object_assertions import ObjectAssertions
from .test_data_factory import DeviceDataFactory, QUERY_PARAM_PRESETS
from .transport import open_transport

__all__ = [
    "APIEndpoints",
    "ApiConfig",
    "ApiError",
    "ApiLogger",
    "ApiResponse",
    "ApiUtils",
    "AuthManager",
    "ConfigLoader",
    "ConfigurationError",
    "DEFAULT_RETRY_POLICY",
    "DeviceDataFactory",
    "EmptyBodyError",
    "HttpClient",
    "HttpClientError",
    "HttpStatusCode",
    "ObjectAssertions",
    "QUERY_PARAM_PRESETS",
    "ResponseParseError",
    "RetryPolicy",
    "SchemaValidationError",
    "StatusMismatchError",
    "TokenError",
    "TokenState",
    "open_transport",
]
