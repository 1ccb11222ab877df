"""
================================================================================
Transport Selection
================================================================================

Opens the HTTP transport named by ApiConfig.transport:
    - "httpx": HttpClient (default)
    - "playwright": Playwright's APIRequestContext (sync API)

Both expose per-verb callables `(url, headers=..., data=...)` returning a
response with `status`, `status_text` and `json()`.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Iterator

from loguru import logger
from playwright.sync_api import sync_playwright

from .config_loader import ApiConfig, ConfigurationError
from .http_client import HttpClient


@contextmanager
def open_playwright_request_context(api_config: ApiConfig) -> Iterator[Any]:
    """Yield a Playwright APIRequestContext configured from api_config."""
    with sync_playwright() as playwright:
        context = playwright.request.new_context(
            base_url=api_config.base_url,
            timeout=api_config.timeout_ms,
        )
        logger.debug(f"Playwright request context opened for {api_config.base_url}")
        try:
            yield context
        finally:
            context.dispose()


@contextmanager
def open_transport(api_config: ApiConfig) -> Iterator[Any]:
    """
    Open the configured transport for the duration of the block.

    Raises:
        ConfigurationError: When api_config.transport is unknown
    """
    if api_config.transport == "httpx":
        with HttpClient(api_config) as client:
            yield client
    elif api_config.transport == "playwright":
        with open_playwright_request_context(api_config) as context:
            yield context
    else:
        raise ConfigurationError(f"Unknown transport: {api_config.transport}")


__all__ = [
    "open_playwright_request_context",
    "open_transport",
]
