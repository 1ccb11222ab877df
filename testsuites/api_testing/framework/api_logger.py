"""
================================================================================
API Request/Response Logger
================================================================================

Emits the three event kinds of the request helper:
    - request: method, final URL, headers, body
    - response: status, status text, parsed body
    - error: exception type and message

Each event goes to loguru and is attached to the Allure report. Sensitive
headers and body fields are masked before they leave the process.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import json
from typing import Any, Dict, Mapping, Optional

import allure
from loguru import logger

from autotest_tools.common import safe_json_serialize
from autotest_tools.report_tools.allure_utils import (
    MASK,
    SENSITIVE_HEADERS,
    attach_curl_command,
    attach_json,
    attach_text,
)


# Maximum body length to include in log lines and Allure reports
MAX_BODY_LENGTH = 3000

SENSITIVE_BODY_KEYS = (
    "password", "secret", "token", "api_key", "authorization", "session",
)

# Marker for response bodies that could not be parsed for logging
UNPARSED = object()


def redact_headers(headers: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
    """Mask sensitive header values before logging."""
    masked = {}
    for key, value in (headers or {}).items():
        if key.lower() in SENSITIVE_HEADERS:
            masked[key] = MASK
        else:
            masked[key] = value
    return masked


def redact_body(payload: Any) -> Any:
    """Recursively mask sensitive fields in request/response bodies."""
    if isinstance(payload, dict):
        redacted = {}
        for key, value in payload.items():
            if any(token in str(key).lower() for token in SENSITIVE_BODY_KEYS):
                redacted[key] = MASK
            else:
                redacted[key] = redact_body(value)
        return redacted
    if isinstance(payload, list):
        return [redact_body(item) for item in payload]
    return payload


def _dump(payload: Any) -> str:
    text = json.dumps(payload, indent=2, ensure_ascii=False, default=safe_json_serialize)
    if len(text) > MAX_BODY_LENGTH:
        text = (
            f"{text[:MAX_BODY_LENGTH]}\n"
            f"... [Truncated, full length: {len(text)} chars] ..."
        )
    return text


class ApiLogger:
    """
    Request/response/error event sink.

    Usage:
        >>> api_logger = ApiLogger()
        >>> api_logger.log_request("GET", "https://host/objects")
    """

    def log_request(
        self,
        method: str,
        url: str,
        data: Any = None,
        headers: Optional[Mapping[str, Any]] = None,
    ) -> None:
        safe_headers = redact_headers(headers)
        safe_body = redact_body(data)

        lines = ["=== Request ===", f"{method} {url}"]
        if safe_body is not None:
            lines.append(f"Request Body: {_dump(safe_body)}")
        message = "\n".join(lines)

        logger.info(f"➡️ {method} {url}")
        logger.debug(message)

        with allure.step(f"📤 {method} {url}"):
            attach_text(message, name="API Request")
            if safe_headers:
                attach_json(safe_headers, name="Request Headers")
            attach_curl_command(method, url, safe_headers, safe_body)

    def log_response(
        self,
        status: int,
        status_text: str,
        body: Any = UNPARSED,
    ) -> None:
        if body is UNPARSED:
            body_text = "<unparsed>"
        else:
            body_text = _dump(redact_body(body))

        message = "\n".join([
            "=== Response ===",
            f"Status: {status}",
            f"Status Text: {status_text}",
            f"Response Body: {body_text}",
        ])

        status_emoji = "✅" if 200 <= status < 400 else "❌"
        logger.info(f"⬅️ {status_emoji} {status} {status_text}")
        logger.debug(message)

        attach_text(message, name="API Response")
        if body is not UNPARSED:
            attach_json(redact_body(body), name="Response Body")

    def log_error(self, error: BaseException) -> None:
        message = "\n".join([
            "=== Error ===",
            f"Type: {type(error).__name__}",
            f"Message: {error}",
        ])

        logger.error(f"{type(error).__name__}: {error}")
        attach_text(message, name="API Error")


__all__ = [
    "ApiLogger",
    "UNPARSED",
    "redact_body",
    "redact_headers",
]
