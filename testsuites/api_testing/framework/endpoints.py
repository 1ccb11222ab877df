"""
================================================================================
API Endpoint Catalog
================================================================================

Relative path templates for the resources under test. Paths are resolved
against the configured base URL by ApiUtils.build_url.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from typing import Any, Mapping
from urllib.parse import quote, urlencode


class _ObjectsEndpoints:
    """Endpoints of the `objects` collection."""

    BASE = "/objects"
    BATCH = "/objects/batch"

    @staticmethod
    def BY_ID(object_id: Any) -> str:
        return f"/objects/{quote(str(object_id), safe='')}"

    @staticmethod
    def BY_SINGLE_PARAM(param: Any) -> str:
        return f"/objects?{urlencode({'id': param})}"

    @staticmethod
    def FILTER(params: Mapping[str, Any]) -> str:
        return f"/objects?{urlencode(params, doseq=True)}"


class APIEndpoints:
    """
    Endpoint catalog.

    Usage:
        >>> APIEndpoints.OBJECTS.BY_ID("ff808181")
        '/objects/ff808181'
    """

    OBJECTS = _ObjectsEndpoints
    HEALTH = "/health"


__all__ = ["APIEndpoints"]
