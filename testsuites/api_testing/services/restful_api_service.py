"""
================================================================================
Objects Service
================================================================================

Service facade over the `objects` REST resource. Each call dispatches through
ApiUtils and returns the validated body, so test cases read as plain CRUD
steps.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, List

import allure

from ..framework.api_utils import ApiUtils
from ..framework.endpoints import APIEndpoints
from ..framework.enums import HttpStatusCode


class RestfulApiService:
    """
    CRUD operations on /objects.

    Usage:
        >>> service = RestfulApiService(api_utils)
        >>> created = service.create_object({"name": "Dell XPS 15", "data": {...}})
        >>> service.delete_object(created["id"])
    """

    def __init__(self, api_utils: ApiUtils) -> None:
        self.api_utils = api_utils

    @allure.step("Get all objects")
    def get_all_objects(self) -> List[Dict[str, Any]]:
        response = self.api_utils.get(APIEndpoints.OBJECTS.BASE)
        return self.api_utils.validate_response(response, HttpStatusCode.OK)

    @allure.step("Get objects by ids {ids}")
    def get_objects_by_ids(self, ids: Iterable[Any]) -> List[Dict[str, Any]]:
        """GET /objects?id=1&id=2..."""
        response = self.api_utils.get(
            APIEndpoints.OBJECTS.BASE,
            query_params=[("id", object_id) for object_id in ids],
        )
        return self.api_utils.validate_response(response, HttpStatusCode.OK)

    @allure.step("Create object")
    def create_object(self, data: Dict[str, Any]) -> Dict[str, Any]:
        response = self.api_utils.post(APIEndpoints.OBJECTS.BASE, data)
        return self.api_utils.validate_response(response, HttpStatusCode.OK)

    @allure.step("Get object {object_id}")
    def get_object_by_id(self, object_id: str) -> Dict[str, Any]:
        response = self.api_utils.get(APIEndpoints.OBJECTS.BY_ID(object_id))
        return self.api_utils.validate_response(response, HttpStatusCode.OK)

    @allure.step("Update object {object_id}")
    def update_object(self, object_id: str, update_data: Dict[str, Any]) -> Dict[str, Any]:
        response = self.api_utils.put(APIEndpoints.OBJECTS.BY_ID(object_id), update_data)
        return self.api_utils.validate_response(response, HttpStatusCode.OK)

    @allure.step("Partially update object {object_id}")
    def partial_update_object(self, object_id: str, patch_data: Dict[str, Any]) -> Dict[str, Any]:
        response = self.api_utils.patch(APIEndpoints.OBJECTS.BY_ID(object_id), patch_data)
        return self.api_utils.validate_response(response, HttpStatusCode.OK)

    @allure.step("Delete object {object_id}")
    def delete_object(self, object_id: str) -> Dict[str, Any]:
        response = self.api_utils.delete(APIEndpoints.OBJECTS.BY_ID(object_id))
        return self.api_utils.validate_response(response, HttpStatusCode.OK)

    @allure.step("Verify object {object_id} is deleted")
    def verify_object_deleted(self, object_id: str) -> int:
        """Return the GET status for a (presumably) deleted object, unvalidated."""
        response = self.api_utils.get(APIEndpoints.OBJECTS.BY_ID(object_id))
        return response.status


__all__ = ["RestfulApiService"]
