# ================================================================================
# Object Assertions
# ================================================================================
#
# Assertion helpers for `objects` payloads returned by the API. Failures raise
# AssertionError with a readable message so pytest reports them as test
# failures, and each helper is recorded as an Allure step.
#
# ================================================================================

from typing import Any, Dict

import allure


class ObjectAssertions:
    """Assertions shared by the objects test cases."""

    @staticmethod
    @allure.step("Validate object properties")
    def validate_object_properties(obj: Dict[str, Any], expected: Dict[str, Any]) -> None:
        """Object exists, has an id, and name/data equal the expected payload."""
        assert obj is not None, "Object is missing"
        assert obj.get("id") is not None, f"Object has no id: {obj}"
        assert obj.get("name") == expected["name"], (
            f"Expected name '{expected['name']}', got '{obj.get('name')}'"
        )
        assert obj.get("data") == expected["data"], (
            f"Expected data {expected['data']}, got {obj.get('data')}"
        )

    @staticmethod
    @allure.step("Validate device data structure")
    def validate_device_data_structure(device_data: Dict[str, Any]) -> None:
        """Device data carries year/price numbers and CPU/storage strings."""
        assert device_data is not None, "Device data is missing"

        for prop in ("year", "price", "CPU model", "Hard disk size"):
            assert prop in device_data, f"Missing device property: {prop}"

        # bool is an int subclass and never a valid number here
        for prop in ("year", "price"):
            value = device_data[prop]
            assert isinstance(value, (int, float)) and not isinstance(value, bool), (
                f"Expected '{prop}' to be a number, got {type(value).__name__}"
            )

        for prop in ("CPU model", "Hard disk size"):
            assert isinstance(device_data[prop], str), (
                f"Expected '{prop}' to be a string, got {type(device_data[prop]).__name__}"
            )

    @staticmethod
    @allure.step("Validate updated object {object_id}")
    def validate_updated_object(
        updated_object: Dict[str, Any],
        expected: Dict[str, Any],
        object_id: str
    ) -> None:
        assert updated_object.get("id") == object_id, (
            f"Expected id '{object_id}', got '{updated_object.get('id')}'"
        )
        assert updated_object.get("name") == expected["name"], (
            f"Expected name '{expected['name']}', got '{updated_object.get('name')}'"
        )
        assert updated_object.get("data") == expected["data"], (
            f"Expected data {expected['data']}, got {updated_object.get('data')}"
        )
