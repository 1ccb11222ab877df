"""
================================================================================
Test Data Factory
================================================================================

Factories for the device payloads posted to the `objects` resource.

Features:
- Random data generation with reproducible seeds
- Override-aware payload construction
- Update payloads derived from an existing object
- Cleanup tracking for automatic teardown

================================================================================
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Type
from uuid import uuid4
import random

from loguru import logger

from .enums import (
    CpuBrand,
    CpuGeneration,
    DeviceBrand,
    DeviceSeries,
    DeviceSize,
    StorageSize,
    get_enum_values,
)


# ================================================================================
# Data Models
# ================================================================================

@dataclass
class GeneratedData:
    """Container for generated test data with metadata."""
    data: Dict[str, Any]
    data_type: str
    created_at: datetime = field(default_factory=datetime.now)
    cleanup_handler: Optional[Callable[[Dict[str, Any]], Any]] = None
    tracking_id: str = field(default_factory=lambda: uuid4().hex[:8])


# ================================================================================
# Factory Base
# ================================================================================

class DataFactoryBase:
    """
    Base class for test data factories.

    Owns a private random generator so seeding one factory never affects
    another, and tracks generated items for cleanup.
    """

    def __init__(self, seed: Optional[int] = None):
        """
        Args:
            seed: Random seed for reproducible data generation
        """
        self._random = random.Random(seed)
        self._generated_items: List[GeneratedData] = []

    def random_int(self, min_value: int, max_value: int) -> int:
        """Random integer in [min_value, max_value]."""
        return self._random.randint(min_value, max_value)

    def random_price(self, min_value: float = 1000, max_value: float = 3000) -> float:
        """Random price in [min_value, max_value), rounded to cents."""
        return round(self._random.uniform(min_value, max_value), 2)

    def random_from_enum(self, enum_cls: Type[Enum]) -> Any:
        """Random raw value of an enum."""
        return self._random.choice(get_enum_values(enum_cls))

    def track(
        self,
        data: Dict[str, Any],
        data_type: str,
        cleanup_handler: Optional[Callable[[Dict[str, Any]], Any]] = None
    ) -> GeneratedData:
        """
        Track generated (or created) data for later cleanup.

        Args:
            data: The data dictionary, e.g. the created object
            data_type: Type of data (e.g., "object")
            cleanup_handler: Called with `data` during cleanup_all
        """
        generated = GeneratedData(
            data=data,
            data_type=data_type,
            cleanup_handler=cleanup_handler
        )
        self._generated_items.append(generated)
        return generated

    def cleanup_all(self) -> None:
        """Clean up all tracked data in reverse order."""
        for item in reversed(self._generated_items):
            if item.cleanup_handler:
                try:
                    item.cleanup_handler(item.data)
                except Exception as e:
                    logger.warning(f"Cleanup failed for {item.data_type} {item.tracking_id}: {e}")

        self._generated_items.clear()

    @property
    def generated_count(self) -> int:
        return len(self._generated_items)


# ================================================================================
# Device Factory
# ================================================================================

class DeviceDataFactory(DataFactoryBase):
    """
    Factory for device payloads:

        {
            "name": "Dell XPS 15",
            "data": {
                "year": 2024,
                "price": 1849.99,
                "CPU model": "13th Gen Intel Core i7",
                "Hard disk size": "1 TB"
            }
        }
    """

    def random_cpu_model(self) -> str:
        generation = self.random_from_enum(CpuGeneration)
        brand = self.random_from_enum(CpuBrand)
        return f"{generation} {brand}"

    def random_storage(self) -> str:
        return self.random_from_enum(StorageSize)

    def random_device_name(self) -> str:
        brand = self.random_from_enum(DeviceBrand)
        series = self.random_from_enum(DeviceSeries)
        size = self.random_from_enum(DeviceSize)
        return f"{brand} {series} {size}"

    def generate_device_data(self, overrides: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """
        Generate a random device payload.

        Args:
            overrides: Optional `name` replaces the random name; `data` keys
                are merged over the random data fields.
        """
        overrides = overrides or {}
        current_year = datetime.now().year

        data = {
            "year": self.random_int(current_year - 3, current_year),
            "price": self.random_price(),
            "CPU model": self.random_cpu_model(),
            "Hard disk size": self.random_storage(),
        }
        data.update(overrides.get("data") or {})

        return {
            "name": overrides.get("name") or self.random_device_name(),
            "data": data,
        }

    def generate_multiple_devices(self, count: int = 1) -> List[Dict[str, Any]]:
        return [self.generate_device_data() for _ in range(count)]

    def generate_updated_data(self, original: Dict[str, Any]) -> Dict[str, Any]:
        """Derive an update payload: renamed, new price and storage."""
        return {
            "name": f"{original['name']} (Updated)",
            "data": {
                **original.get("data", {}),
                "price": self.random_price(),
                "Hard disk size": self.random_storage(),
            },
        }

    def base_device_data(self) -> Dict[str, Any]:
        """A MacBook Pro 16 with random year, price, CPU generation and storage."""
        return {
            "name": f"{DeviceBrand.APPLE.value} {DeviceSeries.MACBOOK.value} {DeviceSize.S16.value}",
            "data": {
                "year": self.random_int(2019, datetime.now().year),
                "price": self.random_price(1500, 3000),
                "CPU model": f"{self.random_from_enum(CpuGeneration)} {CpuBrand.INTEL_I9.value}",
                "Hard disk size": self.random_storage(),
            },
        }

    def generate_custom_test_data(self, custom: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """Base MacBook payload with `custom` applied on top."""
        base = self.base_device_data()
        custom = custom or {}
        return self.generate_device_data({
            "name": custom.get("name") or base["name"],
            "data": {**base["data"], **(custom.get("data") or {})},
        })


# Canned query parameter sets for the objects collection
QUERY_PARAM_PRESETS: Dict[str, Dict[str, str]] = {
    "single_param": {
        "id": "123",
    },
    "multiple_params": {
        "id": "123",
        "bodyshop": "123",
        "type": "laptop",
    },
    "filter_params": {
        "brand": DeviceBrand.APPLE.value,
        "year": "2023",
        "price": "1000",
    },
}


__all__ = [
    "DataFactoryBase",
    "DeviceDataFactory",
    "GeneratedData",
    "QUERY_PARAM_PRESETS",
]
