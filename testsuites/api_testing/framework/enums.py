# ================================================================================
# Enums
# ================================================================================
#
# Value catalogs shared by the data factory, the service facade and the tests.
#
# ================================================================================

from enum import Enum, IntEnum
from typing import Any, List, Type


class CpuBrand(str, Enum):
    INTEL_I5 = "Intel Core i5"
    INTEL_I7 = "Intel Core i7"
    INTEL_I9 = "Intel Core i9"
    AMD_R5 = "AMD Ryzen 5"
    AMD_R7 = "AMD Ryzen 7"
    AMD_R9 = "AMD Ryzen 9"


class CpuGeneration(str, Enum):
    GEN_11 = "11th Gen"
    GEN_12 = "12th Gen"
    GEN_13 = "13th Gen"


class StorageSize(str, Enum):
    SIZE_256 = "256 GB"
    SIZE_512 = "512 GB"
    SIZE_1TB = "1 TB"
    SIZE_2TB = "2 TB"
    SIZE_4TB = "4 TB"


class DeviceBrand(str, Enum):
    APPLE = "Apple"
    DELL = "Dell"
    HP = "HP"
    LENOVO = "Lenovo"
    ASUS = "ASUS"


class DeviceSeries(str, Enum):
    MACBOOK = "MacBook Pro"
    XPS = "XPS"
    SPECTRE = "Spectre"
    THINKPAD = "ThinkPad"
    ZENBOOK = "ZenBook"


class DeviceSize(str, Enum):
    S13 = "13"
    S14 = "14"
    S15 = "15"
    S16 = "16"
    S17 = "17"


class HttpStatusCode(IntEnum):
    """HTTP status codes asserted by the suite."""
    OK = 200
    BAD_REQUEST = 400
    UNAUTHORIZED = 401
    FORBIDDEN = 403
    NOT_FOUND = 404
    INTERNAL_SERVER_ERROR = 500


def get_enum_values(enum_cls: Type[Enum]) -> List[Any]:
    """Return the raw values of an enum, in definition order."""
    return [member.value for member in enum_cls]


__all__ = [
    "CpuBrand",
    "CpuGeneration",
    "StorageSize",
    "DeviceBrand",
    "DeviceSeries",
    "DeviceSize",
    "HttpStatusCode",
    "get_enum_values",
]
