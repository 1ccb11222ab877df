"""
================================================================================
API Testing Pytest Configuration
================================================================================

Shared fixtures for the live objects API tests.

Fixtures:
    - config / api_config: Configuration loader and typed API settings
    - transport: Open httpx or Playwright transport
    - retry_policy: Backoff settings from config
    - auth_manager: Token bookkeeping from config
    - api_utils: Request helper bound to the transport
    - objects_service: Service facade over /objects
    - device_factory: Random device payloads with cleanup tracking
    - created_object: An object created for the test and deleted afterwards

Live tests are marked `requires_external` and skipped unless
RUN_EXTERNAL_TESTS is truthy.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import os
from typing import Any, Dict, Generator

import allure
import pytest
from loguru import logger

from autotest_tools.common import init_logger
from ..framework import (
    ApiConfig,
    ApiUtils,
    AuthManager,
    ConfigLoader,
    DeviceDataFactory,
    RetryPolicy,
    open_transport,
)
from ..services import RestfulApiService


# =============================================================================
# Pytest Hooks
# =============================================================================

def pytest_collection_modifyitems(config, items):
    """Skip live tests unless explicitly enabled."""
    if os.environ.get("RUN_EXTERNAL_TESTS", "").lower() in ("1", "true", "yes", "on"):
        return

    skip_external = pytest.mark.skip(
        reason="Live API test; set RUN_EXTERNAL_TESTS=1 to run"
    )
    for item in items:
        if "requires_external" in item.keywords:
            item.add_marker(skip_external)


def pytest_exception_interact(node, call, report):
    """Attach additional info on test failure."""
    if report.failed:
        allure.attach(
            str(call.excinfo.value),
            name="Error Details",
            attachment_type=allure.attachment_type.TEXT
        )


# =============================================================================
# Session-Scoped Fixtures
# =============================================================================

@pytest.fixture(scope="session")
def config() -> ConfigLoader:
    """Configuration loader, loaded once per session."""
    loader = ConfigLoader()
    init_logger(level=loader.get("logging.level"))
    return loader


@pytest.fixture(scope="session")
def api_config(config: ConfigLoader) -> ApiConfig:
    return ApiConfig.from_loader(config)


@pytest.fixture(scope="session")
def retry_policy(config: ConfigLoader) -> RetryPolicy:
    """Backoff settings from the `retry` config section."""
    return RetryPolicy.from_config(config)


# =============================================================================
# Function-Scoped Fixtures
# =============================================================================

@pytest.fixture
def transport(api_config: ApiConfig) -> Generator[Any, None, None]:
    """
    Open the configured transport (httpx by default, or Playwright via
    API_TRANSPORT=playwright) for one test.
    """
    with open_transport(api_config) as client:
        yield client


@pytest.fixture
def auth_manager(config: ConfigLoader) -> AuthManager:
    """Token bookkeeping from the `auth` config section."""
    return AuthManager.from_config(config)


@pytest.fixture
def api_utils(transport: Any, api_config: ApiConfig, auth_manager: AuthManager) -> ApiUtils:
    return ApiUtils(transport, api_config, auth_manager=auth_manager)


@pytest.fixture
def objects_service(api_utils: ApiUtils) -> RestfulApiService:
    return RestfulApiService(api_utils)


@pytest.fixture
def device_factory() -> Generator[DeviceDataFactory, None, None]:
    """Device payload factory; tracked objects are deleted after the test."""
    factory = DeviceDataFactory()
    yield factory
    factory.cleanup_all()


@pytest.fixture
def created_object(
    objects_service: RestfulApiService,
    device_factory: DeviceDataFactory,
) -> Dict[str, Any]:
    """
    Create an object for the test and delete it afterwards.

    Returns:
        {"payload": <posted data>, "object": <created object>}
    """
    payload = device_factory.generate_device_data()
    created = objects_service.create_object(payload)
    logger.debug(f"Created object {created['id']}")

    device_factory.track(
        created,
        "object",
        cleanup_handler=lambda obj: objects_service.delete_object(obj["id"]),
    )
    return {"payload": payload, "object": created}
