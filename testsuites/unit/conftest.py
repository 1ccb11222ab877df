import pytest
from loguru import logger

from testsuites.api_testing.framework.api_utils import ApiUtils
from testsuites.api_testing.framework.config_loader import ApiConfig
from testsuites.unit.fakes import FakeClient


BASE_URL = "https://api.example.com"


@pytest.fixture
def api_config() -> ApiConfig:
    return ApiConfig(base_url=BASE_URL, timeout_ms=5000, version="v1")


@pytest.fixture
def fake_client() -> FakeClient:
    return FakeClient()


@pytest.fixture
def api_utils(fake_client: FakeClient, api_config: ApiConfig) -> ApiUtils:
    return ApiUtils(fake_client, api_config)


@pytest.fixture
def log_messages():
    """Capture loguru messages emitted during the test."""
    messages = []
    handler_id = logger.add(lambda message: messages.append(message.record["message"]), level="DEBUG")
    yield messages
    logger.remove(handler_id)


@pytest.fixture
def sleeps(monkeypatch):
    """Record backoff sleeps instead of sleeping."""
    recorded = []
    monkeypatch.setattr(
        "testsuites.api_testing.framework.api_utils.time.sleep",
        recorded.append,
    )
    return recorded
