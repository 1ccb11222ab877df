"""
Repository-level pytest configuration (showcase-safe).

Why this exists:
  - Provide safe defaults for demo environments (no secrets embedded)
  - Keep local runs pointed at the public objects API unless CI says otherwise

Important:
  Values below are public placeholders. Real projects should load secrets
  from a secure secret manager in CI/CD.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Generator

import pytest


@pytest.fixture(scope="session")
def project_root() -> Path:
    """Return repo root path."""
    return Path(__file__).parent


@pytest.fixture(scope="session", autouse=True)
def _demo_safe_env_defaults() -> Generator[None, None, None]:
    """
    Set demo-safe environment defaults if not already provided by the user/CI.
    """
    defaults = {
        "API_BASE_URL": "https://api.restful-api.dev",
        "API_TIMEOUT": "30000",
        "API_VERSION": "v1",
    }

    for k, v in defaults.items():
        os.environ.setdefault(k, v)

    yield
