"""
================================================================================
Configuration Loader
================================================================================

YAML-based configuration management with environment variable override support.

Features:
    - YAML configuration loading (testsuites/config/config.yaml)
    - Environment variable override (API_BASE_URL overrides api.base_url)
    - Dot notation path access
    - Typed ApiConfig snapshot consumed by the request helper

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from loguru import logger


DEFAULT_CONFIG_PATH = Path(__file__).parent.parent.parent / "config" / "config.yaml"

DEFAULT_TIMEOUT_MS = 30000
SUPPORTED_TRANSPORTS = ("httpx", "playwright")


class ConfigurationError(Exception):
    """Raised when configuration loading or access fails."""
    pass


class ConfigLoader:
    """
    Configuration loader with YAML and environment variable support.

    Configuration hierarchy (highest to lowest priority):
        1. Environment variables (API_BASE_URL)
        2. YAML configuration file
        3. Default values

    Usage:
        >>> config = ConfigLoader()
        >>> config.get("api.base_url", "https://api.restful-api.dev")
        'https://api.restful-api.dev'

    Environment Variable Mapping:
        - api.base_url -> API_BASE_URL
        - api.timeout -> API_TIMEOUT (milliseconds)
        - api.version -> API_VERSION
        - api.transport -> API_TRANSPORT
    """

    _instance: Optional["ConfigLoader"] = None
    _config: Dict[str, Any] = {}

    def __new__(cls, config_path: Optional[Path] = None) -> "ConfigLoader":
        """Singleton - configuration is loaded once per process."""
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._initialized = False
        return cls._instance

    def __init__(self, config_path: Optional[Path] = None) -> None:
        if getattr(self, "_initialized", False):
            return

        self._config_path = Path(config_path) if config_path else DEFAULT_CONFIG_PATH
        self._load_config()
        self._initialized = True

    def _load_config(self) -> None:
        """Load configuration from YAML file."""
        if not self._config_path.exists():
            logger.warning(
                f"Configuration file not found: {self._config_path}. "
                f"Using defaults and environment variables only."
            )
            self._config = {}
            return

        try:
            with open(self._config_path, "r", encoding="utf-8") as f:
                self._config = yaml.safe_load(f) or {}
            logger.debug(f"Loaded configuration from: {self._config_path}")
        except yaml.YAMLError as e:
            raise ConfigurationError(
                f"Invalid YAML in configuration file: {e}"
            ) from e

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get configuration value by dot-notation path.

        First checks environment variables, then YAML config, then default.

        Examples:
            >>> config.get("api.timeout", 30000)
            30000
        """
        env_key = key.upper().replace(".", "_")
        env_value = os.environ.get(env_key)
        if env_value is not None:
            return self._convert_type(env_value, default)

        value = self._config
        for part in key.split("."):
            if isinstance(value, dict):
                value = value.get(part)
            else:
                value = None

            if value is None:
                return default

        return value

    def get_section(self, section: str) -> Dict[str, Any]:
        """Get entire configuration section, or an empty dict."""
        return self._config.get(section, {})

    def reload(self) -> None:
        """Reload configuration from file."""
        self._load_config()
        logger.info(f"Configuration reloaded from: {self._config_path}")

    def _convert_type(self, value: str, reference: Any) -> Any:
        """
        Convert string value to match reference type.

        Used for environment variables which are always strings.
        """
        if reference is None:
            return value

        if isinstance(reference, bool):
            return value.lower() in ("true", "1", "yes", "on")
        if isinstance(reference, int):
            try:
                return int(value)
            except ValueError:
                return value
        if isinstance(reference, float):
            try:
                return float(value)
            except ValueError:
                return value

        return value

    @classmethod
    def reset(cls) -> None:
        """Reset singleton instance (for testing)."""
        cls._instance = None
        cls._config = {}


@dataclass(frozen=True)
class ApiConfig:
    """
    Immutable snapshot of the API settings used by one test session.

    Attributes:
        base_url: Base URL every endpoint is resolved against
        timeout_ms: Transport timeout in milliseconds
        version: API version label (informational)
        transport: "httpx" or "playwright"
    """
    base_url: str
    timeout_ms: int = DEFAULT_TIMEOUT_MS
    version: str = ""
    transport: str = "httpx"

    @property
    def timeout_seconds(self) -> float:
        return self.timeout_ms / 1000

    @classmethod
    def from_loader(cls, loader: Optional[ConfigLoader] = None) -> "ApiConfig":
        """
        Build ApiConfig from a ConfigLoader.

        Raises:
            ConfigurationError: When base URL is missing or transport unknown
        """
        loader = loader or ConfigLoader()

        base_url = loader.get("api.base_url")
        if not base_url:
            raise ConfigurationError(
                "api.base_url is not configured (set API_BASE_URL)"
            )

        timeout = loader.get("api.timeout", DEFAULT_TIMEOUT_MS)
        try:
            timeout_ms = int(timeout)
        except (TypeError, ValueError) as e:
            raise ConfigurationError(f"Invalid api.timeout: {timeout!r}") from e

        transport = str(loader.get("api.transport", "httpx")).lower()
        if transport not in SUPPORTED_TRANSPORTS:
            raise ConfigurationError(
                f"Unknown api.transport '{transport}'. "
                f"Expected one of: {', '.join(SUPPORTED_TRANSPORTS)}"
            )

        return cls(
            base_url=str(base_url),
            timeout_ms=timeout_ms,
            version=str(loader.get("api.version", "") or ""),
            transport=transport,
        )


__all__ = [
    "ApiConfig",
    "ConfigLoader",
    "ConfigurationError",
]
