"""
================================================================================
Authentication Token Manager
================================================================================

Bookkeeping for bearer tokens issued to the test session:
    - Explicit token state machine (UNSET -> VALID -> EXPIRING_SOON -> EXPIRED)
    - Authorization header construction
    - Refresh-token exchange through the injected transport
    - Optional cross-process token cache guarded by filelock

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import json
import time
from enum import Enum
from pathlib import Path
from typing import Any, Callable, Dict, Optional
from urllib.parse import urljoin

from filelock import FileLock
from loguru import logger

from .config_loader import ConfigLoader


DEFAULT_TOKEN_TYPE = "Bearer"

DEFAULT_CACHE_FILE = ".token_cache/auth_tokens.json"

# Token counts as expired when less than this many seconds remain
TOKEN_EXPIRY_BUFFER = 60


class TokenError(Exception):
    """Raised when token operations fail."""
    pass


class TokenState(str, Enum):
    UNSET = "unset"
    VALID = "valid"
    EXPIRING_SOON = "expiring_soon"
    EXPIRED = "expired"


class AuthManager:
    """
    Token bookkeeping for one test session.

    State transitions:
        set_tokens()          -> VALID (or EXPIRING_SOON/EXPIRED for short TTLs)
        time elapses          -> EXPIRING_SOON within TOKEN_EXPIRY_BUFFER, then EXPIRED
        clear_tokens()        -> UNSET
        refresh_auth_token()  -> VALID

    Usage:
        >>> auth = AuthManager()
        >>> auth.set_tokens({"access_token": "abc", "expires_in": 3600})
        >>> auth.get_auth_header()
        {'Authorization': 'Bearer abc'}
    """

    def __init__(
        self,
        cache_file: Optional[Path] = None,
        clock: Callable[[], float] = time.time,
        refresh_endpoint: Optional[str] = None,
    ) -> None:
        """
        Args:
            cache_file: Optional JSON file shared between worker processes
            clock: Time source in epoch seconds
            refresh_endpoint: Default URL for refresh_auth_token
        """
        self._clock = clock
        self._cache_file = Path(cache_file) if cache_file else None
        self.refresh_endpoint = refresh_endpoint

        self.auth_token: Optional[str] = None
        self.refresh_token: Optional[str] = None
        self.token_type: str = DEFAULT_TOKEN_TYPE
        self.expires_in: Optional[int] = None
        self.expiry_time: Optional[float] = None

    @classmethod
    def from_config(cls, loader: ConfigLoader) -> "AuthManager":
        """
        Build from the `auth` config section.

        The refresh endpoint is resolved against api.base_url. With
        cache_enabled, tokens cached by another worker are adopted.
        """
        section = loader.get_section("auth") or {}

        refresh_endpoint = section.get("refresh_endpoint")
        if refresh_endpoint:
            refresh_endpoint = urljoin(str(loader.get("api.base_url", "")), refresh_endpoint)

        cache_file = None
        if section.get("cache_enabled"):
            cache_file = Path(section.get("cache_file") or DEFAULT_CACHE_FILE)

        manager = cls(cache_file=cache_file, refresh_endpoint=refresh_endpoint)
        if cache_file and manager.load_from_cache():
            logger.debug(f"Adopted cached token from {cache_file}")
        return manager

    @property
    def state(self) -> TokenState:
        if not self.auth_token:
            return TokenState.UNSET
        if self.expiry_time is None:
            return TokenState.VALID

        now = self._clock()
        if now >= self.expiry_time:
            return TokenState.EXPIRED
        if now >= self.expiry_time - TOKEN_EXPIRY_BUFFER:
            return TokenState.EXPIRING_SOON
        return TokenState.VALID

    def set_tokens(self, token_data: Dict[str, Any]) -> None:
        """
        Store tokens from an authentication response.

        Args:
            token_data: Dict with access_token, refresh_token, token_type, expires_in
        """
        self.auth_token = token_data.get("access_token")
        self.refresh_token = token_data.get("refresh_token")
        self.token_type = token_data.get("token_type") or DEFAULT_TOKEN_TYPE
        self.expires_in = token_data.get("expires_in")

        if self.expires_in:
            self.expiry_time = self._clock() + float(self.expires_in)
        else:
            self.expiry_time = None

        logger.debug(f"Tokens set, state={self.state.value}")

        if self._cache_file:
            self._save_to_cache()

    def get_auth_header(self) -> Dict[str, str]:
        """
        Raises:
            TokenError: When no token has been set
        """
        if not self.auth_token:
            raise TokenError("No authentication token available")
        return {"Authorization": f"{self.token_type} {self.auth_token}"}

    def is_token_expired(self) -> bool:
        """True when the token is expired or inside the expiry buffer."""
        return self.state in (TokenState.EXPIRING_SOON, TokenState.EXPIRED)

    def refresh_auth_token(self, client: Any, refresh_endpoint: Optional[str] = None) -> str:
        """
        Exchange the refresh token for a new access token.

        Args:
            client: Transport with a `post(url, headers=..., data=...)` callable
            refresh_endpoint: URL of the refresh endpoint. Defaults to the
                configured one.

        Returns:
            The new access token

        Raises:
            TokenError: When no refresh token is held or the exchange fails
        """
        if not self.refresh_token:
            raise TokenError("No refresh token available")

        refresh_endpoint = refresh_endpoint or self.refresh_endpoint
        if not refresh_endpoint:
            raise TokenError("No refresh endpoint configured")

        try:
            response = client.post(
                refresh_endpoint,
                data={"refresh_token": self.refresh_token},
            )
            token_data = response.json()
        except Exception as e:
            raise TokenError(f"Failed to refresh token: {e}") from e

        if not isinstance(token_data, dict) or not token_data.get("access_token"):
            raise TokenError(
                f"Failed to refresh token: unexpected response (status {response.status})"
            )

        self.set_tokens(token_data)
        logger.info("Token refreshed")
        return self.auth_token

    def clear_tokens(self) -> None:
        self.auth_token = None
        self.refresh_token = None
        self.expires_in = None
        self.expiry_time = None

        if self._cache_file and self._cache_file.exists():
            with FileLock(self._lock_file):
                self._cache_file.unlink(missing_ok=True)

    def get_token_status(self) -> Dict[str, Any]:
        if self.expiry_time is not None:
            expires_in = max(0, int(self.expiry_time - self._clock()))
        else:
            expires_in = None

        return {
            "has_token": bool(self.auth_token),
            "is_expired": self.is_token_expired(),
            "expires_in": expires_in,
            "state": self.state.value,
        }

    # Cross-process cache

    @property
    def _lock_file(self) -> Path:
        return self._cache_file.with_suffix(".lock")

    def _save_to_cache(self) -> None:
        cache_data = {
            "access_token": self.auth_token,
            "refresh_token": self.refresh_token,
            "token_type": self.token_type,
            "expiry_time": self.expiry_time,
        }

        self._cache_file.parent.mkdir(parents=True, exist_ok=True)
        try:
            with FileLock(self._lock_file):
                with open(self._cache_file, "w", encoding="utf-8") as f:
                    json.dump(cache_data, f)
        except OSError as e:
            logger.warning(f"Failed to cache token: {e}")

    def load_from_cache(self) -> bool:
        """
        Adopt tokens another worker cached.

        Returns:
            True if a non-expired token was loaded
        """
        if not self._cache_file or not self._cache_file.exists():
            return False

        try:
            with FileLock(self._lock_file):
                with open(self._cache_file, "r", encoding="utf-8") as f:
                    cached = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"Failed to read token cache: {e}")
            return False

        expiry_time = cached.get("expiry_time")
        if expiry_time is not None and self._clock() >= expiry_time - TOKEN_EXPIRY_BUFFER:
            return False

        self.auth_token = cached.get("access_token")
        self.refresh_token = cached.get("refresh_token")
        self.token_type = cached.get("token_type") or DEFAULT_TOKEN_TYPE
        self.expiry_time = expiry_time
        return bool(self.auth_token)


__all__ = [
    "AuthManager",
    "TokenError",
    "TokenState",
]
