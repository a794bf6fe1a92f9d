"""Configuration objects for the DevSLY Python SDK."""

from __future__ import annotations

import os
import platform
from typing import Any, Dict, Optional

import httpx
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic import ValidationError as PydanticValidationError

from .errors import ConfigurationError

SDK_VERSION = "1.0.0"

API_KEY_ENV = "DEVSLY_API_KEY"
DEFAULT_BASE_URL = "https://devsly.io"
DEFAULT_TIMEOUT = 30
DEFAULT_CONNECT_TIMEOUT = 10
DEFAULT_RETRY_ATTEMPTS = 3


def default_user_agent() -> str:
    return f"DevSLY-Python-SDK/{SDK_VERSION} (Python {platform.python_version()})"


def _describe(exc: PydanticValidationError) -> str:
    error = exc.errors()[0]
    original = (error.get("ctx") or {}).get("error")
    if isinstance(original, Exception):
        return str(original)
    field = ".".join(str(part) for part in error.get("loc", ())) or "config"
    return f"Invalid {field}: {error.get('msg', 'invalid value')}"


class ClientConfig(BaseModel):
    """Validated, immutable settings shared by the engine and every service.

    Construction fails fast with :class:`ConfigurationError`; nothing is
    re-checked at request time.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    api_key: str = Field(..., repr=False)
    base_url: str = DEFAULT_BASE_URL
    timeout: int = DEFAULT_TIMEOUT
    connect_timeout: int = DEFAULT_CONNECT_TIMEOUT
    retry_attempts: int = DEFAULT_RETRY_ATTEMPTS
    verify_ssl: bool = True
    user_agent: Optional[str] = None
    custom_headers: Dict[str, str] = Field(default_factory=dict)

    def __init__(self, **data: Any) -> None:
        try:
            super().__init__(**data)
        except PydanticValidationError as exc:
            raise ConfigurationError(_describe(exc), cause=exc) from exc

    @field_validator("api_key")
    @classmethod
    def _check_api_key(cls, value: str) -> str:
        if not value:
            raise ValueError("API key cannot be empty")
        return value

    @field_validator("base_url")
    @classmethod
    def _check_base_url(cls, value: str) -> str:
        try:
            url = httpx.URL(value)
        except httpx.InvalidURL as exc:
            raise ValueError("Invalid base URL provided") from exc
        if url.scheme not in ("http", "https") or not url.host:
            raise ValueError("Invalid base URL provided")
        return value.rstrip("/")

    @field_validator("timeout")
    @classmethod
    def _check_timeout(cls, value: int) -> int:
        if value < 1:
            raise ValueError("Timeout must be greater than 0")
        return value

    @field_validator("connect_timeout")
    @classmethod
    def _check_connect_timeout(cls, value: int) -> int:
        if value < 1:
            raise ValueError("Connect timeout must be greater than 0")
        return value

    @field_validator("retry_attempts")
    @classmethod
    def _check_retry_attempts(cls, value: int) -> int:
        if value < 0:
            raise ValueError("Retry attempts cannot be negative")
        return value

    @classmethod
    def from_env(cls, **options: Any) -> "ClientConfig":
        """Build a config using the API key from ``DEVSLY_API_KEY``."""
        api_key = os.environ.get(API_KEY_ENV)
        if not api_key:
            raise ConfigurationError(f"{API_KEY_ENV} environment variable is not set")
        return cls(api_key=api_key, **options)

    @property
    def max_attempts(self) -> int:
        return self.retry_attempts + 1

    @property
    def effective_user_agent(self) -> str:
        return self.user_agent or default_user_agent()

    def headers(self) -> Dict[str, str]:
        headers = {
            "X-API-Key": self.api_key,
            "Content-Type": "application/json",
            "Accept": "application/json",
            "User-Agent": self.effective_user_agent,
        }
        for name, value in self.custom_headers.items():
            # Header names are case-insensitive; drop the default before overriding it.
            for existing in [key for key in headers if key.lower() == name.lower()]:
                del headers[existing]
            headers[name] = value
        return headers

    def httpx_timeout(self) -> httpx.Timeout:
        return httpx.Timeout(float(self.timeout), connect=float(self.connect_timeout))


__all__ = ["ClientConfig", "API_KEY_ENV", "DEFAULT_BASE_URL", "SDK_VERSION", "default_user_agent"]
