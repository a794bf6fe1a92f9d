"""Error kinds raised by the DevSLY SDK."""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, Optional


class ErrorKind(str, Enum):
    CONFIGURATION = "configuration"
    NETWORK = "network"
    API = "api"
    AUTHENTICATION = "authentication"
    RATE_LIMIT = "rate_limit"
    VALIDATION = "validation"

    @property
    def is_http(self) -> bool:
        """True for kinds produced by classifying an HTTP response."""
        return self in (
            ErrorKind.API,
            ErrorKind.AUTHENTICATION,
            ErrorKind.RATE_LIMIT,
            ErrorKind.VALIDATION,
        )


class DevSlyError(Exception):
    """Base class for every SDK error.

    ``kind`` identifies the failure category so callers can branch on a value
    instead of a class. ``code`` is the HTTP status for API errors and ``0``
    otherwise.
    """

    kind: ErrorKind = ErrorKind.API

    def __init__(self, message: str = "", code: int = 0, *, cause: Optional[BaseException] = None) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.cause = cause

    def __repr__(self) -> str:
        return f"{type(self).__name__}(message={self.message!r}, code={self.code})"


class ConfigurationError(DevSlyError):
    """Invalid or missing client configuration."""

    kind = ErrorKind.CONFIGURATION


class NetworkError(DevSlyError):
    """Transport-level failure: DNS, connect, TLS, timeout or an unreadable response.

    ``retryable`` is False for client-side failures that would repeat on every
    attempt, such as an unsupported URL scheme.
    """

    kind = ErrorKind.NETWORK

    def __init__(self, message: str = "", code: int = 0, *, retryable: bool = True, cause: Optional[BaseException] = None) -> None:
        super().__init__(message, code, cause=cause)
        self.retryable = retryable


class ApiError(DevSlyError):
    """The API answered with an error status or a malformed body."""

    kind = ErrorKind.API

    def __init__(
        self,
        message: str = "",
        code: int = 0,
        *,
        error_code: Optional[str] = None,
        response_body: Optional[Dict[str, Any]] = None,
        cause: Optional[BaseException] = None,
    ) -> None:
        super().__init__(message, code, cause=cause)
        self.error_code = error_code
        self.response_body = response_body if response_body is not None else {}

    @property
    def status_code(self) -> int:
        return self.code


class AuthenticationError(ApiError):
    kind = ErrorKind.AUTHENTICATION


class RateLimitError(ApiError):
    kind = ErrorKind.RATE_LIMIT

    def __init__(self, message: str = "", code: int = 0, *, retry_after: Optional[float] = None, **kwargs: Any) -> None:
        super().__init__(message, code, **kwargs)
        self.retry_after = retry_after


class ValidationError(ApiError):
    kind = ErrorKind.VALIDATION


__all__ = [
    "ErrorKind",
    "DevSlyError",
    "ConfigurationError",
    "NetworkError",
    "ApiError",
    "AuthenticationError",
    "RateLimitError",
    "ValidationError",
]
