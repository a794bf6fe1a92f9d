"""DevSLY Python SDK."""

from .client import AsyncDevSly, DevSly
from .config import SDK_VERSION, ClientConfig
from .errors import (
    ApiError,
    AuthenticationError,
    ConfigurationError,
    DevSlyError,
    ErrorKind,
    NetworkError,
    RateLimitError,
    ValidationError,
)
from .http import AsyncHttpClient, HttpClient

__version__ = SDK_VERSION

__all__ = [
    "DevSly",
    "AsyncDevSly",
    "ClientConfig",
    "HttpClient",
    "AsyncHttpClient",
    "ErrorKind",
    "DevSlyError",
    "ConfigurationError",
    "NetworkError",
    "ApiError",
    "AuthenticationError",
    "RateLimitError",
    "ValidationError",
]
