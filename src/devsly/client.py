"""Entry points for the DevSLY API."""

from __future__ import annotations

from functools import cached_property
from typing import Any, Optional

import httpx

from .config import ClientConfig
from .http import AsyncHttpClient, HttpClient
from .services import CodeAnalysis, DeveloperTools, LoadTesting, NetworkTools


class _ServiceAccessors:
    _http: Any

    @cached_property
    def network(self) -> NetworkTools:
        return NetworkTools(self._http)

    @cached_property
    def load_testing(self) -> LoadTesting:
        return LoadTesting(self._http)

    @cached_property
    def tools(self) -> DeveloperTools:
        return DeveloperTools(self._http)

    @cached_property
    def code_analysis(self) -> CodeAnalysis:
        return CodeAnalysis(self._http)


class DevSly(_ServiceAccessors):
    """Synchronous client.

    >>> with DevSly("your-api-key") as client:
    ...     client.network.whois("example.com")
    """

    def __init__(self, api_key: str, *, transport: Optional[httpx.BaseTransport] = None, **options: Any) -> None:
        self._config = ClientConfig(api_key=api_key, **options)
        self._http = HttpClient(self._config, transport=transport)

    @classmethod
    def from_environment(cls, *, transport: Optional[httpx.BaseTransport] = None, **options: Any) -> "DevSly":
        config = ClientConfig.from_env(**options)
        return cls(config.api_key, transport=transport, **options)

    def __enter__(self) -> "DevSly":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    @property
    def config(self) -> ClientConfig:
        return self._config

    @property
    def http(self) -> HttpClient:
        return self._http

    def close(self) -> None:
        self._http.close()


class AsyncDevSly(_ServiceAccessors):
    """Asyncio client; service methods return awaitables."""

    def __init__(
        self,
        api_key: str,
        *,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        **options: Any,
    ) -> None:
        self._config = ClientConfig(api_key=api_key, **options)
        self._http = AsyncHttpClient(self._config, transport=transport)

    @classmethod
    def from_environment(
        cls,
        *,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        **options: Any,
    ) -> "AsyncDevSly":
        config = ClientConfig.from_env(**options)
        return cls(config.api_key, transport=transport, **options)

    async def __aenter__(self) -> "AsyncDevSly":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    @property
    def config(self) -> ClientConfig:
        return self._config

    @property
    def http(self) -> AsyncHttpClient:
        return self._http

    async def aclose(self) -> None:
        await self._http.aclose()


__all__ = ["DevSly", "AsyncDevSly"]
