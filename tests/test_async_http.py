from __future__ import annotations

import asyncio
import hashlib
from typing import List

import httpx
import pytest

from devsly.client import AsyncDevSly
from devsly.config import ClientConfig
from devsly.errors import ApiError, AuthenticationError, NetworkError, RateLimitError, ValidationError
from devsly.http import AsyncHttpClient

from .fake_api import app as fake_app


def make_engine(handler, sleeps: List[float], **options) -> AsyncHttpClient:
    async def fake_sleep(seconds: float) -> None:
        sleeps.append(seconds)

    cfg = ClientConfig(api_key="test-key", base_url="https://api.example.com", **options)
    return AsyncHttpClient(cfg, transport=httpx.MockTransport(handler), sleep=fake_sleep)


def asgi_client(api_key: str = "test-key") -> AsyncDevSly:
    return AsyncDevSly(api_key, base_url="http://testserver", transport=httpx.ASGITransport(app=fake_app))


@pytest.mark.asyncio
async def test_async_retries_then_raises() -> None:
    attempts = {"count": 0}
    sleeps: List[float] = []

    def handler(request: httpx.Request) -> httpx.Response:
        attempts["count"] += 1
        raise httpx.ConnectTimeout("connect timed out", request=request)

    engine = make_engine(handler, sleeps, retry_attempts=2)
    with pytest.raises(NetworkError):
        await engine.get("/api/network/whois", {"domain": "example.com"})
    assert attempts["count"] == 3
    assert sleeps == [1, 2]
    await engine.aclose()


@pytest.mark.asyncio
async def test_async_recovers_after_transient_failure() -> None:
    attempts = {"count": 0}
    sleeps: List[float] = []

    def handler(request: httpx.Request) -> httpx.Response:
        attempts["count"] += 1
        if attempts["count"] == 1:
            raise httpx.RemoteProtocolError("server disconnected", request=request)
        return httpx.Response(200, json={"status": "running"})

    async with make_engine(handler, sleeps) as engine:
        assert await engine.get("/api/load-testing/status", {"test_id": "lt-1"}) == {"status": "running"}
    assert attempts["count"] == 2
    assert sleeps == [1]


@pytest.mark.asyncio
async def test_async_http_errors_not_retried() -> None:
    attempts = {"count": 0}
    sleeps: List[float] = []

    def handler(request: httpx.Request) -> httpx.Response:
        attempts["count"] += 1
        return httpx.Response(503, json={"message": "maintenance"})

    engine = make_engine(handler, sleeps)
    with pytest.raises(ApiError, match="Server error: maintenance"):
        await engine.post("/api/network/ping", {"host": "example.com"})
    assert attempts["count"] == 1
    assert sleeps == []
    await engine.aclose()


@pytest.mark.asyncio
async def test_concurrent_calls_are_independent() -> None:
    async def handler(request: httpx.Request) -> httpx.Response:
        await asyncio.sleep(0)
        return httpx.Response(200, json={"domain": request.url.params["domain"]})

    engine = make_engine(handler, [])
    domains = ["a.example", "b.example", "c.example"]
    results = await asyncio.gather(*(engine.get("/api/network/whois", {"domain": d}) for d in domains))
    assert [r["domain"] for r in results] == domains
    await engine.aclose()


@pytest.mark.asyncio
async def test_end_to_end_whois() -> None:
    async with asgi_client() as client:
        result = await client.network.whois("example.com")
    assert result["domain"] == "example.com"
    assert result["registrar"] == "Example Registrar"


@pytest.mark.asyncio
async def test_end_to_end_port_scan_body() -> None:
    async with asgi_client() as client:
        result = await client.network.port_scan("example.com", [22, 80, 443])
    assert result["timeout"] == 5
    assert result["results"] == {"22": {"open": False}, "80": {"open": True}, "443": {"open": True}}


@pytest.mark.asyncio
async def test_end_to_end_bad_key() -> None:
    async with asgi_client(api_key="wrong") as client:
        with pytest.raises(AuthenticationError) as excinfo:
            await client.network.whois("example.com")
    assert excinfo.value.code == 401
    assert excinfo.value.message == "Invalid API key"


@pytest.mark.asyncio
async def test_end_to_end_not_found() -> None:
    async with asgi_client() as client:
        with pytest.raises(ApiError) as excinfo:
            await client.load_testing.status("lt-404")
    assert excinfo.value.message == "Resource not found: Load test lt-404"


@pytest.mark.asyncio
async def test_end_to_end_hash_and_validation() -> None:
    async with asgi_client() as client:
        result = await client.tools.hash("hello", algorithm="SHA256")
        assert result["hash"] == hashlib.sha256(b"hello").hexdigest()
        with pytest.raises(ValidationError, match="Unsupported algorithm: crc32"):
            await client.tools.hash("hello", algorithm="crc32")


@pytest.mark.asyncio
async def test_end_to_end_rate_limited() -> None:
    async with asgi_client() as client:
        with pytest.raises(RateLimitError) as excinfo:
            await client.code_analysis.detect_secrets("AWS_SECRET=abc")
    assert excinfo.value.code == 429
    assert excinfo.value.retry_after is None


@pytest.mark.asyncio
async def test_async_unsupported_protocol_not_retried() -> None:
    attempts = {"count": 0}
    sleeps: List[float] = []

    def handler(request: httpx.Request) -> httpx.Response:
        attempts["count"] += 1
        raise httpx.UnsupportedProtocol("unsupported protocol", request=request)

    engine = make_engine(handler, sleeps, retry_attempts=3)
    with pytest.raises(NetworkError) as excinfo:
        await engine.get("/api/x")
    assert excinfo.value.retryable is False
    assert attempts["count"] == 1
    assert sleeps == []
    await engine.aclose()
