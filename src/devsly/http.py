"""Request engine shared by every DevSLY service.

Builds the absolute URL, sends the request through httpx, retries transport
failures with exponential backoff and turns the response into either a JSON
mapping or one of the typed errors in :mod:`devsly.errors`. HTTP error
responses are never retried.
"""

from __future__ import annotations

import asyncio
import json
import logging
import time
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Dict, Mapping, Optional
from urllib.parse import urlencode

import httpx

from . import metrics
from .config import ClientConfig
from .errors import (
    ApiError,
    AuthenticationError,
    NetworkError,
    RateLimitError,
    ValidationError,
)

logger = logging.getLogger("devsly.http")

METHODS = ("GET", "POST", "PUT", "DELETE")
BODY_METHODS = ("POST", "PUT")

# Subclasses of TransportError that fail identically on every attempt.
PERMANENT_ERRORS = (httpx.UnsupportedProtocol, httpx.LocalProtocolError)
TRANSIENT_ERRORS = (httpx.TransportError, httpx.DecodingError)

MAX_LOGGED_BODY = 500


@dataclass(frozen=True)
class RequestSpec:
    method: str
    path: str
    query: Dict[str, Any] = field(default_factory=dict)
    body: Optional[Dict[str, Any]] = None

    @classmethod
    def build(
        cls,
        method: str,
        path: str,
        query: Optional[Mapping[str, Any]] = None,
        body: Optional[Mapping[str, Any]] = None,
    ) -> "RequestSpec":
        verb = method.upper()
        if verb not in METHODS:
            raise ValueError(f"Unsupported HTTP method: {method}")
        payload = dict(body) if body is not None and verb in BODY_METHODS else None
        return cls(method=verb, path=path, query=dict(query or {}), body=payload)

    def content(self) -> Optional[bytes]:
        if self.body is None:
            return None
        return json.dumps(self.body, separators=(",", ":")).encode("utf-8")


def encode_query(query: Mapping[str, Any]) -> str:
    """Form-encode ``query`` in insertion order.

    ``None`` values are skipped and booleans are sent as ``1``/``0``.
    """
    pairs = []
    for key, value in query.items():
        if value is None:
            continue
        if isinstance(value, bool):
            value = int(value)
        elif isinstance(value, (list, tuple, set, dict)):
            raise ValueError(f"Query parameter {key!r} must be a scalar value")
        pairs.append((str(key), str(value)))
    return urlencode(pairs)


def build_url(base_url: str, path: str, query: Optional[Mapping[str, Any]] = None) -> str:
    url = f"{base_url.rstrip('/')}/{path.lstrip('/')}"
    encoded = encode_query(query) if query else ""
    if encoded:
        url = f"{url}?{encoded}"
    return url


def backoff_delay(attempt: int) -> int:
    return 2 ** (attempt - 1)


def _parse_retry_after(value: Optional[str]) -> Optional[float]:
    if not value:
        return None
    try:
        return float(value)
    except ValueError:
        return None


def _decode_json(response: httpx.Response) -> Any:
    raw = response.content
    if not raw.strip():
        return None
    try:
        return json.loads(raw)
    except ValueError as exc:
        detail = getattr(exc, "msg", None) or str(exc)
        raise ApiError(f"Invalid JSON response: {detail}", response.status_code, cause=exc) from exc


def error_from_response(status: int, data: Mapping[str, Any], headers: Optional[Mapping[str, str]] = None) -> ApiError:
    message = data.get("message")
    if message is None:
        message = "Unknown error"
    message = str(message)
    error_code = data.get("error")
    if error_code is None:
        error_code = "UNKNOWN_ERROR"
    details = {"error_code": error_code, "response_body": dict(data)}

    if status == 429 or error_code == "RATE_LIMIT_EXCEEDED":
        retry_after = _parse_retry_after((headers or {}).get("Retry-After"))
        return RateLimitError(message, status, retry_after=retry_after, **details)
    if status == 401 or error_code == "UNAUTHORIZED":
        return AuthenticationError(message, status, **details)
    if status == 400 or error_code in ("BAD_REQUEST", "VALIDATION_ERROR"):
        return ValidationError(message, status, **details)
    if status == 404:
        return ApiError(f"Resource not found: {message}", status, **details)
    if status >= 500:
        return ApiError(f"Server error: {message}", status, **details)
    return ApiError(message, status, **details)


def classify_response(response: httpx.Response) -> Dict[str, Any]:
    status = response.status_code
    data = _decode_json(response)
    if 200 <= status < 300:
        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ApiError(f"Invalid JSON response: expected an object, got {type(data).__name__}", status)
        return data
    raise error_from_response(status, data if isinstance(data, dict) else {}, response.headers)


class _EngineBase:
    def __init__(self, config: ClientConfig) -> None:
        self._config = config

    @property
    def config(self) -> ClientConfig:
        return self._config

    def build_url(self, path: str, query: Optional[Mapping[str, Any]] = None) -> str:
        return build_url(self._config.base_url, path, query)

    def _network_error(self, exc: Exception, *, retryable: bool = True) -> NetworkError:
        detail = str(exc) or type(exc).__name__
        return NetworkError(f"Network error: {detail}", retryable=retryable, cause=exc)

    def _retry_or_raise(self, spec: RequestSpec, error: NetworkError, attempt: int) -> int:
        max_attempts = self._config.max_attempts
        if attempt >= max_attempts or not error.retryable:
            logger.error(
                "DevSLY request failed after %d attempt(s) method=%s path=%s error=%s",
                attempt,
                spec.method,
                spec.path,
                error.message,
            )
            metrics.record_outcome(spec.method, error.kind.value)
            raise error
        delay = backoff_delay(attempt)
        logger.warning(
            "Transport failure on attempt %d/%d method=%s path=%s error=%s; retrying in %ss",
            attempt,
            max_attempts,
            spec.method,
            spec.path,
            error.message,
            delay,
        )
        metrics.record_retry(spec.method)
        return delay

    def _finish(self, spec: RequestSpec, response: httpx.Response) -> Dict[str, Any]:
        try:
            result = classify_response(response)
        except ApiError as exc:
            logger.error(
                "DevSLY request failed method=%s path=%s status=%s body=%s",
                spec.method,
                spec.path,
                response.status_code,
                response.text[:MAX_LOGGED_BODY],
            )
            metrics.record_outcome(spec.method, exc.kind.value)
            raise
        metrics.record_outcome(spec.method, "success")
        return result


class HttpClient(_EngineBase):
    def __init__(
        self,
        config: ClientConfig,
        *,
        transport: Optional[httpx.BaseTransport] = None,
        sleep: Optional[Callable[[float], None]] = None,
    ) -> None:
        super().__init__(config)
        self._sleep = sleep or time.sleep
        self._client = httpx.Client(
            headers=config.headers(),
            timeout=config.httpx_timeout(),
            verify=config.verify_ssl,
            transport=transport,
        )

    def __enter__(self) -> "HttpClient":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def execute(
        self,
        method: str,
        path: str,
        query: Optional[Mapping[str, Any]] = None,
        body: Optional[Mapping[str, Any]] = None,
    ) -> Dict[str, Any]:
        spec = RequestSpec.build(method, path, query, body)
        url = self.build_url(spec.path, spec.query)
        attempt = 0
        while True:
            attempt += 1
            logger.debug("%s %s attempt %d/%d", spec.method, url, attempt, self._config.max_attempts)
            try:
                response = self._send(spec, url)
            except NetworkError as error:
                delay = self._retry_or_raise(spec, error, attempt)
                self._sleep(delay)
                continue
            return self._finish(spec, response)

    def _send(self, spec: RequestSpec, url: str) -> httpx.Response:
        started = time.perf_counter()
        try:
            return self._client.request(spec.method, url, content=spec.content())
        except PERMANENT_ERRORS as exc:
            raise self._network_error(exc, retryable=False) from exc
        except TRANSIENT_ERRORS as exc:
            raise self._network_error(exc) from exc
        finally:
            metrics.REQUEST_LATENCY.labels(method=spec.method).observe(time.perf_counter() - started)

    def get(self, path: str, query: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
        return self.execute("GET", path, query=query)

    def post(self, path: str, body: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
        return self.execute("POST", path, body=body)

    def put(self, path: str, body: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
        return self.execute("PUT", path, body=body)

    def delete(self, path: str, query: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
        return self.execute("DELETE", path, query=query)

    def close(self) -> None:
        self._client.close()


class AsyncHttpClient(_EngineBase):
    def __init__(
        self,
        config: ClientConfig,
        *,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        sleep: Optional[Callable[[float], Awaitable[None]]] = None,
    ) -> None:
        super().__init__(config)
        self._sleep = sleep or asyncio.sleep
        self._client = httpx.AsyncClient(
            headers=config.headers(),
            timeout=config.httpx_timeout(),
            verify=config.verify_ssl,
            transport=transport,
        )

    async def __aenter__(self) -> "AsyncHttpClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    async def execute(
        self,
        method: str,
        path: str,
        query: Optional[Mapping[str, Any]] = None,
        body: Optional[Mapping[str, Any]] = None,
    ) -> Dict[str, Any]:
        spec = RequestSpec.build(method, path, query, body)
        url = self.build_url(spec.path, spec.query)
        attempt = 0
        while True:
            attempt += 1
            logger.debug("%s %s attempt %d/%d", spec.method, url, attempt, self._config.max_attempts)
            try:
                response = await self._send(spec, url)
            except NetworkError as error:
                delay = self._retry_or_raise(spec, error, attempt)
                await self._sleep(delay)
                continue
            return self._finish(spec, response)

    async def _send(self, spec: RequestSpec, url: str) -> httpx.Response:
        started = time.perf_counter()
        try:
            return await self._client.request(spec.method, url, content=spec.content())
        except PERMANENT_ERRORS as exc:
            raise self._network_error(exc, retryable=False) from exc
        except TRANSIENT_ERRORS as exc:
            raise self._network_error(exc) from exc
        finally:
            metrics.REQUEST_LATENCY.labels(method=spec.method).observe(time.perf_counter() - started)

    async def get(self, path: str, query: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
        return await self.execute("GET", path, query=query)

    async def post(self, path: str, body: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
        return await self.execute("POST", path, body=body)

    async def put(self, path: str, body: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
        return await self.execute("PUT", path, body=body)

    async def delete(self, path: str, query: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
        return await self.execute("DELETE", path, query=query)

    async def aclose(self) -> None:
        await self._client.aclose()


__all__ = [
    "HttpClient",
    "AsyncHttpClient",
    "RequestSpec",
    "build_url",
    "encode_query",
    "backoff_delay",
    "classify_response",
    "error_from_response",
]
