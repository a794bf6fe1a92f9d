"""Shared plumbing for the per-resource service wrappers."""

from __future__ import annotations

from typing import Any, Dict, Mapping, Optional, Protocol


class RequestEngine(Protocol):
    def get(self, path: str, query: Optional[Mapping[str, Any]] = None) -> Any: ...

    def post(self, path: str, body: Optional[Mapping[str, Any]] = None) -> Any: ...

    def put(self, path: str, body: Optional[Mapping[str, Any]] = None) -> Any: ...

    def delete(self, path: str, query: Optional[Mapping[str, Any]] = None) -> Any: ...


def with_options(params: Dict[str, Any], **options: Any) -> Dict[str, Any]:
    """Return ``params`` extended with every option that was actually supplied."""
    merged = dict(params)
    merged.update({key: value for key, value in options.items() if value is not None})
    return merged


class Service:
    """Stateless adapter mapping typed calls onto single engine requests.

    Methods return whatever the engine returns: a mapping for
    :class:`~devsly.http.HttpClient`, an awaitable of one for
    :class:`~devsly.http.AsyncHttpClient`.
    """

    prefix = ""

    def __init__(self, http: RequestEngine) -> None:
        self._http = http

    @property
    def http(self) -> RequestEngine:
        return self._http

    def _path(self, endpoint: str) -> str:
        return f"{self.prefix}/{endpoint}"


__all__ = ["RequestEngine", "Service", "with_options"]
