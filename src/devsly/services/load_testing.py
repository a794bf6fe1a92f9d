"""Load test lifecycle: start, monitor, stop and collect results."""

from __future__ import annotations

from typing import Any, Dict, Iterable, Optional

from .base import Service, with_options


class LoadTesting(Service):
    prefix = "/api/load-testing"

    def start(
        self,
        url: str,
        users: int,
        duration: int,
        *,
        method: Optional[str] = None,
        headers: Optional[Dict[str, str]] = None,
        body: Optional[Any] = None,
        ramp_up: Optional[int] = None,
        think_time: Optional[float] = None,
        regions: Optional[Iterable[str]] = None,
    ) -> Any:
        """Start a load test against ``url``; the response carries the ``test_id``."""
        params = with_options(
            {"url": url, "users": users, "duration": duration},
            method=method.upper() if method else None,
            headers=headers,
            body=body,
            ramp_up=ramp_up,
            think_time=think_time,
            regions=list(regions) if regions is not None else None,
        )
        return self._http.post(self._path("start"), params)

    def status(self, test_id: str) -> Any:
        return self._http.get(self._path("status"), {"test_id": test_id})

    def stop(self, test_id: str) -> Any:
        return self._http.post(self._path("stop"), {"test_id": test_id})

    def results(self, test_id: str) -> Any:
        return self._http.get(self._path("results"), {"test_id": test_id})

    def list(self, limit: int = 20, offset: int = 0, status: Optional[str] = None) -> Any:
        return self._http.get(self._path("list"), with_options({"limit": limit, "offset": offset}, status=status))

    def delete(self, test_id: str) -> Any:
        return self._http.delete(self._path("delete"), {"test_id": test_id})

    def metrics(self, test_id: str) -> Any:
        return self._http.get(self._path("metrics"), {"test_id": test_id})


__all__ = ["LoadTesting"]
