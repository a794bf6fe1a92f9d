"""Network diagnostics: WHOIS, DNS, geolocation, port scans and friends."""

from __future__ import annotations

from typing import Any, Dict, Iterable, Optional

from .base import Service


class NetworkTools(Service):
    prefix = "/api/network"

    def whois(self, domain: str) -> Any:
        return self._http.get(self._path("whois"), {"domain": domain})

    def dns(self, domain: str, record_type: str = "A") -> Any:
        """Query DNS records (A, AAAA, MX, TXT, CNAME, NS, SOA, PTR)."""
        return self._http.get(self._path("dns"), {"domain": domain, "type": record_type.upper()})

    def ip_geolocation(self, ip: str) -> Any:
        return self._http.get(self._path("ip-geolocation"), {"ip": ip})

    def http_status(self, url: str, method: str = "GET", headers: Optional[Dict[str, str]] = None) -> Any:
        params: Dict[str, Any] = {"url": url, "method": method.upper()}
        if headers:
            params["headers"] = dict(headers)
        return self._http.post(self._path("http-status"), params)

    def port_scan(self, host: str, ports: Iterable[int], timeout: int = 5) -> Any:
        # Ports travel in the body; the query string has no list encoding.
        return self._http.post(self._path("port-scan"), {"host": host, "ports": list(ports), "timeout": timeout})

    def ssl_certificate(self, domain: str, port: int = 443) -> Any:
        return self._http.get(self._path("ssl-certificate"), {"domain": domain, "port": port})

    def traceroute(self, host: str, max_hops: int = 30) -> Any:
        return self._http.post(self._path("traceroute"), {"host": host, "max_hops": max_hops})

    def ping(self, host: str, count: int = 4) -> Any:
        return self._http.post(self._path("ping"), {"host": host, "count": count})


__all__ = ["NetworkTools"]
