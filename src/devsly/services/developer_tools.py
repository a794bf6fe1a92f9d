"""Developer utilities: JSON, encodings, hashes, UUIDs, QR codes, regex, JWT."""

from __future__ import annotations

from typing import Any, Dict, Optional

from .base import Service, with_options


class DeveloperTools(Service):
    prefix = "/api/tools"

    def format_json(self, json: str, indent: int = 2) -> Any:
        return self._http.post(self._path("json/format"), {"json": json, "indent": indent})

    def minify_json(self, json: str) -> Any:
        return self._http.post(self._path("json/minify"), {"json": json})

    def validate_json(self, json: str) -> Any:
        return self._http.post(self._path("json/validate"), {"json": json})

    def base64_encode(self, data: str) -> Any:
        return self._http.post(self._path("base64/encode"), {"data": data})

    def base64_decode(self, data: str) -> Any:
        return self._http.post(self._path("base64/decode"), {"data": data})

    def hash(self, data: str, algorithm: str = "sha256") -> Any:
        return self._http.post(self._path("hash"), {"data": data, "algorithm": algorithm.lower()})

    def format_sql(self, sql: str, *, uppercase: Optional[bool] = None, indent: Optional[int] = None) -> Any:
        return self._http.post(self._path("sql/format"), with_options({"sql": sql}, uppercase=uppercase, indent=indent))

    def generate_uuid(self, count: int = 1) -> Any:
        return self._http.post(self._path("uuid/generate"), {"count": count})

    def validate_uuid(self, uuid: str) -> Any:
        return self._http.post(self._path("uuid/validate"), {"uuid": uuid})

    def generate_qr_code(
        self,
        data: str,
        *,
        size: Optional[int] = None,
        format: Optional[str] = None,
        error_correction: Optional[str] = None,
    ) -> Any:
        params = with_options({"data": data}, size=size, format=format, error_correction=error_correction)
        return self._http.post(self._path("qrcode/generate"), params)

    def test_regex(
        self,
        pattern: str,
        text: str,
        *,
        global_: Optional[bool] = None,
        multiline: Optional[bool] = None,
        case_insensitive: Optional[bool] = None,
    ) -> Any:
        params = with_options({"pattern": pattern, "text": text}, multiline=multiline, case_insensitive=case_insensitive)
        if global_ is not None:
            params["global"] = global_
        return self._http.post(self._path("regex/test"), params)

    def decode_jwt(self, token: str, verify: bool = False, secret: Optional[str] = None) -> Any:
        """Decode a JWT; ``secret`` is only sent when ``verify`` is set."""
        params: Dict[str, Any] = {"token": token, "verify": verify}
        if verify and secret is not None:
            params["secret"] = secret
        return self._http.post(self._path("jwt/decode"), params)

    def url_encode(self, data: str) -> Any:
        return self._http.post(self._path("url/encode"), {"data": data})

    def url_decode(self, data: str) -> Any:
        return self._http.post(self._path("url/decode"), {"data": data})

    def generate_random_string(
        self,
        length: int = 16,
        *,
        include_uppercase: Optional[bool] = None,
        include_numbers: Optional[bool] = None,
        include_symbols: Optional[bool] = None,
    ) -> Any:
        params = with_options(
            {"length": length},
            include_uppercase=include_uppercase,
            include_numbers=include_numbers,
            include_symbols=include_symbols,
        )
        return self._http.post(self._path("random/string"), params)

    def format_timestamp(self, timestamp: int, target_format: str = "iso8601", custom_format: Optional[str] = None) -> Any:
        params = with_options({"timestamp": timestamp, "format": target_format}, custom_format=custom_format)
        return self._http.post(self._path("timestamp/format"), params)


__all__ = ["DeveloperTools"]
