"""Minimal stand-in for the DevSLY API used by the end-to-end client tests."""

import hashlib
from typing import Any, Dict, Optional

from fastapi import Body, FastAPI, Header
from fastapi.responses import JSONResponse

VALID_KEY = "test-key"
SUPPORTED_HASHES = ("md5", "sha1", "sha256")

app = FastAPI(title="Fake DevSLY API", version="0.0.1")


def _unauthorized() -> JSONResponse:
    return JSONResponse(status_code=401, content={"error": "UNAUTHORIZED", "message": "Invalid API key"})


@app.get("/api/network/whois")
def whois(domain: str, x_api_key: Optional[str] = Header(None)) -> Any:
    if x_api_key != VALID_KEY:
        return _unauthorized()
    return {"domain": domain, "registrar": "Example Registrar", "nameservers": ["a.iana-servers.net"]}


@app.post("/api/network/port-scan")
def port_scan(payload: Dict[str, Any] = Body(...), x_api_key: Optional[str] = Header(None)) -> Any:
    if x_api_key != VALID_KEY:
        return _unauthorized()
    results = {str(port): {"open": port in (80, 443)} for port in payload["ports"]}
    return {"host": payload["host"], "timeout": payload["timeout"], "results": results}


@app.get("/api/load-testing/status")
def load_test_status(test_id: str) -> Any:
    return JSONResponse(status_code=404, content={"error": "NOT_FOUND", "message": f"Load test {test_id}"})


@app.post("/api/tools/hash")
def hash_data(payload: Dict[str, Any] = Body(...)) -> Any:
    algorithm = payload.get("algorithm")
    if algorithm not in SUPPORTED_HASHES:
        return JSONResponse(
            status_code=400,
            content={"error": "VALIDATION_ERROR", "message": f"Unsupported algorithm: {algorithm}"},
        )
    digest = hashlib.new(algorithm, payload["data"].encode("utf-8")).hexdigest()
    return {"algorithm": algorithm, "hash": digest}


@app.post("/api/code-analysis/secrets/detect")
def detect_secrets() -> Any:
    return JSONResponse(status_code=429, content={"error": "RATE_LIMIT_EXCEEDED", "message": "Daily quota used"})
