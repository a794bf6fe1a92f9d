"""Static analysis endpoints: Dockerfiles, dependencies, secrets, licenses."""

from __future__ import annotations

from typing import Any, Iterable, Optional

from .base import Service, with_options


class CodeAnalysis(Service):
    prefix = "/api/code-analysis"

    def scan_dockerfile(
        self,
        dockerfile: str,
        *,
        severity_threshold: Optional[str] = None,
        include_suggestions: Optional[bool] = None,
        check_base_image: Optional[bool] = None,
    ) -> Any:
        params = with_options(
            {"dockerfile": dockerfile},
            severity_threshold=severity_threshold,
            include_suggestions=include_suggestions,
            check_base_image=check_base_image,
        )
        return self._http.post(self._path("dockerfile/scan"), params)

    def analyze_docker_layers(self, image: str) -> Any:
        return self._http.post(self._path("docker/layers"), {"image": image})

    def scan_dependencies(self, manifest: str, type: str) -> Any:
        """Scan a dependency manifest (``npm``, ``pip``, ``composer``, ...) for known vulnerabilities."""
        return self._http.post(self._path("dependencies/scan"), {"manifest": manifest, "type": type.lower()})

    def analyze_code_quality(
        self,
        code: str,
        language: str,
        *,
        check_complexity: Optional[bool] = None,
        check_duplicates: Optional[bool] = None,
        check_style: Optional[bool] = None,
    ) -> Any:
        params = with_options(
            {"code": code, "language": language.lower()},
            check_complexity=check_complexity,
            check_duplicates=check_duplicates,
            check_style=check_style,
        )
        return self._http.post(self._path("quality"), params)

    def detect_secrets(
        self,
        content: str,
        *,
        entropy_threshold: Optional[float] = None,
        exclude_patterns: Optional[Iterable[str]] = None,
    ) -> Any:
        params = with_options(
            {"content": content},
            entropy_threshold=entropy_threshold,
            exclude_patterns=list(exclude_patterns) if exclude_patterns is not None else None,
        )
        return self._http.post(self._path("secrets/detect"), params)

    def analyze_api_spec(self, spec: str, format: str = "openapi") -> Any:
        return self._http.post(self._path("api-spec/analyze"), {"spec": spec, "format": format.lower()})

    def check_license_compliance(
        self,
        licenses: Iterable[str],
        *,
        allowed_licenses: Optional[Iterable[str]] = None,
        project_license: Optional[str] = None,
    ) -> Any:
        params = with_options(
            {"licenses": list(licenses)},
            allowed_licenses=list(allowed_licenses) if allowed_licenses is not None else None,
            project_license=project_license,
        )
        return self._http.post(self._path("license/check"), params)

    def generate_documentation(self, code: str, language: str, format: str = "markdown") -> Any:
        return self._http.post(
            self._path("documentation/generate"),
            {"code": code, "language": language.lower(), "format": format.lower()},
        )


__all__ = ["CodeAnalysis"]
