"""HTTP client for the analyzer API.

Authentication state lives in an explicit ``ApiSession`` value that callers
pass to each authenticated call; the client itself holds no token.
"""

import time
from dataclasses import dataclass, field
from typing import Any

import httpx

from analyzer.logging.logger import Log


@dataclass(frozen=True)
class ApiSession:
    token: str
    username: str = ""


class ApiClientError(Exception):
    """Raised when the API answers with an error status or cannot be reached."""

    def __init__(self, message: str, status_code: int | None = None, payload: Any = None) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.payload = payload


@dataclass
class BatchResult:
    results: list[dict[str, Any]] = field(default_factory=list)
    errors: list[dict[str, str]] = field(default_factory=list)

    @property
    def summary(self) -> dict[str, int]:
        return {
            "total": len(self.results) + len(self.errors),
            "successful": len(self.results),
            "failed": len(self.errors),
        }


class AnalyzerClient:
    """Thin synchronous client over the analyzer's JSON endpoints."""

    def __init__(
        self,
        base_url: str = "http://localhost:3001/api",
        *,
        auth_header_name: str = "x-auth-token",
        timeout_seconds: float = 90.0,
        http: httpx.Client | None = None,
    ) -> None:
        self._auth_header_name = auth_header_name
        self._http = http or httpx.Client(base_url=base_url, timeout=timeout_seconds)

    def close(self) -> None:
        self._http.close()

    def __enter__(self) -> "AnalyzerClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def register(self, username: str, password: str) -> ApiSession:
        data = self._request("POST", "/auth/register", json={"username": username, "password": password})
        return ApiSession(token=data["token"], username=username)

    def login(self, username: str, password: str) -> ApiSession:
        data = self._request("POST", "/auth/login", json={"username": username, "password": password})
        return ApiSession(token=data["token"], username=username)

    def me(self, session: ApiSession) -> dict[str, Any]:
        return self._request("GET", "/auth/me", session=session)

    def health(self) -> dict[str, Any]:
        return self._request("GET", "/health")

    def rules(self) -> list[dict[str, Any]]:
        return self._request("GET", "/rules")["rules"]

    def analyze(
        self,
        session: ApiSession,
        url: str,
        *,
        rules: list[str] | None = None,
        tags: list[str] | None = None,
        wait_time_ms: int | None = None,
    ) -> dict[str, Any]:
        options: dict[str, Any] = {}
        if rules is not None:
            options["rules"] = rules
        if tags is not None:
            options["tags"] = tags
        if wait_time_ms is not None:
            options["waitTime"] = wait_time_ms
        return self._request("POST", "/analyze", session=session, json={"url": url, "options": options})

    def history(self, session: ApiSession) -> list[dict[str, Any]]:
        return self._request("GET", "/history", session=session)

    def analyze_many(
        self,
        session: ApiSession,
        urls: list[str],
        *,
        delay_seconds: float = 1.0,
        **options: Any,
    ) -> BatchResult:
        """Analyze URLs one after another; failures are collected, not raised."""
        if not urls:
            raise ValueError("urls must not be empty")
        batch = BatchResult()
        for index, url in enumerate(urls):
            try:
                batch.results.append(self.analyze(session, url, **options))
            except ApiClientError as exc:
                Log.warning(f"Analysis of {url} failed: {exc}")
                batch.errors.append({"url": url, "error": str(exc)})
            if index < len(urls) - 1 and delay_seconds > 0:
                time.sleep(delay_seconds)
        return batch

    def compare(self, session: ApiSession, first_url: str, second_url: str, **options: Any) -> dict[str, Any]:
        first = self.analyze(session, first_url, **options)
        second = self.analyze(session, second_url, **options)
        return {
            "first": first,
            "second": second,
            "scoreDifference": second["score"] - first["score"],
            "violationsDifference": (
                second["summary"]["totalViolations"] - first["summary"]["totalViolations"]
            ),
            "better": first_url if first["score"] >= second["score"] else second_url,
        }

    def _request(
        self,
        method: str,
        path: str,
        *,
        session: ApiSession | None = None,
        json: Any = None,
    ) -> Any:
        headers = {self._auth_header_name: session.token} if session else {}
        try:
            response = self._http.request(method, path, json=json, headers=headers)
        except httpx.HTTPError as exc:
            raise ApiClientError(f"Unable to reach analyzer API: {exc}") from exc

        if response.is_success:
            return response.json()

        try:
            payload = response.json()
        except ValueError:
            payload = response.text
        message = payload.get("message") if isinstance(payload, dict) else None
        raise ApiClientError(
            message or f"{method} {path} failed with status {response.status_code}",
            status_code=response.status_code,
            payload=payload,
        )
