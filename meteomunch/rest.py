"""HTTP client abstraction used by the providers.

Providers only depend on :class:`HTTPClient`; :class:`RestClient` is the
``requests`` based implementation with the default timeout/retry policy.
"""
from __future__ import annotations

import json
import logging
from http import HTTPStatus
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Protocol

import requests
from tenacity import Retrying, before_sleep_log, retry_if_exception_type, stop_after_attempt, wait_fixed


logger = logging.getLogger(__name__)


class RequestFailed(RuntimeError):
    """Network failure or timeout that survived the retry policy."""

    retryable = True


@dataclass
class RequestConfig:
    timeout: float = 1.0
    retries: int = 3
    retry_wait: float = 1.0


@dataclass(frozen=True)
class TraceInfo:
    url: str
    elapsed: float  # seconds, last attempt
    attempts: int


@dataclass
class RestResponse:
    status_code: int
    status: str  # e.g. "200 OK"
    body: bytes
    headers: Dict[str, str] = field(default_factory=dict)
    trace: Optional[TraceInfo] = None

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300

    def json(self) -> Any:
        return json.loads(self.body)


def status_text(status_code: int, reason: Optional[str] = None) -> str:
    """Format a status line such as ``"200 OK"``; servers may omit the reason phrase."""
    if not reason:
        try:
            reason = HTTPStatus(status_code).phrase
        except ValueError:
            reason = ""
    return f"{status_code} {reason}".strip()


class HTTPClient(Protocol):
    base_url: str

    def get(
        self,
        path: str,
        params: Optional[Mapping[str, str]] = None,
        headers: Optional[Mapping[str, str]] = None,
    ) -> RestResponse:
        ...


class RestClient:
    """GET-only client bound to a base URL.

    Every call builds its own request, so one client can serve concurrent
    callers. Connection errors and timeouts are retried with a fixed wait.
    """

    def __init__(
        self,
        base_url: str,
        request_config: Optional[RequestConfig] = None,
        session: Optional[requests.Session] = None,
        debug: bool = False,
        trace: bool = False,
    ) -> None:
        self.base_url = base_url
        self.request_config = request_config or RequestConfig()
        self.session = session or requests.Session()
        self.debug = debug
        self.trace = trace or debug
        self._log = logging.getLogger(self.__class__.__name__)

    def url_for(self, path: str) -> str:
        if not path:
            return self.base_url
        return f"{self.base_url.rstrip('/')}/{path.lstrip('/')}"

    def get(
        self,
        path: str,
        params: Optional[Mapping[str, str]] = None,
        headers: Optional[Mapping[str, str]] = None,
    ) -> RestResponse:
        url = self.url_for(path)
        request_headers = {"Accept": "application/json", **(headers or {})}
        if self.debug:
            self._log.debug("GET %s params=%s", url, dict(params or {}))

        retrying = Retrying(
            stop=stop_after_attempt(self.request_config.retries + 1),
            wait=wait_fixed(self.request_config.retry_wait),
            retry=retry_if_exception_type((requests.ConnectionError, requests.Timeout)),
            before_sleep=before_sleep_log(logger, logging.WARNING),
            reraise=True,
        )
        attempts = 0
        try:
            for attempt in retrying:
                with attempt:
                    attempts = attempt.retry_state.attempt_number
                    response = self.session.get(
                        url,
                        params=dict(params or {}),
                        headers=request_headers,
                        timeout=self.request_config.timeout,
                    )
        except requests.Timeout as exc:
            self._log.error("GET %s timed out after %d attempts", url, attempts)
            raise RequestFailed(f"timeout after {attempts} attempts: {url}") from exc
        except requests.RequestException as exc:
            self._log.error("GET %s failed after %d attempts: %s", url, attempts, exc)
            raise RequestFailed(f"failed to make GET request: {exc}") from exc

        result = RestResponse(
            status_code=response.status_code,
            status=status_text(response.status_code, response.reason),
            body=response.content,
            headers=dict(response.headers),
        )
        if self.trace:
            result.trace = TraceInfo(url=response.url, elapsed=response.elapsed.total_seconds(), attempts=attempts)
        if self.debug:
            self._log.debug("Response %s from %s trace=%s", result.status, url, result.trace)
        return result


__all__ = ["HTTPClient", "RequestConfig", "RestClient", "RestResponse", "RequestFailed", "TraceInfo", "status_text"]
