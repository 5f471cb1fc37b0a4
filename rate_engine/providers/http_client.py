"""Shared HTTP client wrapper with retries, backoff, and jitter."""

from __future__ import annotations

import logging
import random
import time
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

import requests
from requests import Response, Session
from requests.exceptions import JSONDecodeError, RequestException

logger = logging.getLogger(__name__)


class HTTPClientError(RuntimeError):
    """Raised when the HTTP client cannot satisfy a request."""

    def __init__(self, message: str, *, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code

    @property
    def is_client_error(self) -> bool:
        return self.status_code is not None and 400 <= self.status_code < 500


@dataclass(frozen=True)
class HTTPClientConfig:
    """Configuration for the shared HTTP client."""

    base_url: str
    timeout: float = 5.0
    max_retries: int = 2
    backoff_seconds: float = 0.25
    backoff_jitter: float = 0.1
    # Wall-clock bound for retries; an in-flight attempt may still use its full timeout.
    total_timeout: Optional[float] = None


class HTTPClient:
    """Small HTTP client that applies per-call timeouts and retry/backoff policies.

    Transport failures and 5xx responses are retried; 4xx responses are raised
    immediately since repeating them cannot succeed.
    """

    def __init__(
        self,
        config: HTTPClientConfig,
        session: Optional[Session] = None,
    ) -> None:
        self._config = config
        self._session = session or requests.Session()

    @property
    def config(self) -> HTTPClientConfig:
        return self._config

    def get(self, path: str, params: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
        url = self._build_url(path)
        attempts = max(self._config.max_retries, 1)
        last_error: Optional[Exception] = None
        last_status: Optional[int] = None
        started = time.monotonic()

        for attempt in range(1, attempts + 1):
            try:
                response = self._session.get(url, params=params, timeout=self._config.timeout)
                return self._handle_response(response)
            except HTTPClientError as exc:
                if exc.is_client_error:
                    raise
                last_error = exc
                last_status = exc.status_code
            except RequestException as exc:
                last_error = exc
                last_status = None

            if attempt >= attempts:
                break
            sleep_for = self._compute_backoff(attempt)
            if self._over_budget(started, sleep_for):
                logger.warning(
                    "HTTP request to %s out of retry budget after %s attempt(s)", url, attempt
                )
                break
            logger.warning(
                "HTTP request to %s failed (attempt %s/%s): %s. Retrying in %.2fs.",
                url,
                attempt,
                attempts,
                last_error,
                sleep_for,
            )
            time.sleep(sleep_for)

        raise HTTPClientError(
            f"Failed to fetch {url}: {last_error}", status_code=last_status
        ) from last_error

    def _over_budget(self, started: float, sleep_for: float) -> bool:
        budget = self._config.total_timeout
        return budget is not None and time.monotonic() - started + sleep_for >= budget

    def _compute_backoff(self, attempt: int) -> float:
        base = self._config.backoff_seconds * (2 ** (attempt - 1))
        jitter = random.uniform(-self._config.backoff_jitter, self._config.backoff_jitter)
        return max(base + jitter, 0.0)

    def _build_url(self, path: str) -> str:
        base = self._config.base_url.rstrip("/")
        suffix = path.lstrip("/")
        return f"{base}/{suffix}" if suffix else base

    @staticmethod
    def _handle_response(response: Response) -> Dict[str, Any]:
        status = response.status_code
        if status >= 500:
            raise HTTPClientError(f"Server error {status}", status_code=status)
        if status >= 400:
            raise HTTPClientError(f"Client error {status}: {response.text[:200]}", status_code=status)

        try:
            payload = response.json()
        except (JSONDecodeError, ValueError) as exc:
            raise HTTPClientError("Invalid JSON response", status_code=status) from exc

        if not isinstance(payload, dict):
            raise HTTPClientError("Unexpected JSON payload type", status_code=status)
        return payload
