"""HTTP calls to provider APIs with bounded exponential backoff.

Only 429 and 5xx responses are retried. The wait before the next attempt is
``min(1000 * 2**attempt, 8000)`` milliseconds, without jitter. Any other non-2xx
status fails immediately. Transport errors are not retried.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from typing import Any

import requests

from claude_issue_runner.errors import ProviderHTTPError

logger = logging.getLogger(__name__)

BASE_DELAY_MS = 1000
MAX_DELAY_MS = 8000
DEFAULT_RETRIES = 2


def backoff_delay_ms(attempt: int) -> int:
    """Delay to wait after a retryable failure of the given 0-based attempt."""

    return min(BASE_DELAY_MS * 2**attempt, MAX_DELAY_MS)


def is_retryable_status(status_code: int) -> bool:
    return status_code == 429 or 500 <= status_code < 600


class RetryingHTTPClient:
    """Small wrapper around a `requests.Session` for JSON POSTs."""

    def __init__(
        self,
        session: requests.Session | None = None,
        *,
        retries: int = DEFAULT_RETRIES,
        timeout: float = 120.0,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        if retries < 0:
            raise ValueError("retries must be >= 0")
        self._session = session or requests.Session()
        self._retries = retries
        self._timeout = timeout
        self._sleep = sleep

    @property
    def retries(self) -> int:
        return self._retries

    def post_json(
        self,
        url: str,
        *,
        headers: dict[str, str],
        payload: dict[str, Any],
    ) -> requests.Response:
        attempt = 0

        while True:
            resp = self._session.post(url, headers=headers, json=payload, timeout=self._timeout)
            if 200 <= resp.status_code < 300:
                return resp

            if is_retryable_status(resp.status_code):
                delay = backoff_delay_ms(attempt)
                error = ProviderHTTPError(resp.status_code, resp.text)
                logger.warning(
                    f"API error: {error}. Retry in {delay}ms "
                    f"(attempt {attempt + 1}/{self._retries + 1})",
                    extra={"url": url, "status_code": resp.status_code, "delay_ms": delay},
                )
                self._sleep(delay / 1000)
                if attempt >= self._retries:
                    raise error
                attempt += 1
                continue

            raise ProviderHTTPError(resp.status_code, resp.text)

    def close(self) -> None:
        self._session.close()
