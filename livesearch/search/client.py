import logging
import math
import random
import time
from datetime import datetime, timezone
from email.utils import parsedate_to_datetime
from typing import Any, Callable, Dict, Optional

import requests

from livesearch.core.exceptions import HttpStatusError, TransportError

logger = logging.getLogger(__name__)

RETRIABLE_STATUSES = frozenset({408, 429, 500, 502, 503, 504})
JITTER_MS = 250


def compute_backoff_ms(attempt: int, base_ms: int = 500) -> int:
    """Exponential backoff for the given 1-based attempt, plus jitter."""
    jitter = random.randrange(JITTER_MS)
    return base_ms * 2 ** (attempt - 1) + jitter


def parse_retry_after_ms(value: Optional[str]) -> Optional[int]:
    """Convert a Retry-After header (seconds or HTTP date) to milliseconds."""
    if not value:
        return None
    value = value.strip()
    try:
        seconds = float(value)
    except ValueError:
        try:
            when = parsedate_to_datetime(value)
        except (TypeError, ValueError):
            return None
        if when.tzinfo is None:
            when = when.replace(tzinfo=timezone.utc)
        seconds = (when - datetime.now(timezone.utc)).total_seconds()
    if not math.isfinite(seconds):
        return None
    return max(0, int(seconds * 1000))


def request_id_from(response: requests.Response) -> str:
    return (
        response.headers.get("x-request-id")
        or response.headers.get("x-openrouter-id")
        or "n/a"
    )


class RetryingClient:
    """POSTs JSON with a per-attempt timeout and bounded retries.

    ``timeout`` is the requests connect/read timeout: it bounds each socket
    wait, not the whole attempt, so a server trickling bytes can hold one
    attempt open longer than ``timeout`` seconds.
    """

    def __init__(
        self,
        session: Any = None,
        attempts: int = 3,
        timeout: float = 30.0,
        backoff_base_ms: int = 500,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.http = session or requests
        self.attempts = attempts
        self.timeout = timeout
        self.backoff_base_ms = backoff_base_ms
        self.sleep = sleep

    def post(self, url: str, payload: Dict[str, Any], headers: Dict[str, str]) -> requests.Response:
        last_error: Optional[Exception] = None
        for attempt in range(1, self.attempts + 1):
            try:
                response = self.http.post(url, json=payload, headers=headers, timeout=self.timeout)
            except requests.RequestException as exc:
                last_error = exc
                if attempt == self.attempts:
                    break
                delay_ms = compute_backoff_ms(attempt, self.backoff_base_ms)
                logger.warning(
                    "Attempt %s/%s failed (%s); retrying in %sms",
                    attempt,
                    self.attempts,
                    exc,
                    delay_ms,
                )
                self._wait(delay_ms)
                continue

            if 200 <= response.status_code < 300:
                return response

            status = response.status_code
            request_id = request_id_from(response)
            body = response.text
            if status not in RETRIABLE_STATUSES or attempt == self.attempts:
                raise HttpStatusError(status, request_id, body)

            delay_ms = parse_retry_after_ms(response.headers.get("retry-after"))
            if delay_ms is None:
                delay_ms = compute_backoff_ms(attempt, self.backoff_base_ms)
            logger.warning(
                "HTTP %s (request-id=%s) on attempt %s/%s; retrying in %sms",
                status,
                request_id,
                attempt,
                self.attempts,
                delay_ms,
            )
            self._wait(delay_ms)

        raise TransportError(f"Network/timeout error: {last_error}")

    def _wait(self, delay_ms: int) -> None:
        self.sleep(max(0, delay_ms) / 1000.0)
