"""Retry policy for resilient HTTP calls.

Every network call the client makes goes through :class:`RetryPolicy`,
including the unauthenticated state download. The policy owns the backoff
schedule; a predicate decides, per attempt, whether to try again.

## Predicates

| Predicate | Timeout | 401 / 404 | Other non-2xx | Used by |
|-----------|---------|-----------|---------------|---------|
| `retry_on_unexpected_status` | ✅ | ❌ | ✅ | API requests (default) |
| `retry_on_timeout_or_failure` | ✅ | ✅ | ✅ | State download |
| `never_retry` | ❌ | ❌ | ❌ | Tests, one-shot calls |

Requests carrying a body are never retried: the executor runs them with
:meth:`RetryPolicy.single_attempt`.

## Example

```python
import httpx

from tfe_client.transport.retry import RetryPolicy, retry_on_unexpected_status

policy = RetryPolicy(base_interval=0.5, max_attempts=10, should_retry=retry_on_unexpected_status)

with httpx.Client() as http:
    response = policy.execute(lambda: http.get("https://app.terraform.io/api/v2/ping"))
```
"""

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass, field, replace

import httpx

from tfe_client.errors.exceptions import BadStatusError
from tfe_client.errors.handler import classify_status

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Attempt:
    """Outcome of a single try: a response, or the transport error raised instead."""

    response: httpx.Response | None = None
    error: httpx.TransportError | None = None

    def __post_init__(self) -> None:
        if (self.response is None) == (self.error is None):
            raise ValueError("Attempt needs exactly one of response or error")

    def result(self) -> httpx.Response:
        """Return the response, or re-raise the transport error."""
        if self.response is not None:
            return self.response
        raise self.error  # type: ignore[misc]

    def describe(self) -> str:
        if self.response is not None:
            return str(self.response.status_code)
        return f"{type(self.error).__name__}: {self.error}"


def retry_on_unexpected_status(attempt: Attempt) -> bool:
    """Retry timeouts and statuses classified as unexpected.

    401 and 404 are terminal and never retried, nor are connection errors
    other than timeouts.
    """
    if attempt.response is None:
        return isinstance(attempt.error, httpx.TimeoutException)
    return classify_status(attempt.response.status_code) is BadStatusError


def retry_on_timeout_or_failure(attempt: Attempt) -> bool:
    """Retry timeouts and every non-2xx status."""
    if attempt.response is None:
        return isinstance(attempt.error, httpx.TimeoutException)
    return not attempt.response.is_success


def never_retry(attempt: Attempt) -> bool:
    return False


@dataclass(frozen=True)
class RetryPolicy:
    """Capped exponential backoff without jitter.

    Up to ``max_attempts`` tries in total. Before retry ``i`` (0-indexed)
    the policy sleeps ``base_interval * 2 ** i`` seconds, so a policy that
    always retries blocks for at most ``base_interval * (2 ** (max_attempts - 1) - 1)``
    seconds plus the time spent in the attempts themselves.

    Args:
        base_interval: Delay before the first retry, in seconds (default: 0.5)
        max_attempts: Total number of tries, at least 1 (default: 10)
        should_retry: Predicate deciding whether an attempt is retried
        sleep: Blocking sleep function, replaceable in tests
    """

    base_interval: float = 0.5
    max_attempts: int = 10
    should_retry: Callable[[Attempt], bool] = retry_on_unexpected_status
    sleep: Callable[[float], None] = field(default=time.sleep, repr=False, compare=False)

    def __post_init__(self) -> None:
        if self.max_attempts < 1:
            raise ValueError(f"max_attempts must be at least 1, got {self.max_attempts}")
        if self.base_interval < 0:
            raise ValueError(f"base_interval must not be negative, got {self.base_interval}")

    def with_predicate(self, should_retry: Callable[[Attempt], bool]) -> "RetryPolicy":
        """Same schedule, different predicate."""
        return replace(self, should_retry=should_retry)

    def single_attempt(self) -> "RetryPolicy":
        """Policy for non-idempotent writes: one try, no retry."""
        return replace(self, max_attempts=1, should_retry=never_retry)

    def backoff_delay(self, retry_number: int) -> float:
        """Calculate exponential backoff delay.

        Uses formula: base_interval * (2 ** retry_number)
        Default backoff sequence: 0.5, 1, 2, 4, 8 ... seconds

        Args:
            retry_number: Index of the retry about to happen (0-indexed)

        Returns:
            Delay in seconds
        """
        return self.base_interval * (2**retry_number)

    def execute(self, action: Callable[[], httpx.Response], *, description: str = "request") -> httpx.Response:
        """Run ``action`` until the predicate accepts its outcome or attempts run out.

        ``action`` must be safe to invoke more than once. The last outcome is
        surfaced unchanged: its response is returned, its transport error is
        re-raised.

        Args:
            action: Sends one request; returns a response or raises ``httpx.TransportError``
            description: Label used in retry log lines, e.g. ``"GET https://..."``

        Returns:
            HTTP response of the last attempt

        Raises:
            httpx.TransportError: If the last attempt failed below HTTP
        """
        attempt_index = 0
        while True:
            try:
                attempt = Attempt(response=action())
            except httpx.TransportError as e:
                attempt = Attempt(error=e)

            is_last = attempt_index + 1 >= self.max_attempts
            if is_last or not self.should_retry(attempt):
                return attempt.result()

            delay = self.backoff_delay(attempt_index)
            logger.warning(
                f"{description} failed with {attempt.describe()}, "
                f"retrying in {delay}s (attempt {attempt_index + 1}/{self.max_attempts})"
            )

            if attempt.response is not None:
                attempt.response.close()

            self.sleep(delay)
            attempt_index += 1


DEFAULT_RETRY_POLICY = RetryPolicy()
