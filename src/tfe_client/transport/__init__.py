"""Transport layer: retry policy shared by every network call.

The HTTP primitive itself is an ``httpx.BaseTransport`` injected into the
client at construction (``httpx.HTTPTransport`` in production,
``httpx.MockTransport`` in tests). This package adds retry with capped
exponential backoff on top of it.

Modules:
    retry: RetryPolicy, retry predicates and the process-wide default policy

Example:
    ```python
    from tfe_client.transport import RetryPolicy

    patient = RetryPolicy(base_interval=1.0, max_attempts=5)
    client = Client(token, retry_policy=patient)
    ```
"""

from tfe_client.transport.retry import (
    DEFAULT_RETRY_POLICY,
    Attempt,
    RetryPolicy,
    never_retry,
    retry_on_timeout_or_failure,
    retry_on_unexpected_status,
)

__all__ = [
    "DEFAULT_RETRY_POLICY",
    "Attempt",
    "RetryPolicy",
    "never_retry",
    "retry_on_timeout_or_failure",
    "retry_on_unexpected_status",
]
