"""Configuration types for resilient HTTP clients."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Mapping


@dataclass(slots=True, frozen=True)
class RetryPolicy:
    """Attempt ceiling and delay schedule applied by the request gateway."""

    max_attempts: int = 5
    base_delay: float = 1.0
    backoff_factor: float = 2.0
    max_delay: float = 30.0
    retry_statuses: frozenset[int] = field(default_factory=lambda: frozenset({429}))
    retry_transport_failures: bool = False
    respect_retry_after: bool = True

    def __post_init__(self) -> None:
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        if self.base_delay < 0 or self.max_delay < 0:
            raise ValueError("delays must be non-negative")

    def should_retry_status(self, status_code: int) -> bool:
        return status_code in self.retry_statuses

    def delay_for(self, attempt: int, *, retry_after: float | None = None) -> float:
        """Return the pause after the 1-based ``attempt`` failed."""

        if retry_after is not None and self.respect_retry_after:
            return min(max(retry_after, 0.0), self.max_delay)
        return min(self.base_delay * self.backoff_factor ** (attempt - 1), self.max_delay)


# Listing calls wait out long throttling windows with a flat delay.
LISTING_RETRY = RetryPolicy(max_attempts=10, base_delay=2.0, backoff_factor=1.0)
# Per-entity calls give up sooner and also retry dropped connections.
ENTITY_RETRY = RetryPolicy(max_attempts=5, base_delay=1.0, retry_transport_failures=True)
# A create whose connection dropped may already have been applied; only throttling is retried.
CREATE_RETRY = RetryPolicy(max_attempts=5, base_delay=1.0)


@dataclass(slots=True, frozen=True)
class RateLimit:
    max_calls: int
    per_seconds: float


@dataclass(slots=True, frozen=True)
class ResilienceConfig:
    name: str
    base_url: str | None = None
    timeout_seconds: float = 30.0
    # handed to httpx's transport, which only retries failed connects
    connect_retries: int = 2
    ratelimit: RateLimit | None = None
    default_headers: Mapping[str, str] | None = None
