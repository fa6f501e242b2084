"""Request gateway turning HTTP exchanges into typed outcomes.

Expected transient conditions (throttling, 5xx, dropped connections) are never
raised to the caller. They come back as one of the outcome types below, after
the gateway has applied its :class:`~shelfsync.config.http_resilience.RetryPolicy`.
Callers decide whether a non-success outcome is fatal for them.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

import httpx
from tenacity import AsyncRetrying, retry_if_result, stop_after_attempt

from shelfsync.config.http_resilience import RetryPolicy

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable, Mapping

    from tenacity import RetryCallState

    from .http_resilience import ResilientClient

    Sleep = Callable[[float], Awaitable[None]]

log = getLogger(__name__)

_DETAIL_LIMIT = 200


@dataclass(frozen=True, slots=True)
class Success:
    payload: object
    status: int = 200


@dataclass(frozen=True, slots=True)
class ClientError:
    status: int
    detail: str = ""


@dataclass(frozen=True, slots=True)
class RateLimited:
    retry_after: float | None = None
    status: int = 429


@dataclass(frozen=True, slots=True)
class ServerError:
    status: int
    detail: str = ""


@dataclass(frozen=True, slots=True)
class TransportFailure:
    cause: Exception


type Outcome = Success | ClientError | RateLimited | ServerError | TransportFailure


def describe(outcome: Outcome) -> str:
    """Short human-readable form of a non-success outcome for log lines."""

    match outcome:
        case Success(status=status):
            return f"ok ({status})"
        case RateLimited():
            return "rate limited (429)"
        case ClientError(status=status, detail=detail) | ServerError(status=status, detail=detail):
            return f"HTTP {status}: {detail}" if detail else f"HTTP {status}"
        case TransportFailure(cause=cause):
            return f"transport failure: {cause!r}"


class RetryingHttpGateway:
    """Execute requests through a :class:`ResilientClient` with bounded retries."""

    def __init__(
        self,
        client: ResilientClient,
        *,
        policy: RetryPolicy | None = None,
        sleep: Sleep = asyncio.sleep,
    ) -> None:
        self._client = client
        self._policy = policy or RetryPolicy()
        self._sleep = sleep

    @property
    def name(self) -> str:
        return self._client.config.name

    async def execute(
        self,
        method: str,
        url: str,
        body: object | None = None,
        *,
        params: Mapping[str, str | int] | None = None,
        policy: RetryPolicy | None = None,
    ) -> Outcome:
        active = policy or self._policy

        def is_retryable(outcome: Outcome) -> bool:
            match outcome:
                case RateLimited(status=status) | ServerError(status=status) | ClientError(
                    status=status
                ):
                    return active.should_retry_status(status)
                case TransportFailure():
                    return active.retry_transport_failures
                case _:
                    return False

        def wait(state: RetryCallState) -> float:
            retry_after = None
            if state.outcome is not None:
                last = state.outcome.result()
                if isinstance(last, RateLimited):
                    retry_after = last.retry_after
            return active.delay_for(state.attempt_number, retry_after=retry_after)

        def before_sleep(state: RetryCallState) -> None:
            delay = state.next_action.sleep if state.next_action else 0.0
            last = state.outcome.result() if state.outcome else None
            log.debug(
                "%s %s %s: %s, retrying in %.1fs (attempt %s/%s)",
                self.name,
                method,
                url,
                describe(last) if last is not None else "unknown",
                delay,
                state.attempt_number,
                active.max_attempts,
            )

        def give_up(state: RetryCallState) -> Outcome:
            if state.outcome is None:  # pragma: no cover - tenacity always records one
                raise RuntimeError("retry loop finished without an outcome")
            return state.outcome.result()

        retrying = AsyncRetrying(
            stop=stop_after_attempt(active.max_attempts),
            wait=wait,
            retry=retry_if_result(is_retryable),
            sleep=self._sleep,
            before_sleep=before_sleep,
            retry_error_callback=give_up,
        )
        outcome: Outcome = await retrying(self._attempt, method, url, body, params)

        if not isinstance(outcome, Success):
            log.warning("%s %s %s failed: %s", self.name, method, url, describe(outcome))
        return outcome

    async def _attempt(
        self,
        method: str,
        url: str,
        body: object | None,
        params: Mapping[str, str | int] | None,
    ) -> Outcome:
        try:
            if body is None:
                response = await self._client.request(method, url, params=params)
            else:
                response = await self._client.request(method, url, params=params, json=body)
        except httpx.HTTPError as exc:
            return TransportFailure(exc)

        status = response.status_code
        if status == httpx.codes.TOO_MANY_REQUESTS:
            return RateLimited(retry_after=_parse_retry_after(response.headers.get("Retry-After")))
        if status >= httpx.codes.INTERNAL_SERVER_ERROR:
            return ServerError(status, response.text[:_DETAIL_LIMIT])
        if status >= httpx.codes.BAD_REQUEST:
            return ClientError(status, response.text[:_DETAIL_LIMIT])
        if not response.content:
            return Success(None, status)
        try:
            payload = response.json()
        except ValueError as exc:
            return TransportFailure(exc)
        return Success(payload, status)


def _parse_retry_after(value: str | None) -> float | None:
    if value is None:
        return None
    try:
        return float(value)
    except ValueError:
        # HTTP-date values fall back to the policy backoff
        return None
