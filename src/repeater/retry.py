"""Retry executor driving an operation under a backoff policy."""

from __future__ import annotations

import functools
import logging as py_logging
import threading
import time
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import ParamSpec, TypeVar

from repeater.errors import RetryCancelled
from repeater.policy import DEFAULT_INFINITE_POLICY, DEFAULT_POLICY, BackoffPolicy

T = TypeVar("T")
P = ParamSpec("P")

Sleep = Callable[[float], None]

logger = py_logging.getLogger(__name__)


@dataclass
class RetrySession:
    """Mutable counters for a single retried call."""

    policy: BackoffPolicy
    attempt_count: int = 0
    current_delay: float = field(init=False)

    def __post_init__(self) -> None:
        self.current_delay = self.policy.initial_delay

    @property
    def exhausted(self) -> bool:
        return not self.policy.unlimited and self.attempt_count >= self.policy.max_retries

    def record_failure(self) -> float | None:
        """Return the wait before the next attempt, or None once the budget is spent."""
        if self.exhausted:
            return None
        # The first retry waits initial_delay as-is; growth starts from the second.
        if self.attempt_count > 0:
            self.current_delay = self.policy.next_delay(self.current_delay)
        self.attempt_count += 1
        return self.current_delay


class Repeater:
    def __init__(self, policy: BackoffPolicy = DEFAULT_POLICY, *, sleep: Sleep = time.sleep) -> None:
        self.policy = policy
        self.sleep = sleep

    def repeat(self, operation: Callable[[], T]) -> T:
        """Call ``operation`` until it returns, re-raising its last error when retries run out."""
        session = RetrySession(self.policy)
        while True:
            try:
                return operation()
            except Exception as exc:
                delay = session.record_failure()
                if delay is None:
                    logger.warning(
                        "Retries exhausted: %s",
                        exc,
                        extra={"attempt": session.attempt_count},
                    )
                    raise
                logger.debug(
                    "Attempt failed, retrying: %s",
                    exc,
                    extra={"attempt": session.attempt_count, "delay": delay},
                )
            self.sleep(delay)


def run_with_retry(
    operation: Callable[[], T],
    *,
    policy: BackoffPolicy,
    sleep: Sleep = time.sleep,
) -> T:
    return Repeater(policy, sleep=sleep).repeat(operation)


def retrying(
    policy: BackoffPolicy = DEFAULT_POLICY,
    *,
    sleep: Sleep = time.sleep,
) -> Callable[[Callable[P, T]], Callable[P, T]]:
    """Decorate a function so each call is retried under ``policy``.

    Usage::

        @retrying(new_policy(0.5, 10.0, 0.0, 2.0, 3))
        def fetch_manifest(url: str) -> bytes:
            ...
    """
    repeater = Repeater(policy, sleep=sleep)

    def decorator(func: Callable[P, T]) -> Callable[P, T]:
        @functools.wraps(func)
        def wrapper(*args: P.args, **kwargs: P.kwargs) -> T:
            return repeater.repeat(functools.partial(func, *args, **kwargs))

        return wrapper

    return decorator


def cancellable_sleep(event: threading.Event) -> Sleep:
    """Build a sleep that raises RetryCancelled as soon as ``event`` is set."""

    def _sleep(seconds: float) -> None:
        if event.wait(seconds):
            raise RetryCancelled(
                "Retry cancelled while waiting for the next attempt.",
                hint="Clear the cancellation event before retrying again.",
            )

    return _sleep


def default() -> Repeater:
    return Repeater(DEFAULT_POLICY)


def default_infinite() -> Repeater:
    return Repeater(DEFAULT_INFINITE_POLICY)
