"""Backoff policy values and presets."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass

DEFAULT_INITIAL_DELAY = 0.1
DEFAULT_MAX_DELAY = 5.0
DEFAULT_LINEAR_GROWTH = 0.0
DEFAULT_EXPONENTIAL_GROWTH = 2.0
DEFAULT_MAX_RETRIES = 10


@dataclass(frozen=True)
class BackoffPolicy:
    """Delay growth and retry budget for a retried operation.

    Delays are in seconds. Each step computes
    ``min(max_delay, exponential_growth * (previous + linear_growth))``.
    ``max_retries == 0`` retries forever.
    """

    initial_delay: float = DEFAULT_INITIAL_DELAY
    max_delay: float = DEFAULT_MAX_DELAY
    linear_growth: float = DEFAULT_LINEAR_GROWTH
    exponential_growth: float = DEFAULT_EXPONENTIAL_GROWTH
    max_retries: int = DEFAULT_MAX_RETRIES

    @property
    def unlimited(self) -> bool:
        return self.max_retries == 0

    def next_delay(self, previous: float) -> float:
        return min(self.max_delay, self.exponential_growth * (previous + self.linear_growth))

    def delays(self) -> Iterator[float]:
        """Yield the waits a perpetually failing operation would see."""
        delay = self.initial_delay
        produced = 0
        while self.unlimited or produced < self.max_retries:
            yield delay
            produced += 1
            delay = self.next_delay(delay)


def new_policy(
    initial: float,
    maximum: float,
    linear: float,
    exponential: float,
    max_retries: int,
) -> BackoffPolicy:
    return BackoffPolicy(
        initial_delay=initial,
        max_delay=maximum,
        linear_growth=linear,
        exponential_growth=exponential,
        max_retries=max_retries,
    )


def new_infinite_policy(
    initial: float,
    maximum: float,
    linear: float,
    exponential: float,
) -> BackoffPolicy:
    return new_policy(initial, maximum, linear, exponential, 0)


DEFAULT_POLICY = BackoffPolicy()
DEFAULT_INFINITE_POLICY = new_infinite_policy(
    DEFAULT_INITIAL_DELAY,
    DEFAULT_MAX_DELAY,
    DEFAULT_LINEAR_GROWTH,
    DEFAULT_EXPONENTIAL_GROWTH,
)
