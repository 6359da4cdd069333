"""Monotonic clocks and absolute deadlines.

A creation attempt computes one absolute deadline and hands the same object
to the create request and to readiness polling.
"""

from __future__ import annotations

import time
from typing import Protocol


class Clock(Protocol):
    """Monotonic time source."""

    def monotonic(self) -> float: ...

    def sleep(self, seconds: float) -> None: ...


class SystemClock:
    """Clock backed by ``time.monotonic`` and ``time.sleep``."""

    def monotonic(self) -> float:
        return time.monotonic()

    def sleep(self, seconds: float) -> None:
        time.sleep(seconds)


class Deadline:
    """An absolute point on a monotonic clock.

    Attributes:
        expires_at: Monotonic timestamp at which the budget runs out.
        budget_seconds: The relative budget this deadline was created from.

    Example:
        >>> deadline = Deadline.after(30.0, SystemClock())
        >>> deadline.expired()
        False
    """

    def __init__(self, expires_at: float, budget_seconds: float, clock: Clock) -> None:
        self.expires_at = expires_at
        self.budget_seconds = budget_seconds
        self._clock = clock

    @classmethod
    def after(cls, seconds: float, clock: Clock) -> Deadline:
        """Create a deadline ``seconds`` from now."""
        return cls(clock.monotonic() + seconds, seconds, clock)

    @property
    def clock(self) -> Clock:
        return self._clock

    def remaining(self) -> float:
        """Seconds left before expiry, never negative."""
        return max(0.0, self.expires_at - self._clock.monotonic())

    def expired(self) -> bool:
        return self._clock.monotonic() >= self.expires_at

    def __repr__(self) -> str:
        return f"Deadline(expires_at={self.expires_at!r}, budget_seconds={self.budget_seconds!r})"
