"""Bounded polling for conditions that may need several attempts."""

from __future__ import annotations

import time
from typing import TYPE_CHECKING, Protocol, TypeVar

if TYPE_CHECKING:
    from collections.abc import Callable


T = TypeVar("T")


class Clock(Protocol):
    def __call__(self) -> float: ...


class Sleeper(Protocol):
    def __call__(self, seconds: float, /) -> None: ...


class PollTimeoutError(TimeoutError):
    """Raised when a polled condition is still unmet after the time budget."""


def poll_immediate(
    condition: Callable[[], T | None],
    *,
    interval: float,
    timeout: float,
    clock: Clock = time.monotonic,
    sleep: Sleeper = time.sleep,
) -> T:
    """Call ``condition`` now and then every ``interval`` seconds until it returns
    something truthy, and return that result.

    Exceptions from ``condition`` propagate and end the loop. Once ``timeout``
    seconds have elapsed without success, raise ``PollTimeoutError``.
    """

    if interval <= 0 or timeout <= 0:
        raise ValueError("interval and timeout must be positive")

    deadline = clock() + timeout
    while True:
        result = condition()
        if result:
            return result
        remaining = deadline - clock()
        if remaining <= 0:
            raise PollTimeoutError(f"condition not met within {timeout:g}s")
        sleep(min(interval, remaining))
