"""Main scheduling timeline for deferred layout work."""

from __future__ import annotations

import heapq
import itertools
from dataclasses import dataclass, field
from typing import Any, Callable, Protocol, runtime_checkable


@runtime_checkable
class Timeline(Protocol):
    """Anything that can run a callback after a delay on the main thread.

    Callbacks must never run inline with the call that scheduled them, even
    when the delay is zero.
    """

    def call_later(self, delay: float, callback: Callable[..., Any], *args: Any) -> None:
        ...


@dataclass(order=True)
class _Timer:
    deadline: float
    sequence: int
    callback: Callable[..., Any] = field(compare=False)
    args: tuple = field(compare=False, default=())


class RunLoop:
    """Single-threaded timer queue driven by a virtual clock.

    Nothing runs until the loop is advanced, which makes scheduling fully
    deterministic. Timers with equal deadlines fire in the order they were
    scheduled; timers scheduled while advancing fire in the same advance if
    they fall due before its end.

    Example:
        loop = RunLoop()
        loop.call_later(0.5, print, "tick")
        loop.advance(0.5)  # prints "tick"
    """

    def __init__(self, start_time: float = 0.0) -> None:
        self.time = float(start_time)
        self._timers: list[_Timer] = []
        self._sequence = itertools.count()

    def call_later(self, delay: float, callback: Callable[..., Any], *args: Any) -> None:
        if delay < 0:
            raise ValueError(f"Delay must be non-negative, got {delay!r}")
        heapq.heappush(self._timers, _Timer(self.time + delay, next(self._sequence), callback, args))

    def call_soon(self, callback: Callable[..., Any], *args: Any) -> None:
        self.call_later(0.0, callback, *args)

    @property
    def pending(self) -> int:
        return len(self._timers)

    @property
    def next_deadline(self) -> float | None:
        return self._timers[0].deadline if self._timers else None

    def advance(self, seconds: float = 0.0) -> int:
        """Move the clock forward, firing every timer that falls due.

        Args:
            seconds: How far to move the clock

        Returns:
            Number of callbacks fired
        """
        if seconds < 0:
            raise ValueError(f"Cannot advance by a negative time, got {seconds!r}")
        return self._run_until(self.time + seconds)

    def _run_until(self, target: float, limit: int | None = None) -> int:
        fired = 0
        while self._timers and self._timers[0].deadline <= target:
            if limit is not None and fired >= limit:
                raise RuntimeError(f"Run loop did not go idle after {limit} callbacks")
            timer = heapq.heappop(self._timers)
            self.time = max(self.time, timer.deadline)
            timer.callback(*timer.args)
            fired += 1
        self.time = target
        return fired

    def run_until_idle(self, max_callbacks: int = 100_000) -> int:
        """Advance until no timers remain.

        Raises:
            RuntimeError: If callbacks keep rescheduling beyond max_callbacks
        """
        fired = 0
        while self._timers:
            deadline = max(self._timers[0].deadline, self.time)
            fired += self._run_until(deadline, max_callbacks - fired)
        return fired


_main_loop: Timeline | None = None


def get_main_loop() -> Timeline:
    """Return the process-wide main loop, creating a RunLoop on first use."""
    global _main_loop
    if _main_loop is None:
        _main_loop = RunLoop()
    return _main_loop


def set_main_loop(loop: Timeline | None) -> Timeline | None:
    """Replace the process-wide main loop.

    Returns:
        The previous main loop (None if none was created yet)
    """
    global _main_loop
    previous = _main_loop
    _main_loop = loop
    return previous
