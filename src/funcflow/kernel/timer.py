"""Cancellable, refreshable single-shot timer built on the asyncio loop."""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from enum import Enum
from typing import Any

from loguru import logger

from funcflow.kernel.errors import InvalidStateError


class TimerState(str, Enum):
    ARMED = "armed"
    CANCELLED = "cancelled"
    FIRED = "fired"


class ScopedTimer:
    """Invoke a callback once after ``duration`` seconds unless cancelled first.

    The timer arms on construction and owns exactly one ``asyncio.TimerHandle``
    while armed. The handle is released when the timer fires or is cancelled.

    ``refresh()`` and ``cancel()`` raise ``InvalidStateError`` once the timer is
    no longer armed. A zero duration still defers the callback to a later loop
    iteration.
    """

    def __init__(
        self,
        duration: float,
        on_fire: Callable[[], Any],
        *,
        loop: asyncio.AbstractEventLoop | None = None,
    ) -> None:
        if duration < 0:
            raise ValueError(f"Timer duration must be non-negative, got {duration}")
        self._duration = duration
        self._on_fire = on_fire
        self._loop = loop or asyncio.get_running_loop()
        self._state = TimerState.ARMED
        self._started_at = self._loop.time()
        self._handle: asyncio.TimerHandle | None = self._loop.call_later(duration, self._fire)
        logger.debug("Timer armed for {}s", duration)

    @classmethod
    def schedule(cls, duration: float, on_fire: Callable[[], Any]) -> ScopedTimer:
        """Arm a new timer on the running loop."""
        return cls(duration, on_fire)

    @property
    def state(self) -> TimerState:
        return self._state

    @property
    def armed(self) -> bool:
        return self._state is TimerState.ARMED

    @property
    def duration(self) -> float:
        return self._duration

    @property
    def elapsed(self) -> float:
        """Seconds since the timer was last armed or refreshed."""
        return self._loop.time() - self._started_at

    @property
    def remaining(self) -> float:
        """Seconds until the callback fires, ``0.0`` once the timer is not armed."""
        if not self.armed:
            return 0.0
        return max(0.0, self._duration - self.elapsed)

    def refresh(self) -> None:
        """Reset the remaining wait back to the full duration."""
        self._require_armed("refresh")
        self._release()
        self._started_at = self._loop.time()
        self._handle = self._loop.call_later(self._duration, self._fire)
        logger.debug("Timer refreshed for {}s", self._duration)

    def cancel(self) -> None:
        """Permanently disarm the timer; the callback will never run."""
        self._require_armed("cancel")
        self._state = TimerState.CANCELLED
        self._release()
        logger.debug("Timer cancelled")

    def _require_armed(self, operation: str) -> None:
        if self._state is not TimerState.ARMED:
            raise InvalidStateError(f"Cannot {operation} a timer that is {self._state.value}", self._state)

    def _release(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def _fire(self) -> None:
        # The loop may already have queued this callback when cancel() ran.
        if self._state is not TimerState.ARMED:
            return
        self._state = TimerState.FIRED
        self._handle = None
        logger.debug("Timer fired after {}s", self._duration)
        self._on_fire()

    def __repr__(self) -> str:
        return f"ScopedTimer(duration={self._duration!r}, state={self._state.value!r})"
