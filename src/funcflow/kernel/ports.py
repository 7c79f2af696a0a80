"""Port protocols for funcflow - collaborators the combinators consume."""

from __future__ import annotations

from typing import Protocol


class SleepPort(Protocol):
    """Suspends the caller for a duration (seconds) and then resumes it.

    ``asyncio.sleep`` satisfies this port.
    """

    async def __call__(self, delay: float, /) -> None: ...


class TimerPort(Protocol):
    """
    Cancellable, refreshable single-shot timer.
    Completion is delivered to the callback registered at construction.
    """

    def refresh(self) -> None:
        """Restart the wait from the full duration."""
        ...

    def cancel(self) -> None:
        """Permanently disarm the timer."""
        ...
