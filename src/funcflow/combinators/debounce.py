"""Debouncing combinators: debounce, cancellable_debounce."""

from __future__ import annotations

import asyncio
import functools
import inspect
from collections.abc import Awaitable, Callable, Mapping
from typing import Any, Generic, TypeVar

from loguru import logger

from funcflow.combinators.types import DebounceOptions
from funcflow.kernel.ports import TimerPort
from funcflow.kernel.timer import ScopedTimer

T = TypeVar("T")

Delay = float | DebounceOptions | Mapping[str, Any]


def _debounce_options(delay: Delay) -> DebounceOptions:
    if isinstance(delay, (int, float)):
        return DebounceOptions(delay=delay)
    return DebounceOptions.coerce(delay)


class Debounce(Generic[T]):
    """Delay execution until ``delay`` seconds have passed since the last call.

    Calls made while a window is open share one pending result and roll the
    window by another full ``delay``. Each call returns its own shielded view
    of that result, so a caller that cancels its future (or times out) does
    not affect the other callers of the window. When the timer fires the
    window closes first, then the wrapped function runs in a task and its
    value or error settles every caller's future. A call made after the
    window closed opens a new one.

    A zero delay still defers execution to a later loop iteration. If the
    wrapped function raises and no caller awaits its future, asyncio reports
    "Future exception was never retrieved" when that future is collected.

    Args:
        cb: Sync or async function to debounce
        delay: Quiet period in seconds, or a ``DebounceOptions``
    """

    def __init__(self, cb: Callable[..., T | Awaitable[T]], delay: Delay = 0.0) -> None:
        self._cb = cb
        self._options = _debounce_options(delay)
        self._timer: TimerPort | None = None
        self._future: asyncio.Future[T] | None = None
        self._args: tuple[Any, ...] = ()
        self._kwargs: dict[str, Any] = {}
        self._runners: set[asyncio.Task[None]] = set()
        functools.update_wrapper(self, cb, updated=())

    @property
    def delay(self) -> float:
        return self._options.delay

    @property
    def pending(self) -> bool:
        """Whether a debounce window is open."""
        return self._timer is not None and self._future is not None

    def __call__(self) -> asyncio.Future[T]:
        return self._schedule()

    def _schedule(self) -> asyncio.Future[T]:
        if self._timer is not None and self._future is not None:
            self._timer.refresh()
            logger.debug("Debounce window of {} rolled by {}s", self._name, self.delay)
            return asyncio.shield(self._future)

        loop = asyncio.get_running_loop()
        future: asyncio.Future[T] = loop.create_future()
        self._future = future
        self._timer = ScopedTimer(self.delay, functools.partial(self._fire, future), loop=loop)
        logger.debug("Debounce window of {} opened", self._name)
        return asyncio.shield(future)

    def _close(self) -> None:
        self._timer = None
        self._future = None
        self._args, self._kwargs = (), {}

    def _fire(self, future: asyncio.Future[T]) -> None:
        args, kwargs = self._args, self._kwargs
        self._close()
        logger.debug("Debounce window of {} closed, running", self._name)
        runner = asyncio.ensure_future(self._settle(future, args, kwargs))
        self._runners.add(runner)
        runner.add_done_callback(self._runners.discard)

    async def _settle(self, future: asyncio.Future[T], args: tuple[Any, ...], kwargs: dict[str, Any]) -> None:
        try:
            result = self._cb(*args, **kwargs)
            if inspect.isawaitable(result):
                result = await result
        except asyncio.CancelledError:
            future.cancel()
            raise
        except Exception as exc:
            if not future.done():
                future.set_exception(exc)
        else:
            if not future.done():
                future.set_result(result)  # type: ignore[arg-type]

    @property
    def _name(self) -> str:
        return getattr(self._cb, "__qualname__", repr(self._cb))


class CancellableDebounce(Debounce[T]):
    """Debounce that forwards call arguments and can be cancelled.

    The arguments of the most recent call in a window are the ones the wrapped
    function receives. ``cancel()`` drops an open window immediately; the
    futures already handed to callers of that window are left pending and
    never settle.
    """

    def __call__(self, *args: Any, **kwargs: Any) -> asyncio.Future[T]:  # type: ignore[override]
        self._args, self._kwargs = args, kwargs
        return self._schedule()

    def cancel(self) -> None:
        """Cancel the open window, if any. No-op when no window is open."""
        if self._timer is None:
            return
        self._timer.cancel()
        self._close()
        logger.debug("Debounce window of {} cancelled", self._name)


def debounce(cb: Callable[[], T | Awaitable[T]], delay: Delay = 0.0) -> Debounce[T]:
    """Prevent ``cb`` from running until ``delay`` seconds passed since the last call."""
    return Debounce(cb, delay)


def cancellable_debounce(cb: Callable[..., T | Awaitable[T]], delay: Delay = 0.0) -> CancellableDebounce[T]:
    """Like ``debounce``, but passes call arguments through and exposes ``cancel()``."""
    return CancellableDebounce(cb, delay)
