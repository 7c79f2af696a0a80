"""Single-flight sharing of an async operation."""

from __future__ import annotations

import asyncio
import functools
from collections.abc import Awaitable, Callable
from typing import Any, Generic, TypeVar

from loguru import logger

T = TypeVar("T")


class SingleFlight(Generic[T]):
    """Coalesce concurrent calls to an async function onto one shared task.

    Semantics:
        - No flight pending: start ``fn`` in a new task and store it
        - Flight pending: join the stored task, ``fn`` is not called
        - Every caller gets its own shielded view of the task, so one caller
          cancelling (or timing out) leaves the flight running for the others
        - The slot is cleared inside the task as ``fn`` settles, before any
          awaiting caller resumes, so a call made after settlement starts anew
        - Errors reach every awaiting caller unchanged and are never cached

    Only the arguments of the call that starts a flight are forwarded to
    ``fn``; arguments of joining calls are ignored.

    Example:
        fetch = shared(load_settings)
        t1 = fetch()
        t2 = fetch()
        assert await t1 == await t2  # one load_settings() call
    """

    def __init__(self, fn: Callable[..., Awaitable[T]]) -> None:
        self._fn = fn
        self._task: asyncio.Task[T] | None = None
        functools.update_wrapper(self, fn, updated=())

    @property
    def pending(self) -> bool:
        return self._task is not None

    def __call__(self, *args: Any, **kwargs: Any) -> asyncio.Future[T]:
        if self._task is not None:
            logger.debug("Joining pending flight of {}", self._name)
            return asyncio.shield(self._task)
        logger.debug("Starting flight of {}", self._name)
        task = asyncio.ensure_future(self._run(*args, **kwargs))
        # Loop shutdown may cancel the task before it ever enters _run.
        task.add_done_callback(self._release)
        self._task = task
        return asyncio.shield(task)

    async def _run(self, *args: Any, **kwargs: Any) -> T:
        try:
            return await self._fn(*args, **kwargs)
        finally:
            self._task = None

    def _release(self, task: asyncio.Task[T]) -> None:
        if self._task is task:
            self._task = None

    @property
    def _name(self) -> str:
        return getattr(self._fn, "__qualname__", repr(self._fn))


def shared(fn: Callable[..., Awaitable[T]]) -> SingleFlight[T]:
    """Create a function whose concurrent calls share one pending invocation."""
    return SingleFlight(fn)
