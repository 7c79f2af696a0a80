"""Retrying combinators: with_retries, retrying, RetryExecutor."""

from __future__ import annotations

import asyncio
import functools
from collections.abc import Awaitable, Callable, Mapping
from typing import Any, TypeVar

from loguru import logger

from funcflow.combinators.types import RetryOptions
from funcflow.kernel.ports import SleepPort
from funcflow.kernel.state import RetryState

T = TypeVar("T")

OptionsLike = RetryOptions | Mapping[str, Any] | None


class RetryExecutor:
    """Run async operations, retrying them when they raise.

    Each call to ``run`` drives its own ``RetryState`` machine:

        attempting --ok--> succeeded
        attempting --error, bound reached--> failed (error re-raised)
        attempting --error, delay > 0--> waiting --sleep(delay)--> attempting
        attempting --error, delay == 0--> attempting

    The first attempt is never delayed, and the delay is multiplied by
    ``backoff`` after every wait. Only ``Exception`` subclasses are retried;
    cancellation propagates at once.

    Args:
        options: ``RetryOptions``, a mapping of option values, or None for defaults
        sleep: Port used to wait between attempts (defaults to ``asyncio.sleep``)
    """

    def __init__(self, options: OptionsLike = None, *, sleep: SleepPort | None = None) -> None:
        self.options = RetryOptions.coerce(options)
        self._sleep: SleepPort = sleep or asyncio.sleep

    async def run(self, fn: Callable[[], Awaitable[T]]) -> T:
        max_retries = self.options.max_retries
        state = RetryState.start(self.options.delay)
        value: T | None = None

        while not state.done:
            if state.kind == "waiting":
                await self._sleep(state.delay)
                state = state.waited(self.options.backoff)
                continue
            try:
                value = await fn()
            except Exception as exc:
                state = state.failed(exc, max_retries)
                if state.kind != "failed":
                    logger.debug(
                        "Attempt {}/{} raised {}, retrying in {}s",
                        state.attempt,
                        max_retries,
                        type(exc).__name__,
                        state.delay if state.kind == "waiting" else 0,
                    )
            else:
                state = state.succeeded()

        if state.kind == "failed":
            raise state.error  # type: ignore[misc]
        return value  # type: ignore[return-value]


async def with_retries(
    fn: Callable[[], Awaitable[T]],
    options: OptionsLike = None,
    *,
    sleep: SleepPort | None = None,
) -> T:
    """Execute ``fn``, retrying if it raises.

    Args:
        fn: Zero-argument async operation
        options: Retry options; defaults are ``max_retries=3, delay=0, backoff=1``
        sleep: Optional sleep port used between attempts

    Returns:
        The value of the first successful attempt. The last error is
        re-raised unchanged once ``max_retries`` attempts have failed.
    """
    return await RetryExecutor(options, sleep=sleep).run(fn)


def retrying(
    options: OptionsLike = None,
    *,
    sleep: SleepPort | None = None,
) -> Callable[[Callable[..., Awaitable[T]]], Callable[..., Awaitable[T]]]:
    """Decorator form of ``with_retries`` for async functions."""
    executor = RetryExecutor(options, sleep=sleep)

    def decorator(fn: Callable[..., Awaitable[T]]) -> Callable[..., Awaitable[T]]:
        @functools.wraps(fn)
        async def wrapper(*args: Any, **kwargs: Any) -> T:
            return await executor.run(lambda: fn(*args, **kwargs))

        return wrapper

    return decorator
