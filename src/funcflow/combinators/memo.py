"""Memoizing combinators: once, once_changed, memoize."""

from __future__ import annotations

import functools
from collections.abc import Callable, Hashable, Mapping
from types import MappingProxyType
from typing import Any, Generic, TypeVar

from funcflow.kernel.keys import KeyFunc, default_key

T = TypeVar("T")


class Once(Generic[T]):
    """Special case of memoize: the wrapped function runs only once.

    Every later call returns the first result, whatever its arguments.
    """

    def __init__(self, fn: Callable[..., T]) -> None:
        self._fn = fn
        self._ran = False
        self._value: T | None = None
        functools.update_wrapper(self, fn, updated=())

    @property
    def ran(self) -> bool:
        return self._ran

    def __call__(self, *args: Any, **kwargs: Any) -> T:
        if not self._ran:
            self._value = self._fn(*args, **kwargs)
            self._ran = True
        return self._value  # type: ignore[return-value]


class OnceChanged(Generic[T]):
    """Special case of memoize: runs only if the arguments changed.

    Only the immediately preceding call is compared; a key seen earlier but
    not last triggers a new invocation.
    """

    def __init__(self, fn: Callable[..., T], key: KeyFunc | None = None) -> None:
        self._fn = fn
        self._key = key or default_key
        self._ran = False
        self._prev_key: Hashable = None
        self._value: T | None = None
        functools.update_wrapper(self, fn, updated=())

    def __call__(self, *args: Any, **kwargs: Any) -> T:
        key = self._key(*args, **kwargs)
        if self._ran and key == self._prev_key:
            return self._value  # type: ignore[return-value]
        value = self._fn(*args, **kwargs)
        self._value, self._prev_key, self._ran = value, key, True
        return value


class Memoize(Generic[T]):
    """Store the result of every distinct call.

    Keys are derived with ``default_key`` unless ``key`` is given. Entries are
    never evicted, so the cache grows with every distinct key; prefer an
    explicit ``key`` or a bounded cache for high-cardinality arguments.
    Errors raised by the wrapped function are not cached.
    """

    def __init__(self, fn: Callable[..., T], key: KeyFunc | None = None) -> None:
        self._fn = fn
        self._key = key or default_key
        self._cache: dict[Hashable, T] = {}
        functools.update_wrapper(self, fn, updated=())

    @property
    def cache(self) -> Mapping[Hashable, T]:
        """Read-only view of the stored results."""
        return MappingProxyType(self._cache)

    @property
    def size(self) -> int:
        """Number of stored results."""
        return len(self._cache)

    def __call__(self, *args: Any, **kwargs: Any) -> T:
        key = self._key(*args, **kwargs)
        if key in self._cache:
            return self._cache[key]
        value = self._fn(*args, **kwargs)
        self._cache[key] = value
        return value


def once(fn: Callable[..., T]) -> Once[T]:
    """Create a function that is executed only once."""
    return Once(fn)


def once_changed(fn: Callable[..., T], key: KeyFunc | None = None) -> OnceChanged[T]:
    """Create a function that runs only if the args changed versus the previous call."""
    return OnceChanged(fn, key=key)


def memoize(fn: Callable[..., T], key: KeyFunc | None = None) -> Memoize[T]:
    """Create a function that stores the result of each distinct call."""
    return Memoize(fn, key=key)
