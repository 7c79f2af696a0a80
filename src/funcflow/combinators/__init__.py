"""Combinators - wrap an operation to add sharing, caching, debouncing or retries."""

from funcflow.combinators.debounce import CancellableDebounce, Debounce, cancellable_debounce, debounce
from funcflow.combinators.memo import Memoize, Once, OnceChanged, memoize, once, once_changed
from funcflow.combinators.retry import RetryExecutor, retrying, with_retries
from funcflow.combinators.shared import SingleFlight, shared
from funcflow.combinators.types import DebounceOptions, Options, RetryOptions

__all__ = [
    # Single-flight
    "SingleFlight",
    "shared",
    # Memoization
    "Once",
    "OnceChanged",
    "Memoize",
    "once",
    "once_changed",
    "memoize",
    # Debounce
    "Debounce",
    "CancellableDebounce",
    "debounce",
    "cancellable_debounce",
    # Retry
    "RetryExecutor",
    "with_retries",
    "retrying",
    # Options
    "Options",
    "RetryOptions",
    "DebounceOptions",
]
