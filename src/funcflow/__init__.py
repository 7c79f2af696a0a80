from loguru import logger

from .combinators import (
    CancellableDebounce,
    Debounce,
    DebounceOptions,
    Memoize,
    Once,
    OnceChanged,
    RetryExecutor,
    RetryOptions,
    SingleFlight,
    cancellable_debounce,
    debounce,
    memoize,
    once,
    once_changed,
    retrying,
    shared,
    with_retries,
)
from .kernel import (
    FuncflowError,
    InvalidStateError,
    KeyFunc,
    RetryState,
    ScopedTimer,
    SleepPort,
    TimerPort,
    TimerState,
    default_key,
)

# Library logging is opt-in: logger.enable("funcflow")
logger.disable("funcflow")

__all__ = [
    # Combinators
    "shared",
    "once",
    "once_changed",
    "memoize",
    "debounce",
    "cancellable_debounce",
    "with_retries",
    "retrying",
    "SingleFlight",
    "Once",
    "OnceChanged",
    "Memoize",
    "Debounce",
    "CancellableDebounce",
    "RetryExecutor",
    # Options
    "RetryOptions",
    "DebounceOptions",
    # Kernel
    "ScopedTimer",
    "TimerState",
    "RetryState",
    "KeyFunc",
    "default_key",
    "SleepPort",
    "TimerPort",
    # Errors
    "FuncflowError",
    "InvalidStateError",
]
