"""Kernel layer - primitives the combinators are built on."""

from funcflow.kernel.errors import FuncflowError, InvalidStateError
from funcflow.kernel.keys import KeyFunc, default_key
from funcflow.kernel.ports import SleepPort, TimerPort
from funcflow.kernel.state import RetryKind, RetryState
from funcflow.kernel.timer import ScopedTimer, TimerState

__all__ = [
    # Errors
    "FuncflowError",
    "InvalidStateError",
    # Keys
    "KeyFunc",
    "default_key",
    # Ports
    "SleepPort",
    "TimerPort",
    # Retry state machine
    "RetryKind",
    "RetryState",
    # Timer
    "ScopedTimer",
    "TimerState",
]
