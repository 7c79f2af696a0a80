"""Error types raised by funcflow itself.

Errors raised by wrapped operations are never wrapped in these types; they
reach the caller unchanged.
"""

from __future__ import annotations

from typing import Any


class FuncflowError(Exception):
    """Base class for errors originating in funcflow."""


class InvalidStateError(FuncflowError):
    """Error raised when operating on a timer that is no longer armed.

    The offending state is preserved for debugging.
    """

    def __init__(self, message: str, state: Any) -> None:
        self.state = state
        super().__init__(message)

    def __repr__(self) -> str:
        return f"InvalidStateError({super().__repr__()}, state={self.state!r})"
