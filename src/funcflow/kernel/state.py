"""Retry state machine - pure and dependency-free."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Literal

from funcflow.kernel.errors import InvalidStateError

RetryKind = Literal["attempting", "waiting", "succeeded", "failed"]


@dataclass(frozen=True)
class RetryState:
    """
    State of one retried call.

    Kinds:
    - attempting: the operation is about to be (re)invoked
    - waiting: the last attempt failed and the executor sleeps for ``delay``
    - succeeded: an attempt returned a value (terminal)
    - failed: the attempt bound was reached; ``error`` is the last failure (terminal)

    Attributes:
        kind: Current machine state
        attempt: Number of failed attempts so far
        delay: Delay to sleep before the next attempt, in seconds
        error: Most recent failure, if any
    """

    kind: RetryKind
    attempt: int = 0
    delay: float = 0.0
    error: BaseException | None = None

    @staticmethod
    def start(delay: float = 0.0) -> RetryState:
        return RetryState(kind="attempting", delay=delay)

    @property
    def done(self) -> bool:
        return self.kind in ("succeeded", "failed")

    def succeeded(self) -> RetryState:
        self._require("attempting")
        return replace(self, kind="succeeded")

    def failed(self, error: BaseException, max_retries: int) -> RetryState:
        """Record a failed attempt.

        Moves to ``failed`` once ``max_retries`` attempts have failed, to
        ``waiting`` when a positive delay applies, and straight back to
        ``attempting`` otherwise.
        """
        self._require("attempting")
        attempt = self.attempt + 1
        if attempt >= max_retries:
            return replace(self, kind="failed", attempt=attempt, error=error)
        if self.delay > 0:
            return replace(self, kind="waiting", attempt=attempt, error=error)
        return replace(self, kind="attempting", attempt=attempt, error=error)

    def waited(self, backoff: float) -> RetryState:
        """Leave ``waiting``; the next delay grows by ``backoff``."""
        self._require("waiting")
        return replace(self, kind="attempting", delay=self.delay * backoff)

    def _require(self, kind: RetryKind) -> None:
        if self.kind != kind:
            raise InvalidStateError(f"Expected retry state '{kind}', got '{self.kind}'", self.kind)
