"""Combinator option records."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Self

from pydantic import BaseModel, ConfigDict, Field


class Options(BaseModel):
    """Base for option records: immutable, loadable from plain mappings.

    Fields accept their camelCase spelling as an alias, so configuration
    written as ``{"maxRetries": 5}`` validates as well as ``max_retries=5``.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="forbid")

    @classmethod
    def coerce(cls, options: Self | Mapping[str, Any] | None) -> Self:
        """Accept an instance, a mapping or ``None`` (defaults)."""
        if options is None:
            return cls()
        if isinstance(options, cls):
            return options
        return cls.model_validate(options)


class RetryOptions(Options):
    """Options for retrying a failing operation.

    Attributes:
        max_retries: Total number of attempts, including the first (>= 1)
        delay: Seconds to wait before the second attempt (>= 0)
        backoff: Factor applied to the delay after every wait (>= 0)
    """

    max_retries: int = Field(default=3, ge=1, alias="maxRetries")
    delay: float = Field(default=0.0, ge=0)
    backoff: float = Field(default=1.0, ge=0)


class DebounceOptions(Options):
    """Options for debouncing: ``delay`` is the quiet period in seconds."""

    delay: float = Field(default=0.0, ge=0)
