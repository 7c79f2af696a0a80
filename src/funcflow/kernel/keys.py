"""Cache key derivation for the memoizing combinators."""

from __future__ import annotations

from collections.abc import Callable, Hashable
from typing import Any

KeyFunc = Callable[..., Hashable]

SEPARATOR = ":"


def default_key(*args: Any, **kwargs: Any) -> str:
    """Project call arguments to a textual key.

    Positional arguments are converted with ``str()`` and joined with ``":"``;
    keyword arguments follow as sorted ``name=value`` pairs.

    Structurally different arguments that stringify identically share a key
    (``default_key(1)`` == ``default_key("1")``, and most objects without a
    custom ``__str__`` collide only with themselves). Pass an explicit key
    function to the memoizer when exact identity matters.
    """
    parts = [str(arg) for arg in args]
    parts.extend(f"{name}={kwargs[name]}" for name in sorted(kwargs))
    return SEPARATOR.join(parts)
