"""Violation kinds and message resolution.

Every built-in rule reports a failure as a ``Violation`` plus optional
arguments (the configured bounds, or the compiled pattern). A resolver
turns that into the value stored on the ``Result``::

    def msg_fn(field: str, kind: Violation, *args: Any) -> str:
        if kind is Violation.RANGE:
            low, high = args
            return f"{field} must be in {low}..{high}"
        return f"{field} is invalid"

    range_of("age", min=18, max=99, msg_fn=msg_fn)

A caller-supplied ``msg_fn`` always wins over the static message text.
Whatever it raises propagates to the caller of ``transform()``.
"""

from collections.abc import Callable
from enum import StrEnum
from typing import Any

from formar.errors import ConfigurationError


class Violation(StrEnum):
    """Why a rule rejected a value."""

    REQUIRED = "required"
    NUMBER = "number"
    FORMAT = "format"
    MIN = "min"
    MAX = "max"
    RANGE = "range"
    NOT_ALLOWED = "not-allowed"
    IS = "is"


# Caller-supplied message function: (field, kind, *args) -> error value
type MessageFn = Callable[..., Any]


def interpolate(message: Any, **bounds: Any) -> Any:
    """Fill ``{min}``/``{max}``/``{length}`` placeholders in *message*.

    Keywords the message does not mention are ignored, so plain text
    passes through unchanged. Non-string messages are returned as is.

    Raises ``ConfigurationError`` if *message* names an unknown placeholder.
    """
    if not isinstance(message, str):
        return message
    try:
        return message.format(**bounds)
    except (KeyError, IndexError, ValueError) as exc:
        msg = f"Invalid placeholder in message {message!r}: {exc}"
        raise ConfigurationError(msg) from exc


def resolver(message: Any, msg_fn: MessageFn | None = None) -> MessageFn:
    """Build the message function a rule calls on failure.

    Resolved once when the rule is constructed: *msg_fn* if given,
    otherwise a function that returns *message* verbatim.
    """
    if msg_fn is not None:
        return msg_fn

    def static(field: str, kind: Violation, *args: Any) -> Any:
        return message

    return static
