"""Built-in rules for formar forms.

A rule is a callable bound to one field::

    def rule(result: Result) -> Result:
        '''Return a new Result: the field's value rewritten, or an error added.'''

Rules read the field's current value from ``result.data``, so they see
whatever earlier rules for the same field wrote back. A missing field
reads as ``None``.

Each factory takes the field name first, then its options::

    number("age")
    range_of("age", min=18, max=99)
    pattern("username", r"[a-zA-Z0-9_]+", allow_nil=False)

Messages default to ``DEFAULT_MESSAGES``; pass ``msg_fn`` to compute
them from the violation kind instead (see ``formar.messages``).

Custom rules follow the same protocol. Any callable matching
``(Result) -> Result`` works with ``transform()``.
"""

import re
from collections.abc import Callable, Collection, Sized
from typing import Any

from formar.config import DEFAULT_MESSAGES
from formar.errors import ConfigurationError
from formar.messages import MessageFn, Violation, interpolate, resolver
from formar.result import Keyword, Result

type Rule = Callable[[Result], Result]

# Structural check only, not deliverability
_EMAIL_RE = re.compile(
    r"^[_A-Za-z0-9+-]+(\.[_A-Za-z0-9-]+)*@[A-Za-z0-9-]+(\.[A-Za-z0-9]+)*(\.[A-Za-z]{2,})$"
)

_INTEGER_RE = re.compile(r"[+-]?[0-9]+")

# Signed 64-bit bounds; larger input is rejected as not-a-number
_INT_MIN = -(2**63)
_INT_MAX = 2**63 - 1


def _coerce_integer(value: Any) -> int | None:
    """Coerce *value* to an int, or return None if it is not one."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str) and _INTEGER_RE.fullmatch(value):
        parsed = int(value)
        if _INT_MIN <= parsed <= _INT_MAX:
            return parsed
    return None


def _check_bounds(field: str, min: int | None, max: int | None) -> None:
    if min is not None and max is not None and min > max:
        msg = f"Rule for {field!r}: min ({min}) is greater than max ({max})"
        raise ConfigurationError(msg)


# ---------------------------------------------------------------------------
# Presence
# ---------------------------------------------------------------------------


def required(
    field: str,
    *,
    message: Any = None,
    msg_fn: MessageFn | None = None,
) -> Rule:
    """Value must be present and, for strings, not blank."""
    resolve = resolver(DEFAULT_MESSAGES.required if message is None else message, msg_fn)

    def rule(result: Result) -> Result:
        value = result.value(field)
        if value is None or (isinstance(value, str) and not value.strip()):
            return result.with_error(field, resolve(field, Violation.REQUIRED))
        return result

    return rule


# ---------------------------------------------------------------------------
# Numbers
# ---------------------------------------------------------------------------


def number(
    field: str,
    *,
    message: Any = None,
    msg_fn: MessageFn | None = None,
) -> Rule:
    """Convert the value to an int. Missing values are ignored.

    On failure the original value is left in place and a ``number``
    violation is recorded.
    """
    resolve = resolver(DEFAULT_MESSAGES.number if message is None else message, msg_fn)

    def rule(result: Result) -> Result:
        value = result.value(field)
        if value is None:
            return result
        coerced = _coerce_integer(value)
        if coerced is None:
            return result.with_error(field, resolve(field, Violation.NUMBER))
        return result.with_value(field, coerced)

    return rule


def range_of(
    field: str,
    *,
    min: int | None = None,
    max: int | None = None,
    number_message: Any = None,
    min_message: Any = None,
    max_message: Any = None,
    range_message: Any = None,
    msg_fn: MessageFn | None = None,
) -> Rule:
    """Convert the value to an int and check it against *min*/*max*.

    With both bounds the check is a single ``range`` violation, so a
    value below *min* is reported as ``range`` rather than ``min``.
    Missing values are ignored.
    """
    _check_bounds(field, min, max)
    bounds = {"min": min, "max": max}
    number_fn = resolver(
        DEFAULT_MESSAGES.number if number_message is None else number_message, msg_fn
    )
    min_fn = resolver(
        interpolate(DEFAULT_MESSAGES.min if min_message is None else min_message, **bounds),
        msg_fn,
    )
    max_fn = resolver(
        interpolate(DEFAULT_MESSAGES.max if max_message is None else max_message, **bounds),
        msg_fn,
    )
    range_fn = resolver(
        interpolate(DEFAULT_MESSAGES.range if range_message is None else range_message, **bounds),
        msg_fn,
    )

    def rule(result: Result) -> Result:
        value = result.value(field)
        if value is None:
            return result
        coerced = _coerce_integer(value)
        if coerced is None:
            return result.with_error(field, number_fn(field, Violation.NUMBER))

        if min is not None and max is not None:
            if not min <= coerced <= max:
                return result.with_error(field, range_fn(field, Violation.RANGE, min, max))
        elif min is not None:
            if coerced < min:
                return result.with_error(field, min_fn(field, Violation.MIN, min))
        elif max is not None:
            if coerced > max:
                return result.with_error(field, max_fn(field, Violation.MAX, max))

        return result.with_value(field, coerced)

    return rule


# ---------------------------------------------------------------------------
# Length
# ---------------------------------------------------------------------------


def length(
    field: str,
    *,
    is_: int | None = None,
    min: int | None = None,
    max: int | None = None,
    is_message: Any = None,
    min_message: Any = None,
    max_message: Any = None,
    range_message: Any = None,
    msg_fn: MessageFn | None = None,
) -> Rule:
    """Check the length of the value.

    *is_* is the exact length; when given, *min* and *max* are ignored.
    With both *min* and *max* the check is a single ``range`` violation.
    Values without a length are measured through ``str()``. Missing
    values are ignored.
    """
    for name, bound in (("is_", is_), ("min", min), ("max", max)):
        if bound is not None and bound < 0:
            msg = f"Rule for {field!r}: {name} must not be negative, got {bound}"
            raise ConfigurationError(msg)
    if is_ is None:
        _check_bounds(field, min, max)

    bounds = {"length": is_, "min": min, "max": max}
    is_fn = resolver(
        interpolate(DEFAULT_MESSAGES.length_is if is_message is None else is_message, **bounds),
        msg_fn,
    )
    min_fn = resolver(
        interpolate(DEFAULT_MESSAGES.length_min if min_message is None else min_message, **bounds),
        msg_fn,
    )
    max_fn = resolver(
        interpolate(DEFAULT_MESSAGES.length_max if max_message is None else max_message, **bounds),
        msg_fn,
    )
    range_fn = resolver(
        interpolate(
            DEFAULT_MESSAGES.length_range if range_message is None else range_message, **bounds
        ),
        msg_fn,
    )

    def rule(result: Result) -> Result:
        value = result.value(field)
        if value is None:
            return result
        size = len(value) if isinstance(value, Sized) else len(str(value))

        if is_ is not None:
            if size != is_:
                return result.with_error(field, is_fn(field, Violation.IS, is_))
        elif min is not None and max is not None:
            if not min <= size <= max:
                return result.with_error(field, range_fn(field, Violation.RANGE, min, max))
        elif min is not None:
            if size < min:
                return result.with_error(field, min_fn(field, Violation.MIN, min))
        elif max is not None:
            if size > max:
                return result.with_error(field, max_fn(field, Violation.MAX, max))

        return result

    return rule


# ---------------------------------------------------------------------------
# Choice
# ---------------------------------------------------------------------------


def choice(
    field: str,
    options: Collection[Any],
    *,
    required_message: Any = None,
    not_allowed_message: Any = None,
    msg_fn: MessageFn | None = None,
) -> Rule:
    """Value must be one of *options*. A missing value is never allowed."""
    if isinstance(options, str):
        msg = f"Rule for {field!r}: options must be a collection of values, not a string"
        raise ConfigurationError(msg)
    allowed = frozenset(options)
    required_fn = resolver(
        DEFAULT_MESSAGES.required if required_message is None else required_message, msg_fn
    )
    not_allowed_fn = resolver(
        DEFAULT_MESSAGES.not_allowed if not_allowed_message is None else not_allowed_message,
        msg_fn,
    )

    def rule(result: Result) -> Result:
        value = result.value(field)
        if value is None:
            return result.with_error(field, required_fn(field, Violation.REQUIRED))
        if value not in allowed:
            return result.with_error(field, not_allowed_fn(field, Violation.NOT_ALLOWED))
        return result

    return rule


# ---------------------------------------------------------------------------
# Format
# ---------------------------------------------------------------------------


def pattern(
    field: str,
    regexp: str | re.Pattern[str],
    *,
    message: Any = None,
    msg_fn: MessageFn | None = None,
    allow_nil: bool = True,
) -> Rule:
    """The whole value must match *regexp*.

    A missing value passes when *allow_nil* is true, otherwise it is a
    ``required`` violation reported with the same static *message*.
    """
    if isinstance(regexp, str):
        try:
            compiled = re.compile(regexp)
        except re.error as exc:
            msg = f"Rule for {field!r}: invalid pattern {regexp!r}: {exc}"
            raise ConfigurationError(msg) from exc
    elif isinstance(regexp, re.Pattern):
        compiled = regexp
    else:
        msg = f"Rule for {field!r}: expected a pattern, got {type(regexp).__name__}"
        raise ConfigurationError(msg)
    resolve = resolver(DEFAULT_MESSAGES.format if message is None else message, msg_fn)

    def rule(result: Result) -> Result:
        value = result.value(field)
        if value is None:
            if allow_nil:
                return result
            return result.with_error(field, resolve(field, Violation.REQUIRED))
        text = value if isinstance(value, str) else str(value)
        if compiled.fullmatch(text) is None:
            return result.with_error(field, resolve(field, Violation.FORMAT, compiled))
        return result

    return rule


def email(
    field: str,
    *,
    message: Any = None,
    msg_fn: MessageFn | None = None,
    allow_nil: bool = False,
) -> Rule:
    """Value must look like an email address. Missing values fail by default."""
    return pattern(
        field,
        _EMAIL_RE,
        message=DEFAULT_MESSAGES.email if message is None else message,
        msg_fn=msg_fn,
        allow_nil=allow_nil,
    )


# ---------------------------------------------------------------------------
# Conversion
# ---------------------------------------------------------------------------


def keywordize(field: str) -> Rule:
    """Replace the value with a ``Keyword``. Missing values are ignored."""

    def rule(result: Result) -> Result:
        value = result.value(field)
        if value is None or isinstance(value, Keyword):
            return result
        return result.with_value(field, Keyword(str(value)))

    return rule
