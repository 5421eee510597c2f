"""Transformation result, the immutable value threaded through every rule.

A ``Result`` is created empty once per ``transform()`` call. Rules never
mutate it; they return a new value built with ``with_value``,
``with_error`` or ``with_form_error``, so a rule can be shared freely
between threads.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any


@dataclass(frozen=True, slots=True)
class Keyword:
    """A symbolic token, distinct from the string it was made from.

    Produced by the ``keywordize`` rule so choices like ``"admin"`` can be
    compared against constants rather than free text::

        ADMIN = Keyword("admin")
        if result.data["role"] == ADMIN:
            ...
    """

    name: str

    def __str__(self) -> str:
        return self.name

    def __repr__(self) -> str:
        return f":{self.name}"


@dataclass(frozen=True, slots=True)
class Result:
    """The outcome of transforming raw input against a set of rules.

    ``data`` maps every declared field to its current value: the raw
    input, ``None`` when the input lacked the key, or whatever a
    transforming rule wrote back (``"30"`` becomes ``30``).

    ``data_errors`` maps a field to its single error. The first rule to
    fail for a field wins::

        {"email": "is not a valid email", "password": "is required"}

    ``form_errors`` holds cross-field errors in the order they were
    produced. They only appear when every field passed.

    The result is falsy when invalid::

        result = registration(form)
        if not result:
            return Template("register.html", errors=result.data_errors)
    """

    data: dict[str, Any] = field(default_factory=dict)
    data_errors: dict[str, Any] = field(default_factory=dict)
    form_errors: tuple[Any, ...] = ()

    @classmethod
    def empty(cls) -> Result:
        """A fresh result with no data and no errors."""
        return cls()

    # -- Reading --

    def value(self, name: str, default: Any = None) -> Any:
        """Current value of field *name*, or *default* if it was never set."""
        return self.data.get(name, default)

    def error(self, name: str) -> Any:
        """The error recorded for field *name*, or ``None``."""
        return self.data_errors.get(name)

    @property
    def is_valid(self) -> bool:
        """True if there are no field errors and no form errors."""
        return not self.data_errors and not self.form_errors

    def __bool__(self) -> bool:
        """Falsy when invalid, for the ``if not result:`` pattern."""
        return self.is_valid

    # -- Copy-on-write updates --

    def with_value(self, name: str, value: Any) -> Result:
        """Return a copy with ``data[name]`` set to *value*."""
        return replace(self, data={**self.data, name: value})

    def with_error(self, name: str, error: Any) -> Result:
        """Return a copy with *error* recorded against field *name*."""
        return replace(self, data_errors={**self.data_errors, name: error})

    def with_form_error(self, error: Any) -> Result:
        """Return a copy with *error* appended to ``form_errors``."""
        return replace(self, form_errors=(*self.form_errors, error))


def valid(result: Result, name: str | None = None) -> bool:
    """Check whether *result* is valid.

    With only *result*, true when there are neither field nor form
    errors. With a field *name*, true when that field has no error.
    """
    if name is None:
        return result.is_valid
    return result.data_errors.get(name) is None
