"""Form definitions: bind rules to fields once, apply them many times.

A ``Form`` takes a compact table of field rules and binds every entry to
its field name up front. Entries are rule factories: either bare
(``required``, ``email``) or with their options fixed by ``configure``::

    registration = Form(
        [
            ("username", [required, configure(pattern, r"[a-zA-Z0-9_]+")]),
            ("email", [required, email]),
            ("password", [required]),
            ("repeat-password", [required]),
        ],
        checks=[passwords_match],
    )

    result = registration(request_form)

Calling the form is the same as calling ``transform()`` with the bound
rules, so the evaluation order is identical.
"""

import logging
from collections.abc import Callable, Iterable, Mapping, Sequence
from typing import Any

from formar.errors import ConfigurationError
from formar.result import Result
from formar.rules import Rule
from formar.transform import FieldSpec, transform

logger = logging.getLogger("formar.form")

# A rule factory waiting for its field name
type FieldRule = Callable[[str], Rule]


def configure(factory: Callable[..., Rule], *args: Any, **kwargs: Any) -> FieldRule:
    """Fix the options of a rule factory, leaving the field name open.

    ``configure(range_of, min=18)("age")`` is ``range_of("age", min=18)``.
    """

    def bind(field: str) -> Rule:
        return factory(field, *args, **kwargs)

    return bind


class Form:
    """A reusable set of field rules and form-level checks.

    Instances are immutable after construction and safe to share across
    threads; each call builds a fresh ``Result``.
    """

    __slots__ = ("_checks", "_fields")

    def __init__(
        self,
        fields: Iterable[tuple[str, Sequence[FieldRule]]] | Mapping[str, Sequence[FieldRule]],
        checks: Iterable[Rule] = (),
    ) -> None:
        entries = fields.items() if isinstance(fields, Mapping) else fields
        bound: list[FieldSpec] = []
        seen: set[str] = set()
        for name, field_rules in entries:
            if name in seen:
                msg = f"Field {name!r} is declared more than once"
                raise ConfigurationError(msg)
            seen.add(name)
            rules: list[Rule] = []
            for field_rule in field_rules:
                if not callable(field_rule):
                    msg = f"Rule for field {name!r} is not callable: {field_rule!r}"
                    raise ConfigurationError(msg)
                rules.append(field_rule(name))
            bound.append((name, tuple(rules)))

        form_checks = tuple(checks)
        for check in form_checks:
            if not callable(check):
                msg = f"Form check is not callable: {check!r}"
                raise ConfigurationError(msg)

        self._fields: tuple[FieldSpec, ...] = tuple(bound)
        self._checks: tuple[Rule, ...] = form_checks
        logger.debug(
            "form defined: fields=%s checks=%d", self.field_names, len(self._checks)
        )

    @property
    def field_names(self) -> tuple[str, ...]:
        """Declared field names, in processing order."""
        return tuple(name for name, _ in self._fields)

    def __call__(self, source: Mapping[str, Any]) -> Result:
        """Transform *source* with this form's rules."""
        return transform(source, self._fields, self._checks)

    def __repr__(self) -> str:
        return f"Form(fields={self.field_names!r}, checks={len(self._checks)})"
