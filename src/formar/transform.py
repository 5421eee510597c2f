"""Field and form reducers.

``transform()`` folds raw input through per-field rules, then through
form-level rules::

    result = transform(
        form,
        [
            ("username", [required("username"), pattern("username", r"[a-z_]+")]),
            ("email", [required("email"), email("email")]),
        ],
        [passwords_match],
    )

Evaluation order:

1. Each field's raw value is copied into ``result.data``, then its rules
   run in order. The first rule that records an error for the field
   stops that field; later rules never see it.
2. Form-level rules run only if no field recorded an error. They run in
   order, and the first one that leaves the result invalid ends the fold.

Failures are reported on the returned ``Result``, never raised.
"""

import logging
from collections.abc import Iterable, Mapping, Sequence
from typing import Any

from formar.result import Result, valid
from formar.rules import Rule

logger = logging.getLogger("formar.transform")

type FieldSpec = tuple[str, Sequence[Rule]]


def transform_field(source: Mapping[str, Any], result: Result, spec: FieldSpec) -> Result:
    """Copy one field's raw value into *result* and apply its rules.

    The value is copied even when the field has no rules, and a missing
    key is stored as ``None``.
    """
    name, rules = spec
    result = result.with_value(name, source.get(str(name)))
    for rule in rules:
        result = rule(result)
        if not valid(result, name):
            logger.debug("field %r stopped: %r", name, result.error(name))
            break
    return result


def transform(
    source: Mapping[str, Any],
    fields: Iterable[FieldSpec] | Mapping[str, Sequence[Rule]],
    form_rules: Iterable[Rule] = (),
) -> Result:
    """Transform *source* against field rules, then form-level rules.

    Args:
        source: Any mapping of field names to raw values: a plain
            ``dict``, parsed form data, or query parameters.
        fields: ``(name, rules)`` pairs, or a mapping of name to rules,
            processed in order.
        form_rules: Callables ``(Result) -> Result`` applied to the whole
            result once every field has passed.

    Returns:
        A new ``Result``. Check ``result.is_valid`` (or ``bool(result)``)
        to tell success from failure.
    """
    specs = fields.items() if isinstance(fields, Mapping) else fields

    result = Result.empty()
    for spec in specs:
        result = transform_field(source, result, spec)

    if not valid(result):
        logger.debug("form rules skipped: %d field error(s)", len(result.data_errors))
        return result

    for form_rule in form_rules:
        result = form_rule(result)
        if not valid(result):
            logger.debug(
                "form rules stopped: %r %r", result.form_errors, result.data_errors
            )
            break
    return result
