"""Formar: rule-based transformation and validation of flat form data.

Turns raw string input into coerced data, per-field errors and
cross-field errors, in one synchronous pass.

Basic usage::

    from formar import Form, configure, email, pattern, required

    def passwords_match(result):
        if result.data["password"] != result.data["repeat-password"]:
            return result.with_form_error("Passwords don't match!")
        return result

    registration = Form(
        [
            ("username", [required, configure(pattern, r"[a-zA-Z0-9_]+")]),
            ("email", [required, email]),
            ("password", [required]),
            ("repeat-password", [required]),
        ],
        checks=[passwords_match],
    )

    result = registration({"username": "bob", "email": "bob@example.com", ...})
    if not result:
        ...  # result.data_errors / result.form_errors

Without the builder, ``transform(source, fields, form_rules)`` takes
rules already bound to their field names.
"""

from formar.config import DEFAULT_MESSAGES, Messages
from formar.errors import ConfigurationError, FormarError
from formar.form import Form, configure
from formar.messages import Violation
from formar.result import Keyword, Result, valid
from formar.rules import (
    Rule,
    choice,
    email,
    keywordize,
    length,
    number,
    pattern,
    range_of,
    required,
)
from formar.transform import transform, transform_field

__version__ = "0.1.0"
__all__ = [
    "DEFAULT_MESSAGES",
    "ConfigurationError",
    "Form",
    "FormarError",
    "Keyword",
    "Messages",
    "Result",
    "Rule",
    "Violation",
    "choice",
    "configure",
    "email",
    "keywordize",
    "length",
    "number",
    "pattern",
    "range_of",
    "required",
    "transform",
    "transform_field",
    "valid",
]
