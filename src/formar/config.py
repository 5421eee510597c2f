"""Default message texts.

Messages is a frozen dataclass: immutable after creation, IDE-autocompletable,
no string-key dict lookups. Rule factories fall back to ``DEFAULT_MESSAGES``
for every message the caller does not supply.
"""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Messages:
    """Default error messages. Immutable after creation.

    Texts may contain ``{min}``, ``{max}`` and ``{length}`` placeholders,
    filled in once when a rule is built. Per-rule overrides go through the
    factory keywords (``message=``, ``min_message=``, ...).
    """

    # Presence
    required: str = "is required"

    # Numbers
    number: str = "should be a number"
    min: str = "should be greater than {min}"
    max: str = "should be less than {max}"
    range: str = "should be between {min} and {max}"

    # Length
    length_is: str = "should be exactly {length} character(s)"
    length_min: str = "should be at least {min} character(s)"
    length_max: str = "should be at most {max} character(s)"
    length_range: str = "should be between {min} and {max} characters long"

    # Choice
    not_allowed: str = "is not allowed"

    # Format
    format: str = "has incorrect format"
    email: str = "is not a valid email"


DEFAULT_MESSAGES = Messages()
