"""Formar exception hierarchy.

Validation failures are never raised: they are recorded on the ``Result``.
These types cover misuse of the library itself, such as a rule built
with contradictory options.
"""


class FormarError(Exception):
    """Base for all formar-specific errors."""


class ConfigurationError(FormarError):
    """Raised when a rule or form is configured with invalid options.

    Raised eagerly by the rule factories and ``Form`` so a broken
    definition fails at import time rather than on the first request.
    """
