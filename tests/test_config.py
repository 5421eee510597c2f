"""Tests for formar.config and formar.messages: defaults and resolution."""

import pytest

from formar.config import DEFAULT_MESSAGES, Messages
from formar.errors import ConfigurationError, FormarError
from formar.messages import Violation, interpolate, resolver


class TestMessages:
    def test_defaults(self) -> None:
        assert DEFAULT_MESSAGES.required == "is required"
        assert DEFAULT_MESSAGES.number == "should be a number"
        assert DEFAULT_MESSAGES.not_allowed == "is not allowed"
        assert DEFAULT_MESSAGES.format == "has incorrect format"
        assert DEFAULT_MESSAGES.email == "is not a valid email"

    def test_override(self) -> None:
        messages = Messages(required="obligatory")
        assert messages.required == "obligatory"
        assert messages.number == "should be a number"

    def test_frozen(self) -> None:
        with pytest.raises(AttributeError):
            DEFAULT_MESSAGES.required = "x"  # type: ignore[misc]


class TestInterpolate:
    def test_fills_placeholders(self) -> None:
        assert interpolate(DEFAULT_MESSAGES.range, min=1, max=9) == "should be between 1 and 9"
        assert interpolate(DEFAULT_MESSAGES.length_is, length=4) == (
            "should be exactly 4 character(s)"
        )

    def test_plain_text_unchanged(self) -> None:
        assert interpolate("too small", min=1, max=2) == "too small"

    def test_non_string_unchanged(self) -> None:
        error = {"code": 42}
        assert interpolate(error, min=1) is error

    @pytest.mark.parametrize("message", ["{unknown}", "{}", "{min"])
    def test_bad_placeholder(self, message: str) -> None:
        with pytest.raises(ConfigurationError):
            interpolate(message, min=1)


class TestResolver:
    def test_static(self) -> None:
        resolve = resolver("is required")
        assert resolve("name", Violation.REQUIRED) == "is required"
        assert resolve("name", Violation.RANGE, 1, 2) == "is required"

    def test_msg_fn_wins(self) -> None:
        resolve = resolver("ignored", lambda field, kind, *args: f"{field}:{kind}:{args}")
        assert resolve("age", Violation.MIN, 18) == "age:min:(18,)"


class TestViolation:
    def test_values(self) -> None:
        assert Violation.NOT_ALLOWED == "not-allowed"
        assert {v.value for v in Violation} == {
            "required",
            "number",
            "format",
            "min",
            "max",
            "range",
            "not-allowed",
            "is",
        }


class TestErrors:
    def test_hierarchy(self) -> None:
        assert issubclass(ConfigurationError, FormarError)
        assert issubclass(FormarError, Exception)
