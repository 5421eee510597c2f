"""Tests for formar.form: Form builder and configure()."""

from concurrent.futures import ThreadPoolExecutor

import pytest

from formar import (
    ConfigurationError,
    Form,
    Keyword,
    Result,
    choice,
    configure,
    email,
    keywordize,
    length,
    number,
    pattern,
    range_of,
    required,
)


def passwords_match(result: Result) -> Result:
    if result.data["password"] != result.data["repeat-password"]:
        return result.with_form_error("Passwords don't match!")
    return result


simple_registration = Form(
    [
        ("username", [required, configure(pattern, r"^[a-zA-Z0-9_]+$")]),
        ("email", [required, email]),
        ("password", [required]),
    ]
)

registration = Form(
    [
        ("username", [required, configure(pattern, r"^[a-zA-Z0-9_]+$")]),
        ("email", [required, email]),
        ("password", [required]),
        ("repeat-password", [required]),
    ],
    checks=[passwords_match],
)


class TestConfigure:
    def test_binds_field_first(self) -> None:
        rule = configure(range_of, min=18)("age")
        assert rule(Result(data={"age": "12"})).error("age") == "should be greater than 18"

    def test_positional_options(self) -> None:
        rule = configure(choice, {"red", "blue"})("color")
        assert rule(Result(data={"color": "red"})).is_valid

    def test_configuration_errors_surface_on_bind(self) -> None:
        bind = configure(length, min=3, max=1)
        with pytest.raises(ConfigurationError):
            bind("code")


class TestForm:
    def test_field_validation(self) -> None:
        result = simple_registration(
            {"username": "bob", "email": "email", "password": "", "extra-field": "bad-data"}
        )
        assert result.data["username"] == "bob"
        assert result.data["email"] == "email"
        assert result.data["password"] == ""
        assert "extra-field" not in result.data
        assert result.error("username") is None
        assert result.error("email") == "is not a valid email"
        assert result.error("password") == "is required"

    def test_form_validation(self) -> None:
        result = registration(
            {
                "username": "bob",
                "email": "bob@thebobs.com",
                "password": "pass",
                "repeat-password": "word",
            }
        )
        assert result.data_errors == {}
        assert result.form_errors == ("Passwords don't match!",)

    def test_valid_submission(self) -> None:
        result = registration(
            {
                "username": "bob",
                "email": "bob@thebobs.com",
                "password": "pass",
                "repeat-password": "pass",
            }
        )
        assert result
        assert result.form_errors == ()

    def test_transformers(self) -> None:
        profile = Form(
            {
                "age": [required, number, configure(range_of, min=18, max=120)],
                "role": [configure(choice, {"admin", "user"}), keywordize],
                "nickname": [],
            }
        )
        result = profile({"age": "42", "role": "admin"})
        assert result.is_valid
        assert result.data == {"age": 42, "role": Keyword("admin"), "nickname": None}

    def test_field_names(self) -> None:
        assert registration.field_names == ("username", "email", "password", "repeat-password")

    def test_repr(self) -> None:
        assert repr(simple_registration) == (
            "Form(fields=('username', 'email', 'password'), checks=0)"
        )

    def test_duplicate_field(self) -> None:
        with pytest.raises(ConfigurationError, match="more than once"):
            Form([("name", [required]), ("name", [])])

    def test_rule_not_callable(self) -> None:
        with pytest.raises(ConfigurationError, match="not callable"):
            Form([("name", ["required"])])  # type: ignore[list-item]

    def test_check_not_callable(self) -> None:
        with pytest.raises(ConfigurationError, match="not callable"):
            Form([("name", [])], checks=[None])  # type: ignore[list-item]

    def test_shared_across_threads(self) -> None:
        submissions = [
            {
                "username": f"user{i}",
                "email": "bad" if i % 2 else f"u{i}@example.com",
                "password": "pw",
            }
            for i in range(40)
        ]
        with ThreadPoolExecutor(max_workers=8) as pool:
            results = list(pool.map(simple_registration, submissions))

        for i, result in enumerate(results):
            assert result.data["username"] == f"user{i}"
            assert result.is_valid is (i % 2 == 0)
