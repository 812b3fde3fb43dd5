from __future__ import annotations

from repeater.errors import ConfigError, RepeaterError, RetryCancelled


def test_repeater_error_string_contains_hint() -> None:
    err = ConfigError("settings unreadable", hint="Fix the TOML syntax")

    assert str(err) == "settings unreadable Hint: Fix the TOML syntax"
    assert isinstance(err, RepeaterError)


def test_repeater_error_without_hint_is_plain_message() -> None:
    assert str(RetryCancelled("stopped")) == "stopped"
