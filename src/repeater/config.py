"""TOML/env settings that build a backoff policy."""

from __future__ import annotations

import logging as py_logging
import os
import sys
from contextlib import suppress
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationError
from typing_extensions import TypedDict

if sys.version_info >= (3, 11):
    import tomllib
else:  # pragma: no cover
    import tomli as tomllib

from repeater.errors import ConfigError
from repeater.policy import (
    DEFAULT_EXPONENTIAL_GROWTH,
    DEFAULT_INITIAL_DELAY,
    DEFAULT_LINEAR_GROWTH,
    DEFAULT_MAX_DELAY,
    DEFAULT_MAX_RETRIES,
    BackoffPolicy,
)

logger = py_logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path("~/.config/repeater/config.toml").expanduser()
CONFIG_TABLE = "repeater"
ENV_PREFIX = "REPEATER_"

_FIELDS = (
    "initial_delay",
    "max_delay",
    "linear_growth",
    "exponential_growth",
    "max_retries",
)


class SettingsTable(TypedDict):
    initial_delay: float
    max_delay: float
    linear_growth: float
    exponential_growth: float
    max_retries: int


class RepeaterSettings(BaseModel):
    model_config = ConfigDict(validate_assignment=True)

    initial_delay: float = Field(default=DEFAULT_INITIAL_DELAY, ge=0)
    max_delay: float = Field(default=DEFAULT_MAX_DELAY, ge=0)
    linear_growth: float = Field(default=DEFAULT_LINEAR_GROWTH, ge=0)
    exponential_growth: float = Field(default=DEFAULT_EXPONENTIAL_GROWTH, ge=0)
    max_retries: int = Field(default=DEFAULT_MAX_RETRIES, ge=0)

    def to_policy(self) -> BackoffPolicy:
        return BackoffPolicy(
            initial_delay=self.initial_delay,
            max_delay=self.max_delay,
            linear_growth=self.linear_growth,
            exponential_growth=self.exponential_growth,
            max_retries=self.max_retries,
        )

    def to_table(self) -> SettingsTable:
        return {
            "initial_delay": self.initial_delay,
            "max_delay": self.max_delay,
            "linear_growth": self.linear_growth,
            "exponential_growth": self.exponential_growth,
            "max_retries": self.max_retries,
        }


def get_config_path(path: str | Path | None = None) -> Path:
    if path is None:
        return DEFAULT_CONFIG_PATH
    return Path(path).expanduser()


def _candidates(name: str, raw: dict[str, object]) -> list[tuple[str, object]]:
    candidates: list[tuple[str, object]] = []
    value = raw.get(name)
    if value is not None and not isinstance(value, bool):
        candidates.append(("file", value))
    env_value = os.getenv(ENV_PREFIX + name.upper(), "").strip()
    if env_value:
        candidates.append(("env", env_value))
    return candidates


def _sanitize(raw: dict[str, object]) -> RepeaterSettings:
    table = raw.get(CONFIG_TABLE)
    if isinstance(table, dict):
        raw = table

    settings = RepeaterSettings()

    # Later sources win; a value pydantic rejects leaves the previous one in place.
    for name in _FIELDS:
        for source, value in _candidates(name, raw):
            try:
                setattr(settings, name, value)
            except ValidationError:
                logger.warning("Ignoring invalid %s value for %s: %r", source, name, value)

    return settings


def load_settings(path: str | Path | None = None, *, strict: bool = False) -> RepeaterSettings:
    resolved = get_config_path(path)
    if not resolved.exists():
        return _sanitize({})
    try:
        with resolved.open("rb") as handle:
            raw = tomllib.load(handle)
    except (tomllib.TOMLDecodeError, OSError) as exc:
        if strict:
            raise ConfigError(
                f"Could not read repeater settings from {resolved}: {exc}",
                hint="Fix the TOML syntax or remove the file to use defaults.",
            ) from exc
        return _sanitize({})
    return _sanitize(raw)


def save_settings(settings: RepeaterSettings, path: str | Path | None = None) -> Path:
    resolved = get_config_path(path)
    resolved.parent.mkdir(parents=True, exist_ok=True)

    lines = [f"[{CONFIG_TABLE}]"]
    for key, value in settings.to_table().items():
        lines.append(f"{key} = {value!r}")

    resolved.write_text("\n".join(lines) + "\n", encoding="utf-8")
    with suppress(OSError):
        resolved.chmod(0o600)
    return resolved


def load_policy(path: str | Path | None = None, *, strict: bool = False) -> BackoffPolicy:
    return load_settings(path, strict=strict).to_policy()
