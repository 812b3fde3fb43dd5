"""Retry a fallible operation with linear and exponential backoff."""

import logging as py_logging

from repeater.config import RepeaterSettings, load_policy, load_settings, save_settings
from repeater.errors import ConfigError, RepeaterError, RetryCancelled
from repeater.logging import configure_logging
from repeater.policy import (
    DEFAULT_INFINITE_POLICY,
    DEFAULT_POLICY,
    BackoffPolicy,
    new_infinite_policy,
    new_policy,
)
from repeater.retry import (
    Repeater,
    RetrySession,
    cancellable_sleep,
    default,
    default_infinite,
    retrying,
    run_with_retry,
)

__all__ = [
    "DEFAULT_INFINITE_POLICY",
    "DEFAULT_POLICY",
    "BackoffPolicy",
    "ConfigError",
    "RepeaterError",
    "RepeaterSettings",
    "Repeater",
    "RetryCancelled",
    "RetrySession",
    "cancellable_sleep",
    "configure_logging",
    "default",
    "default_infinite",
    "load_policy",
    "load_settings",
    "new_infinite_policy",
    "new_policy",
    "retrying",
    "run_with_retry",
    "save_settings",
]

__version__ = "0.1.0"

py_logging.getLogger(__name__).addHandler(py_logging.NullHandler())
