"""Library error model.

Failures raised by retried operations are never wrapped; these types cover the
library's own failure modes only.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class RepeaterError(Exception):
    message: str
    hint: str = ""

    def __str__(self) -> str:
        if self.hint:
            return f"{self.message} Hint: {self.hint}"
        return self.message


class ConfigError(RepeaterError):
    """Configuration could not be read or parsed."""


class RetryCancelled(RepeaterError):
    """A cancellation signal fired while waiting between attempts."""
