"""Exception hierarchy for fallible.

The adapters never raise these for a wrapped callable's failures; those are
captured into ``Failure`` values. Library errors are reserved for misuse of
the library's own surface, such as invalid configuration.
"""

from __future__ import annotations


class FallibleError(Exception):
    """Base exception for all fallible errors."""

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint = hint

    def __str__(self) -> str:
        """Return the message, followed by the hint when present."""
        msg = super().__str__()
        return f"{msg}. {self.hint}" if self.hint else msg


class ConfigurationError(FallibleError):
    """Configuration validation or resolution failed."""
