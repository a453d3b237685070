"""Configuration: frozen Config resolved from the environment.

Environment variables (a project ``.env`` file is honoured):

- ``FALLIBLE_LOG_CAPTURED``: ``"1"`` logs every exception an adapter captures.
- ``FALLIBLE_LOG_LEVEL``: level name for those records (default ``DEBUG``).
"""

from __future__ import annotations

from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass
import functools
import logging
import os
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from fallible.errors import ConfigurationError

if TYPE_CHECKING:
    from collections.abc import Iterator

load_dotenv()

log = logging.getLogger(__name__)

LOG_CAPTURED_ENV = "FALLIBLE_LOG_CAPTURED"
LOG_LEVEL_ENV = "FALLIBLE_LOG_LEVEL"

_LEVEL_NAMES = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")

_active_config: ContextVar[Config | None] = ContextVar(
    "fallible_config", default=None
)


@dataclass(frozen=True)
class Config:
    """Immutable configuration for the exception adapters.

    Example:
        with use_config(Config(log_captured=True, log_level="warning")):
            from_try_catch(risky)
    """

    log_captured: bool = False
    #: Case-insensitive; normalized to upper case.
    log_level: str = "DEBUG"

    def __post_init__(self) -> None:
        """Normalize and validate the log level."""
        level = str(self.log_level).strip().upper()
        if level not in _LEVEL_NAMES:
            raise ConfigurationError(
                f"Unknown log level: {self.log_level!r}",
                hint=f"Use one of {', '.join(_LEVEL_NAMES)}",
            )
        object.__setattr__(self, "log_level", level)

    @property
    def level_no(self) -> int:
        """Numeric ``logging`` level for capture records."""
        return logging.getLevelNamesMapping()[self.log_level]

    @classmethod
    def from_env(cls) -> Config:
        """Build a Config from ``FALLIBLE_*`` environment variables."""
        return cls(
            log_captured=os.getenv(LOG_CAPTURED_ENV) == "1",
            log_level=os.getenv(LOG_LEVEL_ENV) or "DEBUG",
        )


@functools.cache
def _env_config() -> Config:
    # Adapters read this on their failure path, so it must not raise.
    if os.getenv(LOG_CAPTURED_ENV) != "1":
        return Config()
    try:
        return Config.from_env()
    except ConfigurationError as exc:
        log.warning("Ignoring %s, logging captures at DEBUG: %s", LOG_LEVEL_ENV, exc)
        return Config(log_captured=True)


def get_config() -> Config:
    """Return the config installed by ``use_config``, else the environment default.

    The environment default is resolved once and cached; an invalid
    ``FALLIBLE_LOG_LEVEL`` falls back to ``DEBUG`` with a warning. Call
    ``refresh_env_config()`` after changing ``FALLIBLE_*`` variables.
    """
    active = _active_config.get()
    if active is not None:
        return active
    return _env_config()


def refresh_env_config() -> None:
    """Drop the cached environment default so the next lookup re-reads it."""
    _env_config.cache_clear()


@contextmanager
def use_config(config: Config) -> Iterator[Config]:
    """Install ``config`` for the current context until the block exits."""
    token = _active_config.set(config)
    try:
        yield config
    finally:
        _active_config.reset(token)


__all__ = ["Config", "get_config", "refresh_env_config", "use_config"]
