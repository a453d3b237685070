"""Pytest configuration and fixtures.

Provides environment isolation, logging configuration and small test doubles
for the adapters. Fixtures here are autouse unless noted.
"""

from __future__ import annotations

from contextlib import suppress
from dataclasses import dataclass, field
import logging
from typing import Any

import pytest

from fallible.config import refresh_env_config

# =============================================================================
# Test Doubles
# =============================================================================


@dataclass
class CallRecorder:
    """Callable double that records every call and returns or raises on demand."""

    returns: Any = None
    raises: Exception | None = None
    calls: list[tuple[tuple[Any, ...], dict[str, Any]]] = field(default_factory=list)

    def __call__(self, *args: Any, **kwargs: Any) -> Any:
        self.calls.append((args, kwargs))
        if self.raises is not None:
            raise self.raises
        return self.returns


@dataclass
class RecordingTransformer:
    """Error transformer double that tags and records what it receives."""

    seen: list[Exception] = field(default_factory=list)

    def __call__(self, exc: Exception) -> str:
        self.seen.append(exc)
        return f"mapped:{exc}"


@pytest.fixture
def recorder() -> CallRecorder:
    """A fresh ``CallRecorder`` (not autouse)."""
    return CallRecorder()


@pytest.fixture
def transformer() -> RecordingTransformer:
    """A fresh ``RecordingTransformer`` (not autouse)."""
    return RecordingTransformer()


# =============================================================================
# Environment Isolation (Autouse)
# =============================================================================


@pytest.fixture(autouse=True)
def block_dotenv(monkeypatch):
    """Prevent python-dotenv from loading project .env files during tests."""
    with suppress(Exception):
        monkeypatch.setattr(
            "dotenv.load_dotenv", lambda *_args, **_kwargs: False, raising=False
        )


@pytest.fixture(autouse=True)
def isolate_fallible_env(monkeypatch):
    """Clear FALLIBLE_* env vars so capture logging starts disabled."""
    monkeypatch.delenv("FALLIBLE_LOG_CAPTURED", raising=False)
    monkeypatch.delenv("FALLIBLE_LOG_LEVEL", raising=False)
    refresh_env_config()
    yield
    refresh_env_config()


# =============================================================================
# Logging
# =============================================================================


@pytest.fixture(scope="session", autouse=True)
def quiet_noisy_libraries():
    """Suppress noisy third-party loggers."""
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("asyncio").setLevel(logging.WARNING)
