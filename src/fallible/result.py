"""Two-slot result values for explicit error handling.

A result is an ordered pair ``(error, value)`` with exactly one meaningful
slot. ``Data`` holds a success payload in slot 1 and ``None`` in slot 0;
``Failure`` holds an error in slot 0 and ``None`` in slot 1.

The variant is decided by the class, never by a payload's nullity, so a
success payload may itself be ``None`` without ambiguity.

Callers must check ``is_failure`` (or ``is_ok``) before trusting slot 1: a
forgotten check silently yields ``None`` for a failed operation.
"""

from __future__ import annotations

import dataclasses
from typing import TYPE_CHECKING, Any, Literal, TypeIs, overload

if TYPE_CHECKING:
    from collections.abc import Iterator


@dataclasses.dataclass(frozen=True, slots=True)
class Data[T]:
    """A successful outcome, viewed as the pair ``(None, value)``."""

    value: T

    @property
    def error(self) -> None:
        return None

    def __len__(self) -> Literal[2]:
        return 2

    def __iter__(self) -> Iterator[Any]:
        yield None
        yield self.value

    @overload
    def __getitem__(self, index: int) -> Any: ...
    @overload
    def __getitem__(self, index: slice) -> tuple[Any, ...]: ...
    def __getitem__(self, index: int | slice) -> Any:
        return (None, self.value)[index]


@dataclasses.dataclass(frozen=True, slots=True)
class Failure[E]:
    """A failed outcome, viewed as the pair ``(error, None)``."""

    error: E

    @property
    def value(self) -> None:
        return None

    def __len__(self) -> Literal[2]:
        return 2

    def __iter__(self) -> Iterator[Any]:
        yield self.error
        yield None

    @overload
    def __getitem__(self, index: int) -> Any: ...
    @overload
    def __getitem__(self, index: slice) -> tuple[Any, ...]: ...
    def __getitem__(self, index: int | slice) -> Any:
        return (self.error, None)[index]


type Result[E, T] = Failure[E] | Data[T]


def ok[T](value: T) -> Data[T]:
    """Create a success result."""
    return Data(value)


def failure[E](error: E) -> Failure[E]:
    """Create a failure result.

    ``error`` should not be ``None``. It is accepted and still classified as
    a failure, but ``err, data = result`` unpacking can no longer tell the
    two variants apart by slot 0.
    """
    return Failure(error)


def is_ok[E, T](result: Result[E, T]) -> TypeIs[Data[T]]:
    """Return True when ``result`` carries a success payload."""
    return isinstance(result, Data)


def is_failure[E, T](result: Result[E, T]) -> TypeIs[Failure[E]]:
    """Return True when ``result`` carries an error."""
    # Checked on the variant, not on slot 1: None is a valid success payload.
    return isinstance(result, Failure)


__all__ = ["Data", "Failure", "Result", "failure", "is_failure", "is_ok", "ok"]
