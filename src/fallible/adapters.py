"""Adapters from exception-raising code to Result values.

``from_try_catch`` and ``from_async_try_catch`` run a zero-argument thunk
once. ``from_throwable`` and ``from_async_throwable`` build a new function
with the wrapped function's parameters that does the same per call.

Every ``Exception`` raised by the wrapped code becomes a ``Failure``: the
caught exception itself, or ``error_transformer(exc)`` when a transformer is
given. An exception raised by the transformer is not captured and reaches
the caller. ``BaseException`` signals such as ``KeyboardInterrupt`` and
``asyncio.CancelledError`` are never captured.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
import functools
import inspect
import logging
from typing import Any, cast, overload

from fallible.config import get_config
from fallible.result import Data, Failure, failure, ok

log = logging.getLogger(__name__)

type ErrorTransformer[E] = Callable[[Exception], E]


def _describe(fn: Callable[..., Any]) -> str:
    return getattr(fn, "__qualname__", None) or repr(fn)


def _capture[E](
    fn: Callable[..., Any],
    exc: Exception,
    error_transformer: ErrorTransformer[E] | None,
) -> Failure[E] | Failure[Exception]:
    config = get_config()
    if config.log_captured:
        log.log(
            config.level_no,
            "Captured %s from %s",
            type(exc).__name__,
            _describe(fn),
            exc_info=exc,
        )
    if error_transformer is None:
        return failure(exc)
    return failure(error_transformer(exc))


def _settle[E, T](
    fn: Callable[..., Any],
    thunk: Callable[[], T],
    error_transformer: ErrorTransformer[E] | None,
) -> Failure[E] | Failure[Exception] | Data[T]:
    try:
        value = thunk()
    except Exception as exc:
        return _capture(fn, exc, error_transformer)
    return ok(value)


async def _settle_async[E, T](
    fn: Callable[..., Any],
    thunk: Callable[[], Awaitable[T]],
    error_transformer: ErrorTransformer[E] | None,
) -> Failure[E] | Failure[Exception] | Data[T]:
    try:
        pending = thunk()
        if inspect.isawaitable(pending):
            value = await pending
        else:
            value = cast("T", pending)
    except Exception as exc:
        return _capture(fn, exc, error_transformer)
    return ok(value)


@overload
def from_try_catch[T](
    fn: Callable[[], T], error_transformer: None = None
) -> Failure[Exception] | Data[T]: ...
@overload
def from_try_catch[E, T](
    fn: Callable[[], T], error_transformer: ErrorTransformer[E]
) -> Failure[E] | Data[T]: ...
def from_try_catch[E, T](
    fn: Callable[[], T],
    error_transformer: ErrorTransformer[E] | None = None,
) -> Failure[E] | Failure[Exception] | Data[T]:
    """Run a synchronous thunk and return its outcome as a Result.

    Args:
        fn: Zero-argument callable that may raise.
        error_transformer: Optional mapping from the caught exception to a
            typed error. When omitted the exception itself is the error.

    Returns:
        ``ok(fn())``, or a ``Failure`` holding the (transformed) exception.
    """
    return _settle(fn, fn, error_transformer)


@overload
async def from_async_try_catch[T](
    fn: Callable[[], Awaitable[T]], error_transformer: None = None
) -> Failure[Exception] | Data[T]: ...
@overload
async def from_async_try_catch[E, T](
    fn: Callable[[], Awaitable[T]], error_transformer: ErrorTransformer[E]
) -> Failure[E] | Data[T]: ...
async def from_async_try_catch[E, T](
    fn: Callable[[], Awaitable[T]],
    error_transformer: ErrorTransformer[E] | None = None,
) -> Failure[E] | Failure[Exception] | Data[T]:
    """Await an asynchronous thunk and return its outcome as a Result.

    Exceptions raised while calling ``fn`` and exceptions raised by the
    awaitable it returns are captured alike. A non-awaitable return value is
    treated as already settled.

    The returned coroutine never raises for ``fn``'s failures; cancellation
    of the awaiting task still propagates.
    """
    return await _settle_async(fn, fn, error_transformer)


@overload
def from_throwable[**P, T](
    fn: Callable[P, T], error_transformer: None = None
) -> Callable[P, Failure[Exception] | Data[T]]: ...
@overload
def from_throwable[**P, E, T](
    fn: Callable[P, T], error_transformer: ErrorTransformer[E]
) -> Callable[P, Failure[E] | Data[T]]: ...
def from_throwable[**P, E, T](
    fn: Callable[P, T],
    error_transformer: ErrorTransformer[E] | None = None,
) -> Callable[P, Failure[E] | Failure[Exception] | Data[T]]:
    """Wrap a function that may raise so that it returns a Result instead.

    Example:
        safe_loads = from_throwable(json.loads, lambda _: "invalid json")
        err, data = safe_loads('{"a": 1}')
    """

    @functools.wraps(fn)
    def wrapper(
        *args: P.args, **kwargs: P.kwargs
    ) -> Failure[E] | Failure[Exception] | Data[T]:
        return _settle(fn, functools.partial(fn, *args, **kwargs), error_transformer)

    return wrapper


@overload
def from_async_throwable[**P, T](
    fn: Callable[P, Awaitable[T]], error_transformer: None = None
) -> Callable[P, Awaitable[Failure[Exception] | Data[T]]]: ...
@overload
def from_async_throwable[**P, E, T](
    fn: Callable[P, Awaitable[T]], error_transformer: ErrorTransformer[E]
) -> Callable[P, Awaitable[Failure[E] | Data[T]]]: ...
def from_async_throwable[**P, E, T](
    fn: Callable[P, Awaitable[T]],
    error_transformer: ErrorTransformer[E] | None = None,
) -> Callable[P, Awaitable[Failure[E] | Failure[Exception] | Data[T]]]:
    """Wrap an async function that may raise so that it resolves to a Result."""

    @functools.wraps(fn)
    async def wrapper(
        *args: P.args, **kwargs: P.kwargs
    ) -> Failure[E] | Failure[Exception] | Data[T]:
        return await _settle_async(
            fn, functools.partial(fn, *args, **kwargs), error_transformer
        )

    return wrapper


__all__ = [
    "ErrorTransformer",
    "from_async_throwable",
    "from_async_try_catch",
    "from_throwable",
    "from_try_catch",
]
