#!/usr/bin/env python3
"""Recipe: Fetch JSON over HTTP with typed failures instead of exceptions.

When you need to: Call an HTTP API and hand callers one of a few tagged
error values (bad status, bad body, transport failure) or the payload.

What you'll learn:
- ``from_async_throwable`` around an ``httpx.AsyncClient`` call
- Mapping each failure mode to its own frozen error type
- Mock transports for offline runs (``--mock``, default) and tests

Difficulty: ⭐⭐
"""

from __future__ import annotations

import argparse
import asyncio
from dataclasses import dataclass
from typing import Any, Literal

import httpx

from cookbook.utils.presentation import (
    print_header,
    print_kv_rows,
    print_learning_hints,
    print_result,
    print_section,
)
from fallible import (
    Result,
    failure,
    from_async_throwable,
    from_throwable,
    is_failure,
    ok,
)

DEFAULT_URL = "https://jsonplaceholder.typicode.com/todos/1"

DEMO_TODO = {"userId": 1, "id": 1, "title": "delectus aut autem", "completed": False}


@dataclass(frozen=True)
class RequestError:
    """The server answered with a non-2xx status."""

    message: str
    status: int
    reason: Literal["RequestError"] = "RequestError"


@dataclass(frozen=True)
class JsonParseError:
    """The response body was not valid JSON."""

    reason: Literal["InvalidJson"] = "InvalidJson"


@dataclass(frozen=True)
class OtherError:
    """The request never produced a response."""

    detail: str = ""
    reason: Literal["OtherError"] = "OtherError"


type FetchError = RequestError | JsonParseError | OtherError


def _other_error(exc: Exception) -> OtherError:
    return OtherError(detail=f"{type(exc).__name__}: {exc}")


async def safe_fetch(
    client: httpx.AsyncClient, url: str, **kwargs: Any
) -> Result[FetchError, Any]:
    """GET ``url`` and decode its JSON body, never raising for request failures."""
    fetched = await from_async_throwable(client.get, _other_error)(url, **kwargs)
    if is_failure(fetched):
        return fetched
    response = fetched.value
    if not response.is_success:
        return failure(
            RequestError(message=response.reason_phrase, status=response.status_code)
        )
    decoded = from_throwable(response.json, lambda _exc: JsonParseError())()
    if is_failure(decoded):
        return decoded
    return ok(decoded.value)


def demo_transport() -> httpx.MockTransport:
    """Serve one canned todo, a 404, a broken body, and a connection failure."""

    def handler(request: httpx.Request) -> httpx.Response:
        path = request.url.path
        if path.startswith("/todos/1"):
            return httpx.Response(200, json=DEMO_TODO)
        if path.startswith("/broken"):
            return httpx.Response(200, content=b"{not json")
        if path.startswith("/offline"):
            raise httpx.ConnectError("connection refused", request=request)
        return httpx.Response(404)

    return httpx.MockTransport(handler)


async def main_async(urls: list[str], *, mock: bool) -> None:
    transport = demo_transport() if mock else None
    async with httpx.AsyncClient(transport=transport, timeout=10.0) as client:
        results = await asyncio.gather(*(safe_fetch(client, url) for url in urls))

    print_section("Results")
    for url, result in zip(urls, results, strict=True):
        print_result(url, result)

    reasons = [r.error.reason for r in results if is_failure(r)]
    print_section("Summary")
    print_kv_rows(
        [
            ("Fetched", len(results) - len(reasons)),
            ("Failed", ", ".join(reasons) or "none"),
        ]
    )


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("urls", nargs="*", help=f"URLs to fetch (default: {DEFAULT_URL})")
    parser.add_argument(
        "--mock",
        action=argparse.BooleanOptionalAction,
        default=True,
        help="Serve requests from an in-process mock (default: enabled).",
    )
    args = parser.parse_args(argv)

    urls = args.urls or [DEFAULT_URL]
    if args.mock and not args.urls:
        base = DEFAULT_URL.removesuffix("/todos/1")
        urls = [DEFAULT_URL, f"{base}/missing", f"{base}/broken", f"{base}/offline"]

    print_header("Safe fetch")
    asyncio.run(main_async(urls, mock=args.mock))
    print_learning_hints(
        [
            "Use --no-mock to hit the network for real.",
            "Match on error.reason to branch on the failure kind.",
        ]
    )


if __name__ == "__main__":
    main()
