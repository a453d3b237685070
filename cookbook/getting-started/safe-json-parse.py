#!/usr/bin/env python3
"""Recipe: Parse untrusted JSON without try/except.

When you need to: Turn ``json.loads`` (or a Pydantic model's JSON
validation) into a function that returns a result pair instead of raising.

What you'll learn:
- ``from_throwable`` keeps the wrapped function's parameters
- An error transformer replaces the raw exception with your own error value
- ``err, data = result`` unpacking and ``is_failure`` checks

Difficulty: ⭐
"""

from __future__ import annotations

import argparse
from dataclasses import dataclass
import json

from pydantic import BaseModel, ValidationError

from cookbook.utils.presentation import (
    print_header,
    print_learning_hints,
    print_result,
    print_section,
)
from fallible import Result, failure, from_throwable

DEFAULT_INPUTS = ('{"a": 1}', '{"a": 1')

PARSE_ERROR = "Oh no, parsing error"

safe_json_parse = from_throwable(json.loads, lambda _exc: PARSE_ERROR)


class Point(BaseModel):
    """Schema used to show typed validation errors."""

    a: int
    b: int = 0


@dataclass(frozen=True)
class InvalidPoint:
    """Typed error for input that is not a valid ``Point``."""

    problems: tuple[str, ...]


def _invalid_point(exc: Exception) -> InvalidPoint:
    if isinstance(exc, ValidationError):
        return InvalidPoint(tuple(err["msg"] for err in exc.errors()))
    # Only ValidationError is expected from model_validate_json.
    raise exc


safe_parse_point = from_throwable(Point.model_validate_json, _invalid_point)


def parse_point(raw: str) -> Result[InvalidPoint, Point]:
    """Validate ``raw`` as a Point, reporting empty input as its own failure."""
    if not raw.strip():
        return failure(InvalidPoint(("empty input",)))
    return safe_parse_point(raw)


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument(
        "inputs",
        nargs="*",
        default=list(DEFAULT_INPUTS),
        help="JSON strings to parse (default: one valid, one malformed).",
    )
    args = parser.parse_args(argv)

    print_header("Safe JSON parsing")
    print_section("json.loads")
    for raw in args.inputs:
        print_result(raw, safe_json_parse(raw))

    print_section("Point.model_validate_json")
    for raw in args.inputs:
        print_result(raw, parse_point(raw))

    print_learning_hints(
        [
            "Drop the transformer to receive the raw JSONDecodeError instead.",
            "A transformer that raises is not captured: it reaches your code.",
        ]
    )


if __name__ == "__main__":
    main()
