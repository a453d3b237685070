"""Shared output helpers for cookbook recipe terminal presentation."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fallible import is_failure

if TYPE_CHECKING:
    from fallible import Result


def print_header(title: str) -> None:
    """Print a recipe title underlined to its width."""
    print(title)
    print("=" * len(title))


def print_section(title: str) -> None:
    """Print a named section heading."""
    print(f"\n{title}")
    print("-" * len(title))


def print_kv_rows(rows: list[tuple[str, object]]) -> None:
    """Print compact key/value rows using a uniform bullet style."""
    for key, value in rows:
        lines = str(value).splitlines() or [""]
        print(f"- {key}: {lines[0]}")
        for cont in lines[1:]:
            print(f"  {' ' * len(key)}  {cont}")


def print_result(label: str, result: Result[object, object]) -> None:
    """Print which variant a result is, with its meaningful slot."""
    err, data = result
    if is_failure(result):
        print_kv_rows([(label, f"failure -> {err!r}")])
    else:
        print_kv_rows([(label, f"ok -> {data!r}")])


def print_learning_hints(hints: list[str], *, title: str = "Next steps") -> None:
    """Print short coaching bullets that explain what to do next."""
    if not hints:
        return
    print_section(title)
    for hint in hints:
        print(f"- {hint}")
