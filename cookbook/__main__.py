"""Cookbook runner module.

Run cookbook recipes from a dev install, supporting path-like specs
relative to the cookbook folder.

Examples:
- python -m cookbook getting-started/safe-json-parse
- python -m cookbook production.safe_fetch --no-mock
- python -m cookbook --list
"""

from __future__ import annotations

import argparse
from dataclasses import dataclass
from pathlib import Path
import runpy
import sys
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

COOKBOOK_DIRNAME = "cookbook"
EXCLUDE_DIRS = {"utils", "__pycache__"}


@dataclass(frozen=True)
class RecipeSpec:
    """A resolved recipe: absolute path plus the cookbook-relative display name."""

    path: Path
    display: str


def cookbook_root() -> Path:
    """Return the absolute path to the cookbook directory."""
    return Path(__file__).resolve().parent


def is_recipe_file(path: Path) -> bool:
    """True if the path looks like a runnable recipe file."""
    return path.suffix == ".py" and path.name not in {"__init__.py", "__main__.py"}


def list_recipes() -> list[RecipeSpec]:
    """Discover recipe files under the cookbook directory, excluding helpers."""
    root = cookbook_root()
    recipes = [
        RecipeSpec(path=path, display=path.relative_to(root).as_posix())
        for path in root.rglob("*.py")
        if is_recipe_file(path)
        and not any(part in EXCLUDE_DIRS for part in path.relative_to(root).parts)
    ]
    return sorted(recipes, key=lambda r: r.display)


def dotted_to_path(spec: str) -> str:
    """Map 'production.safe_fetch' to 'production/safe-fetch.py'."""
    candidate = spec.removesuffix(".py").replace(".", "/").replace("_", "-")
    return candidate + ".py"


def resolve_spec(spec: str) -> RecipeSpec:
    """Resolve a user-provided spec into a recipe inside the cookbook.

    Accepts a path relative to the repo root ('cookbook/production/x.py'),
    relative to the cookbook ('production/x' or 'production/x.py'), or a
    dotted-like spec ('production.x').
    """
    root = cookbook_root()
    rel = spec.removeprefix(COOKBOOK_DIRNAME + "/")
    candidates = [
        root / rel,
        root / (rel if rel.endswith(".py") else rel + ".py"),
        root / dotted_to_path(rel),
    ]
    for candidate in candidates:
        path = candidate.resolve()
        if (
            path.is_file()
            and path.is_relative_to(root)
            and is_recipe_file(path)
            and not any(part in EXCLUDE_DIRS for part in path.relative_to(root).parts)
        ):
            return RecipeSpec(path=path, display=path.relative_to(root).as_posix())

    raise FileNotFoundError(
        f"Recipe not found: {spec!r}. Use --list to view available recipes."
    )


def _extract_description(recipe: RecipeSpec) -> str:
    """Return the text after 'Recipe:' in the recipe docstring, if any."""
    try:
        head = recipe.path.read_text().split("\n", 10)
    except OSError:
        return ""
    for line in head:
        stripped = line.strip().strip('"')
        if stripped.startswith("Recipe:"):
            return stripped.removeprefix("Recipe:").strip().rstrip(".")
    return ""


def print_recipe_list(recipes: Iterable[RecipeSpec]) -> None:
    """Print available recipes grouped by category with descriptions."""
    grouped: dict[str, list[RecipeSpec]] = {}
    for recipe in recipes:
        category, _, _ = recipe.display.rpartition("/")
        grouped.setdefault(category, []).append(recipe)

    for category, specs in grouped.items():
        print(f"\n  {category.replace('-', ' ').title() or 'Recipes'}")
        for spec in specs:
            name = spec.display.removesuffix(".py")
            print(f"    {name:<40s} {_extract_description(spec)}".rstrip())
    print("\n  Run:   python -m cookbook <recipe>\n")


def run_recipe(recipe: RecipeSpec, passthrough: Sequence[str]) -> int:
    """Execute the recipe in-process with ``sys.argv`` set as for a script."""
    prev_argv = list(sys.argv)
    sys.argv = [str(recipe.path), *passthrough]
    try:
        runpy.run_path(str(recipe.path), run_name="__main__")
    finally:
        sys.argv = prev_argv
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="python -m cookbook",
        description="fallible cookbook: runnable error-handling recipes.",
        add_help=False,
    )
    parser.add_argument("spec", nargs="?", help="Recipe to run")
    parser.add_argument("--list", action="store_true", help="List recipes and exit")
    args, passthrough = parser.parse_known_args(
        list(argv) if argv is not None else sys.argv[1:]
    )
    passthrough = [arg for arg in passthrough if arg != "--"]

    if args.list or not args.spec:
        print_recipe_list(list_recipes())
        return 0

    try:
        recipe = resolve_spec(args.spec)
    except FileNotFoundError as exc:
        print(str(exc), file=sys.stderr)
        return 2
    return run_recipe(recipe, passthrough)


if __name__ == "__main__":  # pragma: no cover - direct execution guard
    raise SystemExit(main())
