"""Behaviour tests for the cookbook recipes, loaded from their script files."""

from __future__ import annotations

from pathlib import Path
import runpy
import sys
from typing import Any

import httpx
import pytest

_project_root = Path(__file__).resolve().parents[2]
if str(_project_root) not in sys.path:
    sys.path.insert(0, str(_project_root))

from fallible import is_failure, is_ok  # noqa: E402

pytestmark = [pytest.mark.unit, pytest.mark.cookbook]

COOKBOOK = _project_root / "cookbook"


def _load(relpath: str) -> dict[str, Any]:
    return runpy.run_path(str(COOKBOOK / relpath), run_name="recipe_under_test")


@pytest.fixture(scope="module")
def parse_recipe() -> dict[str, Any]:
    return _load("getting-started/safe-json-parse.py")


@pytest.fixture(scope="module")
def fetch_recipe() -> dict[str, Any]:
    return _load("production/safe-fetch.py")


class TestSafeJsonParse:
    def test_valid_json_is_ok(self, parse_recipe):
        res = parse_recipe["safe_json_parse"]('{"a": 1}')
        assert is_ok(res)
        assert res[1] == {"a": 1}

    def test_malformed_json_is_failure_with_message(self, parse_recipe):
        res = parse_recipe["safe_json_parse"]('{"a": 1')
        assert is_failure(res)
        assert res[0] == parse_recipe["PARSE_ERROR"]

    def test_point_validation(self, parse_recipe):
        parse_point = parse_recipe["parse_point"]
        point = parse_point('{"a": 3}')
        assert is_ok(point)
        assert (point.value.a, point.value.b) == (3, 0)

        invalid = parse_point('{"a": "three"}')
        assert is_failure(invalid)
        assert invalid.error.problems

    def test_empty_point_input(self, parse_recipe):
        res = parse_recipe["parse_point"]("   ")
        assert res.error == parse_recipe["InvalidPoint"](("empty input",))

    def test_main_prints_both_variants(self, parse_recipe, capsys):
        parse_recipe["main"]([])
        out = capsys.readouterr().out
        assert "ok -> {'a': 1}" in out
        assert "failure -> 'Oh no, parsing error'" in out


class TestSafeFetch:
    @pytest.mark.asyncio
    async def test_success_returns_payload(self, fetch_recipe):
        async with httpx.AsyncClient(transport=fetch_recipe["demo_transport"]()) as client:
            res = await fetch_recipe["safe_fetch"](client, fetch_recipe["DEFAULT_URL"])
        assert is_ok(res)
        assert res.value == fetch_recipe["DEMO_TODO"]

    @pytest.mark.asyncio
    async def test_non_2xx_is_request_error(self, fetch_recipe):
        async with httpx.AsyncClient(transport=fetch_recipe["demo_transport"]()) as client:
            err, data = await fetch_recipe["safe_fetch"](client, "https://x.test/missing")
        assert data is None
        assert err.reason == "RequestError"
        assert err.status == 404
        assert err.message == "Not Found"

    @pytest.mark.asyncio
    async def test_bad_body_is_invalid_json(self, fetch_recipe):
        async with httpx.AsyncClient(transport=fetch_recipe["demo_transport"]()) as client:
            res = await fetch_recipe["safe_fetch"](client, "https://x.test/broken")
        assert is_failure(res)
        assert res.error == fetch_recipe["JsonParseError"]()

    @pytest.mark.asyncio
    async def test_transport_failure_is_other_error(self, fetch_recipe):
        async with httpx.AsyncClient(transport=fetch_recipe["demo_transport"]()) as client:
            res = await fetch_recipe["safe_fetch"](client, "https://x.test/offline")
        assert res.error.reason == "OtherError"
        assert "ConnectError" in res.error.detail

    @pytest.mark.asyncio
    async def test_transport_failure_passes_through_as_the_same_variant(
        self, fetch_recipe
    ):
        async with httpx.AsyncClient(transport=fetch_recipe["demo_transport"]()) as client:
            res = await fetch_recipe["safe_fetch"](client, "https://x.test/offline")
        assert is_failure(res)
        assert res.value is None
        assert res.error == fetch_recipe["OtherError"](
            detail="ConnectError: connection refused"
        )

    def test_main_mock_run_summarizes_every_failure_kind(self, fetch_recipe, capsys):
        fetch_recipe["main"](["--mock"])
        out = capsys.readouterr().out
        assert "Fetched: 1" in out
        assert "RequestError, InvalidJson, OtherError" in out
