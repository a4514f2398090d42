"""Tests for the Freelo HTTP client."""

from __future__ import annotations

import asyncio
import base64
import json
from typing import Any

import httpx
import pytest

from freelo_mcp.client import FreeloClient, flatten_params, open_client
from freelo_mcp.config import FreeloCredentials, Settings
from freelo_mcp.exceptions import FreeloApiError

CREDENTIALS = FreeloCredentials(email="dev@example.com", api_key="k3y", user_agent="tests/1.0")


def _client(handler: Any) -> FreeloClient:
    return FreeloClient(CREDENTIALS, transport=httpx.MockTransport(handler))


def _request(handler: Any, method: str, path: str, **kwargs: Any) -> Any:
    async def run() -> Any:
        async with _client(handler) as client:
            return await client.request(method, path, **kwargs)

    return asyncio.run(run())


class TestFlattenParams:
    def test_scalars(self) -> None:
        assert flatten_params({"search_query": "bug", "p": 0}) == [
            ("search_query", "bug"),
            ("p", "0"),
        ]

    def test_lists_use_brackets(self) -> None:
        assert flatten_params({"projects_ids": [1, 2]}) == [
            ("projects_ids[]", "1"),
            ("projects_ids[]", "2"),
        ]

    def test_nested_mapping(self) -> None:
        params = {"due_date_range": {"date_from": "2024-01-01", "date_to": "2024-01-31"}}
        assert flatten_params(params) == [
            ("due_date_range[date_from]", "2024-01-01"),
            ("due_date_range[date_to]", "2024-01-31"),
        ]

    def test_none_dropped_and_booleans_lowercase(self) -> None:
        assert flatten_params({"order": None, "no_due_date": True, "x": False}) == [
            ("no_due_date", "true"),
            ("x", "false"),
        ]

    def test_empty(self) -> None:
        assert flatten_params(None) == []
        assert flatten_params({}) == []


class TestRequest:
    def test_get_decodes_json_and_authenticates(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json=[{"id": 1}])

        assert _request(handler, "GET", "/projects") == [{"id": 1}]

        (request,) = seen
        assert request.url.path == "/v1/projects"
        token = base64.b64encode(b"dev@example.com:k3y").decode()
        assert request.headers["Authorization"] == f"Basic {token}"
        assert request.headers["User-Agent"] == "tests/1.0"

    def test_query_params_flattened(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={})

        _request(handler, "GET", "/all-tasklists", params={"projects_ids": ["197352"]})
        assert seen[0].url.params.get_list("projects_ids[]") == ["197352"]

    def test_post_sends_json(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={"id": 5})

        _request(handler, "POST", "/note/5", json={"name": "n"})
        assert json.loads(seen[0].content) == {"name": "n"}

    def test_empty_body_is_none(self) -> None:
        assert _request(lambda r: httpx.Response(204), "POST", "/task/1/finish") is None

    def test_error_message_from_errors_array(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(401, json={"errors": ["Invalid credentials"]})

        with pytest.raises(FreeloApiError) as exc_info:
            _request(handler, "GET", "/projects")
        assert str(exc_info.value) == "HTTP 401: Invalid credentials"
        assert exc_info.value.status_code == 401

    def test_error_without_body(self) -> None:
        with pytest.raises(FreeloApiError, match="HTTP 503"):
            _request(lambda r: httpx.Response(503), "GET", "/projects")

    def test_timeout(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("slow", request=request)

        with pytest.raises(FreeloApiError, match="timed out"):
            _request(handler, "GET", "/projects")

    def test_transport_error(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("refused", request=request)

        with pytest.raises(FreeloApiError, match="request failed"):
            _request(handler, "GET", "/projects")

    def test_invalid_json(self) -> None:
        with pytest.raises(FreeloApiError, match="invalid JSON"):
            _request(lambda r: httpx.Response(200, text="<html>"), "GET", "/projects")


class TestOpenClient:
    def test_uses_settings(self, monkeypatch: pytest.MonkeyPatch) -> None:
        settings = Settings.from_env(
            {
                "FREELO_EMAIL": "a@b.cz",
                "FREELO_API_KEY": "x",
                "FREELO_API_URL": "https://freelo.test/v1/",
            }
        )
        monkeypatch.setattr("freelo_mcp.client.get_settings", lambda: settings)
        client = open_client()
        try:
            assert client.base_url == "https://freelo.test/v1"
            assert client.credentials.email == "a@b.cz"
        finally:
            asyncio.run(client.aclose())
