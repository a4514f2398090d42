"""Shared fixtures: a fake Freelo API and a throwaway audit log."""

from __future__ import annotations

import json
from collections.abc import Iterator
from pathlib import Path
from typing import Any

import httpx
import pytest

from freelo_mcp.audit import AuditLogger, reset_audit_logger
from freelo_mcp.client import FreeloClient
from freelo_mcp.config import AuditConfig, FreeloCredentials


class FakeFreelo:
    """Routes requests to canned responses and records what was sent."""

    def __init__(self) -> None:
        self.routes: dict[tuple[str, str], tuple[int, Any]] = {}
        self.requests: list[httpx.Request] = []

    def add(self, method: str, path: str, body: Any = None, status: int = 200) -> None:
        self.routes[(method, path)] = (status, body)

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path.removeprefix("/v1")
        status, body = self.routes.get((request.method, path), (404, {"errors": ["Not found"]}))
        if body is None:
            return httpx.Response(status)
        return httpx.Response(status, json=body)

    def client(self) -> FreeloClient:
        credentials = FreeloCredentials(email="dev@example.com", api_key="secret-key")
        return FreeloClient(credentials, transport=httpx.MockTransport(self.handle))

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]

    def last_json(self) -> Any:
        return json.loads(self.last.content)


@pytest.fixture
def freelo(monkeypatch: pytest.MonkeyPatch) -> FakeFreelo:
    fake = FakeFreelo()
    monkeypatch.setattr("freelo_mcp.client.open_client", fake.client)
    return fake


@pytest.fixture
def audit_path(tmp_path: Path) -> Path:
    return tmp_path / "logs" / "audit.jsonl"


@pytest.fixture
def audit(audit_path: Path) -> AuditLogger:
    return AuditLogger(AuditConfig(enabled=True, log_path=audit_path))


@pytest.fixture(autouse=True)
def _fresh_audit_singleton() -> Iterator[None]:
    reset_audit_logger()
    yield
    reset_audit_logger()


@pytest.fixture
def audit_entries(audit_path: Path):
    """Callable returning the audit entries written so far."""

    def read() -> list[dict[str, Any]]:
        if not audit_path.exists():
            return []
        return [json.loads(line) for line in audit_path.read_text().splitlines()]

    return read
