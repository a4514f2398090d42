"""Audit trail for tool invocations.

Every tool call produces exactly one JSON line in an append-only log
(one ``os.write`` on an ``O_APPEND`` descriptor per entry, so concurrent
calls never interleave partial records). An optional webhook receives a
copy of each entry from a detached task that the invocation never awaits.

Audit failures are reported on the ``freelo_mcp.audit`` logger and never
reach the tool caller.

Configuration via environment variables:
  - FREELO_AUDIT_ENABLED: set to 'false' to disable (default: enabled)
  - FREELO_AUDIT_LOG: JSONL destination (default: ./audit.jsonl)
  - FREELO_AUDIT_WEBHOOK: optional webhook URL
"""

from __future__ import annotations

import asyncio
import json
import os
import threading
import time
import uuid
from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Literal, TypeVar

import httpx

from .config import AuditConfig, get_settings
from .constants import DEFAULT_USER_AGENT, WEBHOOK_TIMEOUT
from .logging_config import create_logger, request_id_ctx

logger = create_logger(__name__)

T = TypeVar("T")

AuditStatus = Literal["success", "error"]

REDACTED = "[REDACTED]"
TRUNCATED = "[TRUNCATED]"
CIRCULAR = "[CIRCULAR]"
MAX_SANITIZE_DEPTH = 8

SENSITIVE_KEY_FRAGMENTS = (
    "password",
    "secret",
    "token",
    "apikey",
    "api_key",
    "api-key",
    "authorization",
)


# ── Sanitization ────────────────────────────────────────────────────


def _is_sensitive(key: Any) -> bool:
    lowered = str(key).lower()
    if lowered.endswith("key"):
        return True
    return any(fragment in lowered for fragment in SENSITIVE_KEY_FRAGMENTS)


def sanitize_params(value: Any, depth: int = 0, _seen: frozenset[int] = frozenset()) -> Any:
    """Return a copy of ``value`` with credential-like fields redacted.

    Recurses through mappings, lists and tuples down to ``MAX_SANITIZE_DEPTH``.
    Containers already on the current path are replaced with ``[CIRCULAR]``.
    """
    if not isinstance(value, (Mapping, list, tuple)):
        return value
    if id(value) in _seen:
        return CIRCULAR
    if depth >= MAX_SANITIZE_DEPTH:
        return TRUNCATED

    seen = _seen | {id(value)}
    if isinstance(value, Mapping):
        return {
            key: REDACTED if _is_sensitive(key) else sanitize_params(item, depth + 1, seen)
            for key, item in value.items()
        }
    return [sanitize_params(item, depth + 1, seen) for item in value]


# ── Entries ─────────────────────────────────────────────────────────


def _utc_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


@dataclass(frozen=True)
class AuditEntry:
    """One immutable record of a single tool invocation."""

    timestamp: str
    tool: str
    params: Any
    status: AuditStatus
    duration_ms: int
    error: str | None = None

    @classmethod
    def create(
        cls,
        tool: str,
        params: Any,
        status: AuditStatus,
        duration_ms: int,
        error: str | None = None,
    ) -> AuditEntry:
        return cls(
            timestamp=_utc_timestamp(),
            tool=tool,
            params=sanitize_params(params),
            status=status,
            duration_ms=duration_ms,
            error=error if status == "error" else None,
        )

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {
            "timestamp": self.timestamp,
            "tool": self.tool,
            "params": self.params,
            "status": self.status,
            "durationMs": self.duration_ms,
        }
        if self.status == "error":
            d["error"] = self.error or ""
        return d

    def to_json_line(self) -> str:
        return json.dumps(self.to_dict(), default=str, ensure_ascii=False) + "\n"


# ── Logger ──────────────────────────────────────────────────────────


class AuditLogger:
    """Writes audit entries to a JSONL file and, optionally, a webhook."""

    def __init__(self, config: AuditConfig, user_agent: str = DEFAULT_USER_AGENT) -> None:
        self.config = config
        self.user_agent = user_agent
        self._directory_ready = False
        self._pending: set[asyncio.Task[None]] = set()

    @property
    def enabled(self) -> bool:
        return self.config.enabled

    def log_call(
        self,
        tool: str,
        params: Any,
        status: AuditStatus,
        duration_ms: int,
        error: str | None = None,
    ) -> AuditEntry | None:
        """Record one tool call. No-op (no I/O at all) when auditing is disabled."""
        if not self.config.enabled:
            return None

        entry = AuditEntry.create(tool, params, status, duration_ms, error)
        self._write(entry)
        if self.config.webhook_url:
            self.dispatch_webhook(entry)
        return entry

    async def with_logging(
        self,
        tool: str,
        params: Any,
        handler: Callable[[], Awaitable[T]],
    ) -> T:
        """Run ``handler``, log exactly one entry for it, and re-raise any failure."""
        token = request_id_ctx.set(uuid.uuid4().hex[:12])
        start = time.perf_counter()
        try:
            result = await handler()
        except asyncio.CancelledError:
            self.log_call(tool, params, "error", _elapsed_ms(start), "cancelled")
            raise
        except Exception as e:
            self.log_call(tool, params, "error", _elapsed_ms(start), str(e) or type(e).__name__)
            raise
        else:
            self.log_call(tool, params, "success", _elapsed_ms(start))
            return result
        finally:
            request_id_ctx.reset(token)

    def _write(self, entry: AuditEntry) -> None:
        path = self.config.log_path
        data = entry.to_json_line().encode("utf-8")
        try:
            if not self._directory_ready:
                path.parent.mkdir(parents=True, exist_ok=True)
                self._directory_ready = True
            fd = os.open(path, os.O_WRONLY | os.O_APPEND | os.O_CREAT, 0o644)
            try:
                os.write(fd, data)
            finally:
                os.close(fd)
        except OSError as e:
            logger.error(f"Failed to write audit entry to {path}: {e}")

    # Fire-and-forget: the invocation path schedules the send and moves on.
    def dispatch_webhook(self, entry: AuditEntry) -> None:
        """Schedule a webhook notification for ``entry`` without awaiting it."""
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.warning("No running event loop; audit webhook notification skipped")
            return
        task = loop.create_task(self._send_webhook(entry))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

    async def _send_webhook(self, entry: AuditEntry) -> None:
        url = self.config.webhook_url
        if not url:
            return
        try:
            async with httpx.AsyncClient(timeout=WEBHOOK_TIMEOUT) as client:
                resp = await client.post(
                    url,
                    json=entry.to_dict(),
                    headers={"User-Agent": self.user_agent},
                )
            if not resp.is_success:
                logger.error(f"Audit webhook returned HTTP {resp.status_code}")
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            logger.error(f"Failed to send audit webhook: {e}")

    async def drain(self) -> None:
        """Wait for outstanding webhook notifications (shutdown and tests)."""
        if self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)


def _elapsed_ms(start: float) -> int:
    return round((time.perf_counter() - start) * 1000)


# ── Singleton helpers ───────────────────────────────────────────────

_audit_logger: AuditLogger | None = None
_audit_lock = threading.Lock()


def get_audit_logger() -> AuditLogger:
    """Get the shared AuditLogger built from process settings (thread-safe lazy init)."""
    global _audit_logger
    if _audit_logger is None:
        with _audit_lock:
            if _audit_logger is None:
                settings = get_settings()
                _audit_logger = AuditLogger(settings.audit, settings.credentials.user_agent)
    return _audit_logger


def reset_audit_logger() -> None:
    """Drop the shared AuditLogger so the next call rebuilds it."""
    global _audit_logger
    with _audit_lock:
        _audit_logger = None
