"""Environment-driven configuration.

All settings are read once from the environment (optionally populated
from a ``.env`` file by ``server.main``) and frozen for the process.
"""

from __future__ import annotations

import functools
import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

from .constants import DEFAULT_AUDIT_LOG, DEFAULT_USER_AGENT, FREELO_API_URL


@dataclass(frozen=True)
class FreeloCredentials:
    """Credentials handed to every Freelo API call."""

    email: str = ""
    api_key: str = field(default="", repr=False)
    user_agent: str = DEFAULT_USER_AGENT

    @property
    def complete(self) -> bool:
        return bool(self.email and self.api_key)


@dataclass(frozen=True)
class AuditConfig:
    """Audit trail configuration."""

    enabled: bool = True
    log_path: Path = Path(DEFAULT_AUDIT_LOG)
    webhook_url: str | None = None


@dataclass(frozen=True)
class Settings:
    """Process-wide settings."""

    credentials: FreeloCredentials = field(default_factory=FreeloCredentials)
    api_url: str = FREELO_API_URL
    audit: AuditConfig = field(default_factory=AuditConfig)
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> Settings:
        """Build settings from environment variables.

        Args:
            environ: Mapping to read from. Defaults to ``os.environ``.
        """
        env = os.environ if environ is None else environ
        credentials = FreeloCredentials(
            email=env.get("FREELO_EMAIL", ""),
            api_key=env.get("FREELO_API_KEY", ""),
            user_agent=env.get("FREELO_USER_AGENT") or DEFAULT_USER_AGENT,
        )
        audit = AuditConfig(
            enabled=env.get("FREELO_AUDIT_ENABLED", "").strip().lower() != "false",
            log_path=Path(env.get("FREELO_AUDIT_LOG") or DEFAULT_AUDIT_LOG),
            webhook_url=env.get("FREELO_AUDIT_WEBHOOK") or None,
        )
        return cls(
            credentials=credentials,
            api_url=(env.get("FREELO_API_URL") or FREELO_API_URL).rstrip("/"),
            audit=audit,
            log_level=env.get("LOGGING_LEVEL", "INFO"),
        )


@functools.cache
def get_settings() -> Settings:
    """Get the process settings (read from the environment on first use)."""
    return Settings.from_env()
