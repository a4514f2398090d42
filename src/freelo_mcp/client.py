"""Freelo REST API client — thin authenticated wrapper over httpx."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import httpx

from .config import FreeloCredentials, get_settings
from .constants import DEFAULT_TIMEOUT, FREELO_API_URL
from .exceptions import FreeloApiError

# ── Query encoding ──────────────────────────────────────────────────


def flatten_params(params: Mapping[str, Any] | None) -> list[tuple[str, str]]:
    """Flatten nested query parameters into Freelo's bracket notation.

    Examples:
        {"projects_ids": [1, 2]} → [("projects_ids[]", "1"), ("projects_ids[]", "2")]
        {"due_date_range": {"date_from": "2024-01-01"}}
            → [("due_date_range[date_from]", "2024-01-01")]

    ``None`` values are dropped; booleans are sent as ``true``/``false``.
    """
    pairs: list[tuple[str, str]] = []
    if not params:
        return pairs

    def _scalar(value: Any) -> str:
        if isinstance(value, bool):
            return "true" if value else "false"
        return str(value)

    def _walk(prefix: str, value: Any) -> None:
        if value is None:
            return
        if isinstance(value, Mapping):
            for key, item in value.items():
                _walk(f"{prefix}[{key}]", item)
        elif isinstance(value, (list, tuple)):
            for item in value:
                if isinstance(item, Mapping):
                    _walk(f"{prefix}[]", item)
                elif item is not None:
                    pairs.append((f"{prefix}[]", _scalar(item)))
        else:
            pairs.append((prefix, _scalar(value)))

    for key, value in params.items():
        _walk(str(key), value)
    return pairs


def _error_detail(response: httpx.Response) -> str:
    """Extract a readable error message from a Freelo error response."""
    try:
        body = response.json()
    except ValueError:
        return response.text.strip() or response.reason_phrase

    if isinstance(body, dict):
        errors = body.get("errors")
        if isinstance(errors, list) and errors:
            return "; ".join(str(e) for e in errors)
        for key in ("message", "error"):
            if body.get(key):
                return str(body[key])
    return response.reason_phrase


# ── Client ──────────────────────────────────────────────────────────


class FreeloClient:
    """Async Freelo API client.

    Usage::

        async with FreeloClient(credentials) as client:
            projects = await client.get("/projects")
    """

    def __init__(
        self,
        credentials: FreeloCredentials,
        *,
        base_url: str = FREELO_API_URL,
        timeout: float = DEFAULT_TIMEOUT,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.credentials = credentials
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._http = httpx.AsyncClient(
            base_url=self.base_url,
            auth=httpx.BasicAuth(credentials.email, credentials.api_key),
            headers={
                "User-Agent": credentials.user_agent,
                "Accept": "application/json",
            },
            timeout=timeout,
            transport=transport,
        )

    async def __aenter__(self) -> FreeloClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._http.aclose()

    async def request(
        self,
        method: str,
        path: str,
        *,
        params: Mapping[str, Any] | None = None,
        json: Any = None,
    ) -> Any:
        """Send a request and return the decoded JSON body.

        Raises:
            FreeloApiError: On timeouts, transport failures and non-2xx responses.
        """
        try:
            resp = await self._http.request(
                method,
                path,
                params=flatten_params(params) or None,
                json=json,
            )
            resp.raise_for_status()
        except httpx.TimeoutException as e:
            raise FreeloApiError(f"Freelo API timed out after {self.timeout}s") from e
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            raise FreeloApiError(
                f"HTTP {status}: {_error_detail(e.response)}", status_code=status
            ) from e
        except httpx.HTTPError as e:
            raise FreeloApiError(f"Freelo API request failed: {e}") from e

        if not resp.content:
            return None
        try:
            return resp.json()
        except ValueError as e:
            raise FreeloApiError(
                f"Freelo API returned invalid JSON (HTTP {resp.status_code})",
                status_code=resp.status_code,
            ) from e

    async def get(self, path: str, *, params: Mapping[str, Any] | None = None) -> Any:
        return await self.request("GET", path, params=params)

    async def post(
        self,
        path: str,
        *,
        json: Any = None,
        params: Mapping[str, Any] | None = None,
    ) -> Any:
        return await self.request("POST", path, params=params, json=json)


def open_client() -> FreeloClient:
    """Create a client from the process settings."""
    settings = get_settings()
    return FreeloClient(settings.credentials, base_url=settings.api_url)
