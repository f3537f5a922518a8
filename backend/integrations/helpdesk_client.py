"""
Helpdesk backend client.
Wraps the install-lookup, ticket, incident-status and analytics endpoints.
Every failure surfaces as BackendError carrying a human-readable detail.
"""
import logging
from typing import Any, Optional

import httpx

from config import settings

logger = logging.getLogger(__name__)


class BackendError(RuntimeError):
    """A backend call failed (transport error, non-2xx status or bad body)."""

    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail


def _error_detail(resp: httpx.Response) -> str:
    try:
        body = resp.json()
    except ValueError:
        return resp.text or f"HTTP {resp.status_code}"
    if isinstance(body, dict) and body.get("detail"):
        detail = body["detail"]
        return detail if isinstance(detail, str) else str(detail)
    return resp.text


class HelpdeskClient:
    """Thin async client for the helpdesk backend."""

    def __init__(self, base_url: Optional[str] = None, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.base = (base_url or settings.BACKEND_URL).rstrip("/")
        self.client = httpx.AsyncClient(
            base_url=self.base,
            timeout=settings.BACKEND_TIMEOUT_SECONDS,
            transport=transport,
        )

    async def _request(self, method: str, path: str, **kwargs) -> Any:
        try:
            resp = await self.client.request(method, path, **kwargs)
        except httpx.HTTPError as e:
            logger.warning("%s %s failed: %s", method, path, e)
            raise BackendError(str(e) or e.__class__.__name__) from e
        if resp.is_error:
            detail = _error_detail(resp)
            logger.warning("%s %s → %s: %s", method, path, resp.status_code, detail[:200])
            raise BackendError(detail)
        try:
            return resp.json()
        except ValueError as e:
            raise BackendError(f"Invalid JSON from {path}: {resp.text[:200]}") from e

    # ── Install lookup ────────────────────────────────────────────────────────

    async def lookup_install(self, query: str, chosen_version: Optional[str] = None) -> Any:
        """Returns {incident, ...} when a ticket was created, or {options, message}."""
        return await self._request(
            "POST", "/request_install",
            json={"user_query": query, "chosen_version": chosen_version},
        )

    # ── Tickets ───────────────────────────────────────────────────────────────

    async def create_ticket(self, query: str) -> Any:
        return await self._request(
            "POST", "/create_ticket",
            json={
                "short_description": query,
                "description": query,
                "impact": settings.TICKET_IMPACT,
                "category": settings.TICKET_CATEGORY,
            },
        )

    async def get_incident_status(self, incident_id: str) -> Any:
        return await self._request("GET", f"/show_status/{incident_id}")

    # ── Analytics ─────────────────────────────────────────────────────────────

    async def query_analytics(self, prompt: str, chart_hint: str) -> Any:
        return await self._request(
            "POST", settings.ANALYTICS_PATH,
            json={"prompt": prompt, "chart_hint": chart_hint},
        )

    async def aclose(self):
        await self.client.aclose()

    async def __aenter__(self):
        return self

    async def __aexit__(self, *_):
        await self.aclose()
