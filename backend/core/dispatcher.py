"""
Dispatch engine — classify an utterance, call the matching backend endpoint,
and turn the response into a single reply plus the next session state.

Backend failures never escape: each one becomes an error reply. Every branch
clears the pending confirmation except a failed incident-status lookup, which
leaves an in-progress install choice alone.
"""
import json
import logging
from typing import Any, Optional

from core.classifier import Classifier, classify
from core.normalizer import normalize
from integrations.helpdesk_client import BackendError, HelpdeskClient
from models.dispatch import DispatchResult, PendingConfirmation
from models.intent import (
    STATIC_CHARTS,
    AnalyticsQuery,
    GenericTicket,
    IncidentStatus,
    InstallRequest,
)
from models.payload import ResponsePayload

logger = logging.getLogger(__name__)

MULTIPLE_VERSIONS_MESSAGE = "Multiple versions found. Please choose one."
DEFAULT_INSIGHTS_MESSAGE = "Here are your insights:"


def _detail(e: Exception) -> str:
    return e.detail if isinstance(e, BackendError) else str(e)


def _as_text(data: Any) -> str:
    return json.dumps(data, indent=2, ensure_ascii=False, default=str)


def select_static_chart(raw: Any, payload: ResponsePayload, chart_hint: str) -> Optional[str]:
    """
    Pick the static chart to display:
    backend-declared chart_type > inline chart spec (no static chart) > local hint.
    """
    declared = raw.get("chart_type") if isinstance(raw, dict) else None
    if declared in STATIC_CHARTS:
        return declared
    if payload.chart_spec is not None:
        return None
    if chart_hint in STATIC_CHARTS:
        return chart_hint
    return None


class DispatchEngine:
    """Routes one utterance to one backend call. The classifier is a swappable strategy."""

    def __init__(self, backend: HelpdeskClient, classifier: Classifier = classify):
        self.backend = backend
        self.classifier = classifier

    async def dispatch(
        self,
        utterance: str,
        current_pending: Optional[PendingConfirmation] = None,
    ) -> DispatchResult:
        intent = self.classifier(utterance)
        logger.info("Dispatch intent: %s for query: %s", intent.kind, utterance[:80])

        if isinstance(intent, IncidentStatus):
            return await self._incident_status(intent, current_pending)
        if isinstance(intent, InstallRequest):
            return await self._install(intent)
        if isinstance(intent, AnalyticsQuery):
            return await self._analytics(intent)
        return await self._generic_ticket(intent)

    async def _incident_status(
        self,
        intent: IncidentStatus,
        current_pending: Optional[PendingConfirmation],
    ) -> DispatchResult:
        inc = intent.incident_id
        try:
            data = await self.backend.get_incident_status(inc)
        except Exception as e:
            logger.warning("Status lookup for %s failed: %s", inc, e)
            # pending is kept on this path only
            return DispatchResult(
                intent=intent,
                reply_text=f"Error while checking status: {_detail(e)}",
                pending=current_pending,
            )

        status = data.get("incident_status") if isinstance(data, dict) else None
        return DispatchResult(
            intent=intent,
            reply_text=f"Incident {inc} status: {status or 'Unknown'}",
            payload=ResponsePayload(incident_id=inc),
        )

    async def _install(self, intent: InstallRequest) -> DispatchResult:
        try:
            data = await self.backend.lookup_install(intent.query, None)
        except Exception as e:
            logger.warning("Install lookup failed: %s", e)
            return DispatchResult(
                intent=intent,
                reply_text=f"Error while searching software: {_detail(e)}",
            )

        if isinstance(data, dict) and data.get("incident"):
            logger.info("Install lookup created ticket %s directly", data["incident"])
            return DispatchResult(intent=intent, reply_text=_as_text(data), payload=normalize(data))

        options = data.get("options") if isinstance(data, dict) else None
        if isinstance(options, list) and len(options) > 1:
            pending = PendingConfirmation(
                original_query=intent.query,
                options=tuple(str(o) for o in options),
            )
            logger.info("Install lookup ambiguous: %d candidate versions", len(pending.options))
            message = data.get("message")
            return DispatchResult(
                intent=intent,
                reply_text=message if isinstance(message, str) and message else MULTIPLE_VERSIONS_MESSAGE,
                pending=pending,
            )

        return DispatchResult(intent=intent, reply_text=_as_text(data), payload=normalize(data))

    async def _analytics(self, intent: AnalyticsQuery) -> DispatchResult:
        try:
            raw = await self.backend.query_analytics(intent.query, intent.chart_hint)
        except Exception as e:
            logger.warning("Analytics query failed: %s", e)
            return DispatchResult(
                intent=intent,
                reply_text=f"Error while querying analytics: {_detail(e)}",
            )

        payload = normalize(raw)
        return DispatchResult(
            intent=intent,
            reply_text=payload.summary_text or DEFAULT_INSIGHTS_MESSAGE,
            payload=payload,
            static_chart=select_static_chart(raw, payload, intent.chart_hint),
        )

    async def _generic_ticket(self, intent: GenericTicket) -> DispatchResult:
        try:
            data = await self.backend.create_ticket(intent.query)
        except Exception as e:
            logger.warning("Ticket creation failed: %s", e)
            return DispatchResult(
                intent=intent,
                reply_text=f"Error while creating ticket: {_detail(e)}",
            )

        incident = data.get("incident") if isinstance(data, dict) else None
        return DispatchResult(
            intent=intent,
            reply_text=f"Ticket {incident} created for: {intent.query}",
            payload=normalize(data),
        )
