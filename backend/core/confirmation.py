"""
Confirmation state machine for ambiguous install lookups.

Idle (pending is None) ↔ AwaitingChoice (one PendingConfirmation). A
resolution attempt always ends in Idle, whether the backend call succeeds
or fails; an empty choice is a no-op.
"""
import logging
from typing import Optional

from core.normalizer import normalize
from integrations.helpdesk_client import BackendError, HelpdeskClient
from models.dispatch import ConfirmationOutcome, PendingConfirmation

logger = logging.getLogger(__name__)


def is_awaiting_choice(pending: Optional[PendingConfirmation]) -> bool:
    return pending is not None


async def confirm_selection(
    backend: HelpdeskClient,
    pending: Optional[PendingConfirmation],
    choice: Optional[str],
) -> ConfirmationOutcome:
    """Re-run the install lookup for the chosen version and return to Idle."""
    if not choice or not choice.strip() or pending is None:
        return ConfirmationOutcome(pending=pending)

    reply: str
    payload = None
    try:
        data = await backend.lookup_install(pending.original_query, choice)
        data = data if isinstance(data, dict) else {}
        reply = f"✅ {data.get('message') or 'Ticket created'} • Incident: {data.get('incident') or 'N/A'}"
        payload = normalize(data)
    except Exception as e:
        logger.warning("Version confirmation %r failed: %s", choice, e)
        detail = e.detail if isinstance(e, BackendError) else str(e)
        reply = f"❌ Failed: {detail}"

    logger.info("Confirmation for %r resolved, clearing pending choice", pending.original_query[:80])
    return ConfirmationOutcome(reply_text=reply, pending=None, payload=payload)
