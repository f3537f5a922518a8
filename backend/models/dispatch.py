"""Pydantic schemas for dispatch results and the pending confirmation slot."""
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from models.intent import Intent, StaticChart
from models.payload import ResponsePayload


class PendingConfirmation(BaseModel):
    """An unresolved multi-version install choice. Never built with fewer than 2 options."""
    model_config = ConfigDict(frozen=True)

    original_query: str
    options: tuple[str, ...] = Field(..., min_length=2)

    def match(self, text: str) -> Optional[str]:
        """Return the offered option equal to ``text`` (case-insensitive), if any."""
        needle = text.strip().lower()
        return next((o for o in self.options if o.lower() == needle), None)


class DispatchResult(BaseModel):
    intent: Intent
    reply_text: str
    pending: Optional[PendingConfirmation] = None
    payload: Optional[ResponsePayload] = None
    static_chart: Optional[StaticChart] = None


class ConfirmationOutcome(BaseModel):
    reply_text: Optional[str] = None       # None = no-op, nothing to append
    pending: Optional[PendingConfirmation] = None
    payload: Optional[ResponsePayload] = None

    @property
    def is_noop(self) -> bool:
        return self.reply_text is None
