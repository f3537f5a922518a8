"""
Chat session — the three UI actions (send, confirm selection, clear) over one
transcript, one pending-confirmation slot and one last-payload slot.

Only one dispatch may be in flight per session; a second one is rejected
while `thinking` is set.
"""
import logging
from typing import Optional

from core.confirmation import confirm_selection, is_awaiting_choice
from core.dispatcher import DispatchEngine
from core.sales_charts import build_static_chart
from core.transcript_store import Transcript, TranscriptStore
from models.chat import SessionView
from models.dispatch import ConfirmationOutcome, DispatchResult, PendingConfirmation
from models.payload import ChartSpec, ResponsePayload

logger = logging.getLogger(__name__)


class SessionBusyError(RuntimeError):
    """A send, confirm or clear arrived while a dispatch was still in flight."""


class InvalidSelectionError(ValueError):
    """The confirmed choice was not one of the pending options."""


class ChatSession:
    def __init__(self, session_id: str, store: TranscriptStore, history_key: str):
        self.session_id = session_id
        self.transcript = Transcript(store, f"{history_key}:{session_id}")
        self.pending: Optional[PendingConfirmation] = None
        self.last_payload: Optional[ResponsePayload] = None
        self.static_chart: Optional[str] = None
        self.thinking = False

    def _begin(self):
        if self.thinking:
            raise SessionBusyError(f"Session '{self.session_id}' is still thinking")
        self.thinking = True

    async def send(self, text: str, engine: DispatchEngine) -> Optional[DispatchResult]:
        """Append the user turn, dispatch, append the reply. Blank text is ignored."""
        text = text.strip()
        if not text:
            return None
        self._begin()
        try:
            self.transcript.append("user", text)
            choice = self.pending.match(text) if is_awaiting_choice(self.pending) else None
            if choice is not None:
                logger.info("Message selects pending option %r", choice)
                outcome = await self._resolve(choice, engine)
                self.transcript.append("assistant", outcome.reply_text)
                return None
            result = await engine.dispatch(text, self.pending)
        finally:
            self.thinking = False

        self.pending = result.pending
        self.last_payload = result.payload
        self.static_chart = result.static_chart
        self.transcript.append("assistant", result.reply_text)
        return result

    async def confirm(self, choice: Optional[str], engine: DispatchEngine) -> ConfirmationOutcome:
        if not choice or not choice.strip() or self.pending is None:
            return ConfirmationOutcome(pending=self.pending)
        if choice not in self.pending.options:
            raise InvalidSelectionError(f"'{choice}' is not one of the offered versions")
        self._begin()
        try:
            outcome = await self._resolve(choice, engine)
        finally:
            self.thinking = False
        self.transcript.append("assistant", outcome.reply_text)
        return outcome

    async def _resolve(self, choice: str, engine: DispatchEngine) -> ConfirmationOutcome:
        try:
            outcome = await confirm_selection(engine.backend, self.pending, choice)
        finally:
            # the choice control never outlives a resolution attempt
            self.pending = None
        self.last_payload = outcome.payload
        self.static_chart = None
        return outcome

    def clear(self):
        if self.thinking:
            raise SessionBusyError(f"Session '{self.session_id}' cannot be cleared while thinking")
        self.transcript.reset()
        self.pending = None
        self.last_payload = None
        self.static_chart = None
        logger.info("Session %s cleared", self.session_id)

    def current_chart(self) -> Optional[ChartSpec]:
        if self.static_chart:
            return build_static_chart(self.static_chart)
        if self.last_payload is not None:
            return self.last_payload.chart_spec
        return None

    def view(self) -> SessionView:
        return SessionView(
            session_id=self.session_id,
            messages=self.transcript.visible_turns(),
            pending=self.pending,
            payload=self.last_payload,
            chart=self.current_chart(),
            table_columns=self.last_payload.table_columns if self.last_payload else [],
            thinking=self.thinking,
        )
