"""
Transcript store — append-only chat history persisted as JSON under one
versioned key per session in a SQLAlchemy key/value table.
"""
import json
import logging
from typing import Optional

from pydantic import TypeAdapter
from sqlalchemy import create_engine, text

from config import settings
from models.chat import ChatTurn, Role
from prompts.system_rules import render_system_rules

logger = logging.getLogger(__name__)

_turns_adapter = TypeAdapter(list[ChatTurn])


def system_turn() -> ChatTurn:
    return ChatTurn(role="system", content=render_system_rules(settings.ASSISTANT_TITLE))


def seed_turns() -> list[ChatTurn]:
    """Fresh history: the rule preamble and the assistant greeting."""
    return [system_turn(), ChatTurn(role="assistant", content=settings.ASSISTANT_GREETING)]


class TranscriptStore:
    """Key/value persistence for serialized transcripts."""

    def __init__(self, url: Optional[str] = None):
        self.engine = create_engine(url or settings.TRANSCRIPT_DB_URL, pool_pre_ping=True)
        with self.engine.begin() as con:
            con.execute(text(
                "CREATE TABLE IF NOT EXISTS chat_history ("
                " history_key TEXT PRIMARY KEY,"
                " value TEXT NOT NULL)"
            ))

    def get(self, key: str) -> Optional[str]:
        with self.engine.connect() as con:
            return con.execute(
                text("SELECT value FROM chat_history WHERE history_key = :k"), {"k": key}
            ).scalar()

    def put(self, key: str, value: str) -> None:
        with self.engine.begin() as con:
            con.execute(
                text(
                    "INSERT INTO chat_history (history_key, value) VALUES (:k, :v) "
                    "ON CONFLICT (history_key) DO UPDATE SET value = excluded.value"
                ),
                {"k": key, "v": value},
            )

    def load_turns(self, key: str) -> list[ChatTurn]:
        """
        Restore a transcript verbatim. Missing → seed turns; unreadable → only
        the system turn (the corrupt history is dropped, not recovered).
        """
        raw = self.get(key)
        if raw is None:
            return seed_turns()
        try:
            return _turns_adapter.validate_python(json.loads(raw))
        except ValueError as e:
            logger.warning("Transcript %s is corrupt, resetting: %s", key, e)
            turns = [system_turn()]
            self.save_turns(key, turns)
            return turns

    def save_turns(self, key: str, turns: list[ChatTurn]) -> None:
        self.put(key, json.dumps([t.model_dump() for t in turns], ensure_ascii=False))

    def close(self):
        self.engine.dispose()


class Transcript:
    """Ordered turns of one session; every append is persisted immediately."""

    def __init__(self, store: TranscriptStore, key: str):
        self.store = store
        self.key = key
        self._turns: list[ChatTurn] = store.load_turns(key)

    @property
    def turns(self) -> tuple[ChatTurn, ...]:
        return tuple(self._turns)

    def visible_turns(self) -> list[ChatTurn]:
        return [t for t in self._turns if t.role != "system"]

    def append(self, role: Role, content: str) -> ChatTurn:
        turn = ChatTurn(role=role, content=content)
        self._turns.append(turn)
        self.store.save_turns(self.key, self._turns)
        return turn

    def reset(self) -> None:
        self._turns = seed_turns()
        self.store.save_turns(self.key, self._turns)
