"""/api/chat — send messages, confirm an install version, clear the session."""
import logging
from functools import lru_cache

from fastapi import APIRouter, Depends, HTTPException

from config import settings
from core.classifier import get_classifier
from core.dispatcher import DispatchEngine
from core.session import ChatSession, InvalidSelectionError, SessionBusyError
from core.transcript_store import TranscriptStore
from integrations.helpdesk_client import HelpdeskClient
from models.chat import ConfirmRequest, SendRequest, SessionView

router = APIRouter()
logger = logging.getLogger(__name__)

# In-memory registry: session_id → ChatSession (transcripts themselves are persisted)
_sessions: dict[str, ChatSession] = {}


@lru_cache
def get_engine() -> DispatchEngine:
    return DispatchEngine(HelpdeskClient(), classifier=get_classifier(settings.CLASSIFIER_MODE))


@lru_cache
def get_store() -> TranscriptStore:
    return TranscriptStore()


def get_session(session_id: str, store: TranscriptStore = Depends(get_store)) -> ChatSession:
    if session_id not in _sessions:
        _sessions[session_id] = ChatSession(session_id, store, settings.HISTORY_KEY)
    return _sessions[session_id]


@router.get("/chat/{session_id}", response_model=SessionView)
def read_session(session: ChatSession = Depends(get_session)):
    return session.view()


@router.post("/chat/{session_id}/messages", response_model=SessionView)
async def send_message(
    req: SendRequest,
    session: ChatSession = Depends(get_session),
    engine: DispatchEngine = Depends(get_engine),
):
    try:
        await session.send(req.text, engine)
    except SessionBusyError as e:
        raise HTTPException(status_code=409, detail=str(e))
    return session.view()


@router.post("/chat/{session_id}/confirm", response_model=SessionView)
async def confirm_version(
    req: ConfirmRequest,
    session: ChatSession = Depends(get_session),
    engine: DispatchEngine = Depends(get_engine),
):
    try:
        await session.confirm(req.choice, engine)
    except SessionBusyError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except InvalidSelectionError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return session.view()


@router.post("/chat/{session_id}/clear", response_model=SessionView)
def clear_session(session: ChatSession = Depends(get_session)):
    try:
        session.clear()
    except SessionBusyError as e:
        raise HTTPException(status_code=409, detail=str(e))
    view = session.view()
    # the reset transcript is persisted; the next request rebuilds the session from it
    _sessions.pop(session.session_id, None)
    return view


async def shutdown():
    """Close the shared backend client and transcript engine if they were created."""
    if get_engine.cache_info().currsize:
        await get_engine().backend.aclose()
    if get_store.cache_info().currsize:
        get_store().close()
