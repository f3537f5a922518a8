"""Pydantic schemas for chat turns and the chat API."""
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from models.dispatch import PendingConfirmation
from models.payload import ChartSpec, ResponsePayload

Role = Literal["system", "user", "assistant"]


class ChatTurn(BaseModel):
    model_config = ConfigDict(frozen=True)

    role: Role
    content: str


class SendRequest(BaseModel):
    text: str = Field(..., min_length=1, description="Raw user utterance")


class ConfirmRequest(BaseModel):
    choice: str = Field("", description="One of the options offered by the pending confirmation")


class SessionView(BaseModel):
    session_id: str
    messages: list[ChatTurn]               # system turns excluded
    pending: Optional[PendingConfirmation] = None
    payload: Optional[ResponsePayload] = None
    chart: Optional[ChartSpec] = None
    table_columns: list[str] = []          # column order of payload.table_rows
    thinking: bool = False
