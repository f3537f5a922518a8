"""Application settings loaded from .env file."""
from typing import Literal, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Helpdesk backend
    BACKEND_URL: str = "http://127.0.0.1:8000"
    BACKEND_TIMEOUT_SECONDS: Optional[float] = None   # None = wait for the transport
    ANALYTICS_PATH: str = "/chat"
    TICKET_IMPACT: str = "2"
    TICKET_CATEGORY: str = "Software"

    # Dispatch
    CLASSIFIER_MODE: Literal["client", "backend"] = "client"

    # Transcript persistence
    TRANSCRIPT_DB_URL: str = "sqlite:///./chat_history.db"
    HISTORY_KEY: str = "chat_history_v1"

    # Assistant
    ASSISTANT_TITLE: str = "Conversational Sales Insights with Northwind DB"
    ASSISTANT_GREETING: str = "Hi! I'm your IT assistant. How can I help you today?"

    # API
    API_HOST: str = "0.0.0.0"
    API_PORT: int = 8001
    CORS_ORIGINS: str = "http://localhost:5173"

    # Logging
    LOG_LEVEL: str = "INFO"


settings = Settings()
