"""
Helpdesk Assistant — conversational front end for install, ticket,
incident-status and sales-analytics requests.
FastAPI application entry point.
"""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api import health, chat
from config import settings

# ── Logging ──────────────────────────────────────────────────────────────────
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%S",
)
logger = logging.getLogger("helpdesk_assistant")


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Helpdesk Assistant starting up (backend %s, classifier %s)…",
                settings.BACKEND_URL, settings.CLASSIFIER_MODE)
    yield
    await chat.shutdown()
    logger.info("Helpdesk Assistant shutting down.")


# ── App ───────────────────────────────────────────────────────────────────────
app = FastAPI(
    title="Helpdesk Assistant",
    description="Chat front end that routes utterances to helpdesk and analytics endpoints.",
    version="1.0.0",
    lifespan=lifespan,
)

# ── CORS ──────────────────────────────────────────────────────────────────────
origins = [o.strip() for o in settings.CORS_ORIGINS.split(",") if o.strip()]
app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ── Routers ───────────────────────────────────────────────────────────────────
app.include_router(health.router, prefix="/api")
app.include_router(chat.router,   prefix="/api")


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("main:app", host=settings.API_HOST, port=settings.API_PORT)
