"""GET /api/health — helpdesk backend reachability check."""
import logging
import httpx
from fastapi import APIRouter
from config import settings

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/health")
def health_check():
    backend_status = _check_backend()
    overall = "ok" if backend_status["status"] == "up" else "degraded"
    return {
        "status": overall,
        "classifier_mode": settings.CLASSIFIER_MODE,
        "services": {
            "helpdesk_backend": backend_status,
        },
    }


def _check_backend() -> dict:
    try:
        # any HTTP answer means the server is reachable
        httpx.get(f"{settings.BACKEND_URL.rstrip('/')}/docs", timeout=5)
        return {"status": "up", "url": settings.BACKEND_URL}
    except Exception as e:
        logger.warning("Backend health check failed: %s", e)
        return {"status": "down", "error": str(e)}
