# slotify/routers/health.py
"""
System health check endpoint.
Returns status of backend + DB.
"""

from datetime import datetime

from fastapi import APIRouter, Request

from slotify.utils.logger import get_logger

router = APIRouter()
logger = get_logger(__name__)


@router.get("/health", summary="System health check")
def health_check(request: Request):
    result = {
        "status": "ok",
        "timestamp": datetime.now().astimezone().isoformat(),
        "backend": "ok",
        "database": "unknown",
    }

    try:
        request.app.state.db.ping()
        result["database"] = "ok"
    except Exception as e:
        logger.error(f"Health check: database unreachable: {e}")
        result["database"] = f"error: {str(e)}"
        result["status"] = "degraded"

    return result
