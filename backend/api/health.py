"""GET /api/health — upstream dependency check."""
import logging
import httpx
from fastapi import APIRouter
from config import settings

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/health")
def health_check():
    starrez_status   = _check_starrez()
    converter_status = _check_converter()
    overall = "ok" if starrez_status["status"] == "up" and converter_status["status"] == "up" else "degraded"
    return {
        "status": overall,
        "services": {
            "starrez":   starrez_status,
            "converter": converter_status,
        },
    }


def _check_starrez() -> dict:
    url = settings.starrez_connection().root_url()
    try:
        resp = httpx.get(f"{url}/swagger", timeout=5)
        resp.raise_for_status()
        return {"status": "up", "url": url}
    except Exception as e:
        return {"status": "down", "error": str(e)}


def _check_converter() -> dict:
    try:
        # Any HTTP answer means the service is reachable; it only accepts POST.
        httpx.get(settings.SWAGGER_CONVERTER_URL, timeout=5)
        return {"status": "up", "url": settings.SWAGGER_CONVERTER_URL}
    except Exception as e:
        return {"status": "down", "error": str(e)}
