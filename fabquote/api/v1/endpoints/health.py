from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse, PlainTextResponse
from prometheus_client import CONTENT_TYPE_LATEST, Counter, generate_latest

from fabquote.api.deps import get_provider
from fabquote.integrations.storage.base import StorageProvider

router = APIRouter(tags=["health"])
REQUEST_COUNTER = Counter("fabquote_api_requests_total", "Total API requests", ["path"])


@router.get("/health/live")
async def health_live():
    REQUEST_COUNTER.labels(path="/health/live").inc()
    return {"status": "ok"}


@router.get("/health/ready")
async def health_ready(provider: StorageProvider = Depends(get_provider)):
    REQUEST_COUNTER.labels(path="/health/ready").inc()
    if not provider.is_configured():
        return JSONResponse(status_code=503, content={"status": "storage_not_configured"})
    return {"status": "ready"}


@router.get("/metrics", response_class=PlainTextResponse)
async def metrics():
    return PlainTextResponse(generate_latest().decode("utf-8"), media_type=CONTENT_TYPE_LATEST)
