from json import JSONDecodeError

from fastapi import APIRouter, Depends, Request, Response
from prometheus_client import Counter

from fabquote.api.deps import get_presign_service
from fabquote.core.config import get_settings
from fabquote.core.errors import PipelineError, UploadRejected
from fabquote.schemas.common import ErrorOut
from fabquote.schemas.uploads import PresignedUrlOut, PresignResponse
from fabquote.services.presign_service import PresignService

router = APIRouter(prefix="/uploads", tags=["uploads"])
PRESIGN_REQUESTS = Counter("fabquote_presign_requests_total", "Presigned URL batch requests", ["outcome"])
CREDENTIALS_ISSUED = Counter("fabquote_credentials_issued_total", "Upload credentials issued")


def preflight_headers() -> dict[str, str]:
    return {
        "Access-Control-Allow-Origin": get_settings().allowed_origin,
        "Access-Control-Allow-Methods": "POST, OPTIONS",
        "Access-Control-Allow-Headers": "Content-Type, Authorization",
    }


@router.options("/presigned-url")
async def presigned_url_preflight():
    return Response(status_code=200, headers=preflight_headers())


@router.post(
    "/presigned-url",
    response_model=PresignResponse,
    responses={400: {"model": ErrorOut}, 500: {"model": ErrorOut}},
)
async def create_presigned_urls(request: Request, service: PresignService = Depends(get_presign_service)):
    try:
        payload = await request.json()
    except (JSONDecodeError, UnicodeDecodeError) as exc:
        PRESIGN_REQUESTS.labels(outcome="rejected").inc()
        raise UploadRejected("Request body is required") from exc

    try:
        credentials = service.handle(payload)
    except PipelineError as exc:
        PRESIGN_REQUESTS.labels(outcome="rejected" if exc.status_code < 500 else "error").inc()
        raise

    PRESIGN_REQUESTS.labels(outcome="issued").inc()
    CREDENTIALS_ISSUED.inc(len(credentials))
    return PresignResponse(presigned_urls=[PresignedUrlOut.from_credential(c) for c in credentials])
