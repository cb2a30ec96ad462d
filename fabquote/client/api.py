from collections.abc import Sequence
from json import JSONDecodeError

import httpx
import structlog

from fabquote.client.files import LocalFile
from fabquote.client.orchestrator import ProgressCallback, UploadOrchestrator
from fabquote.core.config import get_settings
from fabquote.core.errors import UploadRequestError
from fabquote.models.upload import UploadCredential, UploadDescriptor

logger = structlog.get_logger()

PRESIGN_PATH = "/uploads/presigned-url"


class UploadApiClient:
    """Talks to the upload request service, then hands credentials to the orchestrator."""

    def __init__(
        self,
        base_url: str | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
        timeout: float | None = None,
    ):
        settings = get_settings()
        self.base_url = (base_url or settings.upload_api_url).rstrip("/")
        self.transport = transport
        self.timeout = timeout if timeout is not None else settings.upload_http_timeout_seconds

    async def request_credentials(self, descriptors: Sequence[UploadDescriptor]) -> list[UploadCredential]:
        payload = {"files": [d.to_wire() for d in descriptors]}
        async with httpx.AsyncClient(base_url=self.base_url, transport=self.transport, timeout=self.timeout) as client:
            try:
                response = await client.post(PRESIGN_PATH, json=payload)
            except httpx.TransportError as exc:
                raise UploadRequestError(None, f"Network error requesting upload URLs: {exc}") from exc

        try:
            body = response.json()
        except JSONDecodeError:
            body = {}
        if not isinstance(body, dict):
            body = {}
        if response.status_code != 200 or not body.get("success"):
            message = body.get("message") or response.reason_phrase
            raise UploadRequestError(response.status_code, message)

        credentials = [UploadCredential.from_wire(item) for item in body.get("presignedUrls", [])]
        if len(credentials) != len(descriptors):
            raise UploadRequestError(
                response.status_code,
                f"Expected {len(descriptors)} credentials, got {len(credentials)}",
            )
        return credentials

    async def upload(
        self,
        files: Sequence[LocalFile],
        orchestrator: UploadOrchestrator | None = None,
        on_progress: ProgressCallback | None = None,
    ) -> list[str]:
        """Request credentials for ``files`` and upload them; returns storage keys in order."""
        credentials = await self.request_credentials([f.descriptor() for f in files])
        logger.info("upload_credentials_received", files=len(credentials))
        orchestrator = orchestrator or UploadOrchestrator(timeout=self.timeout)
        return await orchestrator.upload_files(files, credentials, on_progress)
