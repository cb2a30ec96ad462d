from typing import Any

import structlog
from pydantic import ValidationError

from fabquote.core.constants import MAX_FILES_PER_BATCH
from fabquote.core.errors import UploadRejected
from fabquote.integrations.storage.base import StorageProvider
from fabquote.integrations.storage.factory import get_storage_provider
from fabquote.models.upload import UploadCredential, UploadDescriptor
from fabquote.schemas.uploads import PresignRequest
from fabquote.services.upload_policy import validate_descriptor

logger = structlog.get_logger()

MISSING_FILES_MESSAGE = "Files array is required and must not be empty"
MISSING_FIELDS_MESSAGE = "Each file must have fileName, fileType, and fileSize"


def _rejection_for(exc: ValidationError) -> UploadRejected:
    errors = exc.errors()
    for error in errors:
        if tuple(error["loc"]) == ("files",):
            if error["type"] == "too_long":
                return UploadRejected(f"Maximum {MAX_FILES_PER_BATCH} files allowed per upload")
            return UploadRejected(MISSING_FILES_MESSAGE)
    for error in errors:
        if error["loc"][-1:] == ("fileSize",) and error["type"] == "greater_than":
            return UploadRejected("fileSize must be a positive whole number of bytes")
    return UploadRejected(MISSING_FIELDS_MESSAGE)


def parse_upload_batch(payload: Any) -> list[UploadDescriptor]:
    """Turn a raw request body into descriptors, rejecting the batch as a whole."""
    if not isinstance(payload, dict):
        raise UploadRejected(MISSING_FILES_MESSAGE)
    files = payload.get("files")
    if isinstance(files, list) and len(files) > MAX_FILES_PER_BATCH:
        raise UploadRejected(f"Maximum {MAX_FILES_PER_BATCH} files allowed per upload")
    try:
        request = PresignRequest.model_validate(payload)
    except ValidationError as exc:
        raise _rejection_for(exc) from exc
    return [item.to_descriptor() for item in request.files]


class PresignService:
    def __init__(self, provider: StorageProvider | None = None):
        self.provider = provider or get_storage_provider()

    def issue_batch(self, descriptors: list[UploadDescriptor]) -> list[UploadCredential]:
        # Validate everything first so a rejection never leaves credentials behind.
        for descriptor in descriptors:
            verdict = validate_descriptor(descriptor)
            if not verdict.accepted:
                logger.info("upload_rejected", file_name=descriptor.file_name, reason=verdict.reason)
                raise UploadRejected(verdict.reason or "File rejected")
        return [self.provider.issue_upload(descriptor) for descriptor in descriptors]

    def handle(self, payload: Any) -> list[UploadCredential]:
        descriptors = parse_upload_batch(payload)
        credentials = self.issue_batch(descriptors)
        logger.info(
            "presign_batch_issued",
            files=len(credentials),
            keys=[c.storage_key for c in credentials],
        )
        return credentials
