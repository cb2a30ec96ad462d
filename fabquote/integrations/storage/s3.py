from datetime import UTC, datetime
from urllib.parse import quote

import boto3
import structlog
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from fabquote.core.config import Settings, get_settings
from fabquote.core.constants import PRESIGN_TTL_SECONDS
from fabquote.core.errors import CredentialIssueError, StorageConfigurationError
from fabquote.integrations.storage.base import StorageProvider, generate_storage_key
from fabquote.models.upload import UploadCredential, UploadDescriptor
from fabquote.services.upload_policy import canonical_content_type

logger = structlog.get_logger()

SERVER_SIDE_ENCRYPTION = "AES256"


class S3StorageProvider(StorageProvider):
    name = "s3"

    def __init__(self, settings: Settings | None = None, client=None) -> None:
        settings = settings or get_settings()
        self.settings = settings
        self.client = client or boto3.client(
            "s3",
            endpoint_url=settings.s3_endpoint or None,
            region_name=settings.s3_region,
            aws_access_key_id=settings.s3_access_key or None,
            aws_secret_access_key=settings.s3_secret_key or None,
            config=Config(signature_version="s3v4"),
        )
        self.bucket = settings.s3_bucket

    def is_configured(self) -> bool:
        return bool(self.bucket)

    def issue_upload(self, descriptor: UploadDescriptor) -> UploadCredential:
        if not self.bucket:
            raise StorageConfigurationError("S3_BUCKET is not configured")

        issued_at = datetime.now(UTC)
        object_key = generate_storage_key(descriptor.file_name, now=issued_at)
        content_type = canonical_content_type(descriptor)
        metadata = {
            "original-file-name": quote(descriptor.file_name, safe=""),
            "uploaded-at": issued_at.isoformat(),
        }
        try:
            url = self.client.generate_presigned_url(
                "put_object",
                Params={
                    "Bucket": self.bucket,
                    "Key": object_key,
                    "ContentType": content_type,
                    "ContentLength": descriptor.file_size,
                    "ServerSideEncryption": SERVER_SIDE_ENCRYPTION,
                    "Metadata": metadata,
                },
                ExpiresIn=PRESIGN_TTL_SECONDS,
                HttpMethod="PUT",
            )
        except (BotoCoreError, ClientError) as exc:
            raise CredentialIssueError(f"presign_failed: {exc}") from exc

        headers = {
            "Content-Type": content_type,
            "x-amz-server-side-encryption": SERVER_SIDE_ENCRYPTION,
        }
        headers.update({f"x-amz-meta-{key}": value for key, value in metadata.items()})
        logger.debug("upload_credential_issued", key=object_key, size=descriptor.file_size)
        return UploadCredential(
            upload_url=url,
            storage_key=object_key,
            expires_in_seconds=PRESIGN_TTL_SECONDS,
            content_type=content_type,
            headers=headers,
        )
