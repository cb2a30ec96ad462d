import math

from pydantic import Field, field_validator

from fabquote.core.constants import MAX_FILES_PER_BATCH
from fabquote.models.upload import UploadCredential, UploadDescriptor
from fabquote.schemas.common import CamelModel


class UploadFileIn(CamelModel):
    file_name: str = Field(strict=True, min_length=1)
    file_type: str = Field(strict=True, min_length=1)
    file_size: int = Field(strict=True, gt=0)

    @field_validator("file_size", mode="before")
    @classmethod
    def integral_float_size(cls, value):
        if isinstance(value, float) and math.isfinite(value) and value.is_integer():
            return int(value)
        return value

    def to_descriptor(self) -> UploadDescriptor:
        return UploadDescriptor(file_name=self.file_name, file_type=self.file_type, file_size=self.file_size)


class PresignRequest(CamelModel):
    files: list[UploadFileIn] = Field(min_length=1, max_length=MAX_FILES_PER_BATCH)


class PresignedUrlOut(CamelModel):
    upload_url: str
    file_key: str
    expires_in: int
    content_type: str
    headers: dict[str, str]

    @classmethod
    def from_credential(cls, credential: UploadCredential) -> "PresignedUrlOut":
        return cls(
            upload_url=credential.upload_url,
            file_key=credential.storage_key,
            expires_in=credential.expires_in_seconds,
            content_type=credential.content_type,
            headers=credential.headers,
        )


class PresignResponse(CamelModel):
    success: bool = True
    presigned_urls: list[PresignedUrlOut]
