from uuid import UUID

from pydantic import EmailStr, Field, field_validator

from fabquote.core.constants import MAX_FILES_PER_BATCH, STORAGE_KEY_PREFIX, MaterialType, Timeline
from fabquote.schemas.common import CamelModel
from fabquote.utils.phone import is_valid_contact_phone


class QuoteSubmissionIn(CamelModel):
    timeline: Timeline
    project_name: str | None = Field(default=None, max_length=200)

    material: MaterialType
    material_grade: str | None = Field(default=None, max_length=100)
    quantity: int | None = Field(default=None, gt=0)

    company_name: str = Field(min_length=2, max_length=200)
    contact_name: str = Field(min_length=2, max_length=200)
    email: EmailStr
    phone: str
    additional_notes: str | None = Field(default=None, max_length=5000)

    file_keys: list[str] = Field(default_factory=list, max_length=MAX_FILES_PER_BATCH)

    @field_validator("phone")
    @classmethod
    def validate_phone(cls, value: str) -> str:
        if not is_valid_contact_phone(value):
            raise ValueError("Please enter a valid phone number")
        return value.strip()

    @field_validator("file_keys")
    @classmethod
    def validate_file_keys(cls, value: list[str]) -> list[str]:
        for key in value:
            if not key.startswith(STORAGE_KEY_PREFIX) or "/" in key.removeprefix(STORAGE_KEY_PREFIX):
                raise ValueError(f"Unknown file key: {key}")
        if len(set(value)) != len(value):
            raise ValueError("Duplicate file keys")
        return value


class QuoteAcceptedOut(CamelModel):
    success: bool = True
    quote_id: UUID
    file_count: int
