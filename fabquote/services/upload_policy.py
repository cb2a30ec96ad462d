"""Upload policy: per-file checks applied before any credential is issued.

Checks run in a fixed order and the first failure wins: size ceiling, extension
allow-list, then declared content type against the extension.
"""

import re
from collections.abc import Sequence
from dataclasses import dataclass

from fabquote.core.constants import (
    ALLOWED_CONTENT_TYPES,
    EXTENSION_CONTENT_TYPES,
    GENERIC_BINARY_TYPE,
    MAX_FILE_SIZE,
)
from fabquote.models.upload import UploadDescriptor

EXTENSION_RE = re.compile(r"\.[^.]+$")


@dataclass(frozen=True)
class ValidationVerdict:
    accepted: bool
    reason: str | None = None

    @classmethod
    def accept(cls) -> "ValidationVerdict":
        return cls(accepted=True)

    @classmethod
    def reject(cls, reason: str) -> "ValidationVerdict":
        return cls(accepted=False, reason=reason)


def file_extension(file_name: str) -> str | None:
    match = EXTENSION_RE.search(file_name.lower())
    return match.group(0) if match else None


def canonical_content_type(descriptor: UploadDescriptor) -> str:
    ext = file_extension(descriptor.file_name)
    return EXTENSION_CONTENT_TYPES.get(ext or "", descriptor.file_type)


def validate_descriptor(descriptor: UploadDescriptor) -> ValidationVerdict:
    if descriptor.file_size > MAX_FILE_SIZE:
        return ValidationVerdict.reject(
            f"File size exceeds maximum allowed size of {MAX_FILE_SIZE // (1024 * 1024)}MB"
        )

    ext = file_extension(descriptor.file_name)
    if not ext:
        return ValidationVerdict.reject("File must have a valid extension")
    expected = EXTENSION_CONTENT_TYPES.get(ext)
    if expected is None:
        allowed = ", ".join(EXTENSION_CONTENT_TYPES)
        return ValidationVerdict.reject(f"File type {ext} is not allowed. Allowed types: {allowed}")

    declared = descriptor.file_type
    if declared != expected and declared != GENERIC_BINARY_TYPE and declared not in ALLOWED_CONTENT_TYPES:
        return ValidationVerdict.reject(f"Invalid file type {declared} for extension {ext}")

    return ValidationVerdict.accept()


def validate_batch(descriptors: Sequence[UploadDescriptor]) -> list[ValidationVerdict]:
    return [validate_descriptor(d) for d in descriptors]
