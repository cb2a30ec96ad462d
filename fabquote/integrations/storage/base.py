import re
import secrets
from datetime import UTC, datetime

from fabquote.core.constants import STORAGE_KEY_PREFIX
from fabquote.models.upload import UploadCredential, UploadDescriptor

UNSAFE_KEY_CHARS_RE = re.compile(r"[^a-zA-Z0-9.-]")


def sanitize_file_name(file_name: str) -> str:
    return UNSAFE_KEY_CHARS_RE.sub("_", file_name)


def generate_storage_key(file_name: str, now: datetime | None = None) -> str:
    issued_at = now or datetime.now(UTC)
    timestamp_ms = int(issued_at.timestamp() * 1000)
    token = secrets.token_hex(8)
    return f"{STORAGE_KEY_PREFIX}{timestamp_ms}-{token}-{sanitize_file_name(file_name)}"


class StorageProvider:
    name: str = "base"

    def issue_upload(self, descriptor: UploadDescriptor) -> UploadCredential:
        raise NotImplementedError

    def is_configured(self) -> bool:
        raise NotImplementedError
