from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class UploadDescriptor:
    """Client-declared file metadata. Untrusted until validated."""

    file_name: str
    file_type: str
    file_size: int

    def to_wire(self) -> dict[str, Any]:
        return {"fileName": self.file_name, "fileType": self.file_type, "fileSize": self.file_size}


@dataclass(frozen=True)
class UploadCredential:
    """Single-object write credential. Consumed at most once, never refreshed."""

    upload_url: str
    storage_key: str
    expires_in_seconds: int
    content_type: str
    headers: dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_wire(cls, data: dict[str, Any]) -> "UploadCredential":
        content_type = data.get("contentType") or ""
        headers = dict(data.get("headers") or {})
        if content_type:
            headers.setdefault("Content-Type", content_type)
        return cls(
            upload_url=data["uploadUrl"],
            storage_key=data["fileKey"],
            expires_in_seconds=int(data["expiresIn"]),
            content_type=content_type,
            headers=headers,
        )
