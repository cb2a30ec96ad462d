import mimetypes
from dataclasses import dataclass
from pathlib import Path

from fabquote.core.constants import GENERIC_BINARY_TYPE
from fabquote.models.upload import UploadDescriptor


@dataclass(frozen=True)
class LocalFile:
    name: str
    data: bytes
    content_type: str = GENERIC_BINARY_TYPE

    @classmethod
    def from_path(cls, path: str | Path) -> "LocalFile":
        path = Path(path)
        content_type = mimetypes.guess_type(path.name)[0] or GENERIC_BINARY_TYPE
        return cls(name=path.name, data=path.read_bytes(), content_type=content_type)

    @property
    def size(self) -> int:
        return len(self.data)

    def descriptor(self) -> UploadDescriptor:
        return UploadDescriptor(file_name=self.name, file_type=self.content_type, file_size=self.size)
