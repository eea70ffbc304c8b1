"""In-memory representation of a file waiting to be uploaded."""
from dataclasses import dataclass, field


@dataclass(frozen=True)
class UploadFile:
    """File content plus the multipart metadata httpx needs."""

    filename: str
    content: bytes = field(repr=False)
    content_type: str = "application/octet-stream"

    @property
    def size(self) -> int:
        return len(self.content)

    def as_multipart(self) -> tuple[str, bytes, str]:
        return (self.filename, self.content, self.content_type)
