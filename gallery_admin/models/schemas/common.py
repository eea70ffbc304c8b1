"""Common Pydantic schemas used across the application."""
from typing import Optional

from pydantic import BaseModel, Field


class PaginationParams(BaseModel):
    """Pagination parameters."""

    page: int = Field(default=1, ge=1, description="Page number")
    per_page: int = Field(default=50, ge=1, le=500, description="Items per page")

    def to_query(self) -> dict[str, int]:
        return {"page": self.page, "per_page": self.per_page}


class MediaFilterParams(BaseModel):
    """Server-side media filters."""

    folder: Optional[str] = Field(default=None, description="Filter by folder")
    artist_id: Optional[str] = Field(default=None, description="Filter by artist")

    def to_query(self) -> dict[str, Optional[str]]:
        return {"folder": self.folder, "artist_id": self.artist_id}


class SuccessResponse(BaseModel):
    """Acknowledgement returned by delete endpoints."""

    success: bool = True
    message: Optional[str] = None
