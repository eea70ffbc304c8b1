"""Artwork Pydantic schemas."""
from datetime import datetime
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .media import MediaItem


def _as_id(v: Any) -> Any:
    if v is None or isinstance(v, str):
        return v
    return str(v)


class Artwork(BaseModel):
    """Artwork with its images, in display order."""

    id: str = Field(..., min_length=1)
    artist_id: str = Field(..., min_length=1)
    title: str = Field(..., min_length=1)
    slug: str = ""
    year: Optional[int] = None
    medium: Optional[str] = None
    dimensions: Optional[str] = None
    price_note: Optional[str] = None
    artsper_url: Optional[str] = None
    published: bool = False
    published_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    media: List[MediaItem] = Field(default_factory=list, description="Images, first one is the cover")
    artist_name: Optional[str] = None
    artist_slug: Optional[str] = None

    model_config = ConfigDict(frozen=True, extra="ignore")

    @field_validator("id", "artist_id", mode="before")
    @classmethod
    def coerce_ids(cls, v: Any) -> Any:
        return _as_id(v)

    @property
    def media_ids(self) -> List[str]:
        return [item.id for item in self.media]


class ArtworkCreate(BaseModel):
    """Schema for creating an artwork."""

    artist_id: str = Field(..., min_length=1)
    title: str = Field(..., min_length=1, description="Title is required")
    year: Optional[int] = None
    medium: Optional[str] = None
    dimensions: Optional[str] = None
    price_note: Optional[str] = None
    artsper_url: Optional[str] = None
    media_ids: Optional[List[str]] = Field(default=None, description="Image ids; the list order is the display order")
    published: Optional[bool] = None

    @field_validator("artist_id", mode="before")
    @classmethod
    def coerce_ids(cls, v: Any) -> Any:
        return _as_id(v)


class ArtworkUpdate(BaseModel):
    """
    Partial update of an artwork.

    Only the fields passed to the constructor are sent. Sending
    ``media_ids`` replaces the whole image list with that order.
    """

    artist_id: Optional[str] = None
    title: Optional[str] = Field(default=None, min_length=1)
    year: Optional[int] = None
    medium: Optional[str] = None
    dimensions: Optional[str] = None
    price_note: Optional[str] = None
    artsper_url: Optional[str] = None
    media_ids: Optional[List[str]] = None
    published: Optional[bool] = None

    @field_validator("artist_id", mode="before")
    @classmethod
    def coerce_ids(cls, v: Any) -> Any:
        return _as_id(v)
