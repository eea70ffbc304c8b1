"""Artist Pydantic schemas."""
from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .media import MediaItem


class Artist(BaseModel):
    """Artist as returned by the admin artist endpoints."""

    id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1, max_length=255)
    slug: str = ""
    bio_md: Optional[str] = None
    portrait_media_id: Optional[str] = None
    artsper_url: Optional[str] = None
    website_url: Optional[str] = None
    instagram_url: Optional[str] = None
    published: bool = False
    published_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    portrait: Optional[MediaItem] = None

    model_config = ConfigDict(frozen=True, extra="ignore")

    @field_validator("id", "portrait_media_id", mode="before")
    @classmethod
    def coerce_ids(cls, v: Any) -> Any:
        if v is None or isinstance(v, str):
            return v
        return str(v)


class ArtistChoice(BaseModel):
    """An (id, name) pair offered in artist drop-downs."""

    id: str
    name: str

    model_config = ConfigDict(frozen=True)

    @classmethod
    def from_artist(cls, artist: Artist) -> "ArtistChoice":
        return cls(id=artist.id, name=artist.name)
