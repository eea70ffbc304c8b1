"""Media Pydantic schemas."""
from datetime import datetime
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _as_id(v: Any) -> Any:
    """Ids are opaque strings; the backend sends UUIDs, fixtures may send ints."""
    if v is None or isinstance(v, str):
        return v
    return str(v)


class MediaItem(BaseModel):
    """An uploaded file as returned by the media endpoints."""

    id: str = Field(..., min_length=1, description="Media id assigned by the backend")
    filename: str = Field(..., description="Stored filename")
    url: str = Field(..., description="Public URL of the file")
    alt: Optional[str] = Field(default=None, description="Alternative text")
    credit: Optional[str] = Field(default=None, description="Photo credit")
    folder: Optional[str] = Field(default=None, description="Library folder")
    artist_id: Optional[str] = Field(default=None, description="Artist the media belongs to")
    artist_name: Optional[str] = Field(default=None, description="Artist display name")
    width: Optional[int] = Field(default=None, ge=1, description="Width in pixels")
    height: Optional[int] = Field(default=None, ge=1, description="Height in pixels")
    created_at: datetime

    model_config = ConfigDict(frozen=True, extra="ignore")

    @field_validator("id", "artist_id", mode="before")
    @classmethod
    def coerce_ids(cls, v: Any) -> Any:
        return _as_id(v)

    @property
    def label(self) -> str:
        """Caption shown under a thumbnail."""
        return self.alt or self.filename


class PatchState(str, Enum):
    """What a patch does to one field."""

    UNSET = "unset"
    CLEAR = "clear"
    VALUE = "value"


class MediaUpdate(BaseModel):
    """
    Partial update of a media item.

    A field left out of the constructor is not sent at all; a field passed
    as ``None`` is sent as ``null`` and clears the stored value.
    """

    alt: Optional[str] = None
    credit: Optional[str] = None
    folder: Optional[str] = None
    artist_id: Optional[str] = None

    @field_validator("artist_id", mode="before")
    @classmethod
    def coerce_ids(cls, v: Any) -> Any:
        return _as_id(v)

    def field_state(self, name: str) -> PatchState:
        if name not in type(self).model_fields:
            raise KeyError(name)
        if name not in self.model_fields_set:
            return PatchState.UNSET
        if getattr(self, name) is None:
            return PatchState.CLEAR
        return PatchState.VALUE

    def to_payload(self) -> dict[str, Optional[str]]:
        """JSON body containing only the fields that were set."""
        return self.model_dump(exclude_unset=True, mode="json")

    @property
    def is_empty(self) -> bool:
        return not self.model_fields_set


class MediaUploadMetadata(BaseModel):
    """Optional form fields sent alongside an uploaded file."""

    alt: Optional[str] = None
    credit: Optional[str] = None
    folder: Optional[str] = None
    artist_id: Optional[str] = None

    @field_validator("artist_id", mode="before")
    @classmethod
    def coerce_ids(cls, v: Any) -> Any:
        return _as_id(v)

    def to_form(self) -> dict[str, str]:
        """Multipart fields; empty values are left out."""
        return {k: v for k, v in self.model_dump().items() if v}

    def with_artist(self, artist_id: Optional[str]) -> "MediaUploadMetadata":
        """Copy tagged with ``artist_id`` unless one is already set."""
        if self.artist_id or not artist_id:
            return self
        return self.model_copy(update={"artist_id": artist_id})
