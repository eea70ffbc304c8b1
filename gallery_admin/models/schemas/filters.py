"""Media picker filter schemas."""
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class DateFilter(str, Enum):
    """Upload-date bucket."""

    ALL = "all"
    TODAY = "today"
    WEEK = "week"
    MONTH = "month"


class SortBy(str, Enum):
    """Display order of the media grid."""

    DATE_DESC = "date_desc"
    DATE_ASC = "date_asc"
    NAME_ASC = "name_asc"
    NAME_DESC = "name_desc"


class EmptyState(str, Enum):
    """Why the media grid shows nothing."""

    NO_MEDIA = "no_media"
    NO_MATCH = "no_match"


class PickerFilters(BaseModel):
    """Filters and sort order of one picker session."""

    date_filter: DateFilter = Field(default=DateFilter.ALL, description="Upload-date bucket")
    artist_id: Optional[str] = Field(default=None, description="Only media of this artist")
    sort_by: SortBy = Field(default=SortBy.DATE_DESC, description="Display order")

    model_config = ConfigDict(
        validate_assignment=True,
        json_schema_extra={
            "example": {
                "date_filter": "week",
                "artist_id": "3f0c6a0e-1d55-4c69-9a51-0d5d8f0b8f25",
                "sort_by": "name_asc"
            }
        },
    )
