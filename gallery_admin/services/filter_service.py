"""Filter and sort engine deriving the visible media grid from a catalog."""
from __future__ import annotations

import unicodedata
from datetime import datetime, timedelta
from typing import Callable, Iterable, Optional

from gallery_admin.models.schemas import (
    DateFilter,
    EmptyState,
    MediaItem,
    PickerFilters,
    SortBy,
)

Clock = Callable[[], datetime]

_BUCKET_DAYS = {
    DateFilter.WEEK: 7,
    DateFilter.MONTH: 30,
}


def local_now() -> datetime:
    """Current wall-clock time as an aware datetime in the system timezone."""
    return datetime.now().astimezone()


def _aware(value: datetime) -> datetime:
    # Naive timestamps are read as local time
    return value if value.tzinfo is not None else value.astimezone()


def date_cutoff(date_filter: DateFilter, now: datetime) -> Optional[datetime]:
    """
    Earliest ``created_at`` kept by a date bucket.

    Args:
        date_filter: Bucket to compute
        now: Reference time; its timezone decides where "today" starts

    Returns:
        Cutoff datetime, or None when the bucket keeps everything
    """
    date_filter = DateFilter(date_filter)
    now = _aware(now)

    if date_filter == DateFilter.ALL:
        return None
    if date_filter == DateFilter.TODAY:
        return now.replace(hour=0, minute=0, second=0, microsecond=0)

    # Wall-clock day arithmetic: with a zoneinfo tz this keeps the local time across DST
    return now - timedelta(days=_BUCKET_DAYS[date_filter])


def collation_key(name: str) -> tuple[str, str]:
    """
    Sort key for filenames approximating locale order.

    Accents are ignored and case is folded at the first level, the original
    string breaks ties so the order stays total. The key does not depend on
    the process locale, so Latin-script names sort the same everywhere but
    language-specific rules (Swedish "å" after "z", Spanish "ñ") are not
    applied.
    """
    decomposed = unicodedata.normalize("NFKD", name)
    base = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return base.casefold(), name


def filter_by_artist(items: Iterable[MediaItem], artist_id: Optional[str]) -> list[MediaItem]:
    if not artist_id:
        return list(items)
    return [item for item in items if item.artist_id == artist_id]


def filter_by_date(
    items: Iterable[MediaItem],
    date_filter: DateFilter,
    now: datetime
) -> list[MediaItem]:
    cutoff = date_cutoff(date_filter, now)
    if cutoff is None:
        return list(items)
    return [item for item in items if _aware(item.created_at) >= cutoff]


def sort_media(items: Iterable[MediaItem], sort_by: SortBy) -> list[MediaItem]:
    """Stable sort; items comparing equal keep their catalog order."""
    sort_by = SortBy(sort_by)
    if sort_by in (SortBy.DATE_DESC, SortBy.DATE_ASC):
        return sorted(
            items,
            key=lambda item: _aware(item.created_at),
            reverse=sort_by == SortBy.DATE_DESC,
        )
    return sorted(
        items,
        key=lambda item: collation_key(item.filename),
        reverse=sort_by == SortBy.NAME_DESC,
    )


def visible_media(
    catalog: Iterable[MediaItem],
    filters: PickerFilters,
    now: Optional[datetime] = None
) -> list[MediaItem]:
    """
    Media shown in the grid for the given filters.

    Args:
        catalog: All media of the session
        filters: Date bucket, artist and sort order
        now: Reference time for the date bucket (defaults to the current time)

    Returns:
        Filtered and sorted media
    """
    items = filter_by_artist(catalog, filters.artist_id)
    items = filter_by_date(items, filters.date_filter, now or local_now())
    return sort_media(items, filters.sort_by)


def empty_state(catalog_size: int, visible: list[MediaItem]) -> Optional[EmptyState]:
    """Tell an empty library apart from filters that match nothing."""
    if catalog_size == 0:
        return EmptyState.NO_MEDIA
    if not visible:
        return EmptyState.NO_MATCH
    return None


def artist_facets(catalog: Iterable[MediaItem]) -> list[tuple[str, str]]:
    """(artist_id, artist_name) pairs present in the catalog, sorted by name."""
    facets: dict[str, str] = {}
    for item in catalog:
        if item.artist_id and item.artist_id not in facets:
            facets[item.artist_id] = item.artist_name or item.artist_id
    return sorted(facets.items(), key=lambda pair: collation_key(pair[1]))


class FilterService:
    """Filter engine bound to a clock, as used by the pickers."""

    def __init__(self, clock: Optional[Clock] = None):
        """
        Initialize filter service.

        Args:
            clock: Returns "now"; read at every call, never cached
        """
        self.clock = clock or local_now

    def visible(self, catalog: Iterable[MediaItem], filters: PickerFilters) -> list[MediaItem]:
        return visible_media(catalog, filters, self.clock())
