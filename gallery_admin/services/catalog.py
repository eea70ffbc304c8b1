"""In-memory media catalog of one picker session, and the host's preview pair."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator, Optional, Sequence

from gallery_admin.core.exceptions import ValidationException
from gallery_admin.models.schemas import MediaItem


class MediaCatalog:
    """Media items keyed by id, kept in fetch order (newest uploads first)."""

    def __init__(self, items: Iterable[MediaItem] = ()):
        self._items: dict[str, MediaItem] = {}
        self.replace(items)

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[MediaItem]:
        return iter(list(self._items.values()))

    def __contains__(self, media_id: object) -> bool:
        return media_id in self._items

    @property
    def is_empty(self) -> bool:
        return not self._items

    def items(self) -> list[MediaItem]:
        return list(self._items.values())

    def ids(self) -> list[str]:
        return list(self._items)

    def get(self, media_id: Optional[str]) -> Optional[MediaItem]:
        if media_id is None:
            return None
        return self._items.get(media_id)

    def replace(self, items: Iterable[MediaItem]) -> None:
        """Discard the current content and load ``items`` in order."""
        self._items = {}
        for item in items:
            self._items.setdefault(item.id, item)

    def prepend(self, item: MediaItem) -> None:
        """Put ``item`` first; an existing entry with the same id is replaced."""
        rest = {k: v for k, v in self._items.items() if k != item.id}
        self._items = {item.id: item, **rest}

    def upsert(self, item: MediaItem) -> None:
        """Replace an entry in place, or prepend it when unknown."""
        if item.id in self._items:
            self._items[item.id] = item
        else:
            self.prepend(item)

    def remove(self, media_id: str) -> Optional[MediaItem]:
        return self._items.pop(media_id, None)

    def resolve(self, ids: Iterable[str]) -> tuple[list[str], list[MediaItem]]:
        """
        Map ids to items, dropping ids that are no longer in the catalog.

        Args:
            ids: Ordered media ids

        Returns:
            Tuple of (resolved ids, items), aligned index by index
        """
        resolved_ids: list[str] = []
        items: list[MediaItem] = []
        for media_id in ids:
            item = self._items.get(media_id)
            if item is None:
                continue
            resolved_ids.append(media_id)
            items.append(item)
        return resolved_ids, items


@dataclass(frozen=True)
class PreviewPair:
    """
    Host-owned selection: ordered ids plus the media shown for them.

    ``previews[i].id == ids[i]`` holds for every index.
    """

    ids: tuple[str, ...] = ()
    previews: tuple[MediaItem, ...] = ()

    def __post_init__(self) -> None:
        if len(self.ids) != len(self.previews):
            raise ValidationException(
                f"Preview pair out of sync: {len(self.ids)} ids for {len(self.previews)} previews"
            )
        for index, (media_id, preview) in enumerate(zip(self.ids, self.previews)):
            if preview.id != media_id:
                raise ValidationException(
                    f"Preview at position {index} is '{preview.id}', expected '{media_id}'"
                )

    @classmethod
    def of(cls, ids: Sequence[str], previews: Sequence[MediaItem]) -> "PreviewPair":
        return cls(tuple(ids), tuple(previews))

    @classmethod
    def from_items(cls, items: Sequence[MediaItem]) -> "PreviewPair":
        return cls(tuple(item.id for item in items), tuple(items))

    def __len__(self) -> int:
        return len(self.ids)

    def without(self, media_id: str) -> "PreviewPair":
        """Pair with ``media_id`` removed, order of the rest untouched."""
        kept = [(i, p) for i, p in zip(self.ids, self.previews) if i != media_id]
        return PreviewPair(tuple(i for i, _ in kept), tuple(p for _, p in kept))
