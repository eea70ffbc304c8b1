"""Selection models of the single and multi media pickers."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional

from gallery_admin.models.schemas import MediaItem

from .catalog import MediaCatalog


@dataclass(frozen=True)
class ToggleResult:
    """Outcome of clicking a thumbnail."""

    media_id: str
    selected: bool
    changed: bool
    ids: tuple[str, ...]


@dataclass(frozen=True)
class SingleCommitResult:
    """Value handed to the host by a single picker."""

    media_id: Optional[str]
    media: Optional[MediaItem]


@dataclass(frozen=True)
class CommitResult:
    """Value handed to the host by a multi picker; ids and items are aligned."""

    ids: tuple[str, ...]
    items: tuple[MediaItem, ...]


class SingleSelection:
    """At most one selected id. Clicking the selected item again keeps it."""

    def __init__(self, initial: Optional[str] = None):
        self.selected: Optional[str] = initial or None

    def toggle(self, media_id: str) -> ToggleResult:
        changed = self.selected != media_id
        self.selected = media_id
        return ToggleResult(media_id=media_id, selected=True, changed=changed, ids=(media_id,))

    def clear(self) -> None:
        self.selected = None

    def is_selected(self, media_id: str) -> bool:
        return self.selected == media_id

    @property
    def ids(self) -> tuple[str, ...]:
        return (self.selected,) if self.selected else ()

    def commit(self, catalog: MediaCatalog) -> SingleCommitResult:
        """Resolve the selection; an id missing from the catalog commits as nothing."""
        media = catalog.get(self.selected)
        if media is None:
            return SingleCommitResult(media_id=None, media=None)
        return SingleCommitResult(media_id=media.id, media=media)


class MultiSelection:
    """Ordered selection without duplicates; the order is the display order downstream."""

    def __init__(self, initial: Iterable[str] = ()):
        self._ids: list[str] = []
        self.add_many(initial)

    def __len__(self) -> int:
        return len(self._ids)

    def __contains__(self, media_id: object) -> bool:
        return media_id in self._ids

    @property
    def ids(self) -> tuple[str, ...]:
        return tuple(self._ids)

    def is_selected(self, media_id: str) -> bool:
        return media_id in self._ids

    def position(self, media_id: str) -> Optional[int]:
        """1-based rank shown on the thumbnail badge."""
        try:
            return self._ids.index(media_id) + 1
        except ValueError:
            return None

    def toggle(self, media_id: str) -> ToggleResult:
        """Append ``media_id``, or remove it leaving the others in place."""
        if media_id in self._ids:
            self._ids.remove(media_id)
            selected = False
        else:
            self._ids.append(media_id)
            selected = True
        return ToggleResult(media_id=media_id, selected=selected, changed=True, ids=self.ids)

    def add_many(self, media_ids: Iterable[str]) -> list[str]:
        """
        Append every id not selected yet, in the given order.

        Returns:
            The ids that were actually added
        """
        added: list[str] = []
        for media_id in media_ids:
            if media_id and media_id not in self._ids:
                self._ids.append(media_id)
                added.append(media_id)
        return added

    def select_all_visible(self, visible: Iterable[MediaItem]) -> list[str]:
        return self.add_many(item.id for item in visible)

    def clear(self) -> None:
        self._ids = []

    def commit(self, catalog: MediaCatalog) -> CommitResult:
        """Resolve the ordered ids, silently dropping those the catalog lost."""
        ids, items = catalog.resolve(self._ids)
        return CommitResult(ids=tuple(ids), items=tuple(items))
