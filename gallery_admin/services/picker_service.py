"""Media picker controllers: the modal that chooses media for a host form."""
from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Iterable, List, Optional, Sequence

from pydantic import ValidationError

from gallery_admin.core.config import settings
from gallery_admin.core.exceptions import GalleryException
from gallery_admin.models.schemas import (
    Artist,
    ArtistChoice,
    DateFilter,
    EmptyState,
    MediaItem,
    MediaUploadMetadata,
    PaginationParams,
    PickerFilters,
    SortBy,
)
from gallery_admin.models.upload import UploadFile
from gallery_admin.repositories import ArtistRepository, MediaRepository

from .catalog import MediaCatalog, PreviewPair
from .filter_service import Clock, FilterService, artist_facets, empty_state, local_now
from .reorder_service import DragReorder
from .selection_service import (
    CommitResult,
    MultiSelection,
    SingleCommitResult,
    SingleSelection,
    ToggleResult,
)

logger = logging.getLogger(__name__)

SingleChangeHandler = Callable[[Optional[str], Optional[MediaItem]], None]
MultiChangeHandler = Callable[[List[str], List[MediaItem]], None]

# Errors a fetch or upload can end with; none of them may escape the picker
_REQUEST_ERRORS = (GalleryException, ValidationError)


@dataclass(frozen=True)
class UploadBatchResult:
    """Files uploaded by one batch, and the ones that failed with their reason."""

    uploaded: tuple[MediaItem, ...] = ()
    failed: tuple[tuple[str, str], ...] = ()

    @property
    def ok(self) -> bool:
        return not self.failed


def configured_clock() -> Clock:
    """Clock in the configured timezone, or in system local time."""
    tz = settings.tzinfo()
    if tz is None:
        return local_now
    return lambda: datetime.now(tz)


class BaseMediaPicker:
    """
    Shared state of one picker modal.

    A session starts with ``open()`` and ends with ``commit()`` or
    ``cancel()``. Everything loaded or chosen inside the modal belongs to
    that session and is dropped when it ends; responses that arrive for an
    earlier session are ignored.
    """

    def __init__(
        self,
        media_repo: MediaRepository,
        artist_repo: Optional[ArtistRepository] = None,
        *,
        default_artist_id: Optional[str] = None,
        artist_choices: Optional[Sequence[ArtistChoice]] = None,
        page_size: Optional[int] = None,
        artist_page_size: Optional[int] = None,
        clock: Optional[Clock] = None,
    ):
        """
        Initialize the picker.

        Args:
            media_repo: Media endpoints
            artist_repo: Artist endpoints; artists are not fetched without it
            default_artist_id: Artist the modal starts filtered on and uploads to
            artist_choices: Artists supplied by the host instead of fetching them
            page_size: Media fetched on open
            artist_page_size: Artists fetched on open
            clock: Source of "now" for the date buckets
        """
        self.media_repo = media_repo
        self.artist_repo = artist_repo
        self.default_artist_id = default_artist_id or None
        self.host_artist_choices = list(artist_choices or [])
        self.page_size = page_size or settings.picker_page_size
        self.artist_page_size = artist_page_size or settings.artist_page_size
        self.filter_service = FilterService(clock or configured_clock())

        self.is_open = False
        self._session = 0
        self._reset_session_state()

    def _reset_session_state(self) -> None:
        self.loading = False
        self.uploading = False
        self.catalog = MediaCatalog()
        self.artists: list[Artist] = []
        self.filters = PickerFilters(artist_id=self.default_artist_id)
        self.upload_artist_id: Optional[str] = self.default_artist_id
        self.session_uploads: set[str] = set()
        self._session_upload_order: list[str] = []

    def _is_current(self, session: int) -> bool:
        return self.is_open and session == self._session

    # Hooks implemented by the single / multi variants

    def _seed_selection(self) -> None:
        raise NotImplementedError

    def _select_uploaded(self, item: MediaItem) -> None:
        raise NotImplementedError

    # Session lifecycle

    async def open(self) -> None:
        """
        Open the modal: reset filters, seed the selection from the host value
        and load the media library and the artists.
        """
        self._session += 1
        session = self._session
        self.is_open = True
        self._reset_session_state()
        self._seed_selection()

        self.loading = True
        try:
            await asyncio.gather(
                self._load_catalog(session),
                self._load_artists(session),
            )
        finally:
            if self._is_current(session):
                self.loading = False

    async def _load_catalog(self, session: int) -> None:
        try:
            items = await self.media_repo.list_media(PaginationParams(page=1, per_page=self.page_size))
        except _REQUEST_ERRORS as e:
            logger.error(f"Failed to load media library: {e}")
            return

        if not self._is_current(session):
            logger.debug("Ignoring media list for a closed picker session")
            return
        self.catalog.replace(items)
        logger.debug(f"Loaded {len(self.catalog)} media items")

    async def _load_artists(self, session: int) -> None:
        if self.host_artist_choices or self.artist_repo is None:
            return
        try:
            artists = await self.artist_repo.list_artists(
                pagination=PaginationParams(page=1, per_page=min(self.artist_page_size, 500))
            )
        except _REQUEST_ERRORS as e:
            logger.error(f"Failed to load artists: {e}")
            return

        if not self._is_current(session):
            logger.debug("Ignoring artist list for a closed picker session")
            return
        self.artists = artists

    def cancel(self) -> None:
        """Close without touching the host value; in-modal edits are discarded."""
        if self.is_open:
            logger.debug("Picker cancelled")
        self._close()

    def _close(self) -> None:
        self.is_open = False
        self._reset_session_state()

    # Filters

    @property
    def visible(self) -> list[MediaItem]:
        """Media shown in the grid, recomputed on every access."""
        return self.filter_service.visible(self.catalog, self.filters)

    @property
    def empty_state(self) -> Optional[EmptyState]:
        return empty_state(len(self.catalog), self.visible)

    @property
    def artist_options(self) -> list[ArtistChoice]:
        """Artists offered for filtering and upload tagging."""
        if self.host_artist_choices:
            return list(self.host_artist_choices)
        if self.artists:
            return [ArtistChoice.from_artist(artist) for artist in self.artists]
        return [ArtistChoice(id=artist_id, name=name) for artist_id, name in artist_facets(self.catalog)]

    def set_date_filter(self, date_filter: DateFilter | str) -> None:
        self.filters.date_filter = DateFilter(date_filter)

    def set_artist_filter(self, artist_id: Optional[str]) -> None:
        self.filters.artist_id = artist_id or None

    def set_sort(self, sort_by: SortBy | str) -> None:
        self.filters.sort_by = SortBy(sort_by)

    def set_upload_artist(self, artist_id: Optional[str]) -> None:
        self.upload_artist_id = artist_id or None

    def is_session_upload(self, media_id: str) -> bool:
        return media_id in self.session_uploads

    # Uploads

    async def upload(
        self,
        files: Iterable[UploadFile],
        metadata: Optional[MediaUploadMetadata] = None
    ) -> UploadBatchResult:
        """
        Upload files one after the other and select them.

        Each file succeeds or fails on its own; a failure is logged and the
        batch goes on. Uploaded media are put first in the catalog, selected
        and remembered as session uploads. When an upload artist is set the
        artist filter switches to it once the batch is done.

        Args:
            files: Files in the order they were chosen
            metadata: Alt text, credit and folder applied to every file

        Returns:
            UploadBatchResult with uploaded media and failures
        """
        if not self.is_open:
            logger.warning("Upload ignored: picker is closed")
            return UploadBatchResult()
        if self.uploading:
            logger.warning("Upload ignored: another batch is still running")
            return UploadBatchResult()

        session = self._session
        form = (metadata or MediaUploadMetadata()).with_artist(self.upload_artist_id)
        uploaded: list[MediaItem] = []
        failed: list[tuple[str, str]] = []

        self.uploading = True
        try:
            for file in files:
                if not self._is_current(session):
                    logger.debug("Picker closed during upload, remaining files skipped")
                    break
                try:
                    item = await self.media_repo.upload(file, form)
                except _REQUEST_ERRORS as e:
                    logger.error(f"Upload of {file.filename} failed: {e}")
                    failed.append((file.filename, str(e)))
                    continue

                if not self._is_current(session):
                    logger.debug(f"Ignoring upload of {file.filename} for a closed picker session")
                    break
                self.catalog.prepend(item)
                self.session_uploads.add(item.id)
                self._session_upload_order.append(item.id)
                self._select_uploaded(item)
                uploaded.append(item)
        finally:
            if self._is_current(session):
                self.uploading = False

        if self._is_current(session) and self.upload_artist_id:
            self.filters.artist_id = self.upload_artist_id

        if failed:
            logger.warning(f"{len(failed)} of {len(failed) + len(uploaded)} uploads failed")
        return UploadBatchResult(uploaded=tuple(uploaded), failed=tuple(failed))


class MediaPicker(BaseMediaPicker):
    """Picker choosing a single media item (hero image, portrait...)."""

    def __init__(
        self,
        media_repo: MediaRepository,
        artist_repo: Optional[ArtistRepository] = None,
        *,
        value: Optional[str] = None,
        preview: Optional[MediaItem] = None,
        on_change: Optional[SingleChangeHandler] = None,
        **kwargs,
    ):
        self.value = value or None
        self.preview = preview
        self.on_change = on_change
        self.selection = SingleSelection(self.value)
        super().__init__(media_repo, artist_repo, **kwargs)

    def _seed_selection(self) -> None:
        self.selection = SingleSelection(self.value)

    def _select_uploaded(self, item: MediaItem) -> None:
        self.selection.toggle(item.id)

    @property
    def selected(self) -> Optional[str]:
        return self.selection.selected

    def toggle(self, media_id: str) -> ToggleResult:
        """Select ``media_id``; clicking the selected item again keeps it selected."""
        return self.selection.toggle(media_id)

    def clear_selection(self) -> None:
        self.selection.clear()

    def commit(self) -> SingleCommitResult:
        """
        Hand the selection to the host and close.

        While the library is still loading nothing can be resolved, so the
        host value is returned unchanged and the modal stays open.
        """
        if not self.is_open or self.loading:
            logger.warning("Commit ignored: picker is not ready")
            return SingleCommitResult(media_id=self.value, media=self.preview)

        result = self.selection.commit(self.catalog)
        self._emit(result)
        self._close()
        return result

    def clear(self) -> SingleCommitResult:
        """Remove the host value (the cross on the preview)."""
        result = SingleCommitResult(media_id=None, media=None)
        self._emit(result)
        return result

    def _emit(self, result: SingleCommitResult) -> None:
        self.value = result.media_id
        self.preview = result.media
        if self.on_change is not None:
            self.on_change(result.media_id, result.media)


class MultiMediaPicker(BaseMediaPicker):
    """Picker choosing an ordered list of media (artwork gallery, edition images...)."""

    def __init__(
        self,
        media_repo: MediaRepository,
        artist_repo: Optional[ArtistRepository] = None,
        *,
        value: Sequence[str] = (),
        previews: Sequence[MediaItem] = (),
        on_change: Optional[MultiChangeHandler] = None,
        **kwargs,
    ):
        self.pair = PreviewPair.of(value, previews)
        self.on_change = on_change
        self.selection = MultiSelection(self.pair.ids)
        self.drag = DragReorder()
        super().__init__(media_repo, artist_repo, **kwargs)

    def _seed_selection(self) -> None:
        self.selection = MultiSelection(self.pair.ids)

    def _select_uploaded(self, item: MediaItem) -> None:
        self.selection.add_many([item.id])

    @property
    def value(self) -> list[str]:
        return list(self.pair.ids)

    @property
    def previews(self) -> list[MediaItem]:
        return list(self.pair.previews)

    @property
    def selected(self) -> tuple[str, ...]:
        return self.selection.ids

    def sync(self, value: Sequence[str], previews: Sequence[MediaItem]) -> None:
        """Take over a host value changed outside the picker."""
        self.pair = PreviewPair.of(value, previews)

    # In-modal selection

    def toggle(self, media_id: str) -> ToggleResult:
        return self.selection.toggle(media_id)

    def position(self, media_id: str) -> Optional[int]:
        return self.selection.position(media_id)

    def select_all_visible(self) -> list[str]:
        """Add every visible item not selected yet, in grid order."""
        return self.selection.select_all_visible(self.visible)

    def select_session_uploads(self) -> list[str]:
        """Add every file uploaded in this session, in upload order."""
        return self.selection.add_many(self._session_upload_order)

    def clear_selection(self) -> None:
        self.selection.clear()

    def commit(self) -> CommitResult:
        """
        Hand the ordered selection to the host and close.

        Ids the catalog cannot resolve (deleted meanwhile) are dropped.
        """
        if not self.is_open or self.loading:
            logger.warning("Commit ignored: picker is not ready")
            return CommitResult(ids=self.pair.ids, items=self.pair.previews)

        result = self.selection.commit(self.catalog)
        dropped = len(self.selection) - len(result.ids)
        if dropped:
            logger.info(f"Dropped {dropped} selected media no longer in the library")
        self._emit(PreviewPair(result.ids, result.items))
        self._close()
        return result

    # Host-side thumbnails

    def remove(self, media_id: str) -> PreviewPair:
        """Remove one thumbnail from the host value."""
        pair = self.pair.without(media_id)
        self._emit(pair)
        return pair

    def drag_start(self, index: int) -> None:
        self.drag.start(index)

    def drag_over(self, index: int) -> Optional[PreviewPair]:
        """Move the dragged thumbnail to ``index``; None when nothing moved."""
        pair = self.drag.over(index, self.pair)
        if pair is not None:
            self._emit(pair)
        return pair

    def drag_end(self) -> None:
        self.drag.end()

    def _emit(self, pair: PreviewPair) -> None:
        self.pair = pair
        if self.on_change is not None:
            self.on_change(list(pair.ids), list(pair.previews))
