"""Media library service backing the admin media screen."""
import logging
from typing import Iterable, List, Optional

from pydantic import ValidationError

from gallery_admin.core.exceptions import GalleryException, NotFoundException
from gallery_admin.models.schemas import (
    MediaFilterParams,
    MediaItem,
    MediaUpdate,
    MediaUploadMetadata,
    PaginationParams,
)
from gallery_admin.models.upload import UploadFile
from gallery_admin.repositories import MediaRepository

from .catalog import MediaCatalog
from .picker_service import UploadBatchResult

logger = logging.getLogger(__name__)


class MediaLibraryService:
    """Service for media library operations; the list mirrors the last successful change."""

    def __init__(self, repo: MediaRepository):
        """
        Initialize media library service.

        Args:
            repo: Media repository
        """
        self.repo = repo
        self.catalog = MediaCatalog()

    @property
    def media(self) -> List[MediaItem]:
        return self.catalog.items()

    async def load(
        self,
        pagination: Optional[PaginationParams] = None,
        filters: Optional[MediaFilterParams] = None
    ) -> List[MediaItem]:
        """
        Load one page of the library.

        Args:
            pagination: Page and page size
            filters: Folder / artist filters

        Returns:
            The loaded media
        """
        items = await self.repo.list_media(pagination, filters)
        self.catalog.replace(items)
        return self.media

    async def folders(self) -> List[str]:
        """Get the folder names used in the library."""
        return await self.repo.list_folders()

    async def upload(
        self,
        files: Iterable[UploadFile],
        metadata: Optional[MediaUploadMetadata] = None
    ) -> UploadBatchResult:
        """
        Upload files sequentially, newest first in the list.

        Args:
            files: Files to upload
            metadata: Form fields applied to every file

        Returns:
            UploadBatchResult with uploaded media and failures
        """
        uploaded: List[MediaItem] = []
        failed: List[tuple[str, str]] = []

        for file in files:
            try:
                item = await self.repo.upload(file, metadata)
            except (GalleryException, ValidationError) as e:
                logger.error(f"Upload of {file.filename} failed: {e}")
                failed.append((file.filename, str(e)))
                continue
            self.catalog.prepend(item)
            uploaded.append(item)
            logger.info(f"Uploaded {file.filename} as {item.id}")

        return UploadBatchResult(uploaded=tuple(uploaded), failed=tuple(failed))

    async def update(self, media_id: str, patch: MediaUpdate) -> MediaItem:
        """
        Apply a patch and replace the item in the list.

        Raises:
            NotFoundException: If the media no longer exists
        """
        if patch.is_empty:
            current = self.catalog.get(media_id)
            if current is not None:
                return current
            return await self.repo.get_by_id_or_fail(media_id)

        updated = await self.repo.update_media(media_id, patch)
        self.catalog.upsert(updated)
        return updated

    async def update_alt(self, media_id: str, alt: str) -> MediaItem:
        """Set the alternative text; an empty string clears it."""
        return await self.update(media_id, MediaUpdate(alt=alt.strip() or None))

    async def delete(self, media_id: str) -> None:
        """
        Delete a media item and drop it from the list.

        Raises:
            NotFoundException: If the media no longer exists
        """
        try:
            await self.repo.delete_or_fail(media_id)
        except NotFoundException:
            self.catalog.remove(media_id)
            raise
        self.catalog.remove(media_id)
        logger.info(f"Deleted media {media_id}")
