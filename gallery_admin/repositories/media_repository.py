"""Media repository for the admin media endpoints."""
from typing import List, Optional

from gallery_admin.core.exceptions import NotFoundException
from gallery_admin.core.http import ApiClient
from gallery_admin.models.schemas import (
    MediaFilterParams,
    MediaItem,
    MediaUpdate,
    MediaUploadMetadata,
    PaginationParams,
)
from gallery_admin.models.upload import UploadFile

from .base import BaseRepository


class MediaRepository(BaseRepository[MediaItem]):
    """Repository for uploaded media."""

    resource_name = "Media"

    def __init__(self, api: ApiClient):
        super().__init__(MediaItem, api, "/admin/media")

    async def list_media(
        self,
        pagination: Optional[PaginationParams] = None,
        filters: Optional[MediaFilterParams] = None
    ) -> List[MediaItem]:
        """
        List media, newest first as ordered by the server.

        Args:
            pagination: Page and page size
            filters: Optional folder / artist filters

        Returns:
            List of media items
        """
        params = filters.to_query() if filters else {}
        return await self.get_all(pagination, **params)

    async def list_folders(self) -> List[str]:
        """Get the distinct folder names used in the library."""
        data = await self.api.get(f"{self.endpoint}/folders")
        return [folder for folder in data if folder]

    async def upload(
        self,
        file: UploadFile,
        metadata: Optional[MediaUploadMetadata] = None
    ) -> MediaItem:
        """
        Upload one file as multipart form data.

        Args:
            file: File to upload
            metadata: Alt text, credit, folder and artist sent as form fields

        Returns:
            Created media item
        """
        form = metadata.to_form() if metadata else {}
        data = await self.api.post(
            self.endpoint,
            data=form,
            files={"file": file.as_multipart()},
        )
        return self._parse(data)

    async def update_media(self, media_id: str, patch: MediaUpdate) -> MediaItem:
        """
        Apply a partial update.

        Args:
            media_id: Media id
            patch: Fields to set or clear

        Returns:
            Updated media item

        Raises:
            NotFoundException: If media not found
        """
        return await self.update(media_id, patch.to_payload())

    async def delete_or_fail(self, media_id: str) -> None:
        """
        Delete a media item, raising if it no longer exists.

        Raises:
            NotFoundException: If media not found
        """
        if not await self.delete(media_id):
            raise NotFoundException(resource=self.resource_name, identifier=media_id)
