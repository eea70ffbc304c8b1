"""Artwork repository for the admin artwork endpoints."""
from typing import List, Optional, Sequence

from gallery_admin.core.http import ApiClient
from gallery_admin.models.schemas import Artwork, ArtworkCreate, ArtworkUpdate, PaginationParams

from .base import BaseRepository


class ArtworkRepository(BaseRepository[Artwork]):
    """Repository for artworks and their ordered images."""

    resource_name = "Artwork"

    def __init__(self, api: ApiClient):
        super().__init__(Artwork, api, "/admin/artworks")

    async def list_artworks(
        self,
        search: Optional[str] = None,
        pagination: Optional[PaginationParams] = None
    ) -> List[Artwork]:
        return await self.get_all(pagination, q=search)

    async def create_artwork(self, payload: ArtworkCreate) -> Artwork:
        """
        Create an artwork.

        Args:
            payload: Artwork fields; ``media_ids`` order becomes the display order

        Returns:
            Created artwork
        """
        return await self.create(payload)

    async def update_artwork(self, artwork_id: str, payload: ArtworkUpdate) -> Artwork:
        """
        Update an artwork.

        Raises:
            NotFoundException: If artwork not found
        """
        return await self.update(artwork_id, payload)

    async def set_media(self, artwork_id: str, media_ids: Sequence[str]) -> Artwork:
        """Replace the artwork's images with ``media_ids``, in that order."""
        return await self.update_artwork(artwork_id, ArtworkUpdate(media_ids=list(media_ids)))
