"""Artist repository for the admin artist endpoints."""
from typing import List, Optional

from gallery_admin.core.http import ApiClient
from gallery_admin.models.schemas import Artist, PaginationParams

from .base import BaseRepository


class ArtistRepository(BaseRepository[Artist]):
    """Repository for artists."""

    resource_name = "Artist"

    def __init__(self, api: ApiClient):
        super().__init__(Artist, api, "/admin/artists")

    async def list_artists(
        self,
        search: Optional[str] = None,
        pagination: Optional[PaginationParams] = None
    ) -> List[Artist]:
        """
        List artists, optionally matching a search string.

        Args:
            search: Free-text search on the artist name
            pagination: Page and page size

        Returns:
            List of artists
        """
        return await self.get_all(pagination, q=search)
