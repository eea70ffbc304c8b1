"""Data access layer - REST repositories."""
from .base import BaseRepository
from .media_repository import MediaRepository
from .artist_repository import ArtistRepository
from .artwork_repository import ArtworkRepository
from .auth_repository import AuthRepository

__all__ = [
    "BaseRepository",
    "MediaRepository",
    "ArtistRepository",
    "ArtworkRepository",
    "AuthRepository",
]
