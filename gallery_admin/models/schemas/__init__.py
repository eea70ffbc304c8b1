"""Pydantic schemas for API payloads and picker state."""
from __future__ import annotations

from .common import PaginationParams, MediaFilterParams, SuccessResponse
from .media import (
    MediaItem,
    MediaUpdate,
    MediaUploadMetadata,
    PatchState,
)
from .artist import Artist, ArtistChoice
from .artwork import Artwork, ArtworkCreate, ArtworkUpdate
from .auth import LoginRequest, LoginResponse, User
from .filters import DateFilter, SortBy, EmptyState, PickerFilters

__all__ = [
    # Common
    "PaginationParams",
    "MediaFilterParams",
    "SuccessResponse",
    # Media
    "MediaItem",
    "MediaUpdate",
    "MediaUploadMetadata",
    "PatchState",
    # Artist
    "Artist",
    "ArtistChoice",
    # Artwork
    "Artwork",
    "ArtworkCreate",
    "ArtworkUpdate",
    # Auth
    "LoginRequest",
    "LoginResponse",
    "User",
    # Picker filters
    "DateFilter",
    "SortBy",
    "EmptyState",
    "PickerFilters",
]
