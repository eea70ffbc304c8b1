"""Pytest configuration and fixtures."""
from __future__ import annotations

from datetime import datetime, timezone
from typing import Callable

import pytest

from gallery_admin.models.schemas import MediaItem
from tests.factories import ArtistFactory, MediaFactory
from tests.fakes import FakeArtistRepository, FakeMediaRepository


# 2024-06-02T10:00 UTC, used as "now" by the date buckets
FIXED_NOW = datetime(2024, 6, 2, 10, 0, tzinfo=timezone.utc)


@pytest.fixture
def now() -> datetime:
    return FIXED_NOW


@pytest.fixture
def clock() -> Callable[[], datetime]:
    return lambda: FIXED_NOW


@pytest.fixture
def sample_media() -> list[MediaItem]:
    """Three media items, two of them by the same artist."""
    return [
        MediaFactory.create(
            id="a",
            filename="atelier.jpg",
            artist_id="artist-1",
            artist_name="Louise Bourgeois",
            created_at="2024-06-02T08:00:00Z",
        ),
        MediaFactory.create(
            id="b",
            filename="vernissage.jpg",
            artist_id="artist-2",
            artist_name="Pierre Soulages",
            created_at="2024-05-30T18:00:00Z",
        ),
        MediaFactory.create(
            id="c",
            filename="catalogue.jpg",
            artist_id="artist-1",
            artist_name="Louise Bourgeois",
            created_at="2024-04-15T09:00:00Z",
        ),
    ]


@pytest.fixture
def media_repo(sample_media) -> FakeMediaRepository:
    return FakeMediaRepository(sample_media)


@pytest.fixture
def artist_repo() -> FakeArtistRepository:
    return FakeArtistRepository([
        ArtistFactory.create(id="artist-1", name="Louise Bourgeois"),
        ArtistFactory.create(id="artist-2", name="Pierre Soulages"),
    ])
