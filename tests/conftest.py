"""Pytest configuration and shared fixtures."""

import sys
from pathlib import Path

# Add project root to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

import math
from decimal import Decimal
from unittest.mock import AsyncMock, Mock

import pytest

from messmate.models.listing import Listing
from messmate.models.review import Review

KM_PER_DEGREE_LAT = 6371.0 * math.pi / 180


def _make_listing(
    listing_id: str,
    name: str = "Annapurna Mess",
    address: str = "12 College Road, Pune",
    price: str = "3000",
    veg: bool = True,
    non_veg: bool = False,
    latitude: float = 18.52,
    longitude: float = 73.85,
) -> Listing:
    return Listing(
        id=listing_id,
        name=name,
        address=address,
        price_monthly=Decimal(price),
        is_vegetarian=veg,
        is_non_vegetarian=non_veg,
        latitude=latitude,
        longitude=longitude,
    )


@pytest.fixture
def make_listing():
    """Factory for listings with sensible defaults."""
    return _make_listing


@pytest.fixture
def listing_north_of_origin():
    """Factory for listings a given distance due north of (0, 0).

    Longitude is nudged off zero so the point is not read as ungeocoded.
    """

    def factory(listing_id: str, km: float, **kwargs) -> Listing:
        return _make_listing(
            listing_id, latitude=km / KM_PER_DEGREE_LAT, longitude=1e-9, **kwargs
        )

    return factory


@pytest.fixture
def make_review():
    """Factory for reviews."""

    def factory(listing_id: str, rating: int, user_id: str = "user-1", comment=None) -> Review:
        return Review(listing_id=listing_id, user_id=user_id, rating=rating, comment=comment)

    return factory


@pytest.fixture
def listing_repo():
    """Mock listing repository fixture."""
    repo = Mock()
    repo.get_by_id = AsyncMock(return_value=None)
    repo.list_all = AsyncMock(return_value=[])
    return repo


@pytest.fixture
def review_repo():
    """Mock review repository fixture."""
    repo = Mock()
    repo.get_by_user_and_listing = AsyncMock(return_value=None)
    repo.create = AsyncMock()
    repo.update = AsyncMock()
    repo.list_all = AsyncMock(return_value=[])
    repo.list_for_listing = AsyncMock(return_value=[])
    return repo
