"""Unit tests for the discovery feed orchestration."""

from decimal import Decimal
from unittest.mock import AsyncMock, Mock

import pytest

from messmate.models.discovery import FilterCriteria, ViewerPosition
from messmate.services.discovery_feed import DiscoveryFeedService
from messmate.services.discovery_ranking import DiscoveryRankingService


@pytest.mark.asyncio
async def test_browse_aggregates_reviews_before_ranking(
    listing_repo, review_repo, make_listing, make_review
):
    """Test reviews feed the minimum-rating filter."""
    listing_repo.list_all = AsyncMock(
        return_value=[make_listing("good"), make_listing("poor"), make_listing("new")]
    )
    review_repo.list_all = AsyncMock(
        return_value=[
            make_review("good", 5),
            make_review("good", 4, user_id="user-2"),
            make_review("poor", 2),
        ]
    )
    feed = DiscoveryFeedService(listing_repo, review_repo)

    results = await feed.browse(None, FilterCriteria(minimum_rating=4.0))

    assert [r.listing.id for r in results] == ["good", "new"]
    assert results[0].rating == 4.5
    assert results[0].has_reviews is True
    assert results[1].has_reviews is False


@pytest.mark.asyncio
async def test_browse_passes_viewer_position(listing_repo, review_repo, make_listing):
    listing_repo.list_all = AsyncMock(
        return_value=[
            make_listing("far", latitude=18.7, longitude=73.85),
            make_listing("near", latitude=18.53, longitude=73.85),
        ]
    )
    feed = DiscoveryFeedService(listing_repo, review_repo)
    viewer = ViewerPosition(latitude=18.52, longitude=73.85)

    results = await feed.browse(viewer, FilterCriteria())

    assert [r.listing.id for r in results] == ["near", "far"]
    assert all(r.distance_km is not None for r in results)


@pytest.mark.asyncio
async def test_browse_uses_injected_ranking_service(listing_repo, review_repo):
    ranking = Mock(spec=DiscoveryRankingService)
    ranking.rank.return_value = []
    feed = DiscoveryFeedService(listing_repo, review_repo, ranking)
    criteria = FilterCriteria(price_max=Decimal("4000"))

    await feed.browse(None, criteria)

    ranking.rank.assert_called_once_with([], {}, None, criteria)


@pytest.mark.asyncio
async def test_browse_recomputes_every_call(listing_repo, review_repo, make_listing):
    """Test no results are cached between calls."""
    listing_repo.list_all = AsyncMock(side_effect=[[make_listing("a")], []])
    feed = DiscoveryFeedService(listing_repo, review_repo)

    first = await feed.browse(None, FilterCriteria())
    second = await feed.browse(None, FilterCriteria())

    assert len(first) == 1
    assert second == []
    assert listing_repo.list_all.await_count == 2
