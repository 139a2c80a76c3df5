"""Discovery feed: load listings and reviews, then rank them."""

from typing import Optional

from messmate.logging import get_logger
from messmate.models.discovery import DiscoveryResult, FilterCriteria, ViewerPosition
from messmate.services.discovery_ranking import DiscoveryRankingService
from messmate.services.rating_aggregator import aggregate_ratings
from messmate.storage.postgres_listing_repo import PostgresListingRepository
from messmate.storage.postgres_review_repo import PostgresReviewRepository

logger = get_logger(__name__)


class DiscoveryFeedService:
    """Feeds the ranking service with fresh data on every call."""

    def __init__(
        self,
        listing_repo: PostgresListingRepository,
        review_repo: PostgresReviewRepository,
        ranking_service: Optional[DiscoveryRankingService] = None,
    ):
        self.listing_repo = listing_repo
        self.review_repo = review_repo
        self.ranking_service = ranking_service or DiscoveryRankingService()

    async def browse(
        self,
        viewer_position: Optional[ViewerPosition],
        criteria: FilterCriteria,
    ) -> list[DiscoveryResult]:
        """Rank every listing against the viewer's current filters."""
        listings = await self.listing_repo.list_all()
        reviews = await self.review_repo.list_all()
        ratings = aggregate_ratings(reviews)

        results = self.ranking_service.rank(listings, ratings, viewer_position, criteria)

        logger.info(
            "discovery_feed_built",
            listings=len(listings),
            reviews=len(reviews),
            results=len(results),
            has_position=viewer_position is not None,
            search_term=criteria.search_term,
        )
        return results
