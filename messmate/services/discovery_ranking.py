"""Discovery ranking service: filter and order listings for a viewer.

Combines free-text search, a price window, an optional distance cap,
diet facets and a minimum rating into one pass over the listing set.
Everything here is synchronous and pure; callers fetch the listings,
reviews and viewer position before invoking it.
"""

from typing import Mapping, Optional, Sequence

from messmate.logging import get_logger
from messmate.models.discovery import DiscoveryResult, FilterCriteria, ViewerPosition
from messmate.models.listing import Listing
from messmate.services.geo_distance import UNGEOCODED_DISTANCE_KM, haversine_km

logger = get_logger(__name__)

# Rating assumed for listings nobody has reviewed yet, so a minimum-rating
# filter does not bury new listings.
DEFAULT_RATING = 4.5


class DiscoveryRankingService:
    """Service for filtering and ranking listings."""

    def __init__(self, default_rating: float = DEFAULT_RATING):
        """Initialize discovery ranking service."""
        self.default_rating = default_rating

    def distance_to(self, viewer: ViewerPosition, listing: Listing) -> float:
        """Distance from the viewer to a listing in km.

        The viewer position is always a real fix, so only the listing's
        coordinates are checked for the ungeocoded sentinel.
        """
        if not listing.is_geocoded:
            return UNGEOCODED_DISTANCE_KM
        return haversine_km(
            viewer.latitude, viewer.longitude, listing.latitude, listing.longitude
        )

    def resolve_rating(self, listing: Listing, ratings: Mapping[str, float]) -> float:
        return ratings.get(listing.id, self.default_rating)

    @staticmethod
    def matches_text(listing: Listing, search_term: str) -> bool:
        term = search_term.strip().lower()
        if not term:
            return True
        return term in listing.name.lower() or term in listing.address.lower()

    @staticmethod
    def matches_price(listing: Listing, criteria: FilterCriteria) -> bool:
        return criteria.price_min <= listing.price_monthly <= criteria.price_max

    @staticmethod
    def matches_diet(listing: Listing, criteria: FilterCriteria) -> bool:
        if criteria.vegetarian_only and not listing.offers_vegetarian:
            return False
        if criteria.non_vegetarian_only and not listing.offers_non_vegetarian:
            return False
        return True

    def rank(
        self,
        listings: Sequence[Listing],
        ratings: Mapping[str, float],
        viewer_position: Optional[ViewerPosition],
        criteria: FilterCriteria,
    ) -> list[DiscoveryResult]:
        """Filter listings and order them for display.

        Args:
            listings: Full listing set, in the order the data source returned it
            ratings: Mean rating per reviewed listing
            viewer_position: Viewer's coordinates, or None without a location fix
            criteria: Current filter state

        Returns:
            Matching listings with their resolved rating and distance; nearest
            first when a viewer position is known, otherwise in input order
        """
        results: list[DiscoveryResult] = []

        for listing in listings:
            if not self.matches_text(listing, criteria.search_term):
                continue
            if not self.matches_price(listing, criteria):
                continue

            distance_km = None
            if viewer_position is not None:
                distance_km = self.distance_to(viewer_position, listing)
                if distance_km > criteria.max_distance_km:
                    continue

            if not self.matches_diet(listing, criteria):
                continue

            rating = self.resolve_rating(listing, ratings)
            if rating < criteria.minimum_rating:
                continue

            results.append(
                DiscoveryResult(
                    listing=listing,
                    rating=rating,
                    has_reviews=listing.id in ratings,
                    distance_km=distance_km,
                )
            )

        if viewer_position is not None:
            # sorted() is stable: equal distances keep input order
            results = sorted(results, key=lambda r: r.distance_km)

        logger.debug(
            "discovery_ranked",
            total=len(listings),
            matched=len(results),
            by_distance=viewer_position is not None,
        )

        return results

    def discover(
        self,
        listings: Sequence[Listing],
        ratings: Mapping[str, float],
        viewer_position: Optional[ViewerPosition],
        criteria: FilterCriteria,
    ) -> list[Listing]:
        """Filtered, ordered listings; see ``rank`` for the rules."""
        return [
            result.listing
            for result in self.rank(listings, ratings, viewer_position, criteria)
        ]
