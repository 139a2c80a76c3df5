"""Models package - Pydantic domain models."""

from .discovery import DiscoveryResult, FilterCriteria, RatingSummary, ViewerPosition
from .listing import Listing, ListingInput
from .review import MAX_RATING, MIN_RATING, Review, ReviewInput

__all__ = [
    "DiscoveryResult",
    "FilterCriteria",
    "RatingSummary",
    "ViewerPosition",
    "Listing",
    "ListingInput",
    "MAX_RATING",
    "MIN_RATING",
    "Review",
    "ReviewInput",
]
