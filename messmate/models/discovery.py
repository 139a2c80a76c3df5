"""Discovery value objects: viewer position, filter state, results."""

from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from .listing import Listing


class ViewerPosition(BaseModel):
    """The viewer's current coordinates, present only after a location share."""

    model_config = ConfigDict(frozen=True)

    latitude: float = Field(ge=-90, le=90)
    longitude: float = Field(ge=-180, le=180)


class FilterCriteria(BaseModel):
    """Session-local discovery filters.

    No cross-field validation: an inverted price range or an out-of-range
    rating threshold is a legitimate "nothing matches" query.
    """

    model_config = ConfigDict(frozen=True)

    search_term: str = ""
    price_min: Decimal = Decimal("1000")
    price_max: Decimal = Decimal("10000")
    max_distance_km: float = 50.0
    vegetarian_only: bool = False
    non_vegetarian_only: bool = False
    minimum_rating: float = 1.0


class RatingSummary(BaseModel):
    """Review count and rounded mean rating for one listing."""

    model_config = ConfigDict(frozen=True)

    count: int = Field(ge=0)
    average: Optional[float] = None


class DiscoveryResult(BaseModel):
    """A listing that passed discovery, with the values it was ranked on."""

    listing: Listing
    rating: float
    has_reviews: bool
    distance_km: Optional[float] = None
