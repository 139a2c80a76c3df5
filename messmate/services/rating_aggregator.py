"""Rating aggregation over review records."""

from collections import defaultdict
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable

from messmate.models.discovery import RatingSummary
from messmate.models.review import Review

_ONE_DECIMAL = Decimal("0.1")


def _rounded_mean(total: int, count: int) -> float:
    # Decimal keeps x.x5 means exact so they round up, not to even
    mean = Decimal(total) / Decimal(count)
    return float(mean.quantize(_ONE_DECIMAL, rounding=ROUND_HALF_UP))


def _totals(reviews: Iterable[Review]) -> dict[str, tuple[int, int]]:
    totals: dict[str, list[int]] = defaultdict(lambda: [0, 0])
    for review in reviews:
        bucket = totals[review.listing_id]
        bucket[0] += review.rating
        bucket[1] += 1
    return {listing_id: (total, count) for listing_id, (total, count) in totals.items()}


def aggregate_ratings(reviews: Iterable[Review]) -> dict[str, float]:
    """Mean rating per listing, rounded half-up to one decimal.

    Listings without reviews are absent from the result.
    """
    return {
        listing_id: _rounded_mean(total, count)
        for listing_id, (total, count) in _totals(reviews).items()
    }


def summarize_ratings(reviews: Iterable[Review]) -> dict[str, RatingSummary]:
    """Review count and rounded mean per reviewed listing."""
    return {
        listing_id: RatingSummary(count=count, average=_rounded_mean(total, count))
        for listing_id, (total, count) in _totals(reviews).items()
    }


def summarize_listing(reviews: Iterable[Review], listing_id: str) -> RatingSummary:
    """Summary for a single listing; count 0 and no average when unreviewed."""
    summary = summarize_ratings(r for r in reviews if r.listing_id == listing_id)
    return summary.get(listing_id, RatingSummary(count=0))
