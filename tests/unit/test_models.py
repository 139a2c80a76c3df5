"""Unit tests for listing, review and discovery model validation."""

from decimal import Decimal

import pytest
from pydantic import ValidationError

from messmate.models.discovery import FilterCriteria, ViewerPosition
from messmate.models.listing import Listing, ListingInput
from messmate.models.review import Review, ReviewInput


def test_listing_defaults_to_ungeocoded():
    """Test listing without coordinates is flagged as not geocoded."""
    listing = Listing(name="Sai Mess", address="FC Road", price_monthly=Decimal("2500"))

    assert listing.latitude == 0.0
    assert listing.longitude == 0.0
    assert listing.is_geocoded is False
    assert listing.id


def test_listing_with_one_zero_coordinate_is_geocoded():
    listing = Listing(
        name="Equator Mess", address="Somewhere", price_monthly=Decimal("2500"),
        latitude=0.0, longitude=32.5,
    )

    assert listing.is_geocoded is True


def test_listing_facets_are_independent():
    both = Listing(
        name="Both", address="A", price_monthly=Decimal("1"),
        is_vegetarian=True, is_non_vegetarian=True,
    )
    neither = Listing(name="Neither", address="B", price_monthly=Decimal("1"))

    assert both.offers_vegetarian and both.offers_non_vegetarian
    assert not neither.offers_vegetarian and not neither.offers_non_vegetarian


def test_listing_price_must_be_positive():
    with pytest.raises(ValidationError):
        Listing(name="Free Mess", address="X", price_monthly=Decimal("0"))


def test_listing_input_coordinate_bounds():
    with pytest.raises(ValidationError):
        ListingInput(name="Mess", address="X", price_monthly=Decimal("100"), latitude=91)


def test_review_rating_range():
    """Test review ratings are limited to 1-5."""
    Review(listing_id="a", user_id="u", rating=1)
    Review(listing_id="a", user_id="u", rating=5)

    with pytest.raises(ValidationError):
        Review(listing_id="a", user_id="u", rating=0)
    with pytest.raises(ValidationError):
        Review(listing_id="a", user_id="u", rating=6)


def test_review_input_trims_comment():
    review = ReviewInput(listing_id="a", user_id="u", rating=4, comment="  Tasty dal  ")

    assert review.comment == "Tasty dal"


def test_review_input_blank_comment_becomes_none():
    review = ReviewInput(listing_id="a", user_id="u", rating=4, comment="   ")

    assert review.comment is None


def test_filter_criteria_defaults():
    criteria = FilterCriteria()

    assert criteria.search_term == ""
    assert criteria.price_min == Decimal("1000")
    assert criteria.price_max == Decimal("10000")
    assert criteria.max_distance_km == 50.0
    assert criteria.minimum_rating == 1.0
    assert not criteria.vegetarian_only
    assert not criteria.non_vegetarian_only


def test_filter_criteria_accepts_inverted_range():
    """Test an inverted price range is a valid query, not a validation error."""
    criteria = FilterCriteria(price_min=Decimal("9000"), price_max=Decimal("1000"))

    assert criteria.price_min > criteria.price_max


def test_filter_criteria_is_immutable():
    criteria = FilterCriteria()

    with pytest.raises(ValidationError):
        criteria.vegetarian_only = True

    toggled = criteria.model_copy(update={"vegetarian_only": True})
    assert toggled.vegetarian_only is True
    assert criteria.vegetarian_only is False


def test_viewer_position_bounds():
    with pytest.raises(ValidationError):
        ViewerPosition(latitude=-91, longitude=0)
