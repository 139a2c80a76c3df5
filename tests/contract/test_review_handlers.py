"""Contract tests for review handlers.

Validates /review submission replies and the /reviews summary view.
"""

from contextlib import asynccontextmanager
from unittest.mock import AsyncMock, Mock, patch

import pytest
from pydantic import ValidationError

from messmate.handlers.reviews.review_handler import (
    handle_listing_reviews,
    review_command,
    reviews_command,
)
from messmate.models.review import Review, ReviewInput
from messmate.services.review_submission import ListingNotFoundError

MODULE = "messmate.handlers.reviews.review_handler"


class FakeDatabase:
    """Database stand-in yielding a mock session."""

    @asynccontextmanager
    async def session(self):
        yield Mock()


class MockUpdate:
    """Mock Telegram Update object."""

    def __init__(self, user_id=12345, callback_data=None):
        self.effective_user = Mock()
        self.effective_user.id = user_id

        self.message = Mock()
        self.message.reply_text = AsyncMock()

        self.callback_query = Mock()
        self.callback_query.data = callback_data
        self.callback_query.answer = AsyncMock()
        self.callback_query.edit_message_text = AsyncMock()


class MockContext:
    """Mock Telegram Context object."""

    def __init__(self, args=None):
        self.args = args or []
        self.bot_data = {"db": FakeDatabase()}
        self.user_data = {}


def _validation_error() -> ValidationError:
    try:
        ReviewInput(listing_id="m", user_id="u", rating=9)
    except ValidationError as e:
        return e
    raise AssertionError("rating 9 should not validate")


@pytest.mark.asyncio
async def test_review_requires_listing_and_rating():
    update = MockUpdate()
    context = MockContext(args=["mess-1"])

    await review_command(update, context)

    assert "Usage: /review" in update.message.reply_text.call_args[0][0]


@pytest.mark.asyncio
async def test_review_rejects_non_numeric_rating():
    update = MockUpdate()
    context = MockContext(args=["mess-1", "five"])

    with patch(f"{MODULE}.ReviewSubmissionService") as service_cls:
        await review_command(update, context)

    service_cls.assert_not_called()
    assert "Invalid rating" in update.message.reply_text.call_args[0][0]


@pytest.mark.asyncio
async def test_review_submitted_reply():
    update = MockUpdate(user_id=777)
    context = MockContext(args=["mess-1", "4", "Great", "thali"])
    review = Review(listing_id="mess-1", user_id="777", rating=4, comment="Great thali")

    with patch(f"{MODULE}.ReviewSubmissionService") as service_cls:
        service_cls.return_value.submit = AsyncMock(return_value=(review, True))
        await review_command(update, context)

    service_cls.return_value.submit.assert_awaited_once_with("777", "mess-1", 4, "Great thali")
    text = update.message.reply_text.call_args[0][0]
    assert "Review submitted" in text
    assert "★★★★☆" in text
    assert "Great thali" in text


@pytest.mark.asyncio
async def test_review_updated_reply():
    update = MockUpdate()
    context = MockContext(args=["mess-1", "2"])
    review = Review(listing_id="mess-1", user_id="12345", rating=2)

    with patch(f"{MODULE}.ReviewSubmissionService") as service_cls:
        service_cls.return_value.submit = AsyncMock(return_value=(review, False))
        await review_command(update, context)

    service_cls.return_value.submit.assert_awaited_once_with("12345", "mess-1", 2, None)
    assert "Review updated" in update.message.reply_text.call_args[0][0]


@pytest.mark.asyncio
async def test_review_unknown_listing():
    update = MockUpdate()
    context = MockContext(args=["nope", "5"])

    with patch(f"{MODULE}.ReviewSubmissionService") as service_cls:
        service_cls.return_value.submit = AsyncMock(side_effect=ListingNotFoundError("nope"))
        await review_command(update, context)

    assert "not found" in update.message.reply_text.call_args[0][0]


@pytest.mark.asyncio
async def test_review_out_of_range_rating():
    update = MockUpdate()
    context = MockContext(args=["mess-1", "9"])

    with patch(f"{MODULE}.ReviewSubmissionService") as service_cls:
        service_cls.return_value.submit = AsyncMock(side_effect=_validation_error())
        await review_command(update, context)

    assert "between 1 and 5" in update.message.reply_text.call_args[0][0]


@pytest.mark.asyncio
async def test_reviews_requires_listing_id():
    update = MockUpdate()
    context = MockContext()

    await reviews_command(update, context)

    assert "Usage: /reviews" in update.message.reply_text.call_args[0][0]


@pytest.mark.asyncio
async def test_reviews_shows_summary(make_listing, make_review):
    update = MockUpdate()
    context = MockContext(args=["mess-1"])
    reviews = [
        make_review("mess-1", 5, comment="Homely food"),
        make_review("mess-1", 3, user_id="user-2"),
    ]

    with patch(f"{MODULE}.PostgresListingRepository") as listing_cls, patch(
        f"{MODULE}.PostgresReviewRepository"
    ) as review_cls:
        listing_cls.return_value.get_by_id = AsyncMock(
            return_value=make_listing("mess-1", name="Maa Ki Rasoi")
        )
        review_cls.return_value.list_for_listing = AsyncMock(return_value=reviews)
        await reviews_command(update, context)

    text = update.message.reply_text.call_args[0][0]
    assert "Maa Ki Rasoi" in text
    assert "⭐ 4.0 (2 reviews)" in text
    assert "Homely food" in text


@pytest.mark.asyncio
async def test_reviews_for_unreviewed_listing(make_listing):
    update = MockUpdate()
    context = MockContext(args=["mess-1"])

    with patch(f"{MODULE}.PostgresListingRepository") as listing_cls, patch(
        f"{MODULE}.PostgresReviewRepository"
    ) as review_cls:
        listing_cls.return_value.get_by_id = AsyncMock(return_value=make_listing("mess-1"))
        review_cls.return_value.list_for_listing = AsyncMock(return_value=[])
        await reviews_command(update, context)

    assert "No reviews yet" in update.message.reply_text.call_args[0][0]


@pytest.mark.asyncio
async def test_listing_reviews_callback_unknown_listing():
    update = MockUpdate(callback_data="listing_reviews:gone")
    context = MockContext()

    with patch(f"{MODULE}.PostgresListingRepository") as listing_cls:
        listing_cls.return_value.get_by_id = AsyncMock(return_value=None)
        await handle_listing_reviews(update, context)

    listing_cls.return_value.get_by_id.assert_awaited_once_with("gone")
    update.callback_query.answer.assert_awaited_once()
    assert "not found" in update.callback_query.edit_message_text.call_args[0][0]


@pytest.mark.asyncio
async def test_review_overlong_comment_names_comment(make_listing):
    update = MockUpdate()
    context = MockContext(args=["mess-1", "5", "x" * 1001])

    with patch(f"{MODULE}.PostgresListingRepository") as listing_cls, patch(
        f"{MODULE}.PostgresReviewRepository"
    ) as review_cls:
        listing_cls.return_value.get_by_id = AsyncMock(return_value=make_listing("mess-1"))
        review_cls.return_value.create = AsyncMock()
        await review_command(update, context)

    text = update.message.reply_text.call_args[0][0]
    assert "Invalid comment." in text
    assert "1000 characters" in text
    assert "rating" not in text.lower()
    review_cls.return_value.create.assert_not_called()


@pytest.mark.asyncio
async def test_listing_reviews_callback_offers_back_button(make_listing):
    update = MockUpdate(callback_data="listing_reviews:mess-1")
    context = MockContext()

    with patch(f"{MODULE}.PostgresListingRepository") as listing_cls, patch(
        f"{MODULE}.PostgresReviewRepository"
    ) as review_cls:
        listing_cls.return_value.get_by_id = AsyncMock(return_value=make_listing("mess-1"))
        review_cls.return_value.list_for_listing = AsyncMock(return_value=[])
        await handle_listing_reviews(update, context)

    markup = update.callback_query.edit_message_text.call_args.kwargs["reply_markup"]
    buttons = [b for row in markup.inline_keyboard for b in row]
    assert [(b.text, b.callback_data) for b in buttons] == [("⬅️ Back", "discover:page:0")]
