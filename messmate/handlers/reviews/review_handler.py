"""Review handlers: rate a mess service and read its reviews."""

from html import escape

from pydantic import ValidationError
from telegram import InlineKeyboardButton, InlineKeyboardMarkup, Update
from telegram.ext import CallbackQueryHandler, CommandHandler, ContextTypes

from messmate.handlers import ERROR_TEMPLATES
from messmate.logging import get_logger
from messmate.models.review import MAX_COMMENT_LENGTH
from messmate.services.rating_aggregator import summarize_listing
from messmate.services.review_submission import ListingNotFoundError, ReviewSubmissionService
from messmate.storage.postgres_listing_repo import PostgresListingRepository
from messmate.storage.postgres_review_repo import PostgresReviewRepository

logger = get_logger(__name__)

RECENT_REVIEWS_SHOWN = 5


def _stars(rating: int) -> str:
    return "★" * rating + "☆" * (5 - rating)


def _validation_message(error: ValidationError) -> str:
    """Pick the error reply for the first field that failed validation."""
    loc = error.errors()[0]["loc"]
    if loc and loc[0] == "comment":
        return ERROR_TEMPLATES["invalid_input"](
            "comment", f"Keep comments to {MAX_COMMENT_LENGTH} characters or fewer"
        )
    return ERROR_TEMPLATES["invalid_input"]("rating", "Rating must be between 1 and 5")


async def review_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /review <listing_id> <rating> [comment]."""
    args = context.args or []
    if len(args) < 2:
        await update.message.reply_text(ERROR_TEMPLATES["review_usage"]())
        return

    listing_id = args[0]
    try:
        rating = int(args[1])
    except ValueError:
        await update.message.reply_text(
            ERROR_TEMPLATES["invalid_input"]("rating", "Rating must be a whole number from 1 to 5")
        )
        return
    comment = " ".join(args[2:]) or None
    user_id = str(update.effective_user.id)

    try:
        async with context.bot_data["db"].session() as session:
            service = ReviewSubmissionService(
                PostgresReviewRepository(session),
                PostgresListingRepository(session),
            )
            review, created = await service.submit(user_id, listing_id, rating, comment)
    except ListingNotFoundError:
        await update.message.reply_text(ERROR_TEMPLATES["listing_not_found"]())
        return
    except ValidationError as e:
        await update.message.reply_text(_validation_message(e))
        return

    if created:
        text = f"✅ Review submitted!\n\n{_stars(review.rating)}"
    else:
        text = f"✏️ Review updated!\n\n{_stars(review.rating)}"
    if review.comment:
        text += f"\n“{review.comment}”"

    await update.message.reply_text(text)

    logger.info(
        "review_command_completed",
        user_id=user_id,
        listing_id=listing_id,
        created=created,
    )


async def _render_listing_reviews(context: ContextTypes.DEFAULT_TYPE, listing_id: str) -> str:
    async with context.bot_data["db"].session() as session:
        listing = await PostgresListingRepository(session).get_by_id(listing_id)
        if listing is None:
            return ERROR_TEMPLATES["listing_not_found"]()
        reviews = await PostgresReviewRepository(session).list_for_listing(listing_id)

    summary = summarize_listing(reviews, listing_id)
    text = f"🍛 <b>{escape(listing.name)}</b>\n"

    if summary.count == 0:
        return text + "\nNo reviews yet. Be the first with /review!"

    noun = "review" if summary.count == 1 else "reviews"
    text += f"⭐ {summary.average:.1f} ({summary.count} {noun})\n"

    for review in reviews[:RECENT_REVIEWS_SHOWN]:
        text += f"\n{_stars(review.rating)}"
        if review.comment:
            text += f"\n{escape(review.comment)}"
        text += "\n"

    return text


async def reviews_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /reviews <listing_id>."""
    if not context.args:
        await update.message.reply_text(ERROR_TEMPLATES["reviews_usage"]())
        return

    text = await _render_listing_reviews(context, context.args[0])
    await update.message.reply_text(text, parse_mode="HTML")


async def handle_listing_reviews(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Show reviews for the listing picked from discovery results."""
    query = update.callback_query
    await query.answer()

    _, listing_id = query.data.split(":", 1)
    text = await _render_listing_reviews(context, listing_id)
    back = InlineKeyboardMarkup(
        [[InlineKeyboardButton("⬅️ Back", callback_data="discover:page:0")]]
    )
    await query.edit_message_text(text, reply_markup=back, parse_mode="HTML")


def get_review_handlers() -> list:
    """Return list of review-related handlers."""
    return [
        CommandHandler("review", review_command),
        CommandHandler("reviews", reviews_command),
        CallbackQueryHandler(handle_listing_reviews, pattern=r"^listing_reviews:"),
    ]
