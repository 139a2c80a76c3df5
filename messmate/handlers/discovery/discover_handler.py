"""Discover handler: search, filter and browse mess services."""

from html import escape
from math import ceil
from typing import Optional

from telegram import InlineKeyboardButton, InlineKeyboardMarkup, Update
from telegram.ext import CallbackQueryHandler, CommandHandler, ContextTypes, MessageHandler, filters

from messmate.handlers import ERROR_TEMPLATES
from messmate.logging import get_logger
from messmate.models.discovery import DiscoveryResult, FilterCriteria, ViewerPosition
from messmate.services.discovery_feed import DiscoveryFeedService
from messmate.services.discovery_ranking import DiscoveryRankingService
from messmate.storage.postgres_listing_repo import PostgresListingRepository
from messmate.storage.postgres_review_repo import PostgresReviewRepository

logger = get_logger(__name__)

RESULTS_PER_PAGE = 5
FILTER_HINT = "⚙️ Adjust with /price, /distance or /minrating"

# user_data keys
CRITERIA_KEY = "criteria"
POSITION_KEY = "viewer_position"


def _default_criteria(context: ContextTypes.DEFAULT_TYPE) -> FilterCriteria:
    settings = context.bot_data.get("settings")
    if settings is None:
        return FilterCriteria()
    return settings.default_criteria()


def get_criteria(context: ContextTypes.DEFAULT_TYPE) -> FilterCriteria:
    """Current filters for this chat, starting from the configured defaults."""
    criteria = context.user_data.get(CRITERIA_KEY)
    if criteria is None:
        criteria = _default_criteria(context)
        context.user_data[CRITERIA_KEY] = criteria
    return criteria


def get_viewer_position(context: ContextTypes.DEFAULT_TYPE) -> Optional[ViewerPosition]:
    return context.user_data.get(POSITION_KEY)


def _results_per_page(context: ContextTypes.DEFAULT_TYPE) -> int:
    settings = context.bot_data.get("settings")
    return settings.results_per_page if settings is not None else RESULTS_PER_PAGE


def format_listing_card(result: DiscoveryResult) -> str:
    """Render one discovery result as an HTML card."""
    listing = result.listing
    lines = [
        f"🍛 <b>{escape(listing.name)}</b>",
        f"📍 {escape(listing.address)}",
        f"💰 ₹{listing.price_monthly:,}/month",
    ]

    tags = []
    if listing.is_vegetarian:
        tags.append("🥗 Veg")
    if listing.is_non_vegetarian:
        tags.append("🍗 Non-Veg")
    if tags:
        lines.append(" · ".join(tags))

    lines.append(f"⭐ {result.rating:.1f}" if result.has_reviews else "⭐ New")

    if result.distance_km is not None:
        lines.append(f"🚶 {result.distance_km:.1f} km away")

    lines.append(f"🆔 <code>{escape(listing.id)}</code>")
    return "\n".join(lines)


def format_filter_summary(
    criteria: FilterCriteria, viewer_position: Optional[ViewerPosition]
) -> str:
    parts = [
        f"₹{criteria.price_min:,}–{criteria.price_max:,}",
        f"⭐ ≥ {criteria.minimum_rating:.1f}",
    ]
    if viewer_position is not None:
        parts.append(f"≤ {criteria.max_distance_km:g} km")
    if criteria.vegetarian_only:
        parts.append("veg")
    if criteria.non_vegetarian_only:
        parts.append("non-veg")
    if criteria.search_term.strip():
        parts.append(f'"{escape(criteria.search_term.strip())}"')
    return "🔎 " + " · ".join(parts)


def build_filter_keyboard(criteria: FilterCriteria) -> list[list[InlineKeyboardButton]]:
    veg_label = "🥗 Veg only" + (" ✅" if criteria.vegetarian_only else "")
    nonveg_label = "🍗 Non-veg" + (" ✅" if criteria.non_vegetarian_only else "")
    return [
        [
            InlineKeyboardButton(veg_label, callback_data="discover:veg:0"),
            InlineKeyboardButton(nonveg_label, callback_data="discover:nonveg:0"),
        ],
        [InlineKeyboardButton("♻️ Reset filters", callback_data="discover:reset:0")],
    ]


def render_results_page(
    results: list[DiscoveryResult],
    page: int,
    criteria: FilterCriteria,
    viewer_position: Optional[ViewerPosition],
    per_page: int = RESULTS_PER_PAGE,
) -> tuple[str, InlineKeyboardMarkup]:
    """Build the message text and keyboard for one page of results."""
    summary = f"{format_filter_summary(criteria, viewer_position)}\n{FILTER_HINT}"
    keyboard = build_filter_keyboard(criteria)

    if not results:
        text = f"{ERROR_TEMPLATES['no_results']()}\n\n{summary}"
        return text, InlineKeyboardMarkup(keyboard)

    total_pages = ceil(len(results) / per_page)
    page = min(max(page, 0), total_pages - 1)
    start_idx = page * per_page
    page_results = results[start_idx:start_idx + per_page]

    text = f"🍽️ <b>Mess Services</b> (Page {page + 1}/{total_pages})\n{summary}\n"
    if viewer_position is None:
        text += "📍 Share your location to sort by distance.\n"
    text += "\n" + "\n\n".join(format_listing_card(r) for r in page_results)

    for result in page_results:
        keyboard.append([
            InlineKeyboardButton(
                f"⭐ Reviews: {result.listing.name[:25]}",
                callback_data=f"listing_reviews:{result.listing.id}",
            )
        ])

    nav_buttons = []
    if page > 0:
        nav_buttons.append(
            InlineKeyboardButton("⬅️ Previous", callback_data=f"discover:page:{page - 1}")
        )
    if page < total_pages - 1:
        nav_buttons.append(
            InlineKeyboardButton("➡️ Next", callback_data=f"discover:page:{page + 1}")
        )
    if nav_buttons:
        keyboard.append(nav_buttons)

    return text, InlineKeyboardMarkup(keyboard)


async def _load_results(
    context: ContextTypes.DEFAULT_TYPE, criteria: FilterCriteria
) -> list[DiscoveryResult]:
    ranking_service: Optional[DiscoveryRankingService] = context.bot_data.get(
        "ranking_service"
    )
    async with context.bot_data["db"].session() as session:
        feed = DiscoveryFeedService(
            PostgresListingRepository(session),
            PostgresReviewRepository(session),
            ranking_service,
        )
        return await feed.browse(get_viewer_position(context), criteria)


async def reply_with_results(
    update: Update, context: ContextTypes.DEFAULT_TYPE, criteria: FilterCriteria
) -> list[DiscoveryResult]:
    """Save the filters for this chat and reply with page one of the results."""
    context.user_data[CRITERIA_KEY] = criteria

    results = await _load_results(context, criteria)
    text, reply_markup = render_results_page(
        results, 0, criteria, get_viewer_position(context), _results_per_page(context)
    )
    await update.message.reply_text(text, reply_markup=reply_markup, parse_mode="HTML")
    return results


async def discover_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /discover [search term]: set the search and show page one."""
    search_term = " ".join(context.args or [])
    criteria = get_criteria(context).model_copy(update={"search_term": search_term})

    results = await reply_with_results(update, context, criteria)

    logger.info(
        "discover_displayed",
        user_id=update.effective_user.id,
        search_term=search_term,
        results=len(results),
    )


async def handle_discover_callback(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle filter toggles, reset and pagination: discover:{action}:{page}."""
    query = update.callback_query
    await query.answer()

    parts = query.data.split(":")
    if len(parts) != 3 or not parts[2].lstrip("-").isdigit():
        await query.edit_message_text(ERROR_TEMPLATES["invalid_request"]())
        return

    action = parts[1]
    page = int(parts[2])
    criteria = get_criteria(context)

    if action == "veg":
        criteria = criteria.model_copy(update={"vegetarian_only": not criteria.vegetarian_only})
    elif action == "nonveg":
        criteria = criteria.model_copy(
            update={"non_vegetarian_only": not criteria.non_vegetarian_only}
        )
    elif action == "reset":
        # Reset clears the filter panel but keeps the search box
        criteria = _default_criteria(context).model_copy(
            update={"search_term": criteria.search_term}
        )
    elif action != "page":
        await query.edit_message_text(ERROR_TEMPLATES["invalid_request"]())
        return

    context.user_data[CRITERIA_KEY] = criteria

    results = await _load_results(context, criteria)
    text, reply_markup = render_results_page(
        results, page, criteria, get_viewer_position(context), _results_per_page(context)
    )
    await query.edit_message_text(text, reply_markup=reply_markup, parse_mode="HTML")

    logger.info("discover_callback", action=action, page=page, results=len(results))


async def handle_location(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Store a shared location as the viewer position for distance ranking."""
    location = update.message.location
    context.user_data[POSITION_KEY] = ViewerPosition(
        latitude=location.latitude, longitude=location.longitude
    )

    await update.message.reply_text(
        "📍 Location saved!\n\n"
        "Use /discover to see mess services nearest to you first."
    )

    logger.info("viewer_position_saved", user_id=update.effective_user.id)


def get_discover_handlers() -> list:
    """Return list of discovery-related handlers."""
    return [
        CommandHandler("discover", discover_command),
        CallbackQueryHandler(handle_discover_callback, pattern=r"^discover:"),
        MessageHandler(filters.LOCATION, handle_location),
    ]
