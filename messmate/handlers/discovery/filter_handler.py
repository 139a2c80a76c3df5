"""Filter commands: price window, distance cap and minimum rating."""

import math
from decimal import Decimal, InvalidOperation
from typing import Optional

from telegram import Update
from telegram.ext import CommandHandler, ContextTypes

from messmate.handlers import ERROR_TEMPLATES
from messmate.handlers.discovery.discover_handler import get_criteria, reply_with_results
from messmate.logging import get_logger

logger = get_logger(__name__)


def _parse_amount(raw: str) -> Optional[Decimal]:
    try:
        amount = Decimal(raw.replace(",", ""))
    except InvalidOperation:
        return None
    if not amount.is_finite() or amount < 0:
        return None
    return amount


def _parse_number(raw: str) -> Optional[float]:
    try:
        value = float(raw)
    except ValueError:
        return None
    return value if math.isfinite(value) else None


async def price_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /price <min> <max>.

    A minimum above the maximum is accepted and simply matches nothing.
    """
    args = context.args or []
    if len(args) != 2:
        await update.message.reply_text(
            ERROR_TEMPLATES["filter_usage"]("/price <min> <max>", "/price 2000 4500")
        )
        return

    price_min, price_max = _parse_amount(args[0]), _parse_amount(args[1])
    if price_min is None or price_max is None:
        await update.message.reply_text(
            ERROR_TEMPLATES["invalid_input"]("price range", "Use two amounts in ₹, e.g. 2000 4500")
        )
        return

    criteria = get_criteria(context).model_copy(
        update={"price_min": price_min, "price_max": price_max}
    )
    results = await reply_with_results(update, context, criteria)

    logger.info(
        "filter_price_set",
        user_id=update.effective_user.id,
        price_min=str(price_min),
        price_max=str(price_max),
        results=len(results),
    )


async def distance_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /distance <km>. Only applies once a location has been shared."""
    args = context.args or []
    if len(args) != 1:
        await update.message.reply_text(
            ERROR_TEMPLATES["filter_usage"]("/distance <km>", "/distance 5")
        )
        return

    max_distance_km = _parse_number(args[0])
    if max_distance_km is None or max_distance_km < 0:
        await update.message.reply_text(
            ERROR_TEMPLATES["invalid_input"]("distance", "Use a distance in km, e.g. 5")
        )
        return

    criteria = get_criteria(context).model_copy(update={"max_distance_km": max_distance_km})
    results = await reply_with_results(update, context, criteria)

    logger.info(
        "filter_distance_set",
        user_id=update.effective_user.id,
        max_distance_km=max_distance_km,
        results=len(results),
    )


async def minrating_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /minrating <x>."""
    args = context.args or []
    if len(args) != 1:
        await update.message.reply_text(
            ERROR_TEMPLATES["filter_usage"]("/minrating <1-5>", "/minrating 4")
        )
        return

    minimum_rating = _parse_number(args[0])
    if minimum_rating is None:
        await update.message.reply_text(
            ERROR_TEMPLATES["invalid_input"]("rating", "Use a number such as 3.5")
        )
        return

    criteria = get_criteria(context).model_copy(update={"minimum_rating": minimum_rating})
    results = await reply_with_results(update, context, criteria)

    logger.info(
        "filter_minrating_set",
        user_id=update.effective_user.id,
        minimum_rating=minimum_rating,
        results=len(results),
    )


def get_filter_handlers() -> list:
    """Return the filter command handlers."""
    return [
        CommandHandler("price", price_command),
        CommandHandler("distance", distance_command),
        CommandHandler("minrating", minrating_command),
    ]
