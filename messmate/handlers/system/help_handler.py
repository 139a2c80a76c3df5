"""Start and help command handlers."""

from telegram import Update
from telegram.ext import CommandHandler, ContextTypes

from messmate.logging import get_logger

logger = get_logger(__name__)

HELP_TEXT = (
    "🆘 <b>Help &amp; Commands</b>\n\n"
    "<b>Find a mess:</b>\n"
    "• /discover [name or area] — Search mess services\n"
    "• 📎 Share your location — Sort results by distance and unlock the distance filter\n\n"
    "<b>Reviews:</b>\n"
    "• /reviews &lt;listing_id&gt; — Read ratings and comments\n"
    "• /review &lt;listing_id&gt; &lt;1-5&gt; [comment] — Rate a mess "
    "(sending it again updates your review)\n\n"
    "<b>Filters:</b>\n"
    "• /price &lt;min&gt; &lt;max&gt; — Monthly price range in ₹\n"
    "• /distance &lt;km&gt; — Maximum distance (needs your location)\n"
    "• /minrating &lt;1-5&gt; — Minimum average rating\n"
    "Use the buttons under the results to toggle veg / non-veg or reset filters.\n\n"
    "• /help — Show this help message"
)


async def start_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Greet the user and point them at discovery."""
    name = update.effective_user.first_name or "there"
    await update.message.reply_text(
        f"👋 Hi {name}! MessMate helps you find affordable meal subscriptions nearby.\n\n"
        "Share your location, then use /discover to browse. /help lists everything."
    )
    logger.info("start_displayed", user_id=update.effective_user.id)


async def help_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Show command help."""
    await update.message.reply_text(HELP_TEXT, parse_mode="HTML")
    logger.info("help_displayed", user_id=update.effective_user.id)


def get_help_handlers() -> list:
    """Create the /start and /help command handlers."""
    return [
        CommandHandler("start", start_command),
        CommandHandler("help", help_command),
    ]
