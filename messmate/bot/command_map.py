"""Command routing configuration for bot handlers.

Registers all command, message and callback handlers with the bot application.
"""

from telegram.ext import Application

from messmate.handlers.discovery.discover_handler import get_discover_handlers
from messmate.handlers.discovery.filter_handler import get_filter_handlers
from messmate.handlers.reviews.review_handler import get_review_handlers
from messmate.handlers.system.help_handler import get_help_handlers
from messmate.logging import get_logger

logger = get_logger(__name__)


def register_handlers(app: Application) -> None:
    """
    Register all handlers with the application.

    Args:
        app: Telegram bot Application instance
    """
    for handler in get_help_handlers():
        app.add_handler(handler)
    logger.info("handler_registered", handler="start_help")

    # Discovery: /discover, filter/page callbacks, location shares
    for handler in get_discover_handlers():
        app.add_handler(handler)
    logger.info("handler_registered", handler="discover")

    # Filters: /price, /distance, /minrating
    for handler in get_filter_handlers():
        app.add_handler(handler)
    logger.info("handler_registered", handler="filters")

    # Reviews: /review, /reviews, per-listing review callbacks
    for handler in get_review_handlers():
        app.add_handler(handler)
    logger.info("handler_registered", handler="reviews")

    logger.info("all_handlers_registered")
