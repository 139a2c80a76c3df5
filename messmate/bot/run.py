"""Telegram bot startup and main application entry point."""

import asyncio

from telegram import BotCommand, Update
from telegram.ext import Application, ContextTypes

from messmate.bot.command_map import register_handlers
from messmate.config import load_settings
from messmate.logging import get_logger, setup_logging
from messmate.services.discovery_ranking import DiscoveryRankingService
from messmate.storage.database import Database

BOT_COMMANDS = [
    ("start", "Start MessMate"),
    ("discover", "Search mess services"),
    ("price", "Set your price range"),
    ("distance", "Set the maximum distance"),
    ("minrating", "Set the minimum rating"),
    ("reviews", "Read a mess's reviews"),
    ("review", "Rate a mess"),
    ("help", "Show help and commands"),
]


async def setup_bot_menu(application: Application) -> None:
    """Configure the bot's command menu."""
    commands = [BotCommand(name, description) for name, description in BOT_COMMANDS]
    await application.bot.set_my_commands(commands)

    get_logger(__name__).info("bot_menu_configured", command_count=len(commands))


async def error_handler(update: object, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Log errors raised by handlers and tell the user something went wrong."""
    logger = get_logger(__name__)
    logger.error("handler_error", error=str(context.error), exc_info=context.error)

    if isinstance(update, Update) and update.effective_message:
        await update.effective_message.reply_text(
            "⚠️ Something went wrong.\n\nPlease try again in a moment."
        )


async def main() -> None:
    """Initialize and start the Telegram bot."""
    settings = load_settings()
    setup_logging(settings.log_level)
    logger = get_logger(__name__)

    logger.info("Starting MessMate bot", environment=settings.environment)

    db = Database(settings)
    await db.connect()

    ranking_service = DiscoveryRankingService(default_rating=settings.default_listing_rating)

    application = Application.builder().token(settings.bot_token).build()

    # Handlers open their own session per update from bot_data["db"]
    application.bot_data["db"] = db
    application.bot_data["settings"] = settings
    application.bot_data["ranking_service"] = ranking_service

    register_handlers(application)
    application.add_error_handler(error_handler)

    await application.initialize()
    await setup_bot_menu(application)
    await application.start()
    await application.updater.start_polling(
        allowed_updates=["message", "callback_query"]
    )

    logger.info("Bot initialization complete, polling")

    try:
        await asyncio.Event().wait()
    except (KeyboardInterrupt, SystemExit, asyncio.CancelledError):
        logger.info("Shutting down bot")
    finally:
        await application.updater.stop()
        await application.stop()
        await application.shutdown()
        await db.disconnect()


def run() -> None:
    """Console-script entry point."""
    asyncio.run(main())


if __name__ == "__main__":
    run()
