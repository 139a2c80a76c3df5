"""Structured logging configuration using structlog."""

import logging
import re
import sys

import structlog

# Telegram bot tokens leak into httpx request URLs: <bot_id>:<35-char secret>
_BOT_TOKEN_PATTERN = re.compile(r"(\d{8,12}:[A-Za-z0-9_-]{35})")
_REDACTED = "<BOT_TOKEN_REDACTED>"

# Third-party loggers that see the bot token or database URLs
_LIBRARY_LOGGERS = ("httpx", "httpcore", "telegram", "sqlalchemy.engine")


def redact(value: str) -> str:
    """Replace any bot token found in ``value``."""
    return _BOT_TOKEN_PATTERN.sub(_REDACTED, value)


class TokenRedactingFilter(logging.Filter):
    """Filter that redacts bot tokens from stdlib log records."""

    def filter(self, record: logging.LogRecord) -> bool:
        if record.msg and isinstance(record.msg, str):
            record.msg = redact(record.msg)
        if record.args:
            record.args = tuple(
                redact(arg) if isinstance(arg, str) else arg for arg in record.args
            )
        return True


def _redact_tokens(
    logger: logging.Logger, method_name: str, event_dict: dict
) -> dict:
    """Structlog processor applying the same redaction to event values."""
    for key, value in list(event_dict.items()):
        if isinstance(value, str):
            event_dict[key] = redact(value)
    return event_dict


def setup_logging(log_level: str = "INFO") -> None:
    """Configure stdlib and structlog logging for the bot process."""
    level = getattr(logging, log_level.upper())
    token_filter = TokenRedactingFilter()

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter("%(message)s"))
    handler.addFilter(token_filter)
    root_logger.addHandler(handler)

    for logger_name in _LIBRARY_LOGGERS:
        logging.getLogger(logger_name).addFilter(token_filter)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            _redact_tokens,
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.BoundLogger:
    """Get a structured logger instance."""
    return structlog.get_logger(name)
