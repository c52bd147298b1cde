"""
Structured logging for the lead assistant (structlog).

JSON lines in production, colored console output with DEBUG=True. Customer
phone numbers are masked in every event, and conversation text is only
logged when LOG_CONVERSATION_TEXT is enabled.
"""

import logging
import re
import sys
from contextlib import contextmanager
from typing import Any, Iterator, Optional
import structlog
from app.config import config

# Loggers that emit one INFO line per HTTP request to the OpenAI API.
QUIET_LOGGERS = ["httpx", "httpcore", "openai", "urllib3"]

_PHONE_IN_TEXT_RE = re.compile(r"(\+?91[-\s]?)?([6-9]\d{5})(\d{4})")


def _mask_phone(value: str) -> str:
    return _PHONE_IN_TEXT_RE.sub(lambda m: "******" + m.group(3), value)


def mask_phone_numbers(logger: Any, method_name: str, event_dict: dict) -> dict:
    """structlog processor: keep only the last 4 digits of Indian mobile numbers."""
    for key, value in event_dict.items():
        if key != "event" and isinstance(value, str):
            event_dict[key] = _mask_phone(value)
    return event_dict


def configure_logging():
    """Configure stdlib logging and the structlog processor chain."""
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, config.LOG_LEVEL.upper(), logging.INFO),
    )
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        mask_phone_numbers,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]
    processors.append(structlog.dev.ConsoleRenderer() if config.DEBUG else structlog.processors.JSONRenderer())

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str = None) -> Any:
    """
    Get a structured logger instance.

    Usage:
        logger = get_logger(__name__)
        logger.info("lead_captured", lead_id="lead_1")
    """
    return structlog.get_logger(name)


@contextmanager
def conversation_context(conversation_id: str) -> Iterator[None]:
    """Attach conversation_id to every log event emitted inside the block."""
    with structlog.contextvars.bound_contextvars(conversation_id=conversation_id):
        yield


def conversation_text_for_log(text: Optional[str]) -> Optional[str]:
    """Return user/assistant text for logging, or None when text logging is off.

    Text is truncated to LOG_CONVERSATION_TEXT_MAX_CHARS.
    """
    if not config.LOG_CONVERSATION_TEXT:
        return None
    t = (text or "").strip()
    limit = config.LOG_CONVERSATION_TEXT_MAX_CHARS
    if limit > 0 and len(t) > limit:
        return t[:limit] + "..."
    return t


configure_logging()

logger = get_logger("lead_assistant")
