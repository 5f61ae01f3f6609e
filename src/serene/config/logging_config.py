"""
SERENE Logging Configuration

structlog setup for an engine embedded in a host process. Entries
carry the session id of the turn being processed and the engine
component that emitted them.

PRIVACY: Analysis modules log labels, scores and stages only.
Conversation text is dropped by key before rendering, so a stray
user_message=... keyword never reaches the sink.
"""

import logging
import sys
from contextlib import contextmanager
from typing import Any, Iterator

import structlog

from serene.config.settings import Settings


# Keys holding user-authored or generated conversation text
CONVERSATION_TEXT_KEYS: frozenset[str] = frozenset({
    "message",
    "user_message",
    "assistant_reply",
    "reply",
    "text",
    "notes",
    "trigger_description",
})

REDACTED = "[REDACTED]"


def _redact_conversation_text(
    logger: logging.Logger,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    """Replace conversation text values, including inside nested dicts."""
    def scrub(value: Any) -> Any:
        if isinstance(value, dict):
            return {
                k: REDACTED if k in CONVERSATION_TEXT_KEYS else scrub(v)
                for k, v in value.items()
            }
        return value

    return {
        key: REDACTED if key in CONVERSATION_TEXT_KEYS else scrub(value)
        for key, value in event_dict.items()
    }


def _add_component(
    logger: logging.Logger,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    # serene.services.detection.anxiety_scorer -> detection
    parts = event_dict.get("logger", "").split(".")
    if len(parts) > 2 and parts[0] == "serene":
        event_dict["component"] = parts[2] if parts[1] == "services" else parts[1]
    return event_dict


def get_processors(is_development: bool) -> list[Any]:
    """
    Build the processor chain.

    Args:
        is_development: Console rendering when True, JSON otherwise

    Returns:
        structlog processors, renderer last
    """
    processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        _redact_conversation_text,
        _add_component,
    ]
    if is_development:
        processors.append(structlog.dev.ConsoleRenderer())
    else:
        processors.append(structlog.processors.format_exc_info)
        processors.append(structlog.processors.JSONRenderer())
    return processors


def configure_logging(settings: Settings) -> None:
    """
    Route engine logs through stdlib logging at the configured level.

    Hosts call this once at startup; without it structlog's defaults
    apply and entries are printed unredacted.
    """
    structlog.configure(
        processors=get_processors(settings.env == "development"),
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, settings.log_level),
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)


@contextmanager
def session_context(session_id: str) -> Iterator[None]:
    """
    Tag every entry logged inside the block with the session id.

    The previous context is restored on exit, so one turn's id never
    leaks into later entries on the same thread or task.

    Args:
        session_id: Session identifier
    """
    with structlog.contextvars.bound_contextvars(session_id=session_id):
        yield
