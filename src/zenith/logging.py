import logging
from typing import Any
from uuid import UUID

import structlog

QUIET_LOGGERS = ("pymongo", "pymongo.topology", "pymongo.connection", "pymongo.command", "LiteLLM", "httpx")


def stringify_ids(_: Any, __: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    """Render UUIDs (alone or inside debounce key tuples) as plain strings."""
    for key, value in event_dict.items():
        if isinstance(value, UUID):
            event_dict[key] = str(value)
        elif isinstance(value, tuple):
            event_dict[key] = "/".join(str(part) for part in value)
    return event_dict


def setup_logging(debug: bool) -> None:
    logging.basicConfig(level=logging.DEBUG if debug else logging.INFO, format="%(message)s")

    # Driver and LLM client chatter
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        stringify_ids,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]
    processors.append(structlog.dev.ConsoleRenderer() if debug else structlog.processors.JSONRenderer())

    structlog.configure(
        processors=processors,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
