from __future__ import annotations

import logging
import sys

_ROOT_LOGGER = "agentdesk"
_HANDLER_NAME = "agentdesk-stderr"
_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def parse_level(value: str | None, default: str = "WARNING") -> str:
    if not value:
        return default
    normalized = value.strip().upper()
    if normalized == "WARN":
        normalized = "WARNING"
    if normalized not in _LEVELS:
        return default
    return normalized


def setup_logging(level: str = "WARNING") -> logging.Logger:
    """Configure and return the root agentdesk logger.

    Installs one stderr handler; calling again replaces it so the handler
    always writes to the current ``sys.stderr``.
    """
    logger = logging.getLogger(_ROOT_LOGGER)
    logger.setLevel(getattr(logging, parse_level(level)))

    for existing in list(logger.handlers):
        if existing.get_name() == _HANDLER_NAME:
            logger.removeHandler(existing)

    handler = logging.StreamHandler(sys.stderr)
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(
        logging.Formatter(
            "%(asctime)s [%(levelname)-8s] %(name)s: %(message)s",
            datefmt="%H:%M:%S",
        )
    )
    logger.addHandler(handler)
    return logger


def get_logger(name: str) -> logging.Logger:
    """Get a child logger under the agentdesk namespace."""
    return logging.getLogger(f"{_ROOT_LOGGER}.{name}")
