"""Package loggers.

Library modules only ask for a child of the ``graph_invariants`` logger and
never install handlers of their own; the package logger carries a
``NullHandler`` so nothing is printed unless the application configures
logging.  The command-line runners call :func:`configure_cli_logging`.
"""

import logging
import os
from typing import Optional, Union

PACKAGE_LOGGER = "graph_invariants"
LOG_LEVEL_ENV = "GRAPH_INVARIANTS_LOG_LEVEL"
LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"

logging.getLogger(PACKAGE_LOGGER).addHandler(logging.NullHandler())

_cli_handler: Optional[logging.Handler] = None


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


def _resolve_level(level: Union[int, str, None]) -> int:
    if level is None:
        level = os.getenv(LOG_LEVEL_ENV, "INFO")
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(level.upper())
    if not isinstance(resolved, int):
        raise ValueError(f"Unknown log level '{level}' (set via {LOG_LEVEL_ENV})")
    return resolved


def configure_cli_logging(level: Union[int, str, None] = None) -> logging.Logger:
    """Send package records to stderr at ``level`` (default: $GRAPH_INVARIANTS_LOG_LEVEL or INFO).

    Calling it again only updates the level.
    """

    global _cli_handler
    logger = logging.getLogger(PACKAGE_LOGGER)
    if _cli_handler is None:
        _cli_handler = logging.StreamHandler()
        _cli_handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(_cli_handler)
    logger.setLevel(_resolve_level(level))
    return logger


__all__ = ["LOG_LEVEL_ENV", "PACKAGE_LOGGER", "configure_cli_logging", "get_logger"]
