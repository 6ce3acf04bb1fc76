"""Side-channel logging for the stdio server.

Stdout carries the MCP JSON-RPC stream and stderr is shown by most hosts
as protocol noise, so the package logger never writes to either. Records
are discarded unless a log file is configured.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..config import AppConfig

LOGGER_NAME = "fellow_mcp_server"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def configure_logging(config: AppConfig) -> logging.Logger:
    """Attach handlers to the package logger.

    A NullHandler is always installed (so `logging.lastResort` never
    prints to stderr) and a FileHandler is added when `config.log_file`
    is set. Calling this twice replaces the earlier handlers.
    """

    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    logger.addHandler(logging.NullHandler())
    if config.log_file is not None:
        config.log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(config.log_file, encoding="utf-8")
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(file_handler)

    logger.setLevel(config.log_level)
    logger.propagate = False
    return logger
