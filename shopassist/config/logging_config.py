"""Logging setup shared by the API and services."""

import logging
import sys
from typing import Optional

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

_configured = False


def setup_logging(level: Optional[str] = None) -> None:
    """
    Configure the root logger with a single stdout handler.

    Safe to call more than once; only the first call installs the handler.

    Args:
        level: Log level name, defaults to ``settings.log_level``
    """
    global _configured
    if _configured:
        return

    if level is None:
        from shopassist.config.settings import settings
        level = settings.log_level

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))

    root = logging.getLogger()
    root.addHandler(handler)
    root.setLevel(level.upper())

    # Third-party clients are chatty at INFO
    for noisy in ("httpx", "chromadb", "sentence_transformers"):
        logging.getLogger(noisy).setLevel(logging.WARNING)

    _configured = True


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
