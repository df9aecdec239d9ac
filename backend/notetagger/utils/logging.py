from __future__ import annotations

import logging
import sys

from notetagger.config import settings


def setup_logging(level: str | None = None) -> None:
    """Configure root logging once for the application."""

    level_name = (level or settings.log_level).upper()
    logging.basicConfig(
        level=getattr(logging, level_name, logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stdout,
    )

    # The SDK logs every request line at INFO
    for name in ("httpx", "openai"):
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str | None = None) -> logging.Logger:
    return logging.getLogger(name)
