from __future__ import annotations

import sys

from loguru import logger

from talent_match.config import settings


def configure_logging(level: str | None = None) -> None:
    logger.remove()
    logger.add(
        sys.stdout,
        level=(level or settings.log_level).upper(),
        format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function} - {message}",
    )
