"""Logging helpers."""

from __future__ import annotations

import logging
from pathlib import Path

from config import LoggingSettings


def setup_logging(settings: LoggingSettings) -> logging.Logger:
    """Configure and return the package logger."""
    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if settings.log_file:
        log_file = Path(settings.log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))
    logging.basicConfig(
        level=settings.level.upper(),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        handlers=handlers,
    )
    return logging.getLogger("thumbcrop")
