from __future__ import annotations

import logging
import os
from typing import Optional

from pythonjsonlogger import jsonlogger

APP_LOGGER_NAME = "course_browser"


def configure_logging(
        level: int = logging.INFO,
        force_format: Optional[str] = None,
) -> logging.Logger:
    """
    Configure root logger for the app and return the application logger,
    which is then handed to the components that log.

    Modes:
    - JSON (default) in prod
    - plain text (dev mode)

    Selection Order:
        1) force_format argument ("json" or "plain") if provided
        2) env var COURSE_BROWSER_LOG_FORMAT
        3) default = "json"
    """

    if force_format is not None:
        format_mode = force_format.lower()
    else:
        format_mode = os.getenv("COURSE_BROWSER_LOG_FORMAT", "json").lower()

    root = logging.getLogger()
    root.setLevel(level)

    handler = logging.StreamHandler()

    if format_mode == "plain":
        formatter = logging.Formatter(
            "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
        )
    else:
        formatter = jsonlogger.JsonFormatter(
            "%(asctime)s %(levelname)s %(name)s %(message)s"
        )

    handler.setFormatter(formatter)

    # Replace any existing handlers to avoid duplicate logs
    root.handlers.clear()
    root.addHandler(handler)

    return logging.getLogger(APP_LOGGER_NAME)
