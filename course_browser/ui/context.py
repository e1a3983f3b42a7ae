from __future__ import annotations

import logging
from dataclasses import dataclass

from course_browser.config import AppConfig
from course_browser.services.catalog_service import CourseCatalog


@dataclass
class AppContext:
    """
    Holds shared state for the Dash app: config, the loaded catalog and the
    application logger. This is passed into layout + callback registration
    functions instead of using module-level globals.
    """
    config: AppConfig
    catalog: CourseCatalog
    logger: logging.Logger
