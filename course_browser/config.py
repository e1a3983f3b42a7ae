from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from course_browser.core.exceptions import ConfigError
from course_browser.services.catalog_service import SORT_OPTIONS

logger = logging.getLogger(__name__)


@dataclass
class AppConfig:
    """
    Parsed global.json plus the environment overrides the app reads.

    - ui_title: title shown in the navbar and browser tab
    - catalog_file: course records (JSON list), resolved against the config root
    - default_sort: initial sort of the results table
    - currency: prefix used when displaying prices
    """
    config_root: Path
    catalog_file: Path
    ui_title: str = "Course Browser"
    default_sort: str = "rating"
    currency: str = "$"
    port: int = 8051
    debug: bool = False


def default_config_root() -> Path:
    return Path(os.getenv("COURSE_BROWSER_CONFIG_ROOT", "config"))


def load_app_config(root: Optional[Path | str] = None) -> AppConfig:
    """
    Load configuration from ``root/global.json``.

    Expected structure:

        root/
            global.json
            courses.json   (or wherever "catalog_file" points)

    Relative ``catalog_file`` paths are resolved against the config root.
    PORT and DEBUG are read from the environment.

    :raises ConfigError: if global.json is missing, not valid JSON, or
        declares an unknown default_sort.
    """
    root = Path(root) if root is not None else default_config_root()

    logger.info("Loading app config", extra={"config_root": str(root)})

    global_path = root / "global.json"
    if not global_path.is_file():
        raise ConfigError(f"File not found at {global_path}")

    try:
        with global_path.open(encoding="utf-8") as f:
            raw = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigError(f"Invalid JSON in {global_path}: {e}") from e

    if not isinstance(raw, dict):
        raise ConfigError(f"{global_path} must contain a JSON object")

    catalog_path = Path(raw.get("catalog_file", "courses.json"))
    if not catalog_path.is_absolute():
        catalog_path = (root / catalog_path).resolve()

    default_sort = raw.get("default_sort", "rating")
    if default_sort not in SORT_OPTIONS:
        raise ConfigError(
            f"Unknown default_sort '{default_sort}', expected one of {', '.join(SORT_OPTIONS)}"
        )

    try:
        port = int(os.getenv("PORT", "8051"))
    except ValueError as e:
        raise ConfigError(f"PORT must be an integer, got {os.getenv('PORT')!r}") from e

    return AppConfig(
        config_root=root,
        catalog_file=catalog_path,
        ui_title=raw.get("ui_title", "Course Browser"),
        default_sort=default_sort,
        currency=raw.get("currency", "$"),
        port=port,
        debug=os.getenv("DEBUG", "0") == "1",
    )
