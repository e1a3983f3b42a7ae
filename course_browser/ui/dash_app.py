from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import dash_bootstrap_components as dbc
from dash import Dash

from course_browser.config import AppConfig, load_app_config
from course_browser.services.catalog_service import CourseCatalog
from course_browser.ui.callbacks.callbacks_filters import register_filter_callbacks
from course_browser.ui.callbacks.callbacks_results import register_results_callbacks
from course_browser.ui.context import AppContext
from course_browser.ui.layout.build_layout import build_layout


def create_dash_app(
    config_root: Path | str | None = None,
    logger: Optional[logging.Logger] = None,
    config: Optional[AppConfig] = None,
) -> Dash:
    """
    Build the Dash app: load config and catalog, lay out the page and
    register callbacks. ``logger`` is handed down to every component that
    logs; callers normally pass the one returned by configure_logging().

    :raises ConfigError: if global.json is missing or invalid.
    :raises CatalogSchemaError: if the course file is malformed.
    """
    logger = logger if logger is not None else logging.getLogger("course_browser")

    # 1) Load Config
    if config is None:
        config = load_app_config(config_root)

    # 2) Load catalog
    catalog = CourseCatalog.from_json(config.catalog_file)
    if len(catalog) == 0:
        logger.warning("Course catalog is empty", extra={"path": str(config.catalog_file)})

    # 3) App Context
    ctx = AppContext(config=config, catalog=catalog, logger=logger)

    app = Dash(
        __name__,
        external_stylesheets=[dbc.themes.FLATLY, dbc.icons.BOOTSTRAP],
    )
    app.title = config.ui_title

    app.layout = build_layout(ctx)

    # Register callbacks
    register_filter_callbacks(app, ctx)
    register_results_callbacks(app, ctx)

    logger.info(
        "Dash app created",
        extra={"ui_title": config.ui_title, "n_courses": len(catalog)},
    )
    return app
