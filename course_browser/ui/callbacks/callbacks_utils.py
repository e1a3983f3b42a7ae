from __future__ import annotations

import logging

from course_browser.core.exceptions import InvalidCriterion
from course_browser.core.filter_state import FilterStateEngine


def engine_from_store(data: object, logger: logging.Logger) -> FilterStateEngine:
    """
    Rebuild the engine from the filter-state store.

    A missing store gives an empty engine; a corrupt one is logged and
    replaced by an empty engine so the page stays usable.
    """
    if data is None:
        return FilterStateEngine(logger=logger)
    try:
        return FilterStateEngine.from_dict(data, logger=logger)
    except InvalidCriterion:
        logger.warning("Invalid filter-state in store, resetting: %r", data)
        return FilterStateEngine(logger=logger)
