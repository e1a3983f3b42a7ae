from __future__ import annotations

__all__ = ["IDs", "subject_chip_id"]


class IDs:
    class Store:
        FILTER_STATE = "filter-state"

    class Control:
        # Filter button + collapsible panel
        FILTER_BUTTON = "filter-button"
        FILTER_COLLAPSE = "filter-collapse"
        CLEAR_ALL_BTN = "clear-all-btn"
        FILTER_STATUS = "filter-status"
        ACTIVE_FILTERS = "active-filters"

        # Filter controls
        SUBJECT_SELECT = "subject-select"
        RATING_SELECT = "rating-select"
        PRICE_INPUT = "price-input"
        LEVEL_SELECT = "level-select"
        AVAILABILITY_SELECT = "availability-select"

        # Results
        SEARCH_INPUT = "search-input"
        SORT_SELECT = "sort-select"
        RESULTS_COUNT = "results-count"
        RESULTS_TABLE = "results-table"
        RATING_CHART = "rating-chart"

    class Pattern:
        # pattern-matching "type" strings
        SUBJECT_CHIP = "subject-chip"


def subject_chip_id(subject: str) -> dict:
    return {"type": IDs.Pattern.SUBJECT_CHIP, "index": subject}
