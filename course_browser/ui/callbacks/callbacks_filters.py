from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Dict, Optional, Tuple

import dash
from dash import ALL, Input, Output, State

from course_browser.core.criteria import FilterCategory, FilterCriterion, LevelRange
from course_browser.core.exceptions import InvalidCriterion
from course_browser.core.filter_state import FilterStateEngine
from course_browser.core.query import QueryDescriptor
from course_browser.ui.callbacks.callbacks_utils import engine_from_store
from course_browser.ui.ids import IDs
from course_browser.ui.layout.build_filter_button import (
    filter_button_children,
    filter_button_state,
)

if TYPE_CHECKING:
    from course_browser.ui.context import AppContext

CONTROL_CATEGORIES: Dict[str, FilterCategory] = {
    IDs.Control.SUBJECT_SELECT: FilterCategory.SUBJECT,
    IDs.Control.RATING_SELECT: FilterCategory.RATING_MIN,
    IDs.Control.PRICE_INPUT: FilterCategory.PRICE_MAX,
    IDs.Control.LEVEL_SELECT: FilterCategory.LEVEL,
    IDs.Control.AVAILABILITY_SELECT: FilterCategory.AVAILABILITY,
}


def apply_filter_event(
    data: Optional[dict],
    triggered_id: Any,
    value: Any,
    logger: logging.Logger,
) -> Tuple[Dict[str, Any], str]:
    """
    Apply one UI event to the stored filter state.

    - clear-all button: clear every filter
    - subject chip: toggle the SUBJECT filter for that chip
    - filter control: set its category, or clear it when emptied

    Returns the new store data and a status message (empty on success).
    Invalid input leaves the stored state unchanged.
    """
    engine = engine_from_store(data, logger)

    def log_change(descriptor: QueryDescriptor) -> None:
        logger.info("Filters applied", extra={"filters": descriptor.to_dict()})

    engine.subscribe(log_change)

    try:
        if triggered_id == IDs.Control.CLEAR_ALL_BTN:
            engine.clear_all()
        elif isinstance(triggered_id, dict) and triggered_id.get("type") == IDs.Pattern.SUBJECT_CHIP:
            engine.toggle_criterion(FilterCriterion(FilterCategory.SUBJECT, triggered_id.get("index")))
        elif isinstance(triggered_id, str) and triggered_id in CONTROL_CATEGORIES:
            category = CONTROL_CATEGORIES[triggered_id]
            if value is None or value == "":
                engine.clear_criterion(category)
            else:
                engine.set_value(category, value)
    except InvalidCriterion as e:
        return engine.to_dict(), f"Ignored invalid filter: {e.reason}"
    finally:
        engine.unsubscribe(log_change)

    return engine.to_dict(), ""


def control_values(engine: FilterStateEngine) -> Tuple[Any, Any, Any, Any, Any]:
    """Values to show in (subject, rating, price, level, availability) controls."""

    def value_of(category: FilterCategory) -> Any:
        criterion = engine.get_criterion(category)
        return criterion.value_to_json() if criterion is not None else None

    level = engine.get_criterion(FilterCategory.LEVEL)
    level_value = None
    if level is not None and isinstance(level.value, LevelRange) and level.value.low == level.value.high:
        level_value = level.value.low

    return (
        value_of(FilterCategory.SUBJECT),
        value_of(FilterCategory.RATING_MIN),
        value_of(FilterCategory.PRICE_MAX),
        level_value,
        value_of(FilterCategory.AVAILABILITY),
    )


def register_filter_callbacks(app: dash.Dash, ctx: AppContext) -> None:
    logger = ctx.logger

    # ---------------------------------------------------------
    # Controls / chips / clear-all -> filter-state store
    # (controls are also outputs so they follow clear-all and chips)
    # ---------------------------------------------------------
    @app.callback(
        Output(IDs.Store.FILTER_STATE, "data"),
        Output(IDs.Control.SUBJECT_SELECT, "value"),
        Output(IDs.Control.RATING_SELECT, "value"),
        Output(IDs.Control.PRICE_INPUT, "value"),
        Output(IDs.Control.LEVEL_SELECT, "value"),
        Output(IDs.Control.AVAILABILITY_SELECT, "value"),
        Output(IDs.Control.FILTER_STATUS, "children"),
        Input(IDs.Control.SUBJECT_SELECT, "value"),
        Input(IDs.Control.RATING_SELECT, "value"),
        Input(IDs.Control.PRICE_INPUT, "value"),
        Input(IDs.Control.LEVEL_SELECT, "value"),
        Input(IDs.Control.AVAILABILITY_SELECT, "value"),
        Input(IDs.Control.CLEAR_ALL_BTN, "n_clicks"),
        Input({"type": IDs.Pattern.SUBJECT_CHIP, "index": ALL}, "n_clicks"),
        State(IDs.Store.FILTER_STATE, "data"),
    )
    def update_filter_state(subject, rating, price, level, availability, _clear, _chips, data):
        triggered = dash.ctx.triggered_id
        values = {
            IDs.Control.SUBJECT_SELECT: subject,
            IDs.Control.RATING_SELECT: rating,
            IDs.Control.PRICE_INPUT: price,
            IDs.Control.LEVEL_SELECT: level,
            IDs.Control.AVAILABILITY_SELECT: availability,
        }
        value = values.get(triggered) if isinstance(triggered, str) else None

        new_data, message = apply_filter_event(data, triggered, value, logger)
        engine = engine_from_store(new_data, logger)
        return (new_data, *control_values(engine), message)

    # ---------------------------------------------------------
    # Filter button -> open/close panel
    # ---------------------------------------------------------
    @app.callback(
        Output(IDs.Control.FILTER_COLLAPSE, "is_open"),
        Input(IDs.Control.FILTER_BUTTON, "n_clicks"),
        State(IDs.Control.FILTER_COLLAPSE, "is_open"),
        prevent_initial_call=True,
    )
    def toggle_filter_panel(_n_clicks, is_open):
        return not is_open

    # ---------------------------------------------------------
    # Filter button badge + style states
    # ---------------------------------------------------------
    @app.callback(
        Output(IDs.Control.FILTER_BUTTON, "children"),
        Output(IDs.Control.FILTER_BUTTON, "outline"),
        Output(IDs.Control.FILTER_BUTTON, "className"),
        Input(IDs.Store.FILTER_STATE, "data"),
        Input(IDs.Control.FILTER_COLLAPSE, "is_open"),
    )
    def render_filter_button(data, is_open):
        engine = engine_from_store(data, logger)
        state = filter_button_state(engine.active_count(), bool(is_open))
        return filter_button_children(state), state.outline, state.class_name
