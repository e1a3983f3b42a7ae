from __future__ import annotations

from typing import TYPE_CHECKING

import dash
from dash import Input, Output

from course_browser.ui.callbacks.callbacks_utils import engine_from_store
from course_browser.ui.helpers import (
    active_filter_badges,
    build_rating_figure,
    results_count_text,
    results_records,
)
from course_browser.ui.ids import IDs

if TYPE_CHECKING:
    from course_browser.ui.context import AppContext


def register_results_callbacks(app: dash.Dash, ctx: AppContext) -> None:
    # ---------------------------------------------------------
    # filter-state + sort + search -> table, count, chart, active chips
    # ---------------------------------------------------------
    @app.callback(
        Output(IDs.Control.RESULTS_TABLE, "data"),
        Output(IDs.Control.RESULTS_COUNT, "children"),
        Output(IDs.Control.RATING_CHART, "figure"),
        Output(IDs.Control.ACTIVE_FILTERS, "children"),
        Input(IDs.Store.FILTER_STATE, "data"),
        Input(IDs.Control.SORT_SELECT, "value"),
        Input(IDs.Control.SEARCH_INPUT, "value"),
    )
    def render_results(data, sort_by, search):
        engine = engine_from_store(data, ctx.logger)
        descriptor = engine.build_query_descriptor()

        results = ctx.catalog.query(
            descriptor,
            sort_by=sort_by or ctx.config.default_sort,
            search=search,
        )

        return (
            results_records(results),
            results_count_text(len(results), len(ctx.catalog)),
            build_rating_figure(results),
            active_filter_badges(engine.criteria()),
        )
