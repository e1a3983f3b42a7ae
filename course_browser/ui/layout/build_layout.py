from __future__ import annotations

from typing import TYPE_CHECKING

import dash_bootstrap_components as dbc
from dash import dcc, html

from course_browser.ui.ids import IDs
from course_browser.ui.layout.build_filter_button import build_filter_button
from course_browser.ui.layout.build_filter_panel import build_filter_panel
from course_browser.ui.layout.build_navbar import build_navbar
from course_browser.ui.layout.build_results_panel import build_results_panel

if TYPE_CHECKING:
    from course_browser.ui.context import AppContext


def build_layout(ctx: AppContext) -> dbc.Container:
    return dbc.Container(
        fluid=True,
        className="cb-root",
        children=[
            build_navbar(ctx.config.ui_title),

            # Session-scoped filter state (FilterStateEngine.to_dict())
            dcc.Store(id=IDs.Store.FILTER_STATE, storage_type="session", data={}),

            html.Div(
                build_filter_button(),
                className="d-flex mb-2",
            ),
            dbc.Row(
                [
                    dbc.Col(
                        build_filter_panel(ctx.catalog, currency=ctx.config.currency),
                        md=3,
                    ),
                    dbc.Col(
                        build_results_panel(ctx.config.default_sort),
                    ),
                ]
            ),
        ],
    )
