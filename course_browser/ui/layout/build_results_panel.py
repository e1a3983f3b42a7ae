from __future__ import annotations

import dash_bootstrap_components as dbc
from dash import dash_table, dcc, html

from course_browser.ui.ids import IDs

RESULT_COLUMNS = [
    {"name": "Code", "id": "code"},
    {"name": "Title", "id": "title"},
    {"name": "Faculty", "id": "faculty"},
    {"name": "Rating", "id": "rating", "type": "numeric"},
    {"name": "Reviews", "id": "review_count", "type": "numeric"},
    {"name": "Price", "id": "price", "type": "numeric"},
    {"name": "Delivery", "id": "mode"},
]

SORT_LABELS = {
    "rating": "Highest rated",
    "reviews": "Most reviewed",
    "alphabetical": "Course code",
    "newest": "Newest first",
}


def build_results_panel(default_sort: str = "rating") -> dbc.Card:
    return dbc.Card(
        [
            dbc.CardHeader(
                html.Div(
                    [
                        html.Strong("Courses"),
                        html.Span(id=IDs.Control.RESULTS_COUNT, className="text-muted ms-2"),
                        dcc.Dropdown(
                            id=IDs.Control.SORT_SELECT,
                            options=[{"label": v, "value": k} for k, v in SORT_LABELS.items()],
                            value=default_sort,
                            clearable=False,
                            style={"width": "200px"},
                            className="ms-auto",
                        ),
                    ],
                    className="d-flex align-items-center",
                ),
                className="p-2",
            ),
            dbc.CardBody(
                [
                    dbc.Input(
                        id=IDs.Control.SEARCH_INPUT,
                        type="search",
                        debounce=True,
                        placeholder="Search by code, title, faculty or skill",
                        className="mb-2",
                    ),
                    html.Div(id=IDs.Control.ACTIVE_FILTERS, className="mb-2"),
                    dash_table.DataTable(
                        id=IDs.Control.RESULTS_TABLE,
                        columns=RESULT_COLUMNS,
                        data=[],
                        page_size=15,
                        style_table={"overflowX": "auto"},
                        style_cell={"textAlign": "left", "padding": "4px"},
                    ),
                    dcc.Graph(
                        id=IDs.Control.RATING_CHART,
                        style={"height": "300px"},
                        config={"responsive": True},
                        className="mt-3",
                    ),
                ]
            ),
        ],
        className="cb-maincard",
    )
