from __future__ import annotations

import dash_bootstrap_components as dbc
from dash import dcc, html

from course_browser.core.criteria import DeliveryMode
from course_browser.services.catalog_service import CourseCatalog
from course_browser.ui.ids import IDs, subject_chip_id

RATING_THRESHOLDS = (3.0, 3.5, 4.0, 4.5)

MODE_LABELS = {
    DeliveryMode.ONLINE: "Online",
    DeliveryMode.IN_PERSON: "In-Person",
    DeliveryMode.HYBRID: "Hybrid",
}


def build_subject_chips(catalog: CourseCatalog) -> html.Div:
    """Quick toggles: clicking a subject turns its filter on, clicking again turns it off."""
    return html.Div(
        [
            dbc.Button(
                subject,
                id=subject_chip_id(subject),
                color="secondary",
                outline=True,
                size="sm",
                n_clicks=0,
                className="me-1 mb-1",
            )
            for subject in catalog.subjects()
        ],
        className="mb-3",
    )


def build_filter_panel(catalog: CourseCatalog, currency: str = "$") -> dbc.Collapse:
    return dbc.Collapse(
        dbc.Card(
            [
                dbc.CardHeader(
                    html.Div(
                        [
                            html.Strong("Filters"),
                            dbc.Button(
                                "Clear all",
                                id=IDs.Control.CLEAR_ALL_BTN,
                                color="link",
                                size="sm",
                                n_clicks=0,
                                className="ms-auto",
                            ),
                        ],
                        className="d-flex align-items-center",
                    ),
                    className="p-2",
                ),
                dbc.CardBody(
                    [
                        html.Label("Subject", className="form-label"),
                        build_subject_chips(catalog),
                        dcc.Dropdown(
                            id=IDs.Control.SUBJECT_SELECT,
                            options=[{"label": s, "value": s} for s in catalog.subjects()],
                            placeholder="All subjects",
                            className="mb-3",
                        ),

                        html.Label("Minimum rating", className="form-label"),
                        dcc.Dropdown(
                            id=IDs.Control.RATING_SELECT,
                            options=[
                                {"label": f"{r:g}+ stars", "value": r}
                                for r in RATING_THRESHOLDS
                            ],
                            placeholder="Any rating",
                            className="mb-3",
                        ),

                        html.Label(f"Maximum price ({currency})", className="form-label"),
                        dbc.Input(
                            id=IDs.Control.PRICE_INPUT,
                            type="number",
                            min=0,
                            step=50,
                            debounce=True,
                            placeholder=f"Up to {currency}{catalog.max_price():g}",
                            className="mb-3",
                        ),

                        html.Label("Level", className="form-label"),
                        dcc.Dropdown(
                            id=IDs.Control.LEVEL_SELECT,
                            options=[
                                {"label": f"Level {lvl}", "value": lvl}
                                for lvl in catalog.levels()
                            ],
                            placeholder="All levels",
                            className="mb-3",
                        ),

                        html.Label("Delivery", className="form-label"),
                        dcc.Dropdown(
                            id=IDs.Control.AVAILABILITY_SELECT,
                            options=[
                                {"label": label, "value": mode.value}
                                for mode, label in MODE_LABELS.items()
                            ],
                            placeholder="Any delivery mode",
                            className="mb-3",
                        ),

                        html.Div(id=IDs.Control.FILTER_STATUS, className="text-danger small"),
                    ]
                ),
            ],
            className="cb-sidebar",
        ),
        id=IDs.Control.FILTER_COLLAPSE,
        is_open=False,
    )
