from __future__ import annotations

import dash_bootstrap_components as dbc
from dash import html


def build_navbar(title: str, subtitle: str = "Find and compare courses") -> dbc.Navbar:
    return dbc.Navbar(
        dbc.Container(
            fluid=True,
            children=[
                html.Div(
                    [
                        html.H4(title, className="mb-0"),
                        html.Small(subtitle, className="text-muted"),
                    ],
                ),
            ],
        ),
        color="light",
        className="mb-3 border-bottom",
    )
