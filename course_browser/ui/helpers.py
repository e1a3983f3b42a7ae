from __future__ import annotations

from typing import Iterable, List

import dash_bootstrap_components as dbc
import pandas as pd
import plotly.express as px
import plotly.graph_objs as go
from dash import html

from course_browser.core.criteria import FilterCriterion
from course_browser.ui.layout.build_results_panel import RESULT_COLUMNS


def results_records(df: pd.DataFrame) -> List[dict]:
    """Rows for the results DataTable, restricted to the displayed columns."""
    cols = [c["id"] for c in RESULT_COLUMNS]
    if df.empty:
        return []
    out = df[cols].copy()
    out["rating"] = out["rating"].round(1)
    return out.to_dict("records")


def results_count_text(n: int, total: int) -> str:
    if n == total:
        return f"Showing all {total} course{'s' if total != 1 else ''}"
    return f"Showing {n} of {total} course{'s' if total != 1 else ''}"


def rating_distribution(df: pd.DataFrame) -> pd.DataFrame:
    """
    Count courses per half-star rating bucket (3.74 -> 3.5, 3.75 -> 4.0).
    """
    if df.empty:
        return pd.DataFrame({"rating": [], "count": []})
    buckets = ((df["rating"] * 2).round() / 2).rename("rating")
    counts = buckets.value_counts().sort_index()
    return counts.rename_axis("rating").reset_index(name="count")


def message_figure(title: str) -> go.Figure:
    fig = go.Figure()
    fig.add_annotation(
        text=title,
        showarrow=False,
        xref="paper",
        yref="paper",
        x=0.5,
        y=0.5,
    )
    fig.update_xaxes(visible=False)
    fig.update_yaxes(visible=False)
    fig.update_layout(margin=dict(l=40, r=40, t=40, b=40))
    return fig


def build_rating_figure(df: pd.DataFrame) -> go.Figure:
    dist = rating_distribution(df)
    if dist.empty:
        return message_figure("No courses match the current filters.")

    fig = px.bar(
        dist,
        x="rating",
        y="count",
        labels={"rating": "Rating", "count": "Courses"},
    )
    fig.update_layout(
        title="Rating distribution",
        margin=dict(l=40, r=20, t=50, b=40),
        bargap=0.2,
    )
    return fig


def active_filter_badges(criteria: Iterable[FilterCriterion]) -> list:
    return [
        dbc.Badge(c.label(), color="primary", pill=True, className="me-1")
        for c in criteria
    ] or [html.Span("No filters applied", className="text-muted small")]
