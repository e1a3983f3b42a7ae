from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

import dash_bootstrap_components as dbc
from dash import html

from course_browser.ui.ids import IDs

BASE_CLASS = "filter-button"


@dataclass(frozen=True)
class FilterButtonState:
    """
    Display state of the filter button.

    The three style states are independent flags and can combine
    (an emphasized button can also be open):

    - emphasized: at least one filter is active; solid button with a count badge
    - is_open: the filter panel is expanded
    - is_default: neither of the above; outline button
    """

    active_count: int
    is_open: bool = False

    @property
    def emphasized(self) -> bool:
        return self.active_count > 0

    @property
    def is_default(self) -> bool:
        return not self.emphasized and not self.is_open

    @property
    def outline(self) -> bool:
        return not self.emphasized

    @property
    def badge_text(self) -> Optional[str]:
        if not self.emphasized:
            return None
        return f"({self.active_count})"

    @property
    def class_name(self) -> str:
        classes: List[str] = [BASE_CLASS]
        if self.emphasized:
            classes.append(f"{BASE_CLASS}--active")
        if self.is_open:
            classes.append(f"{BASE_CLASS}--open")
        if self.is_default:
            classes.append(f"{BASE_CLASS}--default")
        return " ".join(classes)


def filter_button_state(active_count: int, is_open: bool = False) -> FilterButtonState:
    return FilterButtonState(active_count=max(0, int(active_count)), is_open=bool(is_open))


def filter_button_children(state: FilterButtonState) -> list:
    children: list = [html.I(className="bi bi-funnel me-2"), "Filters"]
    if state.badge_text is not None:
        children.append(
            dbc.Badge(
                state.badge_text,
                color="light",
                text_color="primary",
                className="ms-2",
            )
        )
    return children


def build_filter_button(active_count: int = 0, is_open: bool = False) -> dbc.Button:
    state = filter_button_state(active_count, is_open)
    return dbc.Button(
        filter_button_children(state),
        id=IDs.Control.FILTER_BUTTON,
        color="primary",
        outline=state.outline,
        n_clicks=0,
        className=state.class_name,
    )
