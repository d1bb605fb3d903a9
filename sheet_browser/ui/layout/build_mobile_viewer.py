from __future__ import annotations

import dash_bootstrap_components as dbc
from dash import dcc, html

from sheet_browser.core.navigation import ANIMATION_DURATION_MS, Direction
from sheet_browser.ui.helpers import NAV_PANEL_IDS
from sheet_browser.ui.ids import IDs


def _nav_panel(direction: Direction) -> html.Div:
    return html.Div(
        id=NAV_PANEL_IDS[direction],
        n_clicks=0,
        role="button",
        className=f"sb-nav-panel sb-nav-{direction.value} sb-nav-empty",
    )


def build_mobile_viewer() -> html.Div:
    """
    Full-screen single-cell overlay. Hidden until the viewer-state store
    says it is open; contents are filled by the viewer render callback.
    """
    header = html.Div(
        [
            dbc.Button(
                "Back",
                id=IDs.Control.VIEWER_BACK_BTN,
                color="link",
                size="sm",
                className="sb-viewer-back",
            ),
            html.Div(id=IDs.Control.VIEWER_POSITION, className="sb-viewer-position"),
        ],
        className="sb-viewer-header",
    )

    focused = html.Div(
        [
            html.Div(id=IDs.Control.VIEWER_COLUMN_HEADER, className="sb-viewer-column"),
            html.Div(id=IDs.Control.VIEWER_FOCUSED_CELL, className="sb-viewer-cell"),
            html.Div(id=IDs.Control.VIEWER_ROW_INFO, className="sb-viewer-row"),
        ],
        className="sb-viewer-focus",
    )

    grid = html.Div(
        [
            _nav_panel(Direction.UP),
            html.Div(
                [_nav_panel(Direction.LEFT), focused, _nav_panel(Direction.RIGHT)],
                className="sb-viewer-middle",
            ),
            _nav_panel(Direction.DOWN),
        ],
        className="sb-viewer-grid",
    )

    return html.Div(
        id=IDs.Control.VIEWER_OVERLAY,
        className="sb-viewer",
        children=[
            header,
            grid,
            # One-shot timer that clears the move animation
            dcc.Interval(
                id=IDs.Control.VIEWER_ANIMATION_TIMER,
                interval=ANIMATION_DURATION_MS,
                max_intervals=1,
                disabled=True,
            ),
        ],
    )
