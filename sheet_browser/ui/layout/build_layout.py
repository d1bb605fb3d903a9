from __future__ import annotations

from typing import TYPE_CHECKING

import dash_bootstrap_components as dbc
from dash import dcc

from sheet_browser.ui.ids import IDs
from sheet_browser.ui.layout.build_mobile_viewer import build_mobile_viewer
from sheet_browser.ui.layout.build_navbar import build_navbar
from sheet_browser.ui.layout.build_table_panel import build_table_panel

if TYPE_CHECKING:
    from sheet_browser.ui.config import AppConfig


def build_layout(ctx: AppConfig):
    navbar = build_navbar(ctx.sources, ctx.global_config, ctx.default_source)

    return dbc.Container(
        fluid=True,
        className="sb-root",
        children=[
            navbar,

            # App-level stores
            dcc.Store(id=IDs.Store.TABLE_DATA),
            dcc.Store(id=IDs.Store.VIEWPORT),
            dcc.Store(id=IDs.Store.COLUMN_OVERRIDES, data={}),
            dcc.Store(id=IDs.Store.VIEWER_STATE, data=None),
            # Written by assets/viewer_events.js
            dcc.Store(id=IDs.Store.VIEWER_EVENT),

            build_table_panel(),
            build_mobile_viewer(),
        ],
    )
