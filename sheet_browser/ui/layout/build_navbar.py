from __future__ import annotations

from typing import List, Optional

import dash_bootstrap_components as dbc
from dash import dcc, html

from sheet_browser.config.model import GlobalConfig, SourceConfig
from sheet_browser.ui.ids import IDs


def build_navbar(
    sources: List[SourceConfig],
    global_config: GlobalConfig,
    default_source: Optional[str],
) -> dbc.Navbar:
    source_options = [{"label": cfg.name, "value": cfg.key} for cfg in sources]

    return dbc.Navbar(
        dbc.Container(
            fluid=True,
            children=[
                # Left: title
                html.Div(
                    [
                        html.H2(global_config.ui_title, className="mb-0"),
                        html.Small(global_config.subtitle, className="text-muted"),
                    ],
                    className="d-flex flex-column justify-content-center",
                ),

                html.Div(
                    [
                        html.Div("Table", className="navbar-source-title"),
                        html.Div(
                            [
                                dcc.Dropdown(
                                    id=IDs.Control.SOURCE_SELECT,
                                    options=source_options,
                                    value=default_source,
                                    clearable=False,
                                    placeholder="Select table",
                                    className="sb-source-dropdown flex-grow-1",
                                ),
                                dbc.Button(
                                    "Reload",
                                    id=IDs.Control.RELOAD_BTN,
                                    color="secondary",
                                    outline=True,
                                    size="sm",
                                    className="ms-2",
                                ),
                            ],
                            className="d-flex align-items-center mt-1",
                        ),
                    ],
                    className="ms-auto navbar-source-block",
                    style={"minWidth": "260px", "maxWidth": "420px"},
                ),
            ],
        ),
        dark=False,
        className="shadow-sm sb-navbar",
    )
