from __future__ import annotations

import dash_bootstrap_components as dbc
from dash import html

from sheet_browser.ui.helpers import build_data_table
from sheet_browser.ui.ids import IDs


def build_table_panel() -> dbc.Card:
    """
    Full-table view:

    - search box + "open viewer" button (small screens only)
    - column show/hide toggles
    - the DataTable itself
    """
    toolbar = dbc.Row(
        [
            dbc.Col(
                dbc.Input(
                    id=IDs.Control.SEARCH_INPUT,
                    type="search",
                    placeholder="Search all columns",
                    debounce=True,
                ),
                xs=12,
                md=6,
            ),
            dbc.Col(
                dbc.Button(
                    "Cell viewer",
                    id=IDs.Control.OPEN_VIEWER_BTN,
                    color="primary",
                    size="sm",
                    style={"display": "none"},
                ),
                className="d-flex justify-content-end align-items-center mt-2 mt-md-0",
            ),
        ],
        className="g-2",
    )

    toggles = html.Details(
        [
            html.Summary("Columns", className="small text-muted"),
            html.Div(id=IDs.Control.COLUMN_TOGGLES, className="d-flex flex-wrap mt-1"),
        ],
        className="mt-2",
    )

    return dbc.Card(
        [
            dbc.CardHeader(html.H5(id=IDs.Control.TABLE_TITLE, className="mb-0")),
            dbc.CardBody(
                [
                    html.Div(id=IDs.Control.TABLE_STATUS),
                    toolbar,
                    toggles,
                    html.Div(build_data_table(), className="mt-3"),
                ],
                className="p-2 p-md-3",
            ),
        ],
        className="mt-3 sb-table-card",
    )
