from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Dict, Optional

import dash
from dash import ALL, Input, Output, State

from sheet_browser.core.exceptions import SheetBrowserError
from sheet_browser.ui.callbacks.callbacks_utils import current_table_view
from sheet_browser.ui.helpers import (
    cell_conditionals,
    column_toggles,
    status_alert,
    table_columns,
    table_records,
    width_conditionals,
)
from sheet_browser.ui.ids import IDs
from sheet_browser.ui.table_view import table_to_store, viewport_width

if TYPE_CHECKING:
    from sheet_browser.ui.config import AppConfig

logger = logging.getLogger(__name__)


def register_table_callbacks(app: dash.Dash, ctx: AppConfig) -> None:
    # ---------------------------------------------------------
    # Source select / reload -> table-data store
    # ---------------------------------------------------------
    @app.callback(
        Output(IDs.Store.TABLE_DATA, "data"),
        Output(IDs.Control.TABLE_STATUS, "children"),
        Output(IDs.Store.COLUMN_OVERRIDES, "data"),
        Output(IDs.Control.SEARCH_INPUT, "value"),
        Output(IDs.Control.DATA_TABLE, "sort_by"),
        Input(IDs.Control.SOURCE_SELECT, "value"),
        Input(IDs.Control.RELOAD_BTN, "n_clicks"),
    )
    def load_table(source_key: Optional[str], _reload_clicks: Optional[int]):
        if not source_key:
            return None, status_alert("Choose a table from the dropdown.", color="info"), {}, "", []

        tables = ctx.tables
        if tables is None:
            return None, status_alert("Table service is not available."), {}, "", []

        if dash.ctx.triggered_id == IDs.Control.RELOAD_BTN:
            logger.info("Reloading table source", extra={"source": source_key})
            tables.invalidate(source_key)

        try:
            table = tables[source_key]
        except KeyError:
            return None, status_alert(f"Table '{source_key}' is not configured."), {}, "", []
        except SheetBrowserError as e:
            return None, status_alert(f"Could not load '{source_key}': {e}"), {}, "", []
        except Exception:
            logger.exception("Error in load_table", extra={"source": source_key})
            return None, status_alert(
                "The app hit an unexpected error while loading this table. "
                "If this keeps happening, grab the logs and open an issue."
            ), {}, "", []

        status = None
        if table.n_rows == 0:
            status = status_alert("This table has no rows.", color="warning")
        return table_to_store(source_key, table), status, {}, "", []

    # ---------------------------------------------------------
    # Stores + search + sort -> DataTable
    # ---------------------------------------------------------
    @app.callback(
        Output(IDs.Control.DATA_TABLE, "data"),
        Output(IDs.Control.DATA_TABLE, "columns"),
        Output(IDs.Control.DATA_TABLE, "style_cell_conditional"),
        Output(IDs.Control.DATA_TABLE, "style_data_conditional"),
        Output(IDs.Control.TABLE_TITLE, "children"),
        Output(IDs.Control.COLUMN_TOGGLES, "children"),
        Output(IDs.Control.OPEN_VIEWER_BTN, "style"),
        Input(IDs.Store.TABLE_DATA, "data"),
        Input(IDs.Store.VIEWPORT, "data"),
        Input(IDs.Store.COLUMN_OVERRIDES, "data"),
        Input(IDs.Control.SEARCH_INPUT, "value"),
        Input(IDs.Control.DATA_TABLE, "sort_by"),
    )
    def render_table(table_data, viewport, overrides, search, sort_by):
        view = current_table_view(ctx, table_data, viewport, overrides, search, sort_by)

        is_small = viewport_width(viewport) < ctx.mobile_breakpoint
        button_style: Dict[str, Any] = {} if (is_small and view.rows) else {"display": "none"}

        visible = view.visible_columns
        return (
            table_records(view.rows, visible),
            table_columns(visible),
            width_conditionals(view.rows, visible),
            cell_conditionals(view.rows, visible),
            view.title,
            column_toggles(view.columns),
            button_style,
        )

    # ---------------------------------------------------------
    # Manual column toggles -> overrides store
    # ---------------------------------------------------------
    @app.callback(
        Output(IDs.Store.COLUMN_OVERRIDES, "data", allow_duplicate=True),
        Input({"type": IDs.Pattern.COLUMN_TOGGLE, "index": ALL}, "value"),
        State({"type": IDs.Pattern.COLUMN_TOGGLE, "index": ALL}, "id"),
        State(IDs.Store.COLUMN_OVERRIDES, "data"),
        prevent_initial_call=True,
    )
    def toggle_column(values, ids, overrides):
        triggered = dash.ctx.triggered_id
        if not isinstance(triggered, dict):
            return dash.no_update

        key = triggered.get("index")
        for toggle_id, value in zip(ids, values):
            if toggle_id.get("index") != key:
                continue
            new_overrides = dict(overrides or {})
            new_overrides[key] = bool(value)
            logger.debug("Column toggled", extra={"column": key, "visible": bool(value)})
            return new_overrides

        return dash.no_update
