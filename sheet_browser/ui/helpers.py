from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional, Sequence

import dash_bootstrap_components as dbc
from dash import dash_table, dcc, html

from sheet_browser.core.adjacent import AdjacentCellInfo
from sheet_browser.core.cell_style import CELL_NO, CELL_YES, classify_yes_no, shading_style
from sheet_browser.core.identifiers import truncate_preview
from sheet_browser.core.navigation import Direction
from sheet_browser.core.table import Column
from sheet_browser.core.table_ops import column_widths
from sheet_browser.ui.ids import IDs, column_toggle_id

FONT_STACK = 'system-ui, -apple-system, BlinkMacSystemFont, "SF Pro Text", "Segoe UI", sans-serif'

# DataTable cells can't take a CSS class, so the yes/no classes map to inline styles
YES_NO_STYLES: Dict[str, Dict[str, str]] = {
    CELL_YES: {"backgroundColor": "#e6f4ea", "color": "#1e6b34"},
    CELL_NO: {"backgroundColor": "#fdecea", "color": "#8a1f11"},
}

NAV_PANEL_IDS: Dict[Direction, str] = {
    Direction.UP: IDs.Control.VIEWER_NAV_UP,
    Direction.DOWN: IDs.Control.VIEWER_NAV_DOWN,
    Direction.LEFT: IDs.Control.VIEWER_NAV_LEFT,
    Direction.RIGHT: IDs.Control.VIEWER_NAV_RIGHT,
}

EMPTY_PANEL_TEXT: Dict[Direction, str] = {
    Direction.UP: "No previous row",
    Direction.DOWN: "No next row",
    Direction.LEFT: "No previous column",
    Direction.RIGHT: "No next column",
}


def table_columns(columns: Sequence[Column]) -> List[dict]:
    """DataTable column definitions; text renders as markdown so links work."""
    return [
        {"name": c.display_label, "id": c.key, "presentation": "markdown"}
        for c in columns
    ]


def table_records(rows: Sequence[Mapping[str, Any]], columns: Sequence[Column]) -> List[dict]:
    """
    Rows as DataTable records. Markdown columns need strings, so other
    values are stringified and None becomes "".
    """
    keys = [c.key for c in columns]
    return [
        {k: "" if row.get(k) is None else str(row.get(k)) for k in keys}
        for row in rows
    ]


def width_conditionals(rows: Sequence[Mapping[str, Any]], columns: Sequence[Column]) -> List[dict]:
    widths = column_widths(rows, [c.key for c in columns])
    out = []
    for c in columns:
        style: Dict[str, Any] = {"if": {"column_id": c.key}}
        if c.key in widths:
            style["width"] = f"{widths[c.key]}%"
        shading = c.shading if isinstance(c.shading, Mapping) else {}
        style.update(shading.get("cellStyle") or {})
        out.append(style)
    return out


def cell_conditionals(rows: Sequence[Mapping[str, Any]], columns: Sequence[Column]) -> List[dict]:
    """
    Per-cell styles: value-specific shading from the styling file, then
    yes/no answer colouring.
    """
    out: List[dict] = []
    for i, row in enumerate(rows):
        for c in columns:
            value = row.get(c.key)
            style: Dict[str, Any] = {}
            if isinstance(c.shading, Mapping):
                style.update(shading_style(c, value))
                # base cellStyle is already on the column conditional
                for k in (c.shading.get("cellStyle") or {}):
                    style.pop(k, None)
            style.update(YES_NO_STYLES.get(classify_yes_no(value), {}))
            if style:
                out.append({"if": {"row_index": i, "column_id": c.key}, **style})
    return out


def build_data_table(
    rows: Sequence[Mapping[str, Any]] = (),
    columns: Sequence[Column] = (),
) -> dash_table.DataTable:
    """
    Styled DataTable for the full-table view. Sorting is custom (server side)
    so the viewer sees the same row order as the table.
    """
    return dash_table.DataTable(
        id=IDs.Control.DATA_TABLE,
        data=table_records(rows, columns),
        columns=table_columns(columns),
        markdown_options={"link_target": "_blank"},

        style_table={"overflowX": "auto"},
        style_as_list_view=True,
        style_cell={
            "fontFamily": FONT_STACK,
            "fontSize": "13px",
            "padding": "8px 10px",
            "border": "none",
            "textAlign": "left",
            "whiteSpace": "normal",
            "height": "auto",
            "verticalAlign": "top",
        },
        style_header={
            "fontFamily": FONT_STACK,
            "fontSize": "13px",
            "fontWeight": "600",
            "backgroundColor": "#f3f4f6",
            "borderBottom": "1px solid #e5e7eb",
        },
        style_data={"borderBottom": "1px solid #e5e7eb"},
        style_cell_conditional=width_conditionals(rows, columns),
        style_data_conditional=cell_conditionals(rows, columns),

        sort_action="custom",
        sort_mode="single",
        sort_by=[],
        page_action="none",
        filter_action="none",
        cell_selectable=True,
    )


def column_toggles(columns: Sequence[Column]) -> List[Any]:
    return [
        dbc.Checkbox(
            id=column_toggle_id(c.key),
            label=c.display_label,
            value=c.visible is not False,
            className="sb-column-toggle me-3",
        )
        for c in columns
    ]


def status_alert(message: str, color: str = "danger") -> dbc.Alert:
    return dbc.Alert(message, color=color, className="py-2 mb-2")


# -----------------------------------------------------------------------------
# Mobile viewer pieces
# -----------------------------------------------------------------------------
def focused_cell_body(content: Any) -> Any:
    if content is None or content == "":
        return html.Span("(empty)", className="text-muted")
    return dcc.Markdown(str(content), link_target="_blank", className="sb-cell-markdown")


def nav_panel_body(direction: Direction, info: Optional[AdjacentCellInfo]) -> List[Any]:
    if info is None:
        return [html.Div(EMPTY_PANEL_TEXT[direction], className="sb-nav-none")]
    preview = truncate_preview(info.content)
    return [
        html.Div(info.identifier, className="sb-nav-identifier"),
        html.Div(preview, className=f"sb-nav-preview sb-nav-preview-{direction.value}"),
    ]


def nav_panel_class(direction: Direction, info: Optional[AdjacentCellInfo]) -> str:
    base = f"sb-nav-panel sb-nav-{direction.value}"
    return base if info is not None else f"{base} sb-nav-empty"

