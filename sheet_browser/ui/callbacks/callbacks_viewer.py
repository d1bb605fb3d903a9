from __future__ import annotations

import logging
from dataclasses import replace
from typing import TYPE_CHECKING, Any, Dict, Iterable, Mapping, Optional, Tuple

import dash
from dash import Input, Output, State

from sheet_browser.core.navigation import Direction, FocusCoordinate
from sheet_browser.core.presentation import animation_class, focused_font_size
from sheet_browser.core.viewer import TableViewer, ViewerStatus
from sheet_browser.core.viewer_state import ViewerState
from sheet_browser.ui.callbacks.callbacks_utils import (
    build_viewer,
    current_table_view,
    try_parse_viewer_state,
)
from sheet_browser.ui.helpers import NAV_PANEL_IDS, focused_cell_body, nav_panel_body, nav_panel_class
from sheet_browser.ui.ids import IDs
from sheet_browser.ui.table_view import TableView, viewport_height, viewport_width

if TYPE_CHECKING:
    from sheet_browser.ui.config import AppConfig

logger = logging.getLogger(__name__)


def _prop(component_id: str, prop: str) -> str:
    """The "<id>.<prop>" form used by `dash.ctx.triggered_prop_ids`."""
    return f"{component_id}.{prop}"


TIMER_TICK = _prop(IDs.Control.VIEWER_ANIMATION_TIMER, "n_intervals")
BACK_CLICK = _prop(IDs.Control.VIEWER_BACK_BTN, "n_clicks")
OPEN_CLICK = _prop(IDs.Control.OPEN_VIEWER_BTN, "n_clicks")
CELL_TAP = _prop(IDs.Control.DATA_TABLE, "active_cell")
BROWSER_EVENT = _prop(IDs.Store.VIEWER_EVENT, "data")
VIEWPORT_CHANGE = _prop(IDs.Store.VIEWPORT, "data")

PANEL_CLICKS: Dict[str, Direction] = {_prop(panel, "n_clicks"): d for d, panel in NAV_PANEL_IDS.items()}

# Inputs whose change means "the row set changed": focus goes back to (0, 0)
DATA_TRIGGERS = frozenset({
    _prop(IDs.Store.TABLE_DATA, "data"),
    _prop(IDs.Store.COLUMN_OVERRIDES, "data"),
    _prop(IDs.Control.SEARCH_INPUT, "value"),
    _prop(IDs.Control.DATA_TABLE, "sort_by"),
})

NO_CHANGE = (dash.no_update, dash.no_update, dash.no_update, dash.no_update)

STATUS_MESSAGES = {
    ViewerStatus.MALFORMED: "This table could not be displayed.",
    ViewerStatus.NO_COLUMNS: "No columns to show.",
    ViewerStatus.NO_DATA: "No rows match the current search.",
}


def _focus_from_active_cell(active_cell: Mapping[str, Any], view: TableView) -> Optional[FocusCoordinate]:
    """Map a DataTable active cell onto a viewer focus coordinate."""
    row = active_cell.get("row")
    column_id = active_cell.get("column_id")
    keys = [c.key for c in view.visible_columns]
    if not isinstance(row, int) or column_id not in keys:
        return None
    return FocusCoordinate(row_index=row, col_index=keys.index(column_id))


def _apply_event(viewer: TableViewer, event: Mapping[str, Any]) -> None:
    """Feed one browser event (see assets/viewer_events.js) to the viewer."""
    kind = event.get("type")
    width, height = event.get("width"), event.get("height")

    if kind == "key":
        viewer.handle_key(event.get("key"))
    elif kind == "swipe":
        viewer.handle_swipe(event.get("direction"))
    elif kind == "resize" and width and height:
        viewer.handle_resize(width, height)
    elif kind == "orientation":
        # The browser already waited for the rotation to settle
        viewer.handle_orientation_change(width, height)
    else:
        logger.debug("Ignoring viewer event", extra={"event": dict(event)})


def _viewport_for_event(viewport: Optional[Mapping[str, Any]], event: Mapping[str, Any]) -> Optional[Mapping[str, Any]]:
    """Browser events carry the size at the time they fired; it wins over the store."""
    width, height = event.get("width"), event.get("height")
    if not width or not height:
        return viewport
    merged = dict(viewport) if isinstance(viewport, Mapping) else {}
    merged.update(width=width, height=height)
    return merged


def _state_after(viewer: TableViewer, state: ViewerState) -> ViewerState:
    if not viewer.is_open:
        return state.closed()
    return ViewerState(
        is_open=True,
        focus=viewer.engine.focus,
        animation=viewer.engine.animation_direction,
        session=state.session,
        column_count=len(viewer.visible_columns),
    )


def _focus_is_stale(state: ViewerState, view: TableView) -> bool:
    """
    True when the stored focus no longer addresses the current view: the
    visible column set changed size, or the focus fell outside the table.
    """
    column_count = len(view.visible_columns)
    if state.column_count is not None and state.column_count != column_count:
        return True
    row_count = len(view.rows)
    if row_count == 0 or column_count == 0:
        return False
    focus = state.focus
    return not (0 <= focus.row_index < row_count and 0 <= focus.col_index < column_count)


def _reset_focus(state: ViewerState, column_count: Optional[int]) -> Tuple[Any, Any, Any, Any]:
    if not state.is_open:
        return NO_CHANGE
    return state.reset_focus(column_count).to_dict(), True, dash.no_update, dash.no_update


def reduce_viewer_state(
    ctx: AppConfig,
    triggered: Iterable[str],
    state: ViewerState,
    table_data: Optional[Mapping[str, Any]] = None,
    viewport: Optional[Mapping[str, Any]] = None,
    overrides: Optional[Mapping[str, bool]] = None,
    search: Optional[str] = None,
    sort_by: Optional[list] = None,
    active_cell: Optional[Mapping[str, Any]] = None,
    event: Optional[Mapping[str, Any]] = None,
) -> Tuple[Any, Any, Any, Any]:
    """
    Next viewer state for the inputs in `triggered` ("<id>.<prop>" strings).

    Returns (viewer-state data, timer disabled, timer n_intervals,
    table active_cell), with `dash.no_update` for anything left alone.
    """
    fired = set(triggered)

    # 1) Animation reset
    if TIMER_TICK in fired:
        if state.animation is None:
            return NO_CHANGE
        return replace(state, animation=None).to_dict(), True, dash.no_update, dash.no_update

    # 2) Close
    if BACK_CLICK in fired:
        return state.closed().to_dict(), True, dash.no_update, dash.no_update

    if BROWSER_EVENT in fired and isinstance(event, Mapping):
        viewport = _viewport_for_event(viewport, event)

    view = current_table_view(ctx, table_data, viewport, overrides, search, sort_by)
    width, height = viewport_width(viewport), viewport_height(viewport)
    column_count = len(view.visible_columns)

    # 3) Open: button at (0, 0), or a tapped cell on a small screen
    if OPEN_CLICK in fired or CELL_TAP in fired:
        focus: Optional[FocusCoordinate] = FocusCoordinate()
        clear_active: Any = dash.no_update

        if OPEN_CLICK not in fired:
            if not isinstance(active_cell, Mapping) or width >= ctx.mobile_breakpoint:
                return NO_CHANGE
            focus = _focus_from_active_cell(active_cell, view)
            if focus is None:
                return NO_CHANGE
            clear_active = None

        opened = state.opened(focus, column_count=column_count)
        viewer = build_viewer(ctx, view, opened, viewport)
        viewer.open(width, height)
        new_state = _state_after(viewer, opened)
        logger.info(
            "Viewer opened",
            extra={
                "source": view.source,
                "focus": new_state.focus.to_dict(),
                "status": viewer.status.value,
                "open": new_state.is_open,
            },
        )
        return new_state.to_dict(), True, dash.no_update, clear_active

    # 4) Row set changed underneath the viewer
    if fired & DATA_TRIGGERS:
        return _reset_focus(state, column_count)

    if not state.is_open:
        return NO_CHANGE

    # 5) Navigation: browser events, preview-panel taps, viewport changes
    viewer = build_viewer(ctx, view, state, viewport)
    viewer.open(width, height)

    panel = next((PANEL_CLICKS[p] for p in fired if p in PANEL_CLICKS), None)
    if BROWSER_EVENT in fired and isinstance(event, Mapping):
        _apply_event(viewer, event)
    elif panel is not None:
        viewer.navigate(panel)
    elif VIEWPORT_CHANGE not in fired:
        return NO_CHANGE

    new_state = _state_after(viewer, state)
    if new_state.is_open and _focus_is_stale(state, view):
        logger.debug(
            "Visible columns changed, resetting viewer focus",
            extra={"was": state.column_count, "now": column_count, "focus": state.focus.to_dict()},
        )
        return _reset_focus(state, column_count)

    if new_state == state:
        return NO_CHANGE

    # Re-arm the one-shot timer whenever a move set an animation
    animating = new_state.animation is not None
    return (
        new_state.to_dict(),
        not animating,
        0 if animating else dash.no_update,
        dash.no_update,
    )


def register_viewer_callbacks(app: dash.Dash, ctx: AppConfig) -> None:
    # ---------------------------------------------------------
    # Every viewer input -> viewer-state store
    # ---------------------------------------------------------
    @app.callback(
        Output(IDs.Store.VIEWER_STATE, "data"),
        Output(IDs.Control.VIEWER_ANIMATION_TIMER, "disabled"),
        Output(IDs.Control.VIEWER_ANIMATION_TIMER, "n_intervals"),
        Output(IDs.Control.DATA_TABLE, "active_cell"),
        Input(IDs.Control.OPEN_VIEWER_BTN, "n_clicks"),
        Input(IDs.Control.DATA_TABLE, "active_cell"),
        Input(IDs.Control.VIEWER_BACK_BTN, "n_clicks"),
        Input(IDs.Store.VIEWER_EVENT, "data"),
        Input(IDs.Control.VIEWER_NAV_UP, "n_clicks"),
        Input(IDs.Control.VIEWER_NAV_DOWN, "n_clicks"),
        Input(IDs.Control.VIEWER_NAV_LEFT, "n_clicks"),
        Input(IDs.Control.VIEWER_NAV_RIGHT, "n_clicks"),
        Input(IDs.Control.VIEWER_ANIMATION_TIMER, "n_intervals"),
        Input(IDs.Store.TABLE_DATA, "data"),
        Input(IDs.Store.COLUMN_OVERRIDES, "data"),
        Input(IDs.Control.SEARCH_INPUT, "value"),
        Input(IDs.Control.DATA_TABLE, "sort_by"),
        Input(IDs.Store.VIEWPORT, "data"),
        State(IDs.Store.VIEWER_STATE, "data"),
        prevent_initial_call=True,
    )
    def update_viewer_state(
        _open_clicks,
        active_cell,
        _back_clicks,
        event,
        _up, _down, _left, _right,
        _timer_ticks,
        table_data,
        overrides,
        search,
        sort_by,
        viewport,
        state_data,
    ):
        return reduce_viewer_state(
            ctx,
            list(dash.ctx.triggered_prop_ids),
            try_parse_viewer_state(state_data),
            table_data=table_data,
            viewport=viewport,
            overrides=overrides,
            search=search,
            sort_by=sort_by,
            active_cell=active_cell,
            event=event,
        )

    # ---------------------------------------------------------
    # viewer-state / viewport -> overlay contents
    # ---------------------------------------------------------
    @app.callback(
        Output(IDs.Control.VIEWER_OVERLAY, "className"),
        Output(IDs.Control.VIEWER_POSITION, "children"),
        Output(IDs.Control.VIEWER_COLUMN_HEADER, "children"),
        Output(IDs.Control.VIEWER_ROW_INFO, "children"),
        Output(IDs.Control.VIEWER_FOCUSED_CELL, "children"),
        Output(IDs.Control.VIEWER_FOCUSED_CELL, "style"),
        Output(IDs.Control.VIEWER_FOCUSED_CELL, "className"),
        Output(IDs.Control.VIEWER_NAV_UP, "children"),
        Output(IDs.Control.VIEWER_NAV_UP, "className"),
        Output(IDs.Control.VIEWER_NAV_DOWN, "children"),
        Output(IDs.Control.VIEWER_NAV_DOWN, "className"),
        Output(IDs.Control.VIEWER_NAV_LEFT, "children"),
        Output(IDs.Control.VIEWER_NAV_LEFT, "className"),
        Output(IDs.Control.VIEWER_NAV_RIGHT, "children"),
        Output(IDs.Control.VIEWER_NAV_RIGHT, "className"),
        Input(IDs.Store.VIEWER_STATE, "data"),
        Input(IDs.Store.VIEWPORT, "data"),
        State(IDs.Store.TABLE_DATA, "data"),
        State(IDs.Store.COLUMN_OVERRIDES, "data"),
        State(IDs.Control.SEARCH_INPUT, "value"),
        State(IDs.Control.DATA_TABLE, "sort_by"),
    )
    def render_viewer(state_data, viewport, table_data, overrides, search, sort_by):
        state = try_parse_viewer_state(state_data)
        if not state.is_open:
            return ("sb-viewer",) + (dash.no_update,) * 14

        view = current_table_view(ctx, table_data, viewport, overrides, search, sort_by)
        snapshot = build_viewer(ctx, view, state).snapshot()

        if snapshot.status is not ViewerStatus.READY:
            message = STATUS_MESSAGES[snapshot.status]
            empty_panels = []
            for d in (Direction.UP, Direction.DOWN, Direction.LEFT, Direction.RIGHT):
                empty_panels += [nav_panel_body(d, None), nav_panel_class(d, None)]
            return (
                "sb-viewer is-open",
                "",
                "",
                "",
                message,
                {},
                "sb-viewer-cell text-muted",
                *empty_panels,
            )

        current = snapshot.current
        cell_style = dict(current.cell_style)
        cell_style["fontSize"] = focused_font_size(current.content)

        cell_class = " ".join(
            c for c in ("sb-viewer-cell", animation_class(state.animation)) if c
        )

        panels = []
        for d in (Direction.UP, Direction.DOWN, Direction.LEFT, Direction.RIGHT):
            info = snapshot.adjacent.get(d)
            panels += [nav_panel_body(d, info), nav_panel_class(d, info)]

        return (
            "sb-viewer is-open",
            snapshot.position,
            current.column,
            current.row,
            focused_cell_body(current.content),
            cell_style,
            cell_class,
            *panels,
        )
