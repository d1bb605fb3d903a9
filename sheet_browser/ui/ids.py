from __future__ import annotations

__all__ = ["IDs", "column_toggle_id"]


class IDs:
    class Store:
        TABLE_DATA = "table-data"
        VIEWPORT = "viewport"
        COLUMN_OVERRIDES = "column-overrides"
        VIEWER_STATE = "viewer-state"
        VIEWER_EVENT = "viewer-event"

    class Control:
        # Navbar
        SOURCE_SELECT = "source-select"
        RELOAD_BTN = "reload-btn"

        # Full table
        TABLE_TITLE = "table-title"
        TABLE_STATUS = "table-status"
        SEARCH_INPUT = "search-input"
        COLUMN_TOGGLES = "column-toggles"
        DATA_TABLE = "data-table"
        OPEN_VIEWER_BTN = "open-viewer-btn"

        # Mobile viewer
        VIEWER_OVERLAY = "mobile-viewer"
        VIEWER_BACK_BTN = "viewer-back-btn"
        VIEWER_POSITION = "viewer-position"
        VIEWER_COLUMN_HEADER = "viewer-column-header"
        VIEWER_ROW_INFO = "viewer-row-info"
        VIEWER_FOCUSED_CELL = "viewer-focused-cell"
        VIEWER_NAV_UP = "viewer-nav-up"
        VIEWER_NAV_DOWN = "viewer-nav-down"
        VIEWER_NAV_LEFT = "viewer-nav-left"
        VIEWER_NAV_RIGHT = "viewer-nav-right"
        VIEWER_ANIMATION_TIMER = "viewer-animation-timer"

    class Pattern:
        # pattern-matching "type" strings
        COLUMN_TOGGLE = "column-toggle"


def column_toggle_id(column_key: str) -> dict:
    return {"type": IDs.Pattern.COLUMN_TOGGLE, "index": column_key}
