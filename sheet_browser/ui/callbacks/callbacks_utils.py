from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Mapping, Optional

from sheet_browser.core.dispatcher import user_agent_compact_viewport
from sheet_browser.core.viewer import TableViewer
from sheet_browser.core.viewer_state import ViewerState
from sheet_browser.ui.table_view import TableView, build_table_view

if TYPE_CHECKING:
    from sheet_browser.ui.config import AppConfig

logger = logging.getLogger(__name__)


def try_parse_viewer_state(data: object) -> ViewerState:
    if not isinstance(data, dict) or not data:
        return ViewerState()
    try:
        return ViewerState.from_dict(data)
    except (TypeError, ValueError):
        logger.exception("Invalid viewer-state: %r", data)
        return ViewerState()


def current_table_view(
    ctx: AppConfig,
    table_data: Optional[Mapping[str, Any]],
    viewport: Optional[Mapping[str, Any]],
    overrides: Optional[Mapping[str, bool]],
    search: Optional[str],
    sort_by: Optional[list],
) -> TableView:
    return build_table_view(
        table_data,
        viewport=viewport,
        overrides=overrides,
        search=search,
        sort_by=sort_by,
        min_column_width=ctx.min_column_width,
    )


def preferred_key_for(ctx: AppConfig, source_key: Optional[str]) -> Optional[str]:
    if not source_key or ctx.tables is None:
        return None
    cfg = ctx.tables.config_for(source_key)
    return cfg.preferred_key if cfg is not None else None


def build_viewer(
    ctx: AppConfig,
    view: TableView,
    state: ViewerState,
    viewport: Optional[Mapping[str, Any]] = None,
) -> TableViewer:
    """
    Rebuild the viewer for one request from the stored session state.
    Malformed stored rows reach the viewer as-is so it reports MALFORMED.
    """
    user_agent = viewport.get("user_agent") if isinstance(viewport, Mapping) else None
    rows: Any = view.rows if not view.malformed else None
    return TableViewer(
        rows,
        view.columns,
        initial_focus=state.focus,
        preferred_key=preferred_key_for(ctx, view.source),
        is_compact_viewport=user_agent_compact_viewport(user_agent),
    )
