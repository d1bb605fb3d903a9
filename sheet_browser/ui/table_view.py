from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Sequence

from sheet_browser.core.table import Column, TableData
from sheet_browser.core.table_ops import SortConfig, filter_and_sort
from sheet_browser.core.visibility import MIN_COLUMN_WIDTH, apply_visibility_flags

logger = logging.getLogger(__name__)

# Used until the browser has reported its real width
FALLBACK_VIEWPORT_WIDTH = 1024


def table_to_store(source_key: str, table: TableData) -> Dict[str, Any]:
    return {
        "source": source_key,
        "title": table.title,
        "rows": table.rows,
        "columns": [c.to_dict() for c in table.columns],
    }


def columns_from_store(data: Optional[Mapping[str, Any]]) -> List[Column]:
    if not isinstance(data, Mapping):
        return []
    raw_columns = data.get("columns")
    if not isinstance(raw_columns, list):
        return []
    columns: List[Column] = []
    for raw in raw_columns:
        if isinstance(raw, Mapping) and raw.get("key") is not None:
            columns.append(Column.from_dict(raw))
    return columns


def rows_from_store(data: Optional[Mapping[str, Any]]) -> Any:
    """Rows as stored; may be malformed, the viewer checks at its boundary."""
    if not isinstance(data, Mapping):
        return []
    return data.get("rows", [])


def viewport_width(viewport: Optional[Mapping[str, Any]]) -> float:
    if isinstance(viewport, Mapping):
        width = viewport.get("width")
        if isinstance(width, (int, float)) and width > 0:
            return float(width)
    return float(FALLBACK_VIEWPORT_WIDTH)


def viewport_height(viewport: Optional[Mapping[str, Any]]) -> Optional[float]:
    if isinstance(viewport, Mapping):
        height = viewport.get("height")
        if isinstance(height, (int, float)) and height > 0:
            return float(height)
    return None


@dataclass
class TableView:
    """
    The table as the user currently sees it: searched and sorted rows plus
    every column carrying a concrete visible flag.
    """
    title: str = ""
    source: Optional[str] = None
    rows: List[Mapping[str, Any]] = field(default_factory=list)
    columns: List[Column] = field(default_factory=list)
    malformed: bool = False

    @property
    def visible_columns(self) -> List[Column]:
        return [c for c in self.columns if c.visible is not False]


def build_table_view(
    table_data: Optional[Mapping[str, Any]],
    viewport: Optional[Mapping[str, Any]] = None,
    overrides: Optional[Mapping[str, bool]] = None,
    search: Optional[str] = None,
    sort_by: Optional[Sequence[Mapping[str, Any]]] = None,
    min_column_width: int = MIN_COLUMN_WIDTH,
) -> TableView:
    if not isinstance(table_data, Mapping):
        return TableView()

    columns = columns_from_store(table_data)
    rows = rows_from_store(table_data)
    title = str(table_data.get("title") or "")
    source = table_data.get("source")

    if not isinstance(rows, list) or not all(isinstance(r, Mapping) for r in rows):
        logger.warning("Stored table rows are malformed", extra={"source": source})
        return TableView(title=title, source=source, columns=columns, malformed=True)

    flagged = apply_visibility_flags(
        columns,
        viewport_width(viewport),
        min_column_width=min_column_width,
        overrides=overrides,
    )

    view_rows = filter_and_sort(rows, search, SortConfig.from_sort_by(sort_by))
    return TableView(title=title, source=source, rows=view_rows, columns=flagged)
