from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Sequence

from sheet_browser.core.cell_style import CellStyleResolver, resolve_style
from sheet_browser.core.identifiers import strip_parenthetical
from sheet_browser.core.navigation import Direction, FocusCoordinate
from sheet_browser.core.table import Column

NO_DATA = "No data"
UNKNOWN = "Unknown"


@dataclass(frozen=True)
class AdjacentCellInfo:
    content: Any
    identifier: str

    def to_dict(self) -> Dict[str, Any]:
        return {"content": self.content, "identifier": self.identifier}


@dataclass(frozen=True)
class AdjacentCells:
    up: Optional[AdjacentCellInfo] = None
    right: Optional[AdjacentCellInfo] = None
    down: Optional[AdjacentCellInfo] = None
    left: Optional[AdjacentCellInfo] = None

    def get(self, direction: Direction) -> Optional[AdjacentCellInfo]:
        return getattr(self, Direction(direction).value)

    def to_dict(self) -> Dict[str, Optional[Dict[str, Any]]]:
        out: Dict[str, Optional[Dict[str, Any]]] = {}
        for d in Direction:
            info = self.get(d)
            out[d.value] = info.to_dict() if info is not None else None
        return out


@dataclass(frozen=True)
class CurrentCell:
    """
    Data for the focused cell. Every field has a placeholder so a stale
    focus never breaks rendering.
    """

    content: Any = NO_DATA
    column: str = UNKNOWN
    row: str = UNKNOWN
    row_index: int = 0
    col_index: int = 0
    column_key: Optional[str] = None
    cell_style: Dict[str, Any] = field(default_factory=dict)

    @property
    def is_placeholder(self) -> bool:
        return self.column_key is None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "content": self.content,
            "column": self.column,
            "row": self.row,
            "row_index": self.row_index,
            "col_index": self.col_index,
            "column_key": self.column_key,
            "cell_style": dict(self.cell_style),
        }


def _row_at(table_rows: Sequence[Any], index: int) -> Optional[Mapping[str, Any]]:
    if 0 <= index < len(table_rows):
        row = table_rows[index]
        if isinstance(row, Mapping):
            return row
    return None


def _column_at(visible_columns: Sequence[Column], index: int) -> Optional[Column]:
    """The column at `index`, or None when out of range or it has no key to read."""
    if 0 <= index < len(visible_columns):
        column = visible_columns[index]
        if column.key:
            return column
    return None


def _row_label(row_identifiers: Sequence[str], index: int) -> str:
    identifier = row_identifiers[index] if 0 <= index < len(row_identifiers) else ""
    return strip_parenthetical(identifier) or f"Row {index + 1}"


def _column_label(column: Column) -> str:
    return strip_parenthetical(column.label) or column.key


def adjacent_cells(
    focus: FocusCoordinate,
    table_rows: Any,
    visible_columns: Any,
    row_identifiers: Sequence[str] = (),
) -> AdjacentCells:
    """
    Neighbour previews in the four directions around `focus`.

    Up/down report the neighbouring row's value in the current column with
    that row's identifier; left/right report the current row's value in the
    neighbouring column with that column's label.
    """
    if not isinstance(table_rows, (list, tuple)) or not isinstance(visible_columns, (list, tuple)):
        return AdjacentCells()
    if not visible_columns:
        return AdjacentCells()

    r, c = focus.row_index, focus.col_index
    current_column = _column_at(visible_columns, c)
    current_row = _row_at(table_rows, r)

    def vertical(target: int) -> Optional[AdjacentCellInfo]:
        row = _row_at(table_rows, target)
        if row is None or current_column is None:
            return None
        return AdjacentCellInfo(
            content=row.get(current_column.key),
            identifier=_row_label(row_identifiers, target),
        )

    def horizontal(target: int) -> Optional[AdjacentCellInfo]:
        column = _column_at(visible_columns, target)
        if current_row is None or column is None:
            return None
        return AdjacentCellInfo(
            content=current_row.get(column.key),
            identifier=_column_label(column),
        )

    return AdjacentCells(
        up=vertical(r - 1) if r > 0 else None,
        down=vertical(r + 1) if r + 1 < len(table_rows) else None,
        left=horizontal(c - 1) if c > 0 else None,
        right=horizontal(c + 1) if c + 1 < len(visible_columns) else None,
    )


def current_cell(
    focus: FocusCoordinate,
    table_rows: Any,
    visible_columns: Any,
    row_identifiers: Sequence[str] = (),
    style_resolver: Optional[CellStyleResolver] = None,
) -> CurrentCell:
    placeholder = CurrentCell(row_index=focus.row_index, col_index=focus.col_index)

    if not isinstance(table_rows, (list, tuple)) or not isinstance(visible_columns, (list, tuple)):
        return placeholder

    row = _row_at(table_rows, focus.row_index)
    column = _column_at(visible_columns, focus.col_index)
    if row is None or column is None:
        return placeholder

    content = row.get(column.key)
    return CurrentCell(
        content=content,
        column=column.label or column.key,
        row=_row_label(row_identifiers, focus.row_index),
        row_index=focus.row_index,
        col_index=focus.col_index,
        column_key=column.key,
        cell_style=resolve_style(column, content, style_resolver),
    )
