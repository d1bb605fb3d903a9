from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, List, Optional

from sheet_browser.core.adjacent import AdjacentCells, CurrentCell, adjacent_cells, current_cell
from sheet_browser.core.cell_style import CellStyleResolver
from sheet_browser.core.dispatcher import CompactViewportQuery, InputDispatcher, ViewportSize, never_compact
from sheet_browser.core.identifiers import derive_identifiers
from sheet_browser.core.navigation import Direction, FocusCoordinate, NavigationEngine
from sheet_browser.core.presentation import position_label
from sheet_browser.core.scheduling import Scheduler
from sheet_browser.core.table import Column, is_table_shaped
from sheet_browser.core.visibility import flagged_visible

logger = logging.getLogger(__name__)


class ViewerStatus(str, Enum):
    READY = "ready"
    MALFORMED = "malformed"
    NO_COLUMNS = "no_columns"
    NO_DATA = "no_data"


@dataclass(frozen=True)
class ViewerSnapshot:
    """Everything the rendering layer needs for one frame of the viewer."""

    status: ViewerStatus
    focus: FocusCoordinate
    row_count: int
    column_count: int
    position: str
    current: CurrentCell
    adjacent: AdjacentCells
    animation: Optional[Direction]
    visible_columns: List[Column] = field(default_factory=list)


class TableViewer:
    """
    Single-cell table viewer: ties visible columns, row identifiers, the
    navigation engine and the input dispatcher together for one session.

    Malformed input (rows or columns not lists) puts the viewer in the
    MALFORMED status: it renders a placeholder and ignores navigation.
    """

    def __init__(
        self,
        table_rows: Any,
        columns: Any,
        initial_focus: Optional[FocusCoordinate] = None,
        on_close: Optional[Callable[[], None]] = None,
        preferred_key: Optional[str] = None,
        scheduler: Optional[Scheduler] = None,
        is_compact_viewport: CompactViewportQuery = never_compact,
        viewport_size: Optional[ViewportSize] = None,
        style_resolver: Optional[CellStyleResolver] = None,
    ):
        self.preferred_key = preferred_key
        self.style_resolver = style_resolver
        self.engine = NavigationEngine(initial_focus=initial_focus, scheduler=scheduler)
        self.dispatcher = InputDispatcher(
            self.engine,
            on_close=on_close,
            is_compact_viewport=is_compact_viewport,
            scheduler=scheduler,
            viewport_size=viewport_size,
        )
        self._rows: List[Any] = []
        self._visible: List[Column] = []
        self._identifiers: List[str] = []
        self._malformed = False
        self._load(table_rows, columns)

    # ------------------------------------------------------------------
    # Data
    # ------------------------------------------------------------------
    def _load(self, table_rows: Any, columns: Any) -> None:
        if not is_table_shaped(table_rows, columns):
            logger.warning(
                "Viewer received malformed table input",
                extra={
                    "rows_type": type(table_rows).__name__,
                    "columns_type": type(columns).__name__,
                },
            )
            self._malformed = True
            self._rows, self._visible, self._identifiers = [], [], []
        else:
            self._malformed = False
            self._rows = list(table_rows)
            self._visible = flagged_visible(columns)
            self._identifiers = derive_identifiers(self._rows, self._visible, self.preferred_key)

        self.engine.set_bounds(len(self._rows), len(self._visible))

    def update_data(self, table_rows: Any, columns: Any, reset_focus: bool = True) -> None:
        """
        Swap in a new row set (after a filter or sort). Focus goes back to
        (0, 0) unless the caller opts out.
        """
        self._load(table_rows, columns)
        if reset_focus:
            self.engine.set_focus(FocusCoordinate())

    @property
    def visible_columns(self) -> List[Column]:
        return self._visible

    @property
    def row_identifiers(self) -> List[str]:
        return self._identifiers

    @property
    def status(self) -> ViewerStatus:
        if self._malformed:
            return ViewerStatus.MALFORMED
        if not self._visible:
            return ViewerStatus.NO_COLUMNS
        if not self._rows:
            return ViewerStatus.NO_DATA
        return ViewerStatus.READY

    # ------------------------------------------------------------------
    # Lifecycle / input
    # ------------------------------------------------------------------
    def open(self, width: Optional[float] = None, height: Optional[float] = None) -> None:
        if self._malformed:
            return
        self.dispatcher.attach(width, height)

    def close(self) -> None:
        self.dispatcher.close()

    @property
    def is_open(self) -> bool:
        return self.dispatcher.attached and not self.dispatcher.closed

    def handle_key(self, key: Optional[str]) -> bool:
        return self.dispatcher.handle_key(key)

    def handle_swipe(self, swipe: Optional[str]) -> bool:
        return self.dispatcher.handle_swipe(swipe)

    def handle_resize(self, width: float, height: float) -> None:
        self.dispatcher.handle_resize(width, height)

    def handle_orientation_change(self, width: Optional[float] = None, height: Optional[float] = None) -> None:
        self.dispatcher.handle_orientation_change(width, height)

    def navigate(self, direction: Direction) -> bool:
        """Direct navigation from the on-screen preview panels."""
        if not self.is_open:
            return False
        return self.engine.move(direction)

    # ------------------------------------------------------------------
    # Outputs
    # ------------------------------------------------------------------
    def current_cell(self) -> CurrentCell:
        return current_cell(
            self.engine.focus,
            self._rows,
            self._visible,
            self._identifiers,
            self.style_resolver,
        )

    def adjacent(self) -> AdjacentCells:
        return adjacent_cells(self.engine.focus, self._rows, self._visible, self._identifiers)

    def snapshot(self) -> ViewerSnapshot:
        focus = self.engine.focus
        return ViewerSnapshot(
            status=self.status,
            focus=focus,
            row_count=len(self._rows),
            column_count=len(self._visible),
            position=position_label(focus, len(self._rows), len(self._visible)),
            current=self.current_cell(),
            adjacent=self.adjacent(),
            animation=self.engine.animation_direction,
            visible_columns=list(self._visible),
        )

    def snapshot_dict(self) -> Dict[str, Any]:
        snap = self.snapshot()
        return {
            "status": snap.status.value,
            "focus": snap.focus.to_dict(),
            "row_count": snap.row_count,
            "column_count": snap.column_count,
            "position": snap.position,
            "current": snap.current.to_dict(),
            "adjacent": snap.adjacent.to_dict(),
            "animation": snap.animation.value if snap.animation else None,
        }
