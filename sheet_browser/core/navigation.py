from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, List, Mapping, Optional

from sheet_browser.core.scheduling import ScheduledCall, Scheduler

logger = logging.getLogger(__name__)

ANIMATION_DURATION_MS = 300


class Direction(str, Enum):
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"


_DELTAS: Dict[Direction, tuple[int, int]] = {
    Direction.UP: (-1, 0),
    Direction.DOWN: (1, 0),
    Direction.LEFT: (0, -1),
    Direction.RIGHT: (0, 1),
}


@dataclass(frozen=True)
class FocusCoordinate:
    """
    The (row, visible-column) pair highlighted in single-cell mode.

    `col_index` indexes the *visible* column list, not the raw columns.
    """

    row_index: int = 0
    col_index: int = 0

    def shifted(self, direction: Direction) -> FocusCoordinate:
        d_row, d_col = _DELTAS[direction]
        return FocusCoordinate(self.row_index + d_row, self.col_index + d_col)

    def to_dict(self) -> Dict[str, int]:
        return {"row_index": self.row_index, "col_index": self.col_index}

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> FocusCoordinate:
        if not data:
            return cls()
        row = data.get("row_index", data.get("rowIndex", 0))
        col = data.get("col_index", data.get("colIndex", 0))
        return cls(row_index=int(row or 0), col_index=int(col or 0))


Listener = Callable[["NavigationEngine"], None]


class NavigationEngine:
    """
    Owns the focus coordinate for one viewer session.

    Bounds (`row_count`, `column_count`) are supplied from outside and may
    change between renders; every move is checked against the current
    values. A move whose target falls outside the table is ignored: focus
    and the animation tag stay as they were.

    Each committed move sets `animation_direction`, which is reset to None
    ANIMATION_DURATION_MS later through the injected scheduler. Without a
    scheduler the host clears it with `clear_animation()`.
    """

    def __init__(
        self,
        row_count: int = 0,
        column_count: int = 0,
        initial_focus: Optional[FocusCoordinate] = None,
        scheduler: Optional[Scheduler] = None,
        animation_duration_ms: int = ANIMATION_DURATION_MS,
    ):
        self.row_count = max(0, int(row_count))
        self.column_count = max(0, int(column_count))
        self._focus = initial_focus or FocusCoordinate()
        self._animation: Optional[Direction] = None
        self._scheduler = scheduler
        self._animation_duration_ms = animation_duration_ms
        self._pending_reset: Optional[ScheduledCall] = None
        self._listeners: List[Listener] = []
        self._closed = False

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------
    @property
    def focus(self) -> FocusCoordinate:
        return self._focus

    @property
    def animation_direction(self) -> Optional[Direction]:
        return self._animation

    @property
    def closed(self) -> bool:
        return self._closed

    def set_bounds(self, row_count: int, column_count: int) -> None:
        """Update table dimensions; focus is left untouched."""
        self.row_count = max(0, int(row_count))
        self.column_count = max(0, int(column_count))

    def in_bounds(self, coord: FocusCoordinate) -> bool:
        return 0 <= coord.row_index < self.row_count and 0 <= coord.col_index < self.column_count

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------
    def can_move(self, direction: Direction) -> bool:
        if self._closed:
            return False
        return self.in_bounds(self._focus.shifted(Direction(direction)))

    def move(self, direction: Direction) -> bool:
        direction = Direction(direction)
        if not self.can_move(direction):
            logger.debug(
                "Ignored boundary move",
                extra={"direction": direction.value, **self._focus.to_dict()},
            )
            return False

        self._focus = self._focus.shifted(direction)
        self._animation = direction
        logger.debug("Focus moved", extra={"direction": direction.value, **self._focus.to_dict()})
        self._focus_changed()
        return True

    def move_up(self) -> bool:
        return self.move(Direction.UP)

    def move_down(self) -> bool:
        return self.move(Direction.DOWN)

    def move_left(self) -> bool:
        return self.move(Direction.LEFT)

    def move_right(self) -> bool:
        return self.move(Direction.RIGHT)

    def set_focus(self, coord: FocusCoordinate) -> None:
        """
        Jump straight to `coord` (initial focus, click-to-focus).

        Not range checked: a stale coordinate shows up as placeholder content
        when the cell is read.
        """
        if self._closed:
            return
        self._focus = coord
        self._focus_changed()

    def clear_animation(self) -> None:
        self._cancel_pending_reset()
        if self._animation is not None:
            self._animation = None
            self._notify()

    def close(self) -> None:
        """Stop accepting input and drop any pending timer."""
        if self._closed:
            return
        self._closed = True
        self._cancel_pending_reset()
        self._listeners.clear()

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------
    def _focus_changed(self) -> None:
        self._cancel_pending_reset()
        if self._scheduler is not None:
            self._pending_reset = self._scheduler.call_later(
                self._animation_duration_ms, self._on_animation_timeout
            )
        self._notify()

    def _on_animation_timeout(self) -> None:
        self._pending_reset = None
        if self._closed:
            return
        if self._animation is not None:
            self._animation = None
            self._notify()

    def _cancel_pending_reset(self) -> None:
        if self._pending_reset is not None:
            self._pending_reset.cancel()
            self._pending_reset = None

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self)
