from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from sheet_browser.core.navigation import Direction, FocusCoordinate


@dataclass
class ViewerState:
    """
    Serialisable state of one mobile viewer session.

    Fields:

    - is_open: whether the single-cell viewer is showing
    - focus: current focus coordinate (visible-column indexed)
    - animation: direction tag of the last committed move, None once reset
    - session: counter bumped on every open, so stale browser events from a
      previous session can be told apart
    - column_count: number of visible columns `focus` was taken against,
      None when unknown
    """

    is_open: bool = False
    focus: FocusCoordinate = field(default_factory=FocusCoordinate)
    animation: Optional[Direction] = None
    session: int = 0
    column_count: Optional[int] = None

    def opened(
        self,
        focus: Optional[FocusCoordinate] = None,
        column_count: Optional[int] = None,
    ) -> ViewerState:
        return ViewerState(
            is_open=True,
            focus=focus or FocusCoordinate(),
            animation=None,
            session=self.session + 1,
            column_count=column_count,
        )

    def closed(self) -> ViewerState:
        return ViewerState(
            is_open=False,
            focus=self.focus,
            animation=None,
            session=self.session,
            column_count=self.column_count,
        )

    def reset_focus(self, column_count: Optional[int] = None) -> ViewerState:
        """Back to (0, 0) for a new row or column set; stays open."""
        return ViewerState(
            is_open=self.is_open,
            focus=FocusCoordinate(),
            animation=None,
            session=self.session,
            column_count=column_count,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "is_open": self.is_open,
            "focus": self.focus.to_dict(),
            "animation": self.animation.value if self.animation else None,
            "session": self.session,
            "column_count": self.column_count,
        }

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> ViewerState:
        if not isinstance(data, dict):
            return cls()
        animation = data.get("animation")
        try:
            direction = Direction(animation) if animation else None
        except ValueError:
            direction = None
        column_count = data.get("column_count")
        return cls(
            is_open=bool(data.get("is_open", False)),
            focus=FocusCoordinate.from_dict(data.get("focus")),
            animation=direction,
            session=int(data.get("session") or 0),
            column_count=int(column_count) if column_count is not None else None,
        )
