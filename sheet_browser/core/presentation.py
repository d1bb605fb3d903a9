from __future__ import annotations

from typing import Any

from sheet_browser.core.navigation import FocusCoordinate

FONT_BASE_LENGTH = 100
FONT_BASE_REM = 1.9
FONT_MIN_REM = 0.7
FONT_MAX_REM = 2.2


def focused_font_size(content: Any) -> str:
    """
    Font size for the focused cell, shrinking with content length.

    1.9rem at 100 characters, bounded to [0.7rem, 2.2rem].
    """
    length = len(str(content)) if content not in (None, "") else 0

    if length <= FONT_BASE_LENGTH:
        size = FONT_BASE_REM * (FONT_BASE_LENGTH / max(length, 20)) ** 0.1
    else:
        size = FONT_BASE_REM * (FONT_BASE_LENGTH / length) ** 0.4

    size = min(max(size, FONT_MIN_REM), FONT_MAX_REM)
    return f"{round(size, 2)}rem"


def position_label(focus: FocusCoordinate, row_count: int, column_count: int) -> str:
    return (
        f"Row {focus.row_index + 1}/{row_count}, "
        f"Col {focus.col_index + 1}/{column_count}"
    )


def animation_class(direction: Any) -> str:
    if not direction:
        return ""
    value = getattr(direction, "value", direction)
    return f"animate-{value}"
