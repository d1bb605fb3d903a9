from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Mapping, Optional, Sequence, Tuple

from sheet_browser.core.table import Column

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Breakpoint:
    """Viewports up to `max_width` pixels show at most `max_columns` columns."""
    max_width: int
    max_columns: int


BREAKPOINTS: Tuple[Breakpoint, ...] = (
    Breakpoint(max_width=575, max_columns=2),
    Breakpoint(max_width=767, max_columns=3),
    Breakpoint(max_width=991, max_columns=4),
    Breakpoint(max_width=1199, max_columns=5),
    Breakpoint(max_width=1399, max_columns=7),
)

MIN_COLUMN_WIDTH = 120


def shown_column_count(
    total_columns: int,
    viewport_width: float,
    breakpoints: Sequence[Breakpoint] = BREAKPOINTS,
    min_column_width: int = MIN_COLUMN_WIDTH,
) -> int:
    """
    How many columns fit for a viewport: max(1, min(breakpoint, fit, total)),
    or 0 when there are no columns at all.
    """
    if total_columns <= 0:
        return 0

    count = total_columns
    for bp in sorted(breakpoints, key=lambda b: b.max_width):
        if viewport_width <= bp.max_width:
            count = bp.max_columns
            break

    max_fit = int(viewport_width // min_column_width) if min_column_width > 0 else total_columns
    if max_fit > 0:
        count = min(count, max_fit, total_columns)
    else:
        count = 1

    return max(1, min(count, total_columns))


def resolve_visible_columns(
    columns: Sequence[Column],
    viewport_width: float,
    breakpoints: Sequence[Breakpoint] = BREAKPOINTS,
    min_column_width: int = MIN_COLUMN_WIDTH,
) -> List[Column]:
    """
    Order-preserving filter of `columns` down to the ones shown at this width.

    A column whose `visible` flag is explicitly False is always excluded; the
    rest are taken from the front of the list up to the breakpoint count.
    """
    if not columns:
        return []

    shown = shown_column_count(len(columns), viewport_width, breakpoints, min_column_width)
    candidates = [c for c in columns if c.visible is not False]
    return candidates[:shown]


def merge_overrides(
    columns: Sequence[Column],
    visible_keys: Sequence[str],
    overrides: Optional[Mapping[str, bool]] = None,
) -> List[Column]:
    """
    Set a concrete `visible` flag on every column: breakpoint decision first,
    then the user's manual toggles on top.
    """
    shown = set(visible_keys)
    overrides = overrides or {}
    return [
        c.with_visible(bool(overrides[c.key]) if c.key in overrides else c.key in shown)
        for c in columns
    ]


def apply_visibility_flags(
    columns: Sequence[Column],
    viewport_width: float,
    breakpoints: Sequence[Breakpoint] = BREAKPOINTS,
    min_column_width: int = MIN_COLUMN_WIDTH,
    overrides: Optional[Mapping[str, bool]] = None,
) -> List[Column]:
    """
    Same decision as `resolve_visible_columns`, but returns every column with a
    concrete `visible` flag set, manual `overrides` applied last. This is what
    the host hands to the mobile viewer, which only filters on the flag.
    """
    visible = resolve_visible_columns(columns, viewport_width, breakpoints, min_column_width)
    return merge_overrides(columns, [c.key for c in visible], overrides)


def flagged_visible(columns: Optional[Sequence[Column]]) -> List[Column]:
    """Columns whose flag is unset or True, in original order."""
    if not columns or not isinstance(columns, (list, tuple)):
        return []
    return [c for c in columns if c.visible is None or c.visible is True]


class ColumnVisibilityResolver:
    """
    Memoising wrapper around `resolve_visible_columns`.

    Recomputes only when the column set identity or the viewport width
    changes, so downstream consumers see the same list object and can skip
    their own recomputation.
    """

    def __init__(
        self,
        breakpoints: Sequence[Breakpoint] = BREAKPOINTS,
        min_column_width: int = MIN_COLUMN_WIDTH,
    ):
        self.breakpoints = tuple(breakpoints)
        self.min_column_width = min_column_width
        self._last_columns: Optional[Sequence[Column]] = None
        self._last_width: Optional[float] = None
        self._last_result: List[Column] = []
        self.recompute_count = 0

    def resolve(self, columns: Sequence[Column], viewport_width: float) -> List[Column]:
        if columns is self._last_columns and viewport_width == self._last_width:
            return self._last_result

        self._last_columns = columns
        self._last_width = viewport_width
        self._last_result = resolve_visible_columns(
            columns, viewport_width, self.breakpoints, self.min_column_width
        )
        self.recompute_count += 1
        logger.debug(
            "Resolved visible columns",
            extra={
                "viewport_width": viewport_width,
                "n_columns": len(columns),
                "n_visible": len(self._last_result),
            },
        )
        return self._last_result
