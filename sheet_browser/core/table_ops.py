from __future__ import annotations

import math
import re
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

from sheet_browser.core.cell_style import strip_markdown_links

_DIGITS_RE = re.compile(r"(\d+)")

SORT_ASC = "asc"
SORT_DESC = "desc"

MIN_WIDTH_PCT = 5
MAX_WIDTH_PCT = 40


@dataclass(frozen=True)
class SortConfig:
    key: Optional[str] = None
    direction: str = SORT_ASC

    @classmethod
    def from_sort_by(cls, sort_by: Optional[Sequence[Mapping[str, Any]]]) -> SortConfig:
        """
        Build from a DataTable `sort_by` value (single-column mode):
        `[{"column_id": "name", "direction": "asc"}]`.
        """
        if not sort_by:
            return cls()
        first = sort_by[0]
        direction = first.get("direction", SORT_ASC)
        if direction not in (SORT_ASC, SORT_DESC):
            direction = SORT_ASC
        return cls(key=first.get("column_id"), direction=direction)


def filter_rows(rows: Sequence[Mapping[str, Any]], search_term: Optional[str]) -> List[Mapping[str, Any]]:
    """Keep rows where any value contains `search_term` (case-insensitive)."""
    if not search_term:
        return list(rows)
    needle = search_term.lower()
    return [
        row for row in rows
        if any(needle in str(value).lower() for value in row.values())
    ]


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _natural_key(value: Any) -> Tuple[Tuple[int, Any], ...]:
    if _is_number(value):
        return ((0, value),)
    parts = _DIGITS_RE.split(str(value).lower())
    return tuple((0, int(p)) if p.isdigit() else (1, p) for p in parts if p != "")


def sort_rows(rows: Sequence[Mapping[str, Any]], config: SortConfig) -> List[Mapping[str, Any]]:
    """
    Stable sort on one column. Missing/None values always go last; numbers
    compare numerically, text compares case-insensitively with digit runs
    read as numbers.
    """
    if not config.key:
        return list(rows)

    present = [r for r in rows if r.get(config.key) is not None]
    missing = [r for r in rows if r.get(config.key) is None]
    present.sort(key=lambda r: _natural_key(r[config.key]), reverse=config.direction == SORT_DESC)
    return present + missing


def filter_and_sort(
    rows: Sequence[Mapping[str, Any]],
    search_term: Optional[str] = None,
    sort: Optional[SortConfig] = None,
) -> List[Mapping[str, Any]]:
    filtered = filter_rows(rows, search_term)
    return sort_rows(filtered, sort) if sort is not None else filtered


def column_widths(rows: Sequence[Mapping[str, Any]], visible_keys: Sequence[str]) -> Dict[str, int]:
    """
    Percentage width per visible column, weighted by the log of the average
    content length. Each column gets between 5% and 40%.
    """
    if not rows or not visible_keys:
        return {}

    scaled: Dict[str, float] = {}
    for key in visible_keys:
        lengths = [
            len(strip_markdown_links(str(row[key])))
            for row in rows
            if row.get(key)
        ]
        avg = sum(lengths) / len(lengths) if lengths else 0.0
        length = math.log2(avg) * 10 if avg > 0 else 10
        scaled[key] = max(10.0, min(100.0, length))

    total = sum(scaled.values())
    widths: Dict[str, int] = {}
    for key in visible_keys:
        weight = scaled[key] / total if total > 0 else 1 / len(visible_keys)
        widths[key] = min(MAX_WIDTH_PCT, max(MIN_WIDTH_PCT, round(weight * 100)))
    return widths
