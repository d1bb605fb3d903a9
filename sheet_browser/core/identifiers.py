from __future__ import annotations

from typing import Any, List, Mapping, Optional, Sequence

from sheet_browser.core.table import Column

IDENTIFIER_CANDIDATES = ("id", "name", "title", "key")

PREVIEW_MAX_LENGTH = 45


def strip_parenthetical(value: Any) -> str:
    """
    Cut a display string at its first literal '(' and trim it.

    None and empty values become "".
    """
    if value is None or value == "":
        return ""
    return str(value).split("(", 1)[0].strip()


def truncate_preview(value: Any, max_length: int = PREVIEW_MAX_LENGTH) -> str:
    text = strip_parenthetical(value)
    if len(text) <= max_length:
        return text
    return text[:max_length] + "..."


def _identifier_for_row(
    row: Any,
    first_visible_key: Optional[str],
    preferred_key: Optional[str],
) -> Any:
    if not isinstance(row, Mapping):
        return ""

    if preferred_key and row.get(preferred_key) is not None:
        return row[preferred_key]

    for candidate in IDENTIFIER_CANDIDATES:
        if candidate in row and row[candidate] is not None:
            return row[candidate]

    if first_visible_key is not None and row.get(first_visible_key) is not None:
        return row[first_visible_key]

    return ""


def derive_identifiers(
    rows: Sequence[Any],
    visible_columns: Sequence[Column],
    preferred_key: Optional[str] = None,
) -> List[str]:
    """
    One human readable, paren-stripped label per row, in row order.

    Preference: `preferred_key` (when present in the row), then the first of
    id/name/title/key, then the first visible column, then "".
    """
    if not isinstance(rows, (list, tuple)):
        return []

    first_key = visible_columns[0].key if visible_columns else None
    return [
        strip_parenthetical(_identifier_for_row(row, first_key, preferred_key))
        for row in rows
    ]
