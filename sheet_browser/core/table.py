from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field, replace
from typing import Any, Dict, List, Mapping, Optional, Sequence

from sheet_browser.core.exceptions import TableDataError

logger = logging.getLogger(__name__)

Row = Mapping[str, Any]

_ACRONYM_RE = re.compile(r"\b[A-Z]{2,}\b")
_CAMEL_RE = re.compile(r"([a-z])([A-Z])")


@dataclass(frozen=True)
class Column:
    """
    A single table column.

    Fields:

    - key: stable identifier into row data (unique within a column set)
    - label: display name
    - visible: explicit visibility flag. None means "not specified" and is
      treated as visible by the mobile viewer; False is a manual override
      that always hides the column.
    - shading: optional styling metadata, opaque to navigation
    """

    key: str
    label: str = ""
    visible: Optional[bool] = None
    shading: Optional[Dict[str, Any]] = None

    @property
    def display_label(self) -> str:
        return self.label or self.key

    def with_visible(self, visible: Optional[bool]) -> Column:
        return replace(self, visible=visible)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "key": self.key,
            "label": self.label,
            "visible": self.visible,
            "shading": self.shading,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Column:
        return cls(
            key=str(data["key"]),
            label=str(data.get("label") or ""),
            visible=data.get("visible"),
            shading=data.get("shading"),
        )


@dataclass
class TableData:
    """
    Rows plus column definitions for one table source.

    Row order is the addressing mechanism for navigation; rows carry no
    identity of their own.
    """

    title: str
    rows: List[Dict[str, Any]] = field(default_factory=list)
    columns: List[Column] = field(default_factory=list)
    styling: Optional[Dict[str, Any]] = None

    @property
    def n_rows(self) -> int:
        return len(self.rows)

    @property
    def column_keys(self) -> List[str]:
        return [c.key for c in self.columns]


def format_column_label(key: str) -> str:
    """
    Turn a raw column key into a display label.

    Acronyms (2+ uppercase letters as a whole word) are kept as-is, camelCase
    boundaries get a space and the first letter is capitalised.
    """
    if not key:
        return ""

    acronyms = list(dict.fromkeys(_ACRONYM_RE.findall(key)))
    placeholders: Dict[str, str] = {}
    processed = key

    for idx, acronym in enumerate(acronyms):
        placeholder = f"__ACRO{idx}__"
        placeholders[placeholder] = acronym
        processed = re.sub(rf"\b{re.escape(acronym)}\b", placeholder, processed)

    processed = _CAMEL_RE.sub(r"\1 \2", processed)
    processed = re.sub(r"^[a-z]", lambda m: m.group(0).upper(), processed)

    for placeholder, acronym in placeholders.items():
        processed = processed.replace(placeholder, acronym)

    return processed


def columns_from_rows(
    rows: Sequence[Row],
    styling: Optional[Mapping[str, Any]] = None,
) -> List[Column]:
    """
    Derive column definitions from the keys of the first row.
    """
    if not rows or not isinstance(rows[0], Mapping):
        return []

    styling = styling or {}
    return [
        Column(
            key=str(key),
            label=format_column_label(str(key)),
            shading=styling.get(key) if isinstance(styling.get(key), dict) else None,
        )
        for key in rows[0].keys()
    ]


def coerce_rows(raw: Any) -> List[Dict[str, Any]]:
    """
    Validate a raw row payload at the boundary.

    :raises TableDataError: if the payload is not a list of mappings
    """
    if not isinstance(raw, list):
        raise TableDataError(f"Expected a list of rows, got {type(raw).__name__}")

    rows: List[Dict[str, Any]] = []
    for idx, row in enumerate(raw):
        if not isinstance(row, Mapping):
            raise TableDataError(f"Row {idx} is not a mapping (got {type(row).__name__})")
        rows.append(dict(row))
    return rows


def build_table(
    title: str,
    rows: Any,
    styling: Optional[Mapping[str, Any]] = None,
) -> TableData:
    checked = coerce_rows(rows)
    columns = columns_from_rows(checked, styling)
    logger.debug(
        "Built table",
        extra={"title": title, "n_rows": len(checked), "n_columns": len(columns)},
    )
    return TableData(
        title=title,
        rows=checked,
        columns=columns,
        styling=dict(styling) if styling else None,
    )


def is_table_shaped(table_rows: Any, columns: Any) -> bool:
    """Boundary check used by the viewer before doing any navigation work."""
    return isinstance(table_rows, (list, tuple)) and isinstance(columns, (list, tuple))
