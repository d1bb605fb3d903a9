from __future__ import annotations

import re
from typing import Any, Dict, Mapping, Optional, Protocol

from sheet_browser.core.table import Column

_MD_LINK_RE = re.compile(r"\[(.*?)\]\(.*?\)")
_SENTENCE_TERMINATORS = ".!?"

CELL_YES = "cell-yes"
CELL_NO = "cell-no"


def strip_markdown_links(text: str) -> str:
    """`[label](url)` -> `label`"""
    return _MD_LINK_RE.sub(r"\1", text)


class CellStyleResolver(Protocol):
    def __call__(self, column: Column, value: Any) -> Dict[str, Any]:
        ...


def _is_null_or_empty(value: Any) -> bool:
    return value is None or value == ""


def _rule_matches(condition: Mapping[str, Any], value: Any) -> bool:
    contains = condition.get("valueContains")
    if contains and str(value).find(str(contains)) != -1:
        return True
    if condition.get("isNullOrEmpty") and _is_null_or_empty(value):
        return True
    return False


def shading_style(column: Column, value: Any) -> Dict[str, Any]:
    """
    Style for one cell from the column's shading metadata.

    `cellStyle` is the base; the first entry of `valueSpecificStyles` whose
    condition matches the value is merged on top.
    """
    shading = column.shading or {}
    if not isinstance(shading, Mapping):
        return {}

    style: Dict[str, Any] = dict(shading.get("cellStyle") or {})
    for rule in shading.get("valueSpecificStyles") or []:
        if not isinstance(rule, Mapping):
            continue
        if _rule_matches(rule.get("condition") or {}, value):
            style.update(rule.get("style") or {})
            break
    return style


def no_style(column: Column, value: Any) -> Dict[str, Any]:
    return {}


def classify_yes_no(value: Any) -> str:
    """
    Full-table colouring class for answer-like cells.

    "yes..." -> cell-yes. "no..." -> cell-no, unless "but" shows up within
    the first two sentences. Anything else -> "".
    """
    if value is None:
        return ""

    plain = strip_markdown_links(str(value))
    lowered = plain.lower()

    if lowered.startswith("yes"):
        return CELL_YES

    if not lowered.startswith("no"):
        return ""

    ends = [i for i, ch in enumerate(plain) if ch in _SENTENCE_TERMINATORS][:2]
    scope_end = ends[-1] + 1 if ends else len(plain)

    if "but" in plain[:scope_end].lower():
        return ""
    return CELL_NO


def resolve_style(
    column: Optional[Column],
    value: Any,
    resolver: Optional[CellStyleResolver] = None,
) -> Dict[str, Any]:
    if column is None:
        return {}
    return (resolver or shading_style)(column, value)
