from __future__ import annotations

import json
import logging
import os
import re
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence, Tuple
from urllib.error import HTTPError, URLError
from urllib.parse import quote, urlencode, urlparse
from urllib.request import Request, urlopen

from sheet_browser.core.exceptions import SheetFetchError

logger = logging.getLogger(__name__)

SHEETS_API_BASE = "https://sheets.googleapis.com/v4/spreadsheets"
API_KEY_ENV = "GSHEETS_API_KEY"
USER_AGENT = "sheet-browser"
DEFAULT_TIMEOUT = 10.0

_SHEET_ID_RE = re.compile(r"/d/([a-zA-Z0-9-_]+)")
_NUMBER_RE = re.compile(r"^[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?$")


def extract_sheet_id(raw: Optional[str]) -> Optional[str]:
    """
    Pull the spreadsheet id out of a full Google Sheets URL; anything that
    doesn't look like one is returned unchanged.
    """
    if not raw:
        return raw

    match = _SHEET_ID_RE.search(raw)
    if match:
        return match.group(1)

    if raw.startswith("http"):
        parts = urlparse(raw).path.split("/")
        if "d" in parts:
            idx = parts.index("d")
            if idx + 1 < len(parts) and parts[idx + 1]:
                return parts[idx + 1]

    return raw


def coerce_number(value: Any) -> Any:
    """'42' -> 42, '2.5' -> 2.5; everything else is returned as-is."""
    if not isinstance(value, str):
        return value
    text = value.strip()
    if not text or not _NUMBER_RE.match(text):
        return value
    number = float(text)
    if number.is_integer() and not any(ch in text for ch in ".eE"):
        return int(text)
    return number


@dataclass
class SheetPayload:
    title: str
    rows: List[Dict[str, Any]] = field(default_factory=list)
    columns: Dict[str, List[Any]] = field(default_factory=dict)


def values_to_rows(
    values: Sequence[Sequence[Any]],
    query: Optional[str] = None,
    filters: Optional[Mapping[str, str]] = None,
    use_numbers: bool = True,
) -> Tuple[List[Dict[str, Any]], Dict[str, List[Any]]]:
    """
    Turn a values matrix (header row first) into row mappings.

    - `query`: keep rows where any cell contains the text (case-insensitive)
    - `filters`: column -> value exact matches (case-insensitive); a filtered
      column decides on its own whether the row is kept
    - `use_numbers`: numeric-looking strings become numbers

    Also returns a column -> kept values mapping.
    """
    if not values:
        return [], {}

    headings = [str(h) for h in values[0]]
    filters = {k: str(v).lower() for k, v in (filters or {}).items()}
    needle = query.lower() if query else None

    rows: List[Dict[str, Any]] = []
    columns: Dict[str, List[Any]] = {}

    for entry in values[1:]:
        row: Dict[str, Any] = {}
        keep = needle is None

        for name, value in zip(headings, entry):
            text = "" if value is None else str(value)
            if needle is not None and needle in text.lower():
                keep = True
            if name in filters:
                keep = text.lower() == filters[name]
            row[name] = coerce_number(value) if use_numbers else value

        if keep:
            rows.append(row)
            for name, value in row.items():
                columns.setdefault(name, []).append(value)

    return rows, columns


Opener = Callable[..., Any]


class SheetsClient:
    """
    Minimal read-only client for the Sheets v4 REST API using an API key.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        timeout: float = DEFAULT_TIMEOUT,
        opener: Opener = urlopen,
        base_url: str = SHEETS_API_BASE,
    ):
        self.api_key = api_key if api_key is not None else os.getenv(API_KEY_ENV)
        self.timeout = timeout
        self._opener = opener
        self.base_url = base_url.rstrip("/")

    def _url(self, sheet_id: str, suffix: str = "") -> str:
        url = f"{self.base_url}/{quote(sheet_id, safe='')}{suffix}"
        if self.api_key:
            url += "?" + urlencode({"key": self.api_key})
        return url

    def _get_json(self, url: str) -> Dict[str, Any]:
        request = Request(url, headers={"User-Agent": USER_AGENT, "Accept": "application/json"})
        try:
            with self._opener(request, timeout=self.timeout) as resp:
                body = resp.read().decode("utf-8", errors="replace")
        except HTTPError as e:
            raise SheetFetchError(self._error_message(e), status=e.code) from e
        except (URLError, TimeoutError) as e:
            raise SheetFetchError(f"Could not reach the Sheets API: {e}") from e

        try:
            payload = json.loads(body)
        except json.JSONDecodeError as e:
            raise SheetFetchError("Sheets API returned invalid JSON") from e
        if not isinstance(payload, dict):
            raise SheetFetchError("Sheets API returned an unexpected payload")
        return payload

    @staticmethod
    def _error_message(error: HTTPError) -> str:
        try:
            payload = json.loads(error.read().decode("utf-8", errors="replace"))
            message = payload.get("error", {}).get("message")
        except (ValueError, AttributeError):
            message = None
        return message or f"Sheets API request failed with status {error.code}"

    def fetch_title(self, sheet_id: str) -> str:
        payload = self._get_json(self._url(sheet_id))
        return (payload.get("properties") or {}).get("title") or "Unknown Sheet"

    def fetch_values(self, sheet_id: str, sheet: str) -> List[List[Any]]:
        payload = self._get_json(self._url(sheet_id, f"/values/{quote(sheet, safe='')}"))
        values = payload.get("values")
        if values is None:
            return []
        if not isinstance(values, list):
            raise SheetFetchError("Sheets API 'values' is not a list")
        return values

    def fetch(
        self,
        sheet_id: str,
        sheet: str,
        query: Optional[str] = None,
        filters: Optional[Mapping[str, str]] = None,
        use_numbers: bool = True,
    ) -> SheetPayload:
        sheet_id = extract_sheet_id(sheet_id) or ""
        if not sheet_id:
            raise SheetFetchError("You must provide a sheet ID", status=400)
        if not sheet:
            raise SheetFetchError("You must provide a sheet name", status=400)

        logger.info("Fetching sheet", extra={"sheet_id": sheet_id, "sheet": sheet, "has_key": bool(self.api_key)})

        title = self.fetch_title(sheet_id)
        values = self.fetch_values(sheet_id, sheet)
        rows, columns = values_to_rows(values, query=query, filters=filters, use_numbers=use_numbers)

        logger.info(
            "Fetched sheet",
            extra={"sheet_id": sheet_id, "title": title, "n_rows": len(rows)},
        )
        return SheetPayload(title=title, rows=rows, columns=columns)
