from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

import pandas as pd

from sheet_browser.core.exceptions import SourceConfigError, TableDataError
from sheet_browser.core.table import TableData, build_table

logger = logging.getLogger(__name__)


def styling_path_for(path: Path) -> Optional[Path]:
    """`table.json` -> `table.styling.json`; None for non-JSON files."""
    if path.suffix.lower() != ".json":
        return None
    return path.with_name(path.stem + ".styling.json")


def load_styling(path: Path) -> Optional[Dict[str, Any]]:
    """
    Optional per-column shading map next to a JSON table. Missing or broken
    styling never blocks the table itself.
    """
    styling_path = styling_path_for(path)
    if styling_path is None or not styling_path.is_file():
        logger.debug("No styling file", extra={"path": str(path)})
        return None

    try:
        raw = json.loads(styling_path.read_text())
    except (OSError, json.JSONDecodeError) as e:
        logger.warning(
            "Could not read styling file; using default styles",
            extra={"path": str(styling_path), "error": str(e)},
        )
        return None

    if not isinstance(raw, dict):
        logger.warning(
            "Styling file is not an object; using default styles",
            extra={"path": str(styling_path)},
        )
        return None

    logger.info("Loaded styling", extra={"path": str(styling_path)})
    return raw


def _json_rows(raw: Any, path: Path) -> List[Any]:
    if isinstance(raw, list):
        return raw
    if isinstance(raw, dict) and isinstance(raw.get("data"), list):
        logger.warning(
            "JSON table is a structured object; using its 'data' list",
            extra={"path": str(path)},
        )
        return raw["data"]
    raise TableDataError(f"{path} does not contain a list of rows")


def load_json_table(path: Path, title: str) -> TableData:
    if not path.is_file():
        raise SourceConfigError(f"Table file not found at {path}")

    try:
        raw = json.loads(path.read_text())
    except json.JSONDecodeError as e:
        raise TableDataError(f"Invalid JSON in {path}: {e}") from e

    return build_table(title, _json_rows(raw, path), styling=load_styling(path))


def load_csv_table(path: Path, title: str) -> TableData:
    if not path.is_file():
        raise SourceConfigError(f"Table file not found at {path}")

    df = pd.read_csv(path)
    # Empty cells come through as NaN; the table model uses None
    df = df.astype(object).where(pd.notna(df), None)
    df.columns = [str(c) for c in df.columns]
    return build_table(title, df.to_dict("records"))
