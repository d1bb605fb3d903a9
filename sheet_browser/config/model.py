from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

from sheet_browser.core.visibility import MIN_COLUMN_WIDTH

SOURCE_KINDS = ("sheet", "json", "csv")

DEFAULT_UI_TITLE = "Sheet Browser"
DEFAULT_SUBTITLE = "Spreadsheet tables, one cell at a time"
DEFAULT_MOBILE_BREAKPOINT = 768


@dataclass
class SourceConfig:
    """
    Parsed config entry for a single table source.
    """
    raw: Dict[str, Any]
    source_path: Path
    index: int

    @property
    def name(self) -> str:
        return self.raw.get("name", f"Source {self.index}")

    @property
    def key(self) -> str:
        return self.raw.get("key") or self.name

    @property
    def kind(self) -> str:
        kind = self.raw.get("kind")
        if kind:
            return str(kind).lower()
        # Infer from the file extension when only a file is configured
        if self.raw.get("file"):
            return "csv" if str(self.raw["file"]).lower().endswith(".csv") else "json"
        return "sheet"

    @property
    def sheet_id(self) -> Optional[str]:
        return self.raw.get("sheet_id")

    @property
    def sheet(self) -> str:
        return self.raw.get("sheet", "Sheet1")

    @property
    def file(self) -> Optional[Path]:
        raw_file = self.raw.get("file")
        return Path(raw_file) if raw_file else None

    @property
    def query(self) -> Optional[str]:
        return self.raw.get("query") or None

    @property
    def filters(self) -> Dict[str, str]:
        return {str(k): str(v) for k, v in (self.raw.get("filters") or {}).items()}

    @property
    def preferred_key(self) -> Optional[str]:
        return self.raw.get("preferred_key") or None

    @property
    def use_numbers(self) -> bool:
        return bool(self.raw.get("use_numbers", True))

    @classmethod
    def from_raw(cls, raw: Dict[str, Any], source_path: Path, index: int) -> SourceConfig:
        return cls(raw=raw, source_path=source_path, index=index)


@dataclass
class GlobalConfig:
    ui_title: str = DEFAULT_UI_TITLE
    subtitle: str = DEFAULT_SUBTITLE
    default_source: Optional[str] = None
    min_column_width: int = MIN_COLUMN_WIDTH
    mobile_breakpoint: int = DEFAULT_MOBILE_BREAKPOINT
    data_root: Optional[Path] = None
    sources: List[SourceConfig] = field(default_factory=list)

    def source_by_key(self) -> Dict[str, SourceConfig]:
        return {cfg.key: cfg for cfg in self.sources}
