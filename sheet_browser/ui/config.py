from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from sheet_browser.config.model import GlobalConfig, SourceConfig
from sheet_browser.services.table_service import TableService


@dataclass
class AppConfig:
    """
    Shared state for the Dash app: config root, global config and the table
    service. Passed into layout + callback registration instead of globals.
    """
    config_root: Path
    global_config: GlobalConfig
    tables: Optional[TableService] = None
    sources: List[SourceConfig] = field(default_factory=list)
    default_source: Optional[str] = None

    def validate(self) -> None:
        """Ensure all required services are attached before the app starts."""
        if self.tables is None:
            raise RuntimeError("AppConfig.tables must be initialized.")

    @property
    def mobile_breakpoint(self) -> int:
        return self.global_config.mobile_breakpoint

    @property
    def min_column_width(self) -> int:
        return self.global_config.min_column_width
