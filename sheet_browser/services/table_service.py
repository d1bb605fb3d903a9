from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, Iterator, Mapping, Optional

from sheet_browser.config.loader import resolve_source_file
from sheet_browser.config.model import GlobalConfig, SourceConfig
from sheet_browser.core.exceptions import SheetBrowserError, SourceConfigError
from sheet_browser.core.table import TableData, build_table
from sheet_browser.services.file_sources import load_csv_table, load_json_table
from sheet_browser.services.sheets_client import SheetsClient

logger = logging.getLogger(__name__)


def load_source(
    cfg: SourceConfig,
    global_config: GlobalConfig,
    config_root: Path,
    client: Optional[SheetsClient] = None,
) -> TableData:
    """
    Materialise a TableData for one configured source.
    """
    kind = cfg.kind

    if kind == "sheet":
        client = client or SheetsClient()
        payload = client.fetch(
            cfg.sheet_id or "",
            cfg.sheet,
            query=cfg.query,
            filters=cfg.filters,
            use_numbers=cfg.use_numbers,
        )
        return build_table(payload.title or cfg.name, payload.rows)

    if kind in ("json", "csv"):
        path = resolve_source_file(cfg, global_config, config_root)
        loader = load_json_table if kind == "json" else load_csv_table
        return loader(path, cfg.name)

    raise SourceConfigError(f"Source '{cfg.name}': unknown kind '{kind}'")


class TableService(Mapping[str, TableData]):
    """
    Lazy, cached access to tables by source key.
    Implements the Mapping interface so the UI layer can treat it like a dict.
    """

    def __init__(
        self,
        global_config: GlobalConfig,
        config_root: Path | str,
        client: Optional[SheetsClient] = None,
    ):
        self.global_config = global_config
        self.config_root = Path(config_root)
        self._client = client
        self._cfg_by_key: Dict[str, SourceConfig] = global_config.source_by_key()
        self._loaded: Dict[str, TableData] = {}

    def __getitem__(self, key: str) -> TableData:
        # 1. Fast path: already loaded
        if key in self._loaded:
            return self._loaded[key]

        # 2. Check config existence
        cfg = self._cfg_by_key.get(key)
        if cfg is None:
            raise KeyError(f"Unknown source '{key}'")

        # 3. Lazy load
        try:
            logger.info("Loading table source", extra={"source": cfg.key, "kind": cfg.kind})
            table = load_source(cfg, self.global_config, self.config_root, self._client)
        except SheetBrowserError as e:
            logger.error(
                "Table source failed to load",
                extra={"source": cfg.key, "error": str(e)},
            )
            raise
        except Exception:
            logger.exception(
                "Unexpected error while loading table source",
                extra={"source": cfg.key},
            )
            raise

        self._loaded[key] = table
        return table

    def __iter__(self) -> Iterator[str]:
        return iter(self._cfg_by_key)

    def __len__(self) -> int:
        return len(self._cfg_by_key)

    def config_for(self, key: str) -> Optional[SourceConfig]:
        return self._cfg_by_key.get(key)

    def is_loaded(self, key: str) -> bool:
        return key in self._loaded

    def invalidate(self, key: Optional[str] = None) -> None:
        """Drop one cached table (or all) so the next access refetches."""
        if key is None:
            self._loaded.clear()
        else:
            self._loaded.pop(key, None)

    def default_key(self) -> Optional[str]:
        default = self.global_config.default_source
        if default and default in self._cfg_by_key:
            return default
        return next(iter(self._cfg_by_key), None)
