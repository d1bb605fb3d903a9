from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, List, Optional

from sheet_browser.config.model import (
    DEFAULT_MOBILE_BREAKPOINT,
    DEFAULT_SUBTITLE,
    DEFAULT_UI_TITLE,
    GlobalConfig,
    SourceConfig,
)
from sheet_browser.core.exceptions import ConfigError
from sheet_browser.core.visibility import MIN_COLUMN_WIDTH
from sheet_browser.validation.errors import ValidationError
from sheet_browser.validation.source_validation import validate_source

logger = logging.getLogger(__name__)

DATA_ROOT_ENV = "SHEET_BROWSER_DATA_ROOT"


def _read_json(path: Path) -> Any:
    try:
        with path.open() as f:
            return json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigError(f"Invalid JSON in {path}: {e}") from e


def _resolve_data_root(root: Path, raw_value: Optional[str]) -> Optional[Path]:
    # Absolute paths are used as-is, relative ones hang off the config root
    if raw_value is None:
        return None
    data_root = Path(raw_value)
    if data_root.is_absolute():
        return data_root
    return (root / data_root).resolve()


def load_sources(sources_dir: Path) -> List[SourceConfig]:
    """
    Parse every `*.json` in `sources_dir` (sorted by file name).

    Invalid entries are logged and skipped; duplicate keys are a hard error.
    """
    sources: List[SourceConfig] = []
    seen: Dict[str, Path] = {}

    if not sources_dir.is_dir():
        return sources

    for idx, config_file in enumerate(sorted(sources_dir.glob("*.json"))):
        raw = _read_json(config_file)
        if not isinstance(raw, dict):
            logger.error(
                "Skipping source config that is not an object",
                extra={"path": str(config_file)},
            )
            continue

        cfg = SourceConfig.from_raw(raw, source_path=config_file, index=idx)
        try:
            validate_source(cfg)
        except ValidationError as e:
            logger.error(
                "Skipping invalid source config",
                extra={"path": str(config_file), "issues": e.codes, "error": str(e)},
            )
            continue

        if cfg.key in seen:
            raise ConfigError(
                f"Duplicate source key '{cfg.key}' in {config_file} (already defined in {seen[cfg.key]})"
            )
        seen[cfg.key] = config_file
        sources.append(cfg)

    return sources


def load_global_config(root: Path | str) -> GlobalConfig:
    """
    Load configuration from a directory using the multi-file layout.

    Expected structure:

        root/
            global.json
            sources/
                orders.json
                inventory.json
                ...

    :param root: Directory containing 'global.json' and optionally 'sources/'.
    :return: A GlobalConfig instance.
    :raises FileNotFoundError: if global.json does not exist.
    :raises ConfigError: on unreadable JSON or duplicate source keys.
    """
    root = Path(root)
    logger.info("Loading global config", extra={"config_root": str(root)})

    global_path = root / "global.json"
    if not global_path.is_file():
        raise FileNotFoundError(f"File not found at {global_path}")

    raw_global = _read_json(global_path)
    if not isinstance(raw_global, dict):
        raise ConfigError(f"{global_path} must contain a JSON object")

    sources = load_sources(root / "sources")

    config = GlobalConfig(
        ui_title=raw_global.get("ui_title", DEFAULT_UI_TITLE),
        subtitle=raw_global.get("subtitle", DEFAULT_SUBTITLE),
        default_source=raw_global.get("default_source"),
        min_column_width=int(raw_global.get("min_column_width", MIN_COLUMN_WIDTH)),
        mobile_breakpoint=int(raw_global.get("mobile_breakpoint", DEFAULT_MOBILE_BREAKPOINT)),
        data_root=_resolve_data_root(root, raw_global.get("data_root")),
        sources=sources,
    )

    logger.info(
        "Sources loaded from config root",
        extra={
            "config_root": str(root),
            "n_sources": len(sources),
            "source_keys": [s.key for s in sources],
        },
    )
    return config


def resolve_source_file(cfg: SourceConfig, global_config: GlobalConfig, config_root: Path) -> Path:
    """
    Absolute path of a file-backed source.

    Relative files resolve against data_root, then $SHEET_BROWSER_DATA_ROOT,
    then the config root.
    """
    if cfg.file is None:
        raise ConfigError(f"Source '{cfg.name}' has no file configured")

    path = cfg.file
    if path.is_absolute():
        return path

    if global_config.data_root is not None:
        return global_config.data_root / path

    env_root = os.environ.get(DATA_ROOT_ENV)
    if env_root:
        return Path(env_root) / path

    return Path(config_root) / path
