"""
Config package for sheet_browser.

Responsible for:
- config models (GlobalConfig, SourceConfig)
- config I/O helpers (load_global_config / resolve_source_file)
"""

from .model import GlobalConfig, SourceConfig
from .loader import load_global_config, resolve_source_file

__all__ = ["GlobalConfig", "SourceConfig", "load_global_config", "resolve_source_file"]
