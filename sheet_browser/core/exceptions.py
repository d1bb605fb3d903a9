from __future__ import annotations


class SheetBrowserError(Exception):
    """Base exception for all sheet_browser errors"""
    pass

class ConfigError(SheetBrowserError):
    """Invalid or inconsistent global.json or source config"""
    pass

class SourceConfigError(SheetBrowserError, ValueError):
    """
    A single table source config is structurally invalid for loading
    (missing sheet id, missing file, unknown kind, etc)
    """
    pass

class SheetFetchError(SheetBrowserError):
    """The spreadsheet API could not be reached or returned an error payload"""
    def __init__(self, message: str, status: int | None = None):
        self.status = status
        super().__init__(message)

class TableDataError(SheetBrowserError):
    """
    Table payload doesn't match what the table model expects
    rows not a list, rows not mappings, etc
    """
    pass
