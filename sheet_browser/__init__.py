"""
Top-level package for the sheet browser.

This package exposes the core architecture (table model, navigation, UI adapters).
Most code should import from submodules such as:
    sheet_browser.core
    sheet_browser.services
    sheet_browser.ui
"""

__all__: list[str] = []
