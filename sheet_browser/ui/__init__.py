"""
Dash web UI for the browser: full table plus the mobile single-cell viewer.
"""

from .dash_app import create_dash_app

__all__ = ["create_dash_app"]
