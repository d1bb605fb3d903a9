"""
Core layer: table model, column visibility, row identifiers, the focus
navigation engine and its input dispatcher. Nothing in here knows about Dash.
"""

from .navigation import Direction, FocusCoordinate, NavigationEngine
from .table import Column, TableData
from .viewer import TableViewer, ViewerSnapshot, ViewerStatus
from .viewer_state import ViewerState

__all__ = [
    "Column",
    "Direction",
    "FocusCoordinate",
    "NavigationEngine",
    "TableData",
    "TableViewer",
    "ViewerSnapshot",
    "ViewerState",
    "ViewerStatus",
]
