"""
Viewer protocols and configuration.

Contracts between the sync engine and the widgets that render it.
"""

from .presenter import LogPresenter, ScrollAnchor
from .viewer_config import ViewerConfig, get_viewer_config, set_viewer_config

__all__ = [
    "LogPresenter",
    "ScrollAnchor",
    "ViewerConfig",
    "get_viewer_config",
    "set_viewer_config",
]
