"""
Viewer widgets.

The main viewer window and the small widgets it is assembled from.
"""

from .no_scroll_spinbox import NoScrollSpinBox
from .live_indicator import LiveIndicator, LiveState
from .log_viewer import RemoteLogViewerWindow

__all__ = [
    "NoScrollSpinBox",
    "LiveIndicator",
    "LiveState",
    "RemoteLogViewerWindow",
]
