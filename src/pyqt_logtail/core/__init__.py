"""
Core viewer components.

Log window state, the sync engine that drives it, and the PyQt6 helpers
it runs on (background reads, debouncing, text view writing).
"""

from .debounce_timer import DebounceTimer
from .background_task import BackgroundTask, BackgroundTaskRunner, FetchRunner
from .log_window import DisplayMode, FetchKind, LogWindow
from .settings_store import SettingsStore
from .sync_engine import FetchTicket, SyncEngine
from .text_view_writer import TextViewWriter

__all__ = [
    "DebounceTimer",
    "BackgroundTask",
    "BackgroundTaskRunner",
    "FetchRunner",
    "DisplayMode",
    "FetchKind",
    "LogWindow",
    "SettingsStore",
    "FetchTicket",
    "SyncEngine",
    "TextViewWriter",
]
