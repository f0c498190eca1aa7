"""
pyqt-logtail: PyQt6 viewer for remote, continuously growing log files.

Shows a window into a server-resident log, fetched page by page from a
bearer-authenticated HTTP API, that follows new lines while the view sits
at the bottom and loads older lines when it is scrolled to the top.

Architecture:
- Core: LogWindow state and the SyncEngine that reconciles polling,
  backfill and resets, plus PyQt6 helpers (background reads, debounce)
- IO: LogSource protocol, HTTP implementation, read errors
- Protocols: LogPresenter contract and ViewerConfig
- Widgets: RemoteLogViewerWindow and its parts
"""

__version__ = "0.1.0"

__all__ = [
    "__version__",
]
