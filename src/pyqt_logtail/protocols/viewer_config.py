"""Base configuration for the remote log viewer.

Provides hooks for applications to tune polling, paging and scrolling.
"""

from typing import Optional
from dataclasses import dataclass


@dataclass
class ViewerConfig:
    """Tunable viewer behavior.

    Attributes:
        page_size: Lines requested per fetch
        poll_interval_ms: Interval of the live polling timer
        backfill_min_latency_ms: Minimum duration of a backfill read
        bottom_tolerance_px: Distance from the bottom still counted as "at bottom"
        request_timeout_s: Timeout handed to the HTTP session
        page_size_debounce_ms: Delay before a page-size edit resets the view
        settings_file: Location of the persisted host/secret/file list
    """

    page_size: int = 70
    poll_interval_ms: int = 3000
    backfill_min_latency_ms: int = 500
    bottom_tolerance_px: int = 20
    request_timeout_s: float = 10.0
    page_size_debounce_ms: int = 400
    settings_file: Optional[str] = None


# Global config instance (set by application)
_viewer_config: Optional[ViewerConfig] = None


def set_viewer_config(config: ViewerConfig) -> None:
    """Set the global viewer configuration.

    Args:
        config: ViewerConfig instance
    """
    global _viewer_config
    _viewer_config = config


def get_viewer_config() -> ViewerConfig:
    """Get the current viewer configuration.

    Returns:
        Current ViewerConfig or default if not set
    """
    if _viewer_config is None:
        return ViewerConfig()
    return _viewer_config
