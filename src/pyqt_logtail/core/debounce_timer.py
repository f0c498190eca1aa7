"""Reusable trailing debounce timer."""

from typing import Callable, Optional
from PyQt6.QtCore import QTimer


class DebounceTimer:
    """
    Reusable trailing debounce timer.

    Restarts timer on each call. Handler fires only after delay_ms of inactivity,
    so typing "120" into a spin box resets the log view once, not three times.

    Usage:
        self._page_size_debounce = DebounceTimer(delay_ms=400, handler=self._apply_page_size)

        def on_page_size_edited(self, value):
            self._page_size_debounce.trigger()  # Restarts timer
    """

    def __init__(self, delay_ms: int, handler: Callable[[], None]):
        self._delay_ms = delay_ms
        self._handler = handler
        self._timer = QTimer()
        self._timer.setSingleShot(True)
        self._timer.timeout.connect(self._handler)

    @property
    def is_pending(self) -> bool:
        return self._timer.isActive()

    def trigger(self):
        """Restart the delay."""
        self._timer.start(self._delay_ms)

    def cancel(self):
        """Cancel pending trigger."""
        self._timer.stop()

    def force(self):
        """Cancel timer and fire handler immediately if a trigger was pending."""
        if self._timer.isActive():
            self._timer.stop()
            self._handler()
