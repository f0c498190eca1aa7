"""
No-scroll spinbox for PyQt6.

Prevents accidental page-size changes from mouse wheel events while the
user scrolls the log next to it.
"""

from PyQt6.QtWidgets import QSpinBox
from PyQt6.QtGui import QWheelEvent


class NoScrollSpinBox(QSpinBox):
    """SpinBox that ignores wheel events to prevent accidental value changes."""

    def wheelEvent(self, event: QWheelEvent):
        """Ignore wheel events to prevent accidental value changes."""
        event.ignore()
