"""Colored dot and label showing whether the log view is following new lines."""

from enum import Enum
from PyQt6.QtWidgets import QWidget, QHBoxLayout, QLabel
from PyQt6.QtGui import QFont


class LiveState(Enum):
    """Indicator states; the value is the label text."""
    IDLE = "No log selected"
    LIVE = "Live"
    PAUSED = "Paused"

    @property
    def color(self) -> str:
        return _STATE_COLORS[self]


_STATE_COLORS = {
    LiveState.IDLE: "#8a8a8a",
    LiveState.LIVE: "#3fb950",
    LiveState.PAUSED: "#d29922",
}


class LiveIndicator(QWidget):
    """
    Live/paused indicator for the log header.

    Usage:
        indicator = LiveIndicator(parent=self)
        layout.addWidget(indicator)
        indicator.set_live(True)
    """

    def __init__(self, parent=None):
        super().__init__(parent)
        self._state = LiveState.IDLE
        self._setup_ui()

    def _setup_ui(self):
        layout = QHBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(4)

        # Colored dot
        self._dot = QLabel("●")
        self._dot.setFixedWidth(12)
        layout.addWidget(self._dot)

        # Status text
        self._label = QLabel()
        self._label.setFont(QFont("Arial", 8))
        layout.addWidget(self._label)

        self.set_state(LiveState.IDLE)

    @property
    def state(self) -> LiveState:
        return self._state

    def text(self) -> str:
        return self._label.text()

    def set_state(self, state: LiveState):
        """Update visual state."""
        self._state = state
        self._dot.setStyleSheet(f"color: {state.color};")
        self._label.setText(state.value)

    def set_live(self, live: bool):
        self.set_state(LiveState.LIVE if live else LiveState.PAUSED)
