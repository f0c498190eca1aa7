"""
PyQt6 Remote Log Viewer Window

Displays a remote log file with live tailing, infinite scroll into older
lines, and a sidebar for server credentials and known log names. All
synchronization decisions are made by SyncEngine; this window renders its
instructions and reports scrolling back to it.
"""

import logging
from contextlib import contextmanager
from typing import Optional

from PyQt6.QtWidgets import (
    QMainWindow, QWidget, QVBoxLayout, QHBoxLayout, QFormLayout, QGroupBox,
    QLineEdit, QListWidget, QListWidgetItem, QPushButton, QLabel, QTextEdit,
    QSplitter,
)
from PyQt6.QtCore import Qt, pyqtSignal
from PyQt6.QtGui import QFont

from pyqt_logtail.core import DebounceTimer, SettingsStore, SyncEngine, TextViewWriter
from pyqt_logtail.core.background_task import FetchRunner
from pyqt_logtail.core.sync_engine import SourceFactory
from pyqt_logtail.io import HttpLogSource
from pyqt_logtail.protocols import ScrollAnchor, ViewerConfig, get_viewer_config
from pyqt_logtail.widgets.live_indicator import LiveIndicator
from pyqt_logtail.widgets.no_scroll_spinbox import NoScrollSpinBox

logger = logging.getLogger(__name__)

# --- Module-level constants ---
SIDEBAR_WIDTH = 260
MAX_PAGE_SIZE = 10000
STATUS_MESSAGE_MS = 3000
ERROR_STYLE = "color: #f85149;"


class RemoteLogViewerWindow(QMainWindow):
    """Main window: credentials and log list on the left, log content on the right."""

    window_closed = pyqtSignal()

    def __init__(
        self,
        store: Optional[SettingsStore] = None,
        config: Optional[ViewerConfig] = None,
        source_factory: SourceFactory = HttpLogSource,
        runner: Optional[FetchRunner] = None,
        parent=None,
    ):
        super().__init__(parent)
        self.config = config or get_viewer_config()
        self.store = store or SettingsStore()

        # Scroll events caused by our own rendering are not user scrolling
        self._suppress_scroll_events = False

        # Components
        self.host_input: QLineEdit = None
        self.secret_input: QLineEdit = None
        self.file_list: QListWidget = None
        self.new_file_input: QLineEdit = None
        self.current_file_label: QLabel = None
        self.live_indicator: LiveIndicator = None
        self.page_size_spin: NoScrollSpinBox = None
        self.log_view: QTextEdit = None
        self.loading_label: QLabel = None
        self.jump_btn: QPushButton = None

        self.setup_ui()

        self.writer = TextViewWriter(self.log_view)
        self.engine = SyncEngine(
            presenter=self,
            store=self.store,
            source_factory=source_factory,
            runner=runner,
            config=self.config,
            parent=self,
        )
        self._page_size_debounce = DebounceTimer(
            delay_ms=self.config.page_size_debounce_ms,
            handler=self._apply_page_size,
        )

        self.setup_connections()
        self.populate_file_list()
        self.engine.start()

    def setup_ui(self) -> None:
        """Setup complete UI layout."""
        self.setWindowTitle("Remote Log Viewer")
        self.setMinimumSize(900, 600)

        splitter = QSplitter(Qt.Orientation.Horizontal)
        self.setCentralWidget(splitter)
        splitter.addWidget(self._build_sidebar())
        splitter.addWidget(self._build_log_panel())
        splitter.setStretchFactor(1, 1)

        logger.debug("RemoteLogViewerWindow UI setup complete")

    def _build_sidebar(self) -> QWidget:
        sidebar = QWidget()
        sidebar.setMinimumWidth(SIDEBAR_WIDTH)
        layout = QVBoxLayout(sidebar)

        # Server credentials
        server_group = QGroupBox("Server")
        server_layout = QFormLayout(server_group)
        self.host_input = QLineEdit(self.store.host)
        self.host_input.setPlaceholderText("https://logs.example.com")
        self.secret_input = QLineEdit(self.store.secret)
        self.secret_input.setEchoMode(QLineEdit.EchoMode.Password)
        self.secret_input.setPlaceholderText("Read secret")
        server_layout.addRow("Host", self.host_input)
        server_layout.addRow("Secret", self.secret_input)

        creds_buttons = QHBoxLayout()
        self.save_creds_btn = QPushButton("Save")
        self.clear_creds_btn = QPushButton("Clear")
        creds_buttons.addWidget(self.save_creds_btn)
        creds_buttons.addWidget(self.clear_creds_btn)
        server_layout.addRow(creds_buttons)
        layout.addWidget(server_group)

        # Known log names
        files_group = QGroupBox("Logs")
        files_layout = QVBoxLayout(files_group)
        self.file_list = QListWidget()
        files_layout.addWidget(self.file_list)

        add_layout = QHBoxLayout()
        self.new_file_input = QLineEdit()
        self.new_file_input.setPlaceholderText("Log name")
        self.add_file_btn = QPushButton("Add")
        add_layout.addWidget(self.new_file_input)
        add_layout.addWidget(self.add_file_btn)
        files_layout.addLayout(add_layout)

        self.remove_file_btn = QPushButton("Remove")
        files_layout.addWidget(self.remove_file_btn)
        layout.addWidget(files_group, 1)

        return sidebar

    def _build_log_panel(self) -> QWidget:
        panel = QWidget()
        layout = QVBoxLayout(panel)

        # Header: current log, live state, page size, refresh
        header = QHBoxLayout()
        self.current_file_label = QLabel("Select a log")
        header_font = QFont()
        header_font.setBold(True)
        self.current_file_label.setFont(header_font)
        self.live_indicator = LiveIndicator()

        self.page_size_spin = NoScrollSpinBox()
        self.page_size_spin.setRange(1, MAX_PAGE_SIZE)
        self.page_size_spin.setValue(self.config.page_size)
        self.page_size_spin.setToolTip("Lines loaded per page")
        self.refresh_btn = QPushButton("Refresh")

        header.addWidget(self.current_file_label)
        header.addWidget(self.live_indicator)
        header.addStretch()
        header.addWidget(QLabel("Lines"))
        header.addWidget(self.page_size_spin)
        header.addWidget(self.refresh_btn)
        layout.addLayout(header)

        self.loading_label = QLabel("Loading older lines...")
        self.loading_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.loading_label.setVisible(False)
        layout.addWidget(self.loading_label)

        # Log display area
        self.log_view = QTextEdit()
        self.log_view.setReadOnly(True)
        self.log_view.setAcceptRichText(False)
        self.log_view.setLineWrapMode(QTextEdit.LineWrapMode.NoWrap)
        self.log_view.setFont(QFont("Consolas", 10))  # Monospace font for logs
        layout.addWidget(self.log_view, 1)

        self.jump_btn = QPushButton("Jump to latest")
        self.jump_btn.setVisible(False)
        layout.addWidget(self.jump_btn, 0, Qt.AlignmentFlag.AlignRight)

        return panel

    def setup_connections(self) -> None:
        """Setup signal/slot connections."""
        self.save_creds_btn.clicked.connect(self.save_credentials)
        self.clear_creds_btn.clicked.connect(self.clear_credentials)

        self.add_file_btn.clicked.connect(self.add_file)
        self.new_file_input.returnPressed.connect(self.add_file)
        self.remove_file_btn.clicked.connect(self.remove_selected_file)
        # itemClicked (not currentItemChanged) so re-selecting the current log resets it
        self.file_list.itemClicked.connect(self._on_file_clicked)

        self.refresh_btn.clicked.connect(self.engine.refresh)
        self.page_size_spin.valueChanged.connect(self._page_size_debounce.trigger)
        self.jump_btn.clicked.connect(self.engine.jump_to_latest)
        self.log_view.verticalScrollBar().valueChanged.connect(self._on_scroll)

        logger.debug("RemoteLogViewerWindow connections setup complete")

    # --- Sidebar actions ---

    def save_credentials(self) -> None:
        self.store.save_credentials(self.host_input.text(), self.secret_input.text())
        self.host_input.setText(self.store.host)
        self.statusBar().showMessage("Credentials saved", STATUS_MESSAGE_MS)
        self.engine.refresh()

    def clear_credentials(self) -> None:
        self.store.clear_credentials()
        self.host_input.clear()
        self.secret_input.clear()
        self.statusBar().showMessage("Credentials cleared", STATUS_MESSAGE_MS)

    def populate_file_list(self) -> None:
        """Rebuild the log list from the store, keeping the current log highlighted."""
        self.file_list.clear()
        for name in self.store.files:
            item = QListWidgetItem(name)
            self.file_list.addItem(item)
            if name == self.engine.file_name:
                self.file_list.setCurrentItem(item)

    def add_file(self) -> None:
        name = self.new_file_input.text().strip()
        if not self.store.add_file(name):
            return
        self.new_file_input.clear()
        self.populate_file_list()
        self.select_file(name)

    def remove_selected_file(self) -> None:
        item = self.file_list.currentItem()
        if item is None:
            return
        self.store.remove_file(item.text())
        self.populate_file_list()

    def select_file(self, name: str) -> None:
        """Show log ``name`` from its newest lines."""
        self.current_file_label.setText(name)
        self.engine.select_file(name)
        self.populate_file_list()

    def _on_file_clicked(self, item: QListWidgetItem) -> None:
        self.select_file(item.text())

    def _apply_page_size(self) -> None:
        self.engine.set_page_size(self.page_size_spin.value())

    # --- Scroll tracking ---

    @contextmanager
    def _rendering(self):
        """Ignore scrollbar movement caused by content changes."""
        previous = self._suppress_scroll_events
        self._suppress_scroll_events = True
        try:
            yield
        finally:
            self._suppress_scroll_events = previous

    def _on_scroll(self, value: int) -> None:
        if self._suppress_scroll_events or self.engine.file_name is None:
            return
        scrollbar = self.log_view.verticalScrollBar()

        if scrollbar.maximum() - value <= self.config.bottom_tolerance_px:
            self.engine.scroll_reached_bottom()
        else:
            self.engine.scrolled_away_from_bottom()

        if value == scrollbar.minimum() and scrollbar.maximum() > scrollbar.minimum():
            self.engine.scroll_reached_top()

    # --- LogPresenter ---

    def show_text(self, text: str) -> None:
        with self._rendering():
            self.log_view.setStyleSheet("")
            self.writer.replace(text)

    def prepend_text(self, older_text: str) -> None:
        with self._rendering():
            self.writer.prepend(older_text)

    def show_error(self, message: str) -> None:
        with self._rendering():
            self.log_view.setStyleSheet(ERROR_STYLE)
            self.writer.replace(message)

    def set_live_indicator(self, live: bool) -> None:
        self.live_indicator.set_live(live)
        self.jump_btn.setVisible(not live)

    def anchor_scroll_to(self, anchor: ScrollAnchor) -> None:
        with self._rendering():
            if anchor is ScrollAnchor.BOTTOM:
                self.writer.scroll_to_bottom()
            else:
                self.writer.preserve_top()

    def set_loading(self, loading: bool) -> None:
        self.loading_label.setVisible(loading)

    # --- Window lifecycle ---

    def closeEvent(self, event):
        """Stop polling and wait for running reads."""
        self._page_size_debounce.cancel()
        self.engine.shutdown()
        self.window_closed.emit()
        super().closeEvent(event)

