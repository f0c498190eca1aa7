"""
Log window synchronization engine.

Turns viewer events (file selection, scrolling, poll ticks, manual
refresh) into reads against a remote LogSource and folds the results
into the LogWindow, emitting render instructions to a LogPresenter.

Reads run on worker threads; every result comes back to the GUI thread
as a message tagged with the FetchTicket it was issued for. Two guards
keep results from corrupting state:

- ``LogWindow.pending``: at most one read per FetchKind is in flight, a
  second trigger of the same kind is dropped.
- Selection epoch: every reset starts a new epoch, and a result whose
  ticket belongs to an older epoch (or file) is discarded untouched.
"""

import logging
import time
from dataclasses import dataclass
from functools import partial
from typing import Callable, List, Optional, Tuple

from PyQt6.QtCore import QObject, QTimer

from pyqt_logtail.core.background_task import BackgroundTaskRunner, FetchRunner
from pyqt_logtail.core.log_text import (
    LOADING_TEXT, display_text, join_log_lines, split_log_text,
)
from pyqt_logtail.core.log_window import DisplayMode, FetchKind, LogWindow
from pyqt_logtail.core.settings_store import SettingsStore
from pyqt_logtail.io import HttpLogSource, LogReadError, LogSource, MissingCredentials
from pyqt_logtail.protocols import LogPresenter, ScrollAnchor, ViewerConfig, get_viewer_config

logger = logging.getLogger(__name__)

# (host, secret, timeout_s) -> LogSource
SourceFactory = Callable[[str, str, float], LogSource]


@dataclass(frozen=True)
class FetchTicket:
    """Everything a read was issued against, checked again on completion."""
    kind: FetchKind
    epoch: int
    file_name: str
    skip: int
    page_size: int
    generation: int


def timed_read(source: LogSource, ticket: FetchTicket, min_latency_ms: int = 0) -> str:
    """Run the read for ``ticket``, taking at least ``min_latency_ms``."""
    started = time.monotonic()
    try:
        return source.read(ticket.file_name, ticket.page_size, ticket.skip)
    finally:
        remaining = min_latency_ms / 1000.0 - (time.monotonic() - started)
        if remaining > 0:
            time.sleep(remaining)


class SyncEngine(QObject):
    """
    Orchestrates polling, backfill and resets for one viewer.

    Usage:
        engine = SyncEngine(presenter=window, store=SettingsStore())
        engine.start()                 # poll timer
        engine.select_file("app")      # reset + refresh
        engine.scroll_reached_top()    # load an older page
        ...
        engine.shutdown()

    All public methods must be called on the GUI thread.
    """

    def __init__(
        self,
        presenter: LogPresenter,
        store: SettingsStore,
        source_factory: SourceFactory = HttpLogSource,
        runner: Optional[FetchRunner] = None,
        config: Optional[ViewerConfig] = None,
        parent: Optional[QObject] = None,
    ):
        super().__init__(parent)
        self._config = config or get_viewer_config()
        self._presenter = presenter
        self._store = store
        self._source_factory = source_factory
        self._runner = runner or BackgroundTaskRunner()

        # State
        self._page_size = self._config.page_size
        self._epoch = 0
        self._window: Optional[LogWindow] = None
        self._display_in_sync = False  # False while a placeholder or error is shown
        self._source: Optional[LogSource] = None
        self._source_key: Optional[Tuple[str, str]] = None
        self._retired_sources: List[LogSource] = []  # may still serve running reads

        self._poll_timer = QTimer(self)
        self._poll_timer.setInterval(self._config.poll_interval_ms)
        self._poll_timer.timeout.connect(self.poll_tick)

    # --- State accessors ---

    @property
    def window(self) -> Optional[LogWindow]:
        return self._window

    @property
    def file_name(self) -> Optional[str]:
        return self._window.file_name if self._window else None

    @property
    def mode(self) -> Optional[DisplayMode]:
        return self._window.mode if self._window else None

    @property
    def epoch(self) -> int:
        return self._epoch

    @property
    def page_size(self) -> int:
        return self._page_size

    @property
    def is_polling(self) -> bool:
        return self._poll_timer.isActive()

    # --- Lifecycle ---

    def start(self) -> None:
        """Start the recurring poll timer."""
        self._poll_timer.start()
        logger.debug(f"Polling every {self._config.poll_interval_ms} ms")

    def stop(self) -> None:
        self._poll_timer.stop()

    def shutdown(self) -> None:
        """Stop polling, wait briefly for running reads and close sources."""
        self.stop()
        self._runner.cleanup()
        self._close_sources()

    def _close_sources(self) -> None:
        sources = self._retired_sources + ([self._source] if self._source is not None else [])
        for source in sources:
            source.close()
        logger.debug(f"Closed {len(sources)} log source(s)")
        self._retired_sources = []
        self._source = None
        self._source_key = None

    # --- Triggers ---

    def select_file(self, file_name: str) -> None:
        """Show ``file_name`` from its newest lines. Re-selecting resets too."""
        self._reset(file_name)

    def refresh(self) -> None:
        """Full reset of the current file (manual refresh, new credentials)."""
        if self.file_name is None:
            return
        self._reset(self.file_name)

    def set_page_size(self, page_size: int) -> None:
        """Change lines per fetch; resets the current file when it changes."""
        if page_size <= 0:
            page_size = self._config.page_size
        if page_size == self._page_size:
            return
        logger.info(f"Page size {self._page_size} -> {page_size}")
        self._page_size = page_size
        if self.file_name is not None:
            self._reset(self.file_name)

    def scroll_reached_top(self) -> None:
        """Load the page of lines preceding the oldest displayed line."""
        window = self._window
        if window is None or window.file_name is None or not window.lines:
            return
        if FetchKind.REFRESH in window.pending:
            logger.debug("Backfill skipped: refresh in flight")
            return
        ticket = self._issue(
            FetchKind.BACKFILL,
            window.next_backfill_skip,
            min_latency_ms=self._config.backfill_min_latency_ms,
        )
        if ticket is not None:
            self._presenter.set_loading(True)

    def scroll_reached_bottom(self) -> None:
        """Resume tailing; refresh at once when coming back from history."""
        window = self._window
        if window is None or window.file_name is None:
            return
        if window.mark_transition(DisplayMode.TAILING):
            self._update_live_indicator()
            self._issue(FetchKind.REFRESH, 0)

    def scrolled_away_from_bottom(self) -> None:
        """Pin the view: polling stops until the bottom is reached again."""
        window = self._window
        if window is None or window.file_name is None:
            return
        if window.mark_transition(DisplayMode.PINNED):
            self._update_live_indicator()

    def jump_to_latest(self) -> None:
        """Scroll to the bottom and refresh without waiting for the next tick."""
        window = self._window
        if window is None or window.file_name is None:
            return
        if window.mark_transition(DisplayMode.TAILING):
            self._update_live_indicator()
        self._presenter.anchor_scroll_to(ScrollAnchor.BOTTOM)
        self._issue(FetchKind.REFRESH, 0)

    def poll_tick(self) -> None:
        """Timer callback; reads the newest window only while tailing."""
        window = self._window
        if window is None or window.file_name is None:
            return
        if window.mode is not DisplayMode.TAILING:
            return
        if window.pending & {FetchKind.POLL, FetchKind.REFRESH}:
            logger.debug("Poll skipped: newest window already being read")
            return
        self._issue(FetchKind.POLL, 0)

    # --- Issuing reads ---

    def _reset(self, file_name: str) -> None:
        self._epoch += 1
        if self._window is None or self._window.file_name != file_name:
            self._window = LogWindow(file_name, self._page_size, self._epoch)
        else:
            self._window.reset(file_name)
            self._window.page_size = self._page_size
            self._window.epoch = self._epoch
        logger.info(f"Showing {file_name} (epoch {self._epoch}, {self._page_size} lines per page)")

        self._presenter.set_loading(False)
        self._update_live_indicator()
        self._show_placeholder(LOADING_TEXT)
        self._issue(FetchKind.REFRESH, 0)

    def _open_source(self) -> LogSource:
        host, secret = self._store.host, self._store.secret
        if not host.strip() or not secret.strip():
            raise MissingCredentials()
        key = (host, secret)
        if self._source is None or self._source_key != key:
            if self._source is not None:
                self._retired_sources.append(self._source)
            self._source = self._source_factory(host, secret, self._config.request_timeout_s)
            self._source_key = key
        return self._source

    def _issue(self, kind: FetchKind, skip: int, min_latency_ms: int = 0) -> Optional[FetchTicket]:
        """Start a read of ``kind`` unless one is already in flight."""
        window = self._window
        if kind in window.pending:
            logger.debug(f"Suppressed {kind.value} read: one already in flight")
            return None

        try:
            source = self._open_source()
        except MissingCredentials as e:
            if kind is FetchKind.REFRESH:
                window.clear_content()
                self._show_error(str(e))
            else:
                logger.debug(f"{kind.value} read skipped: {e}")
            return None
        except ValueError as e:
            logger.warning(f"Cannot create log source: {e}")
            if kind is FetchKind.REFRESH:
                window.clear_content()
                self._show_error(f"Error: {e}")
            return None

        ticket = FetchTicket(
            kind=kind,
            epoch=self._epoch,
            file_name=window.file_name,
            skip=skip,
            page_size=window.page_size,
            generation=window.generation,
        )
        window.pending.add(kind)
        logger.debug(f"Reading {ticket.file_name} n={ticket.page_size} skip={skip} ({kind.value})")
        self._runner.run(
            target=partial(timed_read, source, ticket, min_latency_ms),
            on_success=partial(self._on_read_done, ticket),
            on_error=partial(self._on_read_failed, ticket),
        )
        return ticket

    # --- Completions ---

    def _window_for(self, ticket: FetchTicket) -> Optional[LogWindow]:
        """Return the window a result may be applied to, or None if stale."""
        window = self._window
        if window is None or ticket.epoch != self._epoch or ticket.file_name != window.file_name:
            logger.debug(
                f"Discarding stale {ticket.kind.value} result for {ticket.file_name} "
                f"(epoch {ticket.epoch}, current {self._epoch})"
            )
            return None
        return window

    def _on_read_done(self, ticket: FetchTicket, text: str) -> None:
        window = self._window_for(ticket)
        if window is None:
            return
        window.pending.discard(ticket.kind)

        lines = split_log_text(text)
        if ticket.kind is FetchKind.BACKFILL:
            self._apply_backfill(window, ticket, lines)
        else:
            self._apply_latest(window, ticket, lines)

    def _apply_latest(self, window: LogWindow, ticket: FetchTicket, lines) -> None:
        if ticket.kind is FetchKind.POLL and window.mode is DisplayMode.PINNED:
            logger.debug("Discarding poll result: view was pinned meanwhile")
            return

        changed = window.apply_latest(lines)
        if not changed and self._display_in_sync:
            return

        self._presenter.show_text(display_text(window.lines))
        self._display_in_sync = True
        if window.mode is DisplayMode.TAILING:
            self._presenter.anchor_scroll_to(ScrollAnchor.BOTTOM)

    def _apply_backfill(self, window: LogWindow, ticket: FetchTicket, lines) -> None:
        self._presenter.set_loading(False)
        if ticket.generation != window.generation or ticket.skip != window.next_backfill_skip:
            logger.debug(f"Discarding backfill at skip={ticket.skip}: content replaced meanwhile")
            return

        was_empty = not window.lines
        if not window.apply_backfill(lines):
            logger.debug(f"No older lines before skip={ticket.skip} yet")
            return

        # Commit first, anchor second
        if was_empty or not self._display_in_sync:
            self._presenter.show_text(window.text)
            self._display_in_sync = True
        else:
            self._presenter.prepend_text(join_log_lines(lines))
        self._presenter.anchor_scroll_to(ScrollAnchor.PRESERVE_TOP)

    def _on_read_failed(self, ticket: FetchTicket, error: Exception) -> None:
        window = self._window_for(ticket)
        if window is None:
            return
        window.pending.discard(ticket.kind)

        if ticket.kind is FetchKind.REFRESH:
            logger.warning(f"Refreshing {ticket.file_name} failed: {error}")
            window.clear_content()
            self._show_error(describe_error(error))
        elif ticket.kind is FetchKind.BACKFILL:
            logger.warning(f"Loading older lines of {ticket.file_name} failed: {error}")
            self._presenter.set_loading(False)
        else:
            logger.warning(f"Polling {ticket.file_name} failed: {error}")

    # --- Presenter helpers ---

    def _show_placeholder(self, text: str) -> None:
        self._presenter.show_text(text)
        self._display_in_sync = False

    def _show_error(self, message: str) -> None:
        self._presenter.show_error(message)
        self._display_in_sync = False

    def _update_live_indicator(self) -> None:
        window = self._window
        live = window is not None and window.file_name is not None and window.mode is DisplayMode.TAILING
        self._presenter.set_live_indicator(live)


def describe_error(error: Exception) -> str:
    """Short message for an error shown in place of log content."""
    if isinstance(error, LogReadError):
        return str(error)
    return f"Error: {error}"
