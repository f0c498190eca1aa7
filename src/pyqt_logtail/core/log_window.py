"""
Log window state.

Pure state container for the slice of a remote log that is currently
displayed. No Qt, no IO; the sync engine is the only writer.
"""

import logging
from enum import Enum
from typing import List, Optional, Sequence, Set

from pyqt_logtail.core.log_text import has_content, join_log_lines

logger = logging.getLogger(__name__)


class DisplayMode(Enum):
    """Whether the view follows the newest lines or is held in history."""
    TAILING = "tailing"
    PINNED = "pinned"


class FetchKind(Enum):
    """Trigger class of a read; at most one read per kind is in flight."""
    REFRESH = "refresh"
    BACKFILL = "backfill"
    POLL = "poll"


class LogWindow:
    """
    Currently known fetch window of one remote log.

    Attributes:
        file_name: Remote log being displayed, or None
        page_size: Lines requested per fetch
        backfill_offset: Lines skipped from the tail to reach the oldest displayed line
        mode: DisplayMode of the view
        lines: Displayed lines, oldest first
        pending: FetchKinds with a read in flight
        epoch: Selection epoch this window belongs to
        generation: Bumped whenever content is replaced rather than extended
    """

    def __init__(self, file_name: Optional[str], page_size: int, epoch: int = 0):
        if page_size <= 0:
            raise ValueError(f"page_size must be positive, got {page_size}")
        self.file_name = file_name
        self.page_size = page_size
        self.epoch = epoch
        self.generation = 0
        self.backfill_offset = 0
        self.mode = DisplayMode.TAILING
        self.lines: List[str] = []
        self.pending: Set[FetchKind] = set()

    @property
    def text(self) -> str:
        return join_log_lines(self.lines)

    @property
    def next_backfill_skip(self) -> int:
        return self.backfill_offset + self.page_size

    def reset(self, file_name: Optional[str]) -> None:
        """Start over on ``file_name``: empty content, tailing, nothing pending."""
        self.file_name = file_name
        self.lines = []
        self.backfill_offset = 0
        self.generation += 1
        self.mode = DisplayMode.TAILING
        self.pending.clear()

    def apply_latest(self, lines: Sequence[str]) -> bool:
        """
        Replace content with the newest window.

        Returns:
            True if the resulting text differs from the previous content
        """
        changed = join_log_lines(lines) != self.text
        if changed:
            self.generation += 1
        self.lines = list(lines)
        self.backfill_offset = 0
        return changed

    def apply_backfill(self, older_lines: Sequence[str]) -> bool:
        """
        Prepend an older page and advance ``backfill_offset``.

        An empty (or whitespace-only) page means no more history is
        available yet; state is left untouched so the next scroll to the
        top retries the same offset.

        Returns:
            True if the page was applied
        """
        if not has_content(older_lines):
            return False
        self.lines = list(older_lines) + self.lines
        self.backfill_offset += self.page_size
        return True

    def clear_content(self) -> None:
        """Drop content that is no longer on screen (replaced by an error)."""
        self.lines = []
        self.backfill_offset = 0
        self.generation += 1

    def mark_transition(self, to_mode: DisplayMode) -> bool:
        """Set the display mode. Returns True if it changed."""
        if self.mode is to_mode:
            return False
        logger.debug(f"{self.file_name}: {self.mode.value} -> {to_mode.value}")
        self.mode = to_mode
        return True
