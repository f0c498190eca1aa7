"""Protocol for the view that renders a remote log window."""

from enum import Enum
from typing import Protocol


class ScrollAnchor(Enum):
    """Where the view should settle after new content was committed."""
    BOTTOM = "bottom"
    PRESERVE_TOP = "preserve_top"  # keep previously visible lines in place after a prepend


class LogPresenter(Protocol):
    """Render instructions emitted by the sync engine.

    Content changes and scroll anchoring are separate calls: the engine
    always commits text first and anchors afterwards.
    """

    def show_text(self, text: str) -> None:
        """Replace the displayed content."""
        ...

    def prepend_text(self, older_text: str) -> None:
        """Insert older lines above the displayed content."""
        ...

    def show_error(self, message: str) -> None:
        """Replace the displayed content with a status message."""
        ...

    def set_live_indicator(self, live: bool) -> None:
        """Show whether the view is following the newest lines."""
        ...

    def anchor_scroll_to(self, anchor: ScrollAnchor) -> None:
        """Position the scrollbar after the last content change."""
        ...

    def set_loading(self, loading: bool) -> None:
        """Show or hide the history loading indicator."""
        ...
