"""Utility for writing plain log text into a QTextEdit with scroll anchoring."""

from typing import Optional, Tuple
from PyQt6.QtWidgets import QTextEdit
from PyQt6.QtGui import QTextCursor
from PyQt6.QtCore import QPoint


class TextViewWriter:
    """
    Replace, prepend and anchor plain text in a read-only QTextEdit.

    Prepending is two-phase: ``prepend`` records the first visible block and
    its pixel distance from the top of the viewport, then inserts the text;
    ``preserve_top`` scrolls so that the same block is back at the same
    distance. The anchor is the pre-existing content, not the total height.

    Usage:
        writer = TextViewWriter(self.log_view)
        writer.replace("l1\\nl2")
        writer.scroll_to_bottom()

        writer.prepend("l0")
        writer.preserve_top()
    """

    def __init__(self, text_edit: QTextEdit):
        self._text_edit = text_edit
        self._anchor: Optional[Tuple[int, float]] = None  # (block number after prepend, offset px)

    @property
    def has_pending_anchor(self) -> bool:
        return self._anchor is not None

    def text(self) -> str:
        return self._text_edit.toPlainText()

    def replace(self, text: str) -> None:
        """Replace all content."""
        self._anchor = None
        self._text_edit.setPlainText(text)

    def prepend(self, older_text: str) -> None:
        """Insert ``older_text`` as new leading lines."""
        document = self._text_edit.document()
        layout = document.documentLayout()
        scrollbar = self._text_edit.verticalScrollBar()

        first_visible = self._text_edit.cursorForPosition(QPoint(0, 0)).block()
        offset = layout.blockBoundingRect(first_visible).top() - scrollbar.value()
        first_number = first_visible.blockNumber()
        block_count = document.blockCount()

        if not document.isEmpty():
            older_text = f"{older_text}\n"
        cursor = QTextCursor(document)
        cursor.movePosition(QTextCursor.MoveOperation.Start)
        cursor.insertText(older_text)

        added_blocks = document.blockCount() - block_count
        self._anchor = (first_number + added_blocks, offset)

    def preserve_top(self) -> None:
        """Bring the block that was first visible before ``prepend`` back in place."""
        if self._anchor is None:
            return
        block_number, offset = self._anchor
        self._anchor = None

        document = self._text_edit.document()
        block = document.findBlockByNumber(block_number)
        if not block.isValid():
            return
        top = document.documentLayout().blockBoundingRect(block).top()
        self._text_edit.verticalScrollBar().setValue(int(round(top - offset)))

    def scroll_to_bottom(self) -> None:
        self._anchor = None
        scrollbar = self._text_edit.verticalScrollBar()
        scrollbar.setValue(scrollbar.maximum())
