"""
Log text helpers.

Log content is opaque: these helpers only split and join on newlines and
never look inside a line.
"""

from typing import List, Sequence

# Placeholders shown instead of log content
LOADING_TEXT = "Loading..."
NO_LOGS_TEXT = "(No logs found)"


def split_log_text(text: str) -> List[str]:
    """Split a response body into lines, dropping the final line terminator."""
    if not text:
        return []
    return text.splitlines()


def join_log_lines(lines: Sequence[str]) -> str:
    return "\n".join(lines)


def has_content(lines: Sequence[str]) -> bool:
    """True when at least one line holds non-whitespace text."""
    return any(line.strip() for line in lines)


def display_text(lines: Sequence[str]) -> str:
    """Text to render for a window, with a placeholder for an empty one."""
    return join_log_lines(lines) if lines else NO_LOGS_TEXT
