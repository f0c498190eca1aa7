"""Protocols for remote log sources."""

from typing import Protocol


class LogSource(Protocol):
    """Paginated read access to a server-resident log file.

    ``read`` returns the ``n`` most recent lines left after skipping
    ``skip`` lines from the tail, joined by newlines. A log that does not
    exist yet reads as an empty string.
    """

    def read(self, file_name: str, n: int, skip: int) -> str:
        ...

    def close(self) -> None:
        """Release connections; no reads are issued afterwards."""
        ...
