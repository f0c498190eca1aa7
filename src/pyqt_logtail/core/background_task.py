"""Background tasks for blocking reads, with results delivered on the GUI thread."""

import logging
from typing import Callable, Any, Optional, Protocol, Set, Tuple
from PyQt6.QtCore import QThread, pyqtSignal

logger = logging.getLogger(__name__)

# --- Module-level constants ---
CLEANUP_WAIT_MS = 200     # Wait time per task during shutdown


class FetchRunner(Protocol):
    """Runs a blocking callable off the GUI thread.

    ``on_success`` / ``on_error`` must be invoked on the GUI thread.
    """

    def run(
        self,
        target: Callable[[], Any],
        on_success: Callable[[Any], None],
        on_error: Callable[[Exception], None],
    ) -> None:
        ...

    def cleanup(self) -> None:
        ...


class BackgroundTask(QThread):
    """
    One background call with cancellation.

    Usage:
        task = BackgroundTask(target=source.read, args=("app", 70, 0))
        task.result_ready.connect(on_success)
        task.error_occurred.connect(on_error)  # Receives Exception, not str
        task.start()

        # Later:
        task.cancel()  # Signals won't emit after this
    """

    result_ready = pyqtSignal(object)
    error_occurred = pyqtSignal(Exception)  # Full exception, caller decides

    def __init__(
        self,
        target: Callable[..., Any],
        args: Tuple = (),
        kwargs: dict = None,
        parent=None
    ):
        super().__init__(parent)
        self._target = target
        self._args = args
        self._kwargs = kwargs or {}
        self.cancelled = False

    def run(self):
        """Execute target in background, respecting cancellation."""
        try:
            result = self._target(*self._args, **self._kwargs)
            if not self.cancelled:
                self.result_ready.emit(result)
        except Exception as e:
            if not self.cancelled:
                self.error_occurred.emit(e)  # Full exception object

    def cancel(self):
        """Cancel task; signals won't emit after this."""
        self.cancelled = True


class BackgroundTaskRunner:
    """
    Runs any number of concurrent BackgroundTasks for one owner.

    Unlike a single-slot manager it never cancels a running task when a new
    one starts: callers decide what may run concurrently. Tasks are kept
    referenced until their thread finishes.

    Usage in an engine:
        self._runner = BackgroundTaskRunner()

        self._runner.run(
            target=lambda: source.read(name, 70, 0),
            on_success=self._on_read,
            on_error=self._on_read_failed,
        )

        def shutdown(self):
            self._runner.cleanup()
    """

    def __init__(self):
        self._tasks: Set[BackgroundTask] = set()

    @property
    def active_count(self) -> int:
        return len(self._tasks)

    def run(
        self,
        target: Callable[[], Any],
        on_success: Callable[[Any], None] = None,
        on_error: Callable[[Exception], None] = None,
    ) -> BackgroundTask:
        """
        Start ``target`` on a worker thread.

        Args:
            target: Blocking callable to execute
            on_success: Callback for the result, called on the GUI thread
            on_error: Callback for the raised exception, called on the GUI thread

        Returns:
            The started BackgroundTask
        """
        task = BackgroundTask(target=target)
        if on_success:
            task.result_ready.connect(on_success)
        if on_error:
            task.error_occurred.connect(on_error)
        task.finished.connect(lambda: self._tasks.discard(task))

        self._tasks.add(task)
        task.start()
        return task

    def cleanup(self):
        """Cancel and wait for running tasks. Call on shutdown."""
        for task in list(self._tasks):
            task.cancel()
            if task.isRunning() and not task.wait(CLEANUP_WAIT_MS):
                # Still blocked on IO; stays referenced until its thread ends
                logger.debug("Background task still running after cleanup wait")
                continue
            self._tasks.discard(task)
