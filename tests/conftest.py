"""pytest configuration and fixtures for pyqt-logtail tests."""

import os

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import pytest
from PyQt6.QtWidgets import QApplication

from pyqt_logtail.core import SettingsStore
from pyqt_logtail.protocols import ViewerConfig


@pytest.fixture(scope="session")
def qapp():
    """Create QApplication instance for tests."""
    app = QApplication.instance() or QApplication([])
    yield app
    # Don't quit - may cause issues with other tests


class FakeLogSource:
    """LogSource answering from a table keyed by (file_name, skip)."""

    def __init__(self):
        self.responses = {}
        self.calls = []
        self.closed = False

    def read(self, file_name, n, skip):
        self.calls.append((file_name, n, skip))
        response = self.responses.get((file_name, skip), "")
        if isinstance(response, Exception):
            raise response
        return response

    def close(self):
        self.closed = True


class DeferredRunner:
    """FetchRunner that holds jobs until the test completes them, in any order."""

    def __init__(self):
        self.jobs = []
        self.cleaned_up = False

    def run(self, target, on_success=None, on_error=None):
        self.jobs.append((target, on_success, on_error))

    def complete(self, index=0):
        target, on_success, on_error = self.jobs.pop(index)
        try:
            result = target()
        except Exception as e:
            on_error(e)
        else:
            on_success(result)

    def complete_all(self):
        while self.jobs:
            self.complete()

    def cleanup(self):
        self.cleaned_up = True


class ImmediateRunner(DeferredRunner):
    """FetchRunner completing every job as soon as it is started."""

    def run(self, target, on_success=None, on_error=None):
        super().run(target, on_success, on_error)
        self.complete(len(self.jobs) - 1)


class RecordingPresenter:
    """LogPresenter that keeps the rendered text and every instruction."""

    def __init__(self):
        self.text = ""
        self.error = None
        self.live = None
        self.loading = False
        self.calls = []

    def show_text(self, text):
        self.calls.append(("show_text", text))
        self.text = text
        self.error = None

    def prepend_text(self, older_text):
        self.calls.append(("prepend_text", older_text))
        self.text = f"{older_text}\n{self.text}"

    def show_error(self, message):
        self.calls.append(("show_error", message))
        self.text = message
        self.error = message

    def set_live_indicator(self, live):
        self.calls.append(("set_live_indicator", live))
        self.live = live

    def anchor_scroll_to(self, anchor):
        self.calls.append(("anchor_scroll_to", anchor))

    def set_loading(self, loading):
        self.calls.append(("set_loading", loading))
        self.loading = loading

    def names(self):
        return [name for name, _ in self.calls]


@pytest.fixture
def source():
    return FakeLogSource()


@pytest.fixture
def runner():
    return DeferredRunner()


@pytest.fixture
def presenter():
    return RecordingPresenter()


@pytest.fixture
def store(tmp_path):
    store = SettingsStore(tmp_path / "settings.json")
    store.save_credentials("logs.example.com", "s3cret")
    return store


@pytest.fixture
def config():
    return ViewerConfig(page_size=50, backfill_min_latency_ms=0)


@pytest.fixture
def source_factory(source):
    created = []

    def factory(host, secret, timeout_s):
        created.append((host, secret, timeout_s))
        return source

    factory.created = created
    return factory


@pytest.fixture
def immediate_runner():
    return ImmediateRunner()


@pytest.fixture
def engine(qapp, presenter, store, source_factory, runner, config):
    from pyqt_logtail.core import SyncEngine

    engine = SyncEngine(
        presenter=presenter,
        store=store,
        source_factory=source_factory,
        runner=runner,
        config=config,
    )
    yield engine
    engine.shutdown()
