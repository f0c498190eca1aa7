"""Tests for the viewer window and its widgets."""

import pytest
from PyQt6.QtCore import QPoint, QPointF, Qt
from PyQt6.QtGui import QWheelEvent

from pyqt_logtail.core import DisplayMode, SettingsStore


@pytest.fixture
def viewer(qapp, store, source_factory, immediate_runner, config):
    from pyqt_logtail.widgets import RemoteLogViewerWindow

    window = RemoteLogViewerWindow(
        store=store,
        config=config,
        source_factory=source_factory,
        runner=immediate_runner,
    )
    yield window
    window.close()


def test_no_scroll_spinbox_ignores_wheel(qapp):
    """Wheel events leave the value alone."""
    from pyqt_logtail.widgets import NoScrollSpinBox

    widget = NoScrollSpinBox()
    widget.setValue(5)
    event = QWheelEvent(
        QPointF(5, 5), QPointF(5, 5), QPoint(0, 0), QPoint(0, 120),
        Qt.MouseButton.NoButton, Qt.KeyboardModifier.NoModifier,
        Qt.ScrollPhase.NoScrollPhase, False,
    )

    widget.wheelEvent(event)

    assert widget.value() == 5
    assert not event.isAccepted()


def test_live_indicator_states(qapp):
    """Indicator starts idle and switches between live and paused."""
    from pyqt_logtail.widgets import LiveIndicator, LiveState

    indicator = LiveIndicator()
    assert indicator.state is LiveState.IDLE
    assert indicator.text() == "No log selected"

    indicator.set_live(True)
    assert indicator.state is LiveState.LIVE
    assert indicator.text() == "Live"

    indicator.set_live(False)
    assert indicator.state is LiveState.PAUSED


def test_window_loads_settings(viewer):
    """Sidebar reflects the stored host and log names."""
    assert viewer.host_input.text() == "logs.example.com"
    assert viewer.file_list.count() == 0
    assert viewer.jump_btn.isHidden()
    assert viewer.engine.is_polling


def test_select_file_shows_log(viewer, store, source):
    source.responses[("app", 0)] = "l1\nl2\nl3"
    store.add_file("app")
    viewer.populate_file_list()

    viewer.select_file("app")

    assert viewer.log_view.toPlainText() == "l1\nl2\nl3"
    assert viewer.current_file_label.text() == "app"
    assert viewer.live_indicator.text() == "Live"
    assert viewer.file_list.currentItem().text() == "app"


def test_error_is_styled_and_cleared(viewer, source):
    from pyqt_logtail.io import Unauthorized
    from pyqt_logtail.widgets.log_viewer import ERROR_STYLE

    source.responses[("app", 0)] = Unauthorized()
    viewer.select_file("app")

    assert viewer.log_view.toPlainText() == "Unauthorized (Check Secret)"
    assert viewer.log_view.styleSheet() == ERROR_STYLE

    source.responses[("app", 0)] = "l1"
    viewer.refresh_btn.click()

    assert viewer.log_view.toPlainText() == "l1"
    assert viewer.log_view.styleSheet() == ""


def test_empty_log_shows_placeholder(viewer):
    viewer.select_file("app")

    assert viewer.log_view.toPlainText() == "(No logs found)"


def test_add_file_selects_it(viewer, store, source):
    source.responses[("worker", 0)] = "w1"
    viewer.new_file_input.setText("  worker ")

    viewer.add_file_btn.click()

    assert store.files == ["worker"]
    assert viewer.new_file_input.text() == ""
    assert viewer.engine.file_name == "worker"
    assert viewer.log_view.toPlainText() == "w1"


def test_invalid_file_name_is_kept_in_input(viewer, store):
    viewer.new_file_input.setText("a/b")

    viewer.add_file_btn.click()

    assert store.files == []
    assert viewer.new_file_input.text() == "a/b"
    assert viewer.engine.file_name is None


def test_remove_selected_file(viewer, store):
    store.add_file("app")
    store.add_file("worker")
    viewer.populate_file_list()
    viewer.file_list.setCurrentRow(0)

    viewer.remove_file_btn.click()

    assert store.files == ["worker"]
    assert viewer.file_list.count() == 1


def test_save_credentials_refreshes(viewer, store, source, source_factory):
    viewer.select_file("app")
    viewer.host_input.setText("https://other.example.com/")
    viewer.secret_input.setText("new-secret")

    viewer.save_creds_btn.click()

    assert store.host == "https://other.example.com"
    assert viewer.host_input.text() == "https://other.example.com"
    assert source_factory.created[-1] == ("https://other.example.com", "new-secret", 10.0)


def test_cleared_credentials_ask_for_configuration(viewer, store, source):
    viewer.clear_creds_btn.click()
    viewer.select_file("app")

    assert not store.has_credentials()
    assert viewer.host_input.text() == ""
    assert viewer.log_view.toPlainText() == "Please configure Host and Secret first."
    assert source.calls == []


def test_page_size_change_is_debounced(viewer, source):
    viewer.select_file("app")
    calls = len(source.calls)

    viewer.page_size_spin.setValue(120)
    viewer.page_size_spin.setValue(125)
    assert len(source.calls) == calls

    viewer._page_size_debounce.force()

    assert viewer.engine.page_size == 125
    assert source.calls[-1] == ("app", 125, 0)


def test_scrolling_up_pins_and_loads_older_lines(qapp, viewer, source):
    source.responses[("app", 0)] = "\n".join(f"line {i}" for i in range(200))
    source.responses[("app", 50)] = "older"
    viewer.resize(900, 600)
    viewer.show()
    viewer.select_file("app")
    qapp.processEvents()

    scrollbar = viewer.log_view.verticalScrollBar()
    assert scrollbar.maximum() > 0
    scrollbar.setValue(scrollbar.maximum())
    assert viewer.engine.mode is DisplayMode.TAILING

    scrollbar.setValue(0)

    assert viewer.engine.mode is DisplayMode.PINNED
    assert viewer.live_indicator.text() == "Paused"
    assert not viewer.jump_btn.isHidden()
    assert viewer.log_view.toPlainText().startswith("older\nline 0")
    assert viewer.engine.window.backfill_offset == 50


def test_jump_to_latest_resumes_live(qapp, viewer, source):
    viewer.select_file("app")
    viewer.engine.scrolled_away_from_bottom()
    assert not viewer.jump_btn.isHidden()
    calls = len(source.calls)

    viewer.jump_btn.click()

    assert viewer.engine.mode is DisplayMode.TAILING
    assert viewer.jump_btn.isHidden()
    assert len(source.calls) == calls + 1


def test_close_stops_engine(qapp, store, source_factory, immediate_runner, config):
    from pyqt_logtail.widgets import RemoteLogViewerWindow

    window = RemoteLogViewerWindow(
        store=store,
        config=config,
        source_factory=source_factory,
        runner=immediate_runner,
    )
    closed = []
    window.window_closed.connect(lambda: closed.append(True))
    window.show()

    window.close()

    assert closed == [True]
    assert not window.engine.is_polling
    assert immediate_runner.cleaned_up


def test_default_store_from_config(qapp, tmp_path, source_factory, immediate_runner):
    from pyqt_logtail.protocols import ViewerConfig, get_viewer_config, set_viewer_config
    from pyqt_logtail.widgets import RemoteLogViewerWindow

    previous = get_viewer_config()
    set_viewer_config(ViewerConfig(settings_file=str(tmp_path / "viewer.json")))
    try:
        window = RemoteLogViewerWindow(source_factory=source_factory, runner=immediate_runner)
        assert isinstance(window.store, SettingsStore)
        assert window.store.settings_file == tmp_path / "viewer.json"
        window.close()
    finally:
        set_viewer_config(previous)
