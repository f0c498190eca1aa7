"""Tests for the command line and startup helpers."""

import pytest

from pyqt_logtail.app import build_parser, config_from_args, open_initial_log
from pyqt_logtail.core import SettingsStore
from pyqt_logtail.protocols import ViewerConfig


def test_defaults():
    args = build_parser().parse_args([])
    config = config_from_args(args)

    assert args.log_name is None
    assert args.log_level == "INFO"
    assert config.page_size == 70
    assert config.poll_interval_ms == 3000
    assert config.settings_file is None


def test_options_override_config():
    args = build_parser().parse_args(
        ["--page-size", "200", "--poll-interval", "1000", "--settings", "/tmp/s.json", "app"]
    )
    config = config_from_args(args)

    assert args.log_name == "app"
    assert config.page_size == 200
    assert config.poll_interval_ms == 1000
    assert config.settings_file == "/tmp/s.json"
    assert config.backfill_min_latency_ms == ViewerConfig().backfill_min_latency_ms


def test_non_positive_values_fall_back_to_defaults():
    args = build_parser().parse_args(["--page-size", "0", "--poll-interval", "-5"])
    config = config_from_args(args)

    assert config.page_size == 70
    assert config.poll_interval_ms == 3000


def test_invalid_log_level_is_rejected():
    with pytest.raises(SystemExit):
        build_parser().parse_args(["--log-level", "TRACE"])


class RecordingWindow:
    def __init__(self):
        self.selected = []
        self.repopulated = 0

    def populate_file_list(self):
        self.repopulated += 1

    def select_file(self, name):
        self.selected.append(name)


def test_initial_log_is_added_and_selected(tmp_path):
    store = SettingsStore(tmp_path / "settings.json")
    window = RecordingWindow()

    assert open_initial_log(window, store, " app ") is True

    assert store.files == ["app"]
    assert window.selected == ["app"]


def test_known_initial_log_is_selected(tmp_path):
    store = SettingsStore(tmp_path / "settings.json")
    store.add_file("app")
    window = RecordingWindow()

    assert open_initial_log(window, store, "app") is True

    assert store.files == ["app"]
    assert window.selected == ["app"]


def test_invalid_initial_log_is_not_selected(tmp_path, caplog):
    store = SettingsStore(tmp_path / "settings.json")
    window = RecordingWindow()

    assert open_initial_log(window, store, "a/b") is False

    assert store.files == []
    assert window.selected == []
    assert "Ignoring invalid log name" in caplog.text
