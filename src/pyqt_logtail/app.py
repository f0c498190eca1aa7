"""
Application entry point for the remote log viewer.

Usage:
    pyqt-logtail [--settings PATH] [--page-size N] [--poll-interval MS] [log_name]
    python -m pyqt_logtail
"""

import argparse
import logging
import sys
from dataclasses import replace
from typing import List, Optional

from pyqt_logtail.protocols import ViewerConfig, get_viewer_config, set_viewer_config

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def build_parser() -> argparse.ArgumentParser:
    """Build the command-line parser."""
    defaults = ViewerConfig()
    parser = argparse.ArgumentParser(
        prog="pyqt-logtail",
        description="Tail remote log files served over HTTP",
    )
    parser.add_argument("log_name", nargs="?",
                        help="Log to open at start (added to the known logs)")
    parser.add_argument("--settings", metavar="PATH",
                        help="Settings file holding host, secret and known logs")
    parser.add_argument("--page-size", type=int, default=defaults.page_size,
                        help=f"Lines loaded per page (default: {defaults.page_size})")
    parser.add_argument("--poll-interval", type=int, default=defaults.poll_interval_ms,
                        metavar="MS",
                        help=f"Live refresh interval in ms (default: {defaults.poll_interval_ms})")
    parser.add_argument("--log-level", default="INFO",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
                        help="Level of the viewer's own logging (default: INFO)")
    return parser


def config_from_args(args: argparse.Namespace) -> ViewerConfig:
    """Overlay command-line options on the registered configuration."""
    page_size = args.page_size if args.page_size > 0 else ViewerConfig.page_size
    poll_interval = args.poll_interval if args.poll_interval > 0 else ViewerConfig.poll_interval_ms
    return replace(
        get_viewer_config(),
        page_size=page_size,
        poll_interval_ms=poll_interval,
        settings_file=args.settings,
    )


def open_initial_log(window, store, log_name: str) -> bool:
    """Remember and show the log named on the command line, if it is a valid name."""
    name = log_name.strip()
    if name not in store.files and not store.add_file(name):
        logger.warning(f"Ignoring invalid log name: {log_name!r}")
        return False
    window.populate_file_list()
    window.select_file(name)
    return True


def main(argv: Optional[List[str]] = None) -> int:
    """Parse arguments, configure logging and run the Qt event loop."""
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level), format=LOG_FORMAT)

    set_viewer_config(config_from_args(args))

    # Qt imports stay here so --help works without a display
    from PyQt6.QtWidgets import QApplication
    from pyqt_logtail.core import SettingsStore
    from pyqt_logtail.widgets import RemoteLogViewerWindow

    app = QApplication.instance() or QApplication(sys.argv[:1])
    store = SettingsStore()
    window = RemoteLogViewerWindow(store=store)
    window.show()

    if args.log_name:
        open_initial_log(window, store, args.log_name)

    logger.info("Remote log viewer started")
    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
