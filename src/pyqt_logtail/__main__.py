"""Run the viewer with ``python -m pyqt_logtail``."""

import sys

from .app import main

if __name__ == "__main__":
    sys.exit(main())
