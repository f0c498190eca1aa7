"""
Viewer Settings Store

Persists the server host, the read secret and the list of known log names
across application runs in a small JSON file.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

logger = logging.getLogger(__name__)

# --- Keys ---
HOST_KEY = "host"
SECRET_KEY = "secret"
FILES_KEY = "files"


def default_settings_file() -> Path:
    """Return configured settings file or default."""
    from pyqt_logtail.protocols import get_viewer_config

    config = get_viewer_config()
    if config.settings_file:
        return Path(config.settings_file)
    return Path.home() / ".config" / "pyqt_logtail" / "settings.json"


class SettingsStore:
    """
    JSON-backed key-value store for viewer settings.

    Load and save failures are logged and never raised: a broken settings
    file must not keep the viewer from starting.
    """

    def __init__(self, settings_file: Optional[Path] = None):
        """
        Initialize settings store.

        Args:
            settings_file: Optional custom settings file location
        """
        self.settings_file = Path(settings_file) if settings_file else default_settings_file()
        self._data: Dict[str, Any] = {}
        self._load()
        logger.debug(f"SettingsStore initialized with settings file: {self.settings_file}")

    def _load(self) -> None:
        """Load settings from disk."""
        try:
            if self.settings_file.exists():
                with open(self.settings_file, 'r', encoding='utf-8') as f:
                    data = json.load(f)
                if isinstance(data, dict):
                    self._data = data
                else:
                    logger.warning(f"Ignoring settings file with unexpected content: {self.settings_file}")
            else:
                logger.debug("No existing settings file found, starting fresh")
        except (json.JSONDecodeError, OSError) as e:
            logger.warning(f"Failed to load settings: {e}")
            self._data = {}

    def _save(self) -> None:
        """Save settings to disk."""
        try:
            self.settings_file.parent.mkdir(parents=True, exist_ok=True)
            with open(self.settings_file, 'w', encoding='utf-8') as f:
                json.dump(self._data, f, indent=2)
        except OSError as e:
            logger.warning(f"Failed to save settings: {e}")

    @property
    def host(self) -> str:
        return str(self._data.get(HOST_KEY) or "")

    @property
    def secret(self) -> str:
        return str(self._data.get(SECRET_KEY) or "")

    @property
    def files(self) -> List[str]:
        files = self._data.get(FILES_KEY) or []
        return [str(name) for name in files]

    def has_credentials(self) -> bool:
        return bool(self.host.strip()) and bool(self.secret.strip())

    def save_credentials(self, host: str, secret: str) -> None:
        """Store host (without trailing slash) and secret."""
        self._data[HOST_KEY] = host.strip().rstrip("/")
        self._data[SECRET_KEY] = secret
        self._save()
        logger.info(f"Saved credentials for host {self.host!r}")

    def clear_credentials(self) -> None:
        self._data.pop(HOST_KEY, None)
        self._data.pop(SECRET_KEY, None)
        self._save()
        logger.info("Cleared credentials")

    def add_file(self, name: str) -> bool:
        """
        Remember a log name.

        Args:
            name: Log name as typed by the user

        Returns:
            True if the name was added, False if empty, invalid or known
        """
        name = name.strip()
        if not name or "/" in name or "\\" in name:
            logger.debug(f"Rejected log name: {name!r}")
            return False
        files = self.files
        if name in files:
            return False
        files.append(name)
        self._data[FILES_KEY] = files
        self._save()
        logger.debug(f"Added log name: {name}")
        return True

    def remove_file(self, name: str) -> bool:
        files = self.files
        if name not in files:
            return False
        files.remove(name)
        self._data[FILES_KEY] = files
        self._save()
        logger.debug(f"Removed log name: {name}")
        return True
