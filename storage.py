"""Persistence backends for the application state.

A backend stores one JSON text per namespace key. Backends raise
StorageUnavailable on any failure; deciding how to degrade is up to the
caller.
"""

import logging

from PySide6.QtCore import QByteArray, QSettings

from models import SETTINGS_APP, SETTINGS_ORG, StorageUnavailable

log = logging.getLogger(__name__)


class SettingsStorage:
    """QSettings-backed storage (the platform's per-user settings store)."""

    def __init__(self, settings: QSettings | None = None):
        self._settings = settings or QSettings(SETTINGS_ORG, SETTINGS_APP)

    @classmethod
    def at_path(cls, path: str) -> "SettingsStorage":
        """Storage in an explicit INI file, e.g. for a portable install."""
        return cls(QSettings(path, QSettings.Format.IniFormat))

    def _check(self, what: str):
        status = self._settings.status()
        if status != QSettings.Status.NoError:
            raise StorageUnavailable(f"Could not {what} settings ({status.name})")

    def read(self, key: str) -> str | None:
        value = self._settings.value(key)
        self._check("read")
        if value is None:
            return None
        if isinstance(value, QByteArray):
            return bytes(value.data()).decode("utf-8")
        if isinstance(value, (bytes, bytearray)):
            return bytes(value).decode("utf-8")
        return str(value)

    def write(self, key: str, text: str):
        if not self._settings.isWritable():
            raise StorageUnavailable(f"Settings file {self._settings.fileName()} is read-only")
        # Stored as bytes so INI files keep commas and newlines intact
        self._settings.setValue(key, QByteArray(text.encode("utf-8")))
        self._settings.sync()
        self._check("write")
        log.debug("Saved %d bytes under %s", len(text), key)


class MemoryStorage:
    """Dict-backed storage. Used for tests and as a scratch backend."""

    def __init__(self, initial: dict[str, str] | None = None):
        self.data: dict[str, str] = dict(initial or {})

    def read(self, key: str) -> str | None:
        return self.data.get(key)

    def write(self, key: str, text: str):
        self.data[key] = text
