from typing import Final

from logly import logger
from PySide6.QtCore import QSettings

from update_checker.core.config import Configuration

ORGANIZATION_NAME: Final[str] = "System Tools"
APPLICATION_NAME: Final[str] = "Update Checker"

KEY_AUTO_CHECK_ENABLED: Final[str] = "autoCheckEnabled"
KEY_AUTO_CHECK_INTERVAL: Final[str] = "autoCheckInterval"
KEY_SHOW_UPDATES: Final[str] = "showUpdatesNotification"
KEY_SHOW_NO_UPDATES: Final[str] = "showNoUpdatesNotification"


def _to_bool(value: object, default: bool) -> bool:
    # QSettings returns strings for values read back from INI files.
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in ("true", "1", "yes"):
            return True
        if lowered in ("false", "0", "no"):
            return False
        return default
    if isinstance(value, int):
        return value != 0
    return default


def _to_int(value: object, default: int) -> int:
    try:
        return int(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return default


class SettingsStore:
    """Persists `Configuration` as a flat key-value record in `QSettings`."""

    def __init__(self, settings: QSettings | None = None) -> None:
        """Initializes the store.

        Args:
            settings: Backend to use. Defaults to the per-user native settings
                for this application.
        """
        if settings is None:
            settings = QSettings(ORGANIZATION_NAME, APPLICATION_NAME)
        self._settings = settings

    def load(self) -> Configuration:
        """Reads the stored configuration, falling back to defaults per key."""
        defaults = Configuration()
        s = self._settings
        config = Configuration(
            auto_check_enabled=_to_bool(
                s.value(KEY_AUTO_CHECK_ENABLED, defaults.auto_check_enabled),
                defaults.auto_check_enabled,
            ),
            auto_check_interval_minutes=_to_int(
                s.value(KEY_AUTO_CHECK_INTERVAL, defaults.auto_check_interval_minutes),
                defaults.auto_check_interval_minutes,
            ),
            notify_on_updates=_to_bool(
                s.value(KEY_SHOW_UPDATES, defaults.notify_on_updates),
                defaults.notify_on_updates,
            ),
            notify_on_no_updates=_to_bool(
                s.value(KEY_SHOW_NO_UPDATES, defaults.notify_on_no_updates),
                defaults.notify_on_no_updates,
            ),
        )
        logger.info(f"Configuration loaded {config}")
        return config

    def save(self, config: Configuration) -> None:
        s = self._settings
        s.setValue(KEY_AUTO_CHECK_ENABLED, config.auto_check_enabled)
        s.setValue(KEY_AUTO_CHECK_INTERVAL, config.auto_check_interval_minutes)
        s.setValue(KEY_SHOW_UPDATES, config.notify_on_updates)
        s.setValue(KEY_SHOW_NO_UPDATES, config.notify_on_no_updates)
        s.sync()
        logger.info(f"Configuration saved {config}")
