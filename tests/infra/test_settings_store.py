from pathlib import Path

from PySide6.QtCore import QSettings

from update_checker.core.config import Configuration
from update_checker.infra.settings_store import (
    KEY_AUTO_CHECK_INTERVAL,
    KEY_SHOW_NO_UPDATES,
    SettingsStore,
)


def _ini(path: Path) -> QSettings:
    return QSettings(str(path), QSettings.Format.IniFormat)


def test_load_returns_defaults_for_empty_settings(tmp_path: Path) -> None:
    store = SettingsStore(_ini(tmp_path / "settings.ini"))

    assert store.load() == Configuration()


def test_saved_configuration_is_read_back_from_disk(tmp_path: Path) -> None:
    path = tmp_path / "settings.ini"
    config = Configuration(
        auto_check_enabled=False,
        auto_check_interval_minutes=120,
        notify_on_updates=False,
        notify_on_no_updates=True,
    )

    SettingsStore(_ini(path)).save(config)

    assert SettingsStore(_ini(path)).load() == config


def test_load_clamps_interval_and_tolerates_garbage(tmp_path: Path) -> None:
    settings = _ini(tmp_path / "settings.ini")
    settings.setValue(KEY_AUTO_CHECK_INTERVAL, 2)
    settings.setValue(KEY_SHOW_NO_UPDATES, "maybe")

    config = SettingsStore(settings).load()

    assert config.auto_check_interval_minutes == 15
    assert config.notify_on_no_updates is False
