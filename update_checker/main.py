import sys

from PySide6.QtWidgets import QApplication, QMessageBox, QSystemTrayIcon

from update_checker.application.update_controller import UpdateController
from update_checker.infra.settings_store import (
    APPLICATION_NAME,
    ORGANIZATION_NAME,
    SettingsStore,
)
from update_checker.logging import init_logger
from update_checker.presentation.tray import TrayIcon


def main() -> int:
    logger = init_logger()

    app = QApplication(sys.argv)
    app.setApplicationName(APPLICATION_NAME)
    app.setOrganizationName(ORGANIZATION_NAME)
    # The app lives in the tray; closing a dialog must not quit it.
    app.setQuitOnLastWindowClosed(False)

    if not QSystemTrayIcon.isSystemTrayAvailable():
        logger.error("System tray not available")
        QMessageBox.critical(None, "Error", "System tray not available")
        return 1

    tray = TrayIcon()
    controller = UpdateController(tray, SettingsStore())

    tray.check_requested.connect(controller.check_for_updates)
    tray.list_requested.connect(controller.list_updates)
    tray.install_requested.connect(controller.install_updates)

    def on_configure() -> None:
        config = tray.edit_configuration(controller.config)
        if config is not None:
            controller.save_configuration(config)

    tray.configure_requested.connect(on_configure)

    tray.show()
    controller.start()
    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
