from typing import Final

from PySide6.QtCore import Signal
from PySide6.QtGui import QAction, QIcon
from PySide6.QtWidgets import QApplication, QMenu, QStyle, QSystemTrayIcon

from update_checker.core.config import Configuration
from update_checker.core.notification_policy import PromptChoice, Severity
from update_checker.core.update_types import TrayState, tray_tooltip
from update_checker.presentation.dialogs import (
    ConfigDialog,
    CountdownDialog,
    ListingDialog,
    ask_reboot,
    ask_update_prompt,
    show_about,
)
from update_checker.presentation.surface import MenuAction

_NOTIFICATION_TIMEOUT_MS: Final[int] = 5000

# Theme icon name and QStyle fallback per displayed state.
_ICONS: Final[dict[TrayState, tuple[str, QStyle.StandardPixmap]]] = {
    TrayState.IDLE_NO_UPDATES: ("update-none", QStyle.StandardPixmap.SP_DialogApplyButton),
    TrayState.IDLE_UPDATES_AVAILABLE: (
        "software-update-available",
        QStyle.StandardPixmap.SP_ArrowUp,
    ),
    TrayState.INSTALLING: ("system-software-update", QStyle.StandardPixmap.SP_BrowserReload),
}

_MESSAGE_ICONS: Final[dict[Severity, QSystemTrayIcon.MessageIcon]] = {
    Severity.INFORMATION: QSystemTrayIcon.MessageIcon.Information,
    Severity.WARNING: QSystemTrayIcon.MessageIcon.Warning,
    Severity.CRITICAL: QSystemTrayIcon.MessageIcon.Critical,
}


def _state_icon(state: TrayState) -> QIcon:
    name, fallback = _ICONS[state]
    icon = QIcon.fromTheme(name)
    if icon.isNull():
        icon = QApplication.style().standardIcon(fallback)
    return icon


class TrayIcon(QSystemTrayIcon):
    """System tray icon and menu implementing the controller's surface."""

    check_requested = Signal()
    list_requested = Signal()
    install_requested = Signal()
    configure_requested = Signal()

    def __init__(self, parent=None) -> None:
        super().__init__(parent)
        self.setIcon(_state_icon(TrayState.IDLE_NO_UPDATES))
        self.setToolTip(tray_tooltip(TrayState.IDLE_NO_UPDATES))

        self._menu = QMenu()
        self._actions: dict[MenuAction, QAction] = {}

        check = self._menu.addAction("Check for updates")
        check.triggered.connect(self.check_requested.emit)
        self._actions[MenuAction.CHECK] = check

        listing = self._menu.addAction("List available updates")
        listing.setEnabled(False)
        listing.triggered.connect(self.list_requested.emit)
        self._actions[MenuAction.LIST] = listing

        install = self._menu.addAction("Install updates")
        install.setEnabled(False)
        install.triggered.connect(self.install_requested.emit)
        self._actions[MenuAction.INSTALL] = install

        self._menu.addSeparator()
        self._menu.addAction("Configuration").triggered.connect(
            self.configure_requested.emit
        )
        self._menu.addSeparator()
        self._menu.addAction("About").triggered.connect(lambda: show_about())
        self._menu.addSeparator()
        self._menu.addAction("Quit").triggered.connect(QApplication.quit)

        self.setContextMenu(self._menu)
        self._countdown: CountdownDialog | None = None

    def set_icon_state(self, state: TrayState) -> None:
        self.setIcon(_state_icon(state))

    def set_tooltip(self, text: str) -> None:
        self.setToolTip(text)

    def set_menu_action_enabled(self, action: MenuAction, enabled: bool) -> None:
        self._actions[action].setEnabled(enabled)

    def show_notification(self, title: str, body: str, severity: Severity) -> None:
        self.showMessage(title, body, _MESSAGE_ICONS[severity], _NOTIFICATION_TIMEOUT_MS)

    def show_blocking_prompt(self, count: int) -> PromptChoice:
        return ask_update_prompt(count)

    def show_countdown(self) -> None:
        if self._countdown is None:
            self._countdown = CountdownDialog(_state_icon(TrayState.INSTALLING))
        self._countdown.start_countdown()

    def show_listing(self, text: str) -> bool:
        dialog = ListingDialog(text)
        dialog.exec()
        return dialog.install_requested

    def show_completion_dialog(self) -> bool:
        return ask_reboot()

    def edit_configuration(self, config: Configuration) -> Configuration | None:
        """Opens the configuration dialog; returns the saved copy or None."""
        dialog = ConfigDialog(config)
        if not dialog.exec():
            return None
        return dialog.configuration()
