from PySide6.QtCore import Qt, QTimer
from PySide6.QtGui import QFontDatabase, QIcon
from PySide6.QtWidgets import (
    QCheckBox,
    QDialog,
    QHBoxLayout,
    QLabel,
    QMessageBox,
    QPlainTextEdit,
    QPushButton,
    QSpinBox,
    QVBoxLayout,
    QWidget,
)

from update_checker.core.config import (
    MAX_INTERVAL_MINUTES,
    MIN_INTERVAL_MINUTES,
    Configuration,
)
from update_checker.core.distro import Distribution
from update_checker.core.notification_policy import PromptChoice


class CountdownDialog(QDialog):
    """Frameless overlay counting down while the install terminal opens."""

    SECONDS = 5

    def __init__(self, icon: QIcon, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.setWindowFlags(
            Qt.WindowType.FramelessWindowHint | Qt.WindowType.WindowStaysOnTopHint
        )
        self.setAttribute(Qt.WidgetAttribute.WA_TranslucentBackground)
        self.setFixedSize(200, 200)

        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(0)

        icon_label = QLabel(self)
        icon_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        icon_label.setPixmap(icon.pixmap(100, 100))
        layout.addWidget(icon_label)

        self._remaining = self.SECONDS
        self._label = QLabel(str(self._remaining), self)
        self._label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        font = QFontDatabase.systemFont(QFontDatabase.SystemFont.FixedFont)
        font.setPointSize(24)
        font.setBold(True)
        self._label.setFont(font)
        layout.addWidget(self._label)

        self._timer = QTimer(self)
        self._timer.timeout.connect(self._tick)

    def start_countdown(self) -> None:
        self._remaining = self.SECONDS
        self._label.setText(str(self._remaining))
        self.show()
        self._timer.start(1000)

    def _tick(self) -> None:
        self._remaining -= 1
        self._label.setText(str(self._remaining))
        if self._remaining <= 0:
            self._timer.stop()
            self.accept()


class ListingDialog(QDialog):
    """Read-only list of pending updates with an install button."""

    def __init__(self, text: str, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.setWindowTitle("Available Updates")
        self.resize(600, 400)
        self.install_requested = False

        layout = QVBoxLayout(self)
        layout.addWidget(QLabel("The following updates are available:", self))

        view = QPlainTextEdit(self)
        view.setPlainText(text)
        view.setReadOnly(True)
        view.setLineWrapMode(QPlainTextEdit.LineWrapMode.NoWrap)
        view.setFont(QFontDatabase.systemFont(QFontDatabase.SystemFont.FixedFont))
        layout.addWidget(view)

        buttons = QHBoxLayout()
        install_button = QPushButton("Install Updates", self)
        install_button.setEnabled(bool(text.strip()))
        install_button.clicked.connect(self._on_install_clicked)
        close_button = QPushButton("Close", self)
        close_button.clicked.connect(self.reject)
        buttons.addWidget(install_button)
        buttons.addWidget(close_button)
        layout.addLayout(buttons)

    def _on_install_clicked(self) -> None:
        self.install_requested = True
        self.accept()


class ConfigDialog(QDialog):
    """Edits a `Configuration`; `configuration()` returns the edited copy."""

    def __init__(self, config: Configuration, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.setWindowTitle("Update Checker Configuration")

        layout = QVBoxLayout(self)

        self._auto_check = QCheckBox("Enable automatic update checking", self)
        self._auto_check.setChecked(config.auto_check_enabled)

        self._interval = QSpinBox(self)
        self._interval.setRange(MIN_INTERVAL_MINUTES, MAX_INTERVAL_MINUTES)
        self._interval.setValue(config.auto_check_interval_minutes)
        self._interval.setSuffix(" minutes")
        self._interval.setEnabled(config.auto_check_enabled)
        self._auto_check.toggled.connect(self._interval.setEnabled)

        self._notify_updates = QCheckBox("Notify when updates are available", self)
        self._notify_updates.setChecked(config.notify_on_updates)

        self._notify_no_updates = QCheckBox("Notify when no updates are available", self)
        self._notify_no_updates.setChecked(config.notify_on_no_updates)

        save_button = QPushButton("Save", self)
        save_button.setDefault(True)
        save_button.clicked.connect(self.accept)

        layout.addWidget(self._auto_check)
        layout.addWidget(QLabel("Check interval:", self))
        layout.addWidget(self._interval)
        layout.addWidget(self._notify_updates)
        layout.addWidget(self._notify_no_updates)
        layout.addWidget(save_button)

    def configuration(self) -> Configuration:
        return Configuration(
            auto_check_enabled=self._auto_check.isChecked(),
            auto_check_interval_minutes=self._interval.value(),
            notify_on_updates=self._notify_updates.isChecked(),
            notify_on_no_updates=self._notify_no_updates.isChecked(),
        )


def ask_update_prompt(count: int, parent: QWidget | None = None) -> PromptChoice:
    """Asks what to do about `count` pending updates."""
    box = QMessageBox(parent)
    box.setWindowTitle("Updates Available")
    box.setIcon(QMessageBox.Icon.Question)
    box.setText(f"{count} updates are available")
    box.setInformativeText("Would you like to install them now?")
    install = box.addButton("Install Now", QMessageBox.ButtonRole.AcceptRole)
    view = box.addButton("View List", QMessageBox.ButtonRole.ActionRole)
    later = box.addButton("Later", QMessageBox.ButtonRole.RejectRole)
    box.setDefaultButton(install)
    box.setEscapeButton(later)
    box.exec()

    clicked = box.clickedButton()
    if clicked is install:
        return PromptChoice.INSTALL_NOW
    if clicked is view:
        return PromptChoice.VIEW_LIST
    return PromptChoice.LATER


def ask_reboot(parent: QWidget | None = None) -> bool:
    answer = QMessageBox.question(
        parent,
        "Updates Finished",
        "The update session has finished.\nReboot now to apply all changes?",
        QMessageBox.StandardButton.Yes | QMessageBox.StandardButton.No,
        QMessageBox.StandardButton.No,
    )
    return answer == QMessageBox.StandardButton.Yes


def show_about(parent: QWidget | None = None) -> None:
    supported = "\n".join(
        f"- {d.display_name}" for d in Distribution if d.is_supported
    )
    QMessageBox.about(
        parent,
        "About Update Checker",
        f"System Update Checker\n\nSupported distributions:\n{supported}",
    )
