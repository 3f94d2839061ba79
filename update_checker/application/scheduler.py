from typing import Final

from logly import logger
from PySide6.QtCore import QObject, QTimer, Signal

from update_checker.core.config import Configuration

FIRST_CHECK_DELAY_MS: Final[int] = 1000


class CheckScheduler(QObject):
    """Drives the first-launch check and the recurring auto-check timer."""

    check_requested = Signal()

    def __init__(self, parent: QObject | None = None):
        super().__init__(parent)
        # One timer for the lifetime of the scheduler; re-applying a
        # configuration restarts it instead of creating another.
        self._auto_timer = QTimer(self)
        self._auto_timer.timeout.connect(self._on_auto_timeout)

    @property
    def auto_timer(self) -> QTimer:
        return self._auto_timer

    def is_auto_check_active(self) -> bool:
        return self._auto_timer.isActive()

    def start(self, config: Configuration) -> None:
        """Schedules the first-launch check and applies `config`."""
        QTimer.singleShot(FIRST_CHECK_DELAY_MS, self._on_first_launch)
        self.apply(config)

    def apply(self, config: Configuration) -> None:
        """Stops the recurring timer and restarts it if still enabled.

        Each call redefines the next firing relative to now.
        """
        self._auto_timer.stop()
        if not config.auto_check_enabled:
            logger.info("Automatic update checks disabled")
            return
        self._auto_timer.start(config.interval_ms)
        logger.info(
            f"Automatic update checks every {config.auto_check_interval_minutes} min"
        )

    def stop(self) -> None:
        self._auto_timer.stop()

    def _on_first_launch(self) -> None:
        logger.info("First-launch update check")
        self.check_requested.emit()

    def _on_auto_timeout(self) -> None:
        logger.info("Scheduled update check")
        self.check_requested.emit()
