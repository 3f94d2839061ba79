import subprocess
import time
from typing import Callable, Final

from logly import logger
from PySide6.QtCore import QObject, QProcess, Signal

from update_checker.core.commands import install_argv, reboot_argv
from update_checker.core.distro import Distribution
from update_checker.core.update_types import (
    ErrorKind,
    InstallSession,
    SessionState,
    UpdateCheckerError,
)
from update_checker.infra.terminal import build_terminal_argv

_FAILED_TO_START: Final = QProcess.ProcessError.FailedToStart


class InstallOrchestrator(QObject):
    """Launches and supervises one interactive install session at a time.

    The terminal runs out of process; its lifecycle is reported through Qt
    signals so the event loop stays responsive while the user installs.
    """

    started = Signal()
    launch_failed = Signal(str)
    finished = Signal(int)  # exit code, emitted while the session is still held
    session_closed = Signal()

    def __init__(
        self,
        parent: QObject | None = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        super().__init__(parent)
        self._clock = clock
        self._session: InstallSession | None = None

    def is_active(self) -> bool:
        return self._session is not None

    def install_updates(self, distro: Distribution) -> InstallSession:
        """Starts the distribution's upgrade command inside a terminal.

        Args:
            distro: Distribution detected by the latest check.

        Returns:
            The new session in the STARTING state.

        Raises:
            UpdateCheckerError: `SESSION_ALREADY_ACTIVE` when a session exists,
                `UNSUPPORTED_DISTRIBUTION` when no install command is known.
        """
        if self._session is not None:
            raise UpdateCheckerError(
                ErrorKind.SESSION_ALREADY_ACTIVE,
                "An update session is already running",
            )

        command = install_argv(distro)
        if command is None:
            raise UpdateCheckerError(
                ErrorKind.UNSUPPORTED_DISTRIBUTION, "unsupported distribution"
            )

        argv = build_terminal_argv(command)
        process = QProcess(self)
        process.setProgram(argv[0])
        process.setArguments(argv[1:])
        process.started.connect(self._on_started)
        process.errorOccurred.connect(self._on_error)
        process.finished.connect(self._on_finished)

        session = InstallSession(argv=argv, started_at=self._clock(), process=process)
        self._session = session
        logger.info(f"Launching install session argv={' '.join(argv)}")
        process.start()
        return session

    def request_reboot(self) -> bool:
        """Launches the privileged reboot command detached from this process.

        Returns:
            True if the command was spawned.
        """
        argv = reboot_argv()
        try:
            subprocess.Popen(
                argv,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
                start_new_session=True,
            )
        except OSError as e:
            logger.error(f"Failed to launch reboot command: {e}")
            return False
        logger.info(f"Reboot requested argv={' '.join(argv)}")
        return True

    def _on_started(self) -> None:
        if self._session is None:
            return
        self._session.state = SessionState.RUNNING
        logger.info("Install session running")
        self.started.emit()

    def _on_error(self, error: QProcess.ProcessError) -> None:
        session = self._session
        if session is None:
            return
        if error != _FAILED_TO_START:
            # Crashes are followed by `finished`, which ends the session.
            logger.warning(f"Install terminal reported error={error}")
            return

        message = ""
        if session.process is not None:
            message = session.process.errorString()  # type: ignore[attr-defined]
        logger.error(f"Terminal launch failed: {message}")
        self._release_process(session)
        self._session = None
        self.launch_failed.emit(message)

    def _on_finished(self, exit_code: int, _exit_status=None) -> None:
        session = self._session
        if session is None or session.state is SessionState.EXITED:
            return
        session.state = SessionState.EXITED
        session.exit_code = exit_code
        elapsed = self._clock() - session.started_at
        logger.info(f"Install session finished exit_code={exit_code} after {elapsed:.0f}s")
        self._release_process(session)
        try:
            self.finished.emit(exit_code)
        finally:
            self._session = None
            self.session_closed.emit()

    @staticmethod
    def _release_process(session: InstallSession) -> None:
        process = session.process
        session.process = None
        if process is not None:
            process.deleteLater()  # type: ignore[attr-defined]
