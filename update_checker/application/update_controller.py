import re
from typing import Callable, Final

from logly import logger
from PySide6.QtCore import QObject, QThread, Slot

from update_checker.application.install_orchestrator import InstallOrchestrator
from update_checker.application.scheduler import CheckScheduler
from update_checker.core.check_classifier import classify_check_output
from update_checker.core.commands import check_argv
from update_checker.core.config import Configuration
from update_checker.core.distro import Distribution, detect_distribution
from update_checker.core.notification_policy import (
    BlockingPrompt,
    Decision,
    PassiveNotification,
    PromptChoice,
    Severity,
    decide,
    failure_notification,
)
from update_checker.core.update_types import (
    CheckFailed,
    CheckResult,
    ErrorKind,
    UpdateCheckerError,
    UpdatesAvailable,
    tray_state,
    tray_tooltip,
)
from update_checker.infra.qt_subprocess import (
    TIMEOUT_MESSAGE,
    TIMEOUT_RETURNCODE,
    SubprocessWorker,
)
from update_checker.infra.settings_store import SettingsStore
from update_checker.presentation.surface import MenuAction, PresentationSurface

CHECK_TIMEOUT_SEC: Final[int] = 600


class UpdateController(QObject):
    """Owns the update state and orchestrates checks, prompts and installs.

    All state lives on this object and is only mutated from the Qt main
    thread. Check commands run on a worker thread; their results come back
    through a queued signal before anything is changed.
    """

    # Strip common ANSI escape sequences so notifications don't show raw
    # color codes from package tools.
    _ANSI_OSC_RE = re.compile(r"\x1b\][^\x07]*(?:\x07|\x1b\\)")
    _ANSI_CSI_RE = re.compile(r"\x1b\[[0-?]*[ -/]*[@-~]")
    _ANSI_2CHAR_RE = re.compile(r"\x1b[@-Z\\-_]")

    def __init__(
        self,
        surface: PresentationSurface,
        store: SettingsStore,
        scheduler: CheckScheduler | None = None,
        installer: InstallOrchestrator | None = None,
        detector: Callable[[], Distribution] = detect_distribution,
        parent: QObject | None = None,
    ):
        """Initializes the controller and loads the stored configuration.

        Args:
            surface: Tray user interface.
            store: Configuration persistence.
            scheduler: Check scheduler; created when omitted.
            installer: Install orchestrator; created when omitted.
            detector: Distribution detection function.
            parent: Optional Qt parent object.
        """
        super().__init__(parent)
        self._surface = surface
        self._store = store
        self._detector = detector
        self._scheduler = scheduler if scheduler is not None else CheckScheduler(self)
        self._installer = installer if installer is not None else InstallOrchestrator(self)

        self._config = store.load()
        self._distro = Distribution.UNKNOWN
        self._result: CheckResult | None = None

        self._thread: QThread | None = None
        self._worker: SubprocessWorker | None = None
        self._active_job_id = 0
        self._checking_distro = Distribution.UNKNOWN
        self._recheck_after_finish = False

        self._scheduler.check_requested.connect(self.check_for_updates)
        self._installer.started.connect(self._on_install_started)
        self._installer.launch_failed.connect(self._on_install_launch_failed)
        self._installer.finished.connect(self._on_install_finished)
        self._installer.session_closed.connect(self._on_session_closed)

    @property
    def config(self) -> Configuration:
        return self._config

    @property
    def distro(self) -> Distribution:
        return self._distro

    @property
    def result(self) -> CheckResult | None:
        return self._result

    @property
    def scheduler(self) -> CheckScheduler:
        return self._scheduler

    @property
    def installer(self) -> InstallOrchestrator:
        return self._installer

    def is_checking(self) -> bool:
        return self._thread is not None

    def start(self) -> None:
        """Shows the initial tray state and starts scheduling checks."""
        self._refresh_surface()
        self._scheduler.start(self._config)

    def check_for_updates(self) -> None:
        """Detects the distribution and runs its check command in the background."""
        if self._thread is not None:
            logger.info("[info] update check already running")
            return

        distro = self._detector()
        self._distro = distro
        argv = check_argv(distro)
        if argv is None:
            logger.warning("Unsupported distribution; skipping update check")
            self._apply_result(
                CheckFailed("unsupported distribution", ErrorKind.UNSUPPORTED_DISTRIBUTION)
            )
            return

        self._active_job_id += 1
        self._checking_distro = distro
        logger.info(f"$ {' '.join(argv)} ({distro.display_name})")
        self._spawn_worker(self._active_job_id, argv)

    def list_updates(self) -> None:
        """Shows the last known listing, offering to install from it."""
        listing = self._result.raw_listing if isinstance(self._result, UpdatesAvailable) else ""
        if self._surface.show_listing(listing):
            self.install_updates()

    def install_updates(self) -> None:
        """Starts an install session, surfacing any refusal as a notification."""
        try:
            self._installer.install_updates(self._distro)
        except UpdateCheckerError as e:
            logger.warning(f"Install request rejected kind={e.kind.value}: {e.message}")
            self._notify(failure_notification(e.kind, e.message))

    def save_configuration(self, config: Configuration) -> None:
        """Persists `config` and re-applies it to the scheduler."""
        self._config = config
        self._store.save(config)
        self._scheduler.apply(config)

    def _spawn_worker(self, job_id: int, argv: list[str]) -> None:
        thread = QThread()
        worker = SubprocessWorker(argv=argv, timeout_sec=CHECK_TIMEOUT_SEC, job_id=job_id)
        worker.moveToThread(thread)
        thread.started.connect(worker.run)

        worker.finished.connect(self._on_check_finished)
        worker.finished.connect(thread.quit)
        worker.finished.connect(worker.deleteLater)
        thread.finished.connect(thread.deleteLater)
        thread.finished.connect(self._on_thread_finished)

        self._thread = thread
        self._worker = worker
        self._refresh_menu()
        thread.start()

    @Slot()
    def _on_thread_finished(self) -> None:
        self._release_thread(self.sender())

    def _release_thread(self, finished_thread: object) -> None:
        """Clears references only if the finished thread is still the active one.

        Args:
            finished_thread: The thread that has emitted `finished`.
        """
        if finished_thread is not self._thread:
            return
        self._thread = None
        self._worker = None
        if self._recheck_after_finish:
            self._recheck_after_finish = False
            self.check_for_updates()
            return
        self._refresh_menu()

    @staticmethod
    def _decode(data: bytes) -> str:
        return data.decode("utf-8", errors="replace")

    @classmethod
    def _sanitize_output(cls, text: str) -> str:
        """Normalizes newlines and removes ANSI escape sequences."""
        if not text:
            return ""
        text = text.replace("\r\n", "\n").replace("\r", "\n")
        text = cls._ANSI_OSC_RE.sub("", text)
        text = cls._ANSI_CSI_RE.sub("", text)
        text = cls._ANSI_2CHAR_RE.sub("", text)
        return text

    @Slot(int, bytes, bytes, int)
    def _on_check_finished(
        self, job_id: int, stdout: bytes, stderr: bytes, returncode: int
    ) -> None:
        """Classifies a finished check command.

        Args:
            job_id: Monotonic identifier used to ignore stale results.
            stdout: Raw stdout bytes.
            stderr: Raw stderr bytes.
            returncode: Process return code. Only used to spot timeouts.
        """
        if job_id != self._active_job_id:
            return

        if returncode == TIMEOUT_RETURNCODE and stderr == TIMEOUT_MESSAGE:
            result: CheckResult = CheckFailed(
                f"no answer after {CHECK_TIMEOUT_SEC} seconds", ErrorKind.CHECK_TIMED_OUT
            )
        else:
            result = classify_check_output(
                self._checking_distro,
                self._decode(stdout),
                self._sanitize_output(self._decode(stderr)),
            )
        self._apply_result(result)

    def _apply_result(self, result: CheckResult) -> None:
        if isinstance(result, CheckFailed):
            # Keep the last known result; only tell the user.
            logger.error(f"Update check failed kind={result.kind.value}: {result.message}")
            self._notify(decide(result, self._config))
            return

        if isinstance(result, UpdatesAvailable):
            logger.info(f"[loaded] {result.count} updates available")
        else:
            logger.info("[loaded] system is up to date")

        self._result = result
        self._refresh_surface()
        self._surface_decision(decide(result, self._config))

    def _surface_decision(self, decision: Decision) -> None:
        if isinstance(decision, PassiveNotification):
            self._notify(decision)
            return
        if not isinstance(decision, BlockingPrompt):
            return

        if self._installer.is_active():
            logger.info("[info] install session active; not prompting")
            return

        choice = self._surface.show_blocking_prompt(decision.count)
        logger.info(f"Update prompt answered {choice.value}")
        if choice is PromptChoice.INSTALL_NOW:
            self.install_updates()
        elif choice is PromptChoice.VIEW_LIST:
            self.list_updates()

    def _notify(self, notification: PassiveNotification) -> None:
        self._surface.show_notification(
            notification.title, notification.body, notification.severity
        )

    def _on_install_started(self) -> None:
        self._surface.show_countdown()
        self._refresh_surface()

    def _on_install_launch_failed(self, message: str) -> None:
        self._notify(failure_notification(ErrorKind.TERMINAL_LAUNCH_FAILED, message))
        self._refresh_surface()

    def _on_install_finished(self, exit_code: int) -> None:
        if not self._surface.show_completion_dialog():
            return
        if not self._installer.request_reboot():
            self._surface.show_notification(
                "Error", "Failed to launch reboot command", Severity.CRITICAL
            )

    def _on_session_closed(self) -> None:
        self._refresh_surface()
        if self._thread is not None:
            # The running check saw the system before the install ended; drop
            # its result and check again once its thread is gone.
            self._active_job_id += 1
            self._recheck_after_finish = True
            logger.info("[info] re-check queued behind running update check")
            return
        self.check_for_updates()

    def _refresh_surface(self) -> None:
        state = tray_state(self._result, self._installer.is_active())
        self._surface.set_icon_state(state)
        self._surface.set_tooltip(tray_tooltip(state, self._result))
        self._refresh_menu()

    def _refresh_menu(self) -> None:
        has_updates = isinstance(self._result, UpdatesAvailable)
        installing = self._installer.is_active()
        self._surface.set_menu_action_enabled(MenuAction.CHECK, self._thread is None)
        self._surface.set_menu_action_enabled(MenuAction.LIST, has_updates)
        self._surface.set_menu_action_enabled(
            MenuAction.INSTALL, has_updates and not installing
        )

