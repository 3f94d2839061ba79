from dataclasses import dataclass, field
from enum import Enum


class ErrorKind(Enum):
    """Failure categories surfaced to the user."""

    UNSUPPORTED_DISTRIBUTION = "unsupported-distribution"
    CHECK_COMMAND_FAILED = "check-command-failed"
    CHECK_TIMED_OUT = "check-timed-out"
    TERMINAL_LAUNCH_FAILED = "terminal-launch-failed"
    SESSION_ALREADY_ACTIVE = "session-already-active"


class UpdateCheckerError(Exception):
    """Raised for an operation that cannot proceed; carries an `ErrorKind`."""

    def __init__(self, kind: ErrorKind, message: str) -> None:
        super().__init__(message)
        self.kind = kind
        self.message = message


@dataclass(frozen=True, slots=True)
class NoUpdates:
    """The check command reported an up-to-date system."""


@dataclass(frozen=True, slots=True)
class UpdatesAvailable:
    """The check command listed pending updates.

    Attributes:
        count: Number of meaningful listing lines.
        raw_listing: Captured stdout, kept verbatim for display.
    """

    count: int
    raw_listing: str

    @property
    def lines(self) -> tuple[str, ...]:
        return tuple(self.raw_listing.splitlines())


@dataclass(frozen=True, slots=True)
class CheckFailed:
    """The check could not produce a listing."""

    message: str
    kind: ErrorKind = ErrorKind.CHECK_COMMAND_FAILED


CheckResult = NoUpdates | UpdatesAvailable | CheckFailed


class TrayState(Enum):
    IDLE_NO_UPDATES = "idle-no-updates"
    IDLE_UPDATES_AVAILABLE = "idle-updates-available"
    INSTALLING = "installing"


def tray_state(result: CheckResult | None, installing: bool) -> TrayState:
    """Derives the displayed state from the last known result.

    Args:
        result: Latest successful check result, or None before the first one.
        installing: Whether an install session is active.

    Returns:
        The state the tray should display.
    """
    if installing:
        return TrayState.INSTALLING
    if isinstance(result, UpdatesAvailable):
        return TrayState.IDLE_UPDATES_AVAILABLE
    return TrayState.IDLE_NO_UPDATES


class SessionState(Enum):
    STARTING = "starting"
    RUNNING = "running"
    EXITED = "exited"


@dataclass(slots=True)
class InstallSession:
    """One in-flight interactive installation.

    Attributes:
        argv: Terminal-wrapped command line that was launched.
        started_at: `time.monotonic()` timestamp of the request.
        state: Lifecycle state of the terminal process.
        exit_code: Exit code once the process has terminated.
        process: Live process handle; released when the session ends.
    """

    argv: list[str]
    started_at: float
    state: SessionState = SessionState.STARTING
    exit_code: int | None = None
    process: object | None = field(default=None, repr=False)


def tray_tooltip(state: TrayState, result: CheckResult | None = None) -> str:
    """Returns the tooltip text shown for `state`."""
    if state is TrayState.INSTALLING:
        return "Update Checker - Installing updates"
    if state is TrayState.IDLE_UPDATES_AVAILABLE and isinstance(result, UpdatesAvailable):
        return f"Update Checker - {result.count} updates available"
    return "Update Checker - System up to date"
