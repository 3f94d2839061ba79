from dataclasses import dataclass
from enum import Enum

from update_checker.core.config import Configuration
from update_checker.core.update_types import (
    CheckFailed,
    CheckResult,
    ErrorKind,
    NoUpdates,
    UpdatesAvailable,
)

APP_TITLE = "Update Checker"


class Severity(Enum):
    INFORMATION = "information"
    WARNING = "warning"
    CRITICAL = "critical"


class PromptChoice(Enum):
    INSTALL_NOW = "install-now"
    VIEW_LIST = "view-list"
    LATER = "later"


@dataclass(frozen=True, slots=True)
class Silent:
    """Nothing is surfaced."""


@dataclass(frozen=True, slots=True)
class PassiveNotification:
    title: str
    body: str
    severity: Severity = Severity.INFORMATION


@dataclass(frozen=True, slots=True)
class BlockingPrompt:
    """Asks the user what to do about `count` pending updates."""

    count: int
    options: tuple[PromptChoice, ...] = (
        PromptChoice.INSTALL_NOW,
        PromptChoice.VIEW_LIST,
        PromptChoice.LATER,
    )


Decision = Silent | PassiveNotification | BlockingPrompt


def failure_notification(kind: ErrorKind, message: str) -> PassiveNotification:
    """Builds the notification for a failed operation."""
    if kind is ErrorKind.UNSUPPORTED_DISTRIBUTION:
        return PassiveNotification("Error", "Unsupported distribution", Severity.WARNING)
    if kind is ErrorKind.CHECK_COMMAND_FAILED:
        return PassiveNotification(
            "Error", f"Update check failed: {message}", Severity.CRITICAL
        )
    if kind is ErrorKind.CHECK_TIMED_OUT:
        return PassiveNotification(
            "Error", f"Update check timed out: {message}", Severity.CRITICAL
        )
    if kind is ErrorKind.TERMINAL_LAUNCH_FAILED:
        return PassiveNotification(
            "Error", f"Failed to launch terminal: {message}", Severity.CRITICAL
        )
    return PassiveNotification(APP_TITLE, message, Severity.INFORMATION)


def decide(result: CheckResult, config: Configuration) -> Decision:
    """Chooses how a check result is surfaced.

    Failures always produce a passive notification and never prompt. An
    up-to-date system is announced only when `notify_on_no_updates` is set.
    Pending updates raise a blocking prompt when `notify_on_updates` is set.

    Args:
        result: Outcome of the latest check.
        config: Current user preferences.

    Returns:
        The decision for the presentation layer.
    """
    if isinstance(result, CheckFailed):
        return failure_notification(result.kind, result.message)

    if isinstance(result, NoUpdates):
        if config.notify_on_no_updates:
            return PassiveNotification(APP_TITLE, "System is up to date")
        return Silent()

    if isinstance(result, UpdatesAvailable) and config.notify_on_updates:
        return BlockingPrompt(count=result.count)
    return Silent()
