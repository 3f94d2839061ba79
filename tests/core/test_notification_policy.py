from update_checker.core.config import Configuration
from update_checker.core.notification_policy import (
    BlockingPrompt,
    PassiveNotification,
    PromptChoice,
    Severity,
    Silent,
    decide,
    failure_notification,
)
from update_checker.core.update_types import (
    CheckFailed,
    ErrorKind,
    NoUpdates,
    UpdatesAvailable,
)


def test_failures_always_notify_even_with_notifications_off() -> None:
    quiet = Configuration(notify_on_updates=False, notify_on_no_updates=False)

    decision = decide(CheckFailed("mirror unreachable"), quiet)

    assert decision == PassiveNotification(
        "Error", "Update check failed: mirror unreachable", Severity.CRITICAL
    )


def test_unsupported_distribution_is_a_warning() -> None:
    decision = decide(
        CheckFailed("unsupported distribution", ErrorKind.UNSUPPORTED_DISTRIBUTION),
        Configuration(),
    )

    assert isinstance(decision, PassiveNotification)
    assert decision.severity is Severity.WARNING


def test_no_updates_is_silent_by_default() -> None:
    assert decide(NoUpdates(), Configuration()) == Silent()


def test_no_updates_notifies_when_enabled() -> None:
    decision = decide(NoUpdates(), Configuration(notify_on_no_updates=True))

    assert decision == PassiveNotification("Update Checker", "System is up to date")


def test_updates_prompt_with_all_choices() -> None:
    decision = decide(UpdatesAvailable(3, "a\nb\nc\n"), Configuration())

    assert decision == BlockingPrompt(count=3)
    assert decision.options == (
        PromptChoice.INSTALL_NOW,
        PromptChoice.VIEW_LIST,
        PromptChoice.LATER,
    )


def test_updates_are_silent_when_prompt_disabled() -> None:
    decision = decide(UpdatesAvailable(1, "a\n"), Configuration(notify_on_updates=False))

    assert decision == Silent()


def test_session_already_active_is_informational() -> None:
    notification = failure_notification(
        ErrorKind.SESSION_ALREADY_ACTIVE, "An update session is already running"
    )

    assert notification.severity is Severity.INFORMATION
    assert notification.body == "An update session is already running"
