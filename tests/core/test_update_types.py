from update_checker.core.update_types import (
    CheckFailed,
    ErrorKind,
    NoUpdates,
    TrayState,
    UpdateCheckerError,
    UpdatesAvailable,
    tray_state,
    tray_tooltip,
)


def test_tray_state_prefers_installing() -> None:
    assert tray_state(UpdatesAvailable(2, "a\nb\n"), installing=True) is TrayState.INSTALLING


def test_tray_state_reflects_last_result() -> None:
    assert tray_state(None, installing=False) is TrayState.IDLE_NO_UPDATES
    assert tray_state(NoUpdates(), installing=False) is TrayState.IDLE_NO_UPDATES
    assert (
        tray_state(UpdatesAvailable(1, "a\n"), installing=False)
        is TrayState.IDLE_UPDATES_AVAILABLE
    )


def test_check_failed_defaults_to_command_failure() -> None:
    assert CheckFailed("boom").kind is ErrorKind.CHECK_COMMAND_FAILED


def test_error_carries_kind_and_message() -> None:
    error = UpdateCheckerError(ErrorKind.SESSION_ALREADY_ACTIVE, "busy")

    assert error.kind is ErrorKind.SESSION_ALREADY_ACTIVE
    assert str(error) == "busy"


def test_tray_tooltip_matches_state() -> None:
    assert tray_tooltip(TrayState.IDLE_NO_UPDATES) == "Update Checker - System up to date"
    assert tray_tooltip(TrayState.INSTALLING) == "Update Checker - Installing updates"
    assert (
        tray_tooltip(TrayState.IDLE_UPDATES_AVAILABLE, UpdatesAvailable(3, "a\nb\nc\n"))
        == "Update Checker - 3 updates available"
    )
