import pytest

from update_checker.application import install_orchestrator
from update_checker.application.install_orchestrator import InstallOrchestrator
from update_checker.core.distro import Distribution
from update_checker.core.update_types import (
    ErrorKind,
    SessionState,
    UpdateCheckerError,
)


def _orchestrator() -> InstallOrchestrator:
    ticks = iter([100.0, 160.0, 220.0])
    return InstallOrchestrator(clock=lambda: next(ticks))


def test_install_launches_terminal_wrapped_command(fake_processes) -> None:
    orchestrator = _orchestrator()

    session = orchestrator.install_updates(Distribution.ARCH)

    assert len(fake_processes) == 1
    process = fake_processes[0]
    assert process.program == "konsole"
    assert process.arguments == ["--nofork", "-e", "sudo", "pacman", "-Syu"]
    assert process.start_calls == 1
    assert session.state is SessionState.STARTING
    assert session.started_at == 100.0
    assert orchestrator.is_active()


def test_second_install_is_rejected_while_session_active(fake_processes) -> None:
    orchestrator = _orchestrator()
    orchestrator.install_updates(Distribution.UBUNTU)

    with pytest.raises(UpdateCheckerError) as excinfo:
        orchestrator.install_updates(Distribution.UBUNTU)

    assert excinfo.value.kind is ErrorKind.SESSION_ALREADY_ACTIVE
    assert len(fake_processes) == 1


def test_unknown_distribution_spawns_nothing(fake_processes) -> None:
    orchestrator = _orchestrator()

    with pytest.raises(UpdateCheckerError) as excinfo:
        orchestrator.install_updates(Distribution.UNKNOWN)

    assert excinfo.value.kind is ErrorKind.UNSUPPORTED_DISTRIBUTION
    assert fake_processes == []
    assert not orchestrator.is_active()


def test_started_signal_marks_session_running(fake_processes) -> None:
    orchestrator = _orchestrator()
    started: list[bool] = []
    orchestrator.started.connect(lambda: started.append(True))
    session = orchestrator.install_updates(Distribution.NEON)

    fake_processes[0].started.emit()

    assert started == [True]
    assert session.state is SessionState.RUNNING


def test_finished_holds_session_during_handling_then_releases(fake_processes) -> None:
    orchestrator = _orchestrator()
    seen: list[tuple[int, bool]] = []
    closed: list[bool] = []
    orchestrator.finished.connect(
        lambda code: seen.append((code, orchestrator.is_active()))
    )
    orchestrator.session_closed.connect(lambda: closed.append(orchestrator.is_active()))
    session = orchestrator.install_updates(Distribution.ARCH)
    process = fake_processes[0]
    process.started.emit()

    process.finished.emit(1, None)
    process.finished.emit(1, None)

    assert seen == [(1, True)]
    assert closed == [False]
    assert session.state is SessionState.EXITED
    assert session.exit_code == 1
    assert session.process is None
    assert process.deleted
    assert not orchestrator.is_active()


def test_failed_to_start_reports_and_frees_slot(fake_processes) -> None:
    orchestrator = _orchestrator()
    failures: list[str] = []
    orchestrator.launch_failed.connect(failures.append)
    orchestrator.install_updates(Distribution.ARCH)

    fake_processes[0].errorOccurred.emit(install_orchestrator._FAILED_TO_START)

    assert failures == ["No such file or directory"]
    assert not orchestrator.is_active()
    orchestrator.install_updates(Distribution.ARCH)
    assert len(fake_processes) == 2


def test_request_reboot_spawns_detached(monkeypatch, qapp) -> None:
    calls: list[tuple[list[str], dict]] = []
    monkeypatch.setattr(
        install_orchestrator.subprocess,
        "Popen",
        lambda argv, **kwargs: calls.append((argv, kwargs)),
    )

    assert InstallOrchestrator().request_reboot()
    assert calls[0][0] == ["pkexec", "reboot"]
    assert calls[0][1]["start_new_session"] is True


def test_request_reboot_returns_false_when_spawn_fails(monkeypatch, qapp) -> None:
    def fail(argv, **kwargs):
        raise FileNotFoundError(2, "No such file or directory", argv[0])

    monkeypatch.setattr(install_orchestrator.subprocess, "Popen", fail)

    assert not InstallOrchestrator().request_reboot()
