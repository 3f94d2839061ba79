import pytest
from PySide6.QtCore import QCoreApplication

from update_checker.application import install_orchestrator


@pytest.fixture(scope="session")
def qapp() -> QCoreApplication:
    return QCoreApplication.instance() or QCoreApplication([])


class FakeSignal:
    def __init__(self) -> None:
        self._slots: list = []

    def connect(self, slot) -> None:
        self._slots.append(slot)

    def emit(self, *args) -> None:
        for slot in list(self._slots):
            slot(*args)


class FakeProcess:
    """Stands in for `QProcess`; tests drive its signals by hand."""

    def __init__(self, parent=None) -> None:
        self.parent = parent
        self.started = FakeSignal()
        self.errorOccurred = FakeSignal()
        self.finished = FakeSignal()
        self.program = ""
        self.arguments: list[str] = []
        self.start_calls = 0
        self.deleted = False

    def setProgram(self, program: str) -> None:
        self.program = program

    def setArguments(self, arguments: list[str]) -> None:
        self.arguments = list(arguments)

    def start(self) -> None:
        self.start_calls += 1

    def errorString(self) -> str:
        return "No such file or directory"

    def deleteLater(self) -> None:
        self.deleted = True


@pytest.fixture
def fake_processes(monkeypatch, qapp) -> list[FakeProcess]:
    """Replaces QProcess and the terminal lookup in the install orchestrator."""
    created: list[FakeProcess] = []

    def factory(parent=None) -> FakeProcess:
        process = FakeProcess(parent)
        created.append(process)
        return process

    monkeypatch.setattr(install_orchestrator, "QProcess", factory)
    monkeypatch.setattr(
        install_orchestrator,
        "build_terminal_argv",
        lambda command: ["konsole", "--nofork", "-e", *command],
    )
    return created
