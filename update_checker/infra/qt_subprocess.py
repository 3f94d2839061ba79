import os
import subprocess
from typing import Final

from logly import logger
from PySide6.QtCore import QObject, Signal, Slot

TIMEOUT_RETURNCODE: Final[int] = 124
TIMEOUT_MESSAGE: Final[bytes] = b"timeout: command exceeded limit"


def command_env() -> dict[str, str]:
    """Returns the environment for check commands.

    Package tools are forced into the C locale so headers and warnings keep
    the English text the classifier matches on.
    """
    env = dict(os.environ)
    env["LC_ALL"] = "C"
    return env


class SubprocessWorker(QObject):
    """Runs a subprocess in a background Qt thread.

    The worker is meant to be moved to a `QThread` and started via a signal/slot.
    Failures never propagate; they are reported through `finished` as an empty
    stdout, a diagnostic stderr and a non-zero return code.
    """

    finished = Signal(int, bytes, bytes, int)  # job_id, stdout, stderr, returncode

    def __init__(self, argv: list[str], timeout_sec: int = 600, job_id: int = 0):
        super().__init__()
        self._argv = argv
        self._timeout_sec = timeout_sec
        self._job_id = job_id

    @Slot()
    def run(self):
        """Executes the configured command and emits `finished`."""
        try:
            logger.info(
                f"Starting subprocess timeout={self._timeout_sec}s argv={' '.join(self._argv)}"
            )
            result = subprocess.run(
                self._argv,
                capture_output=True,
                timeout=self._timeout_sec,
                env=command_env(),
            )
            logger.info(f"Subprocess finished returncode={result.returncode}")
            self.finished.emit(
                self._job_id, result.stdout, result.stderr, result.returncode
            )

        except subprocess.TimeoutExpired:
            logger.warning(f"Subprocess timed out after {self._timeout_sec}s")
            self.finished.emit(self._job_id, b"", TIMEOUT_MESSAGE, TIMEOUT_RETURNCODE)
        except FileNotFoundError:
            logger.warning(f"Command not found: {self._argv[0]}")
            message = f"command not found: {self._argv[0]}"
            self.finished.emit(self._job_id, b"", message.encode("utf-8"), 127)
        except Exception as e:
            logger.exception("Subprocess execution failed")
            self.finished.emit(
                self._job_id, b"", str(e).encode("utf-8", errors="replace"), 1
            )
