import os
from pathlib import Path
from typing import Final

from logly import _LoggerProxy, logger

LOG_LEVEL_ENV: Final[str] = "UPDATE_CHECKER_LOG_LEVEL"
LOG_DIR_ENV: Final[str] = "UPDATE_CHECKER_LOG_DIR"


def log_dir_path() -> Path:
    """Returns the directory for the rotating log file.

    `UPDATE_CHECKER_LOG_DIR` wins; otherwise the XDG state directory is used.
    """
    override = os.environ.get(LOG_DIR_ENV)
    if override:
        return Path(override)
    state_home = os.environ.get("XDG_STATE_HOME") or str(Path.home() / ".local" / "state")
    return Path(state_home) / "update-checker" / "logs"


def init_logger() -> _LoggerProxy:
    """Initialize the logger.

    Console output plus a size-limited file sink. The level comes from
    `UPDATE_CHECKER_LOG_LEVEL` and defaults to INFO.

    """
    level = os.environ.get(LOG_LEVEL_ENV, "INFO").upper()
    log_dir = log_dir_path()
    log_dir.mkdir(parents=True, exist_ok=True)

    logger.configure(
        level=level,
        color=True,
        console=True,
        auto_sink=True,
    )

    logger.add(f"{log_dir}/update-checker.log", size_limit="10MB", retention=3)

    logger.success("logger initialized!")

    return logger
