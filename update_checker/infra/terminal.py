import shutil
from typing import Final

# (executable, argv prefix placed before the wrapped command)
TERMINAL_CANDIDATES: Final[tuple[tuple[str, tuple[str, ...]], ...]] = (
    # Without --nofork konsole may hand the window to a running instance and
    # exit immediately, which would end the session early.
    ("konsole", ("--nofork", "-e")),
    ("x-terminal-emulator", ("-e",)),
    ("gnome-terminal", ("--wait", "--")),
    ("xterm", ("-e",)),
)


def find_terminal_executable() -> tuple[str, tuple[str, ...]]:
    """Finds a usable terminal emulator.

    Prefers Konsole when available, then the Debian alternatives entry, then
    GNOME Terminal and xterm.

    Returns:
        The executable path and the arguments that introduce the command to run.
        Falls back to a literal `konsole` when nothing is found on PATH.
    """
    for name, prefix in TERMINAL_CANDIDATES:
        path = shutil.which(name)
        if path:
            return path, prefix
    name, prefix = TERMINAL_CANDIDATES[0]
    return name, prefix


def build_terminal_argv(command: list[str], terminal: str | None = None) -> list[str]:
    """Builds an argv list that runs `command` inside a terminal window.

    Args:
        command: Command to run interactively.
        terminal: Terminal executable path/name. If omitted, it will be auto-detected.

    Returns:
        Argument vector; the first element is the terminal executable.
    """
    if terminal is None:
        exe, prefix = find_terminal_executable()
    else:
        exe = terminal
        prefix = _prefix_for(terminal)
    return [exe, *prefix, *command]


def _prefix_for(terminal: str) -> tuple[str, ...]:
    base = terminal.rsplit("/", 1)[-1]
    for name, prefix in TERMINAL_CANDIDATES:
        if name == base:
            return prefix
    return ("-e",)
