from typing import Final

from update_checker.core.distro import Distribution, DistributionFamily

REBOOT_ARGV: Final[list[str]] = ["pkexec", "reboot"]

_CHECK_ARGV: Final[dict[DistributionFamily, list[str]]] = {
    DistributionFamily.ARCH_LIKE: ["checkupdates"],
    DistributionFamily.DEBIAN_LIKE: ["apt", "list", "--upgradable"],
    DistributionFamily.KDE_NEON: ["pkcon", "get-updates"],
}

_INSTALL_ARGV: Final[dict[DistributionFamily, list[str]]] = {
    DistributionFamily.ARCH_LIKE: ["sudo", "pacman", "-Syu"],
    DistributionFamily.DEBIAN_LIKE: [
        "bash",
        "-c",
        "sudo apt update && sudo apt upgrade -y",
    ],
    DistributionFamily.KDE_NEON: ["sudo", "pkcon", "update", "-y"],
}


def check_argv(distro: Distribution) -> list[str] | None:
    """Returns the argv that lists pending updates, or None if unsupported."""
    argv = _CHECK_ARGV.get(distro.family)
    return list(argv) if argv is not None else None


def install_argv(distro: Distribution) -> list[str] | None:
    """Returns the interactive upgrade argv to run inside a terminal.

    Elevation happens inside the terminal so the user can answer the password
    prompt. Returns None for unsupported distributions.
    """
    argv = _INSTALL_ARGV.get(distro.family)
    return list(argv) if argv is not None else None


def reboot_argv() -> list[str]:
    return list(REBOOT_ARGV)
