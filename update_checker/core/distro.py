from enum import Enum
from pathlib import Path
from typing import Final

from logly import logger

ARCH_RELEASE_PATH: Final[Path] = Path("/etc/arch-release")
DEBIAN_VERSION_PATH: Final[Path] = Path("/etc/debian_version")
OS_RELEASE_PATH: Final[Path] = Path("/etc/os-release")


class DistributionFamily(Enum):
    """Package ecosystem of the host; the only part that alters behavior."""

    ARCH_LIKE = "arch-like"
    DEBIAN_LIKE = "debian-like"
    KDE_NEON = "kde-neon"
    UNKNOWN = "unknown"


class Distribution(Enum):
    """Detected host distribution.

    The variant only picks commands and display copy; classification and
    install behavior depend on `family`.
    """

    ARCH = "arch"
    CACHYOS = "cachyos"
    DEBIAN = "debian"
    UBUNTU = "ubuntu"
    NEON = "neon"
    UNKNOWN = "unknown"

    @property
    def family(self) -> DistributionFamily:
        return _FAMILIES[self]

    @property
    def display_name(self) -> str:
        return _DISPLAY_NAMES[self]

    @property
    def is_supported(self) -> bool:
        return self is not Distribution.UNKNOWN


_FAMILIES: Final[dict[Distribution, DistributionFamily]] = {
    Distribution.ARCH: DistributionFamily.ARCH_LIKE,
    Distribution.CACHYOS: DistributionFamily.ARCH_LIKE,
    Distribution.DEBIAN: DistributionFamily.DEBIAN_LIKE,
    Distribution.UBUNTU: DistributionFamily.DEBIAN_LIKE,
    Distribution.NEON: DistributionFamily.KDE_NEON,
    Distribution.UNKNOWN: DistributionFamily.UNKNOWN,
}

_DISPLAY_NAMES: Final[dict[Distribution, str]] = {
    Distribution.ARCH: "Arch Linux",
    Distribution.CACHYOS: "CachyOS",
    Distribution.DEBIAN: "Debian",
    Distribution.UBUNTU: "Ubuntu",
    Distribution.NEON: "KDE neon",
    Distribution.UNKNOWN: "Unknown",
}


def _read_text(path: Path) -> str:
    """Reads an identification file, returning an empty string on failure."""
    try:
        return path.read_text(encoding="utf-8", errors="replace")
    except OSError as e:
        logger.debug(f"Could not read {path}: {e}")
        return ""


def _exists(path: Path) -> bool:
    try:
        return path.exists()
    except OSError:
        return False


def detect_distribution(
    arch_marker: Path = ARCH_RELEASE_PATH,
    debian_marker: Path = DEBIAN_VERSION_PATH,
    os_release: Path = OS_RELEASE_PATH,
) -> Distribution:
    """Classifies the host by filesystem markers.

    The Arch marker is checked before the Debian marker. When a marker is
    present, `os_release` is read to refine the variant; an unreadable file
    leaves the base variant in place. This function never raises.

    Args:
        arch_marker: Path whose presence indicates an Arch-based system.
        debian_marker: Path whose presence indicates a Debian-based system.
        os_release: OS identification file searched for vendor strings.

    Returns:
        The detected distribution, or `Distribution.UNKNOWN`.
    """
    if _exists(arch_marker):
        if "CachyOS" in _read_text(os_release):
            return Distribution.CACHYOS
        return Distribution.ARCH

    if _exists(debian_marker):
        content = _read_text(os_release)
        if "KDE neon" in content:
            return Distribution.NEON
        if "Ubuntu" in content:
            return Distribution.UBUNTU
        return Distribution.DEBIAN

    return Distribution.UNKNOWN
