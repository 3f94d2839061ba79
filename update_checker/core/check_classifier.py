from typing import Final

from update_checker.core.distro import Distribution, DistributionFamily
from update_checker.core.update_types import (
    CheckFailed,
    CheckResult,
    NoUpdates,
    UpdatesAvailable,
)

# apt prints this on every non-interactive invocation; it is not a failure.
APT_CLI_WARNING: Final[str] = "WARNING: apt does not have a stable CLI interface"
APT_LISTING_HEADER: Final[str] = "Listing..."


def classify_check_output(
    distro: Distribution, stdout: str, stderr: str
) -> CheckResult:
    """Classifies the output of a check command.

    Rules are applied in order:

    1. For apt-based systems, stderr carrying the apt CLI warning is dropped.
    2. Any remaining stderr, even whitespace, is a failure.
    3. Empty stdout, or apt output starting with the `Listing...` header, means
       the system is up to date.
    4. Otherwise updates are available. The count is the number of newlines in
       stdout, minus one for apt-based systems to discard the header line.

    Args:
        distro: Distribution the command was run for.
        stdout: Decoded standard output.
        stderr: Decoded standard error.

    Returns:
        The classified result. Identical inputs always yield equal results.
    """
    debian_like = distro.family is DistributionFamily.DEBIAN_LIKE

    if debian_like and APT_CLI_WARNING in stderr:
        stderr = ""

    if stderr:
        return CheckFailed(stderr.strip())

    if not stdout.strip() or (debian_like and stdout.startswith(APT_LISTING_HEADER)):
        return NoUpdates()

    count = stdout.count("\n")
    if debian_like:
        count -= 1
    return UpdatesAvailable(count=max(count, 0), raw_listing=stdout)
