from dataclasses import dataclass
from typing import Final

MIN_INTERVAL_MINUTES: Final[int] = 15
MAX_INTERVAL_MINUTES: Final[int] = 1440


def clamp_interval(minutes: int) -> int:
    return max(MIN_INTERVAL_MINUTES, min(int(minutes), MAX_INTERVAL_MINUTES))


@dataclass(frozen=True, slots=True)
class Configuration:
    """User preferences that drive scheduling and notifications.

    Attributes:
        auto_check_enabled: Whether the recurring check timer runs.
        auto_check_interval_minutes: Recurring check period, 15 to 1440 minutes.
        notify_on_updates: Prompt when updates are found.
        notify_on_no_updates: Notify when the system is up to date.
    """

    auto_check_enabled: bool = True
    auto_check_interval_minutes: int = 60
    notify_on_updates: bool = True
    notify_on_no_updates: bool = False

    def __post_init__(self) -> None:
        clamped = clamp_interval(self.auto_check_interval_minutes)
        if clamped != self.auto_check_interval_minutes:
            object.__setattr__(self, "auto_check_interval_minutes", clamped)

    @property
    def interval_ms(self) -> int:
        return self.auto_check_interval_minutes * 60 * 1000
