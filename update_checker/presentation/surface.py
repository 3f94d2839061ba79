from enum import Enum
from typing import Protocol

from update_checker.core.notification_policy import PromptChoice, Severity
from update_checker.core.update_types import TrayState


class MenuAction(Enum):
    CHECK = "check"
    LIST = "list"
    INSTALL = "install"


class PresentationSurface(Protocol):
    """What the controller needs from the tray user interface."""

    def set_icon_state(self, state: TrayState) -> None: ...

    def set_tooltip(self, text: str) -> None: ...

    def set_menu_action_enabled(self, action: MenuAction, enabled: bool) -> None: ...

    def show_notification(self, title: str, body: str, severity: Severity) -> None: ...

    def show_blocking_prompt(self, count: int) -> PromptChoice: ...

    def show_countdown(self) -> None: ...

    def show_listing(self, text: str) -> bool:
        """Shows the pending updates; returns True if the user chose to install."""
        ...

    def show_completion_dialog(self) -> bool:
        """Announces the end of the install; returns True if a reboot is wanted."""
        ...
