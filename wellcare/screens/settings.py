"""Welcome and settings screens; neither talks to the service."""

from dataclasses import dataclass
from typing import Any

from wellcare.screens.base import AlertButton, Screen
from wellcare.utils.logging import get_logger

logger = get_logger(__name__)

NOT_IMPLEMENTED_MESSAGE = "This feature is not implemented yet."


class WelcomeScreen(Screen):
    route_name = "Welcome"
    title = "Welcome to WellCare"
    subtitle = "Efficient Hospital Management"

    async def get_started(self) -> None:
        await self.navigator.navigate("Main")


@dataclass
class Preferences:
    """Local-only preference switches."""

    notifications: bool = True
    dark_mode: bool = False
    auto_sync: bool = True


class SettingsScreen(Screen):
    """Preference toggles and account actions.

    Account actions are placeholders and logout only logs; there is no
    session to clear.
    """

    route_name = "Settings"
    account_actions = ("Change Password", "Privacy Policy", "Terms of Service")

    def __init__(self, *args: Any, **kwargs: Any):
        super().__init__(*args, **kwargs)
        self.preferences = Preferences()

    def toggle(self, preference: str) -> bool:
        """Flip a preference and return its new value."""
        if not hasattr(self.preferences, preference):
            raise KeyError(f"Unknown preference: {preference}")
        value = not getattr(self.preferences, preference)
        setattr(self.preferences, preference, value)
        return value

    def open_account_action(self, action: str) -> None:
        if action not in self.account_actions:
            raise KeyError(f"Unknown account action: {action}")
        self.show_alert(action, NOT_IMPLEMENTED_MESSAGE)

    def request_logout(self) -> None:
        self.show_alert(
            "Logout",
            "Are you sure you want to logout?",
            [AlertButton("Cancel", style="cancel"), AlertButton("OK", on_press=self._logout)],
        )

    async def _logout(self) -> None:
        logger.info("Logout pressed")
