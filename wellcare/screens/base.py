"""Base screen controller, status and alert types."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any, ClassVar, Literal

from wellcare.navigation.navigator import Navigator
from wellcare.services.patients import PatientService
from wellcare.utils.logging import get_logger

logger = get_logger(__name__)

ButtonStyle = Literal["default", "cancel", "destructive"]
ButtonHandler = Callable[[], Awaitable[None]]


class ScreenStatus(StrEnum):
    """Lifecycle of a screen's remote data or pending submission."""

    IDLE = "idle"
    LOADING = "loading"
    LOADED = "loaded"
    ERROR = "error"
    SUBMITTING = "submitting"


@dataclass
class AlertButton:
    """A button on an alert dialog."""

    text: str
    style: ButtonStyle = "default"
    on_press: ButtonHandler | None = None


@dataclass
class Alert:
    """A dialog queued by a screen for the view layer to show."""

    title: str
    message: str
    buttons: list[AlertButton] = field(default_factory=lambda: [AlertButton("OK")])
    dismissed: bool = False

    @property
    def needs_choice(self) -> bool:
        return len(self.buttons) > 1

    def button(self, text: str) -> AlertButton:
        for button in self.buttons:
            if button.text == text:
                return button
        raise KeyError(f"Alert {self.title!r} has no button {text!r}")

    async def press(self, text: str) -> None:
        """Dismiss the alert and run the chosen button's handler."""
        button = self.button(text)
        self.dismissed = True
        if button.on_press is not None:
            await button.on_press()


class Screen:
    """Controller owning one screen's local state.

    Subclasses override the lifecycle hooks; the navigator calls them.
    Remote failures are caught per screen, logged and turned into alerts.
    """

    route_name: ClassVar[str] = ""

    def __init__(self, navigator: Navigator, service: PatientService, params: dict[str, Any] | None = None):
        self.navigator = navigator
        self.service = service
        self.params: dict[str, Any] = dict(params or {})
        self.status = ScreenStatus.IDLE
        self.alerts: list[Alert] = []
        self.mounted = False

    @property
    def is_loading(self) -> bool:
        return self.status == ScreenStatus.LOADING

    @property
    def is_submitting(self) -> bool:
        return self.status == ScreenStatus.SUBMITTING

    @property
    def last_alert(self) -> Alert | None:
        return self.alerts[-1] if self.alerts else None

    def show_alert(self, title: str, message: str, buttons: list[AlertButton] | None = None) -> Alert:
        """Queue an alert for display."""
        alert = Alert(title=title, message=message, buttons=buttons or [AlertButton("OK")])
        self.alerts.append(alert)
        return alert

    def show_error(self, message: str) -> Alert:
        return self.show_alert("Error", message)

    def confirm(self, title: str, message: str, confirm_text: str, on_confirm: ButtonHandler) -> Alert:
        """Queue a destructive confirmation; nothing runs until it is pressed."""
        return self.show_alert(
            title,
            message,
            [
                AlertButton("Cancel", style="cancel"),
                AlertButton(confirm_text, style="destructive", on_press=on_confirm),
            ],
        )

    def has_pending_alert(self, title: str) -> bool:
        return any(alert.title == title and not alert.dismissed for alert in self.alerts)

    def drain_alerts(self) -> list[Alert]:
        """Hand every queued alert to the caller and clear the queue."""
        alerts, self.alerts = self.alerts, []
        return alerts

    async def on_mount(self) -> None:
        self.mounted = True

    async def on_focus(self) -> None:
        pass

    async def on_params_changed(self, params: dict[str, Any]) -> None:
        pass

    async def on_unmount(self) -> None:
        self.mounted = False
