#!/usr/bin/env python3
"""Interactive terminal front-end for the WellCare patient service."""

import asyncio
import sys
from collections.abc import Awaitable, Callable
from typing import Any

from rich.console import Console, Group, RenderableType
from rich.panel import Panel
from rich.prompt import Prompt
from rich.table import Table
from rich.text import Text

from wellcare.clients.api import ApiClient, ApiConfig
from wellcare.navigation.routes import build_navigator
from wellcare.screens import (
    AddPatientScreen,
    AddTestScreen,
    Alert,
    CriticalPatientsScreen,
    PatientDetailsScreen,
    PatientHistoryScreen,
    PatientsListScreen,
    Screen,
    SettingsScreen,
    UpdateDeletePatientScreen,
    UpdateDeleteTestScreen,
    WelcomeScreen,
)
from wellcare.screens.formatting import MedicalTestRow, PatientRow
from wellcare.screens.medical_test_forms import MedicalTestFormScreen
from wellcare.screens.patient_forms import PatientFormScreen
from wellcare.services.patients import RestPatientService
from wellcare.utils.logging import get_logger, setup_logging

logger = get_logger(__name__)

TAB_ALIASES = {
    "patients": "PatientsList",
    "add": "AddPatient",
    "critical": "CriticalPatients",
    "settings": "Settings",
}

SCREEN_COMMANDS = {
    "Welcome": ["start - Open the patient tabs"],
    "PatientsList": ["search <text> - Filter by name (empty clears)", "open <n> - Show patient n", "refresh"],
    "CriticalPatients": ["open <n> - Show patient n", "refresh"],
    "PatientDetails": ["add-test", "history", "edit - Update or delete this patient", "test <n> - Edit test n"],
    "AddPatient": ["fill - Enter the patient's details and submit"],
    "UpdateDeletePatient": ["edit - Change fields and save", "delete"],
    "AddTest": ["fill - Enter the test and submit"],
    "UpdateDeleteTest": ["edit - Change the test and save", "delete"],
    "PatientHistory": [],
    "Settings": ["toggle <notifications|dark_mode|auto_sync>", "account <n>", "logout"],
}

PATIENT_FIELD_LABELS = [
    ("name", "Name *"),
    ("age", "Age *"),
    ("gender", "Gender *"),
    ("address", "Address"),
    ("phone_number", "Phone Number"),
    ("medical_history", "Medical History (comma-separated)"),
]


def _patient_table(rows: list[PatientRow], empty_message: str) -> RenderableType:
    if not rows:
        return Text(empty_message, style="dim")

    table = Table(show_header=True, header_style="bold", expand=True)
    table.add_column("#", justify="right", width=3)
    table.add_column("Name", style="bold")
    table.add_column("Details")
    table.add_column("", width=2)
    for index, row in enumerate(rows, start=1):
        table.add_row(str(index), row.name, row.details, "[red]⚠[/red]" if row.critical else "")
    return table


def _test_table(rows: list[MedicalTestRow], empty_message: str) -> RenderableType:
    if not rows:
        return Text(empty_message, style="dim")

    table = Table(show_header=True, header_style="bold", expand=True)
    table.add_column("#", justify="right", width=3)
    table.add_column("Type", style="bold")
    table.add_column("Value")
    table.add_column("Date", style="dim")
    for index, row in enumerate(rows, start=1):
        table.add_row(str(index), row.type, row.value, row.date)
    return table


def _header_lines(lines: list[str]) -> RenderableType:
    if not lines:
        return Text("")
    name, *details = lines
    text = Text(name, style="bold")
    for line in details:
        if line:
            text.append(f"\n{line}", style="default")
    return text


def render_welcome(screen: WelcomeScreen) -> RenderableType:
    return Text.assemble(
        (screen.title, "bold blue"),
        "\n",
        (screen.subtitle, "italic"),
        "\n\nType 'start' to get started.",
    )


def render_patients_list(screen: PatientsListScreen) -> RenderableType:
    parts: list[RenderableType] = []
    if screen.search_query:
        parts.append(Text(f"Search: {screen.search_query}", style="cyan"))
    parts.append(_patient_table(screen.rows, "No patients found"))
    return Group(*parts)


def render_critical_patients(screen: CriticalPatientsScreen) -> RenderableType:
    return _patient_table(screen.rows, screen.empty_message)


def render_patient_details(screen: PatientDetailsScreen) -> RenderableType:
    if screen.patient is None:
        return Text("Loading..." if screen.is_loading else "Patient unavailable", style="dim")

    parts: list[RenderableType] = [_header_lines(screen.header)]
    if screen.patient.critical_condition:
        parts.append(Text(f"⚠ {screen.critical_label}", style="bold red"))
    parts.append(Text("\nRecent Tests", style="bold"))
    parts.append(_test_table(screen.test_rows, screen.empty_message))
    return Group(*parts)


def render_patient_history(screen: PatientHistoryScreen) -> RenderableType:
    if screen.history is None:
        return Text("Loading..." if screen.is_loading else "History unavailable", style="dim")

    return Group(
        _header_lines(screen.header),
        Text("\nTest History", style="bold"),
        _test_table(screen.test_rows, screen.empty_message),
    )


def render_patient_form(screen: PatientFormScreen) -> RenderableType:
    table = Table.grid(padding=(0, 2))
    table.add_column(style="bold")
    table.add_column()
    for field_name, label in PATIENT_FIELD_LABELS:
        table.add_row(label, getattr(screen.form, field_name))
    if screen.is_submitting:
        table.add_row("", "[dim]Saving...[/dim]")
    return table


def render_test_form(screen: MedicalTestFormScreen) -> RenderableType:
    table = Table.grid(padding=(0, 2))
    table.add_column(style="bold")
    table.add_column()
    table.add_row("Test Type *", screen.form.type)
    table.add_row("Test Value *", screen.form.value)
    return table


def render_settings(screen: SettingsScreen) -> RenderableType:
    prefs = Table(title="Preferences", show_header=False, expand=True)
    prefs.add_column()
    prefs.add_column(justify="right")
    for label, value in (
        ("Enable Notifications", screen.preferences.notifications),
        ("Dark Mode", screen.preferences.dark_mode),
        ("Auto-sync Data", screen.preferences.auto_sync),
    ):
        prefs.add_row(label, "[green]on[/green]" if value else "[dim]off[/dim]")

    account = "\n".join(f"{index}. {action}" for index, action in enumerate(screen.account_actions, start=1))
    return Group(prefs, Text("\nAccount", style="bold"), Text(account), Text("\nLogout", style="red"))


RENDERERS: dict[type[Screen], Callable[[Any], RenderableType]] = {
    WelcomeScreen: render_welcome,
    PatientsListScreen: render_patients_list,
    CriticalPatientsScreen: render_critical_patients,
    PatientDetailsScreen: render_patient_details,
    PatientHistoryScreen: render_patient_history,
    AddPatientScreen: render_patient_form,
    UpdateDeletePatientScreen: render_patient_form,
    AddTestScreen: render_test_form,
    UpdateDeleteTestScreen: render_test_form,
    SettingsScreen: render_settings,
}


def render_screen(screen: Screen, title: str | None = None) -> RenderableType:
    """Render a screen controller's current state as a panel."""
    body = RENDERERS[type(screen)](screen)
    return Panel(body, title=f"[bold blue]{title or screen.route_name}[/bold blue]", border_style="blue")


def render_alert(alert: Alert) -> RenderableType:
    style = "red" if alert.title == "Error" else "yellow"
    return Panel(alert.message, title=f"[bold]{alert.title}[/bold]", border_style=style)


class WellCareCLI:
    """Interactive terminal interface over the screen controllers."""

    def __init__(self, base_url: str | None = None, console: Console | None = None):
        """Initialize the CLI.

        Args:
            base_url: API root, defaults to WELLCARE_API_URL or the emulator host
            console: Rich console to draw on
        """
        config = ApiConfig(base_url=base_url) if base_url else ApiConfig.from_env()
        self.api = ApiClient(config)
        self.service = RestPatientService(self.api)
        self.navigator = build_navigator(self.service)
        self.console = console or Console()
        self._handlers: dict[str, Callable[[Any, str, str], Awaitable[bool]]] = {
            "Welcome": self._welcome_command,
            "PatientsList": self._patients_list_command,
            "CriticalPatients": self._critical_patients_command,
            "PatientDetails": self._patient_details_command,
            "AddPatient": self._add_patient_command,
            "UpdateDeletePatient": self._update_patient_command,
            "AddTest": self._add_test_command,
            "UpdateDeleteTest": self._update_test_command,
            "Settings": self._settings_command,
        }

    async def run(self) -> None:
        """Start the interactive session."""
        self.console.print(
            Panel.fit(
                "[bold blue]🏥 WellCare - Patient Tracking[/bold blue]\n"
                f"Service: {self.api.config.base_url}\n"
                "Commands: /help, /back, /tab <name>, /quit",
                border_style="blue",
            )
        )

        await self.navigator.start()

        try:
            while True:
                screen = self.navigator.focused_screen
                await self._show_alerts(screen)
                self.console.print(render_screen(screen, self.navigator.current_title))

                user_input = Prompt.ask(f"\n[bold cyan]{self.navigator.current_route}[/bold cyan]")
                command, _, arg = user_input.strip().partition(" ")
                command = command.lower()

                if command in ["/quit", "/exit", "quit", "exit"]:
                    break
                if command == "":
                    continue

                handled = await self.handle_command(screen, command, arg.strip())
                if not handled:
                    self.console.print(f"[yellow]Unknown command: {command}. Type /help for options.[/yellow]")

                await self._show_alerts(screen)

        except KeyboardInterrupt:
            pass
        finally:
            self.console.print("\n[yellow]👋 Goodbye![/yellow]")
            await self.api.aclose()

    async def handle_command(self, screen: Screen, command: str, arg: str) -> bool:
        """Dispatch one command; returns False if nothing understood it."""
        if command == "/help":
            self._show_help(screen)
            return True

        if command == "/back":
            if not await self.navigator.go_back():
                self.console.print("[dim]Nothing to go back to.[/dim]")
            return True

        if command == "/tab":
            route = TAB_ALIASES.get(arg.lower())
            if route is None or not self.navigator.tab_names():
                self.console.print(f"[yellow]Tabs: {', '.join(TAB_ALIASES)}[/yellow]")
                return True
            await self.navigator.navigate(route)
            return True

        handler = self._handlers.get(screen.route_name)
        if handler is None:
            return False
        return await handler(screen, command, arg)

    async def _show_alerts(self, *screens: Screen | None) -> None:
        """Display queued alerts, prompting when an alert offers a choice."""
        pending = True
        while pending:
            pending = False
            candidates = dict.fromkeys(s for s in (*screens, self.navigator.focused_screen) if s is not None)
            for screen in candidates:
                for alert in screen.drain_alerts():
                    pending = True
                    self.console.print(render_alert(alert))
                    if alert.needs_choice:
                        choices = [button.text for button in alert.buttons]
                        choice = Prompt.ask("Choose", choices=choices, default=choices[0])
                        await alert.press(choice)
                    else:
                        await alert.press(alert.buttons[0].text)

    def _show_help(self, screen: Screen) -> None:
        screen_help = "\n".join(f"• {line}" for line in SCREEN_COMMANDS.get(screen.route_name, []))
        help_text = (
            "[bold]Available Commands:[/bold]\n"
            "• /help - Show this help message\n"
            "• /back - Return to the previous screen\n"
            f"• /tab <{'|'.join(TAB_ALIASES)}> - Switch tabs\n"
            "• /quit or /exit - Exit\n"
        )
        if screen_help:
            help_text += f"\n[bold]On this screen:[/bold]\n{screen_help}"
        self.console.print(Panel(help_text.strip(), title="[cyan]❓ Help[/cyan]", border_style="cyan"))

    def _pick(self, rows: list[Any], arg: str) -> Any | None:
        """Resolve a 1-based row number typed by the user."""
        if not arg.isdecimal() or not 1 <= int(arg) <= len(rows):
            self.console.print(f"[yellow]Pick a number between 1 and {len(rows)}.[/yellow]")
            return None
        return rows[int(arg) - 1]

    async def _welcome_command(self, screen: WelcomeScreen, command: str, arg: str) -> bool:
        if command == "start":
            await screen.get_started()
            return True
        return False

    async def _patients_list_command(self, screen: PatientsListScreen, command: str, arg: str) -> bool:
        if command == "search":
            screen.set_search_query(arg)
        elif command == "open":
            row = self._pick(screen.rows, arg)
            if row:
                await screen.select_patient(row.id)
        elif command == "refresh":
            await screen.fetch_patients()
        else:
            return False
        return True

    async def _critical_patients_command(self, screen: CriticalPatientsScreen, command: str, arg: str) -> bool:
        if command == "open":
            row = self._pick(screen.rows, arg)
            if row:
                await screen.select_patient(row.id)
        elif command == "refresh":
            await screen.refresh()
        else:
            return False
        return True

    async def _patient_details_command(self, screen: PatientDetailsScreen, command: str, arg: str) -> bool:
        if command == "add-test":
            await screen.add_test()
        elif command == "history":
            await screen.view_history()
        elif command == "edit":
            await screen.edit_patient()
        elif command == "test":
            row = self._pick(screen.test_rows, arg)
            if row:
                await screen.select_test(row.id)
        elif command == "refresh":
            await screen.refresh()
        else:
            return False
        return True

    async def _add_patient_command(self, screen: AddPatientScreen, command: str, arg: str) -> bool:
        if command != "fill":
            return False
        self._prompt_patient_form(screen)
        await screen.submit()
        return True

    async def _update_patient_command(self, screen: UpdateDeletePatientScreen, command: str, arg: str) -> bool:
        if command == "edit":
            self._prompt_patient_form(screen)
            await screen.submit()
        elif command == "delete":
            screen.request_delete()
        else:
            return False
        return True

    async def _add_test_command(self, screen: AddTestScreen, command: str, arg: str) -> bool:
        if command != "fill":
            return False
        self._prompt_test_form(screen)
        await screen.submit()
        return True

    async def _update_test_command(self, screen: UpdateDeleteTestScreen, command: str, arg: str) -> bool:
        if command == "edit":
            self._prompt_test_form(screen)
            await screen.submit()
        elif command == "delete":
            screen.request_delete()
        else:
            return False
        return True

    async def _settings_command(self, screen: SettingsScreen, command: str, arg: str) -> bool:
        if command == "toggle":
            try:
                value = screen.toggle(arg.replace("-", "_"))
            except KeyError:
                self.console.print("[yellow]Preferences: notifications, dark_mode, auto_sync[/yellow]")
                return True
            self.console.print(f"{arg}: {'on' if value else 'off'}")
        elif command == "account":
            action = self._pick(list(screen.account_actions), arg)
            if action:
                screen.open_account_action(action)
        elif command == "logout":
            screen.request_logout()
        else:
            return False
        return True

    def _prompt_patient_form(self, screen: PatientFormScreen) -> None:
        genders = "/".join(screen.gender_options)
        for field_name, label in PATIENT_FIELD_LABELS:
            if field_name == "gender":
                label = f"{label} ({genders})"
            current = getattr(screen.form, field_name)
            screen.set_field(field_name, Prompt.ask(label, default=current, show_default=bool(current)))

    def _prompt_test_form(self, screen: MedicalTestFormScreen) -> None:
        options = "\n".join(f"{index}. {name}" for index, name in enumerate(screen.type_options, start=1))
        self.console.print(options)
        choice = Prompt.ask("Test Type *", default=screen.form.type, show_default=bool(screen.form.type))
        if choice.isdecimal() and 1 <= int(choice) <= len(screen.type_options):
            choice = screen.type_options[int(choice) - 1]
        screen.set_type(choice)
        screen.set_value(Prompt.ask("Test Value *", default=screen.form.value, show_default=bool(screen.form.value)))


def main():
    """Main entry point for the WellCare CLI."""
    base_url = sys.argv[1] if len(sys.argv) > 1 else None

    setup_logging()
    cli = WellCareCLI(base_url)
    asyncio.run(cli.run())


if __name__ == "__main__":
    main()
