"""Stack navigator with nested tab groups."""

from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from typing import Any

from wellcare.utils.logging import get_logger

logger = get_logger(__name__)


@dataclass
class RouteDefinition:
    """A single screen reachable by name."""

    name: str
    screen: Callable[..., Any]
    title: str
    header_shown: bool = True


@dataclass
class TabGroupDefinition:
    """A stack route whose content is a set of tabs."""

    name: str
    tabs: list[RouteDefinition]
    initial_tab: str | None = None
    header_shown: bool = False

    @property
    def title(self) -> str:
        return self.name

    def tab(self, name: str) -> RouteDefinition:
        for tab in self.tabs:
            if tab.name == name:
                return tab
        raise KeyError(name)

    def initial_tab_name(self) -> str:
        return self.initial_tab or self.tabs[0].name


@dataclass
class TabGroupState:
    """Active tab plus every tab screen mounted so far."""

    active: str
    screens: dict[str, Any] = field(default_factory=dict)


@dataclass
class StackEntry:
    """One entry on the navigation stack."""

    definition: RouteDefinition | TabGroupDefinition
    screen: Any | None = None
    tabs: TabGroupState | None = None

    @property
    def name(self) -> str:
        return self.definition.name

    @property
    def focused_definition(self) -> RouteDefinition:
        if isinstance(self.definition, TabGroupDefinition):
            return self.definition.tab(self.tabs.active)
        return self.definition

    @property
    def focused_screen(self) -> Any | None:
        if self.tabs is not None:
            return self.tabs.screens.get(self.tabs.active)
        return self.screen

    def mounted_screens(self) -> list[Any]:
        if self.tabs is not None:
            return list(self.tabs.screens.values())
        return [self.screen] if self.screen is not None else []


class Navigator:
    """Declarative navigation over a stack of screens.

    Screens are created on first visit and receive lifecycle calls:
    ``on_mount`` once, ``on_focus`` each time they become the visible screen,
    ``on_params_changed`` when params arrive while already focused, and
    ``on_unmount`` when popped off the stack. Tab screens stay mounted while
    their group is on the stack.
    """

    def __init__(
        self,
        routes: Sequence[RouteDefinition | TabGroupDefinition],
        service: Any,
        initial_route: str,
    ):
        """Initialize navigator.

        Args:
            routes: Stack routes, tab groups included
            service: Passed to every screen it creates
            initial_route: Name of the first stack route
        """
        self.service = service
        self.initial_route = initial_route
        self.stack: list[StackEntry] = []
        self._routes = {route.name: route for route in routes}
        self._tab_groups: dict[str, TabGroupDefinition] = {}

        for route in routes:
            if isinstance(route, TabGroupDefinition):
                for tab in route.tabs:
                    self._tab_groups[tab.name] = route

        if initial_route not in self._routes:
            raise ValueError(f"Unknown initial route: {initial_route}")

    @property
    def focused_screen(self) -> Any | None:
        """Screen currently visible to the user."""
        return self.stack[-1].focused_screen if self.stack else None

    @property
    def current_route(self) -> str | None:
        """Name of the focused screen's route."""
        return self.stack[-1].focused_definition.name if self.stack else None

    @property
    def current_title(self) -> str | None:
        return self.stack[-1].focused_definition.title if self.stack else None

    def tab_names(self) -> list[str]:
        """Tabs of the group on top of the stack, if any."""
        if self.stack and isinstance(self.stack[-1].definition, TabGroupDefinition):
            return [tab.name for tab in self.stack[-1].definition.tabs]
        return []

    def can_go_back(self) -> bool:
        return len(self.stack) > 1

    async def start(self, **params: Any) -> None:
        """Show the initial route."""
        if self.stack:
            return
        await self._push(self._routes[self.initial_route], params)

    async def navigate(self, name: str, **params: Any) -> None:
        """Go to a route by name, reusing it if it is already on the stack.

        Raises:
            ValueError: If no route or tab has that name
        """
        logger.info(f"Navigating to {name} with params {params}")

        if name in self._tab_groups:
            await self._navigate_to_tab(self._tab_groups[name], name, params)
            return

        definition = self._routes.get(name)
        if definition is None:
            raise ValueError(f"Unknown route: {name}")

        index = self._find(name)
        if index is None:
            await self._push(definition, params)
            return

        previous = self.focused_screen
        await self._pop_to(index)
        await self._enter(self.stack[index].focused_screen, params, previous)

    async def go_back(self) -> bool:
        """Pop the top entry; returns False when already at the root."""
        if not self.can_go_back():
            return False

        await self._pop_to(len(self.stack) - 2)
        logger.info(f"Went back to {self.current_route}")
        screen = self.focused_screen
        if screen is not None:
            await screen.on_focus()
        return True

    def set_params(self, screen: Any, **params: Any) -> None:
        """Merge params into a screen; a value of None removes the key."""
        self._merge_params(screen, params)

    async def _navigate_to_tab(self, group: TabGroupDefinition, tab_name: str, params: dict[str, Any]) -> None:
        previous = self.focused_screen
        index = self._find(group.name)

        if index is None:
            entry = StackEntry(definition=group, tabs=TabGroupState(active=tab_name))
            self.stack.append(entry)
        else:
            await self._pop_to(index)
            entry = self.stack[index]
            entry.tabs.active = tab_name

        screen = entry.tabs.screens.get(tab_name)
        if screen is None:
            screen = self._create_screen(group.tab(tab_name), params)
            entry.tabs.screens[tab_name] = screen
            await self._mount(screen)
        else:
            await self._enter(screen, params, previous)

    async def _push(self, definition: RouteDefinition | TabGroupDefinition, params: dict[str, Any]) -> None:
        if isinstance(definition, TabGroupDefinition):
            tab = definition.tab(definition.initial_tab_name())
            screen = self._create_screen(tab, params)
            entry = StackEntry(
                definition=definition,
                tabs=TabGroupState(active=tab.name, screens={tab.name: screen}),
            )
        else:
            screen = self._create_screen(definition, params)
            entry = StackEntry(definition=definition, screen=screen)

        self.stack.append(entry)
        await self._mount(screen)

    async def _pop_to(self, index: int) -> None:
        while len(self.stack) > index + 1:
            entry = self.stack.pop()
            for screen in entry.mounted_screens():
                await screen.on_unmount()

    async def _enter(self, screen: Any, params: dict[str, Any], previous: Any | None) -> None:
        self._merge_params(screen, params)
        if screen is previous:
            if params:
                await screen.on_params_changed(dict(params))
        else:
            await screen.on_focus()

    async def _mount(self, screen: Any) -> None:
        await screen.on_mount()
        await screen.on_focus()

    def _create_screen(self, definition: RouteDefinition, params: dict[str, Any]) -> Any:
        clean = {key: value for key, value in params.items() if value is not None}
        return definition.screen(navigator=self, service=self.service, params=clean)

    def _find(self, name: str) -> int | None:
        for index, entry in enumerate(self.stack):
            if entry.name == name:
                return index
        return None

    @staticmethod
    def _merge_params(screen: Any, params: dict[str, Any]) -> None:
        for key, value in params.items():
            if value is None:
                screen.params.pop(key, None)
            else:
                screen.params[key] = value
