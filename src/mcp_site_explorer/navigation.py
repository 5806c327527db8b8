"""Explorer navigation state machine.

States are immutable values; commands are applied by a pure ``transition``
function. ``NavigationState`` holds the current state for one session and
notifies subscribers whenever it changes.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from .paths import root_path
from .search import normalize_query
from .tree import parent_of


@dataclass(frozen=True, slots=True)
class Browsing:
    folder_path: str


@dataclass(frozen=True, slots=True)
class Searching:
    query: str
    # Folder that was being browsed when the search began.
    folder_path: str


State = Browsing | Searching


@dataclass(frozen=True, slots=True)
class OpenFolder:
    path: str


@dataclass(frozen=True, slots=True)
class GoUp:
    pass


@dataclass(frozen=True, slots=True)
class QueryChanged:
    text: str


Command = OpenFolder | GoUp | QueryChanged


def transition(state: State, command: Command, root_name: str) -> State:
    if isinstance(command, OpenFolder):
        # Existence is checked at render time, not here.
        return Browsing(command.path)
    if isinstance(command, GoUp):
        if isinstance(state, Searching):
            return state
        return Browsing(parent_of(state.folder_path, root_name))
    if isinstance(command, QueryChanged):
        query = normalize_query(command.text)
        if query:
            return Searching(query=query, folder_path=state.folder_path)
        return Browsing(state.folder_path)
    raise TypeError(f"Unknown navigation command: {command!r}")


def breadcrumb(state: State) -> str:
    if isinstance(state, Searching):
        return f"/search: {state.query}"
    return state.folder_path


Listener = Callable[[State], None]


class NavigationState:
    """Current position of one explorer session."""

    def __init__(self, root_name: str) -> None:
        self._root_name = root_name
        self._state: State = Browsing(root_path(root_name))
        self._listeners: list[Listener] = []

    @property
    def current(self) -> State:
        return self._state

    @property
    def folder_path(self) -> str:
        return self._state.folder_path

    @property
    def active_query(self) -> str | None:
        return self._state.query if isinstance(self._state, Searching) else None

    @property
    def breadcrumb(self) -> str:
        return breadcrumb(self._state)

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register ``listener``; returns a callable that unsubscribes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def dispatch(self, command: Command) -> State:
        new_state = transition(self._state, command, self._root_name)
        if new_state != self._state:
            self._state = new_state
            for listener in list(self._listeners):
                listener(new_state)
        return self._state

    def enter_folder(self, path: str) -> State:
        return self.dispatch(OpenFolder(path))

    def go_up(self) -> State:
        return self.dispatch(GoUp())

    def type_query(self, text: str) -> State:
        return self.dispatch(QueryChanged(text))
