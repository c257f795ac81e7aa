#===============================================================================
#  Hermes | navigation.py
#===============================================================================
#  Author      : Edwin A. Rodriguez
#  Role/Team   : SAP COE / SAP SRE (GRM-Testing-Automation & Governance)
#  Created     : 2026-02-10
#  Last Update : 2026-10-19
#
#  Summary
#  -------
#  Keyboard navigation state machine for the overlay panel.
#
#  Every input is an event. A transition takes the current NavigationState and
#  an event and returns a new state plus a list of effects (commands to run,
#  queries to start, "close the panel"). Nothing here touches Qt or spawns
#  processes; the controller carries out the effects.
#
#  Modes
#  -----
#    COMMAND        browse the command tree by key
#    SEARCH         substring search over every action
#    APP_LAUNCH     filter and launch installed applications
#    WINDOW_SWITCH  filter and focus open windows
#
#  Asynchronous results (apps, windows) carry the request id they were started
#  with and are dropped unless that request is still the active one.
#
#  Copyright (c) 2026 Edwin A. Rodriguez. All rights reserved.
#  Provided "AS IS", without warranty of any kind.
#===============================================================================

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Callable, Dict, List, Optional, Sequence, Tuple, Union

from .constants import (
    APP_MODE_KEY,
    BREADCRUMB_SEPARATOR,
    MAX_APPS_VISIBLE,
    SEARCH_KEY,
    WINDOW_MODE_KEY,
)
from .models import AppInfo, CommandEntry, CommandTree, FlatCommand, Submenu, WindowInfo
from .search import SearchIndex

logger = logging.getLogger(__name__)


class Mode(Enum):
    COMMAND = "command"
    SEARCH = "search"
    APP_LAUNCH = "app_launch"
    WINDOW_SWITCH = "window_switch"


MenuFrame = Tuple[str, CommandTree]


def find_key(items: CommandTree, key: str) -> Optional[str]:
    """Case-insensitive key lookup; returns the stored spelling."""
    if key in items:
        return key
    wanted = key.lower()
    for k in items:
        if k.lower() == wanted:
            return k
    return None


@dataclass(frozen=True)
class NavigationState:
    mode: Mode = Mode.COMMAND
    menu_stack: Tuple[MenuFrame, ...] = ()
    current_items: CommandTree = field(default_factory=dict)
    search_query: str = ""
    selected_index: int = -1
    search_results: Tuple[FlatCommand, ...] = ()
    saved_items: Optional[CommandTree] = None
    apps: Tuple[AppInfo, ...] = ()
    apps_final: bool = False
    windows: Tuple[WindowInfo, ...] = ()
    pending_request: Optional[int] = None
    request_seq: int = 0

    @property
    def at_root(self) -> bool:
        return not self.menu_stack

    @property
    def breadcrumb(self) -> str:
        return BREADCRUMB_SEPARATOR.join(label for label, _ in self.menu_stack)

    @property
    def sorted_keys(self) -> List[str]:
        return sorted(self.current_items)

    @property
    def visible_apps(self) -> List[AppInfo]:
        q = self.search_query.lower()
        apps = [a for a in self.apps if q in a.name.lower()] if q else list(self.apps)
        return apps[:MAX_APPS_VISIBLE]

    @property
    def visible_windows(self) -> List[WindowInfo]:
        q = self.search_query.lower()
        if not q:
            return list(self.windows)
        return [w for w in self.windows if q in w.title.lower() or q in w.app.lower()]

    @property
    def selection_count(self) -> int:
        if self.mode is Mode.COMMAND:
            return len(self.current_items)
        if self.mode is Mode.SEARCH:
            return len(self.search_results)
        if self.mode is Mode.APP_LAUNCH:
            return len(self.visible_apps)
        return len(self.visible_windows)


# ----------------------------
# Events
# ----------------------------
@dataclass(frozen=True)
class Show:
    pass


@dataclass(frozen=True)
class KeyPressed:
    char: str


@dataclass(frozen=True)
class Select:
    key: str


@dataclass(frozen=True)
class Activate:
    pass


@dataclass(frozen=True)
class Back:
    pass


@dataclass(frozen=True)
class Cancel:
    pass


@dataclass(frozen=True)
class EnterSearch:
    pass


@dataclass(frozen=True)
class EnterAppMode:
    pass


@dataclass(frozen=True)
class EnterWindowMode:
    pass


@dataclass(frozen=True)
class QueryChanged:
    text: str


@dataclass(frozen=True)
class MoveSelection:
    delta: int


@dataclass(frozen=True)
class AppsLoaded:
    request_id: int
    apps: Sequence[AppInfo]
    final: bool = False


@dataclass(frozen=True)
class WindowsLoaded:
    request_id: int
    windows: Sequence[WindowInfo]


Event = Union[
    Show, KeyPressed, Select, Activate, Back, Cancel, EnterSearch, EnterAppMode,
    EnterWindowMode, QueryChanged, MoveSelection, AppsLoaded, WindowsLoaded,
]


# ----------------------------
# Effects
# ----------------------------
@dataclass(frozen=True)
class ExecuteCommand:
    command: str


@dataclass(frozen=True)
class LaunchApp:
    name: str


@dataclass(frozen=True)
class FocusWindow:
    window_id: int


@dataclass(frozen=True)
class ClosePanel:
    pass


@dataclass(frozen=True)
class LoadApps:
    request_id: int


@dataclass(frozen=True)
class QueryWindows:
    request_id: int


Effect = Union[ExecuteCommand, LaunchApp, FocusWindow, ClosePanel, LoadApps, QueryWindows]
Transition = Tuple[NavigationState, List[Effect]]


class NavigationMachine:
    """Owns the one NavigationState of a panel session."""

    def __init__(self, root: CommandTree, index: SearchIndex):
        self.root = root
        self.index = index
        self.state = NavigationState(current_items=root)
        self._handlers: Dict[type, Callable[[NavigationState, Event], Transition]] = {
            Show: self._show,
            KeyPressed: self._key_pressed,
            Select: self._select,
            Activate: self._activate,
            Back: self._back,
            Cancel: self._cancel,
            EnterSearch: self._enter_search,
            EnterAppMode: self._enter_app_mode,
            EnterWindowMode: self._enter_window_mode,
            QueryChanged: self._query_changed,
            MoveSelection: self._move_selection,
            AppsLoaded: self._apps_loaded,
            WindowsLoaded: self._windows_loaded,
        }

    def handle(self, event: Event) -> List[Effect]:
        self.state, effects = self.transition(self.state, event)
        return effects

    def transition(self, state: NavigationState, event: Event) -> Transition:
        handler = self._handlers.get(type(event))
        if handler is None:
            raise TypeError(f"Unknown navigation event: {event!r}")
        return handler(state, event)

    # ----------------------------
    # Session
    # ----------------------------
    def _show(self, s: NavigationState, e: Show) -> Transition:
        # request_seq survives so late results from a previous session stay stale
        return NavigationState(current_items=self.root, request_seq=s.request_seq), []

    def _to_root(self, s: NavigationState) -> NavigationState:
        return NavigationState(current_items=self.root, request_seq=s.request_seq)

    # ----------------------------
    # Command mode
    # ----------------------------
    def _key_pressed(self, s: NavigationState, e: KeyPressed) -> Transition:
        if s.mode is not Mode.COMMAND or len(e.char) != 1:
            return s, []
        if e.char == SEARCH_KEY:
            return self._enter_search(s, EnterSearch())
        if s.at_root and e.char == APP_MODE_KEY:
            return self._enter_app_mode(s, EnterAppMode())
        if s.at_root and e.char == WINDOW_MODE_KEY:
            return self._enter_window_mode(s, EnterWindowMode())
        key = find_key(s.current_items, e.char)
        if key is None:
            return s, []
        return self._select(s, Select(key))

    def _select(self, s: NavigationState, e: Select) -> Transition:
        if s.mode is not Mode.COMMAND:
            return s, []
        key = find_key(s.current_items, e.key)
        if key is None:
            return s, []
        entry: CommandEntry = s.current_items[key]
        if isinstance(entry, Submenu):
            return replace(
                s,
                menu_stack=s.menu_stack + ((entry.title, s.current_items),),
                current_items=entry.children,
                selected_index=-1,
            ), []
        s = replace(s, selected_index=s.sorted_keys.index(key))
        return s, [ExecuteCommand(entry.command), ClosePanel()]

    def _back(self, s: NavigationState, e: Back) -> Transition:
        if s.mode is not Mode.COMMAND:
            return s, []
        if not s.menu_stack:
            return s, [ClosePanel()]
        _, items = s.menu_stack[-1]
        return replace(s, menu_stack=s.menu_stack[:-1], current_items=items, selected_index=-1), []

    # ----------------------------
    # Shared
    # ----------------------------
    def _activate(self, s: NavigationState, e: Activate) -> Transition:
        i = s.selected_index
        if i < 0 or i >= s.selection_count:
            return s, []
        if s.mode is Mode.COMMAND:
            return self._select(s, Select(s.sorted_keys[i]))
        if s.mode is Mode.SEARCH:
            return s, [ExecuteCommand(s.search_results[i].command), ClosePanel()]
        if s.mode is Mode.APP_LAUNCH:
            return s, [LaunchApp(s.visible_apps[i].name), ClosePanel()]
        return s, [FocusWindow(s.visible_windows[i].id), ClosePanel()]

    def _cancel(self, s: NavigationState, e: Cancel) -> Transition:
        if s.mode is Mode.COMMAND:
            return s, [ClosePanel()]
        if s.mode is Mode.SEARCH:
            items = s.saved_items if s.saved_items is not None else s.current_items
            return replace(
                s,
                mode=Mode.COMMAND,
                current_items=items,
                saved_items=None,
                search_query="",
                search_results=(),
                selected_index=-1,
            ), []
        return self._to_root(s), []

    def _move_selection(self, s: NavigationState, e: MoveSelection) -> Transition:
        count = s.selection_count
        if count == 0:
            return s, []
        if s.selected_index < 0:
            return replace(s, selected_index=0), []
        return replace(s, selected_index=(s.selected_index + e.delta) % count), []

    def _query_changed(self, s: NavigationState, e: QueryChanged) -> Transition:
        if s.mode is Mode.COMMAND:
            return s, []
        if s.mode is Mode.SEARCH:
            results = tuple(self.index.search(e.text))
            return replace(
                s,
                search_query=e.text,
                search_results=results,
                selected_index=0 if results else -1,
            ), []
        s = replace(s, search_query=e.text)
        return replace(s, selected_index=0 if s.selection_count else -1), []

    # ----------------------------
    # Search mode
    # ----------------------------
    def _enter_search(self, s: NavigationState, e: EnterSearch) -> Transition:
        if s.mode is not Mode.COMMAND:
            return s, []
        return replace(
            s,
            mode=Mode.SEARCH,
            saved_items=s.current_items,
            search_query="",
            search_results=(),
            selected_index=-1,
        ), []

    # ----------------------------
    # App / window modes
    # ----------------------------
    def _enter_app_mode(self, s: NavigationState, e: EnterAppMode) -> Transition:
        if s.mode is not Mode.COMMAND or not s.at_root:
            return s, []
        rid = s.request_seq + 1
        return replace(
            s,
            mode=Mode.APP_LAUNCH,
            search_query="",
            selected_index=-1,
            apps=(),
            apps_final=False,
            pending_request=rid,
            request_seq=rid,
        ), [LoadApps(rid)]

    def _enter_window_mode(self, s: NavigationState, e: EnterWindowMode) -> Transition:
        if s.mode is not Mode.COMMAND or not s.at_root:
            return s, []
        rid = s.request_seq + 1
        return replace(
            s,
            mode=Mode.WINDOW_SWITCH,
            search_query="",
            selected_index=-1,
            windows=(),
            pending_request=rid,
            request_seq=rid,
        ), [QueryWindows(rid)]

    def _apps_loaded(self, s: NavigationState, e: AppsLoaded) -> Transition:
        if s.mode is not Mode.APP_LAUNCH or e.request_id != s.pending_request:
            logger.debug("Dropping stale app list for request %s", e.request_id)
            return s, []
        s = replace(s, apps=tuple(e.apps), apps_final=e.final)
        return replace(s, selected_index=0 if s.selection_count else -1), []

    def _windows_loaded(self, s: NavigationState, e: WindowsLoaded) -> Transition:
        if s.mode is not Mode.WINDOW_SWITCH or e.request_id != s.pending_request:
            logger.debug("Dropping stale window list for request %s", e.request_id)
            return s, []
        s = replace(s, windows=tuple(e.windows))
        return replace(s, selected_index=0 if s.selection_count else -1), []
