"""Inbox state, the events that change it, and the reducer.

`update` is the only place state changes. It never does I/O; anything that
needs the outside world comes back as a Command for the app to run.
"""

from __future__ import annotations

import dataclasses
from collections.abc import Sequence
from dataclasses import dataclass

from ..log import get_logger
from ..models import NotificationRecord

_log = get_logger("state")

DEFAULT_WIDTH = 80
DEFAULT_HEIGHT = 24

LOADING_MESSAGE = "Loading notifications..."
REFRESHING_MESSAGE = "Refreshing notifications..."
EMPTY_MESSAGE = "No notifications found"
MARKED_MESSAGE = "Notification marked as read"
OPENED_MESSAGE = "Opened in browser"
SUMMARY_MESSAGE = "Summary view coming soon..."


@dataclass(frozen=True)
class AppState:
    """Everything the renderer needs. Replaced wholesale on every change."""

    items: tuple[NotificationRecord, ...] = ()
    selected: int = 0
    loading: bool = False
    error: str | None = None
    status: str = ""
    width: int = DEFAULT_WIDTH
    height: int = DEFAULT_HEIGHT

    @classmethod
    def initial(cls) -> AppState:
        return cls(loading=True, status=LOADING_MESSAGE)

    @property
    def current(self) -> NotificationRecord | None:
        if not self.items:
            return None
        return self.items[self.selected]


def clamp_index(index: int, count: int) -> int:
    """Clamp a cursor into [0, count-1], or 0 for an empty list."""
    if count <= 0:
        return 0
    return max(0, min(index, count - 1))


# --- Events ---


@dataclass(frozen=True)
class Resize:
    width: int
    height: int


@dataclass(frozen=True)
class CursorUp:
    pass


@dataclass(frozen=True)
class CursorDown:
    pass


@dataclass(frozen=True)
class OpenSelected:
    pass


@dataclass(frozen=True)
class MarkSelectedRead:
    pass


@dataclass(frozen=True)
class Refresh:
    pass


@dataclass(frozen=True)
class Quit:
    pass


@dataclass(frozen=True)
class ShowSummary:
    """Reserved key. The summary view isn't built yet."""


@dataclass(frozen=True)
class FetchCompleted:
    items: tuple[NotificationRecord, ...]


@dataclass(frozen=True)
class FetchFailed:
    error: str


@dataclass(frozen=True)
class MarkReadCompleted:
    thread_id: str


@dataclass(frozen=True)
class MarkReadFailed:
    error: str


@dataclass(frozen=True)
class OpenCompleted:
    pass


@dataclass(frozen=True)
class OpenFailed:
    error: str


Event = (
    Resize
    | CursorUp
    | CursorDown
    | OpenSelected
    | MarkSelectedRead
    | Refresh
    | Quit
    | ShowSummary
    | FetchCompleted
    | FetchFailed
    | MarkReadCompleted
    | MarkReadFailed
    | OpenCompleted
    | OpenFailed
)


# --- Commands ---


@dataclass(frozen=True)
class FetchNotifications:
    pass


@dataclass(frozen=True)
class MarkRead:
    thread_id: str


@dataclass(frozen=True)
class OpenExternal:
    record: NotificationRecord


@dataclass(frozen=True)
class Exit:
    pass


Command = FetchNotifications | MarkRead | OpenExternal | Exit


def fetch_completed(items: Sequence[NotificationRecord]) -> FetchCompleted:
    return FetchCompleted(tuple(items))


def startup() -> tuple[AppState, Command]:
    """Initial state plus the fetch that runs before any input."""
    return AppState.initial(), FetchNotifications()


def _failed(state: AppState, error: str, **changes: object) -> AppState:
    return dataclasses.replace(state, error=error, status=f"Error: {error}", **changes)


def _remove(state: AppState, thread_id: str) -> AppState:
    items = tuple(n for n in state.items if n.id != thread_id)
    return dataclasses.replace(
        state,
        items=items,
        selected=clamp_index(state.selected, len(items)),
        status=MARKED_MESSAGE,
    )


def update(state: AppState, event: Event) -> tuple[AppState, Command | None]:
    """Apply one event, returning the new state and an optional command."""
    if isinstance(event, Resize):
        return dataclasses.replace(state, width=event.width, height=event.height), None

    if isinstance(event, CursorUp):
        if state.selected > 0:
            return dataclasses.replace(state, selected=state.selected - 1), None
        return state, None

    if isinstance(event, CursorDown):
        if state.selected < len(state.items) - 1:
            return dataclasses.replace(state, selected=state.selected + 1), None
        return state, None

    if isinstance(event, OpenSelected):
        current = state.current
        return state, OpenExternal(current) if current else None

    if isinstance(event, MarkSelectedRead):
        current = state.current
        return state, MarkRead(current.id) if current else None

    if isinstance(event, Refresh):
        refreshing = dataclasses.replace(state, loading=True, status=REFRESHING_MESSAGE)
        return refreshing, FetchNotifications()

    if isinstance(event, Quit):
        return state, Exit()

    if isinstance(event, ShowSummary):
        return dataclasses.replace(state, status=SUMMARY_MESSAGE), None

    if isinstance(event, FetchCompleted):
        items = tuple(event.items)
        status = f"Loaded {len(items)} notifications" if items else EMPTY_MESSAGE
        return (
            dataclasses.replace(
                state,
                items=items,
                selected=clamp_index(state.selected, len(items)),
                loading=False,
                error=None,
                status=status,
            ),
            None,
        )

    if isinstance(event, FetchFailed):
        return _failed(state, event.error, loading=False), None

    if isinstance(event, MarkReadCompleted):
        return _remove(state, event.thread_id), None

    if isinstance(event, MarkReadFailed):
        return _failed(state, event.error), None

    if isinstance(event, OpenCompleted):
        return dataclasses.replace(state, status=OPENED_MESSAGE), None

    if isinstance(event, OpenFailed):
        return _failed(state, event.error), None

    _log.warning("unhandled event: %r", event)
    return state, None
