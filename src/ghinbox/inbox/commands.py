"""Run commands against the gateway and turn the outcome into one event."""

from __future__ import annotations

from typing import Protocol

from ..github import GatewayError
from ..log import get_logger
from ..models import NotificationRecord
from .state import (
    Command,
    Event,
    FetchFailed,
    FetchNotifications,
    MarkRead,
    MarkReadCompleted,
    MarkReadFailed,
    OpenCompleted,
    OpenExternal,
    OpenFailed,
    fetch_completed,
)

_log = get_logger("commands")


class Gateway(Protocol):
    """The remote operations the inbox needs."""

    def fetch_notifications(self) -> list[NotificationRecord]: ...

    def mark_read(self, thread_id: str) -> None: ...

    def open_external(self, record: NotificationRecord) -> None: ...


def execute(gateway: Gateway, command: Command) -> Event | None:
    """Run a command synchronously. Call from a worker thread, never the UI loop.

    Gateway failures become *Failed events; they never propagate.
    Returns None for commands that aren't background work (e.g. Exit).
    """
    if isinstance(command, FetchNotifications):
        try:
            return fetch_completed(gateway.fetch_notifications())
        except GatewayError as e:
            _log.warning("fetch failed: %s", e)
            return FetchFailed(str(e))

    if isinstance(command, MarkRead):
        try:
            gateway.mark_read(command.thread_id)
        except GatewayError as e:
            _log.warning("mark_read %s failed: %s", command.thread_id, e)
            return MarkReadFailed(str(e))
        return MarkReadCompleted(command.thread_id)

    if isinstance(command, OpenExternal):
        try:
            gateway.open_external(command.record)
        except GatewayError as e:
            _log.warning("open %s failed: %s", command.record.id, e)
            return OpenFailed(str(e))
        return OpenCompleted()

    _log.debug("not a background command: %r", command)
    return None
