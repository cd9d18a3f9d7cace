"""Tests for the inbox TUI loop, driven through Textual's test pilot."""

import asyncio

from ghinbox.config import Config
from ghinbox.github import GatewayError
from ghinbox.inbox.tui import InboxApp
from ghinbox.models import NotificationRecord, SubjectType


def _record(i):
    return NotificationRecord(
        id=str(i),
        unread=True,
        reason="mention",
        repository="o/r",
        subject_type=SubjectType.ISSUE,
        title=f"issue {i}",
        url=f"https://api.github.com/repos/o/r/issues/{i}",
    )


class FakeGateway:
    def __init__(self, records, fail_mark_read=False):
        self.records = list(records)
        self.fail_mark_read = fail_mark_read
        self.fetches = 0
        self.opened = []

    def fetch_notifications(self):
        self.fetches += 1
        return list(self.records)

    def mark_read(self, thread_id):
        if self.fail_mark_read:
            raise GatewayError("failed to mark as read: HTTP 500")
        self.records = [r for r in self.records if r.id != thread_id]

    def open_external(self, record):
        self.opened.append(record.id)


async def _settle(app, pilot):
    await app.workers.wait_for_complete()
    await pilot.pause()


def _run(gateway, scenario):
    async def main():
        app = InboxApp(gateway=gateway, config=Config())
        async with app.run_test(size=(100, 30)) as pilot:
            await _settle(app, pilot)
            await scenario(app, pilot)

    asyncio.run(main())


def test_fetches_on_startup():
    gateway = FakeGateway([_record(i) for i in range(3)])

    async def scenario(app, pilot):
        state = app.inbox_state
        assert gateway.fetches == 1
        assert [n.id for n in state.items] == ["0", "1", "2"]
        assert state.loading is False
        assert state.status == "Loaded 3 notifications"
        assert (state.width, state.height) == (100, 30)

    _run(gateway, scenario)


def test_navigation_keys():
    gateway = FakeGateway([_record(i) for i in range(3)])

    async def scenario(app, pilot):
        await pilot.press("j", "down")
        assert app.inbox_state.selected == 2
        await pilot.press("down")
        assert app.inbox_state.selected == 2
        await pilot.press("k")
        assert app.inbox_state.selected == 1
        await pilot.press("up", "up")
        assert app.inbox_state.selected == 0

    _run(gateway, scenario)


def test_mark_read_removes_after_confirmation():
    gateway = FakeGateway([_record(i) for i in range(3)])

    async def scenario(app, pilot):
        await pilot.press("j", "j", "r")
        await _settle(app, pilot)
        state = app.inbox_state
        assert [n.id for n in state.items] == ["0", "1"]
        assert state.selected == 1
        assert state.status == "Notification marked as read"

    _run(gateway, scenario)


def test_mark_read_failure_keeps_item():
    gateway = FakeGateway([_record(i) for i in range(2)], fail_mark_read=True)

    async def scenario(app, pilot):
        await pilot.press("r")
        await _settle(app, pilot)
        state = app.inbox_state
        assert len(state.items) == 2
        assert state.error == "failed to mark as read: HTTP 500"

        # refresh recovers
        await pilot.press("f")
        await _settle(app, pilot)
        assert app.inbox_state.error is None
        assert gateway.fetches == 2

    _run(gateway, scenario)


def test_enter_opens_selected():
    gateway = FakeGateway([_record(i) for i in range(2)])

    async def scenario(app, pilot):
        await pilot.press("down", "enter")
        await _settle(app, pilot)
        assert gateway.opened == ["1"]
        assert app.inbox_state.status == "Opened in browser"

    _run(gateway, scenario)


def test_summary_key_is_reserved():
    gateway = FakeGateway([_record(0)])

    async def scenario(app, pilot):
        await pilot.press("tab")
        assert app.inbox_state.status == "Summary view coming soon..."

    _run(gateway, scenario)
