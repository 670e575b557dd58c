# tests/test_notifier.py
import asyncio

from pharmapos.models import NotificationKind
from pharmapos.notifier import Notifier


class FakeClock:
    def __init__(self):
        self.now = 100.0

    def __call__(self):
        return self.now


def test_latest_notification_supersedes():
    n = Notifier(ttl=3.5, clock=FakeClock())
    n.notify(NotificationKind.SUCCESS, "first")
    n.notify("error", "second")
    current = n.current()
    assert current.message == "second"
    assert current.kind == NotificationKind.ERROR


def test_expires_after_ttl():
    clock = FakeClock()
    n = Notifier(ttl=3.5, clock=clock)
    n.notify(NotificationKind.INFO, "restocked")
    clock.now += 3.4
    assert n.current() is not None
    clock.now += 0.1
    assert n.current() is None


def test_new_message_restarts_the_window():
    clock = FakeClock()
    n = Notifier(ttl=3.5, clock=clock)
    n.notify(NotificationKind.INFO, "one")
    clock.now += 3.0
    n.notify(NotificationKind.INFO, "two")
    clock.now += 3.0
    assert n.current().message == "two"


def test_scheduled_clear_is_cancelled_by_newer_message():
    async def scenario():
        n = Notifier(ttl=0.2)
        n.notify(NotificationKind.SUCCESS, "old")
        await asyncio.sleep(0.12)
        n.notify(NotificationKind.SUCCESS, "new")
        await asyncio.sleep(0.12)
        # old timer would have fired by now had it not been cancelled
        still_there = n._current is not None and n._current.message == "new"
        await asyncio.sleep(0.2)
        return still_there, n._current, n.has_pending_clear

    still_there, after, pending = asyncio.run(scenario())
    assert still_there
    assert after is None
    assert not pending


def test_clear_empties_slot():
    n = Notifier(ttl=10, clock=FakeClock())
    n.notify(NotificationKind.INFO, "hello")
    n.clear()
    assert n.current() is None
