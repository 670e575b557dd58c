# pharmapos/notifier.py
import asyncio
import logging
import time
from typing import Callable, Optional

from .config import Config
from .models import Notification, NotificationKind

logger = logging.getLogger(__name__)


class Notifier:
    """Single-slot status message that clears itself after ``ttl`` seconds.

    When an event loop is running the clear is scheduled with
    ``loop.call_later`` and cancelled if a newer message arrives first.
    Expiry is also checked on read against ``clock``, so the slot behaves the
    same when no loop is available.
    """

    def __init__(self, ttl: Optional[float] = None, clock: Callable[[], float] = time.monotonic):
        self.ttl = Config.NOTIFICATION_TTL if ttl is None else ttl
        self._clock = clock
        self._current: Optional[Notification] = None
        self._handle: Optional[asyncio.TimerHandle] = None

    def notify(self, kind: NotificationKind, message: str) -> Notification:
        kind = NotificationKind(kind)
        self._cancel_pending()
        note = Notification(kind=kind, message=message, posted_at=self._clock())
        self._current = note
        logger.log(logging.WARNING if kind == NotificationKind.ERROR else logging.INFO,
                   "[%s] %s", kind.value, message)

        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            loop = None
        if loop is not None:
            self._handle = loop.call_later(self.ttl, self._expire, note)
        return note

    def current(self) -> Optional[Notification]:
        note = self._current
        if note is not None and self._clock() - note.posted_at >= self.ttl:
            self._current = None
            return None
        return note

    def clear(self) -> None:
        self._cancel_pending()
        self._current = None

    @property
    def has_pending_clear(self) -> bool:
        return self._handle is not None and not self._handle.cancelled()

    def _expire(self, note: Notification) -> None:
        # only clear the message this timer was scheduled for
        if self._current is note:
            self._current = None
        self._handle = None

    def _cancel_pending(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None
