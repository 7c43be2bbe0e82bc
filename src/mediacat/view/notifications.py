"""Transient, self-dismissing notifications."""

from __future__ import annotations

import asyncio
import itertools
import time
from dataclasses import dataclass
from typing import Callable, Optional

DEFAULT_DURATION_SECONDS = 1.8


@dataclass(frozen=True, slots=True)
class Notification:
    """A message visible until ``expires_at`` on the notifier's clock."""

    id: int
    message: str
    expires_at: float


class Notifier:
    """Hold at most one notification and dismiss it after a fixed duration.

    Each notification has its own identity. Showing a new one cancels the
    pending dismissal of the previous one, so an old timer can never hide a
    newer message. When an asyncio loop is running, dismissal is scheduled on
    it; the expiry deadline is enforced on read either way.
    """

    def __init__(
        self,
        duration: float = DEFAULT_DURATION_SECONDS,
        *,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.duration = duration
        self._clock = clock
        self._ids = itertools.count(1)
        self._current: Optional[Notification] = None
        self._pending: Optional[asyncio.TimerHandle] = None

    @property
    def current(self) -> Optional[Notification]:
        """Return the visible notification, if any."""
        note = self._current
        if note is not None and self._clock() >= note.expires_at:
            self._clear(note.id)
            return None
        return self._current

    def show(self, message: str) -> Notification:
        """Display ``message``, replacing any visible notification."""
        self._cancel_pending()
        note = Notification(next(self._ids), message, self._clock() + self.duration)
        self._current = note
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            loop = None
        if loop is not None:
            self._pending = loop.call_later(self.duration, self._clear, note.id)
        return note

    def dismiss(self) -> None:
        """Hide the visible notification immediately."""
        self._cancel_pending()
        self._current = None

    def _clear(self, note_id: int) -> None:
        if self._current is not None and self._current.id == note_id:
            self._current = None
            self._pending = None

    def _cancel_pending(self) -> None:
        if self._pending is not None:
            self._pending.cancel()
            self._pending = None


__all__ = ["DEFAULT_DURATION_SECONDS", "Notification", "Notifier"]
