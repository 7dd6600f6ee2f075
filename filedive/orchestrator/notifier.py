"""Notifier — collects user-facing notifications and fans them out."""

from __future__ import annotations

import logging
from collections import deque
from collections.abc import Awaitable, Callable

from filedive.models.notification import Notification

logger = logging.getLogger(__name__)

Listener = Callable[[Notification], Awaitable[None]]

HISTORY_SIZE = 200


class Notifier:
    """Keeps a bounded history and forwards every notification to listeners."""

    def __init__(self, history_size: int = HISTORY_SIZE) -> None:
        self.history: deque[Notification] = deque(maxlen=history_size)
        self._listeners: list[Listener] = []

    def add_listener(self, listener: Listener) -> None:
        self._listeners.append(listener)

    def remove_listener(self, listener: Listener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    async def emit(self, notification: Notification) -> Notification:
        self.history.append(notification)
        for listener in list(self._listeners):
            try:
                await listener(notification)
            except Exception as exc:
                logger.warning("Dropping notification listener: %s", exc)
                self.remove_listener(listener)
        return notification
