"""Transient operator notifications with independent expiry timers."""

from __future__ import annotations

import uuid
from typing import Callable

from nodewatch.core.scheduling import Scheduler, TimerHandle
from nodewatch.models.notification import Notification, Severity
from nodewatch.utils.logging import get_logger

logger = get_logger(__name__)

Listener = Callable[[list[Notification]], None]

DEFAULT_VISIBLE_MS = 5000
DEFAULT_FADE_MS = 300


class NotificationCenter:
    """Ordered queue of toasts, each removed after a fixed visible duration.

    Every notification gets two timers: one marks it fading once the
    visible duration has passed, the other removes it after the fade
    delay. There is no cap and no deduplication; insertion order is
    display order.
    """

    def __init__(
        self,
        scheduler: Scheduler,
        visible_ms: int = DEFAULT_VISIBLE_MS,
        fade_ms: int = DEFAULT_FADE_MS,
        id_factory: Callable[[], str] | None = None,
    ) -> None:
        self._scheduler = scheduler
        self._visible_s = visible_ms / 1000
        self._fade_s = fade_ms / 1000
        self._id_factory = id_factory or (lambda: uuid.uuid4().hex)
        self._items: list[Notification] = []
        self._timers: dict[str, tuple[TimerHandle, TimerHandle]] = {}
        self._listeners: list[Listener] = []

    @property
    def notifications(self) -> list[Notification]:
        """Active notifications in display order (a copy)."""
        return list(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def notify(self, message: str, severity: Severity | str = Severity.INFO) -> Notification:
        """Append a notification and arm its fade and removal timers."""
        item = Notification(
            id=self._id_factory(),
            message=message,
            severity=Severity(severity),
        )
        self._items.append(item)
        fade = self._scheduler.call_later(self._visible_s, lambda: self._mark_fading(item.id))
        remove = self._scheduler.call_later(
            self._visible_s + self._fade_s, lambda: self._remove(item.id)
        )
        self._timers[item.id] = (fade, remove)
        logger.debug("notification_added", id=item.id, severity=item.severity.value)
        self._emit()
        return item

    def dismiss(self, notification_id: str) -> bool:
        """Force-remove a notification and cancel its timers.

        Returns:
            True if the notification was still present.
        """
        timers = self._timers.pop(notification_id, None)
        if timers is not None:
            for handle in timers:
                handle.cancel()
        return self._remove(notification_id)

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def _mark_fading(self, notification_id: str) -> None:
        for item in self._items:
            if item.id == notification_id:
                item.fading = True
                self._emit()
                return

    def _remove(self, notification_id: str) -> bool:
        self._timers.pop(notification_id, None)
        for index, item in enumerate(self._items):
            if item.id == notification_id:
                del self._items[index]
                self._emit()
                return True
        return False

    def _emit(self) -> None:
        snapshot = self.notifications
        for listener in list(self._listeners):
            try:
                listener(snapshot)
            except Exception:
                logger.exception("notification_listener_failed")
