from __future__ import annotations

import logging
import threading
from collections.abc import Callable

from careermatch.types import SessionEvent

logger = logging.getLogger(__name__)

SessionListener = Callable[[SessionEvent], None]


class SessionEventChannel:
    def __init__(self) -> None:
        self._listeners: list[SessionListener] = []
        self._lock = threading.Lock()

    def publish(self, event: SessionEvent) -> None:
        with self._lock:
            listeners = list(self._listeners)
        for listener in listeners:
            try:
                listener(event)
            except Exception:
                logger.exception("Session listener failed for event=%s", event.kind)

    def subscribe(self, listener: SessionListener) -> Callable[[], None]:
        with self._lock:
            self._listeners.append(listener)

        def unsubscribe() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return unsubscribe
