"""JSON event encoding and the sticky snapshot cache replayed to new UI clients."""

from __future__ import annotations

import json
import threading
from datetime import datetime, timezone
from typing import Any, Callable, Optional

from contracts.ui_protocol import STICKY_EVENT_ORDER, STICKY_EVENT_TYPES


def make_event(
    event_type: str,
    *,
    now_fn: Callable[[], datetime] | None = None,
    **payload: Any,
) -> str:
    """Serialize `{"type", "timestamp", **payload}` for websocket delivery."""
    now = now_fn() if now_fn is not None else datetime.now(timezone.utc)
    return json.dumps(
        {
            "type": event_type,
            "timestamp": now.isoformat(),
            **payload,
        }
    )


class StickyEventStore:
    """Latest timer, task list, alert, error and state event, one per type.

    A browser that connects mid-session receives these in `STICKY_EVENT_ORDER`
    so it can render the task list before the timer that refers to it.
    """

    def __init__(self):
        self._events: dict[str, str] = {}
        self._lock = threading.Lock()

    def remember(self, event_type: str, message: str) -> None:
        if event_type not in STICKY_EVENT_TYPES:
            return
        with self._lock:
            self._events[event_type] = message

    def latest(self, event_type: str) -> Optional[dict[str, Any]]:
        with self._lock:
            message = self._events.get(event_type)
        if message is None:
            return None
        return json.loads(message)

    def snapshot(self) -> list[str]:
        with self._lock:
            return [self._events[key] for key in STICKY_EVENT_ORDER if key in self._events]
