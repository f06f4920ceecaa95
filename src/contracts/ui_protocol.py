"""Web UI websocket event and state constants."""

from __future__ import annotations

# Websocket event types
EVENT_HELLO = "hello"
EVENT_STATE_UPDATE = "state_update"
EVENT_TIMER = "timer"
EVENT_TASKS = "tasks"
EVENT_ALERT = "alert"
EVENT_ERROR = "error"

# UI runtime states
STATE_IDLE = "idle"
STATE_RUNNING = "running"
STATE_PAUSED = "paused"
STATE_ERROR = "error"

STICKY_EVENT_TYPES: frozenset[str] = frozenset(
    {
        EVENT_STATE_UPDATE,
        EVENT_TIMER,
        EVENT_TASKS,
        EVENT_ALERT,
        EVENT_ERROR,
    }
)

STICKY_EVENT_ORDER: tuple[str, ...] = (
    EVENT_TASKS,
    EVENT_TIMER,
    EVENT_ALERT,
    EVENT_ERROR,
    EVENT_STATE_UPDATE,
)
