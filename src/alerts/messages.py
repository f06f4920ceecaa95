"""Notification titles and bodies for each completion kind."""

from __future__ import annotations

from focus.constants import (
    ALERT_BREAK_COMPLETE,
    ALERT_SESSION_COMPLETE,
    ALERT_WORK_COMPLETE,
)

ALERT_TITLE = "Time's up!"

_ALERT_BODIES: dict[str, str] = {
    ALERT_WORK_COMPLETE: "Time for a break!",
    ALERT_BREAK_COMPLETE: "Break is over! Back to work.",
    ALERT_SESSION_COMPLETE: "Focus session complete.",
}


def alert_body(kind: str) -> str:
    return _ALERT_BODIES.get(kind, "Timer finished.")
