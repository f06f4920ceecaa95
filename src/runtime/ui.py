from __future__ import annotations

from typing import Any, Optional, Protocol, Sequence

from contracts.ui_protocol import EVENT_TASKS, EVENT_TIMER
from focus import BindingSnapshot
from tasks import Task


class UIServerLike(Protocol):
    def publish(self, event_type: str, **payload: Any) -> None:
        ...

    def publish_state(
        self,
        state: str,
        *,
        message: Optional[str] = None,
        **payload: Any,
    ) -> None:
        ...


class RuntimeUIPublisher:
    def __init__(self, ui_server: Optional[UIServerLike]):
        self._ui_server = ui_server

    def publish(self, event_type: str, **payload: Any) -> None:
        if self._ui_server:
            self._ui_server.publish(event_type, **payload)

    def publish_state(
        self,
        state: str,
        *,
        message: Optional[str] = None,
        **payload: Any,
    ) -> None:
        if self._ui_server:
            self._ui_server.publish_state(state, message=message, **payload)

    def publish_timer_update(
        self,
        snapshot: BindingSnapshot,
        *,
        action: str,
        accepted: Optional[bool] = None,
        reason: str = "",
        message: Optional[str] = None,
    ) -> None:
        timer = snapshot.timer
        payload: dict[str, Any] = {
            "action": action,
            "phase": timer.phase,
            "running": timer.running,
            "cycle": timer.cycle,
            "duration_seconds": timer.duration_seconds,
            "remaining_seconds": timer.remaining_seconds,
            "progress": round(timer.progress, 2),
            "active_task_id": snapshot.active_task_id,
            "active_task_title": snapshot.active_task_title,
        }
        if accepted is not None:
            payload["accepted"] = accepted
        if reason:
            payload["reason"] = reason
        if message:
            payload["message"] = message
        self.publish(EVENT_TIMER, **payload)

    def publish_tasks(
        self,
        tasks: Sequence[Task],
        *,
        active_task_id: Optional[str] = None,
    ) -> None:
        self.publish(
            EVENT_TASKS,
            active_task_id=active_task_id,
            tasks=[task.to_dict() for task in tasks],
        )
