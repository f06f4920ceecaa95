"""Console status and response text builders for timer and task flows."""

from __future__ import annotations

from typing import Optional, Sequence

from alerts.messages import alert_body
from focus import BindingSnapshot
from focus.constants import (
    ACTION_PAUSE,
    ACTION_START,
    PHASE_INTERMISSION,
    REASON_ALREADY_RUNNING,
    REASON_IMPORT_FAILED,
    REASON_IMPORT_UNAVAILABLE,
    REASON_INVALID_ARGUMENT,
    REASON_NOT_RUNNING,
    REASON_STORE_ERROR,
    REASON_TASK_NOT_FOUND,
)
from tasks import Task


def format_duration(seconds: int) -> str:
    """Format a duration in seconds as `MM:SS`."""
    minutes, remainder = divmod(max(0, int(seconds)), 60)
    return f"{minutes:02d}:{remainder:02d}"


def timer_status_message(snapshot: BindingSnapshot) -> str:
    """Build one status line for the current timer and bound task."""
    timer = snapshot.timer
    phase = "Break" if timer.phase == PHASE_INTERMISSION else "Work"
    state = "running" if timer.running else "paused"
    text = f"{phase} {state} ({format_duration(timer.remaining_seconds)} left)"
    if snapshot.active_task_title:
        text += f" on '{snapshot.active_task_title}'"
    return text


def completion_message(alert_kind: Optional[str]) -> str:
    if alert_kind is None:
        return "Time's up!"
    return f"Time's up! {alert_body(alert_kind)}"


def task_list_lines(tasks: Sequence[Task], active_task_id: Optional[str]) -> list[str]:
    """Render tasks as numbered lines; the index is what `select 2` refers to."""
    if not tasks:
        return ["No tasks yet. Add one with: add <title>"]

    lines = []
    for index, task in enumerate(tasks, start=1):
        marker = "*" if task.id == active_task_id else " "
        done = "x" if task.completed else " "
        lines.append(
            f"{marker} {index:>2}. [{done}] {task.title} "
            f"({format_duration(task.remaining_seconds)}) {task.id}"
        )
    return lines


def rejection_text(action: str, reason: str, argument: str = "") -> str:
    """Return text for a rejected command."""
    if reason == REASON_ALREADY_RUNNING:
        return "The timer is already running."
    if reason == REASON_NOT_RUNNING and action == ACTION_PAUSE:
        return "The timer is not running."
    if reason == REASON_TASK_NOT_FOUND:
        return f"No task matches '{argument}'."
    if reason == REASON_INVALID_ARGUMENT:
        return f"Invalid argument for {action}: '{argument}'."
    if reason == REASON_IMPORT_UNAVAILABLE:
        return "Remote task import is not configured."
    if reason == REASON_IMPORT_FAILED:
        return "Remote task import failed; see the log for details."
    if reason == REASON_STORE_ERROR:
        return "Could not save tasks; see the log for details."
    if action == ACTION_START:
        return "The timer could not be started."
    return f"Command {action} was rejected ({reason})."
