"""Durations, phase, cycle, and alert constants used by the focus timer core."""

from __future__ import annotations

WORK_DURATION_SECONDS = 25 * 60
BREAK_DURATION_SECONDS = 5 * 60

PHASE_WORK = "work"
PHASE_INTERMISSION = "intermission"

PHASES: frozenset[str] = frozenset({PHASE_WORK, PHASE_INTERMISSION})

CYCLE_NONE = "none"
CYCLE_WORK_BREAK = "work_break"

CYCLE_POLICIES: frozenset[str] = frozenset({CYCLE_NONE, CYCLE_WORK_BREAK})

ALERT_WORK_COMPLETE = "work_complete"
ALERT_BREAK_COMPLETE = "break_complete"
ALERT_SESSION_COMPLETE = "session_complete"

ALERT_KINDS: frozenset[str] = frozenset(
    {
        ALERT_WORK_COMPLETE,
        ALERT_BREAK_COMPLETE,
        ALERT_SESSION_COMPLETE,
    }
)

ACTION_START = "start"
ACTION_PAUSE = "pause"
ACTION_TOGGLE = "toggle"
ACTION_RESET = "reset"
ACTION_SELECT = "select"
ACTION_CLEAR = "clear"

ACTION_SYNC = "sync"
ACTION_TICK = "tick"
ACTION_COMPLETED = "completed"

REASON_STARTED = "started"
REASON_PAUSED = "paused"
REASON_RESET = "reset"
REASON_SELECTED = "selected"
REASON_CLEARED = "cleared"
REASON_ALREADY_RUNNING = "already_running"
REASON_NOT_RUNNING = "not_running"
REASON_TASK_NOT_FOUND = "task_not_found"
REASON_TASK_DELETED = "task_deleted"
REASON_TICK = "tick"
REASON_COMPLETED = "completed"
REASON_STARTUP = "startup"
REASON_TASK_ADDED = "task_added"
REASON_TASK_UPDATED = "task_updated"
REASON_TASKS_LISTED = "tasks_listed"
REASON_TASKS_IMPORTED = "tasks_imported"
REASON_IMPORT_UNAVAILABLE = "import_unavailable"
REASON_IMPORT_FAILED = "import_failed"
REASON_INVALID_ARGUMENT = "invalid_argument"
REASON_STORE_ERROR = "store_error"
REASON_STATUS = "status"
