from .binding import ActiveTaskBinding, BindingSnapshot
from .constants import (
    BREAK_DURATION_SECONDS,
    CYCLE_NONE,
    CYCLE_WORK_BREAK,
    WORK_DURATION_SECONDS,
)
from .engine import (
    AlertKind,
    AlertSink,
    CyclePolicy,
    TimerEngine,
    TimerPhase,
    TimerSnapshot,
    TimerTick,
)
from .errors import FocusError, InvalidArgumentError

__all__ = [
    "ActiveTaskBinding",
    "AlertKind",
    "AlertSink",
    "BREAK_DURATION_SECONDS",
    "BindingSnapshot",
    "CYCLE_NONE",
    "CYCLE_WORK_BREAK",
    "CyclePolicy",
    "FocusError",
    "InvalidArgumentError",
    "TimerEngine",
    "TimerPhase",
    "TimerSnapshot",
    "TimerTick",
    "WORK_DURATION_SECONDS",
]
