"""Protocols describing runtime-facing task import and config capabilities."""

from __future__ import annotations

from typing import Protocol

from tasks import Task


class TaskImporterLike(Protocol):
    """Remote import interface expected by command dispatch."""
    def import_titles(self) -> list[Task]:
        ...


class TimerSettingsLike(Protocol):
    """Subset of timer settings required to build the runtime engine."""
    cycle: str
    work_duration_seconds: int
    break_duration_seconds: int
    tick_interval_seconds: float
