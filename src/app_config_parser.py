"""Typed parser for config.toml sections into immutable app settings."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Mapping, Optional

from app_config_schema import (
    AlertSettings,
    AppConfig,
    AppConfigurationError,
    GoogleTasksSettings,
    TaskSettings,
    TimerSettings,
    UIServerSettings,
)

_ALLOWED_CYCLES = {"none", "work_break"}


def parse_app_config(
    raw: Mapping[str, Any],
    *,
    base_dir: Path,
    source_file: str,
) -> AppConfig:
    """Parse raw TOML mappings into strongly typed application settings."""
    timer = _parse_timer_settings(_section(raw, "timer"))
    tasks = _parse_task_settings(_section(raw, "tasks"), base_dir=base_dir)
    alerts = _parse_alert_settings(_section(raw, "alerts"))
    ui_server = _parse_ui_server_settings(_section(raw, "ui_server"), base_dir=base_dir)
    google_tasks = _parse_google_tasks_settings(_section(raw, "google_tasks"))

    return AppConfig(
        timer=timer,
        tasks=tasks,
        alerts=alerts,
        ui_server=ui_server,
        google_tasks=google_tasks,
        source_file=source_file,
    )


def _parse_timer_settings(section: Mapping[str, Any]) -> TimerSettings:
    cycle = _as_str(section.get("cycle", "work_break"), "timer.cycle").lower()
    if cycle not in _ALLOWED_CYCLES:
        allowed = ", ".join(sorted(_ALLOWED_CYCLES))
        raise AppConfigurationError(f"timer.cycle must be one of: {allowed}.")

    work = _as_positive_int(
        section.get("work_duration_seconds", 25 * 60),
        "timer.work_duration_seconds",
    )
    rest = _as_positive_int(
        section.get("break_duration_seconds", 5 * 60),
        "timer.break_duration_seconds",
    )
    interval = _as_float(
        section.get("tick_interval_seconds", 1.0),
        "timer.tick_interval_seconds",
    )
    if interval <= 0:
        raise AppConfigurationError("timer.tick_interval_seconds must be greater than zero.")

    return TimerSettings(
        cycle=cycle,
        work_duration_seconds=work,
        break_duration_seconds=rest,
        tick_interval_seconds=interval,
    )


def _parse_task_settings(
    section: Mapping[str, Any],
    *,
    base_dir: Path,
) -> TaskSettings:
    store_file = _as_str(section.get("store_file", "tasks.json"), "tasks.store_file")
    if not store_file:
        raise AppConfigurationError("tasks.store_file cannot be empty.")
    return TaskSettings(store_file=_resolve_path(base_dir, store_file))


def _parse_alert_settings(section: Mapping[str, Any]) -> AlertSettings:
    return AlertSettings(
        sound_enabled=_as_bool(section.get("sound_enabled", True), "alerts.sound_enabled"),
        notifications_enabled=_as_bool(
            section.get("notifications_enabled", True),
            "alerts.notifications_enabled",
        ),
        ui_enabled=_as_bool(section.get("ui_enabled", True), "alerts.ui_enabled"),
        tone_frequency_hz=_as_float(
            section.get("tone_frequency_hz", 880.0),
            "alerts.tone_frequency_hz",
        ),
        tone_duration_seconds=_as_float(
            section.get("tone_duration_seconds", 0.6),
            "alerts.tone_duration_seconds",
        ),
        volume=_as_float(section.get("volume", 0.4), "alerts.volume"),
        output_device=(
            _as_int(section.get("output_device"), "alerts.output_device")
            if "output_device" in section
            else None
        ),
    )


def _parse_ui_server_settings(
    section: Mapping[str, Any],
    *,
    base_dir: Path,
) -> UIServerSettings:
    index_file = _as_str(section.get("index_file", ""), "ui_server.index_file")
    return UIServerSettings(
        enabled=_as_bool(section.get("enabled", True), "ui_server.enabled"),
        host=_as_str(section.get("host", "127.0.0.1"), "ui_server.host"),
        port=_as_int(section.get("port", 8765), "ui_server.port"),
        index_file=_resolve_path(base_dir, index_file) if index_file else "",
    )


def _parse_google_tasks_settings(section: Mapping[str, Any]) -> GoogleTasksSettings:
    _forbid_secret_fields(
        section,
        "google_tasks",
        ("token_file", "client_secret", "access_token"),
    )
    return GoogleTasksSettings(
        enabled=_as_bool(section.get("enabled", False), "google_tasks.enabled"),
        max_results=_as_positive_int(
            section.get("max_results", 10),
            "google_tasks.max_results",
        ),
    )


def _section(root: Mapping[str, Any], name: str) -> Mapping[str, Any]:
    raw = root.get(name, {})
    if raw is None:
        return {}
    if not isinstance(raw, Mapping):
        raise AppConfigurationError(f"[{name}] must be a table.")
    return raw


def _as_str(value: Any, field: str) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value.strip()
    raise AppConfigurationError(f"{field} must be a string.")


def _as_optional_str(value: Any, field: str) -> Optional[str]:
    text = _as_str(value, field)
    if not text:
        return None
    return text


def _as_bool(value: Any, field: str) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in ("true", "1", "yes", "on"):
            return True
        if lowered in ("false", "0", "no", "off"):
            return False
    raise AppConfigurationError(f"{field} must be a boolean.")


def _as_int(value: Any, field: str) -> int:
    if isinstance(value, bool):
        raise AppConfigurationError(f"{field} must be an integer.")
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError as error:
            raise AppConfigurationError(f"{field} must be an integer.") from error
    raise AppConfigurationError(f"{field} must be an integer.")


def _as_positive_int(value: Any, field: str) -> int:
    number = _as_int(value, field)
    if number <= 0:
        raise AppConfigurationError(f"{field} must be greater than zero.")
    return number


def _as_float(value: Any, field: str) -> float:
    if isinstance(value, bool):
        raise AppConfigurationError(f"{field} must be a float.")
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value.strip())
        except ValueError as error:
            raise AppConfigurationError(f"{field} must be a float.") from error
    raise AppConfigurationError(f"{field} must be a float.")


def _resolve_path(base_dir: Path, raw: str) -> str:
    if not raw:
        return ""
    path = Path(raw).expanduser()
    if not path.is_absolute():
        path = (base_dir / path).resolve()
    return str(path)


def _forbid_secret_fields(
    section: Mapping[str, Any],
    section_name: str,
    fields: tuple[str, ...],
) -> None:
    present = [field for field in fields if field in section]
    if present:
        joined = ", ".join(f"{section_name}.{field}" for field in present)
        raise AppConfigurationError(
            f"Secret values must not be stored in config.toml: {joined}. "
            "Move them to environment variables."
        )
