"""
API wrapper functions for automatic scheduling.

These accept and return plain dictionaries so that a request handler can pass
stored rows straight through and persist the returned payloads.
"""

from __future__ import annotations

import logging
import uuid
from collections.abc import Mapping
from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field, ValidationError, field_serializer, field_validator

from .behavior import apply_overrun, average_overrun_minutes
from .config import SchedulerSettings, settings
from .core import auto_schedule
from .exceptions import InvalidRequestError, SchedulerError
from .models import Event, ScheduleResult, Task, WorkSettings
from .timeutils import is_valid_date, to_minutes

logger = logging.getLogger(__name__)


class ScheduleRequest(BaseModel):
    """Request model for automatic scheduling."""

    tasks: list[dict[str, Any]] = Field(..., description="Stored task rows")
    events: list[dict[str, Any]] = Field(
        default_factory=list, description="Stored event rows"
    )
    settings: dict[str, Any] | None = Field(
        None, description="Stored settings row (work_start, work_end, break_length)"
    )
    focus_key: str = Field("", description="company · project label to favour")
    allow_reshuffle: bool = Field(False, description="Also move placed tasks")
    start_day: str | None = Field(
        None, description="Ignore tasks and events dated before this day"
    )
    behavior_history: list[dict[str, Any]] = Field(
        default_factory=list, description="Recent overrun records, newest first"
    )

    @field_validator("focus_key", mode="before")
    @classmethod
    def coerce_focus_key(cls, v):
        return v or ""

    @field_validator("start_day")
    @classmethod
    def validate_start_day(cls, v):
        if v is None:
            return v
        if not is_valid_date(v):
            raise ValueError("start_day must be in YYYY-MM-DD format")
        return v


class ScheduleResponse(BaseModel):
    """Response model for automatic scheduling."""

    success: bool
    updated: int = 0
    inserted: int = 0
    updates: list[dict[str, Any]] = Field(default_factory=list)
    inserts: list[dict[str, Any]] = Field(default_factory=list)
    error: str | None = None
    request_id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    generated_at: datetime = Field(default_factory=datetime.now)

    @field_serializer("generated_at")
    def serialize_generated_at(self, value: datetime) -> str:
        return value.isoformat()


def default_work_settings(source: SchedulerSettings | None = None) -> WorkSettings:
    """Working hours from configuration."""
    source = source or settings
    return WorkSettings(
        work_start_minutes=to_minutes(source.default_work_start),
        work_end_minutes=to_minutes(source.default_work_end),
        break_minutes=source.default_break_minutes,
    )


def settings_from_row(row: Mapping[str, Any] | None) -> WorkSettings:
    """
    Build WorkSettings from a stored user settings row.

    Fields that are missing or of the wrong type keep their configured default.
    """
    defaults = default_work_settings()
    if not row:
        return defaults

    values = defaults.model_dump()
    work_start = row.get("work_start")
    if isinstance(work_start, str):
        values["work_start_minutes"] = to_minutes(work_start)
    work_end = row.get("work_end")
    if isinstance(work_end, str):
        values["work_end_minutes"] = to_minutes(work_end)
    break_length = row.get("break_length")
    if isinstance(break_length, int | float) and not isinstance(break_length, bool):
        values["break_minutes"] = int(break_length)
    return WorkSettings(**values)


def create_task_from_dict(task_data: Mapping[str, Any]) -> Task:
    """
    Create Task instance from a stored row.

    Raises:
        InvalidRequestError: If the row has no task id
    """
    if task_data.get("id") in (None, ""):
        raise InvalidRequestError("Task id is required", field="id")
    return Task.model_validate(dict(task_data))


def create_event_from_dict(event_data: Mapping[str, Any]) -> Event:
    return Event.model_validate(dict(event_data))


def validate_schedule_request(request_data: Any) -> str | None:
    """
    Validate schedule request data.

    Returns:
        Error message if validation fails, None if valid
    """
    if not isinstance(request_data, Mapping):
        return "Request must be a dictionary"

    if "tasks" not in request_data:
        return "Missing required field: tasks"

    tasks = request_data["tasks"]
    if not isinstance(tasks, list):
        return "Tasks must be a list"
    for i, task in enumerate(tasks):
        if not isinstance(task, Mapping):
            return f"Task {i} must be a dictionary"
        if task.get("id") in (None, ""):
            return f"Task {i} missing required field: id"

    events = request_data.get("events")
    if events is not None:
        if not isinstance(events, list):
            return "Events must be a list"
        for i, event in enumerate(events):
            if not isinstance(event, Mapping):
                return f"Event {i} must be a dictionary"

    settings_row = request_data.get("settings")
    if settings_row is not None and not isinstance(settings_row, Mapping):
        return "Settings must be a dictionary"

    start_day = request_data.get("start_day")
    if start_day is not None and not is_valid_date(str(start_day)):
        return "start_day must be in YYYY-MM-DD format"

    return None


def format_schedule_result(result: ScheduleResult) -> dict[str, Any]:
    """
    Format ScheduleResult for persistence and API response.

    Updates carry the task id next to the partial row payload; inserts are
    complete new rows.
    """
    return {
        **result.summary(),
        "updates": [{"id": u.id, **u.to_payload()} for u in result.updates],
        "inserts": [i.to_row() for i in result.inserts],
    }


def _on_or_after(day: str, start_day: str | None) -> bool:
    return start_day is None or day >= start_day


def auto_schedule_api(request_data: dict[str, Any]) -> dict[str, Any]:
    """
    API wrapper for automatic scheduling.

    Invalid requests are reported in the response (``success`` False with an
    ``error`` message) instead of being raised.

    Args:
        request_data: Dictionary containing schedule request data

    Returns:
        Dictionary containing schedule response data
    """
    request_id = str(uuid.uuid4())
    try:
        error = validate_schedule_request(request_data)
        if error:
            raise InvalidRequestError(error)
        request = ScheduleRequest.model_validate(request_data)
        tasks = [create_task_from_dict(row) for row in request.tasks]
        events = [create_event_from_dict(row) for row in request.events]
    except (SchedulerError, ValidationError) as e:
        logger.warning(f"Rejected schedule request {request_id}: {e}")
        return ScheduleResponse(
            success=False, error=str(e), request_id=request_id
        ).model_dump()

    tasks = [t for t in tasks if _on_or_after(t.task_date, request.start_day)]
    events = [e for e in events if _on_or_after(e.event_date, request.start_day)]

    overrun = average_overrun_minutes(
        request.behavior_history, limit=settings.behavior_history_limit
    )
    tasks = apply_overrun(tasks, overrun)

    result = auto_schedule(
        tasks,
        events,
        settings_from_row(request.settings),
        focus_key=request.focus_key,
        allow_reshuffle=request.allow_reshuffle,
    )
    logger.info(
        f"Schedule request {request_id}: {result.updated_count} updated, "
        f"{result.inserted_count} inserted"
    )

    return ScheduleResponse(
        success=True, request_id=request_id, **format_schedule_result(result)
    ).model_dump()
