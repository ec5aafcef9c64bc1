"""
Data models for automatic task scheduling using Pydantic.
"""

from __future__ import annotations

import math
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

COMPLETED_STATUS = "completed"
PLANNED_STATUS = "planned"
HARD_DEADLINE = "hard"

UNASSIGNED_COMPANY = "Unassigned"
GENERAL_PROJECT = "General"


def make_project_key(company: str | None, project: str | None) -> str:
    """Build the composite ``company · project`` label used as a focus key."""
    return f"{company or UNASSIGNED_COMPANY} · {project or GENERAL_PROJECT}"


class Task(BaseModel):
    """Work item as stored by the task service."""

    id: str = Field(..., description="Unique task identifier")
    user_id: str = Field("", description="Owner of the task")
    project_id: str | None = Field(None, description="Associated project ID")
    title: str = Field("", description="Task title")
    company: str = Field("", description="Company label")
    project: str = Field("", description="Project label")
    task_date: str = Field("", description="Scheduled date (YYYY-MM-DD)")
    start_time: str | None = Field(None, description="Start time (HH:MM)")
    end_time: str | None = Field(None, description="End time (HH:MM)")
    estimated_hours: float = Field(0.0, description="Estimated hours to complete")
    priority_level: int = Field(0, description="Priority level (lower = more urgent)")
    deadline_type: str | None = Field(None, description="'hard' or soft deadline")
    deadline_date: str | None = Field(None, description="Deadline (YYYY-MM-DD)")
    dependencies: list[str] = Field(
        default_factory=list, description="IDs of tasks that must come first"
    )
    status: str = Field(PLANNED_STATUS, description="Task status")
    notes: str | None = Field(None, description="Free-text note")

    model_config = ConfigDict(frozen=True, extra="ignore")

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, v):
        if isinstance(v, int | float) and not isinstance(v, bool):
            return str(v)
        return v

    @field_validator("estimated_hours", mode="before")
    @classmethod
    def coerce_estimated_hours(cls, v):
        try:
            hours = float(v)
        except (TypeError, ValueError):
            return 0.0
        return hours if math.isfinite(hours) else 0.0

    @field_validator("priority_level", mode="before")
    @classmethod
    def coerce_priority_level(cls, v):
        try:
            return int(v)
        except (TypeError, ValueError):
            return 0

    @field_validator("dependencies", mode="before")
    @classmethod
    def coerce_dependencies(cls, v):
        if v is None:
            return []
        if isinstance(v, list | tuple):
            return [str(dep) for dep in v]
        return v

    @field_validator(
        "user_id", "title", "company", "project", "task_date", mode="before"
    )
    @classmethod
    def coerce_none_to_empty(cls, v):
        return "" if v is None else v

    @field_validator("status", mode="before")
    @classmethod
    def coerce_missing_status(cls, v):
        return PLANNED_STATUS if v is None else v

    @property
    def is_completed(self) -> bool:
        return self.status.lower() == COMPLETED_STATUS

    @property
    def is_placed(self) -> bool:
        """Whether the task already occupies a concrete time window."""
        return self.start_time is not None and self.end_time is not None

    @property
    def has_hard_deadline(self) -> bool:
        return self.deadline_type == HARD_DEADLINE

    @property
    def project_key(self) -> str:
        return make_project_key(self.company, self.project)


class Event(BaseModel):
    """Fixed calendar commitment."""

    id: str = Field("", description="Event identifier")
    user_id: str = Field("", description="Owner of the event")
    title: str = Field("", description="Event title")
    event_date: str = Field("", description="Event date (YYYY-MM-DD)")
    start_time: str = Field("", description="Start time (HH:MM)")
    end_time: str = Field("", description="End time (HH:MM)")

    model_config = ConfigDict(frozen=True, extra="ignore")

    @field_validator("*", mode="before")
    @classmethod
    def coerce_none_to_empty(cls, v):
        return "" if v is None else str(v)


class WorkSettings(BaseModel):
    """Working-hours policy for one scheduling run."""

    work_start_minutes: int = Field(540, description="Start of day in minutes")
    work_end_minutes: int = Field(1020, description="End of day in minutes")
    break_minutes: int = Field(15, description="Break after sessions and events")

    model_config = ConfigDict(frozen=True)

    @field_validator("break_minutes")
    @classmethod
    def clamp_break(cls, v):
        return max(0, v)

    @property
    def has_working_window(self) -> bool:
        return self.work_end_minutes > self.work_start_minutes


class Update(BaseModel):
    """New placement for the first session of an existing task."""

    id: str
    task_date: str
    start_time: str
    end_time: str

    def to_payload(self) -> dict[str, Any]:
        """Partial row update for the task service."""
        return self.model_dump(exclude={"id"})


class Insert(BaseModel):
    """Continuation session of a task that did not fit in one sitting."""

    user_id: str
    title: str
    company: str
    project: str
    project_id: str | None = None
    notes: str | None = None
    task_date: str
    start_time: str
    end_time: str
    is_milestone: bool = False
    estimated_hours: float
    status: str = PLANNED_STATUS
    dependencies: list[str] = Field(default_factory=list)
    priority_level: int
    deadline_type: str | None = None
    deadline_date: str | None = None

    def to_row(self) -> dict[str, Any]:
        """New row for the task service; unset optional fields are omitted."""
        return self.model_dump(exclude_none=True)


class ScheduleResult(BaseModel):
    """Schedule mutations produced by one run."""

    updates: list[Update] = Field(default_factory=list)
    inserts: list[Insert] = Field(default_factory=list)

    @property
    def updated_count(self) -> int:
        return len(self.updates)

    @property
    def inserted_count(self) -> int:
        return len(self.inserts)

    @property
    def is_empty(self) -> bool:
        return not self.updates and not self.inserts

    def summary(self) -> dict[str, int]:
        return {"updated": self.updated_count, "inserted": self.inserted_count}
