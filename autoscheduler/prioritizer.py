"""
Priority ordering of schedulable tasks.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import date

from .models import Task
from .timeutils import SENTINEL_DATE, parse_date


def deadline_score(task: Task) -> date:
    """
    Sort key derived from the task's deadline.

    Tasks without a usable deadline score ``SENTINEL_DATE``, which sorts
    before every real date.
    """
    if not task.deadline_date:
        return SENTINEL_DATE
    return parse_date(task.deadline_date)


def priority_key(task: Task) -> tuple[int, date, bool, float]:
    return (
        task.priority_level,
        deadline_score(task),
        not task.has_hard_deadline,
        task.estimated_hours,
    )


def sort_tasks(tasks: Iterable[Task]) -> list[Task]:
    """Order tasks by priority, deadline, deadline hardness, then size."""
    return sorted(tasks, key=priority_key)
