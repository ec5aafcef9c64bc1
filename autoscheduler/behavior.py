"""
Estimate inflation from the user's recorded overruns.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Any

from .models import Task

logger = logging.getLogger(__name__)


def average_overrun_minutes(rows: Sequence[Mapping[str, Any]], limit: int = 20) -> int:
    """
    Average overrun over the most recent behavioral records.

    Args:
        rows: Behavioral records, newest first, each with an ``overrun_minutes``
            value; non-numeric values count as zero
        limit: Number of records to consider

    Returns:
        Average overrun in whole minutes (0 when there is no history)
    """
    recent = list(rows[:limit])
    if not recent:
        return 0

    total = 0
    for row in recent:
        value = row.get("overrun_minutes")
        if isinstance(value, int | float) and not isinstance(value, bool):
            total += int(value)
    return int(total / len(recent))


def apply_overrun(tasks: Sequence[Task], overrun_minutes: int) -> list[Task]:
    """Return copies of ``tasks`` with positive estimates raised by the overrun."""
    if overrun_minutes <= 0:
        return list(tasks)

    extra_hours = overrun_minutes / 60
    logger.info(f"Inflating task estimates by {overrun_minutes} min of average overrun")
    return [
        task.model_copy(update={"estimated_hours": task.estimated_hours + extra_hours})
        if task.estimated_hours > 0
        else task
        for task in tasks
    ]
