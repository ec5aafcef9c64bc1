"""
Shared fixtures for scheduler tests.

2025-06-23 is a Monday; most scenarios start there.
"""

from itertools import count

import pytest

from autoscheduler.models import Event, Task, WorkSettings

MONDAY = "2025-06-23"


@pytest.fixture
def make_task():
    """Factory for tasks with sensible defaults."""
    ids = count(1)

    def _make_task(**overrides) -> Task:
        number = next(ids)
        data = {
            "id": f"task{number}",
            "user_id": "user1",
            "title": f"Task {number}",
            "task_date": MONDAY,
            "estimated_hours": 1.0,
            "priority_level": 3,
            "status": "planned",
        }
        data.update(overrides)
        return Task(**data)

    return _make_task


@pytest.fixture
def make_event():
    """Factory for fixed events."""
    ids = count(1)

    def _make_event(start_time: str, end_time: str, event_date: str = MONDAY) -> Event:
        return Event(
            id=f"event{next(ids)}",
            user_id="user1",
            title="Meeting",
            event_date=event_date,
            start_time=start_time,
            end_time=end_time,
        )

    return _make_event


@pytest.fixture
def work_settings() -> WorkSettings:
    """09:00-17:00 with 15 minute breaks."""
    return WorkSettings(work_start_minutes=540, work_end_minutes=1020, break_minutes=15)
