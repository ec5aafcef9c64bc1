"""
Automatic Task Scheduler Package

Greedy weekday scheduler that packs pending tasks into free working time,
splitting long tasks into sessions and honouring dependencies and focus
projects.
"""

from .api import auto_schedule_api, settings_from_row
from .core import AutoScheduleConfig, AutoScheduler, auto_schedule
from .models import Event, Insert, ScheduleResult, Task, Update, WorkSettings

__version__ = "0.1.0"
__all__ = [
    "auto_schedule",
    "auto_schedule_api",
    "settings_from_row",
    "AutoScheduleConfig",
    "AutoScheduler",
    "Event",
    "Insert",
    "ScheduleResult",
    "Task",
    "Update",
    "WorkSettings",
]
