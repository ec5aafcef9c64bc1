"""
Greedy day-by-day scheduling of tasks into free working time.
"""

from __future__ import annotations

import logging
import math
from collections import defaultdict, deque
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import date

from .availability import Interval, get_free_slots
from .config import SchedulerSettings, settings
from .dependencies import build_scheduling_queue
from .models import Event, Insert, ScheduleResult, Task, Update, WorkSettings
from .timeutils import add_days, format_date, next_weekday, to_minutes, to_time_string

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AutoScheduleConfig:
    chunk_minutes: int = 90
    focus_chunk_minutes: int = 120
    focus_burst: int = 2
    max_dependency_passes: int = 10000
    continuation_marker: str = "[auto-cont]"
    continuation_title_suffix: str = " (cont.)"

    @classmethod
    def from_settings(cls, source: SchedulerSettings) -> AutoScheduleConfig:
        return cls(
            chunk_minutes=source.chunk_minutes,
            focus_chunk_minutes=source.focus_chunk_minutes,
            focus_burst=source.focus_burst,
            max_dependency_passes=source.max_dependency_passes,
            continuation_marker=source.continuation_marker,
            continuation_title_suffix=source.continuation_title_suffix,
        )


@dataclass
class QueueEntry:
    task: Task
    remaining_minutes: int
    is_first_session: bool = True


class AutoScheduler:
    """Single scheduling run over one set of tasks, events and settings."""

    def __init__(
        self,
        tasks: Sequence[Task],
        events: Sequence[Event],
        work_settings: WorkSettings,
        focus_key: str = "",
        allow_reshuffle: bool = False,
        config: AutoScheduleConfig | None = None,
    ):
        self.tasks = list(tasks)
        self.events = list(events)
        self.work_settings = work_settings
        self.focus_key = focus_key or ""
        self.allow_reshuffle = allow_reshuffle
        self.config = config or AutoScheduleConfig.from_settings(settings)

        self.use_focus = bool(self.focus_key)
        self.chunk_minutes = max(
            1,
            self.config.focus_chunk_minutes
            if self.use_focus
            else self.config.chunk_minutes,
        )

    def _is_schedulable(self, task: Task) -> bool:
        if task.estimated_hours <= 0 or task.is_completed:
            return False
        return self.allow_reshuffle or not task.is_placed

    def _collect_busy(self, schedulable_ids: set[str]) -> dict[str, list[Interval]]:
        """Busy intervals per date from fixed tasks and events plus break."""
        busy_by_date: dict[str, list[Interval]] = defaultdict(list)
        for task in self.tasks:
            if not task.is_placed or task.id in schedulable_ids:
                continue
            busy_by_date[task.task_date].append(
                (to_minutes(task.start_time), to_minutes(task.end_time))
            )
        for event in self.events:
            busy_by_date[event.event_date].append(
                (
                    to_minutes(event.start_time),
                    to_minutes(event.end_time) + self.work_settings.break_minutes,
                )
            )
        return busy_by_date

    def _next_day(self, day: date) -> date | None:
        try:
            return add_days(day, 1)
        except OverflowError:
            logger.warning(f"Calendar exhausted after {format_date(day)}, stopping early")
            return None

    def _is_focus(self, task: Task) -> bool:
        return self.use_focus and task.project_key == self.focus_key

    def _continuation(
        self, task: Task, day: date, start: int, end: int, chunk: int
    ) -> Insert:
        marker = self.config.continuation_marker
        notes = f"{task.notes}\n{marker}" if task.notes is not None else marker
        return Insert(
            user_id=task.user_id,
            title=f"{task.title}{self.config.continuation_title_suffix}",
            company=task.company,
            project=task.project,
            project_id=task.project_id,
            notes=notes,
            task_date=format_date(day),
            start_time=to_time_string(start),
            end_time=to_time_string(end),
            is_milestone=False,
            estimated_hours=chunk / 60,
            dependencies=[],
            priority_level=task.priority_level,
            deadline_type=task.deadline_type,
            deadline_date=task.deadline_date,
        )

    def run(self) -> ScheduleResult:
        schedulable = [task for task in self.tasks if self._is_schedulable(task)]
        if not schedulable:
            logger.info("No schedulable tasks, nothing to do")
            return ScheduleResult()

        work_start = self.work_settings.work_start_minutes
        work_end = self.work_settings.work_end_minutes
        if not self.work_settings.has_working_window:
            logger.warning(
                f"Empty working window {to_time_string(work_start)}-"
                f"{to_time_string(work_end)}, skipping {len(schedulable)} tasks"
            )
            return ScheduleResult()

        busy_by_date = self._collect_busy({task.id for task in schedulable})
        ordered = build_scheduling_queue(
            schedulable, max_passes=self.config.max_dependency_passes
        )

        focus_queue: deque[QueueEntry] = deque()
        normal_queue: deque[QueueEntry] = deque()
        for task in ordered:
            entry = QueueEntry(task, math.ceil(task.estimated_hours * 60))
            (focus_queue if self._is_focus(task) else normal_queue).append(entry)

        logger.info(
            f"Scheduling {len(ordered)} tasks "
            f"(focus: {len(focus_queue)}, normal: {len(normal_queue)}, "
            f"chunk: {self.chunk_minutes} min)"
        )

        updates: list[Update] = []
        inserts: list[Insert] = []
        focus_burst = self.config.focus_burst if self.use_focus else 0
        cursor_date = next_weekday(self.tasks[0].task_date)

        while focus_queue or normal_queue:
            cursor_date = next_weekday(cursor_date)
            free_slots = get_free_slots(
                busy_by_date.get(format_date(cursor_date), []), work_start, work_end
            )
            if not free_slots:
                logger.debug(f"No free time on {format_date(cursor_date)}")
                cursor_date = self._next_day(cursor_date)
                if cursor_date is None:
                    break
                continue

            for slot_start, slot_end in free_slots:
                slot_cursor = slot_start
                while slot_cursor < slot_end and (focus_queue or normal_queue):
                    if self.use_focus and focus_queue and focus_burst > 0:
                        current = focus_queue.popleft()
                        focus_burst -= 1
                    elif normal_queue:
                        current = normal_queue.popleft()
                        if self.use_focus:
                            focus_burst = self.config.focus_burst
                    elif focus_queue:
                        current = focus_queue.popleft()
                        if self.use_focus:
                            focus_burst = 1
                    else:
                        break

                    chunk = min(
                        current.remaining_minutes,
                        self.chunk_minutes,
                        slot_end - slot_cursor,
                    )
                    session_end = slot_cursor + chunk
                    if current.is_first_session:
                        updates.append(
                            Update(
                                id=current.task.id,
                                task_date=format_date(cursor_date),
                                start_time=to_time_string(slot_cursor),
                                end_time=to_time_string(session_end),
                            )
                        )
                        current.is_first_session = False
                    else:
                        inserts.append(
                            self._continuation(
                                current.task, cursor_date, slot_cursor, session_end, chunk
                            )
                        )
                    logger.debug(
                        f"Placed {chunk} min of task {current.task.id} on "
                        f"{format_date(cursor_date)} at {to_time_string(slot_cursor)}"
                    )

                    current.remaining_minutes -= chunk
                    slot_cursor = session_end
                    if slot_cursor + self.work_settings.break_minutes <= slot_end:
                        slot_cursor += self.work_settings.break_minutes
                    else:
                        slot_cursor = slot_end

                    if current.remaining_minutes > 0:
                        if self._is_focus(current.task):
                            focus_queue.append(current)
                        else:
                            normal_queue.append(current)

            if focus_queue or normal_queue:
                cursor_date = self._next_day(cursor_date)
                if cursor_date is None:
                    break

        logger.info(
            f"Auto-schedule finished: {len(updates)} updates, {len(inserts)} inserts"
        )
        return ScheduleResult(updates=updates, inserts=inserts)


def auto_schedule(
    tasks: Sequence[Task],
    events: Sequence[Event],
    work_settings: WorkSettings,
    focus_key: str = "",
    allow_reshuffle: bool = False,
    *,
    config: AutoScheduleConfig | None = None,
) -> ScheduleResult:
    """
    Assign pending tasks to free weekday working time.

    Args:
        tasks: All tasks of the account; already-placed ones that are not
            rescheduled count as busy time
        events: Fixed calendar events, blocked together with a trailing break
        work_settings: Working-hours window and break length
        focus_key: ``company · project`` label whose tasks get burst priority
        allow_reshuffle: Also move tasks that already have a time window
        config: Session sizing and continuation tunables

    Returns:
        ScheduleResult with first-session updates and continuation inserts
    """
    scheduler = AutoScheduler(
        tasks,
        events,
        work_settings,
        focus_key=focus_key,
        allow_reshuffle=allow_reshuffle,
        config=config,
    )
    return scheduler.run()
