"""
Dependency-aware ordering of the scheduling queue.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence

from .models import Task
from .prioritizer import sort_tasks

logger = logging.getLogger(__name__)

DEFAULT_MAX_PASSES = 10000


def dependencies_met(
    task: Task, queued_ids: set[str], tasks_by_id: Mapping[str, Task]
) -> bool:
    """
    Check whether every dependency of ``task`` is out of the way.

    A dependency counts as satisfied when it is unknown to this run, already
    completed, or already placed in the queue.
    """
    for dep_id in task.dependencies:
        dep = tasks_by_id.get(dep_id)
        if dep is None or dep.is_completed:
            continue
        if dep_id not in queued_ids:
            return False
    return True


def build_scheduling_queue(
    tasks: Sequence[Task], max_passes: int = DEFAULT_MAX_PASSES
) -> list[Task]:
    """
    Build the scheduling queue from priority order and dependencies.

    Tasks are scanned repeatedly in priority order; a task joins the queue once
    its dependencies are met. When a full scan makes no progress (a cycle or a
    chain that never resolves) or the pass cap is reached, the remaining tasks
    are appended in their current order rather than dropped.

    Args:
        tasks: Schedulable tasks in any order
        max_passes: Upper bound on the number of full scans

    Returns:
        New list of tasks in scheduling order
    """
    ordered = sort_tasks(tasks)
    tasks_by_id = {task.id: task for task in ordered}

    remaining = list(ordered)
    queue: list[Task] = []
    queued_ids: set[str] = set()
    passes = 0

    while remaining:
        if passes >= max_passes:
            logger.warning(
                f"Dependency resolution stopped after {passes} passes; "
                f"appending {len(remaining)} tasks without ordering"
            )
            queue.extend(remaining)
            break
        passes += 1

        still_blocked: list[Task] = []
        for task in remaining:
            if dependencies_met(task, queued_ids, tasks_by_id):
                queue.append(task)
                queued_ids.add(task.id)
            else:
                still_blocked.append(task)

        if len(still_blocked) == len(remaining):
            logger.warning(
                f"Unresolvable dependencies for tasks {[t.id for t in still_blocked]}; "
                "scheduling them without dependency order"
            )
            queue.extend(still_blocked)
            break
        remaining = still_blocked

    return queue
