"""
Free time calculation for a single working day.
"""

from __future__ import annotations

from collections.abc import Sequence

Interval = tuple[int, int]


def get_free_slots(
    busy: Sequence[Interval], work_start: int, work_end: int
) -> list[Interval]:
    """
    Subtract busy intervals from the working-hours window.

    Args:
        busy: Unordered ``(start, end)`` minute intervals for one day. Overlapping
            intervals are fine; inverted ones (end before start) are ignored.
        work_start: Start of the working window in minutes after midnight
        work_end: End of the working window in minutes after midnight

    Returns:
        Free ``(start, end)`` intervals inside the window, in chronological order
    """
    if not busy:
        return [(work_start, work_end)]

    slots: list[Interval] = []
    cursor = work_start
    for start, end in sorted(busy, key=lambda interval: interval[0]):
        if end < start:
            continue
        if start > cursor:
            slots.append((cursor, min(start, work_end)))
        cursor = max(cursor, end)
        if cursor >= work_end:
            break

    if cursor < work_end:
        slots.append((cursor, work_end))
    return slots
