"""
Tests for free slot calculation.
"""

from autoscheduler.availability import get_free_slots

WORK_START = 540
WORK_END = 1020


class TestGetFreeSlots:
    def test_no_busy_returns_whole_window(self):
        assert get_free_slots([], WORK_START, WORK_END) == [(540, 1020)]

    def test_busy_in_the_middle_splits_window(self):
        assert get_free_slots([(600, 660)], WORK_START, WORK_END) == [
            (540, 600),
            (660, 1020),
        ]

    def test_unsorted_overlapping_intervals(self):
        busy = [(700, 760), (600, 720)]
        assert get_free_slots(busy, WORK_START, WORK_END) == [(540, 600), (760, 1020)]

    def test_busy_at_window_start(self):
        assert get_free_slots([(540, 600)], WORK_START, WORK_END) == [(600, 1020)]
        assert get_free_slots([(480, 600)], WORK_START, WORK_END) == [(600, 1020)]

    def test_busy_running_past_window_end(self):
        assert get_free_slots([(1000, 1100)], WORK_START, WORK_END) == [(540, 1000)]

    def test_busy_after_window_is_clamped(self):
        assert get_free_slots([(1100, 1200)], WORK_START, WORK_END) == [(540, 1020)]

    def test_fully_busy_day(self):
        assert get_free_slots([(500, 1100)], WORK_START, WORK_END) == []

    def test_contained_interval_does_not_shrink_cursor(self):
        busy = [(600, 900), (650, 700)]
        assert get_free_slots(busy, WORK_START, WORK_END) == [(540, 600), (900, 1020)]

    def test_inverted_interval_ignored(self):
        assert get_free_slots([(1100, 0), (600, 660)], WORK_START, WORK_END) == [
            (540, 600),
            (660, 1020),
        ]

    def test_input_not_mutated(self):
        busy = [(700, 760), (600, 620)]
        get_free_slots(busy, WORK_START, WORK_END)
        assert busy == [(700, 760), (600, 620)]
