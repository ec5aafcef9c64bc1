"""
Tests for overrun-based estimate inflation.
"""

import pytest

from autoscheduler.behavior import apply_overrun, average_overrun_minutes


class TestAverageOverrun:
    def test_no_history(self):
        assert average_overrun_minutes([]) == 0

    def test_average_of_recent_rows(self):
        rows = [{"overrun_minutes": 10}, {"overrun_minutes": 20.9}, {"overrun_minutes": 30}]
        assert average_overrun_minutes(rows) == 20

    def test_non_numeric_values_count_as_zero(self):
        rows = [{"overrun_minutes": 30}, {"overrun_minutes": "late"}, {}]
        assert average_overrun_minutes(rows) == 10

    def test_only_most_recent_rows_considered(self):
        rows = [{"overrun_minutes": 10}] * 20 + [{"overrun_minutes": 1000}] * 5
        assert average_overrun_minutes(rows) == 10
        assert average_overrun_minutes(rows, limit=25) == 208

    def test_negative_average_truncates_toward_zero(self):
        rows = [{"overrun_minutes": -5}, {"overrun_minutes": 0}]
        assert average_overrun_minutes(rows) == -2


class TestApplyOverrun:
    def test_positive_overrun_inflates_estimates(self, make_task):
        tasks = [make_task(id="a", estimated_hours=1.0), make_task(id="b", estimated_hours=0)]
        adjusted = apply_overrun(tasks, 30)

        assert adjusted[0].estimated_hours == pytest.approx(1.5)
        assert adjusted[1].estimated_hours == 0
        assert tasks[0].estimated_hours == 1.0

    @pytest.mark.parametrize("overrun", [0, -10])
    def test_non_positive_overrun_is_ignored(self, make_task, overrun):
        tasks = [make_task(estimated_hours=2.0)]
        assert apply_overrun(tasks, overrun) == tasks
