from __future__ import annotations

import unittest
from datetime import date

from fitlog.models import MonthlyStats, WeeklyStats


class TestWeeklyProgress(unittest.TestCase):
    def _week(self, completed_days: int, total_minutes: int = 0, goal: int = 5) -> WeeklyStats:
        return WeeklyStats(
            week_start=date(2024, 3, 4),
            completed_days=completed_days,
            total_minutes=total_minutes,
            goal=goal,
        )

    def test_progress_towards_goal(self):
        stats = self._week(3, total_minutes=100)

        self.assertFalse(stats.goal_reached)
        self.assertEqual(stats.remaining_days, 2)
        self.assertEqual(stats.completion_rate, 60)
        self.assertEqual(stats.average_minutes, 33)

    def test_goal_exceeded(self):
        stats = self._week(6)

        self.assertTrue(stats.goal_reached)
        self.assertEqual(stats.remaining_days, 0)
        self.assertEqual(stats.completion_rate, 120)

    def test_empty_week_and_zero_goal(self):
        self.assertEqual(self._week(0).average_minutes, 0)
        self.assertEqual(self._week(0, goal=0).completion_rate, 0)

    def test_average_rounds_half_up(self):
        self.assertEqual(self._week(2, total_minutes=45).average_minutes, 23)

    def test_progress_is_serialized(self):
        dumped = self._week(5, total_minutes=150).model_dump(mode="json")

        self.assertEqual(dumped["week_start"], "2024-03-04")
        self.assertTrue(dumped["goal_reached"])
        self.assertEqual(dumped["remaining_days"], 0)
        self.assertEqual(dumped["completion_rate"], 100)
        self.assertEqual(dumped["average_minutes"], 30)


class TestMonthlyProgress(unittest.TestCase):
    def test_completion_rate(self):
        stats = MonthlyStats(year=2024, month=2, completed_days=10, total_minutes=300, total_days=29)

        self.assertEqual(stats.completion_rate, 34)
        self.assertEqual(stats.average_minutes, 30)
        self.assertEqual(stats.model_dump()["completion_rate"], 34)

    def test_zero_days_guard(self):
        stats = MonthlyStats(year=2024, month=2, completed_days=0, total_minutes=0, total_days=0)

        self.assertEqual(stats.completion_rate, 0)
        self.assertEqual(stats.average_minutes, 0)


if __name__ == "__main__":
    unittest.main()
