from __future__ import annotations

import unittest
from datetime import date, timedelta

from fitlog.services.analytics import calculator
from tests.factories import make_exercise


class TestWeeklyStats(unittest.TestCase):
    def setUp(self):
        self.week_start = date(2024, 3, 4)
        self.records = [
            make_exercise(date(2024, 3, 4), minutes=30),
            make_exercise(date(2024, 3, 4), minutes=45, exercise_type="Yoga"),
            make_exercise(date(2024, 3, 6), minutes=20),
            make_exercise(date(2024, 3, 10), minutes=60),
            # outside the week on both sides
            make_exercise(date(2024, 3, 3), minutes=90),
            make_exercise(date(2024, 3, 11), minutes=90),
        ]

    def test_same_day_counts_once_but_minutes_sum(self):
        stats = calculator.weekly_stats(self.records, self.week_start)

        self.assertEqual(stats.week_start, self.week_start)
        self.assertEqual(stats.completed_days, 3)
        self.assertEqual(stats.total_minutes, 30 + 45 + 20 + 60)
        self.assertEqual(stats.goal, 5)
        self.assertFalse(stats.goal_reached)

    def test_empty_week(self):
        stats = calculator.weekly_stats([], self.week_start)
        self.assertEqual(stats.completed_days, 0)
        self.assertEqual(stats.total_minutes, 0)

    def test_records_for_week_and_date(self):
        in_week = calculator.records_for_week(self.records, self.week_start)
        self.assertEqual(len(in_week), 4)

        on_day = calculator.records_for_date(self.records, date(2024, 3, 4))
        self.assertEqual([r.minutes for r in on_day], [30, 45])


class TestMonthlyStats(unittest.TestCase):
    def test_distinct_days_over_full_month(self):
        records = [
            make_exercise(date(2024, 2, 1), minutes=10),
            make_exercise(date(2024, 2, 1), minutes=15),
            make_exercise(date(2024, 2, 29), minutes=20),
            make_exercise(date(2024, 3, 1), minutes=99),
            make_exercise(date(2023, 2, 1), minutes=99),
        ]

        stats = calculator.monthly_stats(records, 2024, 2)

        self.assertEqual(stats.year, 2024)
        self.assertEqual(stats.month, 2)
        self.assertEqual(stats.completed_days, 2)
        self.assertEqual(stats.total_minutes, 45)
        self.assertEqual(stats.total_days, 29)


class TestStreak(unittest.TestCase):
    def setUp(self):
        self.today = date(2024, 6, 15)

    def test_no_records(self):
        info = calculator.streak([], today=self.today)
        self.assertEqual(info.current, 0)
        self.assertEqual(info.longest, 0)
        self.assertEqual(info.last_updated, self.today)

    def test_current_is_zero_when_today_missing(self):
        records = [make_exercise(self.today - timedelta(days=offset)) for offset in range(1, 11)]

        info = calculator.streak(records, today=self.today)

        self.assertEqual(info.current, 0)
        self.assertGreaterEqual(info.longest, 10)

    def test_gap_breaks_run(self):
        records = [
            make_exercise(date(2024, 1, 1)),
            make_exercise(date(2024, 1, 2)),
            make_exercise(date(2024, 1, 4)),
        ]
        info = calculator.streak(records, today=self.today)
        self.assertEqual(info.longest, 2)
        self.assertEqual(info.current, 0)

    def test_current_run_ending_today(self):
        records = [make_exercise(self.today - timedelta(days=offset)) for offset in range(4)]
        # several records on one day extend the streak by one day only
        records += [make_exercise(self.today), make_exercise(self.today - timedelta(days=1))]
        records.append(make_exercise(self.today - timedelta(days=10)))

        info = calculator.streak(records, today=self.today)

        self.assertEqual(info.current, 4)
        self.assertEqual(info.longest, 4)

    def test_longest_is_historical_when_longer_than_current(self):
        records = [make_exercise(self.today)]
        records += [make_exercise(date(2024, 5, day)) for day in range(1, 8)]

        info = calculator.streak(records, today=self.today)

        self.assertEqual(info.current, 1)
        self.assertEqual(info.longest, 7)

    def test_single_day(self):
        info = calculator.streak([make_exercise(date(2024, 1, 1))], today=self.today)
        self.assertEqual(info.current, 0)
        self.assertEqual(info.longest, 1)

    def test_run_across_month_boundary(self):
        records = [make_exercise(date(2024, 2, 28)), make_exercise(date(2024, 2, 29)), make_exercise(date(2024, 3, 1))]
        info = calculator.streak(records, today=date(2024, 3, 1))
        self.assertEqual(info.current, 3)
        self.assertEqual(info.longest, 3)


if __name__ == "__main__":
    unittest.main()
