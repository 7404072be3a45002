"""
Unit tests for grouping and upcoming/past classification.

Cutoff rule: a meeting stays upcoming on its own day until noon Pacific.
- 2026-10-20 is in daylight saving time (noon PDT == 19:00 UTC)
- 2026-12-01 is in standard time (noon PST == 20:00 UTC)
"""

import unittest
from datetime import date, datetime, timedelta, timezone

from fakes import saved

from brainslots.classify import classify, cutoff_for, group_slots_by_date, is_upcoming
from brainslots.model import DateGroup

TUE = date(2026, 10, 20)
THU = date(2026, 10, 22)
WINTER_TUE = date(2026, 12, 1)


def utc(*args: int) -> datetime:
    return datetime(*args, tzinfo=timezone.utc)


def _groups(days: list[date]) -> list[DateGroup]:
    return group_slots_by_date([saved(str(i), d) for i, d in enumerate(days)])


class TestGrouping(unittest.TestCase):
    def test_groups_sorted_with_day_labels(self) -> None:
        slots = [saved("1", THU), saved("2", TUE), saved("3", THU)]
        groups = group_slots_by_date(slots)

        self.assertEqual([g.date for g in groups], [TUE, THU])
        self.assertEqual([g.day for g in groups], ["Tuesday", "Thursday"])
        self.assertEqual([str(s.id) for s in groups[1].slots], ["1", "3"])

    def test_empty(self) -> None:
        self.assertEqual(group_slots_by_date([]), [])


class TestCutoff(unittest.TestCase):
    def test_cutoff_follows_daylight_saving(self) -> None:
        self.assertEqual(cutoff_for(TUE), utc(2026, 10, 20, 19))
        self.assertEqual(cutoff_for(WINTER_TUE), utc(2026, 12, 1, 20))

    def test_fixed_utc_cutoff(self) -> None:
        self.assertEqual(cutoff_for(TUE, tz="UTC", hour=20), utc(2026, 10, 20, 20))

    def test_today_before_cutoff_is_upcoming(self) -> None:
        self.assertTrue(is_upcoming(TUE, utc(2026, 10, 20, 18, 30)))
        self.assertTrue(is_upcoming(WINTER_TUE, utc(2026, 12, 1, 19, 30)))

    def test_today_after_cutoff_is_past(self) -> None:
        self.assertFalse(is_upcoming(TUE, utc(2026, 10, 20, 19, 30)))
        self.assertFalse(is_upcoming(WINTER_TUE, utc(2026, 12, 1, 20, 30)))

    def test_exactly_at_cutoff_is_past(self) -> None:
        self.assertFalse(is_upcoming(TUE, utc(2026, 10, 20, 19)))

    def test_fixed_utc_cutoff_differs_in_summer(self) -> None:
        now = utc(2026, 10, 20, 19, 30)
        self.assertTrue(is_upcoming(TUE, now, tz="UTC", cutoff_hour=20))
        self.assertFalse(is_upcoming(TUE, now))

    def test_naive_now_is_schedule_local_time(self) -> None:
        self.assertTrue(is_upcoming(TUE, datetime(2026, 10, 20, 11, 59)))
        self.assertFalse(is_upcoming(TUE, datetime(2026, 10, 20, 12, 0)))

    def test_other_days(self) -> None:
        now = utc(2026, 10, 20, 17)
        self.assertFalse(is_upcoming(TUE - timedelta(days=5), now))
        self.assertTrue(is_upcoming(THU, now))

    def test_today_is_taken_in_schedule_timezone(self) -> None:
        # 03:00 UTC on the 21st is still the evening of the 20th in California
        now = utc(2026, 10, 21, 3)
        self.assertFalse(is_upcoming(TUE, now))
        self.assertTrue(is_upcoming(date(2026, 10, 21), now))


class TestClassify(unittest.TestCase):
    def test_split_and_order(self) -> None:
        days = [TUE - timedelta(days=7 * k) for k in range(1, 4)] + [TUE, THU]
        schedule = classify(_groups(days), utc(2026, 10, 20, 17))

        self.assertEqual([g.date for g in schedule.upcoming], [TUE, THU])
        self.assertEqual(
            [g.date for g in schedule.past],
            [date(2026, 10, 13), date(2026, 10, 6), date(2026, 9, 29)],
        )
        self.assertFalse(schedule.has_more_past)

    def test_today_moves_to_past_after_cutoff(self) -> None:
        groups = _groups([TUE, THU])
        before = classify(groups, utc(2026, 10, 20, 18))
        after = classify(groups, utc(2026, 10, 20, 20))

        self.assertEqual([g.date for g in before.upcoming], [TUE, THU])
        self.assertEqual(before.past, [])
        self.assertEqual([g.date for g in after.upcoming], [THU])
        self.assertEqual([g.date for g in after.past], [TUE])

    def test_past_preview_is_limited_to_five(self) -> None:
        days = [TUE - timedelta(days=7 * k) for k in range(1, 9)]
        schedule = classify(_groups(days), utc(2026, 10, 20, 17))

        self.assertEqual(len(schedule.past), 5)
        self.assertEqual(schedule.past_total, 8)
        self.assertTrue(schedule.has_more_past)
        self.assertEqual(schedule.past[0].date, date(2026, 10, 13))

    def test_all_past_meetings(self) -> None:
        days = [TUE - timedelta(days=7 * k) for k in range(1, 9)]
        schedule = classify(_groups(days), utc(2026, 10, 20, 17), past_limit=None)

        self.assertEqual(len(schedule.past), 8)
        self.assertFalse(schedule.has_more_past)


if __name__ == "__main__":
    unittest.main()
