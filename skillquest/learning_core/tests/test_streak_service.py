import unittest
from datetime import date, datetime, timedelta, timezone

from skillquest.learning_core.domain.learning_activity import LearningActivity
from skillquest.learning_core.repository.key_value_store import InMemoryKeyValueStore
from skillquest.learning_core.service.gamification.streak_service import StreakService, compute_streak_stats

TODAY = date(2025, 3, 15)
FIXED_NOW = datetime(2025, 3, 15, 20, 0, tzinfo=timezone.utc)


def _activity(day: date, minutes: int = 30) -> LearningActivity:
    return LearningActivity(day=day, minutes_learned=minutes)


class ComputeStreakStatsTests(unittest.TestCase):
    def test_no_activity(self) -> None:
        stats = compute_streak_stats([], TODAY)
        self.assertEqual((stats.current_streak, stats.longest_streak, stats.total_days), (0, 0, 0))

    def test_streak_may_end_yesterday(self) -> None:
        """
        오늘 활동이 없어도 어제까지 이어진 스트릭은 유지되는지 검증합니다.

        @returns {None} 테스트만 수행합니다.
        """
        days = [_activity(TODAY - timedelta(days=offset)) for offset in (1, 2, 3)]
        self.assertEqual(compute_streak_stats(days, TODAY).current_streak, 3)

    def test_streak_breaks_after_a_missed_day(self) -> None:
        days = [_activity(TODAY - timedelta(days=offset)) for offset in (2, 3)]
        self.assertEqual(compute_streak_stats(days, TODAY).current_streak, 0)

    def test_longest_streak_survives_gaps(self) -> None:
        older = [_activity(date(2025, 2, day)) for day in range(1, 6)]
        recent = [_activity(TODAY), _activity(TODAY - timedelta(days=1))]
        stats = compute_streak_stats(older + recent, TODAY)
        self.assertEqual(stats.current_streak, 2)
        self.assertEqual(stats.longest_streak, 5)
        self.assertEqual(stats.total_days, 7)

    def test_average_minutes_rounds_half_up(self) -> None:
        days = [_activity(TODAY, 30), _activity(TODAY - timedelta(days=1), 45)]
        self.assertEqual(compute_streak_stats(days, TODAY).average_minutes, 38)


class StreakServiceTests(unittest.TestCase):
    def setUp(self) -> None:
        self.service = StreakService(InMemoryKeyValueStore(), clock=lambda: FIXED_NOW)

    def test_daily_goal_flag(self) -> None:
        activity = self.service.record_activity("user_1", 29)
        self.assertFalse(activity.completed_goal)
        self.assertEqual(activity.day, TODAY)
        activity = self.service.record_activity("user_1", 30)
        self.assertTrue(activity.completed_goal)
        self.assertEqual(self.service.stats("user_1").total_days, 1)

    def test_tokens_earned_sums_every_day(self) -> None:
        self.service.record_activity("user_1", 30, tokens_earned=40, day=TODAY - timedelta(days=3))
        self.service.record_activity("user_1", 30, tokens_earned=60)
        # 같은 날 재기록은 덮어쓴다
        self.service.record_activity("user_1", 30, tokens_earned=10)
        self.assertEqual(self.service.tokens_earned("user_1"), 50)
        self.assertEqual(self.service.tokens_earned("user_2"), 0)

    def test_calendar_filters_month(self) -> None:
        self.service.record_activity("user_1", 10, day=date(2025, 2, 28))
        self.service.record_activity("user_1", 20, day=date(2025, 3, 2))
        self.service.record_activity("user_1", 30, day=date(2025, 3, 1))
        days = self.service.calendar("user_1", 2025, 3)
        self.assertEqual([activity.day for activity in days], [date(2025, 3, 1), date(2025, 3, 2)])
        self.assertEqual(self.service.calendar("user_2", 2025, 3), [])

    def test_calendar_rejects_invalid_month(self) -> None:
        with self.assertRaises(ValueError):
            self.service.calendar("user_1", 2025, 13)


if __name__ == "__main__":
    unittest.main()
