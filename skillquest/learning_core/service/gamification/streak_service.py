from __future__ import annotations

import logging
from calendar import monthrange
from datetime import date, datetime, timedelta
from typing import Callable, Dict, Iterable, List, Optional

from skillquest.learning_core.common.identifiers import utc_now
from skillquest.learning_core.domain.learning_activity import LearningActivity
from skillquest.learning_core.domain.streak_stats import StreakStats
from skillquest.learning_core.repository.key_value_store import KeyValueStore

logger = logging.getLogger(__name__)

DAILY_GOAL_MINUTES = 30


def _activity_key(user_id: str) -> str:
    return f"activity-{user_id}"


def compute_streak_stats(activities: Iterable[LearningActivity], today: date) -> StreakStats:
    """
    활동 일자 목록으로 연속 학습 통계를 계산합니다.

    현재 스트릭은 오늘 또는 어제로 끝나는 연속 활동 일수이며,
    둘 다 활동이 없으면 0이다.

    @param activities 일자별 활동 기록 (순서 무관, 일자 중복 없음).
    @param today 기준 일자.
    @returns StreakStats
    """
    days = sorted({activity.day: activity for activity in activities}.values(), key=lambda item: item.day)
    if not days:
        return StreakStats(current_streak=0, longest_streak=0, total_days=0, average_minutes=0)

    longest = 0
    run = 0
    previous: Optional[date] = None
    for activity in days:
        if previous is not None and activity.day - previous == timedelta(days=1):
            run += 1
        else:
            run = 1
        longest = max(longest, run)
        previous = activity.day

    active = {activity.day for activity in days}
    cursor = today if today in active else today - timedelta(days=1)
    current = 0
    while cursor in active:
        current += 1
        cursor -= timedelta(days=1)

    total_minutes = sum(activity.minutes_learned for activity in days)
    count = len(days)
    return StreakStats(
        current_streak=current,
        longest_streak=longest,
        total_days=count,
        average_minutes=(2 * total_minutes + count) // (2 * count),
    )


class StreakService:
    """일일 학습 활동 기록과 스트릭 통계."""

    def __init__(
        self,
        store: KeyValueStore,
        daily_goal_minutes: int = DAILY_GOAL_MINUTES,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        """
        @param store 활동 저장소.
        @param daily_goal_minutes 일일 목표 달성 기준(분).
        @param clock 현재 시각 함수.
        """
        self._store = store
        self._daily_goal_minutes = daily_goal_minutes
        self._clock = clock

    def record_activity(
        self,
        user_id: str,
        minutes_learned: int,
        videos_watched: int = 0,
        tokens_earned: int = 0,
        day: Optional[date] = None,
    ) -> LearningActivity:
        """
        해당 일자의 활동 기록을 덮어씁니다.

        @param user_id 사용자 ID.
        @param minutes_learned 학습 시간(분).
        @param videos_watched 시청한 영상 수.
        @param tokens_earned 획득 토큰 수.
        @param day 기록 일자 (기본값: 오늘).
        @returns 저장된 LearningActivity.
        """
        activity = LearningActivity(
            day=day or self._clock().date(),
            minutes_learned=minutes_learned,
            videos_watched=videos_watched,
            tokens_earned=tokens_earned,
            completed_goal=minutes_learned >= self._daily_goal_minutes,
        )
        records = self._load_records(user_id)
        records[activity.day.isoformat()] = activity.to_dict()
        self._store.save(_activity_key(user_id), records)
        logger.debug("Recorded activity for %s on %s", user_id, activity.day)
        return activity

    def stats(self, user_id: str) -> StreakStats:
        records = self._load_records(user_id)
        return compute_streak_stats(self._activities(records), self._clock().date())

    def tokens_earned(self, user_id: str) -> int:
        """
        @returns 모든 활동 기록의 획득 토큰 합계.
        """
        return sum(activity.tokens_earned for activity in self._activities(self._load_records(user_id)))

    def calendar(self, user_id: str, year: int, month: int) -> List[LearningActivity]:
        """
        @returns 해당 월의 활동 기록 (일자 오름차순).
        @raises ValueError 연도/월이 범위를 벗어난 경우.
        """
        first = date(year, month, 1)
        last = date(year, month, monthrange(year, month)[1])
        activities = [
            activity for activity in self._activities(self._load_records(user_id)) if first <= activity.day <= last
        ]
        return sorted(activities, key=lambda item: item.day)

    def _load_records(self, user_id: str) -> Dict[str, dict]:
        return self._store.load(_activity_key(user_id)) or {}

    @staticmethod
    def _activities(records: Dict[str, dict]) -> List[LearningActivity]:
        return [LearningActivity.from_dict(payload) for payload in records.values()]
