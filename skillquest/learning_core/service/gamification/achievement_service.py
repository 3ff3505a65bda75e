from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime
from typing import Callable, List, Optional, Tuple

from skillquest.learning_core.common.identifiers import utc_now
from skillquest.learning_core.domain.achievement import Achievement
from skillquest.learning_core.domain.achievement_progress import AchievementProgress
from skillquest.learning_core.domain.activity_outcome import ActivityOutcome
from skillquest.learning_core.domain.learner_metrics import LearnerMetrics
from skillquest.learning_core.repository.key_value_store import KeyValueStore
from skillquest.learning_core.repository.roadmap_repository import RoadmapRepository
from skillquest.learning_core.service.gamification.streak_service import StreakService
from skillquest.learning_core.service.progress.progress_tracker import ProgressTracker

logger = logging.getLogger(__name__)

METRIC_STREAK = "current_streak"
METRIC_VIDEOS = "videos_completed"
METRIC_ROADMAPS = "roadmaps_completed"
METRIC_TOKENS = "tokens_earned"


@dataclass(frozen=True)
class AchievementRule:
    """지표가 기준치 이상이면 지급되는 업적 규칙."""

    metric: str
    required: int
    template: Achievement
    action: str
    unit: str

    def hint(self, current: int) -> str:
        remaining = max(self.required - current, 0)
        suffix = "" if remaining == 1 else "s"
        return f"{self.action} {remaining} more {self.unit}{suffix}"


ACHIEVEMENT_RULES: Tuple[AchievementRule, ...] = (
    AchievementRule(
        METRIC_VIDEOS, 1,
        Achievement("First Steps", "Completed your first video", "Play", "learning", "common", 10),
        "Complete", "video",
    ),
    AchievementRule(
        METRIC_STREAK, 7,
        Achievement("Week Warrior", "Maintained a 7-day learning streak", "Flame", "streak", "rare", 50),
        "Maintain streak for", "day",
    ),
    AchievementRule(
        METRIC_ROADMAPS, 1,
        Achievement("Knowledge Seeker", "Completed your first roadmap", "Trophy", "mastery", "epic", 100),
        "Complete", "roadmap",
    ),
    AchievementRule(
        METRIC_VIDEOS, 10,
        Achievement("Dedicated Learner", "Completed 10 videos", "BookOpen", "learning", "rare", 50),
        "Watch", "video",
    ),
    AchievementRule(
        METRIC_STREAK, 30,
        Achievement("Monthly Master", "Maintained a 30-day learning streak", "Trophy", "streak", "epic", 200),
        "Maintain streak for", "day",
    ),
    AchievementRule(
        METRIC_STREAK, 100,
        Achievement("Centurion", "Maintained a 100-day learning streak", "Crown", "streak", "legendary", 500),
        "Maintain streak for", "day",
    ),
    AchievementRule(
        METRIC_TOKENS, 1000,
        Achievement("Token Collector", "Earned 1000 tokens", "Coins", "tokens", "rare", 100),
        "Earn", "token",
    ),
    AchievementRule(
        METRIC_ROADMAPS, 5,
        Achievement("Skill Master", "Completed 5 roadmaps", "Award", "mastery", "legendary", 300),
        "Complete", "roadmap",
    ),
)


def _achievement_key(user_id: str) -> str:
    return f"achievements-{user_id}"


class AchievementService:
    """
    학습 지표(스트릭, 완료 영상, 완료 로드맵, 획득 토큰) 기반 업적 지급과 진행도 조회.

    업적은 사용자별로 한 번만 지급되며 `achievements-<user_id>` 키에 보관한다.
    """

    def __init__(
        self,
        store: KeyValueStore,
        streaks: StreakService,
        repository: RoadmapRepository,
        tracker: Optional[ProgressTracker] = None,
        rules: Tuple[AchievementRule, ...] = ACHIEVEMENT_RULES,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        """
        @param store 업적 저장소.
        @param streaks 활동/스트릭 서비스.
        @param repository 로드맵 저장소 (완료 영상/로드맵 집계).
        @param tracker 완료율 계산기.
        @param rules 업적 규칙 목록.
        @param clock 현재 시각 함수.
        """
        self._store = store
        self._streaks = streaks
        self._repository = repository
        self._tracker = tracker or ProgressTracker()
        self._rules = rules
        self._clock = clock

    def learner_metrics(self, user_id: str) -> LearnerMetrics:
        """
        @param user_id 사용자 ID.
        @returns 업적 판정용 누적 지표.
        """
        roadmaps = self._repository.list_for_user(user_id)
        videos_completed = sum(
            1 for roadmap in roadmaps for skill in roadmap.skills for video in skill.resources if video.completed
        )
        roadmaps_completed = sum(1 for roadmap in roadmaps if self._tracker.compute_completion(roadmap) == 100)
        return LearnerMetrics(
            current_streak=self._streaks.stats(user_id).current_streak,
            videos_completed=videos_completed,
            roadmaps_completed=roadmaps_completed,
            tokens_earned=self._streaks.tokens_earned(user_id),
        )

    def achievements(self, user_id: str) -> List[Achievement]:
        return [Achievement.from_dict(item) for item in self._store.load(_achievement_key(user_id)) or []]

    def check_and_award(self, user_id: str) -> List[Achievement]:
        """
        현재 지표로 조건을 만족한 업적을 지급합니다.

        @param user_id 사용자 ID.
        @returns 이번 호출에서 새로 지급된 업적 목록.
        """
        return self._award(user_id, self.learner_metrics(user_id))

    def progress(self, user_id: str) -> List[AchievementProgress]:
        """
        아직 얻지 못한 업적의 진행도를 달성에 가까운 순서로 돌려줍니다 (같으면 규칙 순서).

        @param user_id 사용자 ID.
        @returns AchievementProgress 목록.
        """
        metrics = self.learner_metrics(user_id)
        owned = {achievement.name for achievement in self.achievements(user_id)}
        result = []
        for rule in self._rules:
            current = metrics.value_of(rule.metric)
            if rule.template.name in owned or current >= rule.required:
                continue
            result.append(
                AchievementProgress(
                    achievement=rule.template,
                    current=current,
                    required=rule.required,
                    progress=current * 100 // rule.required,
                    hint=rule.hint(current),
                )
            )
        return sorted(result, key=lambda item: -item.progress)

    def record_activity(
        self,
        user_id: str,
        minutes_learned: int,
        videos_watched: int = 0,
        tokens_earned: int = 0,
        day: Optional[date] = None,
    ) -> ActivityOutcome:
        """
        활동을 기록하고 갱신된 스트릭 통계와 새 업적을 돌려줍니다.

        @returns ActivityOutcome
        """
        activity = self._streaks.record_activity(
            user_id,
            minutes_learned,
            videos_watched=videos_watched,
            tokens_earned=tokens_earned,
            day=day,
        )
        metrics = self.learner_metrics(user_id)
        unlocked = self._award(user_id, metrics)
        return ActivityOutcome(activity=activity, stats=self._streaks.stats(user_id), unlocked=unlocked)

    def _award(self, user_id: str, metrics: LearnerMetrics) -> List[Achievement]:
        owned = self.achievements(user_id)
        owned_names = {achievement.name for achievement in owned}
        unlocked_at = self._clock().isoformat()
        unlocked = [
            Achievement(
                name=rule.template.name,
                description=rule.template.description,
                icon=rule.template.icon,
                category=rule.template.category,
                rarity=rule.template.rarity,
                points=rule.template.points,
                unlocked_at=unlocked_at,
            )
            for rule in self._rules
            if metrics.value_of(rule.metric) >= rule.required and rule.template.name not in owned_names
        ]
        if unlocked:
            self._store.save(
                _achievement_key(user_id),
                [achievement.to_dict() for achievement in owned + unlocked],
            )
            logger.info(
                "Unlocked achievements for %s: %s", user_id, [achievement.name for achievement in unlocked]
            )
        return unlocked
