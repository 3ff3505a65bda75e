from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

from skillquest.learning_core.domain.achievement import Achievement
from skillquest.learning_core.domain.learning_activity import LearningActivity
from skillquest.learning_core.domain.streak_stats import StreakStats


@dataclass(frozen=True)
class ActivityOutcome:
    """일일 활동 기록 결과 (갱신된 통계와 새로 획득한 업적)."""

    activity: LearningActivity
    stats: StreakStats
    unlocked: List[Achievement] = field(default_factory=list)
