from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict


@dataclass(frozen=True)
class LearnerMetrics:
    """업적 판정에 쓰는 학습자 누적 지표."""

    current_streak: int
    videos_completed: int
    roadmaps_completed: int
    tokens_earned: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "current_streak": self.current_streak,
            "videos_completed": self.videos_completed,
            "roadmaps_completed": self.roadmaps_completed,
            "tokens_earned": self.tokens_earned,
        }

    def value_of(self, metric: str) -> int:
        return int(getattr(self, metric))
