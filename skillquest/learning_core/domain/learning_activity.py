from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Any, Dict


@dataclass
class LearningActivity:
    """하루 단위 학습 활동 기록 (스트릭 계산 단위)."""

    day: date
    minutes_learned: int = 0
    videos_watched: int = 0
    tokens_earned: int = 0
    completed_goal: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "day": self.day.isoformat(),
            "minutes_learned": self.minutes_learned,
            "videos_watched": self.videos_watched,
            "tokens_earned": self.tokens_earned,
            "completed_goal": self.completed_goal,
        }

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> "LearningActivity":
        return cls(
            day=date.fromisoformat(payload["day"]),
            minutes_learned=int(payload.get("minutes_learned", 0)),
            videos_watched=int(payload.get("videos_watched", 0)),
            tokens_earned=int(payload.get("tokens_earned", 0)),
            completed_goal=bool(payload.get("completed_goal", False)),
        )
