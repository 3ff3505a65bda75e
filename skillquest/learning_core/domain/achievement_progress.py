from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict

from skillquest.learning_core.domain.achievement import Achievement


@dataclass(frozen=True)
class AchievementProgress:
    """
    아직 얻지 못한 업적의 달성 진행도.

    `progress`는 0~99 정수 퍼센트이며 `hint`는 남은 조건을 설명한다.
    """

    achievement: Achievement
    current: int
    required: int
    progress: int
    hint: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "achievement": self.achievement.to_dict(),
            "current": self.current,
            "required": self.required,
            "progress": self.progress,
            "hint": self.hint,
        }
