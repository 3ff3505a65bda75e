from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict


@dataclass(frozen=True)
class ProgressSummary:
    """로드맵 진행 상태 집계."""

    total: int
    not_started: int
    in_progress: int
    mastered: int
    completion: int
    videos_total: int
    videos_completed: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "total": self.total,
            "not_started": self.not_started,
            "in_progress": self.in_progress,
            "mastered": self.mastered,
            "completion": self.completion,
            "videos_total": self.videos_total,
            "videos_completed": self.videos_completed,
        }
