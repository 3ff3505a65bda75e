from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class Goal:
    """로드맵 생성 입력이 되는 학습 목표. 생성 이후 변경되지 않는다."""

    title: str
    profession: str
    short_term_goals: Optional[str] = None
    long_term_goals: Optional[str] = None
    deadline_months: Optional[int] = None
    description: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "title": self.title,
            "profession": self.profession,
            "short_term_goals": self.short_term_goals,
            "long_term_goals": self.long_term_goals,
            "deadline_months": self.deadline_months,
            "description": self.description,
        }

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> "Goal":
        return cls(
            title=payload.get("title") or "",
            profession=payload.get("profession") or "",
            short_term_goals=payload.get("short_term_goals"),
            long_term_goals=payload.get("long_term_goals"),
            deadline_months=payload.get("deadline_months"),
            description=payload.get("description"),
        )
