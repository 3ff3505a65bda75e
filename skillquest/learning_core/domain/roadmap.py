from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional

from skillquest.learning_core.domain.goal import Goal
from skillquest.learning_core.domain.learning_enums import ContentFormat, Tier
from skillquest.learning_core.domain.skill import Skill


@dataclass
class Roadmap:
    """학습 목표 하나에 대응하는 스킬 로드맵 도메인 모델."""

    roadmap_id: str
    goal: Goal
    skills: List[Skill]
    created_at: datetime
    updated_at: datetime
    last_accessed_at: Optional[datetime] = None
    user_id: Optional[str] = None
    tier: Tier = Tier.BEGINNER
    content_format: ContentFormat = ContentFormat.SHORT
    tokens_used: int = 0
    tags: List[str] = field(default_factory=list)

    def find_skill(self, skill_id: str) -> Optional[Skill]:
        for skill in self.skills:
            if skill.skill_id == skill_id:
                return skill
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.roadmap_id,
            "user_id": self.user_id,
            "goal": self.goal.to_dict(),
            "skills": [skill.to_dict() for skill in self.skills],
            "tier": self.tier.value,
            "format": self.content_format.value,
            "tokens_used": self.tokens_used,
            "tags": list(self.tags),
            "created_at": self.created_at.isoformat(),
            "updated_at": self.updated_at.isoformat(),
            "last_accessed_at": self.last_accessed_at.isoformat() if self.last_accessed_at else None,
        }

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> "Roadmap":
        last_accessed = payload.get("last_accessed_at")
        return cls(
            roadmap_id=payload["id"],
            user_id=payload.get("user_id"),
            goal=Goal.from_dict(payload.get("goal") or {}),
            skills=[Skill.from_dict(item) for item in payload.get("skills", [])],
            tier=Tier(payload.get("tier", Tier.BEGINNER.value)),
            content_format=ContentFormat(payload.get("format", ContentFormat.SHORT.value)),
            tokens_used=int(payload.get("tokens_used", 0)),
            tags=list(payload.get("tags") or []),
            created_at=datetime.fromisoformat(payload["created_at"]),
            updated_at=datetime.fromisoformat(payload["updated_at"]),
            last_accessed_at=datetime.fromisoformat(last_accessed) if last_accessed else None,
        )
