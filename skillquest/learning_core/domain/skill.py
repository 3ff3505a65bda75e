from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from skillquest.learning_core.domain.learning_enums import SkillCategory, SkillLevel, SkillProgress
from skillquest.learning_core.domain.video_resource import VideoResource


@dataclass
class Skill:
    """
    로드맵에 포함된 개별 스킬.

    `prerequisites`는 표시용 메타데이터이며 학습 순서를 강제하지 않는다.
    """

    skill_id: str
    name: str
    description: str
    level: SkillLevel
    category: SkillCategory
    progress: SkillProgress
    importance: int
    order: int
    resources: List[VideoResource] = field(default_factory=list)
    prerequisites: List[str] = field(default_factory=list)
    estimated_time_to_learn: Optional[str] = None
    target_completion_month: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.skill_id,
            "name": self.name,
            "description": self.description,
            "level": self.level.value,
            "category": self.category.value,
            "progress": self.progress.value,
            "importance": self.importance,
            "order": self.order,
            "resources": [video.to_dict() for video in self.resources],
            "prerequisites": list(self.prerequisites),
            "estimated_time_to_learn": self.estimated_time_to_learn,
            "target_completion_month": self.target_completion_month,
        }

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> "Skill":
        return cls(
            skill_id=payload["id"],
            name=payload["name"],
            description=payload.get("description", ""),
            level=SkillLevel(payload.get("level", SkillLevel.BEGINNER.value)),
            category=SkillCategory(payload.get("category", SkillCategory.TECHNICAL.value)),
            progress=SkillProgress(payload.get("progress", SkillProgress.NOT_STARTED.value)),
            importance=int(payload.get("importance", 5)),
            order=int(payload.get("order", 0)),
            resources=[VideoResource.from_dict(item) for item in payload.get("resources", [])],
            prerequisites=list(payload.get("prerequisites") or []),
            estimated_time_to_learn=payload.get("estimated_time_to_learn"),
            target_completion_month=payload.get("target_completion_month"),
        )
