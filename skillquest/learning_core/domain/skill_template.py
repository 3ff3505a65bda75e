from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple

from skillquest.learning_core.domain.learning_enums import SkillCategory, SkillLevel


@dataclass(frozen=True)
class SkillTemplate:
    """스킬 카탈로그에 정의된 스킬 원형."""

    name: str
    description: str
    level: SkillLevel = SkillLevel.BEGINNER
    category: SkillCategory = SkillCategory.TECHNICAL
    importance: int = 5
    estimated_time_to_learn: Optional[str] = None
    prerequisites: Tuple[str, ...] = field(default_factory=tuple)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "level": self.level.value,
            "category": self.category.value,
            "importance": self.importance,
            "estimated_time_to_learn": self.estimated_time_to_learn,
            "prerequisites": list(self.prerequisites),
        }
