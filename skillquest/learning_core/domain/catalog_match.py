from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from skillquest.learning_core.domain.skill_template import SkillTemplate

MATCH_EXACT = "exact"
MATCH_PARTIAL = "partial"
MATCH_FALLBACK = "fallback"


@dataclass(frozen=True)
class CatalogMatch:
    """카탈로그 조회 결과와 매칭 방식."""

    kind: str
    key: Optional[str]
    templates: Tuple[SkillTemplate, ...]
