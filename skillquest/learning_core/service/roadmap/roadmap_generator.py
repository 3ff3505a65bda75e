from __future__ import annotations

import logging
import math
from datetime import datetime
from typing import Callable, List, Optional

from skillquest.learning_core.common.errors import MalformedGoal
from skillquest.learning_core.common.identifiers import new_id, utc_now
from skillquest.learning_core.domain.goal import Goal
from skillquest.learning_core.domain.learning_enums import ContentFormat, SkillProgress, Tier
from skillquest.learning_core.domain.roadmap import Roadmap
from skillquest.learning_core.domain.skill import Skill
from skillquest.learning_core.service.catalog.skill_catalog import SkillCatalog
from skillquest.learning_core.service.roadmap.video_fixture_provider import (
    FixtureVideoProvider,
    VideoProvider,
)

logger = logging.getLogger(__name__)


def validate_goal(goal: Goal) -> None:
    """
    학습 목표의 필수 항목을 검증합니다.

    @param {Goal} goal - 검증할 학습 목표.
    @raises {MalformedGoal} title/profession이 비어 있거나 기한이 양수가 아닌 경우.
    """
    blank = []
    if not (goal.title or "").strip():
        blank.append("title")
    if not (goal.profession or "").strip():
        blank.append("profession")
    if goal.deadline_months is not None and goal.deadline_months <= 0:
        blank.append("deadline_months")
    if blank:
        raise MalformedGoal(blank)


class RoadmapGeneratorService:
    """카탈로그 템플릿으로 새 로드맵을 만드는 서비스."""

    def __init__(
        self,
        catalog: Optional[SkillCatalog] = None,
        video_provider: Optional[VideoProvider] = None,
        clock: Callable[[], datetime] = utc_now,
        id_factory: Callable[[str], str] = new_id,
    ) -> None:
        """
        로드맵 생성에 필요한 의존성을 초기화합니다.

        @param {Optional[SkillCatalog]} catalog - 스킬 카탈로그.
        @param {Optional[VideoProvider]} video_provider - 스킬별 영상 공급자.
        @param {Callable[[], datetime]} clock - 현재 시각 함수.
        @param {Callable[[str], str]} id_factory - 접두사를 받아 식별자를 만드는 함수.
        @returns {None} 내부 상태를 구성합니다.
        """
        self._catalog = catalog or SkillCatalog()
        self._video_provider = video_provider or FixtureVideoProvider(id_factory=id_factory)
        self._clock = clock
        self._id_factory = id_factory

    def generate(
        self,
        goal: Goal,
        user_id: Optional[str] = None,
        tier: Tier = Tier.BEGINNER,
        content_format: ContentFormat = ContentFormat.SHORT,
        tokens_used: int = 0,
    ) -> Roadmap:
        """
        학습 목표로부터 로드맵을 생성합니다.

        모든 스킬은 새 식별자를 받고 not-started 상태로 시작하며,
        `order`는 카탈로그 순서를 그대로 따른다.

        @param {Goal} goal - 학습 목표.
        @param {Optional[str]} user_id - 소유자 ID.
        @param {Tier} tier - 난이도 티어.
        @param {ContentFormat} content_format - 영상 길이 선호.
        @param {int} tokens_used - 생성에 사용된 토큰 수.
        @returns {Roadmap} 생성된 로드맵.
        @raises {MalformedGoal} 목표가 유효하지 않은 경우.
        """
        validate_goal(goal)
        now = self._clock()
        match = self._catalog.match(goal.profession)
        total = len(match.templates)

        skills: List[Skill] = []
        for index, template in enumerate(match.templates):
            skills.append(
                Skill(
                    skill_id=self._id_factory("skill"),
                    name=template.name,
                    description=template.description,
                    level=template.level,
                    category=template.category,
                    progress=SkillProgress.NOT_STARTED,
                    importance=template.importance,
                    order=index,
                    resources=self._video_provider.videos_for(template.name, template.level, now),
                    prerequisites=list(template.prerequisites),
                    estimated_time_to_learn=template.estimated_time_to_learn,
                    target_completion_month=_target_month(index, total, goal.deadline_months),
                )
            )

        roadmap = Roadmap(
            roadmap_id=self._id_factory("roadmap"),
            goal=goal,
            skills=skills,
            created_at=now,
            updated_at=now,
            last_accessed_at=now,
            user_id=user_id,
            tier=tier,
            content_format=content_format,
            tokens_used=tokens_used,
            tags=[match.key] if match.key else [],
        )
        logger.debug(
            "Generated roadmap %s (%s match, %d skills)", roadmap.roadmap_id, match.kind, total
        )
        return roadmap


def _target_month(index: int, total: int, deadline_months: Optional[int]) -> Optional[int]:
    """
    @param index 스킬 순번 (0부터).
    @param total 전체 스킬 수.
    @param deadline_months 목표 기한(개월).
    @returns 기한을 스킬 수로 균등 분배한 목표 월 (기한이 없으면 None).
    """
    if not deadline_months or total <= 0:
        return None
    return max(1, math.ceil((index + 1) * deadline_months / total))
