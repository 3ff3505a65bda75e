from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable, List, Optional, Sequence

from skillquest.learning_core.common.errors import UnknownRoadmap, UnknownSkill, UnknownVideo
from skillquest.learning_core.common.identifiers import new_id, utc_now
from skillquest.learning_core.domain.creation_result import CreationResult
from skillquest.learning_core.domain.goal import Goal
from skillquest.learning_core.domain.learning_enums import ContentFormat, SkillProgress, Tier
from skillquest.learning_core.domain.progress_summary import ProgressSummary
from skillquest.learning_core.domain.roadmap import Roadmap
from skillquest.learning_core.domain.video_resource import VideoResource, parse_duration
from skillquest.learning_core.repository.roadmap_repository import RoadmapRepository
from skillquest.learning_core.repository.token_ledger import TokenLedger
from skillquest.learning_core.service.progress.progress_tracker import ProgressTracker
from skillquest.learning_core.service.roadmap.roadmap_creation_service import RoadmapCreationService

logger = logging.getLogger(__name__)


class RoadmapService:
    """로드맵 조회/수정/삭제와 진행 상태 관리를 담당하는 애플리케이션 서비스."""

    def __init__(
        self,
        repository: RoadmapRepository,
        creation: RoadmapCreationService,
        ledger: TokenLedger,
        tracker: Optional[ProgressTracker] = None,
        clock: Callable[[], datetime] = utc_now,
        id_factory: Callable[[str], str] = new_id,
    ) -> None:
        self._repository = repository
        self._creation = creation
        self._ledger = ledger
        self._tracker = tracker or ProgressTracker()
        self._clock = clock
        self._id_factory = id_factory

    # ------------------------------------------------------------------
    # 프로필 / 토큰
    # ------------------------------------------------------------------
    def ensure_profile(self, user_id: str, referred_by: Optional[str] = None) -> int:
        """
        @param user_id 사용자 ID.
        @param referred_by 추천인 ID (신규 가입 시 보너스 지급).
        @returns 현재 토큰 잔액.
        """
        return self._ledger.open_account(user_id, referred_by=referred_by)

    def balance(self, user_id: str) -> int:
        return self._ledger.balance(user_id)

    # ------------------------------------------------------------------
    # 생성 / 조회 / 삭제
    # ------------------------------------------------------------------
    def create(
        self,
        user_id: str,
        goal: Goal,
        tier: Tier = Tier.BEGINNER,
        content_format: ContentFormat = ContentFormat.SHORT,
        idempotency_key: Optional[str] = None,
    ) -> CreationResult:
        return self._creation.create(
            user_id,
            goal,
            tier=tier,
            content_format=content_format,
            idempotency_key=idempotency_key,
        )

    def get(self, roadmap_id: str, user_id: Optional[str] = None) -> Roadmap:
        """
        로드맵을 조회하고 마지막 접근 시각을 갱신합니다.

        @raises UnknownRoadmap 없거나 다른 사용자의 로드맵인 경우.
        """
        roadmap = self._load(roadmap_id, user_id)
        roadmap.last_accessed_at = self._clock()
        return self._repository.save(roadmap)

    def list(self, user_id: Optional[str]) -> List[Roadmap]:
        return self._repository.list_for_user(user_id)

    def delete(self, roadmap_id: str, user_id: Optional[str] = None) -> None:
        self._load(roadmap_id, user_id)
        self._repository.delete(roadmap_id)
        logger.info("Deleted roadmap %s", roadmap_id)

    def completion(self, roadmap_id: str, user_id: Optional[str] = None) -> ProgressSummary:
        return self._tracker.summary(self._load(roadmap_id, user_id))

    # ------------------------------------------------------------------
    # 진행 상태
    # ------------------------------------------------------------------
    def update_skill_progress(
        self,
        roadmap_id: str,
        skill_id: str,
        progress: SkillProgress,
        user_id: Optional[str] = None,
    ) -> Roadmap:
        roadmap = self._load(roadmap_id, user_id)
        updated = self._tracker.set_skill_progress(roadmap, skill_id, progress, now=self._clock())
        return self._repository.save(updated)

    def update_video_progress(
        self,
        roadmap_id: str,
        video_id: str,
        completed: bool,
        user_id: Optional[str] = None,
    ) -> Roadmap:
        roadmap = self._load(roadmap_id, user_id)
        updated = self._tracker.set_video_completed(roadmap, video_id, completed, now=self._clock())
        return self._repository.save(updated)

    # ------------------------------------------------------------------
    # 구성 변경
    # ------------------------------------------------------------------
    def reorder_skills(
        self,
        roadmap_id: str,
        skill_ids: Sequence[str],
        user_id: Optional[str] = None,
    ) -> Roadmap:
        """
        스킬 순서를 바꾸고 `order`를 0부터 다시 매깁니다.
        목록에 없는 스킬은 기존 순서를 유지한 채 뒤에 붙는다.

        @raises UnknownSkill 로드맵에 없는 스킬 ID가 포함된 경우.
        """
        roadmap = self._load(roadmap_id, user_id)
        by_id = {skill.skill_id: skill for skill in roadmap.skills}
        for skill_id in skill_ids:
            if skill_id not in by_id:
                raise UnknownSkill(skill_id)

        seen = set()
        ordered = []
        for skill_id in skill_ids:
            if skill_id not in seen:
                seen.add(skill_id)
                ordered.append(by_id[skill_id])
        ordered.extend(skill for skill in roadmap.skills if skill.skill_id not in seen)

        for index, skill in enumerate(ordered):
            skill.order = index
        roadmap.skills = ordered
        self._touch(roadmap)
        return self._repository.save(roadmap)

    def add_video_resource(
        self,
        roadmap_id: str,
        skill_id: str,
        title: str,
        url: str,
        channel: str = "",
        duration: object = 0,
        thumbnail_url: str = "",
        added_by: Optional[str] = None,
        user_id: Optional[str] = None,
    ) -> VideoResource:
        """
        스킬에 사용자가 고른 영상을 추가합니다.

        @param duration 초 단위 정수 또는 "MM:SS"/"H:MM:SS" 문자열.
        @returns 새 ID와 추가 시각이 채워진 영상.
        @raises UnknownSkill 스킬이 없는 경우.
        @raises ValueError 재생 시간 형식이 잘못된 경우.
        """
        roadmap = self._load(roadmap_id, user_id)
        skill = roadmap.find_skill(skill_id)
        if skill is None:
            raise UnknownSkill(skill_id)
        now = self._clock()
        video = VideoResource(
            video_id=self._id_factory("video"),
            title=title,
            url=url,
            channel=channel,
            duration_seconds=parse_duration(duration),
            published_at=now.isoformat(),
            thumbnail_url=thumbnail_url,
            difficulty=_difficulty_of(skill.resources, roadmap.tier),
            completed=False,
            added_at=now.isoformat(),
            added_by=added_by,
        )
        skill.resources.append(video)
        self._touch(roadmap, now)
        self._repository.save(roadmap)
        return video

    def remove_video_resource(
        self,
        roadmap_id: str,
        skill_id: str,
        video_id: str,
        user_id: Optional[str] = None,
    ) -> Roadmap:
        roadmap = self._load(roadmap_id, user_id)
        skill = roadmap.find_skill(skill_id)
        if skill is None:
            raise UnknownSkill(skill_id)
        remaining = [video for video in skill.resources if video.video_id != video_id]
        if len(remaining) == len(skill.resources):
            raise UnknownVideo(video_id)
        skill.resources = remaining
        self._touch(roadmap)
        return self._repository.save(roadmap)

    # ------------------------------------------------------------------
    # 내부 유틸리티
    # ------------------------------------------------------------------
    def _load(self, roadmap_id: str, user_id: Optional[str]) -> Roadmap:
        roadmap = self._repository.get(roadmap_id)
        if roadmap is None or (user_id is not None and roadmap.user_id != user_id):
            raise UnknownRoadmap(roadmap_id, user_id)
        return roadmap

    def _touch(self, roadmap: Roadmap, now: Optional[datetime] = None) -> None:
        stamp = now or self._clock()
        roadmap.updated_at = stamp
        roadmap.last_accessed_at = stamp


def _difficulty_of(videos: Sequence[VideoResource], fallback: Tier) -> Tier:
    return videos[0].difficulty if videos else fallback
