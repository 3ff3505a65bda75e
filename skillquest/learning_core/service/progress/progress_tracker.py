from __future__ import annotations

import copy
from datetime import datetime
from typing import Optional

from skillquest.learning_core.common.errors import UnknownSkill, UnknownVideo
from skillquest.learning_core.common.identifiers import utc_now
from skillquest.learning_core.domain.learning_enums import SkillProgress
from skillquest.learning_core.domain.progress_summary import ProgressSummary
from skillquest.learning_core.domain.roadmap import Roadmap
from skillquest.learning_core.domain.skill import Skill


def _round_half_up_ratio(numerator: int, denominator: int) -> int:
    """정수 연산으로 numerator/denominator를 반올림(.5 올림)합니다."""
    return (2 * numerator + denominator) // (2 * denominator)


class ProgressTracker:
    """
    로드맵 완료율 계산과 진행 상태 변경.

    완료율은 스킬 단위로만 계산한다. mastered는 1, in-progress는 0.5로 가중하며
    영상 완료 여부는 소속 스킬의 상태를 갱신하는 입력으로만 쓰인다.
    """

    def compute_completion(self, roadmap: Roadmap) -> int:
        """
        @param roadmap 대상 로드맵.
        @returns 0~100 정수 완료율 (스킬이 없으면 0).
        """
        total = len(roadmap.skills)
        if total == 0:
            return 0
        mastered = sum(1 for skill in roadmap.skills if skill.progress == SkillProgress.MASTERED)
        in_progress = sum(1 for skill in roadmap.skills if skill.progress == SkillProgress.IN_PROGRESS)
        return _round_half_up_ratio((2 * mastered + in_progress) * 100, 2 * total)

    def summary(self, roadmap: Roadmap) -> ProgressSummary:
        counts = {state: 0 for state in SkillProgress}
        videos_total = 0
        videos_completed = 0
        for skill in roadmap.skills:
            counts[skill.progress] += 1
            videos_total += len(skill.resources)
            videos_completed += sum(1 for video in skill.resources if video.completed)
        return ProgressSummary(
            total=len(roadmap.skills),
            not_started=counts[SkillProgress.NOT_STARTED],
            in_progress=counts[SkillProgress.IN_PROGRESS],
            mastered=counts[SkillProgress.MASTERED],
            completion=self.compute_completion(roadmap),
            videos_total=videos_total,
            videos_completed=videos_completed,
        )

    def skill_completion(self, skill: Skill) -> int:
        """
        @param skill 대상 스킬.
        @returns 완료한 영상 비율 (영상이 없으면 상태 기준 0 또는 100).
        """
        if not skill.resources:
            return 100 if skill.progress == SkillProgress.MASTERED else 0
        done = sum(1 for video in skill.resources if video.completed)
        return _round_half_up_ratio(done * 100, len(skill.resources))

    def set_skill_progress(
        self,
        roadmap: Roadmap,
        skill_id: str,
        progress: SkillProgress,
        now: Optional[datetime] = None,
    ) -> Roadmap:
        """
        스킬 진행 상태를 변경한 새 로드맵을 반환합니다.
        mastered는 모든 영상을 완료로, not-started는 모든 영상을 미완료로 맞춘다.

        @param roadmap 원본 로드맵 (변경하지 않는다).
        @param skill_id 대상 스킬 ID.
        @param progress 새 진행 상태.
        @param now 갱신 시각.
        @returns 변경된 로드맵 사본.
        @raises UnknownSkill 스킬이 없는 경우.
        """
        updated = copy.deepcopy(roadmap)
        skill = updated.find_skill(skill_id)
        if skill is None:
            raise UnknownSkill(skill_id)
        skill.progress = SkillProgress(progress)
        _sync_videos(skill)
        _touch(updated, now)
        return updated

    def set_video_completed(
        self,
        roadmap: Roadmap,
        video_id: str,
        completed: bool,
        now: Optional[datetime] = None,
    ) -> Roadmap:
        """
        영상 완료 여부를 바꾸고 소속 스킬 상태를 다시 계산한 새 로드맵을 반환합니다.

        @raises UnknownVideo 영상이 없는 경우.
        """
        updated = copy.deepcopy(roadmap)
        for skill in updated.skills:
            for video in skill.resources:
                if video.video_id == video_id:
                    video.completed = bool(completed)
                    skill.progress = derive_skill_progress(skill)
                    _touch(updated, now)
                    return updated
        raise UnknownVideo(video_id)


def derive_skill_progress(skill: Skill) -> SkillProgress:
    """
    @param skill 영상 목록을 가진 스킬.
    @returns 완료 영상 수에 따른 진행 상태 (영상이 없으면 현재 상태 유지).
    """
    if not skill.resources:
        return skill.progress
    done = sum(1 for video in skill.resources if video.completed)
    if done == 0:
        return SkillProgress.NOT_STARTED
    if done == len(skill.resources):
        return SkillProgress.MASTERED
    return SkillProgress.IN_PROGRESS


def _touch(roadmap: Roadmap, now: Optional[datetime]) -> None:
    stamp = now or utc_now()
    roadmap.updated_at = stamp
    roadmap.last_accessed_at = stamp


def _sync_videos(skill: Skill) -> None:
    # in-progress는 영상 완료 기록을 그대로 둔다
    if skill.progress == SkillProgress.MASTERED:
        for video in skill.resources:
            video.completed = True
    elif skill.progress == SkillProgress.NOT_STARTED:
        for video in skill.resources:
            video.completed = False
