from __future__ import annotations

from enum import Enum


class SkillLevel(str, Enum):
    """스킬 숙련 단계."""

    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"
    EXPERT = "expert"


class SkillCategory(str, Enum):
    """스킬 분류."""

    TECHNICAL = "technical"
    SOFT = "soft"
    DOMAIN = "domain"
    TOOL = "tool"


class SkillProgress(str, Enum):
    """스킬 학습 진행 상태 (세 가지 값만 허용)."""

    NOT_STARTED = "not-started"
    IN_PROGRESS = "in-progress"
    MASTERED = "mastered"


class Tier(str, Enum):
    """로드맵 난이도 티어. 토큰 비용과 영상 난이도 산정에 사용한다."""

    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"


class ContentFormat(str, Enum):
    """영상 길이 선호 (비용 배수)."""

    SHORT = "short"
    LONG = "long"


def video_difficulty_for(level: SkillLevel) -> Tier:
    """
    스킬 레벨을 영상 난이도로 변환합니다. expert는 advanced로 취급합니다.

    @param {SkillLevel} level - 스킬 레벨.
    @returns {Tier} 영상 난이도.
    """
    if level == SkillLevel.EXPERT:
        return Tier.ADVANCED
    return Tier(level.value)
