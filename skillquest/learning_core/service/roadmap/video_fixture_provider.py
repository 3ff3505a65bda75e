from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Callable, List, Tuple

from skillquest.learning_core.common.hashing import stable_bucket
from skillquest.learning_core.common.identifiers import new_id
from skillquest.learning_core.domain.learning_enums import SkillLevel, video_difficulty_for
from skillquest.learning_core.domain.video_resource import VideoResource

PLACEHOLDER_VIDEO_URL = "https://www.youtube.com/watch?v=dQw4w9WgXcQ"


@dataclass(frozen=True)
class _VideoSlot:
    title_pattern: str
    channel: str
    duration_seconds: int
    thumbnail_url: str


VIDEO_SLOTS: Tuple[_VideoSlot, ...] = (
    _VideoSlot(
        "Complete {name} Tutorial for {level}s",
        "Programming with Pro",
        45 * 60 + 21,
        "https://images.pexels.com/photos/1181244/pexels-photo-1181244.jpeg?auto=compress&cs=tinysrgb&w=600",
    ),
    _VideoSlot(
        "{name} Crash Course 2023",
        "Tech Solutions",
        1 * 3600 + 22 * 60 + 45,
        "https://images.pexels.com/photos/1181271/pexels-photo-1181271.jpeg?auto=compress&cs=tinysrgb&w=600",
    ),
    _VideoSlot(
        "Mastering {name}: From Basics to Advanced",
        "DevMastery",
        3 * 3600 + 10 * 60 + 33,
        "https://images.pexels.com/photos/1181243/pexels-photo-1181243.jpeg?auto=compress&cs=tinysrgb&w=600",
    ),
)


class VideoProvider(ABC):
    """스킬별 학습 영상 목록을 공급하는 인터페이스."""

    @abstractmethod
    def videos_for(self, skill_name: str, level: SkillLevel, now: datetime) -> List[VideoResource]:
        raise NotImplementedError


class FixtureVideoProvider(VideoProvider):
    """
    외부 검색 없이 고정 슬롯으로 영상 3개를 만드는 기본 공급자.

    제목/채널/길이는 슬롯에서, 조회수/좋아요/게시일은 스킬명 해시에서 결정되므로
    같은 입력이면 식별자를 제외하고 항상 같은 결과를 낸다.
    """

    def __init__(self, id_factory: Callable[[str], str] = new_id) -> None:
        self._id_factory = id_factory

    def videos_for(self, skill_name: str, level: SkillLevel, now: datetime) -> List[VideoResource]:
        """
        @param skill_name 스킬 이름.
        @param level 스킬 레벨 (영상 난이도로 변환된다).
        @param now 기준 시각.
        @returns 완료되지 않은 영상 목록.
        """
        difficulty = video_difficulty_for(level)
        videos: List[VideoResource] = []
        for index, slot in enumerate(VIDEO_SLOTS):
            seed = f"{skill_name}:{index}"
            published = now - timedelta(days=stable_bucket(seed, 115) + 1)
            videos.append(
                VideoResource(
                    video_id=self._id_factory("video"),
                    title=slot.title_pattern.format(name=skill_name, level=level.value.capitalize()),
                    url=PLACEHOLDER_VIDEO_URL,
                    channel=slot.channel,
                    duration_seconds=slot.duration_seconds,
                    published_at=published.isoformat(),
                    thumbnail_url=slot.thumbnail_url,
                    difficulty=difficulty,
                    views=stable_bucket(f"views:{seed}", 1_000_000),
                    likes=stable_bucket(f"likes:{seed}", 100_000),
                    completed=False,
                )
            )
        return videos
