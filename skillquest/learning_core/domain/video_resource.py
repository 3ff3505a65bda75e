from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

from skillquest.learning_core.domain.learning_enums import Tier


@dataclass
class VideoResource:
    """
    스킬에 연결된 학습 영상.

    재생 시간은 정수 초(`duration_seconds`)로 보관하고,
    "MM:SS" / "H:MM:SS" 표기는 `duration` 프로퍼티로만 노출한다.
    """

    video_id: str
    title: str
    url: str
    channel: str
    duration_seconds: int
    published_at: str
    thumbnail_url: str
    difficulty: Tier
    views: Optional[int] = None
    likes: Optional[int] = None
    completed: bool = False
    added_at: Optional[str] = None
    added_by: Optional[str] = None

    @property
    def duration(self) -> str:
        return format_duration(self.duration_seconds)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.video_id,
            "title": self.title,
            "url": self.url,
            "channel": self.channel,
            "duration_seconds": self.duration_seconds,
            "duration": self.duration,
            "published_at": self.published_at,
            "thumbnail_url": self.thumbnail_url,
            "difficulty": self.difficulty.value,
            "views": self.views,
            "likes": self.likes,
            "completed": self.completed,
            "added_at": self.added_at,
            "added_by": self.added_by,
        }

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> "VideoResource":
        seconds = payload.get("duration_seconds")
        if seconds is None:
            seconds = parse_duration(payload.get("duration", 0))
        return cls(
            video_id=payload["id"],
            title=payload["title"],
            url=payload["url"],
            channel=payload.get("channel", ""),
            duration_seconds=int(seconds),
            published_at=payload.get("published_at", ""),
            thumbnail_url=payload.get("thumbnail_url", ""),
            difficulty=Tier(payload.get("difficulty", Tier.BEGINNER.value)),
            views=payload.get("views"),
            likes=payload.get("likes"),
            completed=bool(payload.get("completed", False)),
            added_at=payload.get("added_at"),
            added_by=payload.get("added_by"),
        )


def parse_duration(value: Any) -> int:
    """
    "MM:SS", "H:MM:SS" 문자열 또는 초 단위 숫자를 정수 초로 변환합니다.

    @param {Any} value - 재생 시간 표현.
    @returns {int} 초 단위 재생 시간.
    @raises {ValueError} 형식이 잘못된 경우.
    """
    if isinstance(value, bool):
        raise ValueError(f"Invalid duration: {value!r}")
    if isinstance(value, (int, float)):
        if value < 0:
            raise ValueError(f"Invalid duration: {value!r}")
        return int(value)
    text = str(value).strip()
    if text.isdigit():
        return int(text)
    parts = text.split(":")
    if len(parts) not in (2, 3) or not all(part.isdigit() for part in parts):
        raise ValueError(f"Invalid duration: {value!r}")
    seconds = 0
    for part in parts:
        seconds = seconds * 60 + int(part)
    return seconds


def format_duration(seconds: int) -> str:
    """
    정수 초를 "M:SS" 또는 "H:MM:SS" 형태로 표기합니다.

    @param {int} seconds - 초 단위 재생 시간.
    @returns {str} 표시용 문자열.
    """
    hours, remainder = divmod(max(0, int(seconds)), 3600)
    minutes, secs = divmod(remainder, 60)
    if hours:
        return f"{hours}:{minutes:02d}:{secs:02d}"
    return f"{minutes}:{secs:02d}"
