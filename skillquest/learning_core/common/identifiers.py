from __future__ import annotations

import uuid
from datetime import datetime, timezone


def new_id(prefix: str) -> str:
    """
    @param prefix 식별자 접두사 (skill, video, roadmap).
    @returns UUID4 기반의 충돌 없는 식별자.
    """
    return f"{prefix}-{uuid.uuid4().hex}"


def utc_now() -> datetime:
    """
    @returns 타임존 정보가 포함된 현재 UTC 시각.
    """
    return datetime.now(timezone.utc)
