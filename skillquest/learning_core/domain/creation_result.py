from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union

from skillquest.learning_core.common.errors import InsufficientTokens, MalformedGoal, RequestInProgress
from skillquest.learning_core.domain.roadmap import Roadmap


@dataclass(frozen=True)
class CreationResult:
    """
    로드맵 생성 요청 결과.

    실패 시 `roadmap`은 None이며 토큰은 차감되지 않는다.
    같은 키의 앞선 요청이 처리 중이면 `error`는 RequestInProgress이다.
    `replayed`는 동일 멱등성 키로 이미 생성된 로드맵을 돌려준 경우 True.
    """

    roadmap: Optional[Roadmap]
    balance: int
    cost: int
    error: Optional[Union[InsufficientTokens, MalformedGoal, RequestInProgress]] = None
    replayed: bool = False

    @property
    def ok(self) -> bool:
        return self.error is None
