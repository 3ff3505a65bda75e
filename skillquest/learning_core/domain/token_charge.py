from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from skillquest.learning_core.common.errors import InsufficientTokens


@dataclass(frozen=True)
class ChargeResult:
    """
    토큰 차감 결과.

    성공 시 `balance`는 차감 후 잔액, 실패 시 변경되지 않은 원래 잔액이다.
    """

    ok: bool
    balance: int
    cost: int
    error: Optional[InsufficientTokens] = None
