from __future__ import annotations

import logging
from decimal import ROUND_HALF_UP, Decimal
from typing import Dict

from skillquest.learning_core.common.errors import InsufficientTokens
from skillquest.learning_core.domain.learning_enums import ContentFormat, Tier
from skillquest.learning_core.domain.token_charge import ChargeResult

logger = logging.getLogger(__name__)

BASE_COST: Dict[Tier, int] = {
    Tier.BEGINNER: 200,
    Tier.INTERMEDIATE: 300,
    Tier.ADVANCED: 400,
}

BASE_HOURS: Dict[Tier, int] = {
    Tier.BEGINNER: 10,
    Tier.INTERMEDIATE: 15,
    Tier.ADVANCED: 20,
}

FORMAT_MULTIPLIER: Dict[ContentFormat, Decimal] = {
    ContentFormat.SHORT: Decimal("1.0"),
    ContentFormat.LONG: Decimal("1.5"),
}


def _scaled(base: int, content_format: ContentFormat) -> int:
    value = Decimal(base) * FORMAT_MULTIPLIER[ContentFormat(content_format)]
    return int(value.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


class TokenEconomy:
    """로드맵 생성 비용 산정과 토큰 차감 규칙."""

    def quote_cost(self, tier: Tier, content_format: ContentFormat) -> int:
        """
        @param tier 난이도 티어.
        @param content_format 영상 길이 선호.
        @returns 음이 아닌 정수 토큰 비용.
        """
        return _scaled(BASE_COST[Tier(tier)], content_format)

    def estimate_hours(self, tier: Tier, content_format: ContentFormat) -> int:
        """
        @returns 예상 학습 시간(시간 단위).
        """
        return _scaled(BASE_HOURS[Tier(tier)], content_format)

    def can_afford(self, balance: int, cost: int) -> bool:
        return balance >= cost

    def charge(self, balance: int, cost: int) -> ChargeResult:
        """
        잔액에서 비용을 차감합니다. 실패해도 예외를 던지지 않고 결과로 돌려줍니다.

        @param balance 현재 잔액.
        @param cost 차감할 비용.
        @returns ChargeResult (실패 시 잔액 변화 없음, error=InsufficientTokens).
        """
        if cost < 0:
            raise ValueError(f"cost must be non-negative: {cost}")
        if not self.can_afford(balance, cost):
            logger.info("Charge rejected: required=%d balance=%d", cost, balance)
            return ChargeResult(
                ok=False,
                balance=balance,
                cost=cost,
                error=InsufficientTokens(required=cost, balance=balance),
            )
        return ChargeResult(ok=True, balance=balance - cost, cost=cost)
