from __future__ import annotations

import logging
from typing import Optional

from django.db.models import F
from django.utils import timezone

from skillquest.learning_core.common.retry import create_retry_decorator
from skillquest.learning_core.models import LearnerProfile
from skillquest.learning_core.repository.token_ledger import (
    DEFAULT_TOKEN_BALANCE,
    REFERRAL_BONUS_TOKENS,
    TokenLedger,
)

logger = logging.getLogger(__name__)


class DatabaseTokenLedger(TokenLedger):
    """
    `LearnerProfile.tokens` 컬럼 기반 원장.

    차감은 `UPDATE ... SET tokens = tokens - n WHERE tokens >= n` 한 번으로 처리하고
    영향받은 행 수로 성공 여부를 판단한다.
    """

    def __init__(
        self,
        default_balance: int = DEFAULT_TOKEN_BALANCE,
        referral_bonus: int = REFERRAL_BONUS_TOKENS,
        max_attempts: int = 3,
        min_wait: float = 0.2,
        max_wait: float = 2.0,
    ) -> None:
        super().__init__(default_balance, referral_bonus)
        self._retry = create_retry_decorator(max_attempts, min_wait, max_wait)

    def balance(self, user_id: str) -> int:
        def _balance() -> int:
            tokens = LearnerProfile.objects.filter(user_id=user_id).values_list("tokens", flat=True).first()
            return tokens or 0

        return self._retry(_balance)()

    def open_account(self, user_id: str, referred_by: Optional[str] = None) -> int:
        def _open() -> int:
            profile, created = LearnerProfile.objects.get_or_create(
                user_id=user_id,
                defaults={"tokens": self.signup_balance(referred_by), "referred_by": referred_by},
            )
            if created:
                logger.info("Opened token account %s with %d tokens", user_id, profile.tokens)
            return profile.tokens

        return self._retry(_open)()

    def try_debit(self, user_id: str, amount: int) -> Optional[int]:
        def _debit() -> Optional[int]:
            updated = LearnerProfile.objects.filter(user_id=user_id, tokens__gte=amount).update(
                tokens=F("tokens") - amount,
                updated_at=timezone.now(),
            )
            if not updated:
                return None
            return LearnerProfile.objects.values_list("tokens", flat=True).get(user_id=user_id)

        return self._retry(_debit)()

    def credit(self, user_id: str, amount: int) -> int:
        def _credit() -> int:
            updated = LearnerProfile.objects.filter(user_id=user_id).update(
                tokens=F("tokens") + amount,
                updated_at=timezone.now(),
            )
            if not updated:
                LearnerProfile.objects.create(user_id=user_id, tokens=amount)
            return LearnerProfile.objects.values_list("tokens", flat=True).get(user_id=user_id)

        return self._retry(_credit)()
