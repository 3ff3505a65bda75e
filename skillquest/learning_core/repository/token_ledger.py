from __future__ import annotations

import threading
from abc import ABC, abstractmethod
from typing import Dict, Optional

DEFAULT_TOKEN_BALANCE = 1000
REFERRAL_BONUS_TOKENS = 200


class TokenLedger(ABC):
    """
    학습자 토큰 잔액 원장.

    `try_debit`은 "잔액 >= 비용"일 때만 차감하는 원자적 조건부 연산이어야 한다.
    """

    def __init__(
        self,
        default_balance: int = DEFAULT_TOKEN_BALANCE,
        referral_bonus: int = REFERRAL_BONUS_TOKENS,
    ) -> None:
        self.default_balance = default_balance
        self.referral_bonus = referral_bonus

    def signup_balance(self, referred_by: Optional[str]) -> int:
        """
        @param referred_by 추천인 ID.
        @returns 신규 가입자의 시작 잔액.
        """
        return self.default_balance + (self.referral_bonus if referred_by else 0)

    @abstractmethod
    def balance(self, user_id: str) -> int:
        """
        @param user_id 사용자 ID.
        @returns 현재 잔액 (계정이 없으면 0).
        """
        raise NotImplementedError

    @abstractmethod
    def open_account(self, user_id: str, referred_by: Optional[str] = None) -> int:
        """
        계정이 없으면 시작 잔액으로 만들고, 있으면 그대로 둡니다.

        @returns 현재 잔액.
        """
        raise NotImplementedError

    @abstractmethod
    def try_debit(self, user_id: str, amount: int) -> Optional[int]:
        """
        @param user_id 사용자 ID.
        @param amount 차감할 토큰 수.
        @returns 차감 후 잔액, 잔액 부족 또는 계정 없음이면 None.
        """
        raise NotImplementedError

    @abstractmethod
    def credit(self, user_id: str, amount: int) -> int:
        """
        @param user_id 사용자 ID.
        @param amount 적립/환불할 토큰 수.
        @returns 적립 후 잔액.
        """
        raise NotImplementedError


class InMemoryTokenLedger(TokenLedger):
    """락으로 보호되는 메모리 원장."""

    def __init__(
        self,
        default_balance: int = DEFAULT_TOKEN_BALANCE,
        referral_bonus: int = REFERRAL_BONUS_TOKENS,
        balances: Optional[Dict[str, int]] = None,
    ) -> None:
        super().__init__(default_balance, referral_bonus)
        self._balances: Dict[str, int] = dict(balances or {})
        self._lock = threading.Lock()

    def balance(self, user_id: str) -> int:
        with self._lock:
            return self._balances.get(user_id, 0)

    def open_account(self, user_id: str, referred_by: Optional[str] = None) -> int:
        with self._lock:
            if user_id not in self._balances:
                self._balances[user_id] = self.signup_balance(referred_by)
            return self._balances[user_id]

    def try_debit(self, user_id: str, amount: int) -> Optional[int]:
        with self._lock:
            current = self._balances.get(user_id)
            if current is None or current < amount:
                return None
            self._balances[user_id] = current - amount
            return self._balances[user_id]

    def credit(self, user_id: str, amount: int) -> int:
        with self._lock:
            self._balances[user_id] = self._balances.get(user_id, 0) + amount
            return self._balances[user_id]
