from __future__ import annotations

import logging
from contextlib import nullcontext
from datetime import datetime, timedelta
from typing import Any, Callable, ContextManager, Dict, Optional

from skillquest.learning_core.common.errors import InsufficientTokens, MalformedGoal, RequestInProgress
from skillquest.learning_core.common.identifiers import utc_now
from skillquest.learning_core.domain.creation_result import CreationResult
from skillquest.learning_core.domain.goal import Goal
from skillquest.learning_core.domain.learning_enums import ContentFormat, Tier
from skillquest.learning_core.domain.roadmap import Roadmap
from skillquest.learning_core.repository.key_value_store import KeyValueStore
from skillquest.learning_core.repository.roadmap_repository import RoadmapRepository
from skillquest.learning_core.repository.token_ledger import TokenLedger
from skillquest.learning_core.service.economy.token_economy import TokenEconomy
from skillquest.learning_core.service.roadmap.roadmap_generator import RoadmapGeneratorService

logger = logging.getLogger(__name__)

CLAIM_PENDING = "pending"
CLAIM_DONE = "done"
DEFAULT_CLAIM_TIMEOUT_SECONDS = 300


def idempotency_key_for(user_id: str, key: str) -> str:
    return f"idempotency-{user_id}-{key}"


class RoadmapCreationService:
    """
    토큰 차감과 로드맵 저장을 하나의 논리적 트랜잭션으로 묶는 서비스.

    처리 순서:
        1. 목표 검증 및 비용 산정
        2. 로드맵 생성 (부수 효과 없음)
        3. 멱등성 키 선점 (키가 있을 때만, pending 상태로 기록)
        4. 원장 조건부 차감
        5. 로드맵 저장 후 선점 기록을 done으로 변경

    같은 키의 요청이 처리 중(pending)이면 다시 차감하지 않고 RequestInProgress를 돌려준다.
    pending 기록은 `claim_timeout` 초가 지나야 다른 요청이 넘겨받을 수 있다.

    `atomic`이 DB 트랜잭션을 제공하면 실패 시 전체가 롤백되고 `retry`는 3~5단계 전체를
    다시 실행한다. 그렇지 않으면 차감한 토큰과 선점한 멱등성 키를 직접 되돌린다.
    """

    def __init__(
        self,
        generator: RoadmapGeneratorService,
        economy: TokenEconomy,
        ledger: TokenLedger,
        repository: RoadmapRepository,
        store: KeyValueStore,
        atomic: Optional[Callable[[], ContextManager]] = None,
        retry: Optional[Callable[[Callable], Callable]] = None,
        clock: Callable[[], datetime] = utc_now,
        claim_timeout: float = DEFAULT_CLAIM_TIMEOUT_SECONDS,
    ) -> None:
        """
        @param generator 로드맵 생성기.
        @param economy 비용 규칙.
        @param ledger 토큰 원장.
        @param repository 로드맵 저장소.
        @param store 멱등성 키 저장소.
        @param atomic 트랜잭션 컨텍스트 팩토리 (없으면 보상 처리 사용).
        @param retry 트랜잭션 단위 재시도 데코레이터.
        @param clock 현재 시각 함수.
        @param claim_timeout pending 선점 기록을 만료로 보는 시간(초).
        """
        self._generator = generator
        self._economy = economy
        self._ledger = ledger
        self._repository = repository
        self._store = store
        self._atomic = atomic or nullcontext
        self._transactional = atomic is not None
        self._retry = retry or (lambda fn: fn)
        self._clock = clock
        self._claim_timeout = timedelta(seconds=claim_timeout)

    def create(
        self,
        user_id: str,
        goal: Goal,
        tier: Tier = Tier.BEGINNER,
        content_format: ContentFormat = ContentFormat.SHORT,
        idempotency_key: Optional[str] = None,
    ) -> CreationResult:
        """
        비용을 차감하고 로드맵을 생성/저장합니다.

        @param user_id 사용자 ID.
        @param goal 학습 목표.
        @param tier 난이도 티어.
        @param content_format 영상 길이 선호.
        @param idempotency_key 재요청 식별 키 (같은 키의 재요청은 재차감하지 않는다).
        @returns CreationResult (잔액 부족/목표 오류/처리 중 요청은 error로 반환).
        """
        cost = self._economy.quote_cost(tier, content_format)

        if idempotency_key:
            existing = self._check_claim(user_id, idempotency_key, cost)
            if existing is not None:
                return existing

        try:
            roadmap = self._generator.generate(
                goal,
                user_id=user_id,
                tier=tier,
                content_format=content_format,
                tokens_used=cost,
            )
        except MalformedGoal as exc:
            logger.info("Rejected malformed goal for %s: %s", user_id, exc.fields)
            return CreationResult(roadmap=None, balance=self._ledger.balance(user_id), cost=cost, error=exc)

        return self._retry(self._commit)(user_id, roadmap, cost, idempotency_key)

    def _commit(
        self,
        user_id: str,
        roadmap: Roadmap,
        cost: int,
        idempotency_key: Optional[str],
    ) -> CreationResult:
        claim_key = idempotency_key_for(user_id, idempotency_key) if idempotency_key else None
        claim: Dict[str, Any] = {
            "roadmap_id": roadmap.roadmap_id,
            "state": CLAIM_PENDING,
            "claimed_at": self._clock().isoformat(),
        }

        with self._atomic():
            if claim_key and not self._store.add(claim_key, claim):
                existing = self._check_claim(user_id, idempotency_key, cost)
                if existing is not None:
                    return existing
                # 만료된 선점 기록은 이번 요청이 넘겨받는다
                self._store.save(claim_key, claim)

            balance = self._ledger.try_debit(user_id, cost)
            if balance is None:
                if claim_key:
                    self._store.delete(claim_key)
                current = self._ledger.balance(user_id)
                logger.info("Insufficient tokens for %s: required=%d balance=%d", user_id, cost, current)
                return CreationResult(
                    roadmap=None,
                    balance=current,
                    cost=cost,
                    error=InsufficientTokens(required=cost, balance=current),
                )

            try:
                self._repository.save(roadmap)
            except Exception:
                if not self._transactional:
                    self._compensate(user_id, cost, claim_key)
                raise
            if claim_key:
                self._store.save(claim_key, dict(claim, state=CLAIM_DONE))

        logger.info(
            "Created roadmap %s for %s (cost=%d, balance=%d)", roadmap.roadmap_id, user_id, cost, balance
        )
        return CreationResult(roadmap=roadmap, balance=balance, cost=cost)

    def _check_claim(self, user_id: str, idempotency_key: str, cost: int) -> Optional[CreationResult]:
        """
        기존 선점 기록을 확인합니다.

        @returns 재전송 결과, 처리 중 결과, 또는 새로 진행해도 되면 None.
        """
        claim = self._store.load(idempotency_key_for(user_id, idempotency_key))
        if not claim:
            return None

        roadmap: Optional[Roadmap] = self._repository.get(claim["roadmap_id"])
        if roadmap is not None:
            logger.info("Replayed roadmap %s for %s", roadmap.roadmap_id, user_id)
            return CreationResult(
                roadmap=roadmap,
                balance=self._ledger.balance(user_id),
                cost=cost,
                replayed=True,
            )

        if claim.get("state") == CLAIM_PENDING and not self._is_stale(claim):
            logger.info("Request %s for %s is still in progress", idempotency_key, user_id)
            return CreationResult(
                roadmap=None,
                balance=self._ledger.balance(user_id),
                cost=cost,
                error=RequestInProgress(idempotency_key),
            )

        logger.warning("Taking over stale idempotency claim %s for %s", idempotency_key, user_id)
        return None

    def _is_stale(self, claim: Dict[str, Any]) -> bool:
        claimed_at = claim.get("claimed_at")
        if not claimed_at:
            return True
        return self._clock() - datetime.fromisoformat(claimed_at) > self._claim_timeout

    def _compensate(self, user_id: str, cost: int, claim_key: Optional[str]) -> None:
        balance = self._ledger.credit(user_id, cost)
        if claim_key:
            self._store.delete(claim_key)
        logger.warning("Refunded %d tokens to %s after failed save (balance=%d)", cost, user_id, balance)
