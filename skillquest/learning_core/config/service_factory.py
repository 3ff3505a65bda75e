# =============================================================================
# 학습 코어 서비스 조립
# =============================================================================
# Django 설정값으로 저장소/원장/서비스를 한 번만 구성해 뷰와 테스트가 공유합니다.
#
# 설정 키:
#   - LEARNING_STORE_BACKEND: "database"(기본) 또는 "memory"
#   - DEFAULT_TOKEN_BALANCE / REFERRAL_BONUS_TOKENS: 신규 가입 토큰
#   - PERSISTENCE_MAX_RETRIES / PERSISTENCE_RETRY_MIN_WAIT / PERSISTENCE_RETRY_MAX_WAIT
#   - DAILY_GOAL_MINUTES: 일일 목표 달성 기준(분)
#   - IDEMPOTENCY_CLAIM_TIMEOUT: 처리 중 멱등성 키를 만료로 보는 시간(초)
# =============================================================================

from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import lru_cache

from django.conf import settings
from django.db import transaction

from skillquest.learning_core.common.retry import create_retry_decorator
from skillquest.learning_core.repository.key_value_store import InMemoryKeyValueStore, KeyValueStore
from skillquest.learning_core.repository.roadmap_repository import RoadmapRepository
from skillquest.learning_core.repository.token_ledger import (
    DEFAULT_TOKEN_BALANCE,
    REFERRAL_BONUS_TOKENS,
    InMemoryTokenLedger,
    TokenLedger,
)
from skillquest.learning_core.service.catalog.skill_catalog import SkillCatalog
from skillquest.learning_core.service.economy.token_economy import TokenEconomy
from skillquest.learning_core.service.gamification.achievement_service import AchievementService
from skillquest.learning_core.service.gamification.streak_service import DAILY_GOAL_MINUTES, StreakService
from skillquest.learning_core.service.progress.progress_tracker import ProgressTracker
from skillquest.learning_core.service.roadmap.roadmap_creation_service import (
    DEFAULT_CLAIM_TIMEOUT_SECONDS,
    RoadmapCreationService,
)
from skillquest.learning_core.service.roadmap.roadmap_generator import RoadmapGeneratorService
from skillquest.learning_core.service.roadmap.roadmap_service import RoadmapService

logger = logging.getLogger(__name__)

BACKEND_DATABASE = "database"
BACKEND_MEMORY = "memory"


@dataclass(frozen=True)
class LearningServices:
    """조립된 서비스 묶음."""

    catalog: SkillCatalog
    economy: TokenEconomy
    tracker: ProgressTracker
    ledger: TokenLedger
    roadmaps: RoadmapService
    streaks: StreakService
    achievements: AchievementService


def build_services(backend: str = BACKEND_DATABASE) -> LearningServices:
    """
    @param backend 저장소 백엔드 ("database" 또는 "memory").
    @returns LearningServices
    @raises ValueError 알 수 없는 백엔드인 경우.
    """
    default_balance = getattr(settings, "DEFAULT_TOKEN_BALANCE", DEFAULT_TOKEN_BALANCE)
    referral_bonus = getattr(settings, "REFERRAL_BONUS_TOKENS", REFERRAL_BONUS_TOKENS)
    retry_options = {
        "max_attempts": getattr(settings, "PERSISTENCE_MAX_RETRIES", 3),
        "min_wait": getattr(settings, "PERSISTENCE_RETRY_MIN_WAIT", 0.2),
        "max_wait": getattr(settings, "PERSISTENCE_RETRY_MAX_WAIT", 2.0),
    }

    store: KeyValueStore
    ledger: TokenLedger
    if backend == BACKEND_DATABASE:
        from skillquest.learning_core.repository.database_key_value_store import DatabaseKeyValueStore
        from skillquest.learning_core.repository.database_token_ledger import DatabaseTokenLedger

        store = DatabaseKeyValueStore(**retry_options)
        ledger = DatabaseTokenLedger(default_balance, referral_bonus, **retry_options)
        atomic = transaction.atomic
        # 트랜잭션 안의 개별 쿼리는 재시도하지 않으므로 커밋 단위로 다시 시도한다
        unit_retry = create_retry_decorator(**retry_options)
    elif backend == BACKEND_MEMORY:
        store = InMemoryKeyValueStore()
        ledger = InMemoryTokenLedger(default_balance, referral_bonus)
        atomic = None
        unit_retry = None
    else:
        raise ValueError(f"Unknown learning store backend: {backend}")

    catalog = SkillCatalog()
    economy = TokenEconomy()
    tracker = ProgressTracker()
    repository = RoadmapRepository(store)
    creation = RoadmapCreationService(
        generator=RoadmapGeneratorService(catalog=catalog),
        economy=economy,
        ledger=ledger,
        repository=repository,
        store=store,
        atomic=atomic,
        retry=unit_retry,
        claim_timeout=getattr(settings, "IDEMPOTENCY_CLAIM_TIMEOUT", DEFAULT_CLAIM_TIMEOUT_SECONDS),
    )
    streaks = StreakService(store, daily_goal_minutes=getattr(settings, "DAILY_GOAL_MINUTES", DAILY_GOAL_MINUTES))
    logger.info("Learning services built with %s backend", backend)
    return LearningServices(
        catalog=catalog,
        economy=economy,
        tracker=tracker,
        ledger=ledger,
        roadmaps=RoadmapService(repository, creation, ledger, tracker=tracker),
        streaks=streaks,
        achievements=AchievementService(store, streaks, repository, tracker=tracker),
    )


@lru_cache(maxsize=1)
def get_services() -> LearningServices:
    """
    @returns 설정의 LEARNING_STORE_BACKEND로 조립된 프로세스 단일 서비스 묶음.
    """
    return build_services(getattr(settings, "LEARNING_STORE_BACKEND", BACKEND_DATABASE))
