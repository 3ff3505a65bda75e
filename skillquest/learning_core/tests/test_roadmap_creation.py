import threading
import unittest
from contextlib import nullcontext
from datetime import datetime, timedelta, timezone
from unittest import mock

from django.db import OperationalError

from skillquest.learning_core.common.errors import InsufficientTokens, MalformedGoal, RequestInProgress
from skillquest.learning_core.common.retry import create_retry_decorator
from skillquest.learning_core.domain.goal import Goal
from skillquest.learning_core.domain.learning_enums import ContentFormat, Tier
from skillquest.learning_core.repository.key_value_store import InMemoryKeyValueStore
from skillquest.learning_core.repository.roadmap_repository import RoadmapRepository
from skillquest.learning_core.repository.token_ledger import InMemoryTokenLedger
from skillquest.learning_core.service.economy.token_economy import TokenEconomy
from skillquest.learning_core.service.roadmap.roadmap_creation_service import (
    CLAIM_DONE,
    CLAIM_PENDING,
    RoadmapCreationService,
    idempotency_key_for,
)
from skillquest.learning_core.service.roadmap.roadmap_generator import RoadmapGeneratorService

FIXED_NOW = datetime(2025, 1, 1, tzinfo=timezone.utc)
WEB_GOAL = Goal(title="Learn web", profession="web developer")


class FailingRepository(RoadmapRepository):
    def save(self, roadmap):
        raise RuntimeError("storage unavailable")


class BlockingRepository(RoadmapRepository):
    """저장 도중 멈춰 다른 요청이 끼어들 수 있게 하는 저장소."""

    def __init__(self, store) -> None:
        super().__init__(store)
        self.saving = threading.Event()
        self.release = threading.Event()

    def save(self, roadmap):
        self.saving.set()
        self.release.wait(timeout=5)
        return super().save(roadmap)


class FlakyLedger(InMemoryTokenLedger):
    """첫 차감에서 일시적 DB 오류를 던지는 원장."""

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self.debit_calls = 0

    def try_debit(self, user_id, amount):
        self.debit_calls += 1
        if self.debit_calls == 1:
            raise OperationalError("database is locked")
        return super().try_debit(user_id, amount)


class RoadmapCreationTests(unittest.TestCase):
    def setUp(self) -> None:
        self.store = InMemoryKeyValueStore()
        self.repository = RoadmapRepository(self.store)
        self.ledger = InMemoryTokenLedger(balances={"user_1": 1000, "poor": 100})
        self.service = self._service(self.repository)

    def _service(self, repository: RoadmapRepository, **options) -> RoadmapCreationService:
        return RoadmapCreationService(
            generator=RoadmapGeneratorService(clock=lambda: FIXED_NOW),
            economy=TokenEconomy(),
            ledger=options.pop("ledger", self.ledger),
            repository=repository,
            store=self.store,
            clock=lambda: FIXED_NOW,
            **options,
        )

    def test_successful_creation_debits_and_stores(self) -> None:
        """
        잔액 1000에서 beginner/short 생성 시 200 차감, 로드맵 저장을 검증합니다.

        @returns {None} 테스트만 수행합니다.
        """
        result = self.service.create("user_1", WEB_GOAL)
        self.assertTrue(result.ok)
        self.assertEqual(result.cost, 200)
        self.assertEqual(result.balance, 800)
        self.assertEqual(self.ledger.balance("user_1"), 800)
        self.assertEqual(result.roadmap.tokens_used, 200)
        self.assertEqual(result.roadmap.user_id, "user_1")
        stored = self.repository.get(result.roadmap.roadmap_id)
        self.assertIsNotNone(stored)
        self.assertEqual(len(stored.skills), 13)

    def test_insufficient_tokens_leaves_no_trace(self) -> None:
        """
        잔액 부족이면 잔액이 그대로이고 로드맵이 저장되지 않는지 검증합니다.

        @returns {None} 테스트만 수행합니다.
        """
        result = self.service.create("poor", WEB_GOAL, idempotency_key="req-1")
        self.assertFalse(result.ok)
        self.assertIsNone(result.roadmap)
        self.assertIsInstance(result.error, InsufficientTokens)
        self.assertEqual(result.error.required, 200)
        self.assertEqual(result.error.balance, 100)
        self.assertEqual(self.ledger.balance("poor"), 100)
        self.assertEqual(self.repository.list_for_user("poor"), [])
        self.assertIsNone(self.store.load(idempotency_key_for("poor", "req-1")))

    def test_unknown_account_cannot_create(self) -> None:
        result = self.service.create("stranger", WEB_GOAL)
        self.assertIsInstance(result.error, InsufficientTokens)
        self.assertEqual(result.balance, 0)

    def test_malformed_goal_is_not_charged(self) -> None:
        result = self.service.create("user_1", Goal(title="", profession="web developer"))
        self.assertIsInstance(result.error, MalformedGoal)
        self.assertEqual(result.error.fields, ["title"])
        self.assertEqual(self.ledger.balance("user_1"), 1000)
        self.assertEqual(self.store.size(), 0)

    def test_price_follows_tier_and_format(self) -> None:
        result = self.service.create("user_1", WEB_GOAL, tier=Tier.ADVANCED, content_format=ContentFormat.LONG)
        self.assertEqual(result.cost, 600)
        self.assertEqual(result.balance, 400)

    def test_idempotent_retry_is_charged_once(self) -> None:
        """
        같은 멱등성 키의 재요청이 같은 로드맵을 돌려주고 재차감하지 않는지 검증합니다.

        @returns {None} 테스트만 수행합니다.
        """
        first = self.service.create("user_1", WEB_GOAL, idempotency_key="req-1")
        second = self.service.create("user_1", WEB_GOAL, idempotency_key="req-1")
        self.assertFalse(first.replayed)
        self.assertTrue(second.replayed)
        self.assertEqual(second.roadmap.roadmap_id, first.roadmap.roadmap_id)
        self.assertEqual(second.balance, 800)
        self.assertEqual(len(self.repository.list_for_user("user_1")), 1)

        third = self.service.create("user_1", WEB_GOAL, idempotency_key="req-2")
        self.assertNotEqual(third.roadmap.roadmap_id, first.roadmap.roadmap_id)
        self.assertEqual(third.balance, 600)

    def test_stale_claim_is_taken_over(self) -> None:
        self.store.save(idempotency_key_for("user_1", "req-1"), {"roadmap_id": "gone"})
        result = self.service.create("user_1", WEB_GOAL, idempotency_key="req-1")
        self.assertTrue(result.ok)
        self.assertFalse(result.replayed)
        claim = self.store.load(idempotency_key_for("user_1", "req-1"))
        self.assertEqual(claim["roadmap_id"], result.roadmap.roadmap_id)
        self.assertEqual(claim["state"], CLAIM_DONE)

    def test_retry_while_first_request_is_saving_is_not_charged(self) -> None:
        """
        첫 요청이 저장 중일 때 같은 키로 재요청하면 409용 오류만 받고 재차감되지 않는지 검증합니다.

        @returns {None} 테스트만 수행합니다.
        """
        repository = BlockingRepository(self.store)
        service = self._service(repository)
        results = {}

        def first_request() -> None:
            results["first"] = service.create("user_1", WEB_GOAL, idempotency_key="req-1")

        worker = threading.Thread(target=first_request)
        worker.start()
        self.assertTrue(repository.saving.wait(timeout=5))

        retried = service.create("user_1", WEB_GOAL, idempotency_key="req-1")
        self.assertFalse(retried.ok)
        self.assertIsInstance(retried.error, RequestInProgress)
        self.assertEqual(self.ledger.balance("user_1"), 800)

        repository.release.set()
        worker.join(timeout=5)
        self.assertFalse(worker.is_alive())
        first = results["first"]
        self.assertTrue(first.ok)

        replayed = service.create("user_1", WEB_GOAL, idempotency_key="req-1")
        self.assertTrue(replayed.replayed)
        self.assertEqual(replayed.roadmap.roadmap_id, first.roadmap.roadmap_id)
        self.assertEqual(self.ledger.balance("user_1"), 800)
        self.assertEqual(len(self.repository.list_for_user("user_1")), 1)

    def test_fresh_pending_claim_reports_in_progress(self) -> None:
        self.store.save(
            idempotency_key_for("user_1", "req-1"),
            {
                "roadmap_id": "not-saved-yet",
                "state": CLAIM_PENDING,
                "claimed_at": (FIXED_NOW - timedelta(minutes=1)).isoformat(),
            },
        )
        result = self.service.create("user_1", WEB_GOAL, idempotency_key="req-1")
        self.assertIsInstance(result.error, RequestInProgress)
        self.assertEqual(result.balance, 1000)
        self.assertEqual(self.repository.list_for_user("user_1"), [])

    def test_expired_pending_claim_is_taken_over(self) -> None:
        self.store.save(
            idempotency_key_for("user_1", "req-1"),
            {
                "roadmap_id": "abandoned",
                "state": CLAIM_PENDING,
                "claimed_at": (FIXED_NOW - timedelta(minutes=10)).isoformat(),
            },
        )
        result = self._service(self.repository, claim_timeout=300).create("user_1", WEB_GOAL, idempotency_key="req-1")
        self.assertTrue(result.ok)
        self.assertEqual(result.balance, 800)
        claim = self.store.load(idempotency_key_for("user_1", "req-1"))
        self.assertEqual(claim["roadmap_id"], result.roadmap.roadmap_id)
        self.assertEqual(claim["state"], CLAIM_DONE)

    def test_transient_error_retries_whole_commit(self) -> None:
        """
        차감 중 일시적 DB 오류가 나면 커밋 단위 전체를 다시 실행하는지 검증합니다.

        @returns {None} 테스트만 수행합니다.
        """
        ledger = FlakyLedger(balances={"user_1": 1000})
        service = self._service(
            self.repository,
            ledger=ledger,
            atomic=nullcontext,
            retry=create_retry_decorator(max_attempts=3, min_wait=0, max_wait=0),
        )
        with mock.patch("skillquest.learning_core.common.retry.connection") as connection:
            connection.in_atomic_block = False
            result = service.create("user_1", WEB_GOAL)
        self.assertTrue(result.ok)
        self.assertEqual(ledger.debit_calls, 2)
        self.assertEqual(ledger.balance("user_1"), 800)
        self.assertEqual(len(self.repository.list_for_user("user_1")), 1)

    def test_failed_save_refunds_tokens(self) -> None:
        """
        저장 실패 시 차감한 토큰과 멱등성 키가 되돌려지는지 검증합니다.

        @returns {None} 테스트만 수행합니다.
        """
        service = self._service(FailingRepository(self.store))
        with self.assertRaises(RuntimeError):
            service.create("user_1", WEB_GOAL, idempotency_key="req-1")
        self.assertEqual(self.ledger.balance("user_1"), 1000)
        self.assertIsNone(self.store.load(idempotency_key_for("user_1", "req-1")))

    def test_balance_never_goes_negative(self) -> None:
        results = [self.service.create("user_1", WEB_GOAL, tier=Tier.ADVANCED) for _ in range(4)]
        self.assertEqual([result.ok for result in results], [True, False, False, False])
        self.assertEqual(self.ledger.balance("user_1"), 400)


if __name__ == "__main__":
    unittest.main()
