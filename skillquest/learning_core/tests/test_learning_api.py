from datetime import datetime, timedelta, timezone

from django.test import TestCase
from rest_framework.test import APIClient

from skillquest.learning_core.config.service_factory import get_services
from skillquest.learning_core.models import LearnerProfile
from skillquest.learning_core.repository.database_key_value_store import DatabaseKeyValueStore
from skillquest.learning_core.service.roadmap.roadmap_creation_service import CLAIM_PENDING, idempotency_key_for

CREATE_PAYLOAD = {
    "user_id": "user_1",
    "title": "Become a web developer",
    "profession": "Web Developer",
    "tier": "beginner",
    "format": "short",
}


class LearningApiTests(TestCase):
    def setUp(self) -> None:
        get_services.cache_clear()
        self.client = APIClient()

    def _create(self, **overrides):
        payload = dict(CREATE_PAYLOAD, **overrides)
        return self.client.post("/api/roadmaps", payload, format="json")

    def test_health(self) -> None:
        response = self.client.get("/api/health/")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data["status"], "ok")

    def test_catalog_fallback(self) -> None:
        response = self.client.get("/api/catalog", {"profession": "astronaut"})
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data["match"], "fallback")
        self.assertEqual(len(response.data["skills"]), 10)

    def test_token_quote(self) -> None:
        response = self.client.get("/api/token-quote", {"tier": "advanced", "format": "long", "balance": 500})
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data["cost"], 600)
        self.assertEqual(response.data["estimated_hours"], 30)
        self.assertFalse(response.data["can_afford"])

        response = self.client.get("/api/token-quote", {"tier": "expert"})
        self.assertEqual(response.status_code, 400)

    def test_token_balance_opens_profile(self) -> None:
        response = self.client.get("/api/profiles/new_user/tokens", {"referred_by": "user_1"})
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data["tokens"], 1200)
        self.assertTrue(LearnerProfile.objects.filter(user_id="new_user").exists())

    def test_create_roadmap_and_track_progress(self) -> None:
        """
        생성(201, 잔액 800) 후 첫 스킬 mastered 시 완료율 8%를 검증합니다.

        @returns {None} 테스트만 수행합니다.
        """
        response = self._create()
        self.assertEqual(response.status_code, 201)
        self.assertEqual(response.data["balance"], 800)
        self.assertEqual(response.data["cost"], 200)
        roadmap = response.data["roadmap"]
        self.assertEqual(len(roadmap["skills"]), 13)
        self.assertEqual(roadmap["completion"], 0)

        skill_id = roadmap["skills"][0]["id"]
        response = self.client.patch(
            f"/api/roadmaps/{roadmap['id']}/skills/{skill_id}",
            {"progress": "mastered"},
            format="json",
        )
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data["completion"], 8)

        response = self.client.get("/api/roadmaps", {"user_id": "user_1"})
        self.assertEqual([item["id"] for item in response.data], [roadmap["id"]])

    def test_insufficient_tokens(self) -> None:
        LearnerProfile.objects.create(user_id="user_1", tokens=100)
        response = self._create()
        self.assertEqual(response.status_code, 402)
        self.assertEqual(response.data, {"error": "insufficient_tokens", "required": 200, "balance": 100})
        self.assertEqual(LearnerProfile.objects.get(user_id="user_1").tokens, 100)
        self.assertEqual(self.client.get("/api/roadmaps", {"user_id": "user_1"}).data, [])

    def test_malformed_goal(self) -> None:
        response = self._create(title="   ")
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.data["error"], "malformed_goal")
        self.assertEqual(response.data["fields"], ["title"])

    def test_idempotency_header_replays(self) -> None:
        first = self.client.post("/api/roadmaps", CREATE_PAYLOAD, format="json", HTTP_IDEMPOTENCY_KEY="req-1")
        second = self.client.post("/api/roadmaps", CREATE_PAYLOAD, format="json", HTTP_IDEMPOTENCY_KEY="req-1")
        self.assertEqual(first.status_code, 201)
        self.assertEqual(second.status_code, 200)
        self.assertTrue(second.data["replayed"])
        self.assertEqual(second.data["roadmap"]["id"], first.data["roadmap"]["id"])
        self.assertEqual(second.data["balance"], 800)

    def test_request_in_progress_is_conflict(self) -> None:
        DatabaseKeyValueStore().save(
            idempotency_key_for("user_1", "req-1"),
            {
                "roadmap_id": "not-saved-yet",
                "state": CLAIM_PENDING,
                "claimed_at": datetime.now(timezone.utc).isoformat(),
            },
        )
        response = self.client.post("/api/roadmaps", CREATE_PAYLOAD, format="json", HTTP_IDEMPOTENCY_KEY="req-1")
        self.assertEqual(response.status_code, 409)
        self.assertEqual(response.data["error"], "request_in_progress")
        self.assertEqual(LearnerProfile.objects.get(user_id="user_1").tokens, 1000)

    def test_unknown_ids_are_not_found(self) -> None:
        self.assertEqual(self.client.get("/api/roadmaps/missing").status_code, 404)
        self.assertEqual(self.client.delete("/api/roadmaps/missing").status_code, 404)

        roadmap = self._create().data["roadmap"]
        response = self.client.patch(
            f"/api/roadmaps/{roadmap['id']}/skills/missing", {"progress": "mastered"}, format="json"
        )
        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.data["error"], "unknown_skill")
        response = self.client.patch(
            f"/api/roadmaps/{roadmap['id']}/videos/missing", {"completed": True}, format="json"
        )
        self.assertEqual(response.status_code, 404)
        response = self.client.get(f"/api/roadmaps/{roadmap['id']}", {"user_id": "someone_else"})
        self.assertEqual(response.status_code, 404)

    def test_video_management(self) -> None:
        roadmap = self._create().data["roadmap"]
        skill_id = roadmap["skills"][0]["id"]
        base = f"/api/roadmaps/{roadmap['id']}/skills/{skill_id}/videos"

        response = self.client.post(
            base,
            {"title": "Semantic HTML", "url": "https://example.com/v/1", "duration": "10:05"},
            format="json",
        )
        self.assertEqual(response.status_code, 201)
        self.assertEqual(response.data["duration_seconds"], 605)

        bad = self.client.post(base, {"title": "x", "url": "https://example.com/v/2", "duration": "later"}, format="json")
        self.assertEqual(bad.status_code, 400)

        response = self.client.delete(f"{base}/{response.data['id']}")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(len(response.data["skills"][0]["resources"]), 3)

    def test_skill_order(self) -> None:
        roadmap = self._create().data["roadmap"]
        ids = [skill["id"] for skill in roadmap["skills"]]
        response = self.client.put(
            f"/api/roadmaps/{roadmap['id']}/skill-order", {"skill_ids": [ids[-1]]}, format="json"
        )
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data["skills"][0]["id"], ids[-1])
        self.assertEqual(response.data["skills"][1]["id"], ids[0])

    def test_activity_and_streak(self) -> None:
        """
        활동 기록 후 스트릭 통계와 달력 응답을 검증합니다.

        @returns {None} 테스트만 수행합니다.
        """
        today = datetime.now(timezone.utc).date()
        for offset in (1, 0):
            response = self.client.post(
                "/api/activity",
                {"user_id": "user_1", "minutes_learned": 45, "day": (today - timedelta(days=offset)).isoformat()},
                format="json",
            )
            self.assertEqual(response.status_code, 201)
        self.assertTrue(response.data["activity"]["completed_goal"])

        response = self.client.get("/api/streak", {"user_id": "user_1"})
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data["stats"]["total_days"], 2)
        self.assertGreaterEqual(response.data["stats"]["current_streak"], 1)

        response = self.client.get("/api/streak")
        self.assertEqual(response.status_code, 400)

    def test_streak_rejects_out_of_range_calendar(self) -> None:
        for query in ({"month": 0}, {"month": 13}, {"year": 0}, {"month": "march"}):
            with self.subTest(query=query):
                response = self.client.get("/api/streak", dict(query, user_id="user_1"))
                self.assertEqual(response.status_code, 400)
                self.assertEqual(response.data["error"], "invalid_query")

        response = self.client.get("/api/streak", {"user_id": "user_1", "year": 2025, "month": 2})
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data["calendar"], [])

    def test_achievements_follow_video_progress(self) -> None:
        """
        영상 완료 후 First Steps가 지급되고 남은 업적 진행도가 응답되는지 검증합니다.

        @returns {None} 테스트만 수행합니다.
        """
        response = self.client.get("/api/achievements", {"user_id": "user_1"})
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data["unlocked"], [])
        self.assertEqual(len(response.data["progress"]), 8)

        roadmap = self._create().data["roadmap"]
        video_id = roadmap["skills"][0]["resources"][0]["id"]
        response = self.client.patch(
            f"/api/roadmaps/{roadmap['id']}/videos/{video_id}?user_id=user_1", {"completed": True}, format="json"
        )
        self.assertEqual(response.status_code, 200)

        response = self.client.get("/api/achievements", {"user_id": "user_1"})
        self.assertEqual(response.data["metrics"]["videos_completed"], 1)
        self.assertEqual([item["name"] for item in response.data["unlocked"]], ["First Steps"])
        names = [item["achievement"]["name"] for item in response.data["progress"]]
        self.assertNotIn("First Steps", names)
        self.assertIn("Dedicated Learner", names)

        self.assertEqual(self.client.get("/api/achievements").status_code, 400)
