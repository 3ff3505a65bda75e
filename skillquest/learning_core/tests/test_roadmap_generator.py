import unittest
from datetime import datetime, timezone

from skillquest.learning_core.common.errors import MalformedGoal
from skillquest.learning_core.domain.goal import Goal
from skillquest.learning_core.domain.learning_enums import ContentFormat, SkillLevel, SkillProgress, Tier
from skillquest.learning_core.domain.roadmap import Roadmap
from skillquest.learning_core.service.roadmap.roadmap_generator import RoadmapGeneratorService, validate_goal
from skillquest.learning_core.service.roadmap.video_fixture_provider import FixtureVideoProvider

FIXED_NOW = datetime(2025, 1, 1, 9, 0, tzinfo=timezone.utc)


class RoadmapGeneratorTests(unittest.TestCase):
    def setUp(self) -> None:
        self.generator = RoadmapGeneratorService(clock=lambda: FIXED_NOW)

    def test_web_developer_roadmap(self) -> None:
        """
        web developer 목표가 13개 스킬, not-started 상태로 생성되는지 검증합니다.

        @returns {None} 테스트만 수행합니다.
        """
        roadmap = self.generator.generate(Goal(title="Learn web", profession="web developer"))
        self.assertEqual(len(roadmap.skills), 13)
        self.assertEqual(roadmap.skills[0].name, "HTML Fundamentals")
        self.assertTrue(all(skill.progress == SkillProgress.NOT_STARTED for skill in roadmap.skills))
        self.assertEqual([skill.order for skill in roadmap.skills], list(range(13)))
        self.assertEqual(roadmap.created_at, FIXED_NOW)
        self.assertEqual(roadmap.updated_at, FIXED_NOW)
        self.assertEqual(roadmap.last_accessed_at, FIXED_NOW)
        self.assertEqual(roadmap.tags, ["web developer"])

    def test_ids_are_unique_across_generations(self) -> None:
        goal = Goal(title="Learn web", profession="web developer")
        first = self.generator.generate(goal)
        second = self.generator.generate(goal)

        def collect(roadmap: Roadmap):
            ids = {roadmap.roadmap_id}
            for skill in roadmap.skills:
                ids.add(skill.skill_id)
                ids.update(video.video_id for video in skill.resources)
            return ids

        first_ids = collect(first)
        second_ids = collect(second)
        self.assertEqual(len(first_ids), 1 + 13 + 13 * 3)
        self.assertFalse(first_ids & second_ids)

    def test_videos_are_deterministic_fixtures(self) -> None:
        roadmap = self.generator.generate(Goal(title="Learn web", profession="web developer"))
        again = self.generator.generate(Goal(title="Learn web", profession="web developer"))
        videos = roadmap.skills[0].resources
        self.assertEqual(len(videos), 3)
        self.assertEqual(videos[0].title, "Complete HTML Fundamentals Tutorial for Beginners")
        self.assertEqual(videos[1].title, "HTML Fundamentals Crash Course 2023")
        self.assertEqual(videos[2].channel, "DevMastery")
        self.assertEqual(videos[0].duration, "45:21")
        self.assertEqual(videos[1].duration, "1:22:45")
        self.assertFalse(any(video.completed for video in videos))
        self.assertEqual(
            [(v.views, v.likes, v.published_at) for v in videos],
            [(v.views, v.likes, v.published_at) for v in again.skills[0].resources],
        )

    def test_expert_skill_videos_are_advanced(self) -> None:
        videos = FixtureVideoProvider().videos_for("Kubernetes", SkillLevel.EXPERT, FIXED_NOW)
        self.assertTrue(all(video.difficulty == Tier.ADVANCED for video in videos))

    def test_deadline_spreads_target_months(self) -> None:
        roadmap = self.generator.generate(Goal(title="Data", profession="data scientist", deadline_months=6))
        months = [skill.target_completion_month for skill in roadmap.skills]
        self.assertEqual(months[-1], 6)
        self.assertEqual(months, sorted(months))
        self.assertGreaterEqual(months[0], 1)

    def test_without_deadline_target_month_is_empty(self) -> None:
        roadmap = self.generator.generate(Goal(title="Data", profession="data scientist"))
        self.assertTrue(all(skill.target_completion_month is None for skill in roadmap.skills))

    def test_tier_and_format_are_recorded(self) -> None:
        roadmap = self.generator.generate(
            Goal(title="Ops", profession="devops engineer"),
            user_id="user_1",
            tier=Tier.ADVANCED,
            content_format=ContentFormat.LONG,
            tokens_used=600,
        )
        self.assertEqual(roadmap.user_id, "user_1")
        self.assertEqual(roadmap.tier, Tier.ADVANCED)
        self.assertEqual(roadmap.content_format, ContentFormat.LONG)
        self.assertEqual(roadmap.tokens_used, 600)
        self.assertEqual([skill.name for skill in roadmap.skills], ["Linux Administration", "Docker", "Kubernetes"])

    def test_malformed_goal_is_rejected(self) -> None:
        with self.assertRaises(MalformedGoal) as ctx:
            self.generator.generate(Goal(title="  ", profession=""))
        self.assertEqual(ctx.exception.fields, ["profession", "title"])

    def test_non_positive_deadline_is_rejected(self) -> None:
        with self.assertRaises(MalformedGoal) as ctx:
            validate_goal(Goal(title="t", profession="p", deadline_months=0))
        self.assertEqual(ctx.exception.fields, ["deadline_months"])

    def test_roadmap_round_trips_through_dict(self) -> None:
        roadmap = self.generator.generate(Goal(title="Learn web", profession="web developer", deadline_months=3))
        restored = Roadmap.from_dict(roadmap.to_dict())
        self.assertEqual(restored.to_dict(), roadmap.to_dict())


if __name__ == "__main__":
    unittest.main()
