import unittest
from datetime import datetime, timedelta, timezone

from skillquest.learning_core.common.errors import UnknownSkill, UnknownVideo
from skillquest.learning_core.domain.goal import Goal
from skillquest.learning_core.domain.learning_enums import SkillProgress
from skillquest.learning_core.service.progress.progress_tracker import ProgressTracker
from skillquest.learning_core.service.roadmap.roadmap_generator import RoadmapGeneratorService

FIXED_NOW = datetime(2025, 3, 1, tzinfo=timezone.utc)


class ProgressTrackerTests(unittest.TestCase):
    def setUp(self) -> None:
        self.tracker = ProgressTracker()
        generator = RoadmapGeneratorService(clock=lambda: FIXED_NOW)
        self.roadmap = generator.generate(Goal(title="Learn web", profession="web developer"))

    def test_new_roadmap_is_zero_percent(self) -> None:
        self.assertEqual(self.tracker.compute_completion(self.roadmap), 0)

    def test_mastering_first_skill_gives_eight_percent(self) -> None:
        """
        13개 중 1개 mastered일 때 8%(반올림)인지 검증합니다.

        @returns {None} 테스트만 수행합니다.
        """
        first = self.roadmap.skills[0].skill_id
        updated = self.tracker.set_skill_progress(self.roadmap, first, SkillProgress.MASTERED)
        self.assertEqual(self.tracker.compute_completion(updated), 8)

    def test_in_progress_counts_half(self) -> None:
        roadmap = self.roadmap
        for skill in roadmap.skills[:2]:
            roadmap = self.tracker.set_skill_progress(roadmap, skill.skill_id, SkillProgress.IN_PROGRESS)
        # 2 * 0.5 / 13 = 7.69...
        self.assertEqual(self.tracker.compute_completion(roadmap), 8)

    def test_all_mastered_is_hundred(self) -> None:
        roadmap = self.roadmap
        for skill in roadmap.skills:
            roadmap = self.tracker.set_skill_progress(roadmap, skill.skill_id, SkillProgress.MASTERED)
        self.assertEqual(self.tracker.compute_completion(roadmap), 100)

    def test_completion_is_monotonic_and_bounded(self) -> None:
        """
        스킬 상태를 앞으로만 옮길 때 완료율이 줄지 않고 0~100 범위인지 검증합니다.

        @returns {None} 테스트만 수행합니다.
        """
        roadmap = self.roadmap
        previous = self.tracker.compute_completion(roadmap)
        for skill in roadmap.skills:
            for state in (SkillProgress.IN_PROGRESS, SkillProgress.MASTERED):
                roadmap = self.tracker.set_skill_progress(roadmap, skill.skill_id, state)
                current = self.tracker.compute_completion(roadmap)
                self.assertGreaterEqual(current, previous)
                self.assertTrue(0 <= current <= 100)
                previous = current

    def test_empty_roadmap_is_zero(self) -> None:
        self.roadmap.skills = []
        self.assertEqual(self.tracker.compute_completion(self.roadmap), 0)

    def test_set_skill_progress_does_not_mutate_input(self) -> None:
        first = self.roadmap.skills[0].skill_id
        later = FIXED_NOW + timedelta(hours=1)
        updated = self.tracker.set_skill_progress(self.roadmap, first, SkillProgress.MASTERED, now=later)
        self.assertEqual(self.roadmap.skills[0].progress, SkillProgress.NOT_STARTED)
        self.assertEqual(updated.updated_at, later)
        self.assertEqual(self.roadmap.updated_at, FIXED_NOW)

    def test_video_completion_drives_skill_progress(self) -> None:
        skill = self.roadmap.skills[0]
        video_ids = [video.video_id for video in skill.resources]

        roadmap = self.tracker.set_video_completed(self.roadmap, video_ids[0], True)
        self.assertEqual(roadmap.skills[0].progress, SkillProgress.IN_PROGRESS)
        self.assertEqual(self.tracker.skill_completion(roadmap.skills[0]), 33)

        for video_id in video_ids[1:]:
            roadmap = self.tracker.set_video_completed(roadmap, video_id, True)
        self.assertEqual(roadmap.skills[0].progress, SkillProgress.MASTERED)
        self.assertEqual(self.tracker.compute_completion(roadmap), 8)

        roadmap = self.tracker.set_video_completed(roadmap, video_ids[0], False)
        self.assertEqual(roadmap.skills[0].progress, SkillProgress.IN_PROGRESS)

        for video_id in video_ids[1:]:
            roadmap = self.tracker.set_video_completed(roadmap, video_id, False)
        self.assertEqual(roadmap.skills[0].progress, SkillProgress.NOT_STARTED)

    def test_mastered_skill_stays_mastered_when_video_is_completed(self) -> None:
        """
        스킬을 mastered로 바꾼 뒤 영상을 완료해도 완료율이 줄지 않는지 검증합니다.

        @returns {None} 테스트만 수행합니다.
        """
        skill = self.roadmap.skills[0]
        roadmap = self.tracker.set_skill_progress(self.roadmap, skill.skill_id, SkillProgress.MASTERED)
        self.assertTrue(all(video.completed for video in roadmap.skills[0].resources))
        before = self.tracker.compute_completion(roadmap)

        roadmap = self.tracker.set_video_completed(roadmap, skill.resources[0].video_id, True)
        self.assertEqual(roadmap.skills[0].progress, SkillProgress.MASTERED)
        self.assertGreaterEqual(self.tracker.compute_completion(roadmap), before)

    def test_not_started_clears_video_flags(self) -> None:
        skill = self.roadmap.skills[0]
        roadmap = self.tracker.set_video_completed(self.roadmap, skill.resources[0].video_id, True)
        roadmap = self.tracker.set_skill_progress(roadmap, skill.skill_id, SkillProgress.NOT_STARTED)
        self.assertFalse(any(video.completed for video in roadmap.skills[0].resources))

        roadmap = self.tracker.set_video_completed(roadmap, skill.resources[1].video_id, True)
        self.assertEqual(roadmap.skills[0].progress, SkillProgress.IN_PROGRESS)
        self.assertEqual(self.tracker.skill_completion(roadmap.skills[0]), 33)

    def test_summary_counts(self) -> None:
        roadmap = self.tracker.set_skill_progress(self.roadmap, self.roadmap.skills[0].skill_id, SkillProgress.MASTERED)
        roadmap = self.tracker.set_skill_progress(roadmap, roadmap.skills[1].skill_id, SkillProgress.IN_PROGRESS)
        roadmap = self.tracker.set_video_completed(roadmap, roadmap.skills[2].resources[0].video_id, True)
        summary = self.tracker.summary(roadmap)
        self.assertEqual(summary.total, 13)
        self.assertEqual(summary.mastered, 1)
        self.assertEqual(summary.in_progress, 2)
        self.assertEqual(summary.not_started, 10)
        self.assertEqual(summary.videos_total, 39)
        self.assertEqual(summary.videos_completed, 4)
        # (1 + 2 * 0.5) / 13 = 15.38...
        self.assertEqual(summary.completion, 15)

    def test_unknown_ids_raise(self) -> None:
        with self.assertRaises(UnknownSkill):
            self.tracker.set_skill_progress(self.roadmap, "skill-missing", SkillProgress.MASTERED)
        with self.assertRaises(UnknownVideo):
            self.tracker.set_video_completed(self.roadmap, "video-missing", True)


if __name__ == "__main__":
    unittest.main()
