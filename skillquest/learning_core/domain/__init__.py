from skillquest.learning_core.domain.achievement import Achievement
from skillquest.learning_core.domain.achievement_progress import AchievementProgress
from skillquest.learning_core.domain.activity_outcome import ActivityOutcome
from skillquest.learning_core.domain.catalog_match import CatalogMatch
from skillquest.learning_core.domain.creation_result import CreationResult
from skillquest.learning_core.domain.goal import Goal
from skillquest.learning_core.domain.learner_metrics import LearnerMetrics
from skillquest.learning_core.domain.learning_activity import LearningActivity
from skillquest.learning_core.domain.learning_enums import (
    ContentFormat,
    SkillCategory,
    SkillLevel,
    SkillProgress,
    Tier,
)
from skillquest.learning_core.domain.progress_summary import ProgressSummary
from skillquest.learning_core.domain.roadmap import Roadmap
from skillquest.learning_core.domain.skill import Skill
from skillquest.learning_core.domain.skill_template import SkillTemplate
from skillquest.learning_core.domain.streak_stats import StreakStats
from skillquest.learning_core.domain.token_charge import ChargeResult
from skillquest.learning_core.domain.video_resource import VideoResource

__all__ = [
    "Achievement",
    "AchievementProgress",
    "ActivityOutcome",
    "CatalogMatch",
    "ChargeResult",
    "ContentFormat",
    "CreationResult",
    "Goal",
    "LearnerMetrics",
    "LearningActivity",
    "ProgressSummary",
    "Roadmap",
    "Skill",
    "SkillCategory",
    "SkillLevel",
    "SkillProgress",
    "SkillTemplate",
    "StreakStats",
    "Tier",
    "VideoResource",
]
