from __future__ import annotations

from rest_framework import serializers

from skillquest.learning_core.domain.learning_enums import ContentFormat, SkillProgress, Tier

TIER_CHOICES = [tier.value for tier in Tier]
FORMAT_CHOICES = [content_format.value for content_format in ContentFormat]
PROGRESS_CHOICES = [progress.value for progress in SkillProgress]


# =============================================================================
# 응답 직렬화
# =============================================================================

class HealthCheckSerializer(serializers.Serializer):
    status = serializers.CharField()
    version = serializers.CharField()
    backend = serializers.CharField()
    timestamp = serializers.CharField()


class SkillTemplateSerializer(serializers.Serializer):
    name = serializers.CharField()
    description = serializers.CharField()
    level = serializers.CharField()
    category = serializers.CharField()
    importance = serializers.IntegerField()
    estimated_time_to_learn = serializers.CharField(allow_null=True)
    prerequisites = serializers.ListField(child=serializers.CharField())


class CatalogSerializer(serializers.Serializer):
    profession = serializers.CharField(allow_blank=True)
    match = serializers.CharField()
    key = serializers.CharField(allow_null=True)
    skills = SkillTemplateSerializer(many=True)


class TokenQuoteSerializer(serializers.Serializer):
    tier = serializers.CharField()
    format = serializers.CharField()
    cost = serializers.IntegerField()
    estimated_hours = serializers.IntegerField()
    balance = serializers.IntegerField(allow_null=True)
    can_afford = serializers.BooleanField(allow_null=True)


class TokenBalanceSerializer(serializers.Serializer):
    user_id = serializers.CharField()
    tokens = serializers.IntegerField()


class VideoResourceSerializer(serializers.Serializer):
    id = serializers.CharField()
    title = serializers.CharField()
    url = serializers.CharField()
    channel = serializers.CharField(allow_blank=True)
    duration_seconds = serializers.IntegerField()
    duration = serializers.CharField()
    published_at = serializers.CharField(allow_blank=True)
    thumbnail_url = serializers.CharField(allow_blank=True)
    difficulty = serializers.CharField()
    views = serializers.IntegerField(allow_null=True)
    likes = serializers.IntegerField(allow_null=True)
    completed = serializers.BooleanField()
    added_at = serializers.CharField(allow_null=True)
    added_by = serializers.CharField(allow_null=True)


class SkillSerializer(serializers.Serializer):
    id = serializers.CharField()
    name = serializers.CharField()
    description = serializers.CharField(allow_blank=True)
    level = serializers.CharField()
    category = serializers.CharField()
    progress = serializers.CharField()
    importance = serializers.IntegerField()
    order = serializers.IntegerField()
    resources = VideoResourceSerializer(many=True)
    prerequisites = serializers.ListField(child=serializers.CharField())
    estimated_time_to_learn = serializers.CharField(allow_null=True)
    target_completion_month = serializers.IntegerField(allow_null=True)


class GoalSerializer(serializers.Serializer):
    title = serializers.CharField()
    profession = serializers.CharField()
    short_term_goals = serializers.CharField(allow_null=True)
    long_term_goals = serializers.CharField(allow_null=True)
    deadline_months = serializers.IntegerField(allow_null=True)
    description = serializers.CharField(allow_null=True)


class ProgressSummarySerializer(serializers.Serializer):
    total = serializers.IntegerField()
    not_started = serializers.IntegerField()
    in_progress = serializers.IntegerField()
    mastered = serializers.IntegerField()
    completion = serializers.IntegerField()
    videos_total = serializers.IntegerField()
    videos_completed = serializers.IntegerField()


class RoadmapSerializer(serializers.Serializer):
    id = serializers.CharField()
    user_id = serializers.CharField(allow_null=True)
    goal = GoalSerializer()
    skills = SkillSerializer(many=True)
    tier = serializers.CharField()
    format = serializers.CharField()
    tokens_used = serializers.IntegerField()
    tags = serializers.ListField(child=serializers.CharField())
    created_at = serializers.CharField()
    updated_at = serializers.CharField()
    last_accessed_at = serializers.CharField(allow_null=True)
    completion = serializers.IntegerField()
    progress = ProgressSummarySerializer()


class RoadmapCreatedSerializer(serializers.Serializer):
    roadmap = RoadmapSerializer()
    balance = serializers.IntegerField()
    cost = serializers.IntegerField()
    replayed = serializers.BooleanField()


class AchievementSerializer(serializers.Serializer):
    name = serializers.CharField()
    description = serializers.CharField()
    icon = serializers.CharField()
    category = serializers.CharField()
    rarity = serializers.CharField()
    points = serializers.IntegerField()
    unlocked_at = serializers.CharField(allow_null=True)


class StreakStatsSerializer(serializers.Serializer):
    current_streak = serializers.IntegerField()
    longest_streak = serializers.IntegerField()
    total_days = serializers.IntegerField()
    average_minutes = serializers.IntegerField()


class LearningActivitySerializer(serializers.Serializer):
    day = serializers.CharField()
    minutes_learned = serializers.IntegerField()
    videos_watched = serializers.IntegerField()
    tokens_earned = serializers.IntegerField()
    completed_goal = serializers.BooleanField()


class ActivityOutcomeSerializer(serializers.Serializer):
    activity = LearningActivitySerializer()
    stats = StreakStatsSerializer()
    unlocked = AchievementSerializer(many=True)


class StreakSerializer(serializers.Serializer):
    user_id = serializers.CharField()
    stats = StreakStatsSerializer()
    achievements = AchievementSerializer(many=True)
    calendar = LearningActivitySerializer(many=True)


class LearnerMetricsSerializer(serializers.Serializer):
    current_streak = serializers.IntegerField()
    videos_completed = serializers.IntegerField()
    roadmaps_completed = serializers.IntegerField()
    tokens_earned = serializers.IntegerField()


class AchievementProgressSerializer(serializers.Serializer):
    achievement = AchievementSerializer()
    current = serializers.IntegerField()
    required = serializers.IntegerField()
    progress = serializers.IntegerField()
    hint = serializers.CharField()


class AchievementOverviewSerializer(serializers.Serializer):
    user_id = serializers.CharField()
    metrics = LearnerMetricsSerializer()
    unlocked = AchievementSerializer(many=True)
    progress = AchievementProgressSerializer(many=True)


# =============================================================================
# 요청 검증
# =============================================================================

class RoadmapCreateRequestSerializer(serializers.Serializer):
    user_id = serializers.CharField(max_length=100)
    title = serializers.CharField(allow_blank=True, trim_whitespace=False)
    profession = serializers.CharField(allow_blank=True, trim_whitespace=False)
    short_term_goals = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    long_term_goals = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    deadline_months = serializers.IntegerField(required=False, allow_null=True)
    description = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    tier = serializers.ChoiceField(choices=TIER_CHOICES, default=Tier.BEGINNER.value)
    format = serializers.ChoiceField(choices=FORMAT_CHOICES, default=ContentFormat.SHORT.value)
    idempotency_key = serializers.CharField(required=False, allow_blank=False, max_length=100)


class SkillProgressRequestSerializer(serializers.Serializer):
    progress = serializers.ChoiceField(choices=PROGRESS_CHOICES)


class VideoProgressRequestSerializer(serializers.Serializer):
    completed = serializers.BooleanField()


class VideoCreateRequestSerializer(serializers.Serializer):
    title = serializers.CharField(max_length=255)
    url = serializers.URLField(max_length=500)
    channel = serializers.CharField(required=False, allow_blank=True, default="")
    duration = serializers.CharField(required=False, default="0")
    thumbnail_url = serializers.CharField(required=False, allow_blank=True, default="")
    added_by = serializers.CharField(required=False, allow_null=True, default=None)


class SkillOrderRequestSerializer(serializers.Serializer):
    skill_ids = serializers.ListField(child=serializers.CharField(), allow_empty=False)


class ActivityRequestSerializer(serializers.Serializer):
    user_id = serializers.CharField(max_length=100)
    minutes_learned = serializers.IntegerField(min_value=0)
    videos_watched = serializers.IntegerField(min_value=0, default=0)
    tokens_earned = serializers.IntegerField(min_value=0, default=0)
    day = serializers.DateField(required=False)


class StreakQuerySerializer(serializers.Serializer):
    user_id = serializers.CharField(max_length=100)
    year = serializers.IntegerField(required=False, min_value=1, max_value=9999)
    month = serializers.IntegerField(required=False, min_value=1, max_value=12)
