from django.db import models


class LearnerProfile(models.Model):
    """학습자 프로필과 토큰 잔액."""

    user_id = models.CharField(max_length=100, primary_key=True, help_text="사용자 ID")
    display_name = models.CharField(max_length=150, blank=True, default="", help_text="표시 이름")
    tokens = models.PositiveIntegerField(default=0, help_text="보유 토큰")
    referred_by = models.CharField(max_length=100, null=True, blank=True, help_text="추천인 사용자 ID")
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "sq_learner_profile"
        ordering = ["-created_at"]

    def __str__(self):
        return f"{self.user_id} ({self.tokens} tokens)"


class KeyValueEntry(models.Model):
    """로드맵/활동 기록을 JSON으로 보관하는 키-값 엔트리."""

    key = models.CharField(max_length=255, primary_key=True, help_text="저장 키")
    value = models.JSONField(help_text="JSON 페이로드")
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "sq_key_value_entry"
        ordering = ["key"]

    def __str__(self):
        return self.key
