from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="KeyValueEntry",
            fields=[
                ("key", models.CharField(help_text="저장 키", max_length=255, primary_key=True, serialize=False)),
                ("value", models.JSONField(help_text="JSON 페이로드")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "db_table": "sq_key_value_entry",
                "ordering": ["key"],
            },
        ),
        migrations.CreateModel(
            name="LearnerProfile",
            fields=[
                ("user_id", models.CharField(help_text="사용자 ID", max_length=100, primary_key=True, serialize=False)),
                ("display_name", models.CharField(blank=True, default="", help_text="표시 이름", max_length=150)),
                ("tokens", models.PositiveIntegerField(default=0, help_text="보유 토큰")),
                ("referred_by", models.CharField(blank=True, help_text="추천인 사용자 ID", max_length=100, null=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "db_table": "sq_learner_profile",
                "ordering": ["-created_at"],
            },
        ),
    ]
