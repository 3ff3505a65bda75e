from django.urls import path

from drf_spectacular.views import SpectacularAPIView, SpectacularRedocView, SpectacularSwaggerView

from skillquest.learning_core.controller.learning_views import (
    AchievementAPIView,
    ActivityAPIView,
    CatalogAPIView,
    HealthCheckAPIView,
    RoadmapDetailAPIView,
    RoadmapListAPIView,
    SkillOrderAPIView,
    SkillProgressAPIView,
    SkillVideoDetailAPIView,
    SkillVideoListAPIView,
    StreakAPIView,
    TokenBalanceAPIView,
    TokenQuoteAPIView,
    VideoProgressAPIView,
)

API_PREFIXES = ("api",)

urlpatterns = []
for prefix in API_PREFIXES:
    # OpenAPI 스키마 및 문서
    urlpatterns.extend(
        [
            path(f"{prefix}/schema/", SpectacularAPIView.as_view(), name=f"schema-{prefix}"),
            path(
                f"{prefix}/docs/",
                SpectacularSwaggerView.as_view(url_name=f"schema-{prefix}"),
                name=f"swagger-ui-{prefix}",
            ),
            path(
                f"{prefix}/redoc/",
                SpectacularRedocView.as_view(url_name=f"schema-{prefix}"),
                name=f"redoc-{prefix}",
            ),
        ]
    )

    # 헬스체크 API
    urlpatterns.append(path(f"{prefix}/health/", HealthCheckAPIView.as_view(), name=f"health-check-{prefix}"))

    # 카탈로그 / 토큰 API
    urlpatterns.append(path(f"{prefix}/catalog", CatalogAPIView.as_view(), name=f"catalog-{prefix}"))
    urlpatterns.append(path(f"{prefix}/token-quote", TokenQuoteAPIView.as_view(), name=f"token-quote-{prefix}"))
    urlpatterns.append(
        path(f"{prefix}/profiles/<str:user_id>/tokens", TokenBalanceAPIView.as_view(), name=f"token-balance-{prefix}")
    )

    # 로드맵 API
    urlpatterns.append(path(f"{prefix}/roadmaps", RoadmapListAPIView.as_view(), name=f"roadmaps-{prefix}"))
    urlpatterns.append(
        path(f"{prefix}/roadmaps/<str:roadmap_id>", RoadmapDetailAPIView.as_view(), name=f"roadmap-detail-{prefix}")
    )
    urlpatterns.append(
        path(
            f"{prefix}/roadmaps/<str:roadmap_id>/skills/<str:skill_id>",
            SkillProgressAPIView.as_view(),
            name=f"skill-progress-{prefix}",
        )
    )
    urlpatterns.append(
        path(
            f"{prefix}/roadmaps/<str:roadmap_id>/videos/<str:video_id>",
            VideoProgressAPIView.as_view(),
            name=f"video-progress-{prefix}",
        )
    )
    urlpatterns.append(
        path(
            f"{prefix}/roadmaps/<str:roadmap_id>/skills/<str:skill_id>/videos",
            SkillVideoListAPIView.as_view(),
            name=f"skill-videos-{prefix}",
        )
    )
    urlpatterns.append(
        path(
            f"{prefix}/roadmaps/<str:roadmap_id>/skills/<str:skill_id>/videos/<str:video_id>",
            SkillVideoDetailAPIView.as_view(),
            name=f"skill-video-detail-{prefix}",
        )
    )
    urlpatterns.append(
        path(f"{prefix}/roadmaps/<str:roadmap_id>/skill-order", SkillOrderAPIView.as_view(), name=f"skill-order-{prefix}")
    )

    # 스트릭 / 활동 API
    urlpatterns.append(path(f"{prefix}/activity", ActivityAPIView.as_view(), name=f"activity-{prefix}"))
    urlpatterns.append(path(f"{prefix}/streak", StreakAPIView.as_view(), name=f"streak-{prefix}"))
    urlpatterns.append(path(f"{prefix}/achievements", AchievementAPIView.as_view(), name=f"achievements-{prefix}"))
