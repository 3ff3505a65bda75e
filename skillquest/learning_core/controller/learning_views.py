from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Dict, Optional

from django.conf import settings
from drf_spectacular.utils import OpenApiExample, OpenApiParameter, OpenApiTypes, extend_schema
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from skillquest.learning_core.common.errors import (
    InsufficientTokens,
    LearningCoreError,
    MalformedGoal,
    RequestInProgress,
    UnknownRoadmap,
    UnknownSkill,
    UnknownVideo,
)
from skillquest.learning_core.config.service_factory import get_services
from skillquest.learning_core.controller.serializers import (
    FORMAT_CHOICES,
    TIER_CHOICES,
    AchievementOverviewSerializer,
    ActivityOutcomeSerializer,
    ActivityRequestSerializer,
    CatalogSerializer,
    HealthCheckSerializer,
    RoadmapCreateRequestSerializer,
    RoadmapCreatedSerializer,
    RoadmapSerializer,
    SkillOrderRequestSerializer,
    SkillProgressRequestSerializer,
    StreakQuerySerializer,
    StreakSerializer,
    TokenBalanceSerializer,
    TokenQuoteSerializer,
    VideoCreateRequestSerializer,
    VideoProgressRequestSerializer,
    VideoResourceSerializer,
)
from skillquest.learning_core.domain.goal import Goal
from skillquest.learning_core.domain.learning_enums import ContentFormat, SkillProgress, Tier
from skillquest.learning_core.domain.roadmap import Roadmap

logger = logging.getLogger(__name__)

USER_ID_PARAMETER = OpenApiParameter("user_id", OpenApiTypes.STR, required=False, description="사용자 ID")


class HealthCheckAPIView(APIView):
    """
    API 헬스체크 엔드포인트.

    서버 상태와 사용 중인 저장소 백엔드를 확인합니다.
    """

    @extend_schema(
        summary="헬스체크",
        responses={200: HealthCheckSerializer},
    )
    def get(self, request) -> Response:
        payload = {
            "status": "ok",
            "version": "1.0.0",
            "backend": getattr(settings, "LEARNING_STORE_BACKEND", "database"),
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }
        return _serialize(HealthCheckSerializer, payload)


class CatalogAPIView(APIView):
    """직업명에 대응하는 스킬 템플릿 목록."""

    @extend_schema(
        parameters=[OpenApiParameter("profession", OpenApiTypes.STR, required=False, description="직업명")],
        responses=CatalogSerializer,
    )
    def get(self, request) -> Response:
        """
        @param request DRF 요청 객체 (profession 사용).
        @returns 매칭 방식과 스킬 템플릿 목록.
        """
        profession = request.GET.get("profession", "")
        match = get_services().catalog.match(profession)
        payload = {
            "profession": profession,
            "match": match.kind,
            "key": match.key,
            "skills": [template.to_dict() for template in match.templates],
        }
        return _serialize(CatalogSerializer, payload)


class TokenQuoteAPIView(APIView):
    """로드맵 생성 비용 견적."""

    @extend_schema(
        parameters=[
            OpenApiParameter("tier", OpenApiTypes.STR, required=False, enum=TIER_CHOICES, description="난이도 티어"),
            OpenApiParameter("format", OpenApiTypes.STR, required=False, enum=FORMAT_CHOICES, description="영상 길이"),
            OpenApiParameter("balance", OpenApiTypes.INT, required=False, description="비교할 잔액"),
            USER_ID_PARAMETER,
        ],
        responses=TokenQuoteSerializer,
    )
    def get(self, request) -> Response:
        """
        @param request DRF 요청 객체 (tier/format/balance/user_id 사용).
        @returns 비용, 예상 학습 시간, 구매 가능 여부.
        """
        try:
            tier = Tier(request.GET.get("tier") or Tier.BEGINNER.value)
            content_format = ContentFormat(request.GET.get("format") or ContentFormat.SHORT.value)
            balance = _optional_int(request.GET.get("balance"))
        except ValueError as exc:
            return Response({"error": "invalid_query", "detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)

        services = get_services()
        user_id = request.GET.get("user_id")
        if balance is None and user_id:
            balance = services.ledger.balance(user_id)
        cost = services.economy.quote_cost(tier, content_format)
        payload = {
            "tier": tier.value,
            "format": content_format.value,
            "cost": cost,
            "estimated_hours": services.economy.estimate_hours(tier, content_format),
            "balance": balance,
            "can_afford": services.economy.can_afford(balance, cost) if balance is not None else None,
        }
        return _serialize(TokenQuoteSerializer, payload)


class TokenBalanceAPIView(APIView):
    """학습자 토큰 잔액. 프로필이 없으면 가입 토큰으로 생성한다."""

    @extend_schema(
        parameters=[OpenApiParameter("referred_by", OpenApiTypes.STR, required=False, description="추천인 ID")],
        responses=TokenBalanceSerializer,
    )
    def get(self, request, user_id: str) -> Response:
        tokens = get_services().roadmaps.ensure_profile(user_id, referred_by=request.GET.get("referred_by"))
        return _serialize(TokenBalanceSerializer, {"user_id": user_id, "tokens": tokens})


class RoadmapListAPIView(APIView):
    """로드맵 목록 조회와 생성 (토큰 차감)."""

    @extend_schema(parameters=[USER_ID_PARAMETER], responses=RoadmapSerializer(many=True))
    def get(self, request) -> Response:
        services = get_services()
        roadmaps = services.roadmaps.list(request.GET.get("user_id"))
        return _serialize(RoadmapSerializer, [_roadmap_payload(roadmap) for roadmap in roadmaps], many=True)

    @extend_schema(
        request=RoadmapCreateRequestSerializer,
        parameters=[
            OpenApiParameter(
                "Idempotency-Key",
                OpenApiTypes.STR,
                location=OpenApiParameter.HEADER,
                required=False,
                description="재요청 식별 키 (본문 idempotency_key와 동일)",
            )
        ],
        responses={
            201: RoadmapCreatedSerializer,
            200: RoadmapCreatedSerializer,
            400: OpenApiTypes.OBJECT,
            402: OpenApiTypes.OBJECT,
            409: OpenApiTypes.OBJECT,
        },
        examples=[
            OpenApiExample(
                "create",
                value={
                    "user_id": "user_1",
                    "title": "Become a web developer",
                    "profession": "Web Developer",
                    "tier": "beginner",
                    "format": "short",
                },
                request_only=True,
            ),
            OpenApiExample(
                "insufficient_tokens",
                value={"error": "insufficient_tokens", "required": 300, "balance": 120},
                response_only=True,
                status_codes=["402"],
            ),
        ],
    )
    def post(self, request) -> Response:
        """
        토큰을 차감하고 새 로드맵을 생성합니다.

        @param {Request} request - DRF 요청 객체 (목표/티어/형식 JSON).
        @returns {Response} 201 생성, 200 멱등 재요청, 402 잔액 부족, 400 목표 오류, 409 같은 키 처리 중.
        """
        serializer = RoadmapCreateRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        goal = Goal(
            title=data["title"],
            profession=data["profession"],
            short_term_goals=data.get("short_term_goals") or None,
            long_term_goals=data.get("long_term_goals") or None,
            deadline_months=data.get("deadline_months"),
            description=data.get("description") or None,
        )
        idempotency_key = data.get("idempotency_key") or request.headers.get("Idempotency-Key")

        services = get_services()
        services.roadmaps.ensure_profile(data["user_id"])
        result = services.roadmaps.create(
            data["user_id"],
            goal,
            tier=Tier(data["tier"]),
            content_format=ContentFormat(data["format"]),
            idempotency_key=idempotency_key,
        )
        if not result.ok:
            return _error_response(result.error)

        payload = {
            "roadmap": _roadmap_payload(result.roadmap),
            "balance": result.balance,
            "cost": result.cost,
            "replayed": result.replayed,
        }
        response_status = status.HTTP_200_OK if result.replayed else status.HTTP_201_CREATED
        return _serialize(RoadmapCreatedSerializer, payload, status_code=response_status)


class RoadmapDetailAPIView(APIView):
    """단일 로드맵 조회(마지막 접근 시각 갱신)와 삭제."""

    @extend_schema(parameters=[USER_ID_PARAMETER], responses={200: RoadmapSerializer, 404: OpenApiTypes.OBJECT})
    def get(self, request, roadmap_id: str) -> Response:
        try:
            roadmap = get_services().roadmaps.get(roadmap_id, user_id=request.GET.get("user_id"))
        except LearningCoreError as exc:
            return _error_response(exc)
        return _serialize(RoadmapSerializer, _roadmap_payload(roadmap))

    @extend_schema(parameters=[USER_ID_PARAMETER], responses={204: None, 404: OpenApiTypes.OBJECT})
    def delete(self, request, roadmap_id: str) -> Response:
        try:
            get_services().roadmaps.delete(roadmap_id, user_id=request.GET.get("user_id"))
        except LearningCoreError as exc:
            return _error_response(exc)
        return Response(status=status.HTTP_204_NO_CONTENT)


class SkillProgressAPIView(APIView):
    """스킬 진행 상태 변경."""

    @extend_schema(
        parameters=[USER_ID_PARAMETER],
        request=SkillProgressRequestSerializer,
        responses={200: RoadmapSerializer, 404: OpenApiTypes.OBJECT},
    )
    def patch(self, request, roadmap_id: str, skill_id: str) -> Response:
        serializer = SkillProgressRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        try:
            roadmap = get_services().roadmaps.update_skill_progress(
                roadmap_id,
                skill_id,
                SkillProgress(serializer.validated_data["progress"]),
                user_id=request.GET.get("user_id"),
            )
        except LearningCoreError as exc:
            return _error_response(exc)
        _award_achievements(roadmap)
        return _serialize(RoadmapSerializer, _roadmap_payload(roadmap))


class VideoProgressAPIView(APIView):
    """영상 완료 여부 변경 (소속 스킬 상태 재계산)."""

    @extend_schema(
        parameters=[USER_ID_PARAMETER],
        request=VideoProgressRequestSerializer,
        responses={200: RoadmapSerializer, 404: OpenApiTypes.OBJECT},
    )
    def patch(self, request, roadmap_id: str, video_id: str) -> Response:
        serializer = VideoProgressRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        try:
            roadmap = get_services().roadmaps.update_video_progress(
                roadmap_id,
                video_id,
                serializer.validated_data["completed"],
                user_id=request.GET.get("user_id"),
            )
        except LearningCoreError as exc:
            return _error_response(exc)
        _award_achievements(roadmap)
        return _serialize(RoadmapSerializer, _roadmap_payload(roadmap))


class SkillVideoListAPIView(APIView):
    """스킬에 영상 추가."""

    @extend_schema(
        parameters=[USER_ID_PARAMETER],
        request=VideoCreateRequestSerializer,
        responses={201: VideoResourceSerializer, 400: OpenApiTypes.OBJECT, 404: OpenApiTypes.OBJECT},
    )
    def post(self, request, roadmap_id: str, skill_id: str) -> Response:
        serializer = VideoCreateRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        try:
            video = get_services().roadmaps.add_video_resource(
                roadmap_id,
                skill_id,
                title=data["title"],
                url=data["url"],
                channel=data["channel"],
                duration=data["duration"],
                thumbnail_url=data["thumbnail_url"],
                added_by=data["added_by"],
                user_id=request.GET.get("user_id"),
            )
        except ValueError as exc:
            return _error_response(exc)
        return _serialize(VideoResourceSerializer, video.to_dict(), status_code=status.HTTP_201_CREATED)


class SkillVideoDetailAPIView(APIView):
    """스킬에서 영상 제거."""

    @extend_schema(parameters=[USER_ID_PARAMETER], responses={200: RoadmapSerializer, 404: OpenApiTypes.OBJECT})
    def delete(self, request, roadmap_id: str, skill_id: str, video_id: str) -> Response:
        try:
            roadmap = get_services().roadmaps.remove_video_resource(
                roadmap_id, skill_id, video_id, user_id=request.GET.get("user_id")
            )
        except LearningCoreError as exc:
            return _error_response(exc)
        return _serialize(RoadmapSerializer, _roadmap_payload(roadmap))


class SkillOrderAPIView(APIView):
    """스킬 순서 재배치."""

    @extend_schema(
        parameters=[USER_ID_PARAMETER],
        request=SkillOrderRequestSerializer,
        responses={200: RoadmapSerializer, 404: OpenApiTypes.OBJECT},
    )
    def put(self, request, roadmap_id: str) -> Response:
        serializer = SkillOrderRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        try:
            roadmap = get_services().roadmaps.reorder_skills(
                roadmap_id, serializer.validated_data["skill_ids"], user_id=request.GET.get("user_id")
            )
        except LearningCoreError as exc:
            return _error_response(exc)
        return _serialize(RoadmapSerializer, _roadmap_payload(roadmap))


class ActivityAPIView(APIView):
    """일일 학습 활동 기록."""

    @extend_schema(request=ActivityRequestSerializer, responses={201: ActivityOutcomeSerializer})
    def post(self, request) -> Response:
        serializer = ActivityRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        outcome = get_services().achievements.record_activity(
            data["user_id"],
            minutes_learned=data["minutes_learned"],
            videos_watched=data["videos_watched"],
            tokens_earned=data["tokens_earned"],
            day=data.get("day"),
        )
        payload = {
            "activity": outcome.activity.to_dict(),
            "stats": outcome.stats,
            "unlocked": [achievement.to_dict() for achievement in outcome.unlocked],
        }
        return _serialize(ActivityOutcomeSerializer, payload, status_code=status.HTTP_201_CREATED)


class StreakAPIView(APIView):
    """스트릭 통계, 업적, 월간 활동 달력."""

    @extend_schema(
        parameters=[
            OpenApiParameter("user_id", OpenApiTypes.STR, required=True, description="사용자 ID"),
            OpenApiParameter("year", OpenApiTypes.INT, required=False, description="달력 연도 (1~9999)"),
            OpenApiParameter("month", OpenApiTypes.INT, required=False, description="달력 월 (1~12)"),
        ],
        responses={200: StreakSerializer, 400: OpenApiTypes.OBJECT},
    )
    def get(self, request) -> Response:
        query = StreakQuerySerializer(data=request.GET)
        if not query.is_valid():
            return Response({"error": "invalid_query", "detail": query.errors}, status=status.HTTP_400_BAD_REQUEST)
        user_id = query.validated_data["user_id"]
        today = datetime.now(timezone.utc).date()
        year = query.validated_data.get("year", today.year)
        month = query.validated_data.get("month", today.month)

        services = get_services()
        payload = {
            "user_id": user_id,
            "stats": services.streaks.stats(user_id),
            "achievements": [achievement.to_dict() for achievement in services.achievements.achievements(user_id)],
            "calendar": [activity.to_dict() for activity in services.streaks.calendar(user_id, year, month)],
        }
        return _serialize(StreakSerializer, payload)


class AchievementAPIView(APIView):
    """획득한 업적과 남은 업적의 진행도."""

    @extend_schema(
        parameters=[OpenApiParameter("user_id", OpenApiTypes.STR, required=True, description="사용자 ID")],
        responses={200: AchievementOverviewSerializer, 400: OpenApiTypes.OBJECT},
    )
    def get(self, request) -> Response:
        """
        @param request DRF 요청 객체 (user_id 필수).
        @returns 누적 지표, 획득 업적, 미획득 업적 진행도.
        """
        user_id = request.GET.get("user_id")
        if not user_id:
            return Response({"error": "invalid_query", "detail": "user_id is required"}, status=status.HTTP_400_BAD_REQUEST)
        achievements = get_services().achievements
        achievements.check_and_award(user_id)
        payload = {
            "user_id": user_id,
            "metrics": achievements.learner_metrics(user_id).to_dict(),
            "unlocked": [achievement.to_dict() for achievement in achievements.achievements(user_id)],
            "progress": [item.to_dict() for item in achievements.progress(user_id)],
        }
        return _serialize(AchievementOverviewSerializer, payload)


# =============================================================================
# 유틸리티 함수
# =============================================================================

def _serialize(serializer_class, payload, many: bool = False, status_code: int = status.HTTP_200_OK) -> Response:
    """
    @param serializer_class 사용할 DRF Serializer 클래스.
    @param payload 응답 데이터.
    @param many 리스트 여부.
    @param status_code HTTP 상태 코드.
    @returns 직렬화된 DRF Response.
    """
    serializer = serializer_class(payload, many=many)
    return Response(serializer.data, status=status_code)


def _roadmap_payload(roadmap: Roadmap) -> Dict[str, object]:
    """
    @param roadmap 도메인 로드맵.
    @returns 완료율과 진행 요약을 덧붙인 응답 딕셔너리.
    """
    summary = get_services().tracker.summary(roadmap)
    payload = roadmap.to_dict()
    payload["completion"] = summary.completion
    payload["progress"] = summary.to_dict()
    return payload


def _error_response(error: Exception) -> Response:
    """
    도메인 오류를 HTTP 오류 응답으로 변환합니다.

    @param error 서비스가 반환하거나 던진 오류.
    @returns 오류 코드별 상태와 본문을 가진 Response.
    """
    if isinstance(error, InsufficientTokens):
        body = {"error": error.code, "required": error.required, "balance": error.balance}
        return Response(body, status=status.HTTP_402_PAYMENT_REQUIRED)
    if isinstance(error, MalformedGoal):
        return Response({"error": error.code, "fields": error.fields}, status=status.HTTP_400_BAD_REQUEST)
    if isinstance(error, RequestInProgress):
        return Response({"error": error.code, "detail": str(error)}, status=status.HTTP_409_CONFLICT)
    if isinstance(error, (UnknownRoadmap, UnknownSkill, UnknownVideo)):
        return Response({"error": error.code, "detail": str(error)}, status=status.HTTP_404_NOT_FOUND)
    logger.info("Rejected request: %s", error)
    return Response({"error": "invalid_request", "detail": str(error)}, status=status.HTTP_400_BAD_REQUEST)


def _optional_int(value: Optional[str]) -> Optional[int]:
    if value in (None, ""):
        return None
    return int(value)


def _award_achievements(roadmap: Roadmap) -> None:
    if roadmap.user_id:
        get_services().achievements.check_and_award(roadmap.user_id)
