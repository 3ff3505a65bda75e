from typing import Iterable, Optional


class LearningCoreError(ValueError):
    """학습 코어 도메인 오류의 기반 클래스."""

    code = "learning_core_error"


class InsufficientTokens(LearningCoreError):
    """보유 토큰이 로드맵 생성 비용보다 적은 경우."""

    code = "insufficient_tokens"

    def __init__(self, required: int, balance: int) -> None:
        """
        @param {int} required - 필요한 토큰 수.
        @param {int} balance - 현재 보유 토큰 수.
        """
        super().__init__(f"Insufficient tokens: required {required}, balance {balance}")
        self.required = required
        self.balance = balance


class MalformedGoal(LearningCoreError):
    """필수 항목(title/profession)이 비어 있는 학습 목표."""

    code = "malformed_goal"

    def __init__(self, fields: Iterable[str]) -> None:
        self.fields = sorted(fields)
        super().__init__(f"Malformed goal, blank fields: {self.fields}")


class UnknownRoadmap(LearningCoreError):
    code = "unknown_roadmap"

    def __init__(self, roadmap_id: str, user_id: Optional[str] = None) -> None:
        super().__init__(f"Roadmap not found: {roadmap_id}")
        self.roadmap_id = roadmap_id
        self.user_id = user_id


class UnknownSkill(LearningCoreError):
    code = "unknown_skill"

    def __init__(self, skill_id: str) -> None:
        super().__init__(f"Skill not found: {skill_id}")
        self.skill_id = skill_id


class UnknownVideo(LearningCoreError):
    code = "unknown_video"

    def __init__(self, video_id: str) -> None:
        super().__init__(f"Video not found: {video_id}")
        self.video_id = video_id


class RequestInProgress(LearningCoreError):
    """같은 멱등성 키의 앞선 요청이 아직 처리 중인 경우."""

    code = "request_in_progress"

    def __init__(self, idempotency_key: str) -> None:
        super().__init__(f"Request with idempotency key {idempotency_key!r} is still in progress")
        self.idempotency_key = idempotency_key
