# =============================================================================
# 영속화 재시도 데코레이터
# =============================================================================
# 저장소 호출에서 발생하는 일시적 오류(DB 잠금, 연결 끊김 등)를
# 지수 백오프로 재시도합니다. 도메인 오류(LearningCoreError)는 재시도하지 않습니다.
# 트랜잭션 안에서 실패한 쿼리는 같은 트랜잭션에서 다시 실행할 수 없으므로
# atomic 블록 안에서는 재시도하지 않고 바깥의 트랜잭션 단위 재시도에 맡깁니다.
# =============================================================================

from __future__ import annotations

import logging
from typing import Callable, Tuple, Type

from django.db import InterfaceError, OperationalError, connection
from tenacity import (
    before_sleep_log,
    retry,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential,
)

logger = logging.getLogger(__name__)

TRANSIENT_ERRORS: Tuple[Type[BaseException], ...] = (
    OperationalError,
    InterfaceError,
    ConnectionError,
    TimeoutError,
)


def is_retryable(exc: BaseException) -> bool:
    """
    @param exc 발생한 예외.
    @returns 일시적 오류이고 진행 중인 트랜잭션이 없을 때 True.
    """
    return isinstance(exc, TRANSIENT_ERRORS) and not connection.in_atomic_block


def create_retry_decorator(
    max_attempts: int = 3,
    min_wait: float = 0.2,
    max_wait: float = 2.0,
) -> Callable:
    """
    재시도 데코레이터를 생성합니다.

    Args:
        max_attempts: 최대 시도 횟수.
        min_wait: 최소 대기 시간(초).
        max_wait: 최대 대기 시간(초).

    Returns:
        Callable: tenacity 재시도 데코레이터. 재시도 소진 시 원래 예외를 다시 던진다.
    """
    return retry(
        stop=stop_after_attempt(max_attempts),
        wait=wait_exponential(multiplier=min_wait, min=min_wait, max=max_wait),
        retry=retry_if_exception(is_retryable),
        before_sleep=before_sleep_log(logger, logging.WARNING),
        reraise=True,
    )
