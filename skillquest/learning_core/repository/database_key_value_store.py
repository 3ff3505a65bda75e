from __future__ import annotations

import logging
from typing import Any, Optional

from django.db import IntegrityError, transaction

from skillquest.learning_core.common.retry import create_retry_decorator
from skillquest.learning_core.models import KeyValueEntry
from skillquest.learning_core.repository.key_value_store import KeyValueStore

logger = logging.getLogger(__name__)


class DatabaseKeyValueStore(KeyValueStore):
    """Django ORM(`KeyValueEntry`) 기반 저장소."""

    def __init__(self, max_attempts: int = 3, min_wait: float = 0.2, max_wait: float = 2.0) -> None:
        """
        @param max_attempts 일시적 DB 오류 재시도 횟수.
        @param min_wait 최소 대기 시간(초).
        @param max_wait 최대 대기 시간(초).
        """
        self._retry = create_retry_decorator(max_attempts, min_wait, max_wait)

    def load(self, key: str) -> Optional[Any]:
        def _load() -> Optional[Any]:
            entry = KeyValueEntry.objects.filter(key=key).only("value").first()
            return entry.value if entry else None

        return self._retry(_load)()

    def save(self, key: str, value: Any) -> None:
        def _save() -> None:
            KeyValueEntry.objects.update_or_create(key=key, defaults={"value": value})

        self._retry(_save)()

    def add(self, key: str, value: Any) -> bool:
        def _add() -> bool:
            try:
                with transaction.atomic():
                    KeyValueEntry.objects.create(key=key, value=value)
            except IntegrityError:
                logger.debug("Key already present: %s", key)
                return False
            return True

        return self._retry(_add)()

    def delete(self, key: str) -> bool:
        def _delete() -> bool:
            deleted, _ = KeyValueEntry.objects.filter(key=key).delete()
            return deleted > 0

        return self._retry(_delete)()
