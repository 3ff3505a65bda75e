from __future__ import annotations

import copy
import threading
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional


class KeyValueStore(ABC):
    """JSON 값을 키 단위로 보관하는 저장소 인터페이스."""

    @abstractmethod
    def load(self, key: str) -> Optional[Any]:
        """
        @param key 저장 키.
        @returns 저장된 값 또는 None.
        """
        raise NotImplementedError

    @abstractmethod
    def save(self, key: str, value: Any) -> None:
        """
        @param key 저장 키.
        @param value JSON 직렬화 가능한 값 (기존 값은 덮어쓴다).
        @returns None
        """
        raise NotImplementedError

    @abstractmethod
    def add(self, key: str, value: Any) -> bool:
        """
        @param key 저장 키.
        @param value JSON 직렬화 가능한 값.
        @returns 키가 없어서 새로 저장했으면 True, 이미 있으면 False.
        """
        raise NotImplementedError

    @abstractmethod
    def delete(self, key: str) -> bool:
        """
        @param key 저장 키.
        @returns 삭제된 값이 있었는지 여부.
        """
        raise NotImplementedError


class InMemoryKeyValueStore(KeyValueStore):
    """프로세스 메모리 기반 저장소. 테스트와 단일 프로세스 실행용."""

    def __init__(self) -> None:
        self._items: Dict[str, Any] = {}
        self._lock = threading.Lock()

    def load(self, key: str) -> Optional[Any]:
        with self._lock:
            value = self._items.get(key)
        return copy.deepcopy(value)

    def save(self, key: str, value: Any) -> None:
        with self._lock:
            self._items[key] = copy.deepcopy(value)

    def add(self, key: str, value: Any) -> bool:
        with self._lock:
            if key in self._items:
                return False
            self._items[key] = copy.deepcopy(value)
            return True

    def delete(self, key: str) -> bool:
        with self._lock:
            return self._items.pop(key, None) is not None

    def size(self) -> int:
        """
        @returns 저장된 키 개수.
        """
        return len(self._items)
