from __future__ import annotations

from typing import List, Optional

from skillquest.learning_core.domain.roadmap import Roadmap
from skillquest.learning_core.repository.key_value_store import KeyValueStore

ANONYMOUS_USER = "anonymous"


def roadmap_key(roadmap_id: str) -> str:
    return f"roadmap-{roadmap_id}"


def user_index_key(user_id: Optional[str]) -> str:
    return f"roadmaps-{user_id or ANONYMOUS_USER}"


class RoadmapRepository:
    """
    로드맵 저장소.

    로드맵 본문은 `roadmap-<id>` 키에, 사용자별 로드맵 ID 목록은
    `roadmaps-<user_id>` 키에 보관한다.
    """

    def __init__(self, store: KeyValueStore) -> None:
        """
        @param store 키-값 저장소.
        """
        self._store = store

    def get(self, roadmap_id: str) -> Optional[Roadmap]:
        """
        @param roadmap_id 로드맵 ID.
        @returns 저장된 로드맵 또는 None.
        """
        payload = self._store.load(roadmap_key(roadmap_id))
        if not payload:
            return None
        return Roadmap.from_dict(payload)

    def save(self, roadmap: Roadmap) -> Roadmap:
        """
        @param roadmap 저장할 로드맵 (같은 ID가 있으면 덮어쓴다).
        @returns 저장된 로드맵.
        """
        self._store.save(roadmap_key(roadmap.roadmap_id), roadmap.to_dict())
        index_key = user_index_key(roadmap.user_id)
        ids = self._store.load(index_key) or []
        if roadmap.roadmap_id not in ids:
            ids.insert(0, roadmap.roadmap_id)
            self._store.save(index_key, ids)
        return roadmap

    def delete(self, roadmap_id: str) -> bool:
        """
        @param roadmap_id 로드맵 ID.
        @returns 삭제 여부.
        """
        roadmap = self.get(roadmap_id)
        if roadmap is None:
            return False
        index_key = user_index_key(roadmap.user_id)
        ids = [item for item in (self._store.load(index_key) or []) if item != roadmap_id]
        self._store.save(index_key, ids)
        return self._store.delete(roadmap_key(roadmap_id))

    def list_for_user(self, user_id: Optional[str]) -> List[Roadmap]:
        """
        @param user_id 사용자 ID.
        @returns 생성 시각 역순으로 정렬된 로드맵 목록.
        """
        roadmaps = []
        for roadmap_id in self._store.load(user_index_key(user_id)) or []:
            roadmap = self.get(roadmap_id)
            if roadmap is not None:
                roadmaps.append(roadmap)
        roadmaps.sort(key=lambda item: item.created_at, reverse=True)
        return roadmaps
