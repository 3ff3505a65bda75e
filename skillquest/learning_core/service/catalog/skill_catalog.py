from __future__ import annotations

from typing import Dict, List, Optional, Sequence, Tuple

from skillquest.learning_core.domain.catalog_match import (
    MATCH_EXACT,
    MATCH_FALLBACK,
    MATCH_PARTIAL,
    CatalogMatch,
)
from skillquest.learning_core.domain.skill_template import SkillTemplate
from skillquest.learning_core.repository.skill_catalog_data import (
    GENERIC_SKILL_TEMPLATES,
    PROFESSION_SKILL_TEMPLATES,
)


def normalize_profession(profession: Optional[str]) -> str:
    """
    @param profession 사용자가 입력한 직업명.
    @returns 소문자 변환 후 공백을 하나로 정리한 문자열.
    """
    return " ".join((profession or "").lower().split())


class SkillCatalog:
    """직업명을 스킬 템플릿 목록으로 변환하는 정적 카탈로그."""

    def __init__(
        self,
        table: Optional[Dict[str, Sequence[SkillTemplate]]] = None,
        fallback: Optional[Sequence[SkillTemplate]] = None,
    ) -> None:
        """
        @param table 직업 키 -> 템플릿 목록 (선언 순서가 부분 일치 우선순위).
        @param fallback 매칭 실패 시 사용하는 범용 템플릿 목록.
        """
        source = PROFESSION_SKILL_TEMPLATES if table is None else table
        self._table: Dict[str, Tuple[SkillTemplate, ...]] = {
            normalize_profession(key): tuple(templates) for key, templates in source.items()
        }
        self._fallback = tuple(GENERIC_SKILL_TEMPLATES if fallback is None else fallback)
        if not self._fallback:
            raise ValueError("fallback templates must not be empty")

    def professions(self) -> List[str]:
        """
        @returns 조회 우선순위 순서의 직업 키 목록.
        """
        return list(self._table.keys())

    def match(self, profession: Optional[str]) -> CatalogMatch:
        """
        직업명에 대응하는 템플릿과 매칭 방식을 반환합니다.

        정확히 일치하는 키를 먼저 찾고, 없으면 선언 순서대로 입력과 키가
        서로를 포함하는 첫 번째 키를 사용합니다. 둘 다 실패하거나 입력이
        비어 있으면 범용 목록을 돌려줍니다.

        @param profession 사용자가 입력한 직업명.
        @returns CatalogMatch (templates는 항상 비어 있지 않다).
        """
        normalized = normalize_profession(profession)
        if not normalized:
            return CatalogMatch(kind=MATCH_FALLBACK, key=None, templates=self._fallback)

        exact = self._table.get(normalized)
        if exact:
            return CatalogMatch(kind=MATCH_EXACT, key=normalized, templates=exact)

        for key, templates in self._table.items():
            if templates and (key in normalized or normalized in key):
                return CatalogMatch(kind=MATCH_PARTIAL, key=key, templates=templates)

        return CatalogMatch(kind=MATCH_FALLBACK, key=None, templates=self._fallback)

    def lookup(self, profession: Optional[str]) -> List[SkillTemplate]:
        """
        @param profession 사용자가 입력한 직업명.
        @returns 순서가 보장된 스킬 템플릿 목록.
        """
        return list(self.match(profession).templates)
