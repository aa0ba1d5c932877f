"""스키마 저장소 포트 인터페이스.

JSON Schema 원문과 파싱 결과의 저장/조회를 추상화한다.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path

from schema_tag_provider.domain.entities.schema_model import SchemaModel


@dataclass(frozen=True)
class CacheReloadResult:
    """캐시 재적재 결과.

    Args:
        added: 새로 나타난 스키마 이름.
        updated: 내용이 변경된 스키마 이름.
        deleted: 사라진 스키마 이름.
    """

    added: frozenset[str] = field(default_factory=frozenset)
    updated: frozenset[str] = field(default_factory=frozenset)
    deleted: frozenset[str] = field(default_factory=frozenset)

    @property
    def has_changes(self) -> bool:
        return bool(self.added or self.updated or self.deleted)


class SchemaRepository(ABC):
    """스키마 저장소 인터페이스."""

    @abstractmethod
    def initialize(self) -> None:
        """저장소를 준비하고 기존 스키마를 적재한다."""

    @abstractmethod
    def save_schema(self, schema_name: str, content: str) -> SchemaModel:
        """스키마를 검증 후 저장한다.

        Args:
            schema_name: 스키마 이름.
            content: JSON Schema 원문.

        Returns:
            파싱된 SchemaModel.

        Raises:
            SchemaParseError: 원문이 올바른 JSON Schema가 아닐 때.
            SchemaCacheError: 저장 실패 시.
        """

    @abstractmethod
    def remove_schema(self, schema_name: str) -> None:
        """스키마를 제거한다.

        Raises:
            SchemaCacheError: 삭제 실패 시.
        """

    @abstractmethod
    def get_schema(self, schema_name: str) -> SchemaModel | None:
        """이름으로 스키마를 조회한다."""

    @abstractmethod
    def get_raw_schema(self, schema_name: str) -> str | None:
        """스키마 원문을 조회한다."""

    @abstractmethod
    def get_all_schemas(self) -> list[SchemaModel]:
        """저장된 모든 스키마를 반환한다."""

    @abstractmethod
    def get_schema_names(self) -> list[str]:
        """저장된 모든 스키마 이름을 반환한다."""

    @abstractmethod
    def has_schema(self, schema_name: str) -> bool:
        """스키마 존재 여부."""

    @property
    @abstractmethod
    def schema_count(self) -> int:
        """저장된 스키마 수."""

    @property
    @abstractmethod
    def cache_directory(self) -> Path:
        """캐시 디렉토리 경로."""

    @abstractmethod
    def reload(self) -> CacheReloadResult:
        """저장소를 다시 읽고 변경 내역을 반환한다."""
