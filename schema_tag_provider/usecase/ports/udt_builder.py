"""UDT 정의 생성 포트 인터페이스."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable
from typing import Any

from schema_tag_provider.domain.entities.schema_model import SchemaModel


class UdtBuilder(ABC):
    """SchemaModel을 Tag Provider import 형식으로 변환하는 인터페이스."""

    @abstractmethod
    def build_udt_json(self, schema: SchemaModel) -> str:
        """스키마의 UDT 정의 JSON 문자열을 생성한다."""

    @abstractmethod
    def build_nested_udt_definitions(
        self, schema: SchemaModel
    ) -> list[dict[str, Any]] | None:
        """인라인 객체 프로퍼티의 중첩 UDT 정의 목록을 생성한다.

        Returns:
            중첩 UDT 정의 목록. 없으면 None.
        """

    @abstractmethod
    def order_by_dependency(
        self, schemas: Iterable[SchemaModel]
    ) -> list[SchemaModel]:
        """참조되는 스키마가 먼저 오도록 정렬한다."""
