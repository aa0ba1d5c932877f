"""파싱된 JSON Schema 엔티티."""

from __future__ import annotations

from dataclasses import dataclass, field

from schema_tag_provider.domain.entities.property_definition import (
    PropertyDefinition,
)


@dataclass
class SchemaModel:
    """JSON Schema의 내부 표현.

    UDT 정의 생성의 입력으로 사용된다.

    Args:
        name: 스키마/UDT 이름 (title 또는 캐시 파일 이름).
        id: JSON Schema $id.
        description: 스키마 설명.
        parent_type: allOf 의 $ref 로 지정된 부모 타입.
        properties: 속성 목록 (문서 순서 유지).
        required: 필수 속성 이름 집합.
    """

    name: str
    id: str | None = None
    description: str | None = None
    parent_type: str | None = None
    properties: list[PropertyDefinition] = field(default_factory=list)
    required: set[str] = field(default_factory=set)

    def add_property(self, prop: PropertyDefinition) -> None:
        self.properties.append(prop)

    def add_required(self, property_name: str) -> None:
        self.required.add(property_name)

    def is_required(self, property_name: str) -> bool:
        return property_name in self.required

    @property
    def has_parent(self) -> bool:
        return bool(self.parent_type)

    def nested_type_name(self, prop: PropertyDefinition) -> str:
        """중첩 object 속성에 대응하는 UDT 이름을 반환한다."""
        return f'{self.name}_{prop.name}'

    @property
    def referenced_types(self) -> set[str]:
        """이 스키마의 UDT가 참조하는 외부 타입 이름 집합.

        부모 타입과 $ref 속성이 포함된다. 깊은 중첩 object 내부의
        $ref 도 포함한다. 스키마 자체가 만드는 중첩 UDT는 제외한다.
        """
        refs: set[str] = set()
        if self.parent_type:
            refs.add(self.parent_type)

        stack = list(self.properties)
        while stack:
            prop = stack.pop()
            if prop.is_reference:
                refs.add(prop.ref_type)
            elif prop.is_object:
                stack.extend(prop.nested_properties)
        return refs
