"""JSON Schema 속성 엔티티."""

from __future__ import annotations

from dataclasses import dataclass, field

from schema_tag_provider.domain.enums import JsonType


@dataclass
class PropertyDefinition:
    """JSON Schema의 단일 속성(필드) 정의.

    Args:
        name: 속성 이름.
        type: JSON 타입 (string, integer, number, boolean, object, array).
        format: format 지정자 (date-time, email, uri 등).
        description: 속성 설명.
        default_value: 기본값.
        ref_type: $ref 로 참조하는 타입 이름.
        nested_properties: object 타입의 하위 속성 목록.
        items_definition: array 타입의 항목 정의.
        enum_values: 허용 값 목록.
    """

    name: str
    type: str = JsonType.STRING
    format: str | None = None
    description: str | None = None
    default_value: bool | int | float | str | None = None
    ref_type: str | None = None
    nested_properties: list[PropertyDefinition] = field(default_factory=list)
    items_definition: PropertyDefinition | None = None
    enum_values: list[str] = field(default_factory=list)

    @property
    def is_object(self) -> bool:
        return self.type == JsonType.OBJECT

    @property
    def is_array(self) -> bool:
        return self.type == JsonType.ARRAY

    @property
    def is_reference(self) -> bool:
        """다른 스키마를 $ref 로 참조하는지 여부."""
        return bool(self.ref_type)

    @property
    def has_nested_properties(self) -> bool:
        return bool(self.nested_properties)

    @property
    def has_enum(self) -> bool:
        return bool(self.enum_values)

    def add_nested_property(self, prop: PropertyDefinition) -> None:
        self.nested_properties.append(prop)
