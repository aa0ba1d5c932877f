"""SchemaModel → UDT 정의 JSON 변환.

Tag Provider import 형식(camelCase 키)의 UDT 정의를 생성한다.
"""

from __future__ import annotations

from collections.abc import Iterable
import json
import logging
from typing import Any

from schema_tag_provider.domain.data_type_mapper import map_to_data_type
from schema_tag_provider.domain.entities.property_definition import (
    PropertyDefinition,
)
from schema_tag_provider.domain.entities.schema_model import SchemaModel
from schema_tag_provider.domain.enums import DataType, TagType
from schema_tag_provider.infra.udt.dependency_graph import (
    order_by_dependency as _order_by_dependency,
)
from schema_tag_provider.usecase.ports.udt_builder import UdtBuilder

logger = logging.getLogger(__name__)

_VALUE_SOURCE_MEMORY = 'memory'
_ACCESS_READ_ONLY = 'Read_Only'


class UdtDefinitionBuilder(UdtBuilder):
    """SchemaModel로부터 UDT 정의를 생성한다."""

    def build_udt(self, schema: SchemaModel) -> dict[str, Any]:
        """스키마의 UDT 정의 dict를 생성한다.

        Args:
            schema: 변환할 스키마.

        Returns:
            UdtType 정의 dict.
        """
        udt: dict[str, Any] = {
            'name': schema.name,
            'tagType': TagType.UDT_TYPE.value,
        }
        if schema.description:
            udt['documentation'] = schema.description
        if schema.has_parent:
            udt['typeId'] = schema.parent_type

        tags = []
        for prop in schema.properties:
            tag = self._build_member_tag(prop, schema)
            if tag is not None:
                tags.append(tag)
        udt['tags'] = tags
        return udt

    def build_udt_json(self, schema: SchemaModel) -> str:
        """스키마의 UDT 정의를 JSON 문자열로 생성한다."""
        payload = _to_json(self.build_udt(schema))
        logger.debug('Built UDT JSON for %s: %s', schema.name, payload)
        return payload

    def build_udt_json_array(self, schemas: Iterable[SchemaModel]) -> str:
        """여러 스키마의 UDT 정의를 JSON 배열로 생성한다 (일괄 import 용)."""
        return _to_json([self.build_udt(schema) for schema in schemas])

    def order_by_dependency(
        self, schemas: Iterable[SchemaModel]
    ) -> list[SchemaModel]:
        return _order_by_dependency(schemas)

    def build_nested_udt_definitions(
        self, schema: SchemaModel
    ) -> list[dict[str, Any]] | None:
        """중첩 object 속성에 대한 UDT 정의 목록을 생성한다.

        부모 UDT보다 먼저 import 되어야 한다.
        깊은 중첩은 재귀적으로 포함한다.

        Args:
            schema: 부모 스키마.

        Returns:
            중첩 UDT 정의 목록. 중첩 타입이 없으면 None.
        """
        nested_udts: list[dict[str, Any]] = []

        for prop in schema.properties:
            if not (
                prop.is_object
                and prop.has_nested_properties
                and not prop.is_reference
            ):
                continue

            nested_schema = SchemaModel(
                name=schema.nested_type_name(prop),
                description=(
                    f'Nested type for {schema.name}.{prop.name}'
                ),
                properties=prop.nested_properties,
            )
            nested_udts.append(self.build_udt(nested_schema))

            deep = self.build_nested_udt_definitions(nested_schema)
            if deep:
                nested_udts.extend(deep)

        return nested_udts or None

    def _build_member_tag(
        self, prop: PropertyDefinition, parent: SchemaModel
    ) -> dict[str, Any] | None:
        tag: dict[str, Any] = {'name': prop.name}
        if prop.description:
            tag['tooltip'] = prop.description

        # 다른 UDT 참조
        if prop.is_reference:
            tag['tagType'] = TagType.UDT_INSTANCE.value
            tag['typeId'] = prop.ref_type
            return tag

        # 중첩 object: 별도 생성되는 중첩 UDT의 인스턴스
        if prop.is_object and prop.has_nested_properties:
            tag['tagType'] = TagType.UDT_INSTANCE.value
            tag['typeId'] = parent.nested_type_name(prop)
            return tag

        if prop.is_array:
            tag['tagType'] = TagType.ATOMIC_TAG.value
            tag['valueSource'] = _VALUE_SOURCE_MEMORY
            tag['dataType'] = DataType.DATASET.value
            _set_read_only(tag)
            return tag

        data_type = map_to_data_type(prop.type, prop.format)
        if data_type is None:
            logger.warning(
                'Could not map type for property: %s type: %s',
                prop.name, prop.type,
            )
            return None

        tag['tagType'] = TagType.ATOMIC_TAG.value
        tag['valueSource'] = _VALUE_SOURCE_MEMORY
        tag['dataType'] = data_type.value
        if prop.default_value is not None:
            tag['value'] = prop.default_value
        _set_read_only(tag)
        return tag


def _set_read_only(tag: dict[str, Any]) -> None:
    tag['readPermissions'] = {'accessRights': _ACCESS_READ_ONLY}


def _to_json(data: Any) -> str:
    return json.dumps(data, ensure_ascii=False, indent=2)
