"""JSON Schema → SchemaModel 파서.

JSON 원문을 도메인 엔티티로 변환한다.
JSON Schema 키워드 해석은 이 모듈에서만 처리한다.
"""

from __future__ import annotations

import json
import logging
from typing import Any

from schema_tag_provider.domain.entities.property_definition import (
    PropertyDefinition,
)
from schema_tag_provider.domain.entities.schema_model import SchemaModel
from schema_tag_provider.domain.enums import JsonType
from schema_tag_provider.domain.exceptions import SchemaParseError

logger = logging.getLogger(__name__)


class JsonSchemaParser:
    """JSON Schema 파서."""

    def parse(self, schema_name: str, json_content: str) -> SchemaModel:
        """JSON Schema 문자열을 SchemaModel로 변환한다.

        Args:
            schema_name: title 이 없을 때 사용할 이름 (보통 파일 이름).
            json_content: JSON Schema 원문.

        Returns:
            파싱된 SchemaModel.

        Raises:
            SchemaParseError: JSON 문법 오류 또는 구조가 잘못된 경우.
        """
        try:
            root = json.loads(json_content)
            if not isinstance(root, dict):
                raise TypeError(
                    f'root must be an object, got {type(root).__name__}'
                )
            return self._parse_schema(schema_name, root)
        except (ValueError, TypeError, AttributeError, RecursionError) as e:
            raise SchemaParseError(
                f'Failed to parse JSON Schema: {schema_name}'
            ) from e

    def _parse_schema(
        self, default_name: str, root: dict[str, Any]
    ) -> SchemaModel:
        schema = SchemaModel(name=_as_str(root.get('title', default_name)))

        if '$id' in root:
            schema.id = _as_str(root['$id'])
        if 'description' in root:
            schema.description = _as_str(root['description'])

        self._collect_required(schema, root)

        properties = root.get('properties')
        if isinstance(properties, dict):
            for name, prop_def in properties.items():
                schema.add_property(self._parse_property(name, prop_def))

        # allOf: 상속 및 속성 병합
        all_of = root.get('allOf')
        if isinstance(all_of, list):
            self._parse_all_of(schema, all_of)

        logger.debug(
            'Parsed schema: %s (properties=%d, required=%s)',
            schema.name, len(schema.properties), sorted(schema.required),
        )
        return schema

    def _parse_property(
        self, name: str, prop_def: dict[str, Any]
    ) -> PropertyDefinition:
        if not isinstance(prop_def, dict):
            raise TypeError(f'property {name!r} must be an object')

        prop = PropertyDefinition(name=name)

        # $ref 는 다른 UDT 참조로 취급
        if '$ref' in prop_def:
            prop.ref_type = extract_ref_name(_as_str(prop_def['$ref']))
            prop.type = JsonType.OBJECT
            return prop

        prop.type = _resolve_type(prop_def.get('type'))

        if 'format' in prop_def:
            prop.format = _as_str(prop_def['format'])
        if 'description' in prop_def:
            prop.description = _as_str(prop_def['description'])
        if 'default' in prop_def:
            prop.default_value = _extract_default_value(prop_def['default'])

        enum_values = prop_def.get('enum')
        if isinstance(enum_values, list):
            prop.enum_values = [
                v if isinstance(v, str) else json.dumps(v)
                for v in enum_values
            ]

        nested = prop_def.get('properties')
        if prop.is_object and isinstance(nested, dict):
            for nested_name, nested_def in nested.items():
                prop.add_nested_property(
                    self._parse_property(nested_name, nested_def)
                )

        if prop.is_array and 'items' in prop_def:
            prop.items_definition = self._parse_property(
                'items', prop_def['items']
            )

        return prop

    def _parse_all_of(
        self, schema: SchemaModel, all_of: list[Any]
    ) -> None:
        for element in all_of:
            if not isinstance(element, dict):
                raise TypeError('allOf entries must be objects')

            if '$ref' in element:
                schema.parent_type = extract_ref_name(
                    _as_str(element['$ref'])
                )

            properties = element.get('properties')
            if isinstance(properties, dict):
                for name, prop_def in properties.items():
                    schema.add_property(self._parse_property(name, prop_def))

            self._collect_required(schema, element)

    @staticmethod
    def _collect_required(
        schema: SchemaModel, node: dict[str, Any]
    ) -> None:
        required = node.get('required')
        if isinstance(required, list):
            for name in required:
                schema.add_required(_as_str(name))


def extract_ref_name(ref: str) -> str:
    """$ref 문자열에서 타입 이름을 추출한다.

    Examples:
        '#/definitions/Address' -> 'Address'
        'https://example.com/schemas/base.json' -> 'base'
    """
    if '/' not in ref:
        return ref
    last = ref.rsplit('/', 1)[-1]
    if last.endswith('.json'):
        last = last[:-len('.json')]
    return last


def _resolve_type(raw: Any) -> str:
    """type 키워드 값을 단일 타입 문자열로 정규화한다."""
    if raw is None:
        return JsonType.STRING
    if isinstance(raw, list):
        # ["number", "null"] 형태: 첫 번째 non-null 타입
        for candidate in raw:
            if candidate != JsonType.NULL:
                return _as_str(candidate)
        return JsonType.STRING
    return _as_str(raw)


def _extract_default_value(value: Any) -> bool | int | float | str | None:
    if value is None or isinstance(value, (bool, int, float, str)):
        return value
    return json.dumps(value)


def _as_str(value: Any) -> str:
    if isinstance(value, (dict, list)) or value is None:
        raise TypeError(f'expected a JSON primitive, got {value!r}')
    if isinstance(value, bool):
        return 'true' if value else 'false'
    return str(value)
