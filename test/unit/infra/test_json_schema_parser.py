"""JsonSchemaParser 유닛 테스트."""

import json

import pytest

from schema_tag_provider.domain.enums import JsonType
from schema_tag_provider.domain.exceptions import SchemaParseError
from schema_tag_provider.infra.schema.json_schema_parser import (
    JsonSchemaParser,
    extract_ref_name,
)


@pytest.fixture
def parser():
    return JsonSchemaParser()


def _deep_schema(depth):
    return '{"properties": {"a": ' * depth + '{}' + '}}' * depth


def _props(schema):
    return {p.name: p for p in schema.properties}


class TestParseBasics:

    def test_title_overrides_name(self, parser, sensor_schema_json):
        schema = parser.parse("sensor_file", sensor_schema_json)
        assert schema.name == "Sensor"
        assert schema.id == "https://example.com/schemas/Sensor.json"
        assert schema.description == "Generic sensor"
        assert schema.required == {"id"}

    def test_name_used_without_title(self, parser):
        schema = parser.parse("Motor", '{"properties": {"rpm": {}}}')
        assert schema.name == "Motor"
        assert _props(schema)["rpm"].type == JsonType.STRING

    def test_property_order_preserved(self, parser, sensor_schema_json):
        schema = parser.parse("Sensor", sensor_schema_json)
        assert [p.name for p in schema.properties] == [
            "id", "value", "count", "enabled",
            "updatedAt", "location", "readings",
        ]

    def test_primitive_attributes(self, parser, sensor_schema_json):
        props = _props(parser.parse("Sensor", sensor_schema_json))
        assert props["id"].description == "Sensor id"
        assert props["value"].format == "float"
        assert props["value"].default_value == 0.5
        assert props["count"].default_value == 3
        assert props["enabled"].default_value is True
        assert props["updatedAt"].format == "date-time"

    def test_nested_object(self, parser, sensor_schema_json):
        location = _props(parser.parse("Sensor", sensor_schema_json))[
            "location"
        ]
        assert location.is_object
        assert [p.name for p in location.nested_properties] == ["lat", "lon"]

    def test_array_items(self, parser, sensor_schema_json):
        readings = _props(parser.parse("Sensor", sensor_schema_json))[
            "readings"
        ]
        assert readings.is_array
        assert readings.items_definition.type == JsonType.NUMBER


class TestParseKeywords:

    def test_ref_property(self, parser):
        content = json.dumps({
            "properties": {
                "home": {
                    "$ref": "#/definitions/Address",
                    "description": "ignored",
                },
            },
        })
        home = _props(parser.parse("Person", content))["home"]
        assert home.ref_type == "Address"
        assert home.is_object
        assert home.description is None

    def test_all_of(self, parser, derived_schema_json):
        schema = parser.parse("x", derived_schema_json)
        assert schema.name == "TemperatureSensor"
        assert schema.parent_type == "Sensor"
        assert schema.required == {"unit"}
        unit = _props(schema)["unit"]
        assert unit.enum_values == ["C", "F"]
        assert unit.default_value == "C"

    def test_type_list_uses_first_non_null(self, parser):
        content = '{"properties": {"v": {"type": ["null", "integer"]}}}'
        assert _props(parser.parse("T", content))["v"].type == "integer"

    def test_null_default_is_no_default(self, parser):
        content = '{"properties": {"v": {"type": "string", "default": null}}}'
        assert _props(parser.parse("T", content))["v"].default_value is None

    def test_complex_default_serialized(self, parser):
        content = '{"properties": {"v": {"type": "object", "default": {"a": 1}}}}'
        prop = _props(parser.parse("T", content))["v"]
        assert json.loads(prop.default_value) == {"a": 1}

    def test_non_string_enum_serialized(self, parser):
        content = '{"properties": {"v": {"type": "integer", "enum": [1, 2]}}}'
        assert _props(parser.parse("T", content))["v"].enum_values == [
            "1", "2",
        ]


class TestParseErrors:

    @pytest.mark.parametrize("content", [
        "{not json",
        "[1, 2]",
        '"text"',
        '{"properties": {"v": "string"}}',
        '{"allOf": ["Sensor"]}',
        '{"title": {"nested": true}}',
    ])
    def test_invalid_schema_raises(self, parser, content):
        with pytest.raises(SchemaParseError) as exc_info:
            parser.parse("Broken", content)
        assert "Broken" in str(exc_info.value)
        assert exc_info.value.__cause__ is not None

    def test_too_deep_nesting_raises(self, parser):
        with pytest.raises(SchemaParseError) as exc_info:
            parser.parse("Deep", _deep_schema(5000))
        assert isinstance(exc_info.value.__cause__, RecursionError)


class TestExtractRefName:

    @pytest.mark.parametrize("ref,expected", [
        ("#/definitions/Address", "Address"),
        ("#/$defs/Point", "Point"),
        ("https://example.com/schemas/base.json", "base"),
        ("Plain", "Plain"),
    ])
    def test_extract(self, ref, expected):
        assert extract_ref_name(ref) == expected
