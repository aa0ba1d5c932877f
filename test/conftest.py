"""공통 테스트 fixture."""

import json

import pytest

from schema_tag_provider.domain.entities.property_definition import (
    PropertyDefinition,
)
from schema_tag_provider.domain.entities.schema_model import SchemaModel
from schema_tag_provider.domain.enums import JsonType
from schema_tag_provider.usecase.ports.config_port import (
    AppConfig,
    MqttConfig,
    SchemaCacheConfig,
    TagProviderConfig,
)


@pytest.fixture
def sensor_schema_json():
    return json.dumps({
        "$schema": "http://json-schema.org/draft-07/schema#",
        "$id": "https://example.com/schemas/Sensor.json",
        "title": "Sensor",
        "description": "Generic sensor",
        "type": "object",
        "required": ["id"],
        "properties": {
            "id": {"type": "string", "description": "Sensor id"},
            "value": {"type": "number", "format": "float", "default": 0.5},
            "count": {"type": "integer", "default": 3},
            "enabled": {"type": "boolean", "default": True},
            "updatedAt": {"type": "string", "format": "date-time"},
            "location": {
                "type": "object",
                "properties": {
                    "lat": {"type": "number"},
                    "lon": {"type": "number"},
                },
            },
            "readings": {"type": "array", "items": {"type": "number"}},
        },
    })


@pytest.fixture
def derived_schema_json():
    return json.dumps({
        "title": "TemperatureSensor",
        "allOf": [
            {"$ref": "#/definitions/Sensor"},
            {
                "properties": {
                    "unit": {
                        "type": "string",
                        "enum": ["C", "F"],
                        "default": "C",
                    },
                },
                "required": ["unit"],
            },
        ],
    })


@pytest.fixture
def sensor_schema():
    schema = SchemaModel(name="Sensor", description="Generic sensor")
    schema.add_property(PropertyDefinition(name="id"))
    schema.add_property(
        PropertyDefinition(
            name="value", type=JsonType.NUMBER, default_value=0.5,
        )
    )
    location = PropertyDefinition(name="location", type=JsonType.OBJECT)
    location.add_nested_property(
        PropertyDefinition(name="lat", type=JsonType.NUMBER)
    )
    schema.add_property(location)
    schema.add_required("id")
    return schema


@pytest.fixture
def sample_config(tmp_path):
    return AppConfig(
        data_dir=str(tmp_path),
        mqtt=MqttConfig(
            broker_url="tcp://localhost:1883",
            topic="ignition/schemas/#",
        ),
        schema_cache=SchemaCacheConfig(path="schemas", scan_interval_sec=30),
        tag_provider=TagProviderConfig(name="default", allow_delete=True),
    )
