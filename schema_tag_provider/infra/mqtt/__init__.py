"""MQTT 통신 인프라."""

from schema_tag_provider.infra.mqtt.mqtt_client import (
    BrokerAddress,
    MqttClient,
    parse_broker_url,
)
from schema_tag_provider.infra.mqtt.schema_listener import MqttSchemaListener

__all__ = [
    "BrokerAddress",
    "MqttClient",
    "MqttSchemaListener",
    "parse_broker_url",
]
