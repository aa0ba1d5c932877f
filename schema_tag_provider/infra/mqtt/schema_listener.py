"""MQTT JSON Schema 리스너.

스키마 토픽을 구독하여 수신한 메시지를 SchemaMessageHandler로 전달한다.
토픽 형식: {base_topic}/{schema path}
빈 페이로드는 스키마 삭제 신호로 해석한다.
"""

from __future__ import annotations

import logging

from schema_tag_provider.infra.mqtt.mqtt_client import MqttClient
from schema_tag_provider.usecase.ports.config_port import MqttConfig
from schema_tag_provider.usecase.ports.schema_message_handler import (
    SchemaMessageHandler,
)
from schema_tag_provider.usecase.ports.schema_source import SchemaSource

logger = logging.getLogger(__name__)


class MqttSchemaListener(SchemaSource):
    """스키마 토픽 구독 및 메시지 라우팅.

    Args:
        mqtt_client: MQTT 클라이언트 래퍼.
        config: MQTT 설정 (구독 토픽, QoS).
        handler: 스키마 메시지 처리기.
    """

    def __init__(
        self,
        mqtt_client: MqttClient,
        config: MqttConfig,
        handler: SchemaMessageHandler,
    ) -> None:
        self._client = mqtt_client
        self._config = config
        self._handler = handler
        self._subscribed = False
        self._base_topic = base_topic_of(config.topic)

        self._client.add_connection_listener(self._on_connection_changed)

    @property
    def is_connected(self) -> bool:
        """브로커 연결 여부."""
        return self._subscribed and self._client.is_connected

    def connect(self) -> None:
        """브로커에 연결하고 스키마 토픽을 구독한다.

        Raises:
            MqttConnectionError: 브로커 연결 실패 시.
        """
        logger.info('Connecting to MQTT broker: %s', self._config.broker_url)
        self._client.connect()
        logger.info('Connected to MQTT broker')

        self._client.subscribe(
            self._config.topic, self._on_message, qos=self._config.qos
        )
        self._subscribed = True
        logger.info(
            'Subscribed to topic: %s with QoS %d',
            self._config.topic, self._config.qos,
        )

        self._handler.on_connected()

    def disconnect(self) -> None:
        """구독을 해제하고 브로커 연결을 종료한다."""
        try:
            if self._client.is_connected:
                self._client.unsubscribe(self._config.topic)
            self._client.disconnect()
            logger.info('Disconnected from MQTT broker')
        except Exception:
            logger.exception('Error disconnecting from MQTT broker')
        finally:
            self._subscribed = False

    def extract_schema_name(self, topic: str) -> str:
        """토픽에서 스키마 이름을 추출한다.

        구독 필터가 'ignition/schemas/#' 일 때:
          'ignition/schemas/Sensor' -> 'Sensor'
          'ignition/schemas/devices/Temperature' -> 'devices_Temperature'
        기준 토픽 밖의 토픽은 마지막 구간을 사용한다.
        """
        base = self._base_topic
        if not base:
            return topic.replace('/', '_')
        if topic == base or topic.startswith(f'{base}/'):
            return topic[len(base) + 1:].replace('/', '_')

        return topic.rsplit('/', 1)[-1]

    def _on_message(self, topic: str, payload: bytes) -> None:
        try:
            content = payload.decode('utf-8')
            schema_name = self.extract_schema_name(topic)

            if not schema_name:
                logger.warning(
                    'Could not extract schema name from topic: %s', topic
                )
                return

            if not content.strip():
                logger.info(
                    'Received delete signal for schema: %s', schema_name
                )
                self._handler.on_schema_deleted(schema_name)
            else:
                logger.info(
                    'Received schema update: %s (%d bytes)',
                    schema_name, len(payload),
                )
                logger.debug('Schema content: %s', content)
                self._handler.on_schema_received(schema_name, content)
        except Exception:
            logger.exception(
                'Error processing MQTT message from topic: %s', topic
            )

    def _on_connection_changed(self, connected: bool, reason: str) -> None:
        if not connected:
            logger.warning('MQTT connection lost: %s', reason)
            self._handler.on_disconnected(reason)
        elif self._subscribed:
            # 최초 연결은 connect()에서 구독 후 통지한다
            self._handler.on_connected()


def base_topic_of(topic_filter: str) -> str:
    """구독 필터에서 와일드카드와 마지막 '/' 를 제거한다."""
    base = topic_filter.replace('#', '').replace('+', '')
    if base.endswith('/'):
        base = base[:-1]
    return base
