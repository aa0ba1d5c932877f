"""paho-mqtt 래퍼 클라이언트.

MQTT 연결 관리, 인증/TLS, 자동 재연결, 와일드카드 구독 디스패치 등
paho-mqtt의 저수준 API를 캡슐화한다.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
import logging
import threading
from urllib.parse import urlsplit

import paho.mqtt.client as mqtt

from schema_tag_provider.domain.exceptions import MqttConnectionError
from schema_tag_provider.usecase.ports.config_port import MqttConfig

logger = logging.getLogger(__name__)

_PLAIN_SCHEMES = ('tcp', 'mqtt')
_TLS_SCHEMES = ('ssl', 'tls', 'mqtts')
_DEFAULT_PORT = 1883
_DEFAULT_TLS_PORT = 8883

MessageCallback = Callable[[str, bytes], None]
ConnectionListener = Callable[[bool, str], None]


@dataclass(frozen=True)
class BrokerAddress:
    """브로커 URL 파싱 결과.

    Args:
        host: 브로커 호스트.
        port: 브로커 포트.
        use_tls: TLS 사용 여부.
    """

    host: str
    port: int
    use_tls: bool = False


def parse_broker_url(url: str) -> BrokerAddress:
    """브로커 URL을 호스트/포트/TLS 여부로 분해한다.

    'tcp://host:1883', 'ssl://host:8883', 'host:1883' 형식을 지원한다.

    Raises:
        ValueError: 지원하지 않는 scheme 이거나 호스트가 없을 때.
    """
    if '://' not in url:
        url = f'tcp://{url}'

    parts = urlsplit(url)
    scheme = parts.scheme.lower()
    if scheme in _PLAIN_SCHEMES:
        use_tls = False
    elif scheme in _TLS_SCHEMES:
        use_tls = True
    else:
        raise ValueError(f'Unsupported MQTT broker scheme: {parts.scheme}')

    if not parts.hostname:
        raise ValueError(f'MQTT broker URL has no host: {url}')

    port = parts.port or (_DEFAULT_TLS_PORT if use_tls else _DEFAULT_PORT)
    return BrokerAddress(host=parts.hostname, port=port, use_tls=use_tls)


class MqttClient:
    """paho-mqtt 래퍼.

    Args:
        config: MQTT 브로커 접속 설정.
        client_id: MQTT 클라이언트 ID. None이면 config.client_id 사용.
    """

    def __init__(
        self, config: MqttConfig, client_id: str | None = None
    ) -> None:
        self._config = config
        self._address = parse_broker_url(config.broker_url)
        self._client = mqtt.Client(
            callback_api_version=mqtt.CallbackAPIVersion.VERSION2,
            client_id=client_id if client_id is not None else config.client_id,
            clean_session=config.clean_session,
            protocol=mqtt.MQTTv311,
        )
        self._lock = threading.Lock()
        self._connected = False
        self._connack = threading.Event()
        self._connack_rc: object = None

        self._client.on_connect = self._on_connect
        self._client.on_disconnect = self._on_disconnect
        self._client.on_message = self._on_message

        self._client.reconnect_delay_set(
            min_delay=1,
            max_delay=config.reconnect_max_delay_sec,
        )

        if config.has_credentials:
            self._client.username_pw_set(config.username, config.password)

        if self._address.use_tls:
            self._client.tls_set(
                ca_certs=config.tls_ca_cert or None,
                certfile=config.tls_client_cert or None,
                keyfile=config.tls_client_key or None,
            )

        # topic filter -> (callback, qos)
        self._subscriptions: dict[str, tuple[MessageCallback, int]] = {}
        self._connection_listeners: list[ConnectionListener] = []

    @property
    def is_connected(self) -> bool:
        """MQTT 브로커 연결 여부."""
        return self._connected

    @property
    def broker_address(self) -> BrokerAddress:
        return self._address

    def add_connection_listener(self, listener: ConnectionListener) -> None:
        """연결 상태 변경 리스너를 등록한다.

        Args:
            listener: (connected, reason) 을 받는 콜백.
        """
        with self._lock:
            self._connection_listeners.append(listener)

    def connect(self) -> None:
        """MQTT 브로커에 연결하고 CONNACK을 기다린다.

        Raises:
            MqttConnectionError: 소켓 오류, 브로커 거부, 시간 초과 시.
        """
        logger.info(
            'MQTT connecting to %s:%d (tls=%s)',
            self._address.host, self._address.port, self._address.use_tls,
        )
        self._connack.clear()
        self._connack_rc = None
        try:
            self._client.connect(
                host=self._address.host,
                port=self._address.port,
                keepalive=self._config.keepalive_sec,
            )
        except (OSError, ValueError) as e:
            raise MqttConnectionError(
                f'Cannot connect to MQTT broker {self._config.broker_url}: {e}'
            ) from e

        self._client.loop_start()

        if not self._connack.wait(self._config.connection_timeout_sec):
            self._client.loop_stop()
            raise MqttConnectionError(
                f'MQTT connection timed out after '
                f'{self._config.connection_timeout_sec}s: '
                f'{self._config.broker_url}'
            )
        if self._connack_rc != 0:
            self._client.loop_stop()
            raise MqttConnectionError(
                f'MQTT broker refused connection: rc={self._connack_rc}'
            )

    def disconnect(self) -> None:
        """MQTT 브로커 연결을 종료한다."""
        logger.info('MQTT disconnecting')
        self._client.disconnect()
        self._client.loop_stop()
        self._connected = False

    def publish(
        self, topic: str, payload: str, qos: int = 0, retain: bool = False
    ) -> mqtt.MQTTMessageInfo:
        """메시지를 발행한다.

        Args:
            topic: MQTT 토픽.
            payload: 페이로드 문자열.
            qos: QoS 레벨.
            retain: Retained 플래그.

        Returns:
            발행 결과 (wait_for_publish 로 완료 대기 가능).
        """
        with self._lock:
            result = self._client.publish(
                topic, payload.encode('utf-8'), qos=qos, retain=retain
            )
            if result.rc != mqtt.MQTT_ERR_SUCCESS:
                logger.error(
                    'MQTT publish failed: topic=%s, rc=%s', topic, result.rc
                )
            return result

    def subscribe(
        self, topic: str, callback: MessageCallback, qos: int = 0
    ) -> None:
        """토픽 필터를 구독한다 ('+', '#' 와일드카드 지원).

        Args:
            topic: 구독할 MQTT 토픽 필터.
            callback: 메시지 수신 콜백 (topic, payload).
            qos: QoS 레벨.
        """
        with self._lock:
            self._subscriptions[topic] = (callback, qos)
            self._client.subscribe(topic, qos=qos)
            logger.info('MQTT subscribe requested: %s (qos=%d)', topic, qos)

    def unsubscribe(self, topic: str) -> None:
        """토픽 구독을 해제한다.

        Args:
            topic: 해제할 MQTT 토픽 필터.
        """
        with self._lock:
            self._subscriptions.pop(topic, None)
            if self._connected:
                self._client.unsubscribe(topic)

    def _on_connect(
        self,
        client: mqtt.Client,
        userdata: object,
        flags: object,
        reason_code: object,
        properties: object = None,
    ) -> None:
        """연결 결과 콜백."""
        self._connack_rc = reason_code
        self._connack.set()

        if reason_code != 0:
            logger.error('MQTT connection failed: rc=%s', reason_code)
            return

        self._connected = True
        logger.info('MQTT connected to broker')
        # 재연결 시 기존 구독 복원
        with self._lock:
            for topic, (_, qos) in self._subscriptions.items():
                self._client.subscribe(topic, qos=qos)
                logger.debug('MQTT re-subscribed: %s (qos=%d)', topic, qos)
        self._notify_connection(True, '')

    def _on_disconnect(
        self,
        client: mqtt.Client,
        userdata: object,
        flags: object,
        reason_code: object,
        properties: object = None,
    ) -> None:
        """연결 해제 콜백."""
        was_connected = self._connected
        self._connected = False
        if reason_code == 0:
            return

        if self._config.automatic_reconnect:
            logger.warning(
                'MQTT unexpected disconnect: rc=%s, auto-reconnecting',
                reason_code,
            )
        else:
            logger.warning(
                'MQTT unexpected disconnect: rc=%s, reconnect disabled',
                reason_code,
            )
            self._client.loop_stop()

        if was_connected:
            self._notify_connection(False, str(reason_code))

    def _on_message(
        self,
        client: mqtt.Client,
        userdata: object,
        msg: mqtt.MQTTMessage,
    ) -> None:
        """메시지 수신 콜백. 일치하는 모든 구독 필터에 전달한다."""
        with self._lock:
            callbacks = [
                callback
                for topic_filter, (callback, _) in self._subscriptions.items()
                if mqtt.topic_matches_sub(topic_filter, msg.topic)
            ]

        if not callbacks:
            logger.debug('No handler for topic: %s', msg.topic)
            return

        for callback in callbacks:
            try:
                callback(msg.topic, msg.payload)
            except Exception:
                logger.exception(
                    'Error in MQTT message handler: topic=%s', msg.topic
                )

    def _notify_connection(self, connected: bool, reason: str) -> None:
        with self._lock:
            listeners = list(self._connection_listeners)
        for listener in listeners:
            try:
                listener(connected, reason)
            except Exception:
                logger.exception('Error in MQTT connection listener')
