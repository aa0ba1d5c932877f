"""설정 포트 인터페이스.

애플리케이션 설정의 로딩/저장을 추상화한다.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field


@dataclass(frozen=True)
class MqttConfig:
    """MQTT 브로커 접속 설정.

    Args:
        enabled: MQTT 리스너 사용 여부.
        broker_url: 브로커 URL (tcp://host:port, ssl://host:port).
        client_id: MQTT 클라이언트 ID.
        topic: 스키마 구독 토픽 필터.
        username: 인증 사용자명. 빈 문자열이면 인증 생략.
        password: 인증 비밀번호.
        qos: 구독 QoS 레벨.
        clean_session: Clean session 플래그.
        connection_timeout_sec: CONNACK 대기 시간 (초).
        keepalive_sec: 연결 유지 간격 (초).
        automatic_reconnect: 연결 끊김 시 자동 재연결 여부.
        reconnect_max_delay_sec: 재연결 최대 대기 시간 (초).
        tls_ca_cert: CA 인증서 경로.
        tls_client_cert: 클라이언트 인증서 경로.
        tls_client_key: 클라이언트 키 경로.
    """

    enabled: bool = True
    broker_url: str = 'tcp://localhost:1883'
    client_id: str = 'ignition-schema-provider'
    topic: str = 'ignition/schemas/#'
    username: str = ''
    password: str = field(default='', repr=False)
    qos: int = 1
    clean_session: bool = True
    connection_timeout_sec: int = 30
    keepalive_sec: int = 60
    automatic_reconnect: bool = True
    reconnect_max_delay_sec: int = 60
    tls_ca_cert: str = ''
    tls_client_cert: str = ''
    tls_client_key: str = ''

    @property
    def has_credentials(self) -> bool:
        return bool(self.username)


@dataclass(frozen=True)
class SchemaCacheConfig:
    """스키마 캐시 설정.

    Args:
        path: 캐시 디렉토리. 상대 경로는 data_dir 기준.
        scan_interval_sec: 주기적 캐시 스캔 간격 (초). 0 이하면 비활성.
    """

    path: str = 'modules/schema-tag-provider/schemas'
    scan_interval_sec: int = 30


@dataclass(frozen=True)
class TagProviderConfig:
    """Tag Provider 설정.

    Args:
        name: UDT를 등록할 Tag Provider 이름.
        allow_delete: 스키마 삭제 시 UDT 제거 허용 여부.
        storage_path: Tag Provider 저장 디렉토리. 상대 경로는 data_dir 기준.
    """

    name: str = 'default'
    allow_delete: bool = True
    storage_path: str = 'tag-providers'


@dataclass(frozen=True)
class AppConfig:
    """애플리케이션 전체 설정.

    Args:
        data_dir: 상대 경로 해석 기준 디렉토리.
        mqtt: MQTT 설정.
        schema_cache: 스키마 캐시 설정.
        tag_provider: Tag Provider 설정.
    """

    data_dir: str = '.'
    mqtt: MqttConfig = field(default_factory=MqttConfig)
    schema_cache: SchemaCacheConfig = field(default_factory=SchemaCacheConfig)
    tag_provider: TagProviderConfig = field(default_factory=TagProviderConfig)


class ConfigPort(ABC):
    """설정 로더 인터페이스."""

    @abstractmethod
    def load(self) -> AppConfig:
        """설정을 로드한다.

        Returns:
            로드된 AppConfig. 설정 소스가 없으면 기본값.
        """

    @abstractmethod
    def save(self, config: AppConfig) -> None:
        """설정을 저장한다.

        Args:
            config: 저장할 설정.
        """
