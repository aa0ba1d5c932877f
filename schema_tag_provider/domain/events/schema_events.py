"""Schema Tag Provider 도메인 이벤트 정의.

스키마 수신/삭제와 UDT 동기화 결과를 이벤트로 표현한다.
모니터링 등 부가 로직은 이벤트를 구독하여 처리한다.
"""

from dataclasses import dataclass, field
from datetime import UTC, datetime


@dataclass(frozen=True)
class DomainEvent:
    """도메인 이벤트 기본 클래스.

    Args:
        timestamp: 이벤트 발생 시각 (UTC).
    """

    timestamp: datetime = field(default_factory=lambda: datetime.now(UTC))


@dataclass(frozen=True)
class SchemaReceivedEvent(DomainEvent):
    """스키마 수신 및 캐시 저장 완료 이벤트.

    Args:
        schema_name: 스키마 이름 (토픽에서 추출).
    """

    schema_name: str = ""


@dataclass(frozen=True)
class SchemaRejectedEvent(DomainEvent):
    """수신한 스키마를 저장하지 못한 경우의 이벤트.

    Args:
        schema_name: 스키마 이름.
        reason: 거부 사유.
    """

    schema_name: str = ""
    reason: str = ""


@dataclass(frozen=True)
class SchemaDeletedEvent(DomainEvent):
    """스키마 삭제 이벤트.

    Args:
        schema_name: 삭제된 스키마 이름.
    """

    schema_name: str = ""


@dataclass(frozen=True)
class UdtSyncedEvent(DomainEvent):
    """UDT 정의 동기화 결과 이벤트.

    Args:
        type_name: UDT 타입 이름.
        success: 동기화 성공 여부.
    """

    type_name: str = ""
    success: bool = False


@dataclass(frozen=True)
class UdtRemovedEvent(DomainEvent):
    """UDT 정의 제거 결과 이벤트.

    Args:
        type_name: UDT 타입 이름.
        success: 제거 성공 여부.
    """

    type_name: str = ""
    success: bool = False


@dataclass(frozen=True)
class MqttConnectionChangedEvent(DomainEvent):
    """MQTT 연결 상태 변경 이벤트.

    Args:
        connected: 현재 연결 여부.
        reason: 연결 해제 사유 (연결 시 빈 문자열).
    """

    connected: bool = False
    reason: str = ""
