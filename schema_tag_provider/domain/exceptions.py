"""Schema Tag Provider 도메인 예외 정의."""


class DomainError(Exception):
    """도메인 계층 기본 예외."""


class SchemaParseError(DomainError):
    """JSON Schema 파싱 실패 시."""


class SchemaCacheError(DomainError):
    """스키마 캐시 파일 입출력 실패 또는 잘못된 스키마 이름."""


class TagProviderError(DomainError):
    """Tag Provider 접근 또는 UDT import 실패 시."""


class MqttConnectionError(DomainError):
    """MQTT 브로커 연결 실패 시."""
