"""MQTT 스키마 메시지 처리 포트 인터페이스."""

from abc import ABC, abstractmethod


class SchemaMessageHandler(ABC):
    """MQTT로 수신한 스키마 메시지 콜백 인터페이스."""

    @abstractmethod
    def on_schema_received(self, schema_name: str, content: str) -> None:
        """새 스키마 또는 스키마 갱신 수신 시 호출된다.

        Args:
            schema_name: 토픽에서 추출한 스키마 이름.
            content: JSON Schema 원문.
        """

    @abstractmethod
    def on_schema_deleted(self, schema_name: str) -> None:
        """스키마 삭제 신호(빈 페이로드) 수신 시 호출된다.

        Args:
            schema_name: 삭제할 스키마 이름.
        """

    def on_connected(self) -> None:
        """MQTT 연결 및 구독 완료 시 호출된다."""

    def on_disconnected(self, cause: str) -> None:
        """MQTT 연결이 끊어졌을 때 호출된다.

        Args:
            cause: 연결 해제 사유.
        """
