"""스키마 수신원 포트 인터페이스."""

from abc import ABC, abstractmethod


class SchemaSource(ABC):
    """외부로부터 스키마 메시지를 받아 SchemaMessageHandler로 전달하는 수신원."""

    @abstractmethod
    def connect(self) -> None:
        """수신을 시작한다.

        Raises:
            MqttConnectionError: 브로커 연결 실패 시.
        """

    @abstractmethod
    def disconnect(self) -> None:
        """수신을 종료한다. 오류는 전파하지 않는다."""

    @property
    @abstractmethod
    def is_connected(self) -> bool:
        """연결 여부."""
