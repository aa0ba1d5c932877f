"""도메인 이벤트 버스 포트 인터페이스."""

from abc import ABC, abstractmethod
from collections.abc import Callable

from schema_tag_provider.domain.events.schema_events import DomainEvent

EventHandler = Callable[[DomainEvent], None]


class EventPublisher(ABC):
    """스키마/UDT 이벤트 버스.

    구독은 이벤트 클래스 단위이며, 상위 클래스 구독자도
    하위 이벤트를 받는다.
    """

    @abstractmethod
    def publish(self, event: DomainEvent) -> int:
        """이벤트를 구독자에게 전달한다.

        Returns:
            이벤트를 받은 핸들러 수.
        """

    @abstractmethod
    def subscribe(
        self, event_type: type[DomainEvent], handler: EventHandler
    ) -> None:
        """event_type 및 그 하위 이벤트에 대한 핸들러를 등록한다."""

    @abstractmethod
    def unsubscribe(
        self, event_type: type[DomainEvent], handler: EventHandler
    ) -> bool:
        """등록된 핸들러를 해제한다.

        Returns:
            해제된 핸들러가 있었는지 여부.
        """
