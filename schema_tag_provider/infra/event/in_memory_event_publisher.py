"""프로세스 내부 동기식 이벤트 버스."""

import logging
import threading

from schema_tag_provider.domain.events.schema_events import DomainEvent
from schema_tag_provider.usecase.ports.event_publisher import (
    EventHandler,
    EventPublisher,
)

logger = logging.getLogger(__name__)


class InMemoryEventPublisher(EventPublisher):
    """호출 스레드에서 바로 핸들러를 실행하는 EventPublisher.

    (event_type, handler) 쌍을 등록 순서대로 보관하고
    isinstance 로 대상 핸들러를 고른다. 한 핸들러의 예외는
    로그로 남기고 나머지 핸들러는 계속 호출한다.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._subscriptions: list[tuple[type[DomainEvent], EventHandler]] = []

    def publish(self, event: DomainEvent) -> int:
        with self._lock:
            targets = [
                handler
                for event_type, handler in self._subscriptions
                if isinstance(event, event_type)
            ]

        name = type(event).__name__
        logger.debug('Dispatching %s to %d handlers', name, len(targets))

        for handler in targets:
            try:
                handler(event)
            except Exception:
                logger.exception('Event handler failed for %s', name)
        return len(targets)

    def subscribe(
        self, event_type: type[DomainEvent], handler: EventHandler
    ) -> None:
        with self._lock:
            self._subscriptions.append((event_type, handler))

    def unsubscribe(
        self, event_type: type[DomainEvent], handler: EventHandler
    ) -> bool:
        with self._lock:
            before = len(self._subscriptions)
            self._subscriptions = [
                entry for entry in self._subscriptions
                if entry != (event_type, handler)
            ]
            return len(self._subscriptions) != before
