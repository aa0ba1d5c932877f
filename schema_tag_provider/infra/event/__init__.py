"""도메인 이벤트 발행 인프라 (EventPublisher 구현)."""

from schema_tag_provider.infra.event.in_memory_event_publisher import (
    InMemoryEventPublisher,
)

__all__ = ["InMemoryEventPublisher"]
