"""Schema Tag Provider 도메인 이벤트."""

from schema_tag_provider.domain.events.schema_events import (
    DomainEvent,
    MqttConnectionChangedEvent,
    SchemaDeletedEvent,
    SchemaReceivedEvent,
    SchemaRejectedEvent,
    UdtRemovedEvent,
    UdtSyncedEvent,
)

__all__ = [
    "DomainEvent",
    "MqttConnectionChangedEvent",
    "SchemaDeletedEvent",
    "SchemaReceivedEvent",
    "SchemaRejectedEvent",
    "UdtRemovedEvent",
    "UdtSyncedEvent",
]
