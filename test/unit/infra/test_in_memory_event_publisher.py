"""InMemoryEventPublisher 단위 테스트."""

import pytest

from schema_tag_provider.domain.events.schema_events import (
    DomainEvent,
    SchemaDeletedEvent,
    SchemaReceivedEvent,
    UdtSyncedEvent,
)
from schema_tag_provider.infra.event import InMemoryEventPublisher


@pytest.fixture
def publisher():
    return InMemoryEventPublisher()


class TestPublishSubscribe:
    def test_handler_receives_event(self, publisher):
        received = []
        publisher.subscribe(SchemaReceivedEvent, received.append)

        publisher.publish(SchemaReceivedEvent(schema_name="Sensor"))

        assert len(received) == 1
        assert received[0].schema_name == "Sensor"

    def test_type_isolation(self, publisher):
        received = []
        deleted = []
        publisher.subscribe(SchemaReceivedEvent, received.append)
        publisher.subscribe(SchemaDeletedEvent, deleted.append)

        publisher.publish(SchemaReceivedEvent(schema_name="A"))
        publisher.publish(SchemaDeletedEvent(schema_name="B"))

        assert [e.schema_name for e in received] == ["A"]
        assert [e.schema_name for e in deleted] == ["B"]

    def test_base_type_receives_all(self, publisher):
        received = []
        publisher.subscribe(DomainEvent, received.append)

        publisher.publish(SchemaReceivedEvent(schema_name="A"))
        publisher.publish(UdtSyncedEvent(type_name="A", success=True))

        assert len(received) == 2

    def test_no_handler_no_error(self, publisher):
        publisher.publish(SchemaDeletedEvent(schema_name="A"))

    def test_handler_exception_does_not_break_others(self, publisher):
        results = []

        def bad_handler(event):
            raise ValueError("boom")

        publisher.subscribe(UdtSyncedEvent, bad_handler)
        publisher.subscribe(UdtSyncedEvent, results.append)

        publisher.publish(UdtSyncedEvent(type_name="A", success=False))

        assert len(results) == 1

    def test_publish_returns_handler_count(self, publisher):
        publisher.subscribe(DomainEvent, lambda e: None)
        publisher.subscribe(SchemaReceivedEvent, lambda e: None)

        assert publisher.publish(SchemaReceivedEvent(schema_name="A")) == 2
        assert publisher.publish(SchemaDeletedEvent(schema_name="A")) == 1


class TestUnsubscribe:
    def test_unsubscribe_stops_delivery(self, publisher):
        received = []
        publisher.subscribe(SchemaReceivedEvent, received.append)

        assert publisher.unsubscribe(SchemaReceivedEvent, received.append)
        publisher.publish(SchemaReceivedEvent(schema_name="A"))

        assert received == []

    def test_unsubscribe_unknown_handler(self, publisher):
        assert not publisher.unsubscribe(DomainEvent, print)
