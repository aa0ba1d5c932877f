"""도메인 이벤트 테스트."""

import dataclasses

import pytest

from schema_tag_provider.domain.events.schema_events import (
    DomainEvent,
    MqttConnectionChangedEvent,
    SchemaRejectedEvent,
    UdtSyncedEvent,
)


class TestDomainEvents:

    def test_events_are_frozen(self):
        event = UdtSyncedEvent(type_name="Sensor", success=True)
        with pytest.raises(dataclasses.FrozenInstanceError):
            event.success = False

    def test_timestamp_is_utc(self):
        event = SchemaRejectedEvent(schema_name="Bad", reason="oops")
        assert event.timestamp.tzinfo is not None
        assert event.timestamp.utcoffset().total_seconds() == 0

    def test_inherit_domain_event(self):
        event = MqttConnectionChangedEvent(connected=False, reason="rc=7")
        assert isinstance(event, DomainEvent)
        assert event.reason == "rc=7"
