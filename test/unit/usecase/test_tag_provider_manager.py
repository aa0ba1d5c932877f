"""TagProviderManager 유스케이스 테스트."""

import dataclasses
import json
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from schema_tag_provider.domain.events.schema_events import (
    MqttConnectionChangedEvent,
    SchemaDeletedEvent,
    SchemaReceivedEvent,
    SchemaRejectedEvent,
)
from schema_tag_provider.domain.exceptions import MqttConnectionError
from schema_tag_provider.infra.schema import FileSchemaCache
from schema_tag_provider.infra.tag_provider import (
    InMemoryTagProvider,
    LocalTagManager,
)
from schema_tag_provider.infra.udt import UdtDefinitionBuilder
from schema_tag_provider.usecase.tag_provider_manager import (
    TagProviderManager,
    resolve_path,
)


@pytest.fixture
def provider():
    return InMemoryTagProvider("default")


@pytest.fixture
def scheduler():
    return MagicMock()


@pytest.fixture
def source():
    return MagicMock()


@pytest.fixture
def publisher():
    return MagicMock()


@pytest.fixture
def cache_dir(sample_config):
    return Path(sample_config.data_dir) / "schemas"


def _make_manager(config, provider, scheduler, source, publisher):
    return TagProviderManager(
        config,
        LocalTagManager([provider]),
        scheduler,
        UdtDefinitionBuilder(),
        cache_factory=FileSchemaCache,
        source_factory=lambda handler: source,
        event_publisher=publisher,
    )


@pytest.fixture
def manager(sample_config, provider, scheduler, source, publisher):
    manager = _make_manager(
        sample_config, provider, scheduler, source, publisher
    )
    manager.startup()
    return manager


def _events(publisher, event_type):
    return [
        call[0][0] for call in publisher.publish.call_args_list
        if isinstance(call[0][0], event_type)
    ]


def _with(config, **tag_provider):
    return dataclasses.replace(
        config,
        tag_provider=dataclasses.replace(config.tag_provider, **tag_provider),
    )


class TestResolvePath:

    def test_relative(self):
        assert resolve_path("/data", "schemas") == Path("/data/schemas")

    def test_absolute(self):
        assert resolve_path("/data", "/abs/schemas") == Path("/abs/schemas")


class TestStartup:

    def test_startup_syncs_cached_schemas(
        self, sample_config, provider, scheduler, source, publisher,
        cache_dir, sensor_schema_json,
    ):
        cache_dir.mkdir(parents=True)
        (cache_dir / "Sensor.json").write_text(sensor_schema_json)
        manager = _make_manager(
            sample_config, provider, scheduler, source, publisher
        )

        manager.startup()

        assert manager.is_running
        assert manager.cached_schema_count == 1
        assert manager.registered_udt_count == 1
        assert provider.get_tag_config("_types_/Sensor") is not None
        source.connect.assert_called_once()
        scheduler.schedule_with_fixed_delay.assert_called_once_with(
            manager.scan_and_sync_cache, 30, 30
        )

    def test_mqtt_disabled(
        self, sample_config, provider, scheduler, source, publisher
    ):
        config = dataclasses.replace(
            sample_config,
            mqtt=dataclasses.replace(sample_config.mqtt, enabled=False),
        )
        manager = _make_manager(config, provider, scheduler, source, publisher)

        manager.startup()

        source.connect.assert_not_called()
        assert manager.is_running
        assert not manager.is_mqtt_connected

    def test_mqtt_failure_keeps_running(self, manager, source):
        source.connect.side_effect = MqttConnectionError("refused")
        manager.startup()
        assert manager.is_running

    def test_scan_disabled(
        self, sample_config, provider, scheduler, source, publisher
    ):
        config = dataclasses.replace(
            sample_config,
            schema_cache=dataclasses.replace(
                sample_config.schema_cache, scan_interval_sec=0
            ),
        )
        _make_manager(config, provider, scheduler, source, publisher).startup()
        scheduler.schedule_with_fixed_delay.assert_not_called()

    def test_shutdown(self, manager, scheduler, source):
        task = scheduler.schedule_with_fixed_delay.return_value

        manager.shutdown()

        assert not manager.is_running
        task.cancel.assert_called_once()
        source.disconnect.assert_called_once()


class TestSchemaReceived:

    def test_received_schema_cached_and_synced(
        self, manager, provider, publisher, cache_dir, sensor_schema_json
    ):
        manager.on_schema_received("Sensor", sensor_schema_json)

        assert (cache_dir / "Sensor.json").exists()
        assert provider.browse("_types_") == ["Sensor", "Sensor_location"]
        assert manager.registered_udt_count == 1
        assert _events(publisher, SchemaReceivedEvent)[0].schema_name == (
            "Sensor"
        )

    def test_invalid_schema_rejected(
        self, manager, provider, publisher, cache_dir
    ):
        manager.on_schema_received("Broken", "{oops")

        assert not (cache_dir / "Broken.json").exists()
        assert provider.browse("_types_") == []
        rejected = _events(publisher, SchemaRejectedEvent)
        assert rejected[0].schema_name == "Broken"

    def test_unsafe_name_rejected(self, manager, publisher):
        manager.on_schema_received("..", '{"title": "X"}')
        assert _events(publisher, SchemaRejectedEvent)

    def test_title_change_removes_old_udt(self, manager, provider):
        manager.on_schema_received("motor", '{"title": "Motor"}')
        manager.on_schema_received("motor", '{"title": "Drive"}')

        assert provider.browse("_types_") == ["Drive"]

    def test_ignored_when_not_running(
        self, sample_config, provider, scheduler, source, publisher
    ):
        manager = _make_manager(
            sample_config, provider, scheduler, source, publisher
        )
        manager.on_schema_received("Sensor", '{"title": "Sensor"}')
        publisher.publish.assert_not_called()


class TestSchemaDeleted:

    def test_delete_removes_udt_and_cache(
        self, manager, provider, publisher, cache_dir
    ):
        manager.on_schema_received("motor", '{"title": "Motor"}')

        manager.on_schema_deleted("motor")

        assert provider.browse("_types_") == []
        assert not (cache_dir / "motor.json").exists()
        assert manager.cached_schema_count == 0
        assert _events(publisher, SchemaDeletedEvent)[0].schema_name == (
            "motor"
        )

    def test_delete_keeps_udt_when_not_allowed(
        self, sample_config, provider, scheduler, source, publisher, cache_dir
    ):
        config = _with(sample_config, allow_delete=False)
        manager = _make_manager(config, provider, scheduler, source, publisher)
        manager.startup()
        manager.on_schema_received("Motor", '{"title": "Motor"}')

        manager.on_schema_deleted("Motor")

        assert provider.browse("_types_") == ["Motor"]
        assert not (cache_dir / "Motor.json").exists()


class TestCacheScan:

    def test_scan_syncs_new_and_changed_files(
        self, manager, provider, cache_dir
    ):
        (cache_dir / "Pump.json").write_text('{"title": "Pump"}')

        manager.scan_and_sync_cache()

        assert provider.browse("_types_") == ["Pump"]
        assert manager.cached_schema_count == 1

        (cache_dir / "Pump.json").write_text(
            json.dumps({"title": "Pump", "description": "v2"})
        )
        manager.scan_and_sync_cache()

        udt = provider.get_tag_config("_types_/Pump")
        assert udt["documentation"] == "v2"

    def test_scan_removes_deleted_by_title(
        self, manager, provider, cache_dir
    ):
        manager.on_schema_received("pump_file", '{"title": "Pump"}')
        (cache_dir / "pump_file.json").unlink()

        manager.scan_and_sync_cache()

        assert provider.browse("_types_") == []

    def test_scan_title_change_removes_old_udt(
        self, manager, provider, cache_dir
    ):
        manager.on_schema_received("Motor", '{"title": "Motor"}')
        (cache_dir / "Motor.json").write_text('{"title": "MotorV2"}')

        manager.scan_and_sync_cache()

        assert provider.browse("_types_") == ["MotorV2"]
        assert manager.registered_udt_count == 1

    def test_scan_title_change_keeps_old_udt_when_not_allowed(
        self, sample_config, provider, scheduler, source, publisher, cache_dir
    ):
        config = _with(sample_config, allow_delete=False)
        manager = _make_manager(config, provider, scheduler, source, publisher)
        manager.startup()
        manager.on_schema_received("Motor", '{"title": "Motor"}')
        (cache_dir / "Motor.json").write_text('{"title": "MotorV2"}')

        manager.scan_and_sync_cache()

        assert sorted(provider.browse("_types_")) == ["Motor", "MotorV2"]

    def test_scan_retries_unregistered(
        self, manager, provider, cache_dir
    ):
        manager.on_schema_received("Pump", '{"title": "Pump"}')
        provider.remove_tag_configs(["_types_/Pump"])
        manager._synchronizer._registered_types.clear()

        manager.scan_and_sync_cache()

        assert provider.browse("_types_") == ["Pump"]

    def test_scan_noop_when_stopped(self, manager, provider, cache_dir):
        manager.shutdown()
        (cache_dir / "Pump.json").write_text('{"title": "Pump"}')

        manager.scan_and_sync_cache()

        assert provider.browse("_types_") == []


class TestConnectionEvents:

    def test_connection_events_published(self, manager, publisher):
        manager.on_connected()
        manager.on_disconnected("rc=7")

        events = _events(publisher, MqttConnectionChangedEvent)
        assert [e.connected for e in events] == [True, False]
        assert events[1].reason == "rc=7"

    def test_is_mqtt_connected(self, manager, source):
        source.is_connected = True
        assert manager.is_mqtt_connected
        source.is_connected = False
        assert not manager.is_mqtt_connected
