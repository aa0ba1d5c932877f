"""Tag Provider 모듈 수명주기 조율 유스케이스.

스키마 캐시, UDT 동기화, MQTT 리스너, 주기적 캐시 스캔을
하나의 수명주기로 관리한다.
"""

from __future__ import annotations

from collections.abc import Callable
import logging
from pathlib import Path
import threading

from schema_tag_provider.domain.exceptions import (
    MqttConnectionError,
    SchemaCacheError,
    SchemaParseError,
)
from schema_tag_provider.domain.events.schema_events import (
    DomainEvent,
    MqttConnectionChangedEvent,
    SchemaDeletedEvent,
    SchemaReceivedEvent,
    SchemaRejectedEvent,
)
from schema_tag_provider.usecase.ports.config_port import AppConfig
from schema_tag_provider.usecase.ports.event_publisher import EventPublisher
from schema_tag_provider.usecase.ports.schema_message_handler import (
    SchemaMessageHandler,
)
from schema_tag_provider.usecase.ports.schema_repository import (
    SchemaRepository,
)
from schema_tag_provider.usecase.ports.schema_source import SchemaSource
from schema_tag_provider.usecase.ports.scheduler import (
    ScheduledTask,
    Scheduler,
)
from schema_tag_provider.usecase.ports.tag_provider import TagManager
from schema_tag_provider.usecase.ports.udt_builder import UdtBuilder
from schema_tag_provider.usecase.sync_udt_definitions import UdtSynchronizer

logger = logging.getLogger(__name__)

CacheFactory = Callable[[Path], SchemaRepository]
SourceFactory = Callable[[SchemaMessageHandler], SchemaSource]


def resolve_path(data_dir: str | Path, path: str | Path) -> Path:
    """상대 경로를 data_dir 기준으로 해석한다."""
    candidate = Path(path)
    if candidate.is_absolute():
        return candidate
    return Path(data_dir) / candidate


class TagProviderManager(SchemaMessageHandler):
    """Tag Provider 모듈의 중앙 조율자.

    스키마 수신 → 캐시 저장 → UDT 동기화 흐름과
    캐시 디렉토리 변경 감지를 담당한다.

    Args:
        config: 애플리케이션 설정.
        tag_manager: Tag Provider 레지스트리.
        scheduler: 주기적 캐시 스캔용 스케줄러.
        udt_builder: UDT 정의 생성기.
        cache_factory: 캐시 디렉토리로 SchemaRepository를 생성하는 함수.
        source_factory: 핸들러로 스키마 수신원을 생성하는 함수.
            None이면 MQTT 수신을 사용하지 않는다.
        event_publisher: 도메인 이벤트 발행자 (선택).
    """

    def __init__(
        self,
        config: AppConfig,
        tag_manager: TagManager | None,
        scheduler: Scheduler,
        udt_builder: UdtBuilder,
        cache_factory: CacheFactory,
        source_factory: SourceFactory | None = None,
        event_publisher: EventPublisher | None = None,
    ) -> None:
        self._config = config
        self._tag_manager = tag_manager
        self._scheduler = scheduler
        self._udt_builder = udt_builder
        self._cache_factory = cache_factory
        self._source_factory = source_factory
        self._event_publisher = event_publisher

        self._cache: SchemaRepository | None = None
        self._synchronizer: UdtSynchronizer | None = None
        self._source: SchemaSource | None = None
        self._scan_task: ScheduledTask | None = None

        # MQTT 스레드와 스캔 스레드의 동시 처리를 직렬화
        self._process_lock = threading.RLock()
        self._running = False

    # -- 수명주기 --

    def startup(self) -> None:
        """캐시 초기화, MQTT 리스너 시작, 캐시된 스키마 동기화를 수행한다.

        일부 단계가 실패해도 모듈은 실행 상태가 되며
        이후 MQTT 수신 또는 캐시 스캔으로 복구를 시도한다.
        """
        logger.info(
            'Starting TagProviderManager with settings: %s', self._config
        )

        self._synchronizer = UdtSynchronizer(
            self._tag_manager,
            self._config.tag_provider.name,
            self._udt_builder,
            event_publisher=self._event_publisher,
        )

        try:
            self._initialize_cache()

            # 동기화 전에 구독하여 갱신을 놓치지 않는다
            if self._config.mqtt.enabled and self._source_factory is not None:
                self._start_source()
            else:
                logger.info('MQTT listener disabled by configuration')

            self._running = True

            try:
                self._sync_all_schemas()
            except Exception as e:
                logger.warning(
                    'Failed to sync schemas on startup. Will retry when '
                    'schemas are received via MQTT. Error: %s', e,
                )

            self._start_cache_scan_task()
            logger.info('TagProviderManager started successfully')
        except Exception:
            logger.exception('Failed to start TagProviderManager')
            self._running = True

    def shutdown(self) -> None:
        """주기 스캔과 MQTT 리스너를 중지한다."""
        logger.info('Shutting down TagProviderManager')
        self._running = False

        if self._scan_task is not None:
            self._scan_task.cancel()
            self._scan_task = None

        if self._source is not None:
            self._source.disconnect()
            self._source = None

        logger.info('TagProviderManager shutdown complete')

    # -- 상태 조회 --

    @property
    def is_running(self) -> bool:
        return self._running

    @property
    def is_mqtt_connected(self) -> bool:
        return self._source is not None and self._source.is_connected

    @property
    def cached_schema_count(self) -> int:
        return self._cache.schema_count if self._cache is not None else 0

    @property
    def registered_udt_count(self) -> int:
        if self._synchronizer is None:
            return 0
        return len(self._synchronizer.registered_types)

    # -- SchemaMessageHandler 구현 --

    def on_schema_received(self, schema_name: str, content: str) -> None:
        """수신한 스키마를 캐시에 저장하고 UDT로 동기화한다."""
        if not self._running or self._cache is None:
            logger.warning(
                'Received schema while not running, ignoring: %s', schema_name
            )
            return

        logger.info('Processing received schema: %s', schema_name)
        with self._process_lock:
            previous = self._cache.get_schema(schema_name)
            try:
                schema = self._cache.save_schema(schema_name, content)
            except SchemaParseError as e:
                logger.error(
                    'Invalid JSON Schema received: %s (%s)',
                    schema_name, e.__cause__ or e,
                )
                self._publish(SchemaRejectedEvent(
                    schema_name=schema_name, reason=str(e.__cause__ or e),
                ))
                return
            except SchemaCacheError as e:
                logger.error(
                    'Failed to save schema to cache: %s (%s)', schema_name, e
                )
                self._publish(SchemaRejectedEvent(
                    schema_name=schema_name, reason=str(e),
                ))
                return

            self._publish(SchemaReceivedEvent(schema_name=schema_name))

            # title 변경 시 이전 이름의 UDT 정리
            if (
                previous is not None
                and previous.name != schema.name
                and self._config.tag_provider.allow_delete
            ):
                self._synchronizer.remove_udt_definition(previous.name)

            if self._synchronizer.sync_udt_definition(schema):
                logger.info('Successfully processed schema: %s', schema_name)
            else:
                logger.error('Failed to sync schema to UDT: %s', schema_name)

    def on_schema_deleted(self, schema_name: str) -> None:
        """스키마를 캐시에서 제거하고 허용 시 UDT도 제거한다."""
        if not self._running or self._cache is None:
            return

        logger.info('Processing schema deletion: %s', schema_name)
        with self._process_lock:
            cached = self._cache.get_schema(schema_name)
            type_name = cached.name if cached is not None else schema_name

            if self._config.tag_provider.allow_delete:
                self._synchronizer.remove_udt_definition(type_name)
                logger.info('Removed UDT for schema: %s', schema_name)
            else:
                logger.info(
                    'Skipping UDT removal for schema: %s (allow_delete=false)',
                    schema_name,
                )

            # 삭제 신호는 항상 캐시에 반영
            try:
                self._cache.remove_schema(schema_name)
            except SchemaCacheError:
                logger.exception(
                    'Failed to delete schema from cache: %s', schema_name
                )
                return

            self._publish(SchemaDeletedEvent(schema_name=schema_name))
            logger.info(
                'Successfully processed schema deletion: %s', schema_name
            )

    def on_connected(self) -> None:
        logger.info('MQTT connection established')
        self._publish(MqttConnectionChangedEvent(connected=True))

    def on_disconnected(self, cause: str) -> None:
        logger.warning(
            'MQTT connection lost, will attempt reconnect: %s', cause
        )
        self._publish(
            MqttConnectionChangedEvent(connected=False, reason=cause)
        )

    # -- 캐시 스캔 --

    def scan_and_sync_cache(self) -> None:
        """캐시 디렉토리 변경을 감지하여 UDT에 반영한다.

        삭제되었거나 title 이 바뀐 스키마의 이전 UDT는
        allow_delete 일 때만 제거한다.
        추가/변경된 스키마와 아직 등록되지 않은 스키마는 다시 동기화한다.
        """
        if not self._running or self._cache is None:
            return

        try:
            with self._process_lock:
                self._scan_and_sync()
        except Exception:
            logger.exception('Error during cache scan')

    def _scan_and_sync(self) -> None:
        cache = self._cache
        synchronizer = self._synchronizer

        previous_types = {}
        for key in cache.get_schema_names():
            schema = cache.get_schema(key)
            if schema is not None:
                previous_types[key] = schema.name

        result = cache.reload()
        if result.has_changes:
            logger.info(
                'Cache scan detected changes '
                '(%d added, %d updated, %d deleted)',
                len(result.added), len(result.updated), len(result.deleted),
            )

        # 삭제된 스키마와 title 이 바뀐 스키마의 이전 UDT
        stale = {
            key: previous_types.get(key, key) for key in result.deleted
        }
        for key in result.updated:
            schema = cache.get_schema(key)
            old_name = previous_types.get(key)
            if schema is not None and old_name and old_name != schema.name:
                stale[key] = old_name

        if stale:
            if self._config.tag_provider.allow_delete:
                for key in sorted(stale):
                    logger.info(
                        'Removing stale UDT %s for schema: %s',
                        stale[key], key,
                    )
                    synchronizer.remove_udt_definition(stale[key])
            else:
                logger.info(
                    'Skipping removal of %d stale UDTs (allow_delete=false)',
                    len(stale),
                )

        pending = set(result.added | result.updated)
        for key in cache.get_schema_names():
            schema = cache.get_schema(key)
            if schema is not None and not synchronizer.is_type_registered(
                schema.name
            ):
                pending.add(key)

        if not pending:
            logger.debug(
                'Cache scan complete, no schemas to sync (%d schemas)',
                cache.schema_count,
            )
            return

        logger.info('Syncing %d schemas to UDT definitions', len(pending))
        schemas = [cache.get_schema(key) for key in sorted(pending)]
        synchronizer.sync_all_udt_definitions(
            [schema for schema in schemas if schema is not None]
        )

    # -- 내부 단계 --

    def _initialize_cache(self) -> None:
        cache_path = resolve_path(
            self._config.data_dir, self._config.schema_cache.path
        )
        logger.info('Initializing schema cache at: %s', cache_path)

        cache = self._cache_factory(cache_path)
        cache.initialize()
        self._cache = cache
        logger.info(
            'Schema cache initialized with %d schemas', cache.schema_count
        )

    def _sync_all_schemas(self) -> None:
        logger.info(
            'Syncing %d cached schemas to UDT definitions',
            self._cache.schema_count,
        )
        with self._process_lock:
            synced = self._synchronizer.sync_all_udt_definitions(
                self._cache.get_all_schemas()
            )
        logger.info('Successfully synced %d UDT definitions', synced)

    def _start_source(self) -> None:
        logger.info('Starting MQTT listener')
        try:
            self._source = self._source_factory(self)
            self._source.connect()
            logger.info('MQTT listener started successfully')
        except (MqttConnectionError, ValueError) as e:
            # 캐시된 스키마만으로 계속 동작
            logger.error(
                'Failed to connect to MQTT broker: %s. '
                'Schema updates via MQTT will not be available.', e,
            )

    def _start_cache_scan_task(self) -> None:
        interval = self._config.schema_cache.scan_interval_sec
        if interval <= 0:
            logger.info('Cache scan disabled (interval: %d seconds)', interval)
            return

        logger.info(
            'Starting periodic cache scan task (interval: %d seconds)',
            interval,
        )
        self._scan_task = self._scheduler.schedule_with_fixed_delay(
            self.scan_and_sync_cache, interval, interval,
        )

    def _publish(self, event: DomainEvent) -> None:
        if self._event_publisher is not None:
            self._event_publisher.publish(event)
