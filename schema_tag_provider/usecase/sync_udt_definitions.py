"""UDT 정의 동기화 유스케이스.

SchemaModel을 UDT 정의로 변환하여 Tag Provider의
'_types_' 폴더에 import/제거한다.
"""

from __future__ import annotations

from collections.abc import Iterable
import json
import logging
import threading

from schema_tag_provider.domain.entities.schema_model import SchemaModel
from schema_tag_provider.domain.enums import CollisionPolicy, QualityCode
from schema_tag_provider.domain.events.schema_events import (
    UdtRemovedEvent,
    UdtSyncedEvent,
)
from schema_tag_provider.usecase.ports.event_publisher import EventPublisher
from schema_tag_provider.usecase.ports.tag_provider import (
    TagManager,
    TagProvider,
)
from schema_tag_provider.usecase.ports.udt_builder import UdtBuilder

logger = logging.getLogger(__name__)

TYPES_PATH = '_types_'


class UdtSynchronizer:
    """UDT 정의 동기화 유스케이스.

    SchemaModel → UDT JSON → Tag Provider import → 등록 타입 추적.

    Args:
        tag_manager: Tag Provider 레지스트리. None이면 항상 실패한다.
        provider_name: UDT를 등록할 Provider 이름.
        builder: UDT 정의 생성기.
        event_publisher: 동기화 결과 이벤트 발행자 (선택).
    """

    def __init__(
        self,
        tag_manager: TagManager | None,
        provider_name: str,
        builder: UdtBuilder,
        event_publisher: EventPublisher | None = None,
    ) -> None:
        self._tag_manager = tag_manager
        self._provider_name = provider_name
        self._builder = builder
        self._event_publisher = event_publisher
        self._lock = threading.Lock()
        self._registered_types: set[str] = set()

    @property
    def registered_types(self) -> set[str]:
        """등록된 UDT 이름 집합 (복사본)."""
        with self._lock:
            return set(self._registered_types)

    def is_type_registered(self, type_name: str) -> bool:
        with self._lock:
            return type_name in self._registered_types

    def sync_udt_definition(self, schema: SchemaModel) -> bool:
        """스키마를 UDT 정의로 동기화한다.

        중첩 UDT를 먼저 import 한 뒤 본 UDT를 덮어쓰기로 import 한다.

        Args:
            schema: 동기화할 스키마.

        Returns:
            성공 여부.
        """
        logger.info('Syncing UDT definition: %s', schema.name)
        try:
            success = self._sync(schema)
        except Exception:
            logger.exception('Error syncing UDT definition: %s', schema.name)
            success = False

        self._publish(UdtSyncedEvent(type_name=schema.name, success=success))
        return success

    def sync_all_udt_definitions(self, schemas: Iterable[SchemaModel]) -> int:
        """여러 스키마를 참조 순서대로 동기화한다.

        Args:
            schemas: 동기화할 스키마 목록.

        Returns:
            성공한 스키마 수.
        """
        ordered = self._builder.order_by_dependency(schemas)
        success_count = sum(
            1 for schema in ordered if self.sync_udt_definition(schema)
        )
        logger.info(
            'Synced %d/%d UDT definitions', success_count, len(ordered)
        )
        return success_count

    def remove_udt_definition(self, type_name: str) -> bool:
        """UDT 정의를 제거한다.

        Args:
            type_name: 제거할 UDT 이름.

        Returns:
            성공 여부.
        """
        logger.info('Removing UDT definition: %s', type_name)
        success = False
        try:
            provider = self._get_tag_provider()
            if provider is not None:
                results = provider.remove_tag_configs(
                    [f'{TYPES_PATH}/{type_name}']
                )
                success = _all_good(results)
                if success:
                    with self._lock:
                        self._registered_types.discard(type_name)
                    logger.info('Removed UDT: %s', type_name)
                else:
                    logger.error(
                        'Failed to remove UDT: %s - %s', type_name, results
                    )
        except Exception:
            logger.exception('Error removing UDT: %s', type_name)
            success = False

        self._publish(UdtRemovedEvent(type_name=type_name, success=success))
        return success

    def _sync(self, schema: SchemaModel) -> bool:
        provider = self._get_tag_provider()
        if provider is None:
            return False

        nested = self._builder.build_nested_udt_definitions(schema)
        if nested:
            logger.debug(
                'Importing %d nested UDT definitions for: %s',
                len(nested), schema.name,
            )
            if not self._import_udt_json(provider, json.dumps(nested)):
                logger.warning(
                    'Failed to import nested UDTs for: %s', schema.name
                )

        success = self._import_udt_json(
            provider, self._builder.build_udt_json(schema)
        )
        if success:
            with self._lock:
                self._registered_types.add(schema.name)
            logger.info('Successfully synced UDT: %s', schema.name)
        else:
            logger.error('Failed to sync UDT: %s', schema.name)
        return success

    def _import_udt_json(self, provider: TagProvider, payload: str) -> bool:
        try:
            results = provider.import_tags(
                TYPES_PATH, payload, CollisionPolicy.OVERWRITE
            )
        except Exception:
            logger.exception('Error importing UDT JSON')
            return False

        for index, code in enumerate(results):
            if not code.is_good:
                logger.error('Import error at index %d: %s', index, code)
        return _all_good(results)

    def _get_tag_provider(self) -> TagProvider | None:
        if self._tag_manager is None:
            logger.error('Tag manager not available yet')
            return None

        provider = self._tag_manager.get_tag_provider(self._provider_name)
        if provider is None:
            logger.error(
                "Tag provider '%s' not found. Available providers: %s",
                self._provider_name,
                self._tag_manager.get_tag_provider_names(),
            )
        return provider

    def _publish(self, event: UdtSyncedEvent | UdtRemovedEvent) -> None:
        if self._event_publisher is not None:
            self._event_publisher.publish(event)


def _all_good(results: list[QualityCode]) -> bool:
    return all(code.is_good for code in results)
