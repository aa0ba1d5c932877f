r"""Schema Tag Provider 진입점.

실행: schema_tag_provider -c config.yaml -d /var/lib/schema-provider
UDT 미리보기: schema_tag_provider --export schemas/Motor.json
"""

from __future__ import annotations

import argparse
import dataclasses
import json
import logging
from pathlib import Path
import signal
import sys
import threading

from schema_tag_provider.domain.events.schema_events import DomainEvent
from schema_tag_provider.domain.exceptions import DomainError
from schema_tag_provider.infra.config.yaml_config_loader import (
    YamlConfigLoader,
)
from schema_tag_provider.infra.event.in_memory_event_publisher import (
    InMemoryEventPublisher,
)
from schema_tag_provider.infra.mqtt.mqtt_client import MqttClient
from schema_tag_provider.infra.mqtt.schema_listener import MqttSchemaListener
from schema_tag_provider.infra.scheduler.thread_scheduler import (
    ThreadScheduler,
)
from schema_tag_provider.infra.schema.file_schema_cache import (
    FileSchemaCache,
)
from schema_tag_provider.infra.schema.json_schema_parser import (
    JsonSchemaParser,
)
from schema_tag_provider.infra.tag_provider.file_tag_provider import (
    FileTagProvider,
)
from schema_tag_provider.infra.tag_provider.local_tag_manager import (
    LocalTagManager,
)
from schema_tag_provider.infra.udt.udt_definition_builder import (
    UdtDefinitionBuilder,
)
from schema_tag_provider.usecase.ports.config_port import AppConfig
from schema_tag_provider.usecase.ports.schema_message_handler import (
    SchemaMessageHandler,
)
from schema_tag_provider.usecase.tag_provider_manager import (
    TagProviderManager,
    resolve_path,
)

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='schema_tag_provider',
        description='JSON Schema to UDT definition tag provider',
    )
    parser.add_argument(
        '-c', '--config_file', type=str, default=None,
        help='Path to the config.yaml file (created with defaults if missing)',
    )
    parser.add_argument(
        '-d', '--data_dir', type=str, default=None,
        help='Base directory for relative cache and storage paths',
    )
    parser.add_argument(
        '--log-level', type=str, default='INFO',
        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
        help='Logging level, default: INFO',
    )
    parser.add_argument(
        '--export', type=str, default=None, metavar='SCHEMA_FILE',
        help='Print the UDT definitions for a schema file and exit',
    )
    return parser


def export_schema(schema_file: str | Path) -> str:
    """스키마 파일을 UDT 정의 JSON 배열로 변환한다.

    중첩 타입이 본 UDT보다 앞에 온다.

    Args:
        schema_file: JSON Schema 파일 경로.

    Returns:
        UDT 정의 JSON 배열 문자열.

    Raises:
        OSError: 파일을 읽을 수 없을 때.
        SchemaParseError: 올바른 JSON Schema가 아닐 때.
    """
    path = Path(schema_file)
    schema = JsonSchemaParser().parse(
        path.stem, path.read_text(encoding='utf-8')
    )
    builder = UdtDefinitionBuilder()
    definitions = builder.build_nested_udt_definitions(schema) or []
    definitions.append(builder.build_udt(schema))
    return json.dumps(definitions, indent=2, ensure_ascii=False)


def build_manager(
    config: AppConfig,
) -> tuple[TagProviderManager, ThreadScheduler]:
    """설정으로 TagProviderManager와 의존 객체를 조립한다."""
    provider_config = config.tag_provider
    storage_root = resolve_path(config.data_dir, provider_config.storage_path)
    tag_manager = LocalTagManager([
        FileTagProvider(
            provider_config.name, storage_root / provider_config.name
        ),
    ])

    def create_listener(handler: SchemaMessageHandler) -> MqttSchemaListener:
        return MqttSchemaListener(
            MqttClient(config.mqtt), config.mqtt, handler
        )

    events = InMemoryEventPublisher()
    events.subscribe(
        DomainEvent, lambda event: logger.debug('Event: %s', event)
    )

    scheduler = ThreadScheduler(name_prefix='schema-cache-scan')
    manager = TagProviderManager(
        config,
        tag_manager,
        scheduler,
        UdtDefinitionBuilder(),
        cache_factory=FileSchemaCache,
        source_factory=create_listener,
        event_publisher=events,
    )
    return manager, scheduler


def main(argv: list[str] | None = None) -> int:
    """Schema Tag Provider를 시작한다.

    Args:
        argv: 커맨드 라인 인자.

    Returns:
        종료 코드.
    """
    if argv is None:
        argv = sys.argv

    args = _build_parser().parse_args(argv[1:])

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format='[%(name)s] %(levelname)s: %(message)s',
    )

    if args.export:
        try:
            print(export_schema(args.export))
        except (OSError, DomainError) as e:
            logger.error('Failed to export schema %s: %s', args.export, e)
            return 1
        return 0

    # 1. 설정 로드
    config = YamlConfigLoader(args.config_file).load()
    if args.data_dir:
        config = dataclasses.replace(config, data_dir=args.data_dir)

    # 2. 조립 및 시작
    manager, scheduler = build_manager(config)
    stop_event = threading.Event()

    def _on_signal(signum, frame) -> None:
        logger.info('Signal %d received, stopping', signum)
        stop_event.set()

    signal.signal(signal.SIGINT, _on_signal)
    signal.signal(signal.SIGTERM, _on_signal)

    try:
        manager.startup()
        logger.info(
            'Running with %d cached schemas, %d UDTs registered',
            manager.cached_schema_count, manager.registered_udt_count,
        )
        stop_event.wait()
    finally:
        manager.shutdown()
        scheduler.shutdown()
    return 0


if __name__ == '__main__':
    sys.exit(main(sys.argv))
