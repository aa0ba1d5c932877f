"""유스케이스 포트 인터페이스 (ABC).

infra 레이어에서 구현해야 하는 추상 인터페이스를 정의한다.
"""

from schema_tag_provider.usecase.ports.config_port import (
    AppConfig,
    ConfigPort,
    MqttConfig,
    SchemaCacheConfig,
    TagProviderConfig,
)
from schema_tag_provider.usecase.ports.event_publisher import EventPublisher
from schema_tag_provider.usecase.ports.schema_message_handler import (
    SchemaMessageHandler,
)
from schema_tag_provider.usecase.ports.schema_repository import (
    CacheReloadResult,
    SchemaRepository,
)
from schema_tag_provider.usecase.ports.schema_source import SchemaSource
from schema_tag_provider.usecase.ports.scheduler import (
    ScheduledTask,
    Scheduler,
)
from schema_tag_provider.usecase.ports.tag_provider import (
    TagManager,
    TagProvider,
)
from schema_tag_provider.usecase.ports.udt_builder import UdtBuilder

__all__ = [
    "AppConfig",
    "CacheReloadResult",
    "ConfigPort",
    "EventPublisher",
    "MqttConfig",
    "ScheduledTask",
    "Scheduler",
    "SchemaCacheConfig",
    "SchemaMessageHandler",
    "SchemaRepository",
    "SchemaSource",
    "TagManager",
    "TagProvider",
    "TagProviderConfig",
    "UdtBuilder",
]
