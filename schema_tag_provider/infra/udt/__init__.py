"""UDT 정의 JSON 생성 인프라."""

from schema_tag_provider.infra.udt.dependency_graph import (
    build_dependency_graph,
    order_by_dependency,
)
from schema_tag_provider.infra.udt.udt_definition_builder import (
    UdtDefinitionBuilder,
)

__all__ = [
    "UdtDefinitionBuilder",
    "build_dependency_graph",
    "order_by_dependency",
]
