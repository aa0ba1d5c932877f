"""Schema Tag Provider 도메인 엔티티."""

from schema_tag_provider.domain.entities.property_definition import (
    PropertyDefinition,
)
from schema_tag_provider.domain.entities.schema_model import SchemaModel

__all__ = [
    'PropertyDefinition',
    'SchemaModel',
]
