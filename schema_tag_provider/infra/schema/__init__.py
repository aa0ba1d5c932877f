"""JSON Schema 파싱 및 파일 캐시 인프라 (SchemaRepository 구현)."""

from schema_tag_provider.infra.schema.file_schema_cache import FileSchemaCache
from schema_tag_provider.infra.schema.json_schema_parser import (
    JsonSchemaParser,
)

__all__ = ["FileSchemaCache", "JsonSchemaParser"]
