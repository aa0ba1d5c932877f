"""Tag Provider 인프라 (TagProvider, TagManager 구현)."""

from schema_tag_provider.infra.tag_provider.file_tag_provider import (
    FileTagProvider,
)
from schema_tag_provider.infra.tag_provider.in_memory_tag_provider import (
    InMemoryTagProvider,
)
from schema_tag_provider.infra.tag_provider.local_tag_manager import (
    LocalTagManager,
)

__all__ = ["FileTagProvider", "InMemoryTagProvider", "LocalTagManager"]
