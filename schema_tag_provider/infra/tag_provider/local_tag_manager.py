"""로컬 Tag Provider 레지스트리."""

from __future__ import annotations

import threading

from schema_tag_provider.usecase.ports.tag_provider import (
    TagManager,
    TagProvider,
)


class LocalTagManager(TagManager):
    """이름 → TagProvider 매핑을 보관하는 TagManager 구현체."""

    def __init__(self, providers: list[TagProvider] | None = None) -> None:
        self._lock = threading.Lock()
        self._providers: dict[str, TagProvider] = {}
        for provider in providers or []:
            self.register(provider)

    def register(self, provider: TagProvider) -> None:
        """Provider를 등록한다. 같은 이름은 교체된다."""
        with self._lock:
            self._providers[provider.name] = provider

    def get_tag_provider(self, name: str) -> TagProvider | None:
        with self._lock:
            return self._providers.get(name)

    def get_tag_provider_names(self) -> list[str]:
        with self._lock:
            return sorted(self._providers)
