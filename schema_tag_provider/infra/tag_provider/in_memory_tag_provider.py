"""인메모리 Tag Provider 구현체."""

from __future__ import annotations

import copy
import json
import logging
import threading
from typing import Any

from schema_tag_provider.domain.enums import CollisionPolicy, QualityCode
from schema_tag_provider.domain.exceptions import TagProviderError
from schema_tag_provider.usecase.ports.tag_provider import TagProvider

logger = logging.getLogger(__name__)


class InMemoryTagProvider(TagProvider):
    """TagProvider의 인메모리 구현체.

    Tag 경로 → Tag 정의 dict 로 보관한다.
    모든 접근은 Lock으로 스레드 안전성을 보장한다.

    Args:
        name: Provider 이름.
    """

    def __init__(self, name: str) -> None:
        self._name = name
        self._lock = threading.Lock()
        self._tags: dict[str, dict[str, Any]] = {}

    @property
    def name(self) -> str:
        return self._name

    def import_tags(
        self,
        base_path: str,
        definitions_json: str,
        collision_policy: CollisionPolicy,
    ) -> list[QualityCode]:
        definitions = _parse_definitions(definitions_json)
        folder = normalize_path(base_path)

        results: list[QualityCode] = []
        with self._lock:
            for definition in definitions:
                results.append(
                    self._import_one(folder, definition, collision_policy)
                )

        logger.debug(
            'Imported %d tag definitions into [%s]%s: %s',
            len(definitions), self._name, folder, results,
        )
        return results

    def remove_tag_configs(self, paths: list[str]) -> list[QualityCode]:
        results: list[QualityCode] = []
        with self._lock:
            for raw_path in paths:
                path = normalize_path(raw_path)
                if path not in self._tags:
                    results.append(QualityCode.BAD_NOT_FOUND)
                    continue
                self._on_removed(path)
                del self._tags[path]
                results.append(QualityCode.GOOD)
        return results

    def get_tag_config(self, path: str) -> dict[str, Any] | None:
        with self._lock:
            config = self._tags.get(normalize_path(path))
            return copy.deepcopy(config) if config is not None else None

    def browse(self, path: str) -> list[str]:
        folder = normalize_path(path)
        prefix = f'{folder}/' if folder else ''
        with self._lock:
            names = [
                key[len(prefix):]
                for key in self._tags
                if key.startswith(prefix) and '/' not in key[len(prefix):]
            ]
        return sorted(names)

    def _import_one(
        self,
        folder: str,
        definition: Any,
        collision_policy: CollisionPolicy,
    ) -> QualityCode:
        if (
            not isinstance(definition, dict)
            or not definition.get('name')
            or not definition.get('tagType')
        ):
            logger.warning(
                'Rejected tag definition without name/tagType: %r',
                definition,
            )
            return QualityCode.BAD

        name = str(definition['name'])
        if '/' in name:
            return QualityCode.BAD

        path = f'{folder}/{name}' if folder else name
        if path in self._tags:
            if collision_policy == CollisionPolicy.ABORT:
                return QualityCode.BAD
            if collision_policy == CollisionPolicy.IGNORE:
                return QualityCode.GOOD

        stored = copy.deepcopy(definition)
        self._on_stored(path, stored)
        self._tags[path] = stored
        return QualityCode.GOOD

    # -- 하위 클래스 영속화 훅 (Lock 보유 상태에서 호출) --

    def _on_stored(self, path: str, definition: dict[str, Any]) -> None:
        """Tag 정의 저장 후 호출된다."""

    def _on_removed(self, path: str) -> None:
        """Tag 정의 제거 후 호출된다."""


def normalize_path(path: str) -> str:
    """Tag 경로의 앞뒤 '/' 와 빈 구간을 제거한다."""
    return '/'.join(part for part in path.split('/') if part)


def _parse_definitions(definitions_json: str) -> list[Any]:
    try:
        data = json.loads(definitions_json)
    except ValueError as e:
        raise TagProviderError('Invalid tag definition JSON') from e

    if isinstance(data, dict):
        return [data]
    if isinstance(data, list):
        return data
    raise TagProviderError(
        f'Tag definition JSON must be an object or array, '
        f'got {type(data).__name__}'
    )
