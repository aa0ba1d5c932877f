"""파일 기반 Tag Provider 구현체."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from schema_tag_provider.domain.exceptions import TagProviderError
from schema_tag_provider.infra.tag_provider.in_memory_tag_provider import (
    InMemoryTagProvider,
)

logger = logging.getLogger(__name__)


class FileTagProvider(InMemoryTagProvider):
    """Tag 정의를 JSON 파일로 영속화하는 TagProvider.

    '_types_/Sensor' 경로는 '<root>/_types_/Sensor.json' 에 저장된다.
    생성 시 기존 파일을 모두 적재한다.

    Args:
        name: Provider 이름.
        root: 저장 디렉토리.
    """

    def __init__(self, name: str, root: Path) -> None:
        super().__init__(name)
        self._root = Path(root)
        self._load_existing()

    @property
    def root(self) -> Path:
        return self._root

    def _load_existing(self) -> None:
        if not self._root.is_dir():
            return

        for file in sorted(self._root.rglob('*.json')):
            path = file.relative_to(self._root).with_suffix('').as_posix()
            try:
                self._tags[path] = json.loads(file.read_text(encoding='utf-8'))
            except (OSError, ValueError):
                logger.exception('Failed to load tag definition: %s', file)

        logger.info(
            'Tag provider [%s] loaded %d definitions from %s',
            self.name, len(self._tags), self._root,
        )

    def _file_for(self, path: str) -> Path:
        return self._root / f'{path}.json'

    def _on_stored(self, path: str, definition: dict[str, Any]) -> None:
        file = self._file_for(path)
        try:
            file.parent.mkdir(parents=True, exist_ok=True)
            file.write_text(
                json.dumps(definition, ensure_ascii=False, indent=2),
                encoding='utf-8',
            )
        except OSError as e:
            raise TagProviderError(
                f'Failed to write tag definition: {file}'
            ) from e

    def _on_removed(self, path: str) -> None:
        file = self._file_for(path)
        try:
            file.unlink(missing_ok=True)
        except OSError as e:
            raise TagProviderError(
                f'Failed to delete tag definition: {file}'
            ) from e
