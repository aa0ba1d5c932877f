"""파일 기반 JSON Schema 캐시 (SchemaRepository 구현체)."""

from __future__ import annotations

import logging
from pathlib import Path
import threading

from schema_tag_provider.domain.entities.schema_model import SchemaModel
from schema_tag_provider.domain.exceptions import (
    SchemaCacheError,
    SchemaParseError,
)
from schema_tag_provider.infra.schema.json_schema_parser import (
    JsonSchemaParser,
)
from schema_tag_provider.usecase.ports.schema_repository import (
    CacheReloadResult,
    SchemaRepository,
)

logger = logging.getLogger(__name__)

_SCHEMA_SUFFIX = '.json'


class FileSchemaCache(SchemaRepository):
    """SchemaRepository의 파일 구현체.

    캐시 디렉토리의 '<name>.json' 파일 하나가 스키마 하나에 대응한다.
    파싱 결과와 원문을 메모리에 함께 보관하며,
    모든 접근은 Lock으로 스레드 안전성을 보장한다.

    Args:
        cache_directory: 스키마 파일 디렉토리.
        parser: JSON Schema 파서. None이면 기본 파서 사용.
    """

    def __init__(
        self,
        cache_directory: Path,
        parser: JsonSchemaParser | None = None,
    ) -> None:
        self._directory = Path(cache_directory)
        self._parser = parser or JsonSchemaParser()
        self._lock = threading.Lock()
        self._schemas: dict[str, SchemaModel] = {}
        self._raw: dict[str, str] = {}

    @property
    def cache_directory(self) -> Path:
        return self._directory

    def initialize(self) -> None:
        """캐시 디렉토리를 생성하고 기존 스키마를 적재한다."""
        logger.info('Initializing schema cache at: %s', self._directory)
        try:
            self._directory.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise SchemaCacheError(
                f'Cannot create cache directory: {self._directory}'
            ) from e

        schemas, raw = self._load_all()
        with self._lock:
            self._schemas = schemas
            self._raw = raw
        logger.info('Schema cache initialized with %d schemas', len(schemas))

    def save_schema(self, schema_name: str, content: str) -> SchemaModel:
        _validate_name(schema_name)
        # 검증 실패 시 파일을 쓰지 않는다
        schema = self._parser.parse(schema_name, content)

        path = self._path_for(schema_name)
        try:
            path.write_text(content, encoding='utf-8')
        except OSError as e:
            raise SchemaCacheError(
                f'Failed to write schema file: {path}'
            ) from e

        with self._lock:
            self._schemas[schema_name] = schema
            self._raw[schema_name] = content

        logger.info('Saved schema: %s to %s', schema_name, path)
        return schema

    def remove_schema(self, schema_name: str) -> None:
        _validate_name(schema_name)
        path = self._path_for(schema_name)
        try:
            path.unlink(missing_ok=True)
        except OSError as e:
            raise SchemaCacheError(
                f'Failed to delete schema file: {path}'
            ) from e

        with self._lock:
            self._schemas.pop(schema_name, None)
            self._raw.pop(schema_name, None)

        logger.info('Removed schema: %s', schema_name)

    def get_schema(self, schema_name: str) -> SchemaModel | None:
        with self._lock:
            return self._schemas.get(schema_name)

    def get_raw_schema(self, schema_name: str) -> str | None:
        with self._lock:
            return self._raw.get(schema_name)

    def get_all_schemas(self) -> list[SchemaModel]:
        with self._lock:
            return list(self._schemas.values())

    def get_schema_names(self) -> list[str]:
        with self._lock:
            return list(self._schemas.keys())

    def has_schema(self, schema_name: str) -> bool:
        with self._lock:
            return schema_name in self._schemas

    @property
    def schema_count(self) -> int:
        with self._lock:
            return len(self._schemas)

    def reload(self) -> CacheReloadResult:
        """디스크에서 모든 스키마를 다시 읽는다.

        외부에서 파일이 추가/수정/삭제된 경우를 감지한다.

        Returns:
            이전 적재 상태와 비교한 변경 내역.
        """
        schemas, raw = self._load_all()

        with self._lock:
            previous_raw = self._raw
            self._schemas = schemas
            self._raw = raw

        added = raw.keys() - previous_raw.keys()
        deleted = previous_raw.keys() - raw.keys()
        updated = {
            name for name in raw.keys() & previous_raw.keys()
            if raw[name] != previous_raw[name]
        }
        result = CacheReloadResult(
            added=frozenset(added),
            updated=frozenset(updated),
            deleted=frozenset(deleted),
        )

        if deleted:
            logger.info(
                'Detected %d deleted schemas: %s',
                len(deleted), sorted(deleted),
            )
        logger.info('Reloaded %d schemas from cache', len(schemas))
        return result

    def _load_all(self) -> tuple[dict[str, SchemaModel], dict[str, str]]:
        """디렉토리의 모든 스키마 파일을 읽는다.

        파싱에 실패한 파일은 로그만 남기고 건너뛴다.
        """
        schemas: dict[str, SchemaModel] = {}
        raw: dict[str, str] = {}

        try:
            files = sorted(self._directory.glob(f'*{_SCHEMA_SUFFIX}'))
        except OSError:
            logger.exception('Failed to read cache directory')
            return schemas, raw

        for path in files:
            schema_name = path.stem
            try:
                content = path.read_text(encoding='utf-8')
                schemas[schema_name] = self._parser.parse(
                    schema_name, content
                )
                raw[schema_name] = content
                logger.debug('Loaded schema: %s from %s', schema_name, path)
            except (OSError, UnicodeDecodeError, SchemaParseError):
                logger.exception('Failed to load schema file: %s', path)

        return schemas, raw

    def _path_for(self, schema_name: str) -> Path:
        return self._directory / f'{schema_name}{_SCHEMA_SUFFIX}'


def _validate_name(schema_name: str) -> None:
    """캐시 디렉토리 밖을 가리키는 이름을 거부한다."""
    if (
        not schema_name
        or schema_name in ('.', '..')
        or '/' in schema_name
        or '\\' in schema_name
        or '\x00' in schema_name
    ):
        raise SchemaCacheError(f'Invalid schema name: {schema_name!r}')
