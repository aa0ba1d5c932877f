"""Schema Tag Provider 도메인 열거형 정의."""

from enum import StrEnum


class JsonType(StrEnum):
    """JSON Schema 기본 타입."""

    STRING = 'string'
    INTEGER = 'integer'
    NUMBER = 'number'
    BOOLEAN = 'boolean'
    OBJECT = 'object'
    ARRAY = 'array'
    NULL = 'null'


class DataType(StrEnum):
    """Tag 데이터 타입."""

    STRING = 'String'
    INT1 = 'Int1'
    INT4 = 'Int4'
    INT8 = 'Int8'
    FLOAT4 = 'Float4'
    FLOAT8 = 'Float8'
    BOOLEAN = 'Boolean'
    DATETIME = 'DateTime'
    DATASET = 'DataSet'


class TagType(StrEnum):
    """Tag 정의 유형."""

    UDT_TYPE = 'UdtType'
    UDT_INSTANCE = 'UdtInstance'
    ATOMIC_TAG = 'AtomicTag'


class CollisionPolicy(StrEnum):
    """Tag import 시 동일 이름 충돌 처리 정책."""

    ABORT = 'Abort'
    OVERWRITE = 'Overwrite'
    IGNORE = 'Ignore'


class QualityCode(StrEnum):
    """Tag Provider 작업 결과 품질 코드."""

    GOOD = 'Good'
    BAD = 'Bad'
    BAD_NOT_FOUND = 'Bad_NotFound'
    BAD_DISABLED = 'Bad_Disabled'
    ERROR_EXCEPTION = 'Error_Exception'

    @property
    def is_good(self) -> bool:
        """작업 성공 여부."""
        return self is QualityCode.GOOD
