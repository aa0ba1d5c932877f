"""JSON Schema 타입 → Tag DataType 매핑."""

from __future__ import annotations

from schema_tag_provider.domain.enums import DataType, JsonType

_STRING_FORMATS: dict[str, DataType] = {
    'date-time': DataType.DATETIME,
    'datetime': DataType.DATETIME,
    # 날짜 전용 타입이 없으므로 DateTime 사용
    'date': DataType.DATETIME,
    'time': DataType.STRING,
    'byte': DataType.INT1,
    # Base64 문자열
    'binary': DataType.STRING,
}

_NUMBER_FORMATS: dict[str, DataType] = {
    'float': DataType.FLOAT4,
    'double': DataType.FLOAT8,
    'int32': DataType.INT4,
    'int': DataType.INT4,
    'int64': DataType.INT8,
    'long': DataType.INT8,
}


def map_to_data_type(
    json_type: str | None, fmt: str | None = None
) -> DataType | None:
    """JSON Schema 타입과 format을 Tag DataType으로 변환한다.

    Args:
        json_type: JSON Schema 타입 (string, integer, number, ...).
        fmt: 선택적 format 지정자 (date-time, float, ...).

    Returns:
        대응하는 DataType. object 타입은 중첩 UDT로 별도 처리하므로 None.
    """
    if json_type is None:
        return DataType.STRING

    kind = json_type.lower()
    if kind == JsonType.STRING:
        return _map_format(_STRING_FORMATS, fmt, DataType.STRING)
    if kind == JsonType.INTEGER:
        return DataType.INT4
    if kind == JsonType.NUMBER:
        return _map_format(_NUMBER_FORMATS, fmt, DataType.FLOAT8)
    if kind == JsonType.BOOLEAN:
        return DataType.BOOLEAN
    if kind == JsonType.ARRAY:
        return DataType.DATASET
    if kind == JsonType.OBJECT:
        return None
    return DataType.STRING


def _map_format(
    table: dict[str, DataType], fmt: str | None, default: DataType
) -> DataType:
    if fmt is None:
        return default
    return table.get(fmt.lower(), default)


def is_nested_type(json_type: str | None) -> bool:
    """중첩 UDT가 되는 object 타입인지 확인한다."""
    return json_type is not None and json_type.lower() == JsonType.OBJECT


def is_array_type(json_type: str | None) -> bool:
    """array 타입인지 확인한다."""
    return json_type is not None and json_type.lower() == JsonType.ARRAY
