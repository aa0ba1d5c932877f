"""도메인 열거형 테스트."""

from schema_tag_provider.domain.enums import (
    CollisionPolicy,
    DataType,
    QualityCode,
    TagType,
)


class TestQualityCode:

    def test_only_good_is_good(self):
        assert QualityCode.GOOD.is_good
        assert not QualityCode.BAD.is_good
        assert not QualityCode.BAD_NOT_FOUND.is_good
        assert not QualityCode.BAD_DISABLED.is_good
        assert not QualityCode.ERROR_EXCEPTION.is_good

    def test_values(self):
        assert QualityCode.BAD_NOT_FOUND == "Bad_NotFound"
        assert QualityCode.ERROR_EXCEPTION == "Error_Exception"


class TestTagEnums:

    def test_tag_type_values(self):
        assert TagType.UDT_TYPE == "UdtType"
        assert TagType.UDT_INSTANCE == "UdtInstance"
        assert TagType.ATOMIC_TAG == "AtomicTag"

    def test_data_type_values(self):
        assert DataType.DATETIME == "DateTime"
        assert DataType.DATASET == "DataSet"

    def test_collision_policy_values(self):
        assert CollisionPolicy("Overwrite") is CollisionPolicy.OVERWRITE
