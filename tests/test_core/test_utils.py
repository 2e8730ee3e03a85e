"""核心工具函数单元测试."""

from datetime import date, datetime
from decimal import Decimal
from enum import Enum

from elasticlog.core.utils import (
    flatten_exception_group,
    normalize_value,
    replace_dot_in_keys,
)


class Color(Enum):
    RED = "red"


class TestNormalizeValue:
    """normalize_value 函数测试."""

    def test_primitives_unchanged(self) -> None:
        """测试基础类型原样保留."""
        ts = datetime(2024, 1, 1, 8, 30)
        for value in ("text", 1, 1.5, True, None, ts):
            assert normalize_value(value) is value

    def test_date_converted_to_datetime(self) -> None:
        """测试 date 转换为 datetime."""
        assert normalize_value(date(2024, 1, 2)) == datetime(2024, 1, 2)

    def test_decimal_converted_to_float(self) -> None:
        """测试 Decimal 转换为 float."""
        assert normalize_value(Decimal("1.25")) == 1.25

    def test_enum_uses_value(self) -> None:
        """测试枚举取值."""
        assert normalize_value(Color.RED) == "red"

    def test_nested_mapping_and_sequences(self) -> None:
        """测试嵌套映射和序列递归规整."""
        value = {"a": (1, 2), 3: {"b": [Decimal("2.5")]}}
        assert normalize_value(value) == {"a": [1, 2], "3": {"b": [2.5]}}

    def test_unknown_object_uses_str(self) -> None:
        """测试未知对象使用 str()."""

        class Token:
            def __str__(self) -> str:
                return "token-1"

        assert normalize_value(Token()) == "token-1"


class TestReplaceDotInKeys:
    """replace_dot_in_keys 函数测试."""

    def test_replace_top_level_keys(self) -> None:
        """测试替换顶层键."""
        assert replace_dot_in_keys({"user.id": 1}) == {"user_id": 1}

    def test_replace_nested_keys(self) -> None:
        """测试递归替换嵌套映射和列表中的键."""
        value = {"a.b": {"c.d": 1}, "items": [{"e.f": 2}]}
        assert replace_dot_in_keys(value) == {
            "a_b": {"c_d": 1},
            "items": [{"e_f": 2}],
        }

    def test_values_not_rewritten(self) -> None:
        """测试只替换键，不替换值."""
        assert replace_dot_in_keys({"host": "node.local"}) == {"host": "node.local"}

    def test_original_not_modified(self) -> None:
        """测试原始值不被修改."""
        original = {"a.b": {"c.d": 1}}
        replace_dot_in_keys(original)
        assert original == {"a.b": {"c.d": 1}}


class TestFlattenExceptionGroup:
    """flatten_exception_group 函数测试."""

    def test_flatten_nested_groups(self) -> None:
        """测试递归展开嵌套异常组."""
        first = ValueError("first")
        second = KeyError("second")
        third = RuntimeError("third")
        group = ExceptionGroup("outer", [first, ExceptionGroup("inner", [second, third])])

        assert flatten_exception_group(group) == [first, second, third]
