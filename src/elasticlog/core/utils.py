"""
elasticlog 工具函数模块

提供文档字段值规整、字段名转义和异常组展开相关的工具函数
"""

from collections.abc import Mapping
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Any

from .constants import FIELD_PATH_REPLACEMENT, FIELD_PATH_SEPARATOR


def normalize_value(value: Any) -> Any:
    """
    将任意 Python 值规整为文档字段值。

    字符串、数字、布尔、时间戳和空值原样保留；映射递归规整（键转为字符串）；
    列表、元组、集合转为列表；枚举取其值；其余对象使用 ``str()``。

    示例:
        >>> normalize_value({"a": (1, 2)})
        {'a': [1, 2]}
        >>> normalize_value(Decimal("1.5"))
        1.5

    Args:
        value: 需要规整的值

    Returns:
        规整后的字段值
    """
    if value is None or isinstance(value, (str, bool, int, float, datetime)):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    if isinstance(value, Decimal):
        return float(value)
    if isinstance(value, Enum):
        return normalize_value(value.value)
    if isinstance(value, Mapping):
        return {str(k): normalize_value(v) for k, v in value.items()}
    if isinstance(value, (list, tuple, set, frozenset)):
        return [normalize_value(item) for item in value]
    return str(value)


def replace_dot_in_keys(value: Any) -> Any:
    r"""
    递归替换映射键中的字段路径分隔符。

    Elasticsearch 将字段名中的 ``.`` 解释为对象路径，异常数据中带点的键
    会与已有字段冲突，因此统一替换为 ``_``。列表中的映射同样会被处理。

    示例:
        >>> replace_dot_in_keys({"a.b": {"c.d": 1}})
        {'a_b': {'c_d': 1}}

    Args:
        value: 需要处理的值

    Returns:
        键名已转义的新值，原值不会被修改
    """
    if isinstance(value, Mapping):
        return {
            str(k).replace(FIELD_PATH_SEPARATOR, FIELD_PATH_REPLACEMENT): replace_dot_in_keys(v)
            for k, v in value.items()
        }
    if isinstance(value, list):
        return [replace_dot_in_keys(item) for item in value]
    return value


def flatten_exception_group(group: BaseExceptionGroup) -> list[BaseException]:
    """递归展开异常组，返回所有叶子异常."""
    leaves: list[BaseException] = []
    for exc in group.exceptions:
        if isinstance(exc, BaseExceptionGroup):
            leaves.extend(flatten_exception_group(exc))
        else:
            leaves.append(exc)
    return leaves
