"""文档构建数据模型定义模块.

提供文档构建相关的数据模型，包括：
- FieldType: 附加字段目标类型枚举
- ExtraField: 附加字段配置
- RawDocument: 已序列化的原始文档
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from ..core.layouts import Layout
from ..exceptions import ConfigurationError
from ..typing import FieldValue, TemplateSource


def _to_number(text: str) -> int | float:
    try:
        return int(text)
    except ValueError:
        return float(text)


def _to_bool(text: str) -> bool:
    lowered = text.lower()
    if lowered == "true":
        return True
    if lowered == "false":
        return False
    raise ValueError(f"无法识别的布尔值: {text!r}")


class FieldType(str, Enum):
    """附加字段目标类型枚举."""

    STRING = "string"
    INTEGER = "integer"
    FLOAT = "float"
    NUMBER = "number"  # 整数优先，否则为浮点数
    BOOLEAN = "boolean"
    TIMESTAMP = "timestamp"  # ISO-8601 格式

    def coerce(self, text: str) -> FieldValue:
        """将渲染结果转换为目标类型.

        Args:
            text: 模板渲染结果

        Returns:
            转换后的字段值

        Raises:
            ValueError: 文本无法转换为目标类型时抛出
        """
        if self is FieldType.STRING:
            return text
        return _COERCERS[self](text.strip())


_COERCERS: dict[FieldType, Callable[[str], FieldValue]] = {
    FieldType.INTEGER: int,
    FieldType.FLOAT: float,
    FieldType.NUMBER: _to_number,
    FieldType.BOOLEAN: _to_bool,
    FieldType.TIMESTAMP: datetime.fromisoformat,
}


@dataclass(frozen=True)
class ExtraField:
    """附加字段配置.

    Attributes:
        name: 文档中的字段名
        layout: 字段值模板
        field_type: 目标类型，默认 STRING

    Raises:
        ConfigurationError: 字段名为空时抛出

    Examples:
        >>> ExtraField("user_id", "{user_id}", FieldType.INTEGER)
    """

    name: str
    layout: Layout | TemplateSource
    field_type: FieldType = FieldType.STRING

    def __post_init__(self) -> None:
        """校验并规整字段配置."""
        if not self.name:
            raise ConfigurationError("附加字段名不能为空")
        object.__setattr__(self, "layout", Layout(self.layout))
        object.__setattr__(self, "field_type", FieldType(self.field_type))


@dataclass(frozen=True)
class RawDocument:
    """已序列化的原始文档，按原样写入 bulk 请求体.

    Attributes:
        text: 单行 JSON 文本
    """

    text: str
