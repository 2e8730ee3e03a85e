"""elasticlog 类型定义模块."""

from collections.abc import Callable, Mapping
from datetime import datetime
from typing import Any, Union

# 文档字段值类型（封闭集合）：字符串、数字、布尔、时间戳、空值、嵌套映射、列表
FieldValue = Union[
    str,
    int,
    float,
    bool,
    datetime,
    None,
    Mapping[str, "FieldValue"],
    list["FieldValue"],
]

# 文档类型：字段名到字段值的有序映射
# 固定字段和附加字段为 FieldValue，事件属性保留原始值
DocumentDict = dict[str, Any]

# 完成回调类型：None 表示成功，否则为失败原因
CompletionCallback = Callable[[BaseException | None], None]

# 模板类型：格式化字符串或渲染函数
# 格式: "logstash-{timestamp:%Y.%m.%d}" 或 lambda event: ...
TemplateSource = Union[str, Callable[[Any], str]]
