"""elasticlog 核心模块.

包含日志事件模型、模板渲染和工具函数。
"""

from .constants import TRACE, DocumentFields, ExceptionFields
from .layouts import Layout, to_layout
from .models import ErrorInfo, LogEvent
from .utils import flatten_exception_group, normalize_value, replace_dot_in_keys

__all__ = [
    # 常量
    "TRACE",
    "DocumentFields",
    "ExceptionFields",
    # 模型
    "LogEvent",
    "ErrorInfo",
    # 模板
    "Layout",
    "to_layout",
    # 工具函数
    "normalize_value",
    "replace_dot_in_keys",
    "flatten_exception_group",
]
