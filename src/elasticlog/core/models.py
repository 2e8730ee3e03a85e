"""日志事件数据模型定义模块.

提供管道的输入模型，包括：
- LogEvent: 宿主日志框架交给管道的单条日志事件
- ErrorInfo: 与宿主无关的通用异常链表示
"""

from __future__ import annotations

import traceback
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime
from types import MappingProxyType
from typing import Any

from ..typing import CompletionCallback
from .constants import ExceptionFields
from .utils import normalize_value


def _ignore_completion(error: BaseException | None) -> None:
    """默认完成回调，不做任何处理."""


def _type_name(exc: BaseException) -> str:
    """返回异常的完整类型名，内置异常只保留类名."""
    exc_type = type(exc)
    if exc_type.__module__ == "builtins":
        return exc_type.__qualname__
    return f"{exc_type.__module__}.{exc_type.__qualname__}"


def _exception_data(exc: BaseException) -> dict[str, Any]:
    """提取异常携带的附加数据.

    优先使用异常上的 ``data`` 映射属性，否则收集实例上的公开属性。
    """
    data = getattr(exc, "data", None)
    if isinstance(data, Mapping):
        return dict(data)
    try:
        attributes = vars(exc)
    except TypeError:
        return {}
    return {k: v for k, v in attributes.items() if not k.startswith("_")}


@dataclass(frozen=True)
class ErrorInfo:
    """通用异常链数据类.

    Attributes:
        message: 异常消息
        type_name: 异常类型名
        stack_trace: 堆栈文本（可选）
        inner: 内层异常（__cause__ 或 __context__）
        inner_errors: 异常组包含的子异常
        data: 附加数据
    """

    message: str
    type_name: str
    stack_trace: str | None = None
    inner: ErrorInfo | None = None
    inner_errors: tuple[ErrorInfo, ...] = ()
    data: Mapping[str, Any] = field(default_factory=dict)

    @classmethod
    def from_exception(
        cls, exc: BaseException, _seen: set[int] | None = None
    ) -> ErrorInfo:
        """从 Python 异常构建异常链表示.

        沿 ``__cause__`` / ``__context__`` 递归构建内层异常，异常组的子异常
        放入 ``inner_errors``。循环引用的异常链只展开一次。

        Args:
            exc: 异常实例

        Returns:
            ErrorInfo 实例
        """
        seen = _seen if _seen is not None else set()
        seen.add(id(exc))

        inner_exc = exc.__cause__
        if inner_exc is None and not exc.__suppress_context__:
            inner_exc = exc.__context__
        inner = None
        if inner_exc is not None and id(inner_exc) not in seen:
            inner = cls.from_exception(inner_exc, seen)

        inner_errors: tuple[ErrorInfo, ...] = ()
        if isinstance(exc, BaseExceptionGroup):
            inner_errors = tuple(
                cls.from_exception(sub, seen)
                for sub in exc.exceptions
                if id(sub) not in seen
            )

        stack_trace = None
        if exc.__traceback__ is not None:
            stack_trace = "".join(traceback.format_tb(exc.__traceback__))

        return cls(
            message=str(exc),
            type_name=_type_name(exc),
            stack_trace=stack_trace,
            inner=inner,
            inner_errors=inner_errors,
            data=_exception_data(exc),
        )

    def to_dict(self) -> dict[str, Any]:
        """递归转换为嵌套字典，空字段不输出."""
        result: dict[str, Any] = {
            ExceptionFields.MESSAGE: self.message,
            ExceptionFields.TYPE: self.type_name,
        }
        if self.stack_trace:
            result[ExceptionFields.STACK_TRACE] = self.stack_trace
        if self.data:
            result[ExceptionFields.DATA] = normalize_value(self.data)
        if self.inner is not None:
            result[ExceptionFields.INNER_ERROR] = self.inner.to_dict()
        if self.inner_errors:
            result[ExceptionFields.INNER_ERRORS] = [
                inner.to_dict() for inner in self.inner_errors
            ]
        return result


@dataclass(frozen=True)
class LogEvent:
    """日志事件数据类.

    事件只在一次批量提交期间存在，管道不会持久化任何内容。

    Attributes:
        timestamp: 事件时间
        level: 日志级别名称
        message: 已渲染的日志消息
        error: 事件携带的异常（可选）
        properties: 事件属性，保持插入顺序
        logger_name: 产生事件的记录器名称
        on_complete: 完成回调，每个事件必须且只能被调用一次
    """

    timestamp: datetime
    level: str
    message: str
    error: BaseException | ErrorInfo | None = None
    properties: Mapping[str, Any] = field(default_factory=dict)
    logger_name: str = ""
    on_complete: CompletionCallback = _ignore_completion

    def __post_init__(self) -> None:
        object.__setattr__(self, "properties", MappingProxyType(dict(self.properties)))

    @property
    def error_info(self) -> ErrorInfo | None:
        """返回事件异常的通用表示."""
        if self.error is None or isinstance(self.error, ErrorInfo):
            return self.error
        return ErrorInfo.from_exception(self.error)

    def complete(self, error: BaseException | None = None) -> None:
        """调用完成回调."""
        self.on_complete(error)
