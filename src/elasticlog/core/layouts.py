"""日志事件模板渲染模块.

模板可以是 ``str.format`` 风格的格式化字符串，也可以是接收 LogEvent 返回
字符串的函数。格式化字符串中可使用的占位符：

    - timestamp: 事件时间（datetime，支持 strftime 格式，如 ``{timestamp:%Y.%m.%d}``）
    - level: 日志级别名称
    - message: 日志消息
    - logger: 记录器名称
    - 事件的任意属性名

未知占位符渲染为空字符串。
"""

from __future__ import annotations

from typing import Any

from ..typing import TemplateSource
from .models import LogEvent


class _Blank:
    """缺失占位符的渲染结果，任何格式说明都输出空字符串."""

    def __format__(self, format_spec: str) -> str:
        return ""

    def __str__(self) -> str:
        return ""

    def __getattr__(self, name: str) -> _Blank:
        return self

    def __getitem__(self, key: Any) -> _Blank:
        return self


_BLANK = _Blank()


class _RenderContext(dict):
    """渲染上下文，缺失的键返回空占位对象."""

    def __missing__(self, key: str) -> _Blank:
        return _BLANK


def build_context(event: LogEvent) -> dict[str, Any]:
    """构建模板渲染上下文，固定字段优先于同名属性."""
    context = _RenderContext(event.properties)
    context.update(
        timestamp=event.timestamp,
        level=event.level,
        message=event.message,
        logger=event.logger_name,
    )
    return context


class Layout:
    """日志事件模板.

    Args:
        source: 格式化字符串、渲染函数或另一个 Layout

    Examples:
        >>> layout = Layout("logstash-{timestamp:%Y.%m.%d}")
        >>> layout.render(event)
        'logstash-2024.01.01'
    """

    def __init__(self, source: TemplateSource | Layout) -> None:
        if isinstance(source, Layout):
            source = source.source
        if not isinstance(source, str) and not callable(source):
            raise TypeError(f"模板必须是字符串或可调用对象，当前类型: {type(source).__name__}")
        self.source = source

    def render(self, event: LogEvent) -> str:
        """根据事件渲染模板."""
        if callable(self.source):
            rendered = self.source(event)
            return "" if rendered is None else str(rendered)
        return self.source.format_map(build_context(event))

    def __repr__(self) -> str:
        return f"Layout({self.source!r})"


def to_layout(source: TemplateSource | Layout | None) -> Layout | None:
    """将模板来源转换为 Layout，None 原样返回."""
    if source is None:
        return None
    return Layout(source)
