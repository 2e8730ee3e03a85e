"""模板渲染单元测试."""

from datetime import datetime

import pytest

from elasticlog.core.layouts import Layout, to_layout
from elasticlog.core.models import LogEvent


@pytest.fixture
def event() -> LogEvent:
    """创建测试事件."""
    return LogEvent(
        timestamp=datetime(2024, 1, 1, 12, 30, 0),
        level="Info",
        message="hello",
        properties={"service": "Orders", "message": "from-property"},
        logger_name="app.orders",
    )


class TestLayout:
    """Layout 渲染测试."""

    def test_render_timestamp_format(self, event) -> None:
        """测试时间戳 strftime 格式."""
        layout = Layout("logstash-{timestamp:%Y.%m.%d}")
        assert layout.render(event) == "logstash-2024.01.01"

    def test_render_fixed_fields(self, event) -> None:
        """测试固定占位符."""
        layout = Layout("{level}|{logger}|{message}")
        assert layout.render(event) == "Info|app.orders|hello"

    def test_render_property(self, event) -> None:
        """测试事件属性占位符."""
        assert Layout("{service}-logs").render(event) == "Orders-logs"

    def test_fixed_field_wins_over_property(self, event) -> None:
        """测试固定字段优先于同名属性."""
        assert Layout("{message}").render(event) == "hello"

    def test_missing_placeholder_renders_empty(self, event) -> None:
        """测试未知占位符渲染为空字符串."""
        assert Layout("{unknown}").render(event) == ""
        assert Layout("{unknown:%Y}").render(event) == ""
        assert Layout("x{unknown.attr}y").render(event) == "xy"

    def test_callable_source(self, event) -> None:
        """测试渲染函数."""
        layout = Layout(lambda e: f"{e.level.upper()}:{e.message}")
        assert layout.render(event) == "INFO:hello"

    def test_callable_returning_none(self, event) -> None:
        """测试渲染函数返回 None 时为空字符串."""
        assert Layout(lambda e: None).render(event) == ""

    def test_wrap_layout(self) -> None:
        """测试包装已有 Layout."""
        inner = Layout("{message}")
        assert Layout(inner).source == "{message}"

    def test_invalid_source(self) -> None:
        """测试非法模板类型."""
        with pytest.raises(TypeError):
            Layout(123)  # type: ignore[arg-type]


def test_to_layout_none() -> None:
    """测试 None 原样返回."""
    assert to_layout(None) is None
    assert isinstance(to_layout("{message}"), Layout)
