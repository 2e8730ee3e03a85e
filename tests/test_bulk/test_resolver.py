"""索引解析器单元测试."""

from datetime import datetime

import pytest

from elasticlog.bulk.models import IndexAction
from elasticlog.bulk.resolver import IndexResolver
from elasticlog.core.models import LogEvent
from elasticlog.documents.exceptions import DocumentBuildError


@pytest.fixture
def event() -> LogEvent:
    """创建测试事件."""
    return LogEvent(
        timestamp=datetime(2024, 1, 1, 12, 0, 0),
        level="Info",
        message="hello",
        properties={"tenant": "ACME"},
    )


class TestIndexAction:
    """IndexAction 数据模型测试."""

    def test_index_lowercased(self) -> None:
        """测试索引名在构造时转为小写."""
        assert IndexAction("Logs-ACME").index == "logs-acme"

    def test_to_dict(self) -> None:
        """测试动作描述."""
        action = IndexAction("logs", "logevent")
        assert action.to_dict() == {"index": {"_index": "logs", "_type": "logevent"}}

    def test_to_dict_without_type(self) -> None:
        """测试无文档类型时不输出 _type."""
        assert IndexAction("logs").to_dict() == {"index": {"_index": "logs"}}


class TestIndexResolver:
    """IndexResolver 解析测试."""

    def test_default_templates(self, event) -> None:
        """测试默认模板不输出 _type."""
        action = IndexResolver().resolve(event)
        assert action == IndexAction("logstash-2024.01.01")
        assert action.to_dict() == {"index": {"_index": "logstash-2024.01.01"}}

    def test_legacy_document_type(self, event) -> None:
        """测试旧版集群显式配置文档类型."""
        action = IndexResolver(document_type="logevent").resolve(event)
        assert action == IndexAction("logstash-2024.01.01", "logevent")

    def test_index_always_lowercase(self, event) -> None:
        """测试模板渲染出大写时索引名仍为小写."""
        resolver = IndexResolver(index="Logs-{tenant}-{level}")
        assert resolver.resolve(event).index == "logs-acme-info"

    def test_document_type_kept_as_rendered(self, event) -> None:
        """测试文档类型保持渲染结果."""
        resolver = IndexResolver(document_type="LogEvent-{tenant}")
        assert resolver.resolve(event).document_type == "LogEvent-ACME"

    def test_document_type_none(self, event) -> None:
        """测试不配置文档类型."""
        resolver = IndexResolver(document_type=None)
        assert resolver.resolve(event).document_type is None

    def test_document_type_blank_render(self, event) -> None:
        """测试文档类型渲染为空时视为未配置."""
        resolver = IndexResolver(document_type="{missing}")
        assert resolver.resolve(event).document_type is None

    def test_blank_index_raises(self, event) -> None:
        """测试索引名渲染为空时抛出异常."""
        resolver = IndexResolver(index="{missing}")
        with pytest.raises(DocumentBuildError):
            resolver.resolve(event)

    def test_whitespace_index_raises(self, event) -> None:
        """测试索引名渲染结果只有空白时抛出异常."""
        with pytest.raises(DocumentBuildError):
            IndexResolver(index="  ").resolve(event)

    def test_index_only_lowercased(self, event) -> None:
        """测试索引名只做小写转换，不去除空白."""
        assert IndexResolver(index=" Logs").resolve(event).index == " logs"

    def test_callable_template(self, event) -> None:
        """测试渲染函数模板."""
        resolver = IndexResolver(index=lambda e: f"APP-{e.level}")
        assert resolver.resolve(event).index == "app-info"
