"""日志目标单元测试."""

import json
from datetime import datetime
from unittest.mock import MagicMock, patch

import pytest
from elastic_transport import NdjsonSerializer

from elasticlog.core.models import LogEvent
from elasticlog.documents.exceptions import DocumentBuildError
from elasticlog.documents.models import ExtraField, FieldType
from elasticlog.target import (
    ElasticsearchSerializedTarget,
    ElasticsearchTarget,
    TargetConfig,
    TargetNotInitializedError,
)
from elasticlog.transport import TransportOutcome

FACTORY_PATCH_PATH = "elasticlog.target.tool.ESClientFactory"


@pytest.fixture
def transport() -> MagicMock:
    """创建模拟的传输客户端."""
    transport = MagicMock()
    transport.send.return_value = TransportOutcome.ok()
    return transport


@pytest.fixture
def resolver() -> MagicMock:
    """创建找不到任何连接字符串的解析器."""
    resolver = MagicMock()
    resolver.resolve.return_value = None
    return resolver


def make_event(message: str = "hello", **kwargs) -> LogEvent:
    """创建测试事件."""
    kwargs.setdefault("timestamp", datetime(2024, 1, 1, 12, 0))
    kwargs.setdefault("level", "Info")
    return LogEvent(message=message, **kwargs)


def sent_lines(transport: MagicMock) -> list[dict]:
    """解析发送的请求体."""
    payload = transport.send.call_args[0][0]
    return [json.loads(line) for line in payload.operations]


class TestElasticsearchTarget:
    """ElasticsearchTarget 测试."""

    def test_submit_before_initialize_raises(self, transport) -> None:
        """测试未初始化时提交抛出 TargetNotInitializedError."""
        target = ElasticsearchTarget(transport=transport)
        with pytest.raises(TargetNotInitializedError):
            target.submit_batch([make_event()])
        transport.send.assert_not_called()

    def test_initialize_idempotent(self, transport) -> None:
        """测试重复初始化无效果."""
        target = ElasticsearchTarget(transport=transport)
        target.initialize()
        dispatcher = target._dispatcher
        target.initialize()
        assert target.is_initialized
        assert target._dispatcher is dispatcher

    def test_write_is_batch_of_one(self, transport) -> None:
        """测试写入单条事件."""
        errors = []
        with ElasticsearchTarget(transport=transport) as target:
            target.write(make_event(on_complete=errors.append))

        assert errors == [None]
        assert len(sent_lines(transport)) == 2

    def test_default_action_has_no_type(self, transport) -> None:
        """测试默认配置的动作行不带 _type."""
        with ElasticsearchTarget(transport=transport) as target:
            target.write(make_event())

        action, _ = sent_lines(transport)
        assert action == {"index": {"_index": "logstash-2024.01.01"}}

    def test_legacy_document_type(self, transport) -> None:
        """测试显式配置文档类型时输出 _type."""
        with ElasticsearchTarget(TargetConfig(document_type="logevent"), transport=transport) as target:
            target.write(make_event())

        action, _ = sent_lines(transport)
        assert action["index"]["_type"] == "logevent"

    def test_config_flows_into_document(self, transport) -> None:
        """测试配置中的索引、附加字段和属性写入文档."""
        config = TargetConfig(
            index="App-{level}",
            document_type=None,
            layout="[{logger}] {message}",
            fields=[ExtraField("elapsed", "{elapsed}", FieldType.FLOAT)],
            include_all_properties=True,
            excluded_properties="password",
        )
        event = make_event(
            logger_name="orders",
            properties={"elapsed": "1.5", "user": "alice", "password": "secret"},
        )

        with ElasticsearchTarget(config, transport=transport) as target:
            target.submit_batch([event])

        action, document = sent_lines(transport)
        assert action == {"index": {"_index": "app-info"}}
        assert document["message"] == "[orders] hello"
        assert document["elapsed"] == 1.5
        assert document["user"] == "alice"
        assert "password" not in document

    def test_failure_reaches_every_event(self, transport) -> None:
        """测试传输失败时每条事件都收到异常."""
        transport.send.return_value = TransportOutcome.failure(status_code=500)
        errors = []

        with ElasticsearchTarget(transport=transport) as target:
            target.submit_batch(
                [make_event("a", on_complete=errors.append), make_event("b", on_complete=errors.append)]
            )

        assert len(errors) == 2
        assert errors[0] is errors[1] is not None

    def test_throw_exceptions_passthrough(self, transport) -> None:
        """测试 throw_exceptions 由配置决定."""
        target = ElasticsearchTarget(TargetConfig(throw_exceptions=True), transport=transport)
        assert target.throw_exceptions is True

    def test_close_requires_reinitialize(self, transport) -> None:
        """测试关闭后需要重新初始化."""
        target = ElasticsearchTarget(transport=transport)
        target.initialize()
        target.close()

        assert not target.is_initialized
        with pytest.raises(TargetNotInitializedError):
            target.write(make_event())


class TestTransportCreation:
    """未提供传输客户端时的创建流程测试."""

    @patch(FACTORY_PATCH_PATH)
    def test_uses_configured_uri(self, mock_factory, resolver) -> None:
        """测试未配置连接字符串时使用 uri."""
        target = ElasticsearchTarget(
            TargetConfig(uri="http://node1:9200,http://node2:9200"),
            connection_string_resolver=resolver,
        )
        target.initialize()

        connection = mock_factory.call_args[0][0]
        assert connection.hosts == ["http://node1:9200", "http://node2:9200"]
        resolver.resolve.assert_not_called()

    @patch(FACTORY_PATCH_PATH)
    def test_connection_string_wins(self, mock_factory, resolver) -> None:
        """测试解析到的连接字符串优先于 uri."""
        resolver.resolve.return_value = "https://resolved:9243"
        target = ElasticsearchTarget(
            TargetConfig(connection_string_name="ES_LOGS"),
            connection_string_resolver=resolver,
        )
        target.initialize()

        resolver.resolve.assert_called_once_with("ES_LOGS")
        assert mock_factory.call_args[0][0].hosts == ["https://resolved:9243"]

    @patch(FACTORY_PATCH_PATH)
    def test_missing_connection_string_falls_back(self, mock_factory, resolver) -> None:
        """测试连接字符串未找到时回退到 uri 并输出警告."""
        target = ElasticsearchTarget(
            TargetConfig(uri="http://fallback:9200", connection_string_name="ES_LOGS"),
            connection_string_resolver=resolver,
        )
        with patch("elasticlog.target.tool.logger") as mock_logger:
            target.initialize()

        assert mock_factory.call_args[0][0].hosts == ["http://fallback:9200"]
        mock_logger.warning.assert_called_once()

    @patch(FACTORY_PATCH_PATH)
    def test_client_passed_to_transport(self, mock_factory, resolver) -> None:
        """测试工厂创建的客户端用于发送."""
        client = mock_factory.return_value.get_client.return_value
        client.bulk.return_value = MagicMock(meta=MagicMock(status=200))

        with ElasticsearchTarget(connection_string_resolver=resolver) as target:
            target.write(make_event())

        client.bulk.assert_called_once()

    @patch(FACTORY_PATCH_PATH)
    def test_close_closes_factory(self, mock_factory, resolver) -> None:
        """测试关闭目标时关闭自身创建的客户端."""
        with ElasticsearchTarget(connection_string_resolver=resolver):
            pass
        mock_factory.return_value.close.assert_called_once()

    @patch(FACTORY_PATCH_PATH)
    def test_custom_serializer_keeps_structured_payload(self, mock_factory, resolver) -> None:
        """测试配置自定义序列化器时发送结构化请求体."""
        client = mock_factory.return_value.get_client.return_value
        serializer = NdjsonSerializer()

        with ElasticsearchTarget(
            TargetConfig(serializer=serializer), connection_string_resolver=resolver
        ) as target:
            target.write(make_event())

        assert mock_factory.call_args[0][0].serializer is serializer
        operations = client.bulk.call_args[1]["operations"]
        assert operations[0] == {"index": {"_index": "logstash-2024.01.01"}}
        assert operations[1]["message"] == "hello"


class TestElasticsearchSerializedTarget:
    """ElasticsearchSerializedTarget 测试."""

    def test_message_written_verbatim(self, transport) -> None:
        """测试事件消息原样作为文档行."""
        with ElasticsearchSerializedTarget(transport=transport) as target:
            target.write(make_event('{"order":1,"status":"paid"}'))

        payload = transport.send.call_args[0][0]
        assert payload.operations[1] == '{"order":1,"status":"paid"}'

    def test_multiline_message_fails_batch(self, transport) -> None:
        """测试多行消息导致整个批次失败且不发送请求."""
        errors = []
        with ElasticsearchSerializedTarget(transport=transport) as target:
            target.submit_batch(
                [
                    make_event('{"a":1}', on_complete=errors.append),
                    make_event('{"b":\n2}', on_complete=errors.append),
                ]
            )

        transport.send.assert_not_called()
        assert isinstance(errors[0], DocumentBuildError)
        assert errors[1] is errors[0]
