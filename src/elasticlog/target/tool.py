"""Elasticsearch 日志目标工具类.

日志目标是宿主日志框架与批量分发管道之间的接口：宿主先调用一次
initialize()，之后反复调用 submit_batch()。事件排队、线程和批次大小
都由宿主决定。

使用示例:
    from elasticlog.target import ElasticsearchTarget, TargetConfig

    with ElasticsearchTarget(TargetConfig(uri="http://localhost:9200")) as target:
        target.submit_batch(events)
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from ..bulk.encoder import PayloadEncoder
from ..bulk.resolver import IndexResolver
from ..bulk.tool import BatchDispatcher
from ..connection.tool import (
    ConnectionStringResolver,
    EnvironmentConnectionStringResolver,
    ESClientFactory,
)
from ..core.models import LogEvent
from ..documents.tool import DocumentBuilder, SerializedDocumentBuilder
from ..transport.models import BulkTransport
from ..transport.tool import ElasticsearchTransport
from .exceptions import TargetNotInitializedError
from .models import TargetConfig

logger = logging.getLogger(__name__)


class ElasticsearchTarget:
    """Elasticsearch 日志目标.

    为每条事件组装文档字段（固定字段、异常信息、附加字段、事件属性），
    通过 bulk 接口批量写入。

    Args:
        config: 目标配置，默认使用 TargetConfig 的默认值
        transport: 自定义传输客户端；提供时不会创建 Elasticsearch 客户端
        connection_string_resolver: 连接字符串解析器，默认从环境变量和
            appsettings.json 中解析
    """

    name = "ElasticSearch"

    def __init__(
        self,
        config: TargetConfig | None = None,
        transport: BulkTransport | None = None,
        connection_string_resolver: ConnectionStringResolver | None = None,
    ) -> None:
        self.config = config or TargetConfig()
        self._transport = transport
        self._resolver = connection_string_resolver or EnvironmentConnectionStringResolver()
        self._client_factory: ESClientFactory | None = None
        self._dispatcher: BatchDispatcher | None = None

    @property
    def is_initialized(self) -> bool:
        return self._dispatcher is not None

    @property
    def throw_exceptions(self) -> bool:
        """宿主的失败处理策略是否需要重新抛出异常."""
        return self.config.throw_exceptions

    def initialize(self) -> None:
        """初始化传输客户端和分发管道，重复调用无效果."""
        if self._dispatcher is not None:
            return

        transport = self._transport
        if transport is None:
            transport = self._create_transport()

        self._dispatcher = BatchDispatcher(
            transport=transport,
            index_resolver=IndexResolver(self.config.index, self.config.document_type),
            document_builder=self._create_document_builder(),
            encoder=PayloadEncoder(pre_serialize=self.config.serializer is None),
        )
        logger.info(
            f"初始化日志目标 {self.name}: index={self.config.index!r}, "
            f"document_type={self.config.document_type!r}"
        )

    def _resolve_uri(self) -> str:
        """解析节点地址，连接字符串解析成功时优先使用."""
        name = self.config.connection_string_name
        if name:
            uri = self._resolver.resolve(name)
            if uri:
                return uri
            logger.warning(f"连接字符串 '{name}' 未找到，使用 uri 配置")
        return self.config.uri

    def _create_transport(self) -> ElasticsearchTransport:
        connection = self.config.connection_config(self._resolve_uri())
        self._client_factory = ESClientFactory(connection)
        return ElasticsearchTransport(self._client_factory.get_client())

    def _create_document_builder(self) -> DocumentBuilder | SerializedDocumentBuilder:
        return DocumentBuilder(
            layout=self.config.layout,
            fields=self.config.fields,
            include_all_properties=self.config.include_all_properties,
            excluded_properties=self.config.excluded_properties,
        )

    def submit_batch(self, events: Sequence[LogEvent]) -> None:
        """提交一批事件，返回前每条事件的完成回调都已被调用.

        Raises:
            TargetNotInitializedError: 未调用 initialize() 时抛出
            ValueError: events 为空时抛出
        """
        if self._dispatcher is None:
            raise TargetNotInitializedError(f"日志目标 {self.name} 尚未初始化")
        self._dispatcher.submit_batch(events)

    def write(self, event: LogEvent) -> None:
        """写入单条事件（即只有一条事件的批次）."""
        self.submit_batch([event])

    def close(self) -> None:
        """关闭自身创建的客户端，之后需要重新初始化."""
        if self._client_factory is not None:
            self._client_factory.close()
            self._client_factory = None
        self._dispatcher = None

    def __enter__(self) -> ElasticsearchTarget:
        self.initialize()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()


class ElasticsearchSerializedTarget(ElasticsearchTarget):
    """已序列化事件的 Elasticsearch 日志目标.

    事件消息（经 layout 渲染后）本身就是单行 JSON 文档，原样写入 bulk 请求体，
    不做字段组装；附加字段和事件属性配置不生效。
    """

    name = "ElasticSearchSerialized"

    def _create_document_builder(self) -> SerializedDocumentBuilder:
        return SerializedDocumentBuilder(layout=self.config.layout)
