"""Elasticsearch 传输客户端工具模块."""

import logging

from elasticsearch import ApiError, Elasticsearch

from ..bulk.models import BulkPayload
from ..core.constants import TRACE
from .models import TransportOutcome

logger = logging.getLogger(__name__)


class ElasticsearchTransport:
    """基于 elasticsearch-py 的 bulk 传输客户端.

    每次 send 只调用一次 ``Elasticsearch.bulk``。HTTP 层错误（ApiError）
    转换为失败结果并携带状态码；连接、超时等传输层异常直接抛出。
    bulk 响应中的逐条结果不做解析。

    Args:
        es_client: Elasticsearch 客户端实例
        owns_client: 为 True 时 close() 会关闭客户端
    """

    def __init__(self, es_client: Elasticsearch, owns_client: bool = False):
        if es_client is None:
            raise ValueError("es_client 不能为 None")
        self.es_client = es_client
        self.owns_client = owns_client

    def send(self, payload: BulkPayload) -> TransportOutcome:
        """发送 bulk 请求.

        Args:
            payload: 编码后的请求体。预序列化的文本行由客户端原样拼接，
                结构化数据由客户端为 ndjson 配置的序列化器处理。

        Returns:
            传输结果
        """
        logger.log(TRACE, f"发送 bulk 请求: {len(payload)} 行")
        try:
            response = self.es_client.bulk(operations=payload.operations)
        except ApiError as e:
            return TransportOutcome.failure(
                status_code=e.meta.status,
                error=e,
                response=e.body,
            )
        return TransportOutcome.ok(status_code=response.meta.status, response=response)

    def close(self) -> None:
        """关闭自身持有的客户端."""
        if self.owns_client:
            self.es_client.close()
