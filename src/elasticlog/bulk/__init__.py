"""批量写入模块.

该模块实现日志事件到 Elasticsearch bulk 接口的完整管道，包括：
- 索引解析（索引名统一小写）
- bulk 请求体编码（动作行与文档行交替）
- 批量分发与结果回调（整批成功或整批失败）

示例用法:
    >>> from elasticlog.bulk import BatchDispatcher
    >>> from elasticlog.transport import ElasticsearchTransport
    >>> dispatcher = BatchDispatcher(ElasticsearchTransport(es_client))
    >>> dispatcher.submit_batch(events)
"""

from .models import (
    BulkItem,
    BulkPayload,
    BulkRequest,
    IndexAction,
)
from .encoder import PayloadEncoder
from .resolver import IndexResolver
from .tool import BatchDispatcher
from .exceptions import (
    BulkShippingError,
    TransportCallError,
    TransportFailureError,
)

__all__ = [
    "BulkItem",
    "BulkPayload",
    "BulkRequest",
    "IndexAction",
    "PayloadEncoder",
    "IndexResolver",
    "BatchDispatcher",
    "BulkShippingError",
    "TransportCallError",
    "TransportFailureError",
]
