"""elasticlog - Ship structured log events to Elasticsearch through the bulk API.

这是一个把结构化日志事件批量写入 Elasticsearch 的 Python 库。

主要功能:
    - ElasticsearchTarget: 日志目标，initialize() 后反复调用 submit_batch()
    - BatchDispatcher: 索引解析、文档构建、编码、发送、结果回调的完整管道
    - DocumentBuilder: 组装固定字段、异常信息、附加字段和事件属性
    - ElasticsearchHandler: 标准库 logging 集成

使用示例:
    from elasticlog import ElasticsearchTarget, LogEvent, TargetConfig

    target = ElasticsearchTarget(TargetConfig(uri="http://localhost:9200"))
    target.initialize()
    target.submit_batch([LogEvent(timestamp=now, level="Info", message="hello")])
"""

__version__ = "0.1.0"

# 导出批量管道
from elasticlog.bulk import (
    BatchDispatcher,
    BulkPayload,
    BulkRequest,
    IndexAction,
    IndexResolver,
    PayloadEncoder,
)

# 导出核心组件
from elasticlog.core import TRACE, ErrorInfo, Layout, LogEvent

# 导出文档构建
from elasticlog.documents import (
    DocumentBuilder,
    ExtraField,
    FieldType,
    RawDocument,
    SerializedDocumentBuilder,
)

# 导出异常
from elasticlog.bulk.exceptions import (
    BulkShippingError,
    TransportCallError,
    TransportFailureError,
)
from elasticlog.connection.exceptions import ConnectionConfigError
from elasticlog.documents.exceptions import DocumentBuildError, FieldCoercionError
from elasticlog.exceptions import ConfigurationError, ElasticLogError
from elasticlog.target.exceptions import TargetNotInitializedError

# 导出日志目标
from elasticlog.target import (
    BufferingElasticsearchHandler,
    ElasticsearchHandler,
    ElasticsearchSerializedTarget,
    ElasticsearchTarget,
    TargetConfig,
)

# 导出传输客户端
from elasticlog.transport import BulkTransport, ElasticsearchTransport, TransportOutcome

__all__ = [
    # 版本
    "__version__",
    # 核心组件
    "TRACE",
    "LogEvent",
    "ErrorInfo",
    "Layout",
    # 批量管道
    "BatchDispatcher",
    "IndexResolver",
    "PayloadEncoder",
    "IndexAction",
    "BulkRequest",
    "BulkPayload",
    # 文档构建
    "DocumentBuilder",
    "SerializedDocumentBuilder",
    "ExtraField",
    "FieldType",
    "RawDocument",
    # 传输客户端
    "BulkTransport",
    "ElasticsearchTransport",
    "TransportOutcome",
    # 日志目标
    "ElasticsearchTarget",
    "ElasticsearchSerializedTarget",
    "TargetConfig",
    "ElasticsearchHandler",
    "BufferingElasticsearchHandler",
    # 异常
    "ElasticLogError",
    "ConfigurationError",
    "ConnectionConfigError",
    "TargetNotInitializedError",
    "DocumentBuildError",
    "FieldCoercionError",
    "BulkShippingError",
    "TransportFailureError",
    "TransportCallError",
]
