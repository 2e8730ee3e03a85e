"""传输客户端模块 - 执行 bulk 网络调用并返回成功/失败结果.

主要组件:
    - BulkTransport: 传输客户端协议
    - ElasticsearchTransport: 基于 elasticsearch-py 的实现
    - TransportOutcome: 调用结果
"""

from .models import BulkTransport, TransportOutcome
from .tool import ElasticsearchTransport

__all__ = [
    "BulkTransport",
    "ElasticsearchTransport",
    "TransportOutcome",
]
