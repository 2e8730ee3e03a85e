"""ES 客户端工厂模块 - 统一管理 Elasticsearch 客户端的创建和生命周期.

主要组件:
    - ESClientFactory: 客户端工厂
    - ConnectionConfig: 连接配置模型
    - EnvironmentConnectionStringResolver: 连接字符串解析器
    - parse_hosts: 逗号分隔节点地址解析

使用示例:
    from elasticlog.connection import ESClientFactory, ConnectionConfig, parse_hosts

    config = ConnectionConfig(hosts=parse_hosts("http://node1:9200,http://node2:9200"))
    client = ESClientFactory(config).get_client()
"""

from .exceptions import ConnectionConfigError
from .models import ConnectionConfig, parse_hosts
from .tool import (
    ConnectionStringResolver,
    EnvironmentConnectionStringResolver,
    ESClientFactory,
)

__all__ = [
    # 工厂
    "ESClientFactory",
    # 连接字符串
    "ConnectionStringResolver",
    "EnvironmentConnectionStringResolver",
    # 模型
    "ConnectionConfig",
    "parse_hosts",
    # 异常
    "ConnectionConfigError",
]
