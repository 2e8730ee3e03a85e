"""ES 客户端连接数据模型定义模块.

提供客户端连接相关的数据模型和地址解析函数，包括：
- ConnectionConfig: 连接配置
- parse_hosts: 解析逗号分隔的节点地址
"""

from dataclasses import dataclass, field
from urllib.parse import urlparse

from elastic_transport import Serializer

from .exceptions import ConnectionConfigError


def parse_hosts(uri: str | None) -> list[str]:
    """解析逗号分隔的节点地址，忽略空项.

    Examples:
        >>> parse_hosts("http://node1:9200, http://node2:9200,")
        ['http://node1:9200', 'http://node2:9200']
    """
    if not uri:
        return []
    return [host.strip() for host in uri.split(",") if host.strip()]


@dataclass
class ConnectionConfig:
    """连接配置模型.

    Attributes:
        hosts: ES 节点地址列表（必需，不可为空）
        require_auth: 是否启用 Basic Auth
        username: Basic Auth 用户名
        password: Basic Auth 密码
        disable_automatic_proxy_detection: 是否禁用代理自动检测
        dangerous_accept_all_certificates: 是否接受任意服务端证书。
            危险选项，仅用于测试环境，切勿在生产环境开启
        serializer: bulk 请求体（application/x-ndjson）的自定义序列化器
        request_timeout: 请求超时时间（秒），None 表示使用客户端默认值

    Raises:
        ConnectionConfigError: 当参数不合法时抛出

    Examples:
        >>> config = ConnectionConfig(
        ...     hosts=["https://localhost:9200"],
        ...     require_auth=True,
        ...     username="elastic",
        ...     password="changeme",
        ... )
    """

    hosts: list[str] = field(default_factory=list)
    require_auth: bool = False
    username: str | None = None
    password: str | None = None
    disable_automatic_proxy_detection: bool = False
    dangerous_accept_all_certificates: bool = False
    serializer: Serializer | None = None
    request_timeout: float | None = None

    def __post_init__(self) -> None:
        """校验连接配置参数合法性."""
        if not self.hosts:
            raise ConnectionConfigError("hosts 不能为空，请提供至少一个 ES 节点地址")
        for host in self.hosts:
            parsed = urlparse(host)
            if parsed.scheme not in ("http", "https") or not parsed.netloc:
                raise ConnectionConfigError(f"无效的 ES 节点地址: {host!r}")
        if self.require_auth and not self.username:
            raise ConnectionConfigError("require_auth 开启时必须提供 username")
        if self.request_timeout is not None and self.request_timeout < 0:
            raise ConnectionConfigError(
                f"request_timeout 必须 >= 0，当前值: {self.request_timeout}"
            )

    @property
    def uses_tls(self) -> bool:
        """是否存在 https 节点."""
        return any(urlparse(host).scheme == "https" for host in self.hosts)
