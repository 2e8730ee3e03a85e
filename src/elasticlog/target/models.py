"""日志目标配置模型定义模块."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from elastic_transport import Serializer

from ..connection.models import ConnectionConfig, parse_hosts
from ..core.constants import (
    DEFAULT_DOCUMENT_TYPE,
    DEFAULT_EXCLUDED_PROPERTIES,
    DEFAULT_INDEX_TEMPLATE,
    DEFAULT_MESSAGE_TEMPLATE,
    DEFAULT_URI,
)
from ..documents.models import ExtraField
from ..exceptions import ConfigurationError
from ..typing import TemplateSource


def _parse_excluded(value: str | Iterable[str] | None) -> frozenset[str]:
    """解析排除属性，字符串按逗号分隔；None 使用默认排除列表."""
    if value is None:
        return DEFAULT_EXCLUDED_PROPERTIES
    if isinstance(value, str):
        value = value.split(",")
    return frozenset(name.strip() for name in value if name.strip())


@dataclass(frozen=True)
class TargetConfig:
    """日志目标配置模型.

    配置在初始化时读取，之后不可修改。

    Attributes:
        uri: ES 节点地址，多个地址以逗号分隔
        connection_string_name: 连接字符串名称，解析成功时优先于 uri
        require_auth: 是否启用 Basic Auth
        username: Basic Auth 用户名
        password: Basic Auth 密码
        disable_automatic_proxy_detection: 是否禁用代理自动检测
        dangerous_accept_all_certificates: 是否接受任意服务端证书。
            危险选项，仅用于测试环境，切勿在生产环境开启
        index: 索引名模板
        document_type: 文档类型模板，默认 None 不输出 _type。Elasticsearch 8 起
            服务端拒绝带 _type 的动作行，只有旧版集群才应配置（如 "logevent"）
        layout: 消息字段模板
        include_all_properties: 是否写入事件的全部属性
        excluded_properties: 写入全部属性时排除的属性名，逗号分隔字符串或列表；
            提供时替换默认排除列表
        fields: 附加字段配置
        serializer: bulk 请求体的自定义序列化器
        throw_exceptions: 发送失败时宿主是否重新抛出异常（由宿主的失败处理策略读取，
            不影响批次内所有事件收到同一异常的回调行为）
        request_timeout: 请求超时时间（秒）

    Raises:
        ConfigurationError: 当参数不合法时抛出

    Examples:
        >>> config = TargetConfig(
        ...     uri="http://node1:9200,http://node2:9200",
        ...     index="app-{timestamp:%Y.%m.%d}",
        ...     include_all_properties=True,
        ...     excluded_properties="password,token",
        ... )
    """

    uri: str = DEFAULT_URI
    connection_string_name: str | None = None
    require_auth: bool = False
    username: str | None = None
    password: str | None = None
    disable_automatic_proxy_detection: bool = False
    dangerous_accept_all_certificates: bool = False
    index: TemplateSource = DEFAULT_INDEX_TEMPLATE
    document_type: TemplateSource | None = DEFAULT_DOCUMENT_TYPE
    layout: TemplateSource = DEFAULT_MESSAGE_TEMPLATE
    include_all_properties: bool = False
    excluded_properties: str | Iterable[str] | None = None
    fields: Sequence[ExtraField] = ()
    serializer: Serializer | None = None
    throw_exceptions: bool = False
    request_timeout: float | None = None

    def __post_init__(self) -> None:
        """校验并规整配置."""
        if self.require_auth and not self.username:
            raise ConfigurationError("require_auth 开启时必须提供 username")
        fields = tuple(self.fields)
        names = [f.name for f in fields]
        if len(names) != len(set(names)):
            raise ConfigurationError(f"附加字段名不能重复: {names}")
        object.__setattr__(self, "fields", fields)
        object.__setattr__(
            self, "excluded_properties", _parse_excluded(self.excluded_properties)
        )

    def connection_config(self, uri: str | None = None) -> ConnectionConfig:
        """生成连接配置.

        Args:
            uri: 已解析的节点地址，默认使用配置中的 uri
        """
        return ConnectionConfig(
            hosts=parse_hosts(uri if uri is not None else self.uri),
            require_auth=self.require_auth,
            username=self.username,
            password=self.password,
            disable_automatic_proxy_detection=self.disable_automatic_proxy_detection,
            dangerous_accept_all_certificates=self.dangerous_accept_all_certificates,
            serializer=self.serializer,
            request_timeout=self.request_timeout,
        )
