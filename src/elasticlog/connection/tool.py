"""ES 客户端工厂工具模块.

提供 ESClientFactory 类，用于根据连接配置创建并管理 Elasticsearch 客户端，
以及从环境变量或 appsettings.json 解析连接字符串的解析器。

使用示例:
    from elasticlog.connection import ESClientFactory, ConnectionConfig

    with ESClientFactory(ConnectionConfig(hosts=["http://localhost:9200"])) as factory:
        client = factory.get_client()
"""

from __future__ import annotations

import json
import logging
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Protocol

from elasticsearch import Elasticsearch

from .exceptions import ConnectionConfigError
from .models import ConnectionConfig

logger = logging.getLogger(__name__)

NDJSON_MIMETYPE = "application/x-ndjson"


class ConnectionStringResolver(Protocol):
    """连接字符串解析器协议."""

    def resolve(self, name: str) -> str | None: ...


class EnvironmentConnectionStringResolver:
    """按名称解析连接字符串.

    依次查找：
    1. 同名环境变量
    2. 设置文件中 ``ConnectionStrings.<name>`` 的值

    Args:
        environ: 环境变量映射，默认 os.environ
        settings_path: 设置文件路径，默认当前目录下的 appsettings.json
    """

    def __init__(
        self,
        environ: Mapping[str, str] | None = None,
        settings_path: str | Path = "appsettings.json",
    ) -> None:
        self._environ = environ if environ is not None else os.environ
        self._settings_path = Path(settings_path)

    def resolve(self, name: str) -> str | None:
        """解析连接字符串，找不到时返回 None.

        Raises:
            ConnectionConfigError: 设置文件不是合法 JSON 时抛出
        """
        if not name:
            return None

        value = self._environ.get(name)
        if value:
            return value

        if not self._settings_path.is_file():
            return None
        try:
            settings = json.loads(self._settings_path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            raise ConnectionConfigError(
                f"设置文件 '{self._settings_path}' 解析失败: {str(e)}"
            ) from e

        connection_strings = settings.get("ConnectionStrings") or {}
        return connection_strings.get(name) or None


class ESClientFactory:
    """Elasticsearch 客户端工厂.

    根据连接配置创建客户端，处理 Basic Auth、代理检测、证书校验和
    自定义序列化器。客户端惰性创建并缓存，支持上下文管理器。

    Attributes:
        _config: 连接配置
        _client: 已缓存的客户端

    Examples:
        >>> factory = ESClientFactory(ConnectionConfig(hosts=["http://localhost:9200"]))
        >>> client = factory.get_client()
    """

    def __init__(self, config: ConnectionConfig) -> None:
        if config is None:
            raise ConnectionConfigError("config 不能为 None")
        self._config = config
        self._client: Elasticsearch | None = None

    def _create_client(self) -> Elasticsearch:
        """根据连接配置创建 Elasticsearch 客户端实例.

        - 禁用代理自动检测时使用 urllib3 节点（不读取代理环境变量），
          否则使用会读取 HTTP(S)_PROXY 的 requests 节点
        - 接受任意证书时关闭证书校验和相应警告（仅对 https 节点生效）
        - 自定义序列化器注册为 bulk 请求体的序列化器

        Returns:
            Elasticsearch 客户端实例
        """
        config = self._config
        kwargs: dict[str, Any] = {
            "hosts": config.hosts,
            "node_class": "urllib3" if config.disable_automatic_proxy_detection else "requests",
        }

        # Basic Auth 认证
        if config.require_auth:
            kwargs["basic_auth"] = (config.username, config.password or "")

        # SSL/TLS 配置
        if config.dangerous_accept_all_certificates and config.uses_tls:
            logger.warning("已关闭 ES 证书校验，请勿在生产环境使用")
            kwargs["verify_certs"] = False
            kwargs["ssl_show_warn"] = False

        if config.request_timeout is not None:
            kwargs["request_timeout"] = config.request_timeout

        if config.serializer is not None:
            kwargs["serializers"] = {NDJSON_MIMETYPE: config.serializer}

        return Elasticsearch(**kwargs)

    def get_client(self) -> Elasticsearch:
        """获取客户端，首次调用时创建."""
        if self._client is None:
            self._client = self._create_client()
            logger.info(f"创建 ES 客户端: hosts={self._config.hosts}")
        return self._client

    # ============================================================
    # 生命周期管理
    # ============================================================

    def __enter__(self) -> ESClientFactory:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """上下文管理器退出，自动关闭客户端."""
        self.close()

    def close(self) -> None:
        """关闭已创建的客户端并清空缓存."""
        if self._client is None:
            return
        try:
            self._client.close()
        except Exception as e:
            logger.warning(f"关闭 ES 客户端失败: {str(e)}")
        self._client = None
