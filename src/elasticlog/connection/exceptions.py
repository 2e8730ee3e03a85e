"""ES 客户端工厂异常定义模块."""

from ..exceptions import ConfigurationError


class ConnectionConfigError(ConfigurationError):
    """连接配置校验异常.

    当连接配置参数不合法时抛出，例如节点地址为空、地址格式错误、
    开启认证却未提供用户名等。
    """

    pass
