"""日志目标异常定义模块."""

from ..exceptions import ConfigurationError


class TargetNotInitializedError(ConfigurationError):
    """日志目标未初始化异常.

    在调用 initialize() 之前提交事件时抛出。
    """

    pass
