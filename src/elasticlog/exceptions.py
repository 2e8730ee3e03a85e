"""elasticlog 异常定义模块."""


class ElasticLogError(Exception):
    """elasticlog 基础异常类."""

    pass


class ConfigurationError(ElasticLogError):
    """配置异常.

    当目标配置参数不合法或组件在初始化前被使用时抛出。
    """

    pass
