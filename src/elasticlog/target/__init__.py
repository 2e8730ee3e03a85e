"""日志目标模块 - 宿主日志框架与批量分发管道之间的接口.

主要组件:
    - ElasticsearchTarget: 组装文档字段后批量写入
    - ElasticsearchSerializedTarget: 直接写入已序列化的事件消息
    - TargetConfig: 目标配置
    - ElasticsearchHandler / BufferingElasticsearchHandler: 标准库 logging 集成
"""

from .exceptions import TargetNotInitializedError
from .handlers import BufferingElasticsearchHandler, ElasticsearchHandler, record_to_event
from .models import TargetConfig
from .tool import ElasticsearchSerializedTarget, ElasticsearchTarget

__all__ = [
    # 目标
    "ElasticsearchTarget",
    "ElasticsearchSerializedTarget",
    # 配置
    "TargetConfig",
    # logging 集成
    "ElasticsearchHandler",
    "BufferingElasticsearchHandler",
    "record_to_event",
    # 异常
    "TargetNotInitializedError",
]
