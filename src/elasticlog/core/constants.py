"""elasticlog 常量定义模块."""

import logging

# 比 DEBUG 更详细的诊断日志级别
TRACE = 5
logging.addLevelName(TRACE, "TRACE")


class DocumentFields:
    """文档固定字段名常量."""

    TIMESTAMP = "@timestamp"
    LEVEL = "level"
    MESSAGE = "message"
    EXCEPTION = "exception"


class ExceptionFields:
    """异常扁平化后的字段名常量."""

    MESSAGE = "message"
    TYPE = "type"
    STACK_TRACE = "stack_trace"
    DATA = "data"
    INNER_ERROR = "inner_error"
    INNER_ERRORS = "inner_errors"


# Bulk 动作类型
BULK_ACTION_INDEX = "index"

# 字段路径分隔符及其替换字符
FIELD_PATH_SEPARATOR = "."
FIELD_PATH_REPLACEMENT = "_"

# 默认配置
DEFAULT_URI = "http://localhost:9200"
DEFAULT_INDEX_TEMPLATE = "logstash-{timestamp:%Y.%m.%d}"
# Elasticsearch 8 起服务端拒绝带 _type 的 bulk 动作行，默认不输出；
# 旧版集群可显式配置为 "logevent"
DEFAULT_DOCUMENT_TYPE = None
DEFAULT_MESSAGE_TEMPLATE = "{message}"

# include_all_properties 时默认排除的调用方信息属性
DEFAULT_EXCLUDED_PROPERTIES = frozenset(
    {
        "func_name",
        "pathname",
        "line_number",
        "host_name",
        "thread_id",
    }
)
