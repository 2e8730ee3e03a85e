"""文档构建模块 - 将日志事件组装为 Elasticsearch 文档.

主要组件:
    - DocumentBuilder: 组装固定字段、异常信息、附加字段和事件属性
    - SerializedDocumentBuilder: 直接使用已序列化的事件消息作为文档
    - ExtraField / FieldType: 附加字段配置

使用示例:
    from elasticlog.documents import DocumentBuilder, ExtraField, FieldType

    builder = DocumentBuilder(
        fields=[ExtraField("user_id", "{user_id}", FieldType.INTEGER)],
        include_all_properties=True,
    )
    document = builder.build(event)
"""

from .exceptions import DocumentBuildError, FieldCoercionError
from .models import ExtraField, FieldType, RawDocument
from .tool import DocumentBuilder, SerializedDocumentBuilder

__all__ = [
    # 构建器
    "DocumentBuilder",
    "SerializedDocumentBuilder",
    # 模型
    "ExtraField",
    "FieldType",
    "RawDocument",
    # 异常
    "DocumentBuildError",
    "FieldCoercionError",
]
