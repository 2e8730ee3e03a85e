"""文档构建核心工具类."""

import logging
from collections.abc import Iterable

from ..core.constants import (
    DEFAULT_EXCLUDED_PROPERTIES,
    DEFAULT_MESSAGE_TEMPLATE,
    DocumentFields,
)
from ..core.layouts import Layout
from ..core.models import LogEvent
from ..core.utils import replace_dot_in_keys
from ..typing import DocumentDict, TemplateSource
from .exceptions import DocumentBuildError, FieldCoercionError
from .models import ExtraField, RawDocument

logger = logging.getLogger(__name__)


class DocumentBuilder:
    """文档构建器.

    为单条日志事件组装文档字段，按以下顺序写入，先写入的键不会被覆盖：

    1. 固定字段：@timestamp、level、message
    2. 异常信息：扁平化后写入 exception 字段，键中的 ``.`` 替换为 ``_``
    3. 附加字段：模板渲染为空白时跳过，否则转换为配置的类型
    4. 事件属性：仅在 include_all_properties 开启时写入，跳过排除列表中的键；
       属性值原样写入，交给请求体编码器或自定义序列化器处理

    Args:
        layout: 消息字段模板，默认只输出事件消息
        fields: 附加字段配置列表
        include_all_properties: 是否写入事件的全部属性
        excluded_properties: 写入全部属性时需要排除的属性名
    """

    def __init__(
        self,
        layout: Layout | TemplateSource = DEFAULT_MESSAGE_TEMPLATE,
        fields: Iterable[ExtraField] = (),
        include_all_properties: bool = False,
        excluded_properties: Iterable[str] = DEFAULT_EXCLUDED_PROPERTIES,
    ):
        self.layout = Layout(layout)
        self.fields = tuple(fields)
        self.include_all_properties = include_all_properties
        self.excluded_properties = frozenset(excluded_properties)

    def build(self, event: LogEvent) -> DocumentDict:
        """构建单条事件的文档.

        Args:
            event: 日志事件

        Returns:
            字段名到字段值的有序字典

        Raises:
            FieldCoercionError: 附加字段值无法转换为目标类型时抛出
        """
        document: DocumentDict = {
            DocumentFields.TIMESTAMP: event.timestamp,
            DocumentFields.LEVEL: event.level,
            DocumentFields.MESSAGE: self.layout.render(event),
        }

        error_info = event.error_info
        if error_info is not None:
            document[DocumentFields.EXCEPTION] = replace_dot_in_keys(
                error_info.to_dict()
            )

        for extra_field in self.fields:
            self._add_extra_field(document, extra_field, event)

        if self.include_all_properties:
            for key, value in event.properties.items():
                key = str(key)
                if key in self.excluded_properties or key in document:
                    continue
                document[key] = value

        return document

    def _add_extra_field(
        self,
        document: DocumentDict,
        extra_field: ExtraField,
        event: LogEvent,
    ) -> None:
        """渲染附加字段并写入文档."""
        if extra_field.name in document:
            logger.debug(f"附加字段 '{extra_field.name}' 与已有字段同名，跳过")
            return

        rendered = extra_field.layout.render(event)
        if not rendered.strip():
            return

        try:
            document[extra_field.name] = extra_field.field_type.coerce(rendered)
        except (TypeError, ValueError) as e:
            raise FieldCoercionError(
                f"附加字段 '{extra_field.name}' 的值 {rendered!r} "
                f"无法转换为 {extra_field.field_type.value}: {str(e)}",
                field_name=extra_field.name,
            ) from e


class SerializedDocumentBuilder:
    """原始文档构建器.

    事件消息本身就是一条 JSON 文档，直接作为 bulk 请求体中的文档行，
    不做任何字段组装。

    Args:
        layout: 文档模板，默认直接使用事件消息
    """

    def __init__(self, layout: Layout | TemplateSource = DEFAULT_MESSAGE_TEMPLATE):
        self.layout = Layout(layout)

    def build(self, event: LogEvent) -> RawDocument:
        """构建单条事件的原始文档.

        Raises:
            DocumentBuildError: 消息为空或包含换行符时抛出
        """
        text = self.layout.render(event).strip()
        if not text:
            raise DocumentBuildError("序列化文档不能为空")
        if "\n" in text or "\r" in text:
            raise DocumentBuildError("序列化文档必须是单行 JSON，不能包含换行符")
        return RawDocument(text)
