"""索引解析模块."""

from ..core.constants import DEFAULT_DOCUMENT_TYPE, DEFAULT_INDEX_TEMPLATE
from ..core.layouts import Layout, to_layout
from ..core.models import LogEvent
from ..documents.exceptions import DocumentBuildError
from ..typing import TemplateSource
from .models import IndexAction


class IndexResolver:
    """索引解析器.

    根据模板为每条事件渲染索引名和文档类型。索引名只做小写转换，
    文档类型保持渲染结果不变；两者都不去除首尾空白。

    Args:
        index: 索引名模板，默认按天滚动的 logstash 索引
        document_type: 文档类型模板，默认 None 不输出 _type
            （Elasticsearch 8 起不再支持映射类型），旧版集群可配置为 "logevent"
    """

    def __init__(
        self,
        index: Layout | TemplateSource = DEFAULT_INDEX_TEMPLATE,
        document_type: Layout | TemplateSource | None = DEFAULT_DOCUMENT_TYPE,
    ):
        self.index_layout = Layout(index)
        self.document_type_layout = to_layout(document_type)

    def resolve(self, event: LogEvent) -> IndexAction:
        """解析事件的索引动作.

        Raises:
            DocumentBuildError: 索引名渲染结果为空时抛出
        """
        index = self.index_layout.render(event)
        if not index.strip():
            raise DocumentBuildError(f"索引名模板 {self.index_layout.source!r} 渲染结果为空")

        document_type = None
        if self.document_type_layout is not None:
            rendered = self.document_type_layout.render(event)
            document_type = rendered if rendered.strip() else None

        return IndexAction(index=index, document_type=document_type)
