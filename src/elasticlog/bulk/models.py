"""批量写入数据模型定义模块."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Any

from ..core.constants import BULK_ACTION_INDEX
from ..documents.models import RawDocument
from ..typing import DocumentDict


@dataclass(frozen=True)
class IndexAction:
    """索引动作数据类.

    索引名在构造时统一转为小写，Elasticsearch 的索引名只允许小写。

    Attributes:
        index: 索引名称
        document_type: 文档类型名称，None 表示不输出 _type
    """

    index: str
    document_type: str | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "index", self.index.lower())

    def to_dict(self) -> dict[str, Any]:
        """转换为 bulk 请求中的动作描述."""
        metadata: dict[str, Any] = {"_index": self.index}
        if self.document_type is not None:
            metadata["_type"] = self.document_type
        return {BULK_ACTION_INDEX: metadata}


@dataclass(frozen=True)
class BulkItem:
    """批量请求项：一个动作加一个文档.

    Attributes:
        action: 索引动作
        document: 文档字段字典或已序列化的原始文档
    """

    action: IndexAction
    document: DocumentDict | RawDocument


@dataclass
class BulkRequest:
    """批量请求数据类，请求项顺序与输入事件顺序一一对应.

    Attributes:
        items: 请求项列表
    """

    items: list[BulkItem] = field(default_factory=list)

    def add(self, action: IndexAction, document: DocumentDict | RawDocument) -> None:
        """追加请求项."""
        self.items.append(BulkItem(action=action, document=document))

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self) -> Iterator[BulkItem]:
        return iter(self.items)


@dataclass(frozen=True)
class BulkPayload:
    """编码后的 bulk 请求体.

    Attributes:
        operations: 动作行与文档行交替排列的列表
        pre_serialized: True 表示每一行都已是 JSON 文本；
            False 表示行为结构化数据，由传输客户端的序列化器负责序列化
    """

    operations: list[Any]
    pre_serialized: bool = True

    def to_ndjson(self) -> str:
        """拼接为换行分隔的 JSON 文本.

        Raises:
            ValueError: 请求体未预先序列化时抛出
        """
        if not self.pre_serialized:
            raise ValueError("结构化请求体需要由传输客户端的序列化器处理")
        return "".join(f"{line}\n" for line in self.operations)

    def __len__(self) -> int:
        return len(self.operations)
