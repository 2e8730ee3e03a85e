"""bulk 请求体编码模块."""

import json
import math
from collections.abc import Mapping
from datetime import date
from decimal import Decimal
from typing import Any

from ..documents.models import RawDocument
from .models import BulkPayload, BulkRequest


def _non_finite_text(value: float) -> str:
    """NaN 和正负无穷不是合法的 JSON 数值，按字符串输出."""
    if math.isnan(value):
        return "NaN"
    return "Infinity" if value > 0 else "-Infinity"


def _replace_non_finite(value: Any) -> Any:
    """递归替换映射和序列中的非有限浮点数."""
    if isinstance(value, float):
        return value if math.isfinite(value) else _non_finite_text(value)
    if isinstance(value, Mapping):
        return {k: _replace_non_finite(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_replace_non_finite(item) for item in value]
    return value


def _json_default(value: Any) -> Any:
    """json.dumps 无法直接处理的类型转换."""
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, Decimal):
        return _replace_non_finite(float(value))
    if isinstance(value, (set, frozenset)):
        return _replace_non_finite(list(value))
    return str(value)


def dumps_line(value: Any) -> str:
    """将单个值序列化为紧凑的单行 JSON 文本.

    非有限浮点数输出为 "NaN"、"Infinity"、"-Infinity" 字符串。
    """
    return json.dumps(
        _replace_non_finite(value),
        default=_json_default,
        ensure_ascii=False,
        separators=(",", ":"),
        allow_nan=False,
    )


class PayloadEncoder:
    """bulk 请求体编码器.

    每个请求项输出一个动作行，紧接一个文档行，保持请求项顺序::

        {"index":{"_index":"logstash-2024.01.01"}}
        {"@timestamp":"...","level":"Info","message":"..."}

    Args:
        pre_serialize: True 时每一行都编码为 JSON 文本；False 时保留结构化数据，
            交给传输客户端配置的自定义序列化器处理。原始文档始终按文本输出。
    """

    def __init__(self, pre_serialize: bool = True):
        self.pre_serialize = pre_serialize

    def encode(self, request: BulkRequest) -> BulkPayload:
        """编码批量请求."""
        operations: list[Any] = []
        for item in request:
            operations.append(self._encode_unit(item.action.to_dict()))
            operations.append(self._encode_unit(item.document))
        return BulkPayload(operations=operations, pre_serialized=self.pre_serialize)

    def _encode_unit(self, value: Any) -> Any:
        if isinstance(value, RawDocument):
            return value.text
        if self.pre_serialize:
            return dumps_line(value)
        return value
