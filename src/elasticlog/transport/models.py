"""传输客户端数据模型定义模块."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from ..bulk.models import BulkPayload


@dataclass(frozen=True)
class TransportOutcome:
    """一次 bulk 调用的结果.

    Attributes:
        success: 请求是否成功
        status_code: HTTP 状态码
        error: 传输客户端返回的原生异常
        response: 原始响应（可选）
    """

    success: bool
    status_code: int | None = None
    error: BaseException | None = None
    response: Any = None

    @classmethod
    def ok(cls, status_code: int | None = 200, response: Any = None) -> TransportOutcome:
        """创建成功结果."""
        return cls(success=True, status_code=status_code, response=response)

    @classmethod
    def failure(
        cls,
        status_code: int | None = None,
        error: BaseException | None = None,
        response: Any = None,
    ) -> TransportOutcome:
        """创建失败结果."""
        return cls(
            success=False, status_code=status_code, error=error, response=response
        )


@runtime_checkable
class BulkTransport(Protocol):
    """传输客户端协议.

    只要求一个阻塞的 send 调用：发送一次 bulk 请求并返回结果。
    网络层异常可以直接抛出，由调用方统一处理。
    """

    def send(self, payload: BulkPayload) -> TransportOutcome: ...
