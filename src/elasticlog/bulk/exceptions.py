"""批量发送异常定义模块."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ..core.utils import flatten_exception_group
from ..exceptions import ElasticLogError

if TYPE_CHECKING:
    from ..transport.models import TransportOutcome

NO_ERROR_MESSAGE = "No error message. Enable Trace logging for more information."


class BulkShippingError(ElasticLogError):
    """批量发送基础异常类."""

    pass


class TransportFailureError(BulkShippingError):
    """传输客户端报告请求未成功.

    Attributes:
        status_code: HTTP 状态码（可能为 None）
        outcome: 传输结果
    """

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        outcome: TransportOutcome | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.outcome = outcome

    @classmethod
    def from_outcome(cls, outcome: TransportOutcome) -> TransportFailureError:
        """根据失败的传输结果创建异常，原生异常作为 __cause__."""
        message = str(outcome.error) if outcome.error is not None else NO_ERROR_MESSAGE
        error = cls(message, status_code=outcome.status_code, outcome=outcome)
        error.__cause__ = outcome.error
        return error

    def __str__(self) -> str:
        return f"status={self.status_code}, message={self.message!r}"


class TransportCallError(BulkShippingError):
    """传输客户端调用过程中抛出原生异常.

    Attributes:
        causes: 原生异常；异常组会被展开为全部叶子异常
    """

    def __init__(self, message: str, causes: tuple[BaseException, ...] = ()) -> None:
        super().__init__(message)
        self.causes = causes

    @classmethod
    def from_exception(cls, exc: BaseException) -> TransportCallError:
        """包装原生异常，原生异常作为 __cause__."""
        if isinstance(exc, BaseExceptionGroup):
            causes = tuple(flatten_exception_group(exc))
        else:
            causes = (exc,)
        error = cls(f"{type(exc).__name__}: {exc}", causes=causes)
        error.__cause__ = exc
        return error
