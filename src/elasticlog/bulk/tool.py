"""批量分发核心工具类."""

import logging
from collections.abc import Sequence

from ..core.constants import TRACE
from ..core.models import LogEvent
from ..core.utils import flatten_exception_group
from ..documents.exceptions import DocumentBuildError
from ..documents.tool import DocumentBuilder, SerializedDocumentBuilder
from ..transport.models import BulkTransport
from .encoder import PayloadEncoder
from .exceptions import TransportCallError, TransportFailureError
from .models import BulkRequest
from .resolver import IndexResolver

logger = logging.getLogger(__name__)


class BatchDispatcher:
    """批量分发器.

    负责一次批量提交的完整流程：逐条解析索引并构建文档、编码、
    调用一次传输客户端、解释结果并回调每条事件。

    批次的结果是整体的：成功时所有事件收到 None，失败时所有事件收到
    同一个异常对象，不区分 bulk 响应中具体哪一条失败。失败不会在内部重试。

    分发器不持有可变状态，可以被多个线程同时用于互不相交的批次。

    Args:
        transport: 传输客户端
        index_resolver: 索引解析器
        document_builder: 文档构建器
        encoder: 请求体编码器，默认预序列化为 JSON 文本
    """

    def __init__(
        self,
        transport: BulkTransport,
        index_resolver: IndexResolver | None = None,
        document_builder: DocumentBuilder | SerializedDocumentBuilder | None = None,
        encoder: PayloadEncoder | None = None,
    ):
        if transport is None:
            raise ValueError("transport 不能为 None")
        self.transport = transport
        self.index_resolver = index_resolver or IndexResolver()
        self.document_builder = document_builder or DocumentBuilder()
        self.encoder = encoder or PayloadEncoder()

    def submit_batch(self, events: Sequence[LogEvent]) -> None:
        """提交一批日志事件.

        调用阻塞直到传输完成，返回前每条事件的完成回调都已被调用且只调用一次。

        Args:
            events: 非空的有序事件序列

        Raises:
            ValueError: events 为空时抛出

        Example:
            >>> dispatcher = BatchDispatcher(ElasticsearchTransport(es_client))
            >>> dispatcher.submit_batch([event1, event2])
        """
        events = list(events)
        if not events:
            raise ValueError("events 不能为空，至少需要一条日志事件")

        error = self._dispatch(events)
        if error is not None:
            self._log_failure(error)
        self._complete_all(events, error)

    def form_request(self, events: Sequence[LogEvent]) -> BulkRequest:
        """为每条事件解析索引动作并构建文档."""
        request = BulkRequest()
        for event in events:
            action = self.index_resolver.resolve(event)
            document = self.document_builder.build(event)
            request.add(action, document)
        return request

    def _dispatch(self, events: list[LogEvent]) -> Exception | None:
        """执行构建、编码和发送，返回失败原因，成功时返回 None."""
        try:
            payload = self.encoder.encode(self.form_request(events))
        except DocumentBuildError as e:
            return e
        except Exception as e:
            error = DocumentBuildError(f"构建批量请求失败: {type(e).__name__}: {e}")
            error.__cause__ = e
            return error

        try:
            outcome = self.transport.send(payload)
        except Exception as e:
            return TransportCallError.from_exception(e)

        if outcome.success:
            return None
        return TransportFailureError.from_outcome(outcome)

    def _log_failure(self, error: Exception) -> None:
        """记录一条 ERROR 简要日志和一条 TRACE 诊断日志."""
        if isinstance(error, TransportFailureError):
            logger.error(
                f"ElasticSearch: Failed to send log messages. "
                f"status={error.status_code}, message=\"{error.message}\""
            )
            logger.log(
                TRACE,
                f"ElasticSearch: Failed to send log messages. result={error.outcome!r}",
                exc_info=error.__cause__,
            )
            return

        cause = self._diagnostic_cause(error)
        logger.error(f"ElasticSearch: Error while sending log messages: {error}")
        logger.log(
            TRACE,
            "ElasticSearch: Error while sending log messages",
            exc_info=cause,
        )

    @staticmethod
    def _diagnostic_cause(error: Exception) -> BaseException:
        """取出用于诊断的异常.

        传输调用异常返回原生异常；异常组只有一个叶子异常时直接返回该异常，
        多个时返回展开后的异常组。其余异常原样返回（其 __cause__ 会随堆栈输出）。
        """
        cause = error.__cause__
        if isinstance(cause, BaseExceptionGroup):
            leaves = flatten_exception_group(cause)
            if len(leaves) == 1:
                return leaves[0]
            return BaseExceptionGroup(cause.message, leaves)
        if isinstance(error, TransportCallError) and cause is not None:
            return cause
        return error

    @staticmethod
    def _complete_all(events: list[LogEvent], error: Exception | None) -> None:
        """按输入顺序回调每条事件，单个回调异常不影响其余回调."""
        for event in events:
            try:
                event.complete(error)
            except Exception:
                logger.exception("ElasticSearch: Completion callback raised an exception")
