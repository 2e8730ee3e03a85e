"""标准库 logging 集成模块.

提供两个 logging.Handler：
- ElasticsearchHandler: 每条记录作为一个批次立即写入
- BufferingElasticsearchHandler: 缓冲到 capacity 条后作为一个批次写入

发送失败时，若目标配置了 throw_exceptions 则重新抛出异常，
否则交给 Handler.handleError 处理。

使用示例:
    import logging
    from elasticlog.target import BufferingElasticsearchHandler, ElasticsearchTarget

    handler = BufferingElasticsearchHandler(ElasticsearchTarget(), capacity=200)
    logging.getLogger("app").addHandler(handler)
"""

from __future__ import annotations

import logging
import logging.handlers
import socket
from collections.abc import Sequence
from datetime import datetime, timezone

from ..core.models import LogEvent
from ..typing import CompletionCallback
from .tool import ElasticsearchTarget

# LogRecord 自带的属性，其余属性来自 extra 参数
_RECORD_ATTRIBUTES = frozenset(
    vars(logging.LogRecord("", logging.NOTSET, "", 0, "", None, None))
) | {"message", "asctime", "taskName"}

_HOST_NAME = socket.gethostname()


def record_to_event(
    record: logging.LogRecord,
    on_complete: CompletionCallback,
    message: str | None = None,
) -> LogEvent:
    """将 LogRecord 转换为 LogEvent.

    extra 参数中的属性原样作为事件属性，调用方信息以 func_name、pathname、
    line_number、thread_id、thread_name、process、host_name 为键补充。

    Args:
        record: 日志记录
        on_complete: 完成回调
        message: 已渲染的消息，默认使用 record.getMessage()
    """
    properties = {
        key: value
        for key, value in vars(record).items()
        if key not in _RECORD_ATTRIBUTES and not key.startswith("_")
    }
    properties.setdefault("func_name", record.funcName)
    properties.setdefault("pathname", record.pathname)
    properties.setdefault("line_number", record.lineno)
    properties.setdefault("thread_id", record.thread)
    properties.setdefault("thread_name", record.threadName)
    properties.setdefault("process", record.process)
    properties.setdefault("host_name", _HOST_NAME)

    error = record.exc_info[1] if record.exc_info else None
    return LogEvent(
        timestamp=datetime.fromtimestamp(record.created, tz=timezone.utc),
        level=record.levelname,
        message=message if message is not None else record.getMessage(),
        error=error,
        properties=properties,
        logger_name=record.name,
        on_complete=on_complete,
    )


class _TargetHandlerMixin:
    """把一组 LogRecord 作为一个批次提交给日志目标."""

    target: ElasticsearchTarget

    def _render_message(self, record: logging.LogRecord) -> str:
        # 未设置 formatter 时不使用默认 Formatter，避免把堆栈拼进消息
        if self.formatter is None:
            return record.getMessage()
        return self.formatter.format(record)

    def _submit(self, records: Sequence[logging.LogRecord]) -> None:
        failures: list[tuple[logging.LogRecord, BaseException]] = []

        def completion(record: logging.LogRecord) -> CompletionCallback:
            def on_complete(error: BaseException | None) -> None:
                if error is not None:
                    failures.append((record, error))

            return on_complete

        events = [
            record_to_event(record, completion(record), self._render_message(record))
            for record in records
        ]
        self.target.submit_batch(events)

        if failures:
            self._handle_failure(*failures[0])

    def _handle_failure(self, record: logging.LogRecord, error: BaseException) -> None:
        """批次内所有事件收到同一异常，只处理一次."""
        if self.target.throw_exceptions:
            raise error
        # handleError 读取当前正在处理的异常
        try:
            raise error
        except Exception:
            self.handleError(record)


class ElasticsearchHandler(_TargetHandlerMixin, logging.Handler):
    """逐条写入的 logging Handler.

    Args:
        target: 日志目标，未初始化时会自动初始化
        level: 日志级别
    """

    def __init__(self, target: ElasticsearchTarget, level: int = logging.NOTSET):
        super().__init__(level)
        self.target = target
        self.target.initialize()

    def emit(self, record: logging.LogRecord) -> None:
        self._submit([record])


class BufferingElasticsearchHandler(_TargetHandlerMixin, logging.handlers.BufferingHandler):
    """缓冲批量写入的 logging Handler.

    缓冲区达到 capacity 条或遇到 flush_level 及以上级别的记录时，
    整个缓冲区作为一个批次写入。

    Args:
        target: 日志目标，未初始化时会自动初始化
        capacity: 批次大小
        flush_level: 触发立即写入的最低级别，默认 None 表示只按数量触发
    """

    def __init__(
        self,
        target: ElasticsearchTarget,
        capacity: int = 100,
        flush_level: int | None = None,
    ):
        super().__init__(capacity)
        self.target = target
        self.flush_level = flush_level
        self.target.initialize()

    def shouldFlush(self, record: logging.LogRecord) -> bool:
        if self.flush_level is not None and record.levelno >= self.flush_level:
            return True
        return super().shouldFlush(record)

    def flush(self) -> None:
        with self.lock:
            records, self.buffer = self.buffer, []
            if records:
                self._submit(records)
