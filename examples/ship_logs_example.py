"""日志写入 Elasticsearch 使用示例.

本文件展示了如何配置 ElasticsearchTarget，并通过标准库 logging 批量写入日志。
"""

import logging

from elasticlog import (
    BufferingElasticsearchHandler,
    ElasticsearchHandler,
    ElasticsearchSerializedTarget,
    ElasticsearchTarget,
    ExtraField,
    FieldType,
    LogEvent,
    TargetConfig,
)
from elasticlog.core.constants import TRACE

# 输出管道自身的诊断日志，TRACE 级别包含失败时的完整异常
logging.basicConfig(level=logging.INFO)
logging.getLogger("elasticlog").setLevel(TRACE)


# ==================== 示例1：逐条写入 ====================
def example_immediate_handler():
    """每条日志记录立即作为一个批次写入."""
    target = ElasticsearchTarget(TargetConfig(uri="http://localhost:9200"))
    handler = ElasticsearchHandler(target)

    app_logger = logging.getLogger("orders")
    app_logger.addHandler(handler)
    app_logger.info("订单已创建: %s", "A-1001")

    handler.close()
    target.close()


# ==================== 示例2：缓冲批量写入 ====================
def example_buffering_handler():
    """缓冲 200 条或遇到 ERROR 时批量写入，附加字段按类型转换."""
    config = TargetConfig(
        uri="http://node1:9200,http://node2:9200",
        index="orders-{timestamp:%Y.%m.%d}",
        fields=[
            ExtraField("order_id", "{order_id}"),
            ExtraField("amount", "{amount}", FieldType.FLOAT),
            ExtraField("paid", "{paid}", FieldType.BOOLEAN),
        ],
        include_all_properties=True,
        excluded_properties="password,token",
    )
    target = ElasticsearchTarget(config)
    handler = BufferingElasticsearchHandler(target, capacity=200, flush_level=logging.ERROR)

    app_logger = logging.getLogger("payments")
    app_logger.addHandler(handler)
    app_logger.info("支付完成", extra={"order_id": "A-1001", "amount": "99.5", "paid": "true"})

    try:
        1 / 0
    except ZeroDivisionError:
        # 异常信息写入 exception 字段
        app_logger.exception("计算手续费失败", extra={"order_id": "A-1001"})

    handler.close()
    target.close()


# ==================== 示例3：直接提交批次 ====================
def example_submit_batch():
    """宿主自行组装批次，通过完成回调获取每条事件的结果."""
    from datetime import datetime, timezone

    def on_complete(error):
        if error is None:
            print("写入成功")
        else:
            print(f"写入失败: {error}")

    events = [
        LogEvent(
            timestamp=datetime.now(timezone.utc),
            level="Info",
            message=f"第 {i} 条日志",
            properties={"batch": "demo"},
            on_complete=on_complete,
        )
        for i in range(3)
    ]

    with ElasticsearchTarget(TargetConfig(connection_string_name="ES_LOGS")) as target:
        target.submit_batch(events)


# ==================== 示例4：写入已序列化的 JSON ====================
def example_serialized_target():
    """事件消息本身就是 JSON 文档时原样写入."""
    from datetime import datetime, timezone

    event = LogEvent(
        timestamp=datetime.now(timezone.utc),
        level="Info",
        message='{"order_id":"A-1001","status":"paid"}',
    )
    with ElasticsearchSerializedTarget(TargetConfig(index="orders-raw")) as target:
        target.write(event)


if __name__ == "__main__":
    example_immediate_handler()
    example_buffering_handler()
    example_submit_batch()
    example_serialized_target()
