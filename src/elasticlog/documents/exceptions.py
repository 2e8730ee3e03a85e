"""文档构建异常定义模块."""

from ..exceptions import ElasticLogError


class DocumentBuildError(ElasticLogError):
    """文档构建异常.

    构建任一事件的文档失败时抛出。批量提交时与传输失败同等对待，
    批次内所有事件都会收到该异常。
    """

    pass


class FieldCoercionError(DocumentBuildError):
    """附加字段类型转换异常.

    Attributes:
        field_name: 转换失败的字段名
    """

    def __init__(self, message: str, field_name: str) -> None:
        super().__init__(message)
        self.field_name = field_name
