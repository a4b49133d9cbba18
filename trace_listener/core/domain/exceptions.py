"""Base domain exceptions.

所有异常都继承自 TraceListenerError。它们只在管道内部抛出，
由 sink 的 bind 边界捕获并转换为“跳过”，不会传播给调用方。
"""


class TraceListenerError(Exception):
    """Base exception for all trace listener errors."""

    error_code: str = "TRACE_LISTENER_ERROR"

    def __init__(self, message: str = "A trace listener error occurred"):
        self.message = message
        super().__init__(self.message)


class InvalidPropertyError(TraceListenerError):
    """Raised when a name/value pair cannot become a log event property."""

    error_code = "INVALID_PROPERTY"

    def __init__(self, name: object, reason: str):
        self.name = name
        super().__init__(f"Property {name!r} is invalid: {reason}")


class MessageTemplateSyntaxError(TraceListenerError):
    """Raised when a message template is malformed."""

    error_code = "TEMPLATE_SYNTAX_ERROR"

    def __init__(self, template: str, position: int, reason: str):
        self.template = template
        self.position = position
        super().__init__(
            f"Malformed message template at position {position}: {reason}"
        )
