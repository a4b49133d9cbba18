"""Structlog sink adapter.

将 LogSink 端口适配到 structlog 实现。每个 LogEvent 的属性绑定为
structlog event dict 的键，消息为渲染后的模板文本。
"""

from typing import Any

import structlog

from trace_listener.core.config import settings
from trace_listener.core.domain.events import DuplicatePolicy, LogEvent
from trace_listener.core.domain.ports.sink import LogSink

RESERVED_KEYS = frozenset(
    {
        "self",
        "event",
        "level",
        "log_level",
        "severity",
        "message_template",
        "timestamp",
        "exc_info",
    }
)
RESERVED_KEY_PREFIX = "prop_"


class StructlogSink(LogSink):
    """Adapter for structlog-based event output.

    Duplicate property names inside one event are resolved by
    ``duplicate_policy`` before binding. A property whose name is one of
    ``RESERVED_KEYS`` (keys the sink, structlog or its processors set) is
    bound as ``prop_<name>``.
    """

    def __init__(
        self,
        logger: Any | None = None,
        duplicate_policy: DuplicatePolicy | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(**kwargs)
        self._logger = logger if logger is not None else structlog.get_logger(
            "trace_listener"
        )
        self._duplicate_policy = duplicate_policy or settings.DUPLICATE_PROPERTY_POLICY

    @property
    def duplicate_policy(self) -> DuplicatePolicy:
        return self._duplicate_policy

    def emit(self, event: LogEvent) -> None:
        properties = event.property_map(self._duplicate_policy)
        fields = {
            _field_name(name): value.to_python() for name, value in properties.items()
        }

        extra: dict[str, Any] = {
            "message_template": event.message_template.text,
            "severity": event.severity.name,
            "timestamp": event.timestamp.isoformat(),
        }
        if event.exception is not None:
            extra["exc_info"] = event.exception

        self._logger.bind(**fields).log(
            event.severity.log_level,
            event.message_template.render(properties),
            **extra,
        )


def _field_name(name: str) -> str:
    if name in RESERVED_KEYS:
        return RESERVED_KEY_PREFIX + name
    return name
