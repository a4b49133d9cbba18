"""Structured trace listener: legacy trace calls in, structured log events out."""

from loguru import logger

from trace_listener.core.domain.events import LogEvent, Severity
from trace_listener.core.domain.ports.sink import LogSink
from trace_listener.core.infrastructure.adapters.delegating_sink import DelegatingSink
from trace_listener.core.infrastructure.adapters.structlog_sink import StructlogSink
from trace_listener.core.infrastructure.default_sink import (
    get_default_sink,
    reset_default_sink,
    set_default_sink,
)
from trace_listener.modules.tracing.application.filters import (
    PredicateFilter,
    SourceFilter,
    TraceFilter,
)
from trace_listener.modules.tracing.application.listener import (
    StructuredTraceListener,
)
from trace_listener.modules.tracing.domain.entities import (
    TraceEventCache,
    TraceEventType,
)
from trace_listener.modules.tracing.infrastructure.correlation import (
    activity_scope,
    current_activity_id,
)

# self-log 默认关闭，由 setup_logging() 按配置开启
logger.disable("trace_listener")

__all__ = [
    "DelegatingSink",
    "LogEvent",
    "LogSink",
    "PredicateFilter",
    "Severity",
    "SourceFilter",
    "StructlogSink",
    "StructuredTraceListener",
    "TraceEventCache",
    "TraceEventType",
    "TraceFilter",
    "activity_scope",
    "current_activity_id",
    "get_default_sink",
    "reset_default_sink",
    "set_default_sink",
]
