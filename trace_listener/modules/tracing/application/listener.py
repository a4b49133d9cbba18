"""Structured trace listener.

Drop-in output target for the legacy tracing API: every call is converted
into one structured LogEvent and written to a LogSink.

Usage:
    from trace_listener import StructlogSink, StructuredTraceListener, TraceEventType

    listener = StructuredTraceListener(StructlogSink())
    listener.trace_event(None, "orders", TraceEventType.WARNING, 7, "{0} retries", 3)
"""

from typing import Any
from uuid import UUID

from trace_listener.core.config import settings
from trace_listener.core.domain.ports.sink import LogSink
from trace_listener.core.infrastructure.default_sink import get_default_sink
from trace_listener.modules.tracing.application.assembler import EventAssembler
from trace_listener.modules.tracing.application.filters import TraceFilter
from trace_listener.modules.tracing.application.properties import (
    SOURCE_CONTEXT_PROPERTY,
)
from trace_listener.modules.tracing.domain.calls import (
    FailCall,
    TraceDataCall,
    TraceEventCall,
    TraceTransferCall,
    WriteCall,
)
from trace_listener.modules.tracing.domain.entities import (
    TraceEventCache,
    TraceEventType,
)
from trace_listener.modules.tracing.domain.listener import NO_MESSAGE, TraceListener
from trace_listener.modules.tracing.infrastructure.correlation import (
    ActivityIdProvider,
    current_activity_id,
)


class StructuredTraceListener(TraceListener):
    """TraceListener that directs all output to a structured sink.

    Three ways to build one:
    - ``StructuredTraceListener(sink)``: explicit sink, tagged with
      ``SourceContext``;
    - ``StructuredTraceListener()``: the default sink, looked up on every
      call;
    - ``StructuredTraceListener.for_context_name("MyContext")``: the default
      sink tagged with ``SourceContext="MyContext"``.

    Sink and filter are fixed at construction; the listener is safe to call
    from several threads.
    """

    def __init__(
        self,
        sink: LogSink | None = None,
        *,
        trace_filter: TraceFilter | None = None,
        activity_id_provider: ActivityIdProvider | None = current_activity_id,
        source_context: str | None = None,
        name: str = "",
    ):
        super().__init__(name)
        if sink is not None:
            sink = sink.for_context(
                SOURCE_CONTEXT_PROPERTY,
                source_context or settings.DEFAULT_SOURCE_CONTEXT,
            )
        self._sink = sink
        self._assembler = EventAssembler(
            self._resolve_sink, trace_filter, activity_id_provider
        )

    @classmethod
    def for_context_name(cls, context: str, **kwargs: Any) -> "StructuredTraceListener":
        """Build a listener on the default sink for the context ``context``."""
        return cls(get_default_sink(), source_context=context, **kwargs)

    @property
    def sink(self) -> LogSink:
        """The sink this listener writes to."""
        return self._resolve_sink()

    @property
    def trace_filter(self) -> TraceFilter | None:
        return self._assembler.trace_filter

    @property
    def is_thread_safe(self) -> bool:
        return True

    def _resolve_sink(self) -> LogSink:
        return self._sink if self._sink is not None else get_default_sink()

    def write(self, message_or_data: Any, category: str | None = None) -> None:
        """Write a message, or an arbitrary value as ``TraceData``."""
        if message_or_data is None or isinstance(message_or_data, str):
            call = WriteCall(message=message_or_data, category=category)
        else:
            call = WriteCall(category=category, data=message_or_data, has_data=True)
        self._assembler.dispatch(call)

    def fail(self, message: str | None, detail_message: str | None = None) -> None:
        self._assembler.dispatch(FailCall(message, detail_message))

    def trace_event(
        self,
        event_cache: TraceEventCache | None,
        source: str,
        event_type: TraceEventType | int,
        event_id: int,
        format_or_message: str | None = NO_MESSAGE,
        *args: Any,
    ) -> None:
        """Trace an event, with no message, a message, or a format and args."""
        if format_or_message is NO_MESSAGE:
            call = TraceEventCall(event_cache, source, event_type, event_id)
        else:
            call = TraceEventCall(
                event_cache,
                source,
                event_type,
                event_id,
                message=format_or_message,
                has_message=True,
                args=args or None,
            )
        self._assembler.dispatch(call)

    def trace_data(
        self,
        event_cache: TraceEventCache | None,
        source: str,
        event_type: TraceEventType | int,
        event_id: int,
        *data: Any,
    ) -> None:
        """Trace one datum, or several as a sequence."""
        if len(data) == 1:
            call = TraceDataCall(
                event_cache, source, event_type, event_id, datum=data[0]
            )
        else:
            call = TraceDataCall(event_cache, source, event_type, event_id, data=data)
        self._assembler.dispatch(call)

    def trace_transfer(
        self,
        event_cache: TraceEventCache | None,
        source: str,
        event_id: int,
        message: str | None,
        related_activity_id: UUID,
    ) -> None:
        self._assembler.dispatch(
            TraceTransferCall(
                event_cache, source, event_id, message, related_activity_id
            )
        )
