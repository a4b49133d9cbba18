"""Event assembly and dispatch."""

from collections.abc import Callable
from datetime import UTC, datetime

from trace_listener.core.domain.events import LogEvent, Severity
from trace_listener.core.domain.ports.sink import LogSink
from trace_listener.core.domain.values import LogEventProperty
from trace_listener.modules.tracing.application.filters import TraceFilter, should_emit
from trace_listener.modules.tracing.application.properties import (
    CATEGORY_PROPERTY,
    FAIL_DETAILS_PROPERTY,
    RELATED_ACTIVITY_ID_PROPERTY,
    TRACE_DATA_PROPERTY,
    PropertyBinder,
    process_format_args,
)
from trace_listener.modules.tracing.application.templates import (
    MESSAGELESS_TEMPLATE,
    TRACE_DATA_TEMPLATE,
    resolve_template,
)
from trace_listener.modules.tracing.domain.calls import (
    FailCall,
    TraceCall,
    TraceDataCall,
    TraceEventCall,
    TraceTransferCall,
    WriteCall,
)
from trace_listener.modules.tracing.domain.entities import TraceEventType
from trace_listener.modules.tracing.domain.severity import (
    DEFAULT_SEVERITY,
    FAIL_SEVERITY,
    to_severity,
)
from trace_listener.modules.tracing.infrastructure.correlation import (
    ActivityIdProvider,
)


class EventAssembler:
    """Turns one trace call into one structured event and writes it.

    Holds no per-call state: the sink provider, filter and activity id
    provider are fixed at construction, so one assembler may be used from
    many threads at once.
    """

    def __init__(
        self,
        sink_provider: Callable[[], LogSink],
        trace_filter: TraceFilter | None = None,
        activity_id_provider: ActivityIdProvider | None = None,
    ):
        self._sink_provider = sink_provider
        self._trace_filter = trace_filter
        self._activity_id_provider = activity_id_provider

    @property
    def trace_filter(self) -> TraceFilter | None:
        return self._trace_filter

    def dispatch(self, call: TraceCall) -> LogEvent | None:
        """Build and write the event for ``call``.

        Returns the assembled event, or None when the filter suppressed the
        call or the sink rejected its template.
        """
        if not should_emit(self._trace_filter, call):
            return None

        sink = self._sink_provider()
        binder = PropertyBinder(sink, self._activity_id_provider)
        exception: BaseException | None = None

        if isinstance(call, WriteCall):
            severity = DEFAULT_SEVERITY
            properties = binder.base_properties()
            template = call.message
            if call.has_data:
                binder.add(properties, TRACE_DATA_PROPERTY, call.data)
                template = TRACE_DATA_TEMPLATE
            if call.category is not None:
                binder.add(properties, CATEGORY_PROPERTY, call.category)

        elif isinstance(call, FailCall):
            severity = FAIL_SEVERITY
            properties = binder.fail_properties()
            if call.detail_message is not None:
                binder.add(properties, FAIL_DETAILS_PROPERTY, call.detail_message)
            template = call.message

        elif isinstance(call, TraceEventCall):
            severity = to_severity(call.event_type)
            properties = binder.trace_properties(
                call.source, call.event_type, call.event_id
            )
            if not call.has_message:
                template = MESSAGELESS_TEMPLATE
            else:
                template = call.message
                arg_properties, exception = process_format_args(binder, call.args)
                properties.extend(arg_properties)

        elif isinstance(call, TraceDataCall):
            severity = to_severity(call.event_type)
            properties = binder.trace_properties(
                call.source, call.event_type, call.event_id
            )
            binder.add(properties, TRACE_DATA_PROPERTY, call.payload)
            template = TRACE_DATA_TEMPLATE

        elif isinstance(call, TraceTransferCall):
            event_type = TraceEventType.TRANSFER
            severity = to_severity(event_type)
            properties = binder.trace_properties(call.source, event_type, call.event_id)
            binder.add(
                properties, RELATED_ACTIVITY_ID_PROPERTY, call.related_activity_id
            )
            template = call.message

        else:
            raise TypeError(f"Unsupported trace call: {call!r}")

        return self._write(sink, severity, exception, template, properties)

    @staticmethod
    def _write(
        sink: LogSink,
        severity: Severity,
        exception: BaseException | None,
        template: str | None,
        properties: list[LogEventProperty],
    ) -> LogEvent | None:
        parsed = resolve_template(sink, template)
        if parsed is None:
            return None

        event = LogEvent(
            timestamp=datetime.now(UTC),
            severity=severity,
            message_template=parsed,
            properties=tuple(properties),
            exception=exception,
        )
        sink.write(event)
        return event
