"""Message template resolution."""

from trace_listener.core.domain.message_template import MessageTemplate
from trace_listener.core.domain.ports.sink import LogSink

MESSAGELESS_TEMPLATE = "{TraceSource:l} {TraceEventType}: {TraceEventId}"
TRACE_DATA_TEMPLATE = "{TraceData}"


def resolve_template(sink: LogSink, raw: str | None) -> MessageTemplate | None:
    """Parse ``raw`` through the sink; None means the event must be dropped.

    A None template is logged as an empty message.
    """
    if raw is None:
        raw = ""
    return sink.bind_message_template(raw)
