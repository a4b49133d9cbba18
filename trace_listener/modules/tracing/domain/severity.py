"""Trace event kind to severity mapping."""

from trace_listener.core.domain.events import Severity
from trace_listener.modules.tracing.domain.entities import TraceEventType

DEFAULT_SEVERITY = Severity.DEBUG
FAIL_SEVERITY = Severity.FATAL

_SEVERITY_BY_EVENT_TYPE = {
    TraceEventType.CRITICAL: Severity.FATAL,
    TraceEventType.ERROR: Severity.ERROR,
    TraceEventType.INFORMATION: Severity.INFORMATION,
    TraceEventType.WARNING: Severity.WARNING,
    TraceEventType.VERBOSE: Severity.VERBOSE,
}


def to_severity(event_type: TraceEventType | int) -> Severity:
    """Map a trace event kind to a severity.

    Start/Stop/Suspend/Resume/Transfer and any value outside the
    enumeration map to Debug.
    """
    return _SEVERITY_BY_EVENT_TYPE.get(event_type, DEFAULT_SEVERITY)
