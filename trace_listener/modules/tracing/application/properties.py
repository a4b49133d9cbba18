"""Property binding for trace calls."""

from typing import Any

from trace_listener.core.domain.ports.sink import LogSink
from trace_listener.core.domain.values import LogEventProperty
from trace_listener.modules.tracing.domain.entities import TraceEventType
from trace_listener.modules.tracing.infrastructure.correlation import (
    ActivityIdProvider,
)

ACTIVITY_ID_PROPERTY = "ActivityId"
CATEGORY_PROPERTY = "Category"
EVENT_ID_PROPERTY = "TraceEventId"
FAIL_DETAILS_PROPERTY = "FailDetails"
RELATED_ACTIVITY_ID_PROPERTY = "RelatedActivityId"
SOURCE_PROPERTY = "TraceSource"
TRACE_DATA_PROPERTY = "TraceData"
TRACE_EVENT_TYPE_PROPERTY = "TraceEventType"
SOURCE_CONTEXT_PROPERTY = "SourceContext"

FAIL_EVENT_TYPE = "Fail"


class PropertyBinder:
    """Builds property lists through the sink's binding capability.

    A pair the sink refuses is left out; the rest of the event is unaffected.
    Duplicate names are appended as-is.
    """

    def __init__(
        self, sink: LogSink, activity_id_provider: ActivityIdProvider | None = None
    ):
        self.sink = sink
        self.activity_id_provider = activity_id_provider

    def bind(self, name: str, value: Any) -> LogEventProperty | None:
        return self.sink.bind_property(name, value, False)

    def add(self, properties: list[LogEventProperty], name: str, value: Any) -> None:
        prop = self.bind(name, value)
        if prop is not None:
            properties.append(prop)

    def base_properties(self) -> list[LogEventProperty]:
        """Properties every event starts with: the current activity id, if any."""
        properties: list[LogEventProperty] = []
        if self.activity_id_provider is not None:
            activity_id = self.activity_id_provider()
            if activity_id is not None:
                self.add(properties, ACTIVITY_ID_PROPERTY, activity_id)
        return properties

    def fail_properties(self) -> list[LogEventProperty]:
        properties = self.base_properties()
        self.add(properties, TRACE_EVENT_TYPE_PROPERTY, FAIL_EVENT_TYPE)
        return properties

    def trace_properties(
        self, source: str, event_type: TraceEventType | int, event_id: int
    ) -> list[LogEventProperty]:
        properties = self.base_properties()
        self.add(properties, SOURCE_PROPERTY, source)
        self.add(properties, TRACE_EVENT_TYPE_PROPERTY, event_type)
        self.add(properties, EVENT_ID_PROPERTY, event_id)
        return properties


def process_format_args(
    binder: PropertyBinder, args: tuple[Any, ...] | list[Any] | None
) -> tuple[list[LogEventProperty], BaseException | None]:
    """Bind positional arguments as properties "0", "1", ... .

    Returns the properties and the last exception found among the arguments.
    """
    properties: list[LogEventProperty] = []
    exception: BaseException | None = None
    if not args:
        return properties, exception

    for index, arg in enumerate(args):
        binder.add(properties, str(index), arg)
        if isinstance(arg, BaseException):
            exception = arg
    return properties, exception
