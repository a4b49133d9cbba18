"""Trace filters."""

from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import Any

from trace_listener.modules.tracing.domain.calls import (
    TraceCall,
    TraceDataCall,
    TraceEventCall,
)
from trace_listener.modules.tracing.domain.entities import (
    TraceEventCache,
    TraceEventType,
)


class TraceFilter(ABC):
    """Decides whether a trace call is turned into an event.

    Receives every argument available at the call site, before any property
    is bound.
    """

    @abstractmethod
    def should_trace(
        self,
        cache: TraceEventCache | None,
        source: str,
        event_type: TraceEventType | int,
        event_id: int,
        format_or_message: str | None,
        args: tuple[Any, ...] | None,
        data1: Any,
        data: tuple[Any, ...] | None,
    ) -> bool:
        pass


class PredicateFilter(TraceFilter):
    """Filter backed by a callable with the ``should_trace`` signature."""

    def __init__(self, predicate: Callable[..., bool]):
        if predicate is None:
            raise ValueError("predicate is required")
        self._predicate = predicate

    def should_trace(
        self, cache, source, event_type, event_id, format_or_message, args, data1, data
    ) -> bool:
        return bool(
            self._predicate(
                cache,
                source,
                event_type,
                event_id,
                format_or_message,
                args,
                data1,
                data,
            )
        )


class SourceFilter(TraceFilter):
    """Lets through only the calls made by one trace source."""

    def __init__(self, source: str):
        if not source:
            raise ValueError("source is required")
        self.source = source

    def should_trace(
        self, cache, source, event_type, event_id, format_or_message, args, data1, data
    ) -> bool:
        return source == self.source


def should_emit(trace_filter: TraceFilter | None, call: TraceCall) -> bool:
    """Apply ``trace_filter`` to calls that carry full trace context.

    Write, Fail and TraceTransfer calls are never filtered.
    """
    if trace_filter is None:
        return True

    if isinstance(call, TraceEventCall):
        format_or_message = call.message if call.has_message else ""
        return trace_filter.should_trace(
            call.event_cache,
            call.source,
            call.event_type,
            call.event_id,
            format_or_message,
            call.args,
            None,
            None,
        )
    if isinstance(call, TraceDataCall):
        return trace_filter.should_trace(
            call.event_cache,
            call.source,
            call.event_type,
            call.event_id,
            "",
            None,
            call.datum if call.data is None else None,
            call.data,
        )
    return True
