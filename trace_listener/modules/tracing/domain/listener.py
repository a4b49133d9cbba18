"""Legacy trace output target interface."""

from abc import ABC, abstractmethod
from typing import Any
from uuid import UUID

from trace_listener.modules.tracing.domain.entities import (
    TraceEventCache,
    TraceEventType,
)

# Marks a trace_event call made without any message or format.
NO_MESSAGE: Any = object()


class TraceListener(ABC):
    """The call surface a legacy tracing host expects from an output target."""

    def __init__(self, name: str = ""):
        self.name = name

    @property
    def is_thread_safe(self) -> bool:
        return False

    @abstractmethod
    def write(self, message_or_data: Any, category: str | None = None) -> None:
        pass

    def write_line(self, message_or_data: Any, category: str | None = None) -> None:
        self.write(message_or_data, category)

    @abstractmethod
    def fail(self, message: str | None, detail_message: str | None = None) -> None:
        pass

    @abstractmethod
    def trace_event(
        self,
        event_cache: TraceEventCache | None,
        source: str,
        event_type: TraceEventType | int,
        event_id: int,
        format_or_message: str | None = NO_MESSAGE,
        *args: Any,
    ) -> None:
        pass

    @abstractmethod
    def trace_data(
        self,
        event_cache: TraceEventCache | None,
        source: str,
        event_type: TraceEventType | int,
        event_id: int,
        *data: Any,
    ) -> None:
        pass

    @abstractmethod
    def trace_transfer(
        self,
        event_cache: TraceEventCache | None,
        source: str,
        event_id: int,
        message: str | None,
        related_activity_id: UUID,
    ) -> None:
        pass

    def flush(self) -> None:
        pass

    def close(self) -> None:
        pass

    def __enter__(self) -> "TraceListener":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
