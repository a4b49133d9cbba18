"""Trace call variants.

Every public listener method is reduced to one of these records and handed
to the single event assembler.
"""

from dataclasses import dataclass
from typing import Any
from uuid import UUID

from trace_listener.modules.tracing.domain.entities import (
    TraceEventCache,
    TraceEventType,
)


@dataclass(frozen=True)
class WriteCall:
    """Free-text write, or a write of an opaque value when ``has_data``."""

    message: str | None = None
    category: str | None = None
    data: Any = None
    has_data: bool = False


@dataclass(frozen=True)
class FailCall:
    message: str | None
    detail_message: str | None = None


@dataclass(frozen=True)
class TraceEventCall:
    """Categorized event.

    ``has_message`` is False only for the messageless form; ``args`` is None
    unless a format with arguments was supplied.
    """

    event_cache: TraceEventCache | None
    source: str
    event_type: TraceEventType | int
    event_id: int
    message: str | None = None
    has_message: bool = False
    args: tuple[Any, ...] | None = None


@dataclass(frozen=True)
class TraceDataCall:
    """Data dump: a single ``datum`` or, when ``data`` is set, a data array."""

    event_cache: TraceEventCache | None
    source: str
    event_type: TraceEventType | int
    event_id: int
    datum: Any = None
    data: tuple[Any, ...] | None = None

    @property
    def payload(self) -> Any:
        if self.data is not None:
            return list(self.data)
        return self.datum


@dataclass(frozen=True)
class TraceTransferCall:
    event_cache: TraceEventCache | None
    source: str
    event_id: int
    message: str | None
    related_activity_id: UUID


TraceCall = WriteCall | FailCall | TraceEventCall | TraceDataCall | TraceTransferCall
