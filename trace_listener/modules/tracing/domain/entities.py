"""Trace domain entities."""

import os
import threading
import time
from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import IntEnum


class TraceEventType(IntEnum):
    """Kind of a trace event, as numbered by the legacy tracing API."""

    CRITICAL = 1
    ERROR = 2
    WARNING = 4
    INFORMATION = 8
    VERBOSE = 16
    START = 256
    STOP = 512
    SUSPEND = 1024
    RESUME = 2048
    TRANSFER = 4096

    @property
    def display_name(self) -> str:
        """Name used by the legacy API, e.g. ``Warning``."""
        return self.name.capitalize()

    def __str__(self) -> str:
        return self.display_name


@dataclass(frozen=True)
class TraceEventCache:
    """Snapshot of the calling context, handed to trace filters."""

    date_time: datetime = field(default_factory=lambda: datetime.now(UTC))
    process_id: int = field(default_factory=os.getpid)
    thread_id: int = field(default_factory=threading.get_ident)
    timestamp: int = field(default_factory=time.perf_counter_ns)
