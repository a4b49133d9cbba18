"""Sink that hands raw events to a callable."""

from collections.abc import Callable

from trace_listener.core.domain.events import LogEvent
from trace_listener.core.domain.ports.sink import LogSink


class DelegatingSink(LogSink):
    """Adapter that forwards each LogEvent to ``callback``.

    Useful for hosts that consume events directly and for tests.
    """

    def __init__(self, callback: Callable[[LogEvent], None], **kwargs) -> None:
        super().__init__(**kwargs)
        self._callback = callback

    def emit(self, event: LogEvent) -> None:
        self._callback(event)
