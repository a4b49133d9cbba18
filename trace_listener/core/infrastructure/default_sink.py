"""Process-wide default sink.

Listeners built without an explicit sink look the default up on every call,
so a host may register a listener before it configures logging.
"""

import threading

from trace_listener.core.domain.ports.sink import LogSink

_lock = threading.Lock()
_default_sink: LogSink | None = None


def get_default_sink() -> LogSink:
    """Return the configured default sink, building a structlog one on first use."""
    global _default_sink
    sink = _default_sink
    if sink is not None:
        return sink

    with _lock:
        if _default_sink is None:
            from trace_listener.core.infrastructure.adapters.structlog_sink import (
                StructlogSink,
            )

            _default_sink = StructlogSink()
        return _default_sink


def set_default_sink(sink: LogSink) -> None:
    global _default_sink
    with _lock:
        _default_sink = sink


def reset_default_sink() -> None:
    global _default_sink
    with _lock:
        _default_sink = None
