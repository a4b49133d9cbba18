"""Ambient correlation context.

The current activity id lives in a ContextVar, so it follows threads and
asyncio tasks the way the legacy host's logical call context does.
"""

from collections.abc import Callable, Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from uuid import UUID, uuid4

EMPTY_ACTIVITY_ID = UUID(int=0)

ActivityIdProvider = Callable[[], UUID | None]

_activity_id: ContextVar[UUID] = ContextVar(
    "trace_listener_activity_id", default=EMPTY_ACTIVITY_ID
)


def current_activity_id() -> UUID:
    """Return the activity id of the current context (nil UUID when unset)."""
    return _activity_id.get()


@contextmanager
def activity_scope(activity_id: UUID | None = None) -> Iterator[UUID]:
    """Run a block under ``activity_id`` (a fresh one when omitted)."""
    activity_id = activity_id or uuid4()
    token = _activity_id.set(activity_id)
    try:
        yield activity_id
    finally:
        _activity_id.reset(token)
