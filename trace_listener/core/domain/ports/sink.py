"""Structured-logging sink port."""

import copy
from abc import ABC, abstractmethod
from typing import Any

from loguru import logger

from trace_listener.core.config import settings
from trace_listener.core.domain.events import LogEvent
from trace_listener.core.domain.exceptions import (
    InvalidPropertyError,
    MessageTemplateSyntaxError,
)
from trace_listener.core.domain.message_template import (
    MessageTemplate,
    MessageTemplateParser,
)
from trace_listener.core.domain.values import LogEventProperty, PropertyValueConverter

_shared_parser = MessageTemplateParser(settings.TEMPLATE_CACHE_SIZE)


class LogSink(ABC):
    """Port for the downstream structured-logging sink.

    Besides ``emit``, a sink owns the two validation capabilities the trace
    pipeline relies on: turning a name/value pair into a property and parsing
    a message template. Both return ``None`` instead of raising, so callers
    can skip the property (or abandon the event) without error handling.

    Sinks are expected to be safe for concurrent use; ``for_context`` returns
    a new sink rather than mutating this one.
    """

    def __init__(
        self,
        converter: PropertyValueConverter | None = None,
        parser: MessageTemplateParser | None = None,
    ) -> None:
        self._converter = converter or PropertyValueConverter(
            settings.MAX_DESTRUCTURE_DEPTH
        )
        self._parser = parser or _shared_parser
        self._context_properties: tuple[LogEventProperty, ...] = ()

    @property
    def context_properties(self) -> tuple[LogEventProperty, ...]:
        return self._context_properties

    def bind_property(
        self, name: str, value: Any, destructure: bool = False
    ) -> LogEventProperty | None:
        """Validate and build a property, or return None to skip it."""
        if not isinstance(name, str) or not name.strip():
            logger.debug("Dropping property with invalid name {!r}", name)
            return None
        try:
            return LogEventProperty(name, self._converter.convert(value, destructure))
        except InvalidPropertyError as exc:
            logger.debug("Dropping property {!r}: {}", name, exc.message)
            return None

    def bind_message_template(self, raw: str) -> MessageTemplate | None:
        """Parse a template, or return None when the grammar rejects it."""
        try:
            return self._parser.parse(raw)
        except MessageTemplateSyntaxError as exc:
            logger.debug("Rejecting message template {!r}: {}", raw, exc.message)
            return None

    def write(self, event: LogEvent) -> None:
        """Hand a fully built event to the sink."""
        self.emit(event.add_properties_if_absent(self._context_properties))

    @abstractmethod
    def emit(self, event: LogEvent) -> None:
        """Deliver the event to the underlying destination."""
        pass

    def for_context(
        self, name: str, value: Any, destructure: bool = False
    ) -> "LogSink":
        """Return a copy of this sink that adds ``name`` to every event."""
        clone = copy.copy(self)
        prop = self.bind_property(name, value, destructure)
        if prop is not None:
            clone._context_properties = tuple(
                p for p in self._context_properties if p.name != name
            ) + (prop,)
        return clone
