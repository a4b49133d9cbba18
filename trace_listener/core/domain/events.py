"""Structured log event model."""

import dataclasses
import logging
from collections.abc import Iterable
from datetime import datetime
from enum import IntEnum
from typing import Literal

from trace_listener.core.domain.message_template import MessageTemplate
from trace_listener.core.domain.values import LogEventProperty, LogEventPropertyValue

DuplicatePolicy = Literal["last_wins", "first_wins"]


class Severity(IntEnum):
    """Structured log level, totally ordered."""

    VERBOSE = 0
    DEBUG = 1
    INFORMATION = 2
    WARNING = 3
    ERROR = 4
    FATAL = 5

    @property
    def log_level(self) -> int:
        """Numeric stdlib level used when handing the event to structlog."""
        return _LOG_LEVELS[self]


_LOG_LEVELS = {
    Severity.VERBOSE: logging.DEBUG,
    Severity.DEBUG: logging.DEBUG,
    Severity.INFORMATION: logging.INFO,
    Severity.WARNING: logging.WARNING,
    Severity.ERROR: logging.ERROR,
    Severity.FATAL: logging.CRITICAL,
}


@dataclasses.dataclass(frozen=True)
class LogEvent:
    """One structured event, built fresh per trace call.

    ``properties`` keeps every bound property in binding order, duplicates
    included. Which of several same-named properties is visible is decided
    by whoever reads the event, via ``property_map(policy)``.
    """

    timestamp: datetime
    severity: Severity
    message_template: MessageTemplate
    properties: tuple[LogEventProperty, ...] = ()
    exception: BaseException | None = None

    def property_map(
        self, policy: DuplicatePolicy = "last_wins"
    ) -> dict[str, LogEventPropertyValue]:
        result: dict[str, LogEventPropertyValue] = {}
        for prop in self.properties:
            if policy == "first_wins" and prop.name in result:
                continue
            result[prop.name] = prop.value
        return result

    def render_message(self, policy: DuplicatePolicy = "last_wins") -> str:
        return self.message_template.render(self.property_map(policy))

    def add_properties_if_absent(
        self, properties: Iterable[LogEventProperty]
    ) -> "LogEvent":
        existing = {p.name for p in self.properties}
        missing = tuple(p for p in properties if p.name not in existing)
        if not missing:
            return self
        return dataclasses.replace(self, properties=self.properties + missing)
