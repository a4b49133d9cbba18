"""Structured property values.

一个属性值只有三种形态：标量、序列、结构。任意 Python 对象
都会经 PropertyValueConverter 归约为这三种之一。
"""

import dataclasses
import datetime as dt
from collections.abc import Mapping, Sequence, Set
from decimal import Decimal
from enum import Enum
from typing import Any
from uuid import UUID

from pydantic import BaseModel

from trace_listener.core.domain.exceptions import InvalidPropertyError

SCALAR_TYPES = (
    str,
    bool,
    int,
    float,
    complex,
    Decimal,
    dt.datetime,
    dt.date,
    dt.time,
    dt.timedelta,
    UUID,
    bytes,
    Enum,
)

LITERAL_FORMAT = "l"


def _enum_text(value: Enum) -> str:
    # 枚举可通过 display_name 提供对外名称，否则用成员名
    return getattr(value, "display_name", value.name)


class LogEventPropertyValue:
    """Base class for the three property value shapes."""

    def render(self, format_spec: str | None = None) -> str:
        raise NotImplementedError

    def to_python(self) -> Any:
        raise NotImplementedError

    def __str__(self) -> str:
        return self.render()


@dataclasses.dataclass(frozen=True)
class LogEventProperty:
    """A named property attached to a log event."""

    name: str
    value: LogEventPropertyValue


@dataclasses.dataclass(frozen=True)
class ScalarValue(LogEventPropertyValue):
    value: Any

    def render(self, format_spec: str | None = None) -> str:
        value = self.value
        if value is None:
            return "null"
        if isinstance(value, str):
            if format_spec == LITERAL_FORMAT:
                return value
            return '"' + value.replace('"', '\\"') + '"'
        if isinstance(value, Enum):
            return _enum_text(value)
        if format_spec:
            try:
                return format(value, format_spec)
            except (TypeError, ValueError):
                return str(value)
        return str(value)

    def to_python(self) -> Any:
        value = self.value
        if isinstance(value, Enum):
            return _enum_text(value)
        if isinstance(value, (UUID, Decimal, dt.timedelta, complex)):
            return str(value)
        if isinstance(value, (dt.datetime, dt.date, dt.time)):
            return value.isoformat()
        if isinstance(value, bytes):
            return value.hex()
        return value


@dataclasses.dataclass(frozen=True)
class SequenceValue(LogEventPropertyValue):
    elements: tuple[LogEventPropertyValue, ...]

    def render(self, format_spec: str | None = None) -> str:
        return "[" + ", ".join(e.render(format_spec) for e in self.elements) + "]"

    def to_python(self) -> list[Any]:
        return [e.to_python() for e in self.elements]


@dataclasses.dataclass(frozen=True)
class StructureValue(LogEventPropertyValue):
    properties: tuple[LogEventProperty, ...]
    type_tag: str | None = None

    def render(self, format_spec: str | None = None) -> str:
        body = ", ".join(
            f"{p.name}: {p.value.render(format_spec)}" for p in self.properties
        )
        rendered = "{ " + body + " }"
        if self.type_tag:
            return f"{self.type_tag} {rendered}"
        return rendered

    def to_python(self) -> dict[str, Any]:
        result: dict[str, Any] = {}
        if self.type_tag:
            result["$type"] = self.type_tag
        for p in self.properties:
            result[p.name] = p.value.to_python()
        return result


class PropertyValueConverter:
    """Converts arbitrary Python objects into property values.

    Without ``destructure`` an unknown object is captured as the string it
    renders to. With ``destructure`` dataclasses, pydantic models and plain
    objects become structures tagged with their class name. Values nested
    deeper than ``max_depth`` are captured as null.
    """

    def __init__(self, max_depth: int = 10):
        self.max_depth = max_depth

    def convert(self, value: Any, destructure: bool = False) -> LogEventPropertyValue:
        """Convert ``value``; any failure inside it surfaces as InvalidPropertyError."""
        try:
            return self._convert(value, destructure, 1)
        except InvalidPropertyError:
            raise
        except Exception as exc:
            raise InvalidPropertyError(
                type(value).__name__, f"value cannot be converted: {exc}"
            ) from exc

    def _convert(
        self, value: Any, destructure: bool, depth: int
    ) -> LogEventPropertyValue:
        if depth > self.max_depth:
            return ScalarValue(None)
        if value is None or isinstance(value, SCALAR_TYPES):
            return ScalarValue(value)

        if isinstance(value, Mapping):
            return StructureValue(
                tuple(
                    LogEventProperty(str(k), self._convert(v, destructure, depth + 1))
                    for k, v in value.items()
                )
            )
        if isinstance(value, (Sequence, Set)):
            return SequenceValue(
                tuple(self._convert(e, destructure, depth + 1) for e in value)
            )

        if destructure:
            fields = self._public_fields(value)
            if fields is not None:
                return StructureValue(
                    tuple(
                        LogEventProperty(k, self._convert(v, destructure, depth + 1))
                        for k, v in fields.items()
                    ),
                    type_tag=type(value).__name__,
                )

        try:
            return ScalarValue(str(value))
        except Exception as exc:
            raise InvalidPropertyError(
                type(value).__name__, f"value cannot be rendered: {exc}"
            ) from exc

    @staticmethod
    def _public_fields(value: Any) -> dict[str, Any] | None:
        if isinstance(value, BaseModel):
            return dict(value)
        if dataclasses.is_dataclass(value) and not isinstance(value, type):
            return {f.name: getattr(value, f.name) for f in dataclasses.fields(value)}
        if hasattr(value, "__dict__") and not isinstance(value, type):
            return {k: v for k, v in vars(value).items() if not k.startswith("_")}
        return None
