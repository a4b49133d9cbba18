"""Message template parsing and rendering.

Template syntax:
    - literal text, with ``{{`` and ``}}`` as escaped braces
    - property tokens ``{[@|$]Name[,alignment][:format]}``
    - all-digit names (``{0}``) are positional and resolve against the
      property of the same name

Malformed tokens raise MessageTemplateSyntaxError; there is no best-effort
fallback that turns a broken token back into text.
"""

import re
from collections.abc import Mapping
from dataclasses import dataclass
from functools import lru_cache

from trace_listener.core.domain.exceptions import MessageTemplateSyntaxError
from trace_listener.core.domain.values import LogEventPropertyValue

_ALIGNMENT_RE = re.compile(r"-?\d+")
_HINTS = ("@", "$")


@dataclass(frozen=True)
class TextToken:
    text: str

    def render(self, properties: Mapping[str, LogEventPropertyValue]) -> str:
        return self.text


@dataclass(frozen=True)
class PropertyToken:
    name: str
    raw_text: str
    format_spec: str | None = None
    alignment: int | None = None
    hint: str | None = None

    @property
    def is_positional(self) -> bool:
        return self.name.isdigit()

    def render(self, properties: Mapping[str, LogEventPropertyValue]) -> str:
        value = properties.get(self.name)
        if value is None:
            return self.raw_text

        rendered = value.render(self.format_spec)
        if self.alignment is None:
            return rendered
        width = abs(self.alignment)
        if self.alignment < 0:
            return rendered.ljust(width)
        return rendered.rjust(width)


MessageTemplateToken = TextToken | PropertyToken


@dataclass(frozen=True)
class MessageTemplate:
    """A parsed, immutable message template."""

    text: str
    tokens: tuple[MessageTemplateToken, ...]

    @property
    def property_tokens(self) -> tuple[PropertyToken, ...]:
        return tuple(t for t in self.tokens if isinstance(t, PropertyToken))

    def render(self, properties: Mapping[str, LogEventPropertyValue]) -> str:
        return "".join(token.render(properties) for token in self.tokens)

    def __str__(self) -> str:
        return self.text


def parse_message_template(template: str) -> MessageTemplate:
    """Parse ``template`` into text and property tokens."""
    tokens: list[MessageTemplateToken] = []
    text: list[str] = []
    i = 0
    length = len(template)

    while i < length:
        ch = template[i]
        if ch == "{":
            if i + 1 < length and template[i + 1] == "{":
                text.append("{")
                i += 2
                continue
            end = template.find("}", i + 1)
            if end == -1:
                raise MessageTemplateSyntaxError(
                    template, i, "property token is not closed"
                )
            if text:
                tokens.append(TextToken("".join(text)))
                text = []
            tokens.append(_parse_property_token(template, i, end))
            i = end + 1
        elif ch == "}":
            # 单独的 "}" 按普通文本处理
            text.append("}")
            i += 2 if i + 1 < length and template[i + 1] == "}" else 1
        else:
            text.append(ch)
            i += 1

    if text:
        tokens.append(TextToken("".join(text)))
    return MessageTemplate(text=template, tokens=tuple(tokens))


def _parse_property_token(template: str, start: int, end: int) -> PropertyToken:
    raw_text = template[start : end + 1]
    content = template[start + 1 : end]
    if not content:
        raise MessageTemplateSyntaxError(template, start, "empty property token")

    hint = None
    if content[0] in _HINTS:
        hint = content[0]
        content = content[1:]

    format_spec = None
    if ":" in content:
        content, format_spec = content.split(":", 1)
        if not format_spec:
            raise MessageTemplateSyntaxError(template, start, "empty format")

    alignment = None
    if "," in content:
        content, alignment_text = content.split(",", 1)
        if not _ALIGNMENT_RE.fullmatch(alignment_text):
            raise MessageTemplateSyntaxError(
                template, start, f"invalid alignment {alignment_text!r}"
            )
        alignment = int(alignment_text)

    if not content:
        raise MessageTemplateSyntaxError(template, start, "missing property name")
    for ch in content:
        if not (ch.isalnum() or ch == "_"):
            raise MessageTemplateSyntaxError(
                template, start, f"invalid character {ch!r} in property name"
            )

    return PropertyToken(
        name=content,
        raw_text=raw_text,
        format_spec=format_spec,
        alignment=alignment,
        hint=hint,
    )


class MessageTemplateParser:
    """Caching front end for parse_message_template."""

    def __init__(self, cache_size: int = 1000):
        self._parse = lru_cache(maxsize=cache_size)(parse_message_template)

    def parse(self, template: str) -> MessageTemplate:
        return self._parse(template)
