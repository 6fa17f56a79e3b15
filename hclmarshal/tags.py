"""Struct-tag parsing for record fields.

A raw tag uses Go struct-tag syntax, a space separated list of ``key:"value"``
pairs, e.g. ``hcl:"name,label" help:"Name of the thing."``. Only the ``hcl``
and ``help`` keys are interpreted; others are kept in ``FieldTag.extra``.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field

TAG_FLAGS = ("label", "block", "optional", "embed")


class TagSyntaxError(ValueError):
    def __init__(self, message: str, raw: str, position: int):
        self.raw = raw
        self.position = position
        super().__init__(f"{message} at offset {position} in tag {raw!r}")


@dataclass(slots=True)
class FieldTag:
    """Structured descriptor of how a single field is encoded."""

    name: str
    label: bool = False
    block: bool = False
    optional: bool = False
    embed: bool = False
    skip: bool = False
    help: str = ""
    extra: dict[str, str] = field(default_factory=dict)

    def comments(self, prefix: str = "// ") -> list[str]:
        if not self.help.strip():
            return []
        return [f"{prefix}{line}".rstrip() for line in self.help.strip().splitlines()]


def split_tag(raw: str) -> dict[str, str]:
    """Split a raw tag into its ``key: value`` pairs, unquoting the values."""
    pairs: dict[str, str] = {}
    pos = 0
    length = len(raw)
    while True:
        while pos < length and raw[pos] == " ":
            pos += 1
        if pos >= length:
            return pairs

        start = pos
        while pos < length and raw[pos] > " " and raw[pos] not in ':"':
            pos += 1
        if pos == start or pos + 1 >= length or raw[pos] != ":" or raw[pos + 1] != '"':
            raise TagSyntaxError("expected key:\"value\"", raw, start)
        key = raw[start:pos]

        pos += 2
        value_start = pos
        while pos < length and raw[pos] != '"':
            if raw[pos] == "\\":
                pos += 1
            pos += 1
        if pos >= length:
            raise TagSyntaxError("unterminated tag value", raw, value_start)
        quoted = raw[value_start - 1 : pos + 1]
        pos += 1
        try:
            pairs[key] = json.loads(quoted)
        except json.JSONDecodeError as exc:
            raise TagSyntaxError(f"invalid escape in tag value ({exc.msg})", raw, value_start) from exc


def parse_tag(raw: str | None, field_name: str) -> FieldTag:
    """Interpret a raw tag for the field ``field_name``.

    A missing tag or an empty name encodes the field under its own name.
    """
    pairs = split_tag(raw or "")
    hcl_value = pairs.pop("hcl", "")
    help_text = pairs.pop("help", "")
    if hcl_value == "-":
        return FieldTag(name=field_name, skip=True, help=help_text, extra=pairs)

    name, *flags = [part.strip() for part in hcl_value.split(",")]
    tag = FieldTag(name=name or field_name, help=help_text, extra=pairs)
    for flag in flags:
        if not flag:
            continue
        if flag not in TAG_FLAGS:
            raise TagSyntaxError(f"unknown hcl flag {flag!r}", raw or "", 0)
        setattr(tag, flag, True)
    return tag


def hcl_tag(name: str = "", *flags: str, help: str | None = None) -> str:
    """Build a raw tag string, e.g. ``hcl_tag("name", "label")``."""
    for flag in flags:
        if flag not in TAG_FLAGS:
            raise ValueError(f"unknown hcl flag {flag!r}")
    parts = [f"hcl:{json.dumps(','.join([name, *flags]))}"]
    if help:
        parts.append(f"help:{json.dumps(help)}")
    return " ".join(parts)


__all__ = ["TAG_FLAGS", "TagSyntaxError", "FieldTag", "split_tag", "parse_tag", "hcl_tag"]
