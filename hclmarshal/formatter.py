"""Formatter rendering HCL ASTs to canonical text."""

from __future__ import annotations

import io
import json
from dataclasses import dataclass
from typing import IO

from .errors import OutputWriteError
from .nodes import AST, Attribute, Block, Entry, MapEntry, Value
from .values import format_decimal


@dataclass
class HCLFormatter:
    indent: str = "  "

    def format_document(self, ast: AST) -> list[str]:
        return self.format_entries(ast.entries, level=0)

    def format_entries(self, entries: list[Entry], level: int) -> list[str]:
        lines: list[str] = []
        for index, entry in enumerate(entries):
            lines.extend(self.format_entry(entry, level, last=index == len(entries) - 1))
        return lines

    def format_entry(self, entry: Entry, level: int, last: bool = True) -> list[str]:
        lines = self._format_comments(entry.comments, level)
        if entry.block is not None:
            lines.extend(self.format_block(entry.block, level))
            if not last:
                lines.append("")
        elif entry.attribute is not None:
            lines.extend(self.format_attribute(entry.attribute, level))
        else:
            raise ValueError("entry holds neither an attribute nor a block")
        return lines

    def format_block(self, block: Block, level: int) -> list[str]:
        header = " ".join([block.name, *(self._quote(label) for label in block.labels), "{"])
        lines = [f"{self._indent(level)}{header}"]
        lines.extend(self.format_entries(block.body, level + 1))
        lines.append(f"{self._indent(level)}}}")
        return lines

    def format_attribute(self, attribute: Attribute, level: int) -> list[str]:
        prefix = f"{self._indent(level)}{attribute.key} = "
        if attribute.value.has_map:
            return self._format_map(prefix, attribute.value.entries, level, suffix="")
        return [f"{prefix}{self.format_value(attribute.value)}"]

    def format_value(self, value: Value) -> str:
        """Single-line text for ``value``; maps render inline."""
        if value.string is not None:
            return self._quote(value.string)
        if value.number is not None:
            return format_decimal(value.number)
        if value.boolean is not None:
            return "true" if value.boolean else "false"
        if value.has_list:
            return "[" + ", ".join(self.format_value(item) for item in value.items) + "]"
        if value.has_map:
            inner = ", ".join(
                f"{self.format_value(entry.key)}: {self.format_value(entry.value)}" for entry in value.entries
            )
            return "{" + inner + "}"
        raise ValueError("value has no populated variant")

    def _format_map(self, prefix: str, entries: list[MapEntry], level: int, suffix: str) -> list[str]:
        if not entries:
            return [f"{prefix}{{}}{suffix}"]
        lines = [f"{prefix}{{"]
        for entry in entries:
            lines.extend(self._format_comments(entry.comments, level + 1))
            entry_prefix = f"{self._indent(level + 1)}{self.format_value(entry.key)}: "
            if entry.value.has_map:
                lines.extend(self._format_map(entry_prefix, entry.value.entries, level + 1, suffix=","))
            else:
                lines.append(f"{entry_prefix}{self.format_value(entry.value)},")
        lines.append(f"{self._indent(level)}}}{suffix}")
        return lines

    def _format_comments(self, comments: list[str], level: int) -> list[str]:
        return [f"{self._indent(level)}{comment}" for comment in comments]

    def _quote(self, text: str) -> str:
        return json.dumps(text, ensure_ascii=False)

    def _indent(self, level: int) -> str:
        return "" if level <= 0 else self.indent * level

    def write(self, ast: AST, sink: IO[bytes] | IO[str]) -> None:
        """Stream ``ast`` to ``sink`` one top-level entry at a time.

        A failed write raises OutputWriteError; earlier output is left in place.
        """
        text_sink = isinstance(sink, io.TextIOBase)
        for index, entry in enumerate(ast.entries):
            lines = self.format_entry(entry, level=0, last=index == len(ast.entries) - 1)
            chunk = "".join(f"{line}\n" for line in lines)
            try:
                sink.write(chunk if text_sink else chunk.encode("utf-8"))
            except (OSError, ValueError, TypeError) as exc:
                raise OutputWriteError(exc) from exc


def marshal_ast(ast: AST, formatter: HCLFormatter | None = None) -> bytes:
    """Render ``ast`` to UTF-8 HCL bytes."""
    buffer = io.BytesIO()
    marshal_ast_to_writer(ast, buffer, formatter)
    return buffer.getvalue()


def marshal_ast_to_writer(ast: AST, sink: IO[bytes] | IO[str], formatter: HCLFormatter | None = None) -> None:
    (formatter or HCLFormatter()).write(ast, sink)


__all__ = ["HCLFormatter", "marshal_ast", "marshal_ast_to_writer"]
