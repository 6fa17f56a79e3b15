"""Encoders that convert records into HCL ASTs."""

from __future__ import annotations

import collections.abc
import logging
import typing
from enum import Enum
from typing import Any, Literal, NotRequired, Optional, TypedDict

from .errors import FieldMetadataError, HCLError, InputTypeError, TopLevelLabelError
from .fields import RecordField, is_record, is_record_type, is_unresolved, iter_fields, unwrap_optional
from .formatter import HCLFormatter, marshal_ast
from .logger import Logger
from .nodes import AST, Attribute, Block, Entry
from .utils import resolve_config
from .values import encode_value, is_zero, schema_value

SchemaBlockErrors = Literal["raise", "omit"]


class EncoderConfig(TypedDict):
    schema_block_errors: NotRequired[SchemaBlockErrors]
    comment_prefix: NotRequired[str]
    enable_logger: NotRequired[bool]


class EncoderConfigRequired(TypedDict):
    schema_block_errors: SchemaBlockErrors
    comment_prefix: str
    enable_logger: bool


DEFAULT_CONFIG: EncoderConfigRequired = {
    "schema_block_errors": "raise",
    "comment_prefix": "// ",
    "enable_logger": False,
}


class Encoder:
    """Walks records field by field and builds the matching AST.

    In schema mode only field declarations are consulted, so a record type
    may be passed instead of an instance.
    """

    def __init__(self, config: Optional[EncoderConfig] = None):
        self.config = resolve_config(config or {}, DEFAULT_CONFIG)
        if self.config["schema_block_errors"] not in ("raise", "omit"):
            raise ValueError(f"invalid schema_block_errors {self.config['schema_block_errors']!r}")
        self.logger = Logger(config={"name": "hclmarshal", "is_enabled": self.config["enable_logger"]}).logger

    def _log(self, level: int, message: str, *args: Any) -> None:
        if self.config["enable_logger"]:
            self.logger.log(level, message, *args)

    def to_ast(self, record: Any) -> AST:
        if not is_record(record):
            raise InputTypeError(record)
        return self._build(record, schema=False)

    def schema_to_ast(self, record: Any) -> AST:
        if not (is_record(record) or is_record_type(record)):
            raise InputTypeError(record, expected="a dataclass or pydantic model, or its type")
        return self._build(record if isinstance(record, type) else type(record), schema=True)

    def _build(self, record: Any, schema: bool) -> AST:
        self._log(logging.DEBUG, "Encoding %s (schema=%s)", _type_name(record), schema)
        entries, labels = self.struct_to_entries(record, schema)
        if labels:
            raise TopLevelLabelError(labels)
        return AST(entries=entries)

    def struct_to_entries(self, record: Any, schema: bool) -> tuple[list[Entry], list[str]]:
        entries: list[Entry] = []
        labels: list[str] = []
        for field in iter_fields(record):
            tag = field.tag
            comments = tag.comments(self.config["comment_prefix"])
            if tag.label:
                labels.append(tag.name if schema else _label_text(field.value))
            elif tag.block:
                for block in self._field_to_blocks(record, field, schema):
                    entries.append(Entry(block=block, comments=comments))
            elif tag.optional and not schema and is_zero(field.value):
                self._log(logging.DEBUG, "Omitting zero optional field %s", tag.name)
            else:
                if schema:
                    value = schema_value(_declared_annotation(record, field))
                else:
                    value = encode_value(field.value)
                entries.append(Entry(attribute=Attribute(key=tag.name, value=value), comments=comments))
        return entries, labels

    def value_to_block(self, record: Any, name: str, schema: bool) -> Block:
        body, labels = self.struct_to_entries(record, schema)
        self._log(logging.DEBUG, "Encoded block %s with labels %s", name, labels)
        return Block(name=name, labels=labels, body=body)

    def _field_to_blocks(self, record: Any, field: RecordField, schema: bool) -> list[Block]:
        name = field.tag.name
        if schema:
            target = unwrap_optional(_declared_annotation(record, field))
            element = _sequence_element(target)
            if element is None:
                return [self.value_to_block(target, name, schema=True)]
            if is_unresolved(element):
                raise FieldMetadataError(f"cannot resolve annotation {element!r}", record, field.name)
            return self._sequence_schema_block(element, name)

        value = field.value
        if value is None:
            return []
        if isinstance(value, (list, tuple)):
            return [self.value_to_block(item, name, schema=False) for item in value]
        return [self.value_to_block(value, name, schema=False)]

    def _sequence_schema_block(self, element: Any, name: str) -> list[Block]:
        try:
            return [self.value_to_block(element, name, schema=True)]
        except HCLError as exc:
            if self.config["schema_block_errors"] == "raise":
                raise
            self._log(logging.WARNING, "Omitting schema block %s: %s", name, exc)
            return []


def _declared_annotation(record: type, field: RecordField) -> Any:
    if is_unresolved(field.annotation):
        raise FieldMetadataError(f"cannot resolve annotation {field.annotation!r}", record, field.name)
    return field.annotation


def _sequence_element(annotation: Any) -> Any:
    """Element type of a sequence annotation, or None if it is not a sequence."""
    origin = typing.get_origin(annotation) or annotation
    if not isinstance(origin, type) or is_record_type(origin):
        return None
    if issubclass(origin, (str, bytes)) or not issubclass(origin, (list, tuple, collections.abc.Sequence)):
        return None
    args = typing.get_args(annotation)
    if not args:
        raise FieldMetadataError(f"block sequence {origin.__name__} does not declare its element type")
    return unwrap_optional(args[0])


def _label_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, Enum):
        return str(value.value)
    return str(value)


def _type_name(record: Any) -> str:
    return record.__name__ if isinstance(record, type) else type(record).__name__


_default_encoder = Encoder()


def marshal_to_ast(record: Any) -> AST:
    """Encode a record instance to an AST."""
    return _default_encoder.to_ast(record)


def marshal(record: Any, formatter: HCLFormatter | None = None) -> bytes:
    """Encode a record instance to UTF-8 HCL bytes."""
    return marshal_ast(marshal_to_ast(record), formatter)


def schema_to_ast(record: Any) -> AST:
    """Encode the shape of a record (instance or type) with placeholder values."""
    return _default_encoder.schema_to_ast(record)


def schema(record: Any, formatter: HCLFormatter | None = None) -> bytes:
    return marshal_ast(schema_to_ast(record), formatter)


__all__ = [
    "SchemaBlockErrors",
    "EncoderConfig",
    "DEFAULT_CONFIG",
    "Encoder",
    "marshal_to_ast",
    "marshal",
    "schema_to_ast",
    "schema",
]
