"""Encode dataclass and pydantic records as HCL configuration."""

from .nodes import AST, Attribute, Block, Entry, MapEntry, Value, ValueKind
from .errors import (
    FieldMetadataError,
    HCLError,
    InputTypeError,
    OutputWriteError,
    TopLevelLabelError,
    UnsupportedTypeError,
    UserEncoderError,
)
from .tags import FieldTag, TagSyntaxError, hcl_tag, parse_tag
from .fields import RecordField, iter_fields
from .values import JSONMarshaler, TextMarshaler
from .formatter import HCLFormatter, marshal_ast, marshal_ast_to_writer
from .encoder import Encoder, EncoderConfig, marshal, marshal_to_ast, schema, schema_to_ast

__all__ = [
    "AST",
    "Attribute",
    "Block",
    "Entry",
    "MapEntry",
    "Value",
    "ValueKind",
    "HCLError",
    "InputTypeError",
    "FieldMetadataError",
    "UnsupportedTypeError",
    "UserEncoderError",
    "TopLevelLabelError",
    "OutputWriteError",
    "FieldTag",
    "TagSyntaxError",
    "hcl_tag",
    "parse_tag",
    "RecordField",
    "iter_fields",
    "TextMarshaler",
    "JSONMarshaler",
    "HCLFormatter",
    "marshal_ast",
    "marshal_ast_to_writer",
    "Encoder",
    "EncoderConfig",
    "marshal",
    "marshal_to_ast",
    "schema",
    "schema_to_ast",
]
