"""Conversion of runtime values (or, for schemas, annotations) into Value nodes."""

from __future__ import annotations

import collections.abc
import math
import typing
from datetime import datetime, timedelta, timezone
from decimal import Decimal
from enum import Enum
from typing import Any, Protocol, runtime_checkable

from pydantic import BaseModel

from .errors import UnsupportedTypeError, UserEncoderError
from .fields import is_record, iter_fields, unwrap_optional
from .nodes import MapEntry, Value

ZERO_TIMESTAMP = "0001-01-01T00:00:00Z"


@runtime_checkable
class TextMarshaler(Protocol):
    def marshal_text(self) -> bytes | str: ...


@runtime_checkable
class JSONMarshaler(Protocol):
    def marshal_json(self) -> bytes | str: ...


def encode_value(value: Any) -> Value:
    if isinstance(value, timedelta):
        return Value.of_str(format_duration(value))
    if isinstance(value, TextMarshaler):
        return Value.of_str(_call_hook(value, "marshal_text"))
    if isinstance(value, JSONMarshaler):
        # The hook output already carries its own quoting; it is kept verbatim.
        return Value.of_str(_call_hook(value, "marshal_json"))
    if isinstance(value, BaseModel):
        return Value.of_str(_call_hook(value, "model_dump_json"))
    if isinstance(value, Enum):
        return encode_value(value.value)
    if isinstance(value, str):
        return Value.of_str(value)
    if isinstance(value, (list, tuple)):
        return Value.of_list([encode_value(item) for item in value])
    if isinstance(value, collections.abc.Mapping):
        pairs = sorted(((map_key_text(key), item) for key, item in value.items()), key=lambda pair: pair[0])
        return Value.of_map(
            [MapEntry(key=Value.of_str(key), value=encode_value(item)) for key, item in pairs]
        )
    if isinstance(value, bool):
        return Value.of_bool(value)
    if isinstance(value, float):
        if not math.isfinite(value):
            raise UnsupportedTypeError(float, f"non-finite value {value!r}")
        return Value.of_number(Decimal(repr(value)))
    if isinstance(value, (int, Decimal)):
        if isinstance(value, Decimal) and not value.is_finite():
            raise UnsupportedTypeError(Decimal, f"non-finite value {value}")
        return Value.of_number(Decimal(value))
    if isinstance(value, datetime):
        return Value.of_str(format_timestamp(value))
    raise UnsupportedTypeError(type(value))


def schema_value(annotation: Any) -> Value:
    """Placeholder Value for a field declared as ``annotation``; never fails."""
    annotation = unwrap_optional(annotation)
    origin = typing.get_origin(annotation) or annotation
    args = typing.get_args(annotation)
    if not isinstance(origin, type):
        return Value.of_str("")

    if issubclass(origin, timedelta):
        return Value.of_str("0s")
    if issubclass(origin, (TextMarshaler, JSONMarshaler, BaseModel, str)):
        return Value.of_str("")
    if issubclass(origin, Enum):
        members = list(origin)
        return schema_value(type(members[0].value)) if members else Value.of_str("")
    if issubclass(origin, collections.abc.Mapping):
        if len(args) != 2:
            return Value.of_map()
        key = value_key_text(schema_value(args[0]))
        return Value.of_map([MapEntry(key=Value.of_str(key), value=schema_value(args[1]))])
    if issubclass(origin, (list, tuple, collections.abc.Sequence)):
        if issubclass(origin, tuple) and args and args[-1] is not Ellipsis:
            return Value.of_list([schema_value(arg) for arg in args])
        if not args:
            return Value.of_list()
        return Value.of_list([schema_value(args[0])])
    if issubclass(origin, bool):
        return Value.of_bool(False)
    if issubclass(origin, (int, float, Decimal)):
        return Value.of_number(0)
    if issubclass(origin, datetime):
        return Value.of_str(ZERO_TIMESTAMP)
    return Value.of_str("")


def is_zero(value: Any) -> bool:
    """Whether ``value`` is the zero value of its type."""
    if value is None:
        return True
    if isinstance(value, datetime):
        return value.replace(tzinfo=None) == datetime.min
    if isinstance(value, (str, bytes, bool, int, float, Decimal, timedelta, list, tuple)):
        return not value
    if isinstance(value, collections.abc.Mapping):
        return len(value) == 0
    if is_record(value):
        return all(is_zero(field.value) for field in iter_fields(value))
    return False


def map_key_text(key: Any) -> str:
    if isinstance(key, Enum):
        return str(key.value)
    if isinstance(key, bool):
        return "true" if key else "false"
    if isinstance(key, float) and math.isfinite(key):
        return format_decimal(Decimal(repr(key)))
    if isinstance(key, (int, Decimal)) and not (isinstance(key, Decimal) and not key.is_finite()):
        return format_decimal(Decimal(key))
    return str(key)


def value_key_text(value: Value) -> str:
    if value.string is not None:
        return value.string
    if value.number is not None:
        return format_decimal(value.number)
    if value.boolean is not None:
        return "true" if value.boolean else "false"
    return ""


def format_decimal(number: Decimal) -> str:
    """Minimal positional text for a decimal, e.g. ``1.50`` -> ``1.5``."""
    if number.is_zero():
        return "0"
    text = format(number, "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def format_duration(delta: timedelta) -> str:
    """Unit-suffixed duration text, e.g. 90 minutes -> ``1h30m``."""
    micros = delta // timedelta(microseconds=1)
    if micros == 0:
        return "0s"
    sign = "-" if micros < 0 else ""
    micros = abs(micros)
    if micros < 1000:
        return f"{sign}{micros}us"
    if micros < 1_000_000:
        return f"{sign}{format_decimal(Decimal(micros) / 1000)}ms"

    hours, rest = divmod(micros, 3_600_000_000)
    minutes, rest = divmod(rest, 60_000_000)
    text = sign
    if hours:
        text += f"{hours}h"
    if minutes:
        text += f"{minutes}m"
    if rest:
        text += f"{format_decimal(Decimal(rest) / 1_000_000)}s"
    return text


def format_timestamp(timestamp: datetime) -> str:
    """RFC 3339 text at whole-second precision; naive values are taken as UTC."""
    if timestamp.tzinfo is None or timestamp.utcoffset() is None:
        timestamp = timestamp.replace(tzinfo=timezone.utc)
    text = timestamp.replace(microsecond=0).isoformat()
    if timestamp.utcoffset() == timedelta(0):
        return text[: -len("+00:00")] + "Z"
    return text


def _call_hook(value: Any, hook: str) -> str:
    try:
        output = getattr(value, hook)()
        if isinstance(output, bytes):
            output = output.decode("utf-8")
    except Exception as exc:
        raise UserEncoderError(value, hook, exc) from exc
    return output


__all__ = [
    "TextMarshaler",
    "JSONMarshaler",
    "encode_value",
    "schema_value",
    "is_zero",
    "map_key_text",
    "value_key_text",
    "format_decimal",
    "format_duration",
    "format_timestamp",
]
