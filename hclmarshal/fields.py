"""Field enumeration for dataclass and pydantic records."""

from __future__ import annotations

import dataclasses
import typing
from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel

from .errors import FieldMetadataError
from .tags import FieldTag, TagSyntaxError, parse_tag

TAG_KEY = "tag"


class _Missing:
    def __repr__(self) -> str:
        return "MISSING"


MISSING: Any = _Missing()

_UnionType = type(int | None)


@dataclass(slots=True)
class RecordField:
    name: str
    annotation: Any
    tag: FieldTag
    value: Any = MISSING


def is_record_type(obj: Any) -> bool:
    if not isinstance(obj, type):
        return False
    return dataclasses.is_dataclass(obj) or issubclass(obj, BaseModel)


def is_record(obj: Any) -> bool:
    return not isinstance(obj, type) and is_record_type(type(obj))


def iter_fields(record: Any) -> list[RecordField]:
    """Flatten ``record`` (an instance or a record type) into its fields.

    Fields of a type carry ``MISSING`` as their value. Fields tagged ``embed``
    are replaced by the fields of the record they hold.
    """
    record_type = record if isinstance(record, type) else type(record)
    if not is_record_type(record_type):
        raise FieldMetadataError(f"expected a dataclass or pydantic model, not {record_type.__name__}")

    fields: list[RecordField] = []
    for name, annotation, raw_tag in _declared_fields(record_type):
        if name.startswith("_"):
            continue
        try:
            tag = parse_tag(raw_tag, name)
        except TagSyntaxError as exc:
            raise FieldMetadataError(str(exc), record_type, name) from exc
        if tag.skip:
            continue

        value = MISSING if isinstance(record, type) else getattr(record, name)
        if tag.embed:
            fields.extend(_embedded_fields(record_type, name, annotation, value))
            continue
        fields.append(RecordField(name=name, annotation=annotation, tag=tag, value=value))
    return fields


def _embedded_fields(record_type: type, name: str, annotation: Any, value: Any) -> list[RecordField]:
    if value is MISSING:
        if is_unresolved(annotation):
            raise FieldMetadataError(f"cannot resolve annotation {annotation!r}", record_type, name)
        target = unwrap_optional(annotation)
        if not is_record_type(target):
            raise FieldMetadataError("embedded field must hold a record", record_type, name)
        return iter_fields(target)
    if value is None:
        return []
    if not is_record(value):
        raise FieldMetadataError("embedded field must hold a record", record_type, name)
    return iter_fields(value)


def _declared_fields(record_type: type) -> list[tuple[str, Any, str | None]]:
    if issubclass(record_type, BaseModel):
        declared = []
        for name, info in record_type.model_fields.items():
            extra = info.json_schema_extra if isinstance(info.json_schema_extra, dict) else {}
            declared.append((name, info.annotation, extra.get(TAG_KEY)))
        return declared

    try:
        hints = typing.get_type_hints(record_type, include_extras=True)
    except (NameError, TypeError):
        # Unresolved names stay strings; only schema mode needs them resolved.
        hints = {}
    return [
        (f.name, hints.get(f.name, f.type), f.metadata.get(TAG_KEY))
        for f in dataclasses.fields(record_type)
    ]


def is_unresolved(annotation: Any) -> bool:
    """Whether ``annotation`` is still a postponed (string) annotation."""
    return isinstance(annotation, (str, typing.ForwardRef))


def unwrap_optional(annotation: Any) -> Any:
    """Strip ``Annotated[...]`` and ``Optional[...]`` wrappers from an annotation."""
    while True:
        origin = typing.get_origin(annotation)
        if origin is typing.Annotated:
            annotation = typing.get_args(annotation)[0]
            continue
        if origin in (typing.Union, _UnionType):
            args = [arg for arg in typing.get_args(annotation) if arg is not type(None)]
            if len(args) == 1:
                annotation = args[0]
                continue
        return annotation


__all__ = [
    "TAG_KEY",
    "MISSING",
    "RecordField",
    "is_record_type",
    "is_record",
    "iter_fields",
    "is_unresolved",
    "unwrap_optional",
]
