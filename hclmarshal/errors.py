"""Exceptions raised while encoding records and rendering HCL."""

from __future__ import annotations

from typing import Any


class HCLError(Exception):
    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class InputTypeError(HCLError, TypeError):
    """The top-level value is not a record."""

    def __init__(self, value: Any, expected: str = "a dataclass or pydantic model instance"):
        self.value = value
        super().__init__(f"expected {expected}, not {type(value).__name__}")


class FieldMetadataError(HCLError):
    """Fields of a record could not be enumerated or their tags interpreted."""

    def __init__(self, message: str, record_type: type | None = None, field: str | None = None):
        self.record_type = record_type
        self.field = field
        if record_type is not None and field is not None:
            message = f"{record_type.__name__}.{field}: {message}"
        elif record_type is not None:
            message = f"{record_type.__name__}: {message}"
        super().__init__(message)


class UnsupportedTypeError(HCLError, TypeError):
    def __init__(self, value_type: Any, detail: str | None = None):
        self.value_type = value_type
        name = getattr(value_type, "__name__", repr(value_type))
        message = f"unsupported value type {name}"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


class UserEncoderError(HCLError):
    """A value's own marshal_text/marshal_json hook failed."""

    def __init__(self, value: Any, hook: str, cause: BaseException):
        self.value = value
        self.hook = hook
        super().__init__(f"{type(value).__name__}.{hook}() failed: {cause}")


class TopLevelLabelError(HCLError):
    def __init__(self, labels: list[str]):
        self.labels = labels
        super().__init__(f"unexpected labels {', '.join(labels)} at top level")


class OutputWriteError(HCLError):
    def __init__(self, cause: BaseException):
        super().__init__(f"failed to write HCL output: {cause}")


__all__ = [
    "HCLError",
    "InputTypeError",
    "FieldMetadataError",
    "UnsupportedTypeError",
    "UserEncoderError",
    "TopLevelLabelError",
    "OutputWriteError",
]
