"""Node definitions for the HCL intermediate representation."""

from decimal import Decimal
from typing import Literal

from pydantic import BaseModel, Field, model_validator


ValueKind = Literal["string", "number", "bool", "list", "map"]


class Value(BaseModel):
    """A tagged union: exactly one of the variants below is populated.

    ``has_list``/``has_map`` tell an empty list or map apart from an absent one.
    """

    string: str | None = None
    number: Decimal | None = None
    boolean: bool | None = None
    items: list["Value"] = Field(default_factory=list)
    has_list: bool = False
    entries: list["MapEntry"] = Field(default_factory=list)
    has_map: bool = False

    @model_validator(mode="after")
    def _check_single_variant(self) -> "Value":
        if self.items and not self.has_list:
            raise ValueError("list items set without has_list")
        if self.entries and not self.has_map:
            raise ValueError("map entries set without has_map")
        populated = [
            self.string is not None,
            self.number is not None,
            self.boolean is not None,
            self.has_list,
            self.has_map,
        ]
        if sum(populated) != 1:
            raise ValueError(f"exactly one value variant must be set, got {sum(populated)}")
        return self

    @property
    def kind(self) -> ValueKind:
        if self.string is not None:
            return "string"
        if self.number is not None:
            return "number"
        if self.boolean is not None:
            return "bool"
        if self.has_list:
            return "list"
        return "map"

    @classmethod
    def of_str(cls, value: str) -> "Value":
        return cls(string=value)

    @classmethod
    def of_number(cls, value: Decimal | int) -> "Value":
        return cls(number=Decimal(value))

    @classmethod
    def of_bool(cls, value: bool) -> "Value":
        return cls(boolean=value)

    @classmethod
    def of_list(cls, items: list["Value"] | None = None) -> "Value":
        return cls(items=list(items or []), has_list=True)

    @classmethod
    def of_map(cls, entries: list["MapEntry"] | None = None) -> "Value":
        return cls(entries=list(entries or []), has_map=True)


class MapEntry(BaseModel):
    key: Value
    value: Value
    comments: list[str] = Field(default_factory=list)

    @model_validator(mode="after")
    def _check_key(self) -> "MapEntry":
        if self.key.string is None:
            raise ValueError("map keys must be string values")
        return self


class Attribute(BaseModel):
    key: str
    value: Value


class Block(BaseModel):
    name: str
    labels: list[str] = Field(default_factory=list)
    body: list["Entry"] = Field(default_factory=list)

    def add_entry(self, entry: "Entry") -> None:
        self.body.append(entry)


class Entry(BaseModel):
    attribute: Attribute | None = None
    block: Block | None = None
    comments: list[str] = Field(default_factory=list)

    @model_validator(mode="after")
    def _check_single_node(self) -> "Entry":
        if (self.attribute is None) == (self.block is None):
            raise ValueError("an entry holds exactly one of attribute or block")
        return self


class AST(BaseModel):
    entries: list[Entry] = Field(default_factory=list)

    def add_entry(self, entry: Entry) -> None:
        self.entries.append(entry)


Value.model_rebuild()
MapEntry.model_rebuild()
Block.model_rebuild()
Entry.model_rebuild()
AST.model_rebuild()


__all__ = ["ValueKind", "Value", "MapEntry", "Attribute", "Block", "Entry", "AST"]
