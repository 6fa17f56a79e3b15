"""Tests for hclmarshal.nodes."""

from decimal import Decimal

import pytest
from pydantic import ValidationError

from hclmarshal.nodes import AST, Attribute, Block, Entry, MapEntry, Value


class TestValue:
    def test_kinds(self):
        assert Value.of_str("a").kind == "string"
        assert Value.of_number(1).kind == "number"
        assert Value.of_bool(False).kind == "bool"
        assert Value.of_list().kind == "list"
        assert Value.of_map().kind == "map"

    def test_number_is_decimal(self):
        assert Value.of_number(3).number == Decimal(3)

    def test_empty_list_is_present(self):
        value = Value.of_list()
        assert value.has_list
        assert value.items == []

    def test_no_variant(self):
        with pytest.raises(ValidationError):
            Value()

    def test_two_variants(self):
        with pytest.raises(ValidationError):
            Value(string="a", boolean=True)

    def test_items_without_flag(self):
        with pytest.raises(ValidationError):
            Value(items=[Value.of_str("a")])


class TestMapEntry:
    def test_string_key(self):
        entry = MapEntry(key=Value.of_str("a"), value=Value.of_number(1))
        assert entry.comments == []

    def test_non_string_key(self):
        with pytest.raises(ValidationError):
            MapEntry(key=Value.of_number(1), value=Value.of_number(1))


class TestEntry:
    def test_attribute(self):
        entry = Entry(attribute=Attribute(key="a", value=Value.of_bool(True)))
        assert entry.block is None

    def test_neither(self):
        with pytest.raises(ValidationError):
            Entry()

    def test_both(self):
        with pytest.raises(ValidationError):
            Entry(attribute=Attribute(key="a", value=Value.of_bool(True)), block=Block(name="b"))


class TestTree:
    def test_add_entries(self):
        block = Block(name="inner", labels=["x"])
        block.add_entry(Entry(attribute=Attribute(key="a", value=Value.of_str("b"))))
        ast = AST()
        ast.add_entry(Entry(block=block))
        assert ast.entries[0].block.body[0].attribute.key == "a"
