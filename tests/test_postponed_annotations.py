"""Tests for records declared under postponed annotations."""

from __future__ import annotations

from dataclasses import dataclass, field

import pytest

from hclmarshal import FieldMetadataError, hcl_tag, marshal, schema


@dataclass
class Port:
    number: int = field(default=0, metadata={"tag": hcl_tag("number")})


@dataclass
class Listener:
    ports: list[Port] = field(default_factory=list, metadata={"tag": hcl_tag("port", "block")})


def local_records():
    @dataclass
    class Inner:
        value: int = field(default=0, metadata={"tag": hcl_tag("value")})

    @dataclass
    class Outer:
        inner: Inner = field(metadata={"tag": hcl_tag("inner", "block")})
        name: str = field(default="", metadata={"tag": hcl_tag("name")})

    return Inner, Outer


class TestLocalRecords:
    def test_marshal_does_not_need_resolved_annotations(self):
        inner_type, outer_type = local_records()
        record = outer_type(inner=inner_type(value=1), name="n")
        assert marshal(record) == b'inner {\n  value = 1\n}\n\nname = "n"\n'

    def test_schema_reports_unresolved_annotation(self):
        _, outer_type = local_records()
        with pytest.raises(FieldMetadataError, match="Outer.inner"):
            schema(outer_type)


class TestModuleRecords:
    def test_schema_resolves_module_level_names(self):
        assert schema(Listener) == b"port {\n  number = 0\n}\n"

    def test_marshal(self):
        assert marshal(Listener(ports=[Port(80), Port(443)])) == (
            b"port {\n  number = 80\n}\n\nport {\n  number = 443\n}\n"
        )
