"""Tests for hclmarshal.fields."""

from dataclasses import dataclass, field
from typing import Optional

import pytest
from pydantic import BaseModel, Field

from hclmarshal.errors import FieldMetadataError
from hclmarshal.fields import MISSING, is_record, is_record_type, iter_fields, unwrap_optional
from hclmarshal.tags import hcl_tag


@dataclass
class Base:
    owner: str = field(default="", metadata={"tag": hcl_tag("owner")})


@dataclass
class Child(Base):
    size: int = 0
    _cache: int = 0
    hidden: str = field(default="", metadata={"tag": 'hcl:"-"'})


@dataclass
class Common:
    region: str = field(default="", metadata={"tag": hcl_tag("region")})


@dataclass
class WithEmbed:
    name: str = field(default="", metadata={"tag": hcl_tag("name")})
    common: Common = field(default_factory=Common, metadata={"tag": hcl_tag("", "embed")})
    enabled: bool = False


@dataclass
class BadTag:
    broken: str = field(default="", metadata={"tag": "hcl:broken"})


class Model(BaseModel):
    host: str = Field(json_schema_extra={"tag": hcl_tag("hostname")})
    port: int = 0


class TestRecordChecks:
    def test_dataclass(self):
        assert is_record(Child())
        assert is_record_type(Child)
        assert not is_record(Child)

    def test_pydantic(self):
        assert is_record(Model(host="h"))
        assert is_record_type(Model)

    def test_other(self):
        assert not is_record({"a": 1})
        assert not is_record_type(dict)


class TestIterFields:
    def test_inherited_fields_first(self):
        names = [f.name for f in iter_fields(Child(owner="me", size=2))]
        assert names == ["owner", "size"]

    def test_values(self):
        fields = iter_fields(Child(owner="me", size=2))
        assert [f.value for f in fields] == ["me", 2]
        assert fields[1].annotation is int

    def test_type_has_missing_values(self):
        assert all(f.value is MISSING for f in iter_fields(Child))

    def test_embedded_fields_inline(self):
        fields = iter_fields(WithEmbed(name="a", common=Common(region="eu"), enabled=True))
        assert [(f.tag.name, f.value) for f in fields] == [("name", "a"), ("region", "eu"), ("enabled", True)]

    def test_embedded_type(self):
        assert [f.tag.name for f in iter_fields(WithEmbed)] == ["name", "region", "enabled"]

    def test_pydantic_fields(self):
        fields = iter_fields(Model(host="example.com", port=80))
        assert [(f.tag.name, f.value) for f in fields] == [("hostname", "example.com"), ("port", 80)]

    def test_not_a_record(self):
        with pytest.raises(FieldMetadataError):
            iter_fields(42)

    def test_bad_tag(self):
        with pytest.raises(FieldMetadataError, match="BadTag.broken"):
            iter_fields(BadTag())


class TestUnwrapOptional:
    def test_optional(self):
        assert unwrap_optional(Optional[int]) is int

    def test_pipe_union(self):
        assert unwrap_optional(str | None) is str

    def test_plain(self):
        assert unwrap_optional(list[int]) == list[int]

    def test_real_union_kept(self):
        assert unwrap_optional(int | str) == int | str
