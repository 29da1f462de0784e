"""Tests for the section resolver."""

from __future__ import annotations

from typing import Optional

import pytest
from pydantic import BaseModel
from sample_resources import FixedSecureResource, PlainResource, Spec, TitledResource

from resmeta.errors import NotFoundError, TypeMismatchError
from resmeta.models.object import Unstructured
from resmeta.sections import (
    Representation,
    classify,
    find_field,
    get_section,
    set_section,
    split_optional,
    to_document,
    zero_value,
)


class Nested(BaseModel):
    name: str
    count: int
    tags: list[str]
    inner: Spec
    extra: Optional[Spec] = None


class TestClassify:
    def test_unstructured(self):
        assert classify(Unstructured()) is Representation.UNTYPED

    def test_typed(self):
        assert classify(TitledResource()) is Representation.TYPED


class TestSplitOptional:
    def test_pipe_union(self):
        assert split_optional(Spec | None) == (Spec, True)

    def test_typing_optional(self):
        assert split_optional(Optional[Spec]) == (Spec, True)

    def test_plain(self):
        assert split_optional(Spec) == (Spec, False)

    def test_wider_union_is_not_optional(self):
        annotation = int | str | None
        assert split_optional(annotation) == (annotation, False)


class TestFindField:
    def test_case_insensitive(self):
        found = find_field(TitledResource(), "SPEC")
        assert found is not None
        assert found[0] == "spec"

    def test_by_alias(self):
        found = find_field(TitledResource(), "apiversion")
        assert found is not None
        assert found[0] == "api_version"

    def test_missing(self):
        assert find_field(PlainResource(), "status") is None


class TestZeroValue:
    def test_scalars(self):
        assert zero_value(str) == ""
        assert zero_value(int) == 0
        assert zero_value(bool) is False

    def test_containers(self):
        assert zero_value(dict[str, int]) == {}
        assert zero_value(list[str]) == []

    def test_optional(self):
        assert zero_value(Optional[Spec]) is None

    def test_model_with_required_fields(self):
        value = zero_value(Nested)
        assert value.name == ""
        assert value.count == 0
        assert value.tags == []
        assert value.inner == Spec()
        assert value.extra is None


class TestUntypedSections:
    def test_get_missing(self):
        with pytest.raises(NotFoundError) as exc_info:
            get_section(Unstructured({}), "spec")
        assert exc_info.value.section == "spec"

    def test_set_and_get(self):
        res = Unstructured({})
        set_section(res, "status", {"phase": "ready"})
        assert get_section(res, "status") == {"phase": "ready"}

    def test_set_model_uses_aliases(self):
        res = Unstructured({})
        set_section(res, "spec", TitledResource(api_version="a/v1"))
        assert res.object["spec"]["apiVersion"] == "a/v1"
        assert "api_version" not in res.object["spec"]


class TestTypedSections:
    def test_get_value_field(self):
        res = TitledResource(spec=Spec(title="x"))
        assert get_section(res, "spec") is res.spec

    def test_nil_pointer_without_zero(self):
        assert get_section(FixedSecureResource(), "status") is None

    def test_nil_pointer_with_zero(self):
        res = FixedSecureResource()
        assert get_section(res, "status", zero_if_nil=True) == Spec()
        assert res.status is None

    def test_unknown_section(self):
        with pytest.raises(TypeMismatchError):
            get_section(PlainResource(), "status")

    def test_set_incompatible(self):
        res = TitledResource()
        with pytest.raises(TypeMismatchError):
            set_section(res, "spec", "text")
        assert res.spec == Spec()

    def test_set_pointer_field(self):
        res = FixedSecureResource()
        set_section(res, "status", Spec(title="t"))
        assert res.status == Spec(title="t")


class TestToDocument:
    def test_drops_none_fields(self):
        assert to_document(Nested(name="n", count=1, tags=["a"], inner=Spec())) == {
            "name": "n",
            "count": 1,
            "tags": ["a"],
            "inner": {"title": ""},
        }

    def test_unknown_type(self):
        with pytest.raises(TypeMismatchError):
            to_document(object())
