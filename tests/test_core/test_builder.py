import logging
from typing import Annotated

import pytest

from metaloom import Type, virtual_property
from metaloom._errors import ClassIntrospectionError
from metaloom.core import DATE_FORMAT, ClassMetadataBuilder, TypeDescriptor, accessor_name
from tests.data.models import AbstractContent, Article, Author, Broken, Product, Review


@pytest.fixture
def builder() -> ClassMetadataBuilder:
    return ClassMetadataBuilder()


@pytest.mark.parametrize(
    ("method_name", "expected"),
    [
        ("isActive", "active"),
        ("getFullName", "fullName"),
        ("hasChildren", "children"),
        ("get_full_name", "full_name"),
        ("is_visible", "visible"),
        ("summary", "summary"),
        ("isolate", "isolate"),  # No word boundary after the prefix
        ("getter", "getter"),
        ("get", "get"),
        ("getURL", "uRL"),
    ],
)
def test_accessor_name(method_name, expected):
    assert accessor_name(method_name) == expected


def test_build_article_hierarchy(builder):
    assert builder.build(AbstractContent) == {
        "properties": {"title": {"serialized_name": "headline"}},
        "virtual_properties": {},
    }
    assert builder.build(Article) == {
        "properties": {"rating": {"type": "float"}},
        "virtual_properties": {},
    }


def test_build_properties(builder):
    assert builder.build_properties(Product) == {
        "sku": {"groups": ["list", "detail"], "read_only": True, "type": "string"},
        "price": {"max_depth": 2, "exclude_if": "obj.price is None", "type": "float"},
        "created": {"type": f"DateTime<'{DATE_FORMAT}'>"},
        "updated": {"type": f"DateTimeImmutable<'{DATE_FORMAT}'>"},
        "labels": {"type": "tests.data.models.Collection<string>"},
        "scores": {"type": "array<int>"},
        "legacy_tags": {"type": "array<tests.data.models.Tag>"},
        "notes": {"exclude": True, "serialized_name": "remarks", "type": "string"},
        "uri": {"type": "RecordUri<'tx_news[item]','{\"a\":1}'>"},
    }


def test_build_virtual_properties(builder):
    assert builder.build_virtual_properties(Product) == {
        "isActive": {
            "name": "active",
            "serialized_name": "active",
            "groups": ["detail"],
            "type": "bool",
        },
        "getFullName": {"name": "fullName", "serialized_name": "fullName", "type": "string"},
        "summary": {"name": "abstract", "serialized_name": "summary_text", "type": "string"},
        "get_display_price": {
            "name": "display_price",
            "serialized_name": "display_price",
            "type": "float",
        },
    }


def test_docstring_types_complement_annotations(builder):
    assert builder.build(Review) == {
        "properties": {"verdict": {"type": "string"}},
        "virtual_properties": {"get_score": {"name": "score", "serialized_name": "score", "type": "int"}},
    }


def test_slots_properties(builder):
    assert builder.build_properties(Author) == {
        "nickname": {"type": "string"},
        "aliases": {"type": "tests.data.models.Collection<string>"},
        "email": {},
    }


def test_untyped_property_is_logged(builder, caplog):
    with caplog.at_level(logging.DEBUG, logger="metaloom.core.builder"):
        builder.build(Author)
    assert "No type found for Author.email" in caplog.text


def test_explicit_type_skips_introspection():
    class Failing:
        def get_types(self, cls, name):
            raise AssertionError("introspection must not run")

    class Typed:
        value: Annotated[int, Type("Money")]

    builder = ClassMetadataBuilder(type_extractors=[Failing()])
    assert builder.build_properties(Typed) == {"value": {"type": "Money"}}


def test_first_extractor_with_an_answer_wins():
    class Silent:
        def get_types(self, cls, name):
            return None

    class Fixed:
        def __init__(self, builtin_type):
            self.builtin_type = builtin_type

        def get_types(self, cls, name):
            return [TypeDescriptor(self.builtin_type), TypeDescriptor("ignored")]

    class Plain:
        value: int

    builder = ClassMetadataBuilder(type_extractors=[Silent(), Fixed("custom"), Fixed("late")])
    assert builder.build_properties(Plain) == {"value": {"type": "custom"}}


def test_virtual_properties_are_keyed_by_method():
    class Twins:
        @virtual_property()
        def isReady(self) -> bool:
            return True

        @virtual_property()
        def getReady(self) -> str:
            return "ready"

    virtual = ClassMetadataBuilder().build_virtual_properties(Twins)
    assert list(virtual) == ["isReady", "getReady"]
    assert virtual["isReady"]["name"] == virtual["getReady"]["name"] == "ready"


def test_virtual_property_on_property_getter(builder):
    class WithProperty:
        @virtual_property()
        @property
        def slug(self) -> str:
            return "x"

    assert builder.build_virtual_properties(WithProperty) == {
        "slug": {"name": "slug", "serialized_name": "slug", "type": "string"}
    }


def test_private_and_unmarked_methods_are_ignored(builder):
    class Hidden:
        @virtual_property()
        def _secret(self) -> str:
            return ""

        @staticmethod
        def helper():
            return None

    assert builder.build_virtual_properties(Hidden) == {}


def test_inherited_members_are_left_out(builder):
    metadata = builder.build(Review)
    assert "rating" not in metadata["properties"]
    assert "title" not in metadata["properties"]


def test_unresolvable_annotations(builder):
    with pytest.raises(ClassIntrospectionError, match="Broken"):
        builder.build(Broken)


@pytest.mark.parametrize("target", ["tests.data.models.Article", Article(), 3])
def test_build_requires_a_class(builder, target):
    with pytest.raises(ClassIntrospectionError, match="not a class"):
        builder.build(target)
