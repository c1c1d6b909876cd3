import pytest

from metaloom import (
    DateTimeFormat,
    Exclude,
    Groups,
    MaxDepth,
    ReadOnly,
    SerializedName,
    Type,
    VirtualProperty,
)
from metaloom.core import extract_metadata


class Tracked(Type):
    """Named handler type."""

    def __init__(self):
        super().__init__("Tracked", ["audit"])


def test_empty_sequence():
    assert extract_metadata([]) == {}


@pytest.mark.parametrize(
    ("annotation", "expected"),
    [
        (Groups(["list", "detail"]), {"groups": ["list", "detail"]}),
        (Type("string"), {"type": "string"}),
        (ReadOnly(), {"read_only": True}),
        (ReadOnly(False), {"read_only": False}),
        (Exclude(), {"exclude": True}),
        (Exclude("obj.isHidden()"), {"exclude_if": "obj.isHidden()"}),
        (MaxDepth(2), {"max_depth": 2}),
        (SerializedName("headline"), {"serialized_name": "headline"}),
    ],
)
def test_single_annotation(annotation, expected):
    assert extract_metadata([annotation]) == expected


def test_type_with_params():
    annotation = Type("RecordUri", ["tx_news[item]", {"a": 1}])
    assert extract_metadata([annotation]) == {"type": "RecordUri<'tx_news[item]','{\"a\":1}'>"}


def test_type_subclasses():
    assert extract_metadata([Tracked()]) == {"type": "Tracked<'audit'>"}
    assert extract_metadata([DateTimeFormat("Y-m-d", "UTC")]) == {
        "type": "DateTime<'Y-m-d','UTC'>"
    }


def test_type_without_name_is_skipped():
    assert extract_metadata([Type("")]) == {}


def test_last_occurrence_wins():
    metadata = extract_metadata(
        [SerializedName("first"), Groups("a"), SerializedName("second"), Groups("b")]
    )
    assert metadata == {"serialized_name": "second", "groups": ["b"]}


def test_unknown_annotations_are_ignored():
    assert extract_metadata([VirtualProperty("teaser"), "text", 3, MaxDepth(1)]) == {
        "max_depth": 1
    }


def test_combined_annotations_keep_declaration_order():
    metadata = extract_metadata([MaxDepth(1), Groups("a"), ReadOnly()])
    assert list(metadata) == ["max_depth", "groups", "read_only"]
