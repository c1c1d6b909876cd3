"""
This module turns the serializer annotations attached to one property or one
method into a metadata record.

The extractor is a pure function over an ordered sequence of annotations.
Each recognized annotation kind sets exactly one field of the record; when a
kind occurs several times the last one wins. Anything that is not a known
annotation is ignored, so newer annotation kinds do not break older
extractors.
"""

from collections.abc import Iterable
from typing import Any, TypedDict

from metaloom._annotations import (
    Exclude,
    Groups,
    MaxDepth,
    ReadOnly,
    SerializedName,
    Type,
)

from .codec import encode_params


class PropertyMetadata(TypedDict, total=False):
    """Metadata record of a property. Unspecified fields are absent."""

    groups: list[str]
    type: str
    read_only: bool
    exclude: bool
    exclude_if: str
    max_depth: int
    serialized_name: str


class VirtualPropertyMetadata(PropertyMetadata, total=False):
    """Metadata record of a virtual property."""

    name: str


def _type_signature(annotation: Type) -> str:
    params = annotation.params
    if params:
        return f"{annotation.name}<{encode_params(params)}>"
    return annotation.name


def extract_metadata(annotations: Iterable[Any]) -> PropertyMetadata:
    """
    Build a metadata record from serializer annotations.

    Args:
        annotations (Iterable[Any]): Annotations in declaration order.

    Returns:
        PropertyMetadata: Only the fields set by an annotation are present.
    """
    metadata: dict[str, Any] = {}

    for annotation in annotations:
        if isinstance(annotation, Groups):
            metadata["groups"] = annotation.groups
        elif isinstance(annotation, Type) and annotation.name:
            metadata["type"] = _type_signature(annotation)
        elif isinstance(annotation, ReadOnly):
            metadata["read_only"] = bool(annotation.read_only)
        elif isinstance(annotation, Exclude):
            if annotation.condition:
                metadata["exclude_if"] = annotation.condition
            else:
                metadata["exclude"] = True
        elif isinstance(annotation, MaxDepth):
            metadata["max_depth"] = annotation.depth
        elif isinstance(annotation, SerializedName):
            metadata["serialized_name"] = annotation.name

    return metadata
