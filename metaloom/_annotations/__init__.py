"""
This module aggregates the serializer annotations, the decorators attaching
them to methods and the reader resolving them, making them accessible under
the 'metaloom._annotations' namespace.
"""

from metaloom._annotations.decorators import annotate, virtual_property
from metaloom._annotations.meta import (
    DateTimeFormat,
    Exclude,
    Groups,
    MaxDepth,
    ReadOnly,
    SerializedName,
    SerializerAnnotation,
    Type,
    VirtualProperty,
)
from metaloom._annotations.reader import AnnotationReader

__all__ = [
    "AnnotationReader",
    "DateTimeFormat",
    "Exclude",
    "Groups",
    "MaxDepth",
    "ReadOnly",
    "SerializedName",
    "SerializerAnnotation",
    "Type",
    "VirtualProperty",
    "annotate",
    "virtual_property",
]
